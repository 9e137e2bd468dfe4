"""API Package.

Simulated backend for the retail back-office: async data services over
in-memory stores.
"""

from api.services import BackOffice

__all__ = [
    "BackOffice",
]
