"""Core module - back-office domain models, storage and observability.

This module contains the entity models, the in-memory entity stores,
configuration, error types and logging/metrics helpers. Service logic that
operates on the stores lives in /api/services/.
"""

__version__ = "1.0.0"
