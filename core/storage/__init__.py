"""Core storage - in-memory entity stores."""

from core.storage.entity_store import (
    DataStore,
    EntityStore,
    IdAllocator,
    RandomIdAllocator,
    SequentialIdAllocator,
)

__all__ = [
    "DataStore",
    "EntityStore",
    "IdAllocator",
    "RandomIdAllocator",
    "SequentialIdAllocator",
]
