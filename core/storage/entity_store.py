"""In-memory entity stores.

Each entity type lives in its own EntityStore: an ordered collection keyed
by record id. Records are copied on the way in and on the way out, so a
caller holding a result can never reach the store's internals.

A DataStore groups the four back-office stores. It is built explicitly and
handed to the services; there is no module-level database.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from threading import RLock
from typing import Any, Container, Dict, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel

from core.errors import DuplicateKeyError, NotFoundError, ValidationError
from core.formatting import generate_id
from core.models.entities import Client, Product, Sale, Supplier


RecordT = TypeVar("RecordT", bound=BaseModel)


# =============================================================================
# Id Allocation
# =============================================================================

class IdAllocator(ABC):
    """Produces ids for new records of one store."""

    @abstractmethod
    def next_id(self, taken: Container[Any]) -> Any:
        """Return an id that is not in ``taken``."""

    def observe(self, record_id: Any) -> None:
        """Called for every inserted record id."""


class SequentialIdAllocator(IdAllocator):
    """Monotonic integer ids. An id is never handed out twice, even after
    the record holding it was deleted.

    Usage:
        allocator = SequentialIdAllocator()
        allocator.observe(2)        # seeded record
        allocator.next_id(set())    # -> 3
    """

    def __init__(self, start: int = 1):
        self._next = start

    def next_id(self, taken: Container[Any]) -> int:
        while self._next in taken:
            self._next += 1
        record_id = self._next
        self._next += 1
        return record_id

    def observe(self, record_id: Any) -> None:
        if isinstance(record_id, int) and record_id >= self._next:
            self._next = record_id + 1


class RandomIdAllocator(IdAllocator):
    """Opaque string ids from ``generate_id``."""

    def next_id(self, taken: Container[Any]) -> str:
        record_id = generate_id()
        while record_id in taken:
            record_id = generate_id()
        return record_id


# =============================================================================
# Entity Store
# =============================================================================

class EntityStore(Generic[RecordT]):
    """Ordered, id-keyed collection of records of one entity type.

    Insertion order is preserved; ``replace`` keeps a record's position and
    ``remove`` keeps the relative order of the others. Reads return deep
    copies.
    """

    def __init__(
        self,
        name: str,
        id_allocator: Optional[IdAllocator] = None,
        records: Iterable[RecordT] = (),
    ):
        """Initialize an entity store.

        Args:
            name: Entity name used in error messages (e.g. "product")
            id_allocator: Id strategy for ``next_id`` (random strings by default)
            records: Initial records, inserted in order
        """
        self.name = name
        self._id_allocator = id_allocator or RandomIdAllocator()
        self._records: Dict[Any, RecordT] = {}
        self._lock = RLock()

        for record in records:
            self.insert(record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, record_id: Any) -> bool:
        with self._lock:
            return record_id in self._records

    def next_id(self) -> Any:
        """Allocate an id not currently used in this store."""
        with self._lock:
            return self._id_allocator.next_id(self._records)

    def insert(self, record: RecordT) -> None:
        """Append a record.

        Raises:
            DuplicateKeyError: If a record with the same id exists
        """
        record_id = record.id
        with self._lock:
            if record_id in self._records:
                raise DuplicateKeyError(
                    f"{self.name} {record_id!r} already exists",
                    entity=self.name,
                    record_id=record_id,
                )
            self._records[record_id] = record.model_copy(deep=True)
            self._id_allocator.observe(record_id)

    def find_by_id(self, record_id: Any) -> Optional[RecordT]:
        """Return a copy of the record, or None when absent."""
        with self._lock:
            record = self._records.get(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def find_all(self) -> List[RecordT]:
        """Return copies of all records in insertion order."""
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def replace(self, record_id: Any, record: RecordT) -> None:
        """Swap the record stored under ``record_id``, keeping its position.

        Raises:
            NotFoundError: If no record has this id
            ValidationError: If ``record`` carries a different id
        """
        with self._lock:
            self._require(record_id)
            if record.id != record_id:
                raise ValidationError(
                    f"cannot change {self.name} id {record_id!r} to {record.id!r}",
                    entity=self.name,
                    record_id=record_id,
                )
            self._records[record_id] = record.model_copy(deep=True)

    def remove(self, record_id: Any) -> None:
        """Delete the record stored under ``record_id``.

        Raises:
            NotFoundError: If no record has this id
        """
        with self._lock:
            self._require(record_id)
            del self._records[record_id]

    def _require(self, record_id: Any) -> None:
        if record_id not in self._records:
            raise NotFoundError(
                f"{self.name} {record_id!r} not found",
                entity=self.name,
                record_id=record_id,
            )


# =============================================================================
# Data Store
# =============================================================================

@dataclass
class DataStore:
    """The back-office database: one EntityStore per entity type."""
    products: EntityStore[Product]
    clients: EntityStore[Client]
    sales: EntityStore[Sale]
    suppliers: EntityStore[Supplier]

    @classmethod
    def empty(cls) -> "DataStore":
        """Build a DataStore with fresh, empty stores."""
        return cls(
            products=EntityStore("product"),
            clients=EntityStore("client"),
            sales=EntityStore("sale"),
            suppliers=EntityStore("supplier", id_allocator=SequentialIdAllocator()),
        )
