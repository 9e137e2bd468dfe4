"""Generic asynchronous CRUD service over an EntityStore.

One CrudService subclass exists per entity type. Each operation first awaits
the injected latency strategy and then runs its store logic without any
further suspension point, so two operations never interleave inside their
read/mutate logic; they complete in the order their delays elapse.

Failures surface as core.errors types (NotFoundError, DuplicateKeyError,
ValidationError). Nothing is retried here; retry policy belongs to callers.
"""

import time
from contextlib import contextmanager
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from api.services.latency import FixedLatency, Latency
from core.errors import NotFoundError, ValidationError
from core.models.entities import as_utc
from core.observability import (
    get_logger,
    with_correlation,
    record_operation_started,
    record_operation_completed,
    record_operation_failed,
)
from core.storage.entity_store import EntityStore


logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Operation Tracking
# =============================================================================

@contextmanager
def track_operation(entity: str, operation: str, record_id: Any = None) -> Iterator[None]:
    """Correlate logs and record metrics for one service operation.

    Failures are counted, logged at WARNING and re-raised unchanged.
    """
    name = f"{entity}.{operation}"
    started = time.perf_counter()
    record_operation_started(name)

    with with_correlation(entity=entity, operation=operation, record_id=record_id):
        try:
            yield
        except Exception as exc:
            duration_ms = (time.perf_counter() - started) * 1000
            record_operation_failed(name, type(exc).__name__, duration_ms)
            logger.warning(
                f"{name} failed: {exc}",
                extra_fields={"error_type": type(exc).__name__, "duration_ms": round(duration_ms, 2)},
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        record_operation_completed(name, duration_ms)
        logger.debug(f"{name} completed", extra_fields={"duration_ms": round(duration_ms, 2)})


# =============================================================================
# Search
# =============================================================================

def field_text(value: Any) -> List[str]:
    """Text forms of a field value used for search matching.

    - None contributes nothing
    - enums match on their value
    - Decimal in fixed-point notation, ints via str
    - dates and datetimes in ISO 8601
    - lists contribute each element
    """
    if value is None:
        return []
    if isinstance(value, Enum):
        return [str(value.value)]
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if isinstance(value, Decimal):
        return [format(value, "f")]
    if isinstance(value, (datetime, date)):
        return [value.isoformat()]
    if isinstance(value, (list, tuple, set, frozenset)):
        texts: List[str] = []
        for item in value:
            texts.extend(field_text(item))
        return texts
    return [str(value)]


def matches_query(record: BaseModel, fields: Sequence[str], query: str) -> bool:
    """True if ``query`` occurs, case-insensitively, in any listed field."""
    needle = query.casefold()
    for name in fields:
        for text in field_text(getattr(record, name, None)):
            if needle in text.casefold():
                return True
    return False


# =============================================================================
# CRUD Service
# =============================================================================

class CrudService(Generic[EntityT, CreateT, UpdateT]):
    """Async list/get/create/update/delete/search over one EntityStore.

    Subclasses set the models and searchable fields, and may override
    ``_build_record`` / ``_merge`` for derived fields.

    Usage:
        service = ProductService(store.products, latency=NoLatency())
        product = await service.create({"name": "Mouse", "price": "49.90", "stock": 3})
        await service.update(product.id, {"stock": 10})
    """

    entity_name: str = "record"
    entity_model: Type[EntityT]
    create_model: Type[CreateT]
    update_model: Type[UpdateT]
    searchable_fields: Sequence[str] = ()

    def __init__(
        self,
        store: EntityStore[EntityT],
        latency: Optional[Latency] = None,
        clock: Clock = utc_now,
    ):
        """Initialize the service.

        Args:
            store: Entity store this service reads and mutates
            latency: Delay strategy awaited by every operation (500 ms by default)
            clock: Source of timestamps for created_at/updated_at
        """
        self._store = store
        self._latency = latency or FixedLatency()
        self._clock = clock

    @property
    def store(self) -> EntityStore[EntityT]:
        return self._store

    # =========================================================================
    # Operations
    # =========================================================================

    async def get_all(self) -> List[EntityT]:
        """All records, as a snapshot in store order."""
        with track_operation(self.entity_name, "get_all"):
            await self._latency.wait()
            return self._store.find_all()

    async def get_by_id(self, record_id: Any) -> Optional[EntityT]:
        """The record with ``record_id``, or None."""
        with track_operation(self.entity_name, "get_by_id", record_id):
            await self._latency.wait()
            return self._store.find_by_id(record_id)

    async def create(self, data: Any) -> EntityT:
        """Validate ``data``, assign id and timestamps, and store the record.

        Raises:
            ValidationError: If ``data`` is missing fields or has wrong types
        """
        with track_operation(self.entity_name, "create"):
            await self._latency.wait()
            payload = self._parse(self.create_model, data)
            now = as_utc(self._clock())
            record_id = self._store.next_id()
            record = self._validated(lambda: self._build_record(record_id, payload, now), record_id)
            self._store.insert(record)
            logger.info(f"Created {self.entity_name} {record_id}")
            return record

    async def update(self, record_id: Any, data: Any) -> EntityT:
        """Shallow-merge the supplied fields over the stored record.

        Fields absent from ``data`` are preserved; ``updated_at`` always moves
        forward.

        Raises:
            NotFoundError: If no record has ``record_id``
            ValidationError: If ``data`` or the merged record is invalid
        """
        with track_operation(self.entity_name, "update", record_id):
            await self._latency.wait()
            existing = self._store.find_by_id(record_id)
            if existing is None:
                raise NotFoundError(
                    f"{self.entity_name} {record_id!r} not found",
                    entity=self.entity_name,
                    record_id=record_id,
                )

            changes = self._parse(self.update_model, data, record_id).model_dump(exclude_unset=True)
            now = max(as_utc(self._clock()), existing.updated_at + timedelta(microseconds=1))
            record = self._validated(lambda: self._merge(existing, changes, now), record_id)
            self._store.replace(record_id, record)
            logger.info(
                f"Updated {self.entity_name} {record_id}",
                extra_fields={"fields": sorted(changes)},
            )
            return record

    async def delete(self, record_id: Any) -> None:
        """Remove the record.

        Raises:
            NotFoundError: If no record has ``record_id``
        """
        with track_operation(self.entity_name, "delete", record_id):
            await self._latency.wait()
            self._store.remove(record_id)
            logger.info(f"Deleted {self.entity_name} {record_id}")

    async def search(self, query: str) -> List[EntityT]:
        """Records whose searchable fields contain ``query`` (case-insensitive)."""
        with track_operation(self.entity_name, "search"):
            await self._latency.wait()
            if not isinstance(query, str):
                raise ValidationError(
                    f"search query must be a string, got {type(query).__name__}",
                    entity=self.entity_name,
                )
            results = [
                record for record in self._store.find_all()
                if matches_query(record, self.searchable_fields, query)
            ]
            logger.debug(f"Search {query!r} matched {len(results)} {self.entity_name}(s)")
            return results

    # =========================================================================
    # Hooks
    # =========================================================================

    def _build_record(self, record_id: Any, payload: CreateT, now: datetime) -> EntityT:
        """Build a new entity from a validated create payload."""
        return self.entity_model(
            id=record_id,
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )

    def _merge(self, existing: EntityT, changes: dict, now: datetime) -> EntityT:
        """Build the updated entity from the stored one and the changed fields."""
        data = existing.model_dump()
        data.update(changes)
        data["updated_at"] = now
        return self.entity_model.model_validate(data)

    # =========================================================================
    # Validation helpers
    # =========================================================================

    def _parse(self, model: Type[BaseModel], data: Any, record_id: Any = None) -> BaseModel:
        if isinstance(data, model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise self._validation_error(exc, record_id) from exc

    def _validated(self, build: Callable[[], EntityT], record_id: Any = None) -> EntityT:
        try:
            return build()
        except PydanticValidationError as exc:
            raise self._validation_error(exc, record_id) from exc

    def _validation_error(self, exc: PydanticValidationError, record_id: Any) -> ValidationError:
        errors = exc.errors(include_url=False)
        fields = ", ".join(".".join(str(part) for part in error["loc"]) or "<root>" for error in errors)
        return ValidationError(
            f"Invalid {self.entity_name} data ({fields})",
            entity=self.entity_name,
            record_id=record_id,
            errors=errors,
        )
