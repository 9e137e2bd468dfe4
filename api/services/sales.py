"""Sales service.

Sale and item totals are derived: callers send items as
(product_id, quantity, unit_price) and the service computes each item's
total and the sale total, on create and whenever an update replaces the
item list.
"""

from datetime import datetime
from typing import Any, List

from core.models.entities import (
    Sale,
    SaleCreate,
    SaleItemCreate,
    SaleUpdate,
    build_sale_items,
    sum_item_totals,
)

from api.services.crud import CrudService, track_operation


class SaleService(CrudService[Sale, SaleCreate, SaleUpdate]):
    entity_name = "sale"
    entity_model = Sale
    create_model = SaleCreate
    update_model = SaleUpdate
    # items are not searched
    searchable_fields = (
        "id", "client_id", "total", "payment_method", "status", "created_at", "updated_at",
    )

    async def get_by_client(self, client_id: str) -> List[Sale]:
        """Sales placed by one client, in store order."""
        with track_operation(self.entity_name, "get_by_client", client_id):
            await self._latency.wait()
            return [sale for sale in self._store.find_all() if sale.client_id == client_id]

    def _build_record(self, record_id: Any, payload: SaleCreate, now: datetime) -> Sale:
        items = build_sale_items(payload.items)
        return Sale(
            id=record_id,
            client_id=payload.client_id,
            items=items,
            total=sum_item_totals(items),
            payment_method=payload.payment_method,
            status=payload.status,
            created_at=now,
            updated_at=now,
        )

    def _merge(self, existing: Sale, changes: dict, now: datetime) -> Sale:
        data = existing.model_dump()
        data.update(changes)

        item_payloads = changes.get("items")
        if item_payloads is not None:
            items = build_sale_items([SaleItemCreate.model_validate(item) for item in item_payloads])
            data["items"] = items
            data["total"] = sum_item_totals(items)

        data["updated_at"] = now
        return Sale.model_validate(data)
