"""
CRUD Service Tests

Validates the generic service contract on products and clients:
1. get_all / get_by_id snapshot semantics
2. create assigns unique ids and timestamps
3. update merges shallowly and moves updated_at forward
4. delete then get yields None; deleting twice raises NotFoundError
5. search is case-insensitive and complete
6. operations complete in latency order
"""

import asyncio
import time
from datetime import datetime
from decimal import Decimal

import pytest

from api.services import (
    ClientService,
    FixedLatency,
    NoLatency,
    ProductService,
    build_sample_store,
    field_text,
    latency_from_settings,
)
from api.services.crud import matches_query
from core.config import Settings
from core.errors import NotFoundError, ValidationError
from core.models import Product, ProductCreate


@pytest.fixture
def store():
    return build_sample_store()


@pytest.fixture
def products(store):
    return ProductService(store.products, latency=NoLatency())


@pytest.fixture
def clients(store):
    return ClientService(store.clients, latency=NoLatency())


NEW_PRODUCT = {"name": "Mechanical Keyboard", "description": "RGB, hot-swap", "price": "349.90", "stock": 7}


class TestReads:
    """Test get_all / get_by_id."""

    def test_get_all_returns_seeded_products_in_order(self, products):
        result = asyncio.run(products.get_all())
        assert [p.id for p in result] == ["1", "2", "3"]

    def test_get_all_is_idempotent(self, products):
        first = asyncio.run(products.get_all())
        second = asyncio.run(products.get_all())
        assert first == second

    def test_get_all_is_a_snapshot(self, products):
        snapshot = asyncio.run(products.get_all())
        asyncio.run(products.create(NEW_PRODUCT))
        asyncio.run(products.delete("1"))

        assert [p.id for p in snapshot] == ["1", "2", "3"]

    def test_get_by_id(self, products):
        product = asyncio.run(products.get_by_id("2"))
        assert product.name == "Laptop Pro"
        assert product.price == Decimal("2499.99")

    def test_get_by_id_missing_returns_none(self, products):
        assert asyncio.run(products.get_by_id("missing")) is None


class TestCreate:
    """Test create."""

    def test_create_assigns_id_and_timestamps(self, products):
        created = asyncio.run(products.create(NEW_PRODUCT))

        assert created.id not in {"1", "2", "3"}
        assert created.name == "Mechanical Keyboard"
        assert created.price == Decimal("349.90")
        assert created.created_at == created.updated_at
        assert created.created_at.tzinfo is not None

    def test_created_record_is_retrievable(self, products):
        created = asyncio.run(products.create(NEW_PRODUCT))
        assert asyncio.run(products.get_by_id(created.id)) == created

    def test_created_ids_are_unique(self, products):
        async def create_many():
            return [await products.create(NEW_PRODUCT) for _ in range(20)]

        created = asyncio.run(create_many())
        ids = [p.id for p in created] + ["1", "2", "3"]
        assert len(set(ids)) == len(ids)

    def test_create_accepts_input_model(self, products):
        payload = ProductCreate(name="Mouse", price=Decimal("49.90"), stock=3)
        created = asyncio.run(products.create(payload))
        assert created.name == "Mouse"
        assert created.description == ""

    def test_create_missing_field_raises_validation_error(self, products):
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(products.create({"name": "No price", "stock": 1}))

        assert exc_info.value.entity == "product"
        assert any(error["loc"] == ("price",) for error in exc_info.value.errors)
        assert len(asyncio.run(products.get_all())) == 3

    def test_create_negative_price_rejected(self, products):
        with pytest.raises(ValidationError):
            asyncio.run(products.create({**NEW_PRODUCT, "price": "-1"}))

    def test_create_rejects_system_fields(self, products):
        with pytest.raises(ValidationError):
            asyncio.run(products.create({**NEW_PRODUCT, "id": "1"}))

    def test_create_rejects_non_mapping(self, products):
        with pytest.raises(ValidationError):
            asyncio.run(products.create(None))


class TestUpdate:
    """Test update."""

    def test_update_merges_supplied_fields_only(self, products):
        before = asyncio.run(products.get_by_id("1"))
        updated = asyncio.run(products.update("1", {"stock": 3}))
        after = asyncio.run(products.get_by_id("1"))

        assert updated == after
        assert after.stock == 3
        assert after.name == before.name
        assert after.description == before.description
        assert after.price == before.price
        assert after.created_at == before.created_at
        assert after.updated_at > before.updated_at

    def test_consecutive_updates_strictly_increase_updated_at(self, store):
        frozen = build_sample_store().products.find_by_id("1").updated_at
        service = ProductService(store.products, latency=NoLatency(), clock=lambda: frozen)

        first = asyncio.run(service.update("1", {"stock": 1}))
        second = asyncio.run(service.update("1", {"stock": 2}))

        assert first.updated_at > frozen
        assert second.updated_at > first.updated_at

    def test_update_record_created_with_naive_timestamps(self, store):
        naive = datetime(2023, 1, 15)
        store.products.insert(Product(
            id="p1", name="Cabo HDMI", price=Decimal("29.90"), stock=8,
            created_at=naive, updated_at=naive,
        ))
        service = ProductService(store.products, latency=NoLatency(), clock=lambda: naive)

        updated = asyncio.run(service.update("p1", {"stock": 2}))

        assert updated.stock == 2
        assert updated.updated_at.tzinfo is not None
        assert updated.updated_at > updated.created_at

    def test_update_missing_raises_not_found(self, products):
        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(products.update("missing", {"stock": 1}))
        assert exc_info.value.record_id == "missing"

    def test_update_with_wrong_type_leaves_record_unchanged(self, products):
        before = asyncio.run(products.get_by_id("1"))

        with pytest.raises(ValidationError):
            asyncio.run(products.update("1", {"stock": "many"}))

        assert asyncio.run(products.get_by_id("1")) == before

    def test_update_cannot_null_required_field(self, products):
        with pytest.raises(ValidationError):
            asyncio.run(products.update("1", {"name": None}))

    def test_update_rejects_unknown_field(self, products):
        with pytest.raises(ValidationError):
            asyncio.run(products.update("1", {"created_at": "2020-01-01T00:00:00Z"}))


class TestDelete:
    """Test delete."""

    def test_delete_then_get_returns_none(self, products):
        asyncio.run(products.delete("2"))

        assert asyncio.run(products.get_by_id("2")) is None
        assert [p.id for p in asyncio.run(products.get_all())] == ["1", "3"]

    def test_delete_twice_raises_not_found(self, products):
        asyncio.run(products.delete("2"))
        with pytest.raises(NotFoundError):
            asyncio.run(products.delete("2"))


class TestSearch:
    """Test search."""

    def test_search_is_case_insensitive(self, products):
        result = asyncio.run(products.search("LAPTOP"))
        assert [p.id for p in result] == ["2"]

    def test_search_matches_decimal_text(self, products):
        result = asyncio.run(products.search("159.99"))
        assert [p.id for p in result] == ["3"]

    def test_search_matches_iso_dates(self, products):
        result = asyncio.run(products.search("2023-01-20"))
        assert [p.id for p in result] == ["2"]

    def test_search_matches_description(self, products):
        result = asyncio.run(products.search("sound quality"))
        assert [p.id for p in result] == ["3"]

    def test_empty_query_matches_everything(self, products):
        assert len(asyncio.run(products.search(""))) == 3

    def test_search_no_match(self, products):
        assert asyncio.run(products.search("tablet")) == []

    @pytest.mark.parametrize("query", ["smart", "99", "pro", "2023", "e", "x"])
    def test_search_returns_exactly_the_matching_records(self, products, query):
        everything = asyncio.run(products.get_all())
        result = asyncio.run(products.search(query))

        expected = [
            p for p in everything
            if any(query.lower() in text.lower()
                   for name in ProductService.searchable_fields
                   for text in field_text(getattr(p, name)))
        ]
        assert result == expected

    def test_search_clients_by_email_domain(self, clients):
        result = asyncio.run(clients.search("Example.COM"))
        assert [c.id for c in result] == ["1", "2", "3"]

    def test_search_clients_by_name(self, clients):
        result = asyncio.run(clients.search("jane"))
        assert [c.id for c in result] == ["2"]

    def test_search_rejects_non_string_query(self, products):
        with pytest.raises(ValidationError):
            asyncio.run(products.search(42))


class TestFieldText:
    """Test search stringification rules."""

    def test_rules(self):
        from datetime import datetime, timezone
        from core.models import SaleStatus

        assert field_text(None) == []
        assert field_text(Decimal("10.50")) == ["10.50"]
        assert field_text(7) == ["7"]
        assert field_text(SaleStatus.CANCELED) == ["canceled"]
        assert field_text(["A", None, "B"]) == ["A", "B"]
        assert field_text(datetime(2023, 2, 1, 14, 30, tzinfo=timezone.utc)) == ["2023-02-01T14:30:00+00:00"]

    def test_matches_query_ignores_unlisted_fields(self, products):
        product = asyncio.run(products.get_by_id("1"))
        assert matches_query(product, ("name",), "smartphone")
        assert not matches_query(product, ("name",), "high-end")


class TestLatency:
    """Test the latency contract."""

    def test_fixed_latency_delays_operations(self, store):
        service = ProductService(store.products, latency=FixedLatency(delay_seconds=0.05))

        started = time.perf_counter()
        asyncio.run(service.get_all())
        assert time.perf_counter() - started >= 0.04

    def test_operations_resolve_in_timer_order(self, store):
        slow = ProductService(store.products, latency=FixedLatency(delay_seconds=0.05))
        fast = ProductService(store.products, latency=FixedLatency(delay_seconds=0.01))

        async def race():
            return await asyncio.gather(
                slow.update("1", {"stock": 1}),
                fast.update("1", {"stock": 2}),
            )

        asyncio.run(race())

        # the slow update was invoked first but applied last
        assert store.products.find_by_id("1").stock == 1

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            FixedLatency(delay_seconds=-1)

    def test_latency_from_settings(self):
        assert isinstance(latency_from_settings(Settings(latency_ms=0)), NoLatency)

        latency = latency_from_settings(Settings(latency_ms=250))
        assert isinstance(latency, FixedLatency)
        assert latency.delay_seconds == 0.25

    def test_default_latency_is_half_a_second(self, store):
        service = ProductService(store.products)
        assert service._latency == FixedLatency(delay_seconds=0.5)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
