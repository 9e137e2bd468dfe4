"""Service wiring.

Builds one DataStore and every service on top of it, configured from
Settings. This is the entry point a presentation layer (or the CLI) uses.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from core.config import Settings, get_settings
from core.models.entities import SaleStatus
from core.storage.entity_store import DataStore

from api.services.clients import ClientService
from api.services.crud import Clock, utc_now
from api.services.dashboard import DashboardService
from api.services.latency import Latency, latency_from_settings
from api.services.mock_data import seed_sample_data
from api.services.products import ProductService
from api.services.sales import SaleService
from api.services.suppliers import SupplierService


@dataclass
class BackOffice:
    """All back-office services sharing one DataStore."""
    store: DataStore
    products: ProductService
    clients: ClientService
    sales: SaleService
    suppliers: SupplierService
    dashboard: DashboardService

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        store: Optional[DataStore] = None,
        latency: Optional[Latency] = None,
        counted_statuses: Optional[Iterable[SaleStatus]] = None,
        clock: Clock = utc_now,
    ) -> "BackOffice":
        """Create the services.

        Args:
            settings: Settings to use (read from the environment if omitted)
            store: Existing store; a new one is built (and seeded when
                ``settings.seed_sample_data``) if omitted
            latency: Latency strategy overriding ``settings.latency_ms``
            counted_statuses: Sale statuses counted by the dashboard (None = all)
            clock: Timestamp source shared by all services
        """
        settings = settings or get_settings()
        if store is None:
            store = DataStore.empty()
            if settings.seed_sample_data:
                seed_sample_data(store, now=clock())
        latency = latency or latency_from_settings(settings)

        return cls(
            store=store,
            products=ProductService(store.products, latency, clock),
            clients=ClientService(store.clients, latency, clock),
            sales=SaleService(store.sales, latency, clock),
            suppliers=SupplierService(store.suppliers, latency, clock),
            dashboard=DashboardService(
                store,
                latency,
                low_stock_threshold=settings.low_stock_threshold,
                recent_sales_limit=settings.recent_sales_limit,
                counted_statuses=counted_statuses,
                clock=clock,
            ),
        )
