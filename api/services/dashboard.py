"""Dashboard aggregation.

Derives the dashboard statistics from the current contents of the entity
stores. Nothing is cached: every call reads the stores afresh.

Which sales count towards totals is a policy: by default every status is
counted (pending, completed and canceled alike). Pass ``counted_statuses``
to restrict the sale-derived figures, e.g. to completed sales only.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import FrozenSet, Iterable, Optional, Sequence

from core.models.dashboard import DashboardSnapshot
from core.models.entities import Client, Product, Sale, SaleStatus, Supplier, as_utc
from core.observability import get_logger
from core.storage.entity_store import DataStore

from api.services.crud import Clock, track_operation, utc_now
from api.services.latency import FixedLatency, Latency


logger = get_logger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 5
DEFAULT_RECENT_SALES_LIMIT = 5
NEW_CLIENT_WINDOW = timedelta(days=7)


def compute_dashboard_snapshot(
    products: Sequence[Product],
    clients: Sequence[Client],
    sales: Sequence[Sale],
    suppliers: Sequence[Supplier] = (),
    *,
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    recent_sales_limit: int = DEFAULT_RECENT_SALES_LIMIT,
    counted_statuses: Optional[Iterable[SaleStatus]] = None,
    now: Optional[datetime] = None,
) -> DashboardSnapshot:
    """Compute dashboard statistics from record lists.

    Args:
        products, clients, sales, suppliers: Records in store order
        low_stock_threshold: Products with stock strictly below this are low
        recent_sales_limit: Maximum length of ``recent_sales``
        counted_statuses: Sale statuses feeding the sale figures (None = all)
        now: Reference time for the "today" and "last 7 days" figures

    Returns:
        DashboardSnapshot
    """
    now = as_utc(now) if now is not None else utc_now()
    statuses: Optional[FrozenSet[SaleStatus]] = (
        frozenset(counted_statuses) if counted_statuses is not None else None
    )

    counted = [sale for sale in sales if statuses is None or sale.status in statuses]

    # sorted() is stable, so equal timestamps keep store order
    recent = sorted(counted, key=lambda sale: sale.created_at, reverse=True)[:recent_sales_limit]

    today = now.astimezone(timezone.utc).date()
    todays_sales = [
        sale for sale in counted
        if sale.created_at.astimezone(timezone.utc).date() == today
    ]

    by_status = Counter(sale.status.value for sale in sales)

    return DashboardSnapshot(
        total_sales=len(counted),
        total_revenue=sum((sale.total for sale in counted), Decimal("0")),
        total_products=len(products),
        total_clients=len(clients),
        low_stock_products=[product for product in products if product.stock < low_stock_threshold],
        recent_sales=recent,
        total_suppliers=len(suppliers),
        total_stock_units=sum(product.stock for product in products),
        sales_today=len(todays_sales),
        revenue_today=sum((sale.total for sale in todays_sales), Decimal("0")),
        new_clients_last_7_days=sum(
            1 for client in clients if client.created_at >= now - NEW_CLIENT_WINDOW
        ),
        sales_by_status={status.value: by_status.get(status.value, 0) for status in SaleStatus},
        generated_at=now,
    )


class DashboardService:
    """Async dashboard statistics over a DataStore.

    Usage:
        dashboard = DashboardService(store, latency=NoLatency())
        stats = await dashboard.get_dashboard_stats()
        print(stats.total_revenue)
    """

    entity_name = "dashboard"

    def __init__(
        self,
        store: DataStore,
        latency: Optional[Latency] = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        recent_sales_limit: int = DEFAULT_RECENT_SALES_LIMIT,
        counted_statuses: Optional[Iterable[SaleStatus]] = None,
        clock: Clock = utc_now,
    ):
        if low_stock_threshold < 0:
            raise ValueError(f"low_stock_threshold must be >= 0, got {low_stock_threshold}")
        if recent_sales_limit < 0:
            raise ValueError(f"recent_sales_limit must be >= 0, got {recent_sales_limit}")

        self._store = store
        self._latency = latency or FixedLatency()
        self._clock = clock
        self.low_stock_threshold = low_stock_threshold
        self.recent_sales_limit = recent_sales_limit
        self.counted_statuses = frozenset(counted_statuses) if counted_statuses is not None else None

    async def get_dashboard_stats(self) -> DashboardSnapshot:
        """Compute a fresh DashboardSnapshot from the stores."""
        with track_operation(self.entity_name, "get_dashboard_stats"):
            await self._latency.wait()
            snapshot = compute_dashboard_snapshot(
                self._store.products.find_all(),
                self._store.clients.find_all(),
                self._store.sales.find_all(),
                self._store.suppliers.find_all(),
                low_stock_threshold=self.low_stock_threshold,
                recent_sales_limit=self.recent_sales_limit,
                counted_statuses=self.counted_statuses,
                now=self._clock(),
            )
            logger.info(
                "Dashboard snapshot computed",
                extra_fields={
                    "total_sales": snapshot.total_sales,
                    "total_revenue": str(snapshot.total_revenue),
                    "low_stock": len(snapshot.low_stock_products),
                },
            )
            return snapshot
