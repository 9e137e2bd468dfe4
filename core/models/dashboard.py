"""Dashboard snapshot model returned by the aggregation engine."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, Field

from core.models.entities import Product, Sale


class DashboardSnapshot(BaseModel):
    """Point-in-time statistics derived from the entity stores.

    Attributes:
        total_sales: Number of counted sales
        total_revenue: Sum of counted sale totals
        total_products: Number of products in the catalog
        total_clients: Number of registered clients
        low_stock_products: Products below the low-stock threshold, store order
        recent_sales: Counted sales, newest first, truncated to the configured limit
        total_suppliers: Number of suppliers
        total_stock_units: Sum of stock over all products
        sales_today: Counted sales created on the current UTC date
        revenue_today: Revenue of ``sales_today``
        new_clients_last_7_days: Clients created in the last seven days
        sales_by_status: Sale count per status, over all sales
        generated_at: When the snapshot was computed
    """
    total_sales: int = Field(..., ge=0)
    total_revenue: Decimal
    total_products: int = Field(..., ge=0)
    total_clients: int = Field(..., ge=0)
    low_stock_products: List[Product] = Field(default_factory=list)
    recent_sales: List[Sale] = Field(default_factory=list)

    total_suppliers: int = Field(default=0, ge=0)
    total_stock_units: int = Field(default=0, ge=0)
    sales_today: int = Field(default=0, ge=0)
    revenue_today: Decimal = Decimal("0")
    new_clients_last_7_days: int = Field(default=0, ge=0)
    sales_by_status: Dict[str, int] = Field(default_factory=dict)
    generated_at: datetime
