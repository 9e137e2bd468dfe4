"""Back-office data services.

Async CRUD + search services over the in-memory entity stores, and the
dashboard aggregation built on them.
"""

from api.services.backoffice import BackOffice
from api.services.clients import ClientService
from api.services.crud import CrudService, field_text, matches_query, track_operation
from api.services.dashboard import DashboardService, compute_dashboard_snapshot
from api.services.latency import FixedLatency, Latency, NoLatency, latency_from_settings
from api.services.mock_data import (
    SAMPLE_CLIENTS,
    SAMPLE_PRODUCTS,
    SAMPLE_SALES,
    SAMPLE_SUPPLIERS,
    build_sample_store,
    seed_sample_data,
)
from api.services.products import ProductService
from api.services.sales import SaleService
from api.services.suppliers import SupplierService

__all__ = [
    "BackOffice",
    # Services
    "CrudService",
    "ProductService",
    "ClientService",
    "SaleService",
    "SupplierService",
    "DashboardService",
    "compute_dashboard_snapshot",
    # Search
    "field_text",
    "matches_query",
    "track_operation",
    # Latency
    "Latency",
    "FixedLatency",
    "NoLatency",
    "latency_from_settings",
    # Sample data
    "SAMPLE_PRODUCTS",
    "SAMPLE_CLIENTS",
    "SAMPLE_SALES",
    "SAMPLE_SUPPLIERS",
    "seed_sample_data",
    "build_sample_store",
]
