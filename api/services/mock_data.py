"""
Sample Data for the Back-Office Services.

Provides a small, realistic catalog, client list, sales history and
supplier registry for development, demos and tests.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from core.models.entities import (
    Client,
    PaymentMethod,
    Product,
    Sale,
    SaleItem,
    SaleStatus,
    Supplier,
)
from core.observability import get_logger
from core.storage.entity_store import DataStore


logger = get_logger(__name__)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


# =============================================================================
# PRODUCTS
# =============================================================================

SAMPLE_PRODUCTS: List[Dict] = [
    {
        "id": "1",
        "name": "Smartphone X",
        "description": "Latest smartphone with high-end features",
        "price": Decimal("1299.99"),
        "stock": 25,
        "created_at": _ts("2023-01-15T10:30:00"),
        "updated_at": _ts("2023-01-15T10:30:00"),
    },
    {
        "id": "2",
        "name": "Laptop Pro",
        "description": "Professional laptop with powerful specs",
        "price": Decimal("2499.99"),
        "stock": 10,
        "created_at": _ts("2023-01-20T14:15:00"),
        "updated_at": _ts("2023-01-20T14:15:00"),
    },
    {
        "id": "3",
        "name": "Wireless Earbuds",
        "description": "Premium sound quality wireless earbuds",
        "price": Decimal("159.99"),
        "stock": 50,
        "created_at": _ts("2023-01-25T09:45:00"),
        "updated_at": _ts("2023-01-25T09:45:00"),
    },
]


# =============================================================================
# CLIENTS
# =============================================================================

SAMPLE_CLIENTS: List[Dict] = [
    {
        "id": "1",
        "name": "John Doe",
        "email": "john.doe@example.com",
        "phone": "(555) 123-4567",
        "address": "123 Main St, Anytown, CA 12345",
        "created_at": _ts("2023-01-10T11:20:00"),
        "updated_at": _ts("2023-01-10T11:20:00"),
    },
    {
        "id": "2",
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
        "phone": "(555) 987-6543",
        "address": "456 Oak Ave, Somewhere, NY 67890",
        "created_at": _ts("2023-01-12T13:40:00"),
        "updated_at": _ts("2023-01-12T13:40:00"),
    },
    {
        "id": "3",
        "name": "Bob Johnson",
        "email": "bob.johnson@example.com",
        "phone": "(555) 456-7890",
        "address": "789 Pine Rd, Nowhere, TX 54321",
        "created_at": _ts("2023-01-14T15:10:00"),
        "updated_at": _ts("2023-01-14T15:10:00"),
    },
]


# =============================================================================
# SALES
# =============================================================================

SAMPLE_SALES: List[Dict] = [
    {
        "id": "1",
        "client_id": "1",
        "items": [
            {"id": "1", "product_id": "1", "quantity": 1,
             "unit_price": Decimal("1299.99"), "total": Decimal("1299.99")},
            {"id": "2", "product_id": "3", "quantity": 1,
             "unit_price": Decimal("159.99"), "total": Decimal("159.99")},
        ],
        "total": Decimal("1459.98"),
        "payment_method": PaymentMethod.CREDIT_CARD,
        "status": SaleStatus.COMPLETED,
        "created_at": _ts("2023-02-01T14:30:00"),
        "updated_at": _ts("2023-02-01T14:30:00"),
    },
    {
        "id": "2",
        "client_id": "2",
        "items": [
            {"id": "3", "product_id": "2", "quantity": 1,
             "unit_price": Decimal("2499.99"), "total": Decimal("2499.99")},
        ],
        "total": Decimal("2499.99"),
        "payment_method": PaymentMethod.PIX,
        "status": SaleStatus.COMPLETED,
        "created_at": _ts("2023-02-05T11:15:00"),
        "updated_at": _ts("2023-02-05T11:15:00"),
    },
]


# =============================================================================
# SUPPLIERS
# =============================================================================

SAMPLE_SUPPLIERS: List[Dict] = [
    {
        "id": 1,
        "name": "Fornecedor A Ltda",
        "contact": "João Silva",
        "email": "joao@fornecedora.com",
        "phone": "(11) 99999-9999",
        "address": "Rua A, 123",
        "city": "São Paulo",
        "state": "SP",
        "zip_code": "01234-567",
        "tax_id": "12.345.678/0001-90",
        "categories": ["Eletrônicos"],
        "website": "https://fornecedora.com.br",
    },
    {
        "id": 2,
        "name": "Distribuidora B",
        "contact": "Maria Santos",
        "email": "maria@distribuidorab.com",
        "phone": "(21) 98888-8888",
        "address": "Av B, 456",
        "city": "Rio de Janeiro",
        "state": "RJ",
        "zip_code": "20000-000",
        "tax_id": "98.765.432/0001-10",
        "categories": ["Alimentos"],
        "payment_terms": "30 dias",
    },
]


# =============================================================================
# SEEDING
# =============================================================================

def seed_sample_data(store: DataStore, now: Optional[datetime] = None) -> DataStore:
    """Insert the sample records into ``store``.

    Suppliers carry no fixed timestamps; they are stamped with ``now``.

    Raises:
        DuplicateKeyError: If the store already holds a record with a sample id
    """
    now = now or datetime.now(timezone.utc)

    for data in SAMPLE_PRODUCTS:
        store.products.insert(Product.model_validate(data))
    for data in SAMPLE_CLIENTS:
        store.clients.insert(Client.model_validate(data))
    for data in SAMPLE_SALES:
        items = [SaleItem.model_validate(item) for item in data["items"]]
        store.sales.insert(Sale.model_validate({**data, "items": items}))
    for data in SAMPLE_SUPPLIERS:
        store.suppliers.insert(Supplier.model_validate({**data, "created_at": now, "updated_at": now}))

    logger.info(
        "Seeded sample data",
        extra_fields={
            "products": len(store.products),
            "clients": len(store.clients),
            "sales": len(store.sales),
            "suppliers": len(store.suppliers),
        },
    )
    return store


def build_sample_store(now: Optional[datetime] = None) -> DataStore:
    """Fresh DataStore holding the sample records."""
    return seed_sample_data(DataStore.empty(), now=now)
