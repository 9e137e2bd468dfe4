"""Core data models - back-office entities and dashboard snapshot.

This package contains the records held by the entity stores and the input
models accepted by the services.
"""

from core.models.entities import (
    # Enums
    PaymentMethod,
    SaleStatus,

    # Base
    EntityModel,
    InputModel,

    # Entities
    Product,
    Client,
    Sale,
    SaleItem,
    Supplier,

    # Inputs
    ProductCreate,
    ProductUpdate,
    ClientCreate,
    ClientUpdate,
    SaleCreate,
    SaleUpdate,
    SaleItemCreate,
    SupplierCreate,
    SupplierUpdate,

    # Helpers
    build_sale_items,
    sum_item_totals,
    as_utc,
)

from core.models.dashboard import DashboardSnapshot

__all__ = [
    # Enums
    "PaymentMethod",
    "SaleStatus",

    # Base
    "EntityModel",
    "InputModel",

    # Entities
    "Product",
    "Client",
    "Sale",
    "SaleItem",
    "Supplier",

    # Inputs
    "ProductCreate",
    "ProductUpdate",
    "ClientCreate",
    "ClientUpdate",
    "SaleCreate",
    "SaleUpdate",
    "SaleItemCreate",
    "SupplierCreate",
    "SupplierUpdate",

    # Helpers
    "build_sale_items",
    "sum_item_totals",
    "as_utc",

    # Dashboard
    "DashboardSnapshot",
]
