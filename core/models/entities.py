"""Back-office entity models.

Entities are immutable pydantic models: a mutation builds a new record and
replaces the old one in its store. Each entity comes with two input models:

- <Entity>Create: what a caller supplies to create a record (no id, no
  timestamps, no derived totals)
- <Entity>Update: every mutable field optional; only explicitly supplied
  fields are merged
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# ENUMS
# =============================================================================

class PaymentMethod(str, Enum):
    """Accepted payment methods for a sale."""
    CREDIT_CARD = "credit_card"
    PIX = "pix"
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"


class SaleStatus(str, Enum):
    """Sale lifecycle status."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELED = "canceled"


# =============================================================================
# BASE MODELS
# =============================================================================

def as_utc(value: datetime) -> datetime:
    """Timezone-aware UTC form of ``value``; naive timestamps are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EntityModel(BaseModel):
    """Stored record with system-managed timestamps."""
    model_config = ConfigDict(frozen=True)

    created_at: datetime = Field(..., description="Creation timestamp (immutable)")
    updated_at: datetime = Field(..., description="Last mutation timestamp")

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def check_timestamps(self):
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")
        return self


class InputModel(BaseModel):
    """Caller-supplied payload; unknown fields are rejected."""
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# PRODUCT
# =============================================================================

class Product(EntityModel):
    id: str = Field(..., description="Unique product id")
    name: str
    description: str = ""
    price: Decimal = Field(..., ge=0)
    stock: int = Field(..., ge=0)


class ProductCreate(InputModel):
    name: str
    description: str = ""
    price: Decimal = Field(..., ge=0)
    stock: int = Field(..., ge=0)


class ProductUpdate(InputModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)


# =============================================================================
# CLIENT
# =============================================================================

class Client(EntityModel):
    id: str = Field(..., description="Unique client id")
    name: str
    email: str
    phone: str
    address: str


class ClientCreate(InputModel):
    name: str
    email: str
    phone: str
    address: str


class ClientUpdate(InputModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


# =============================================================================
# SALE
# =============================================================================

class SaleItem(BaseModel):
    """One line of a sale. ``total`` is always quantity * unit_price."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Item id, unique within its sale")
    product_id: str
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)
    total: Decimal

    @model_validator(mode="after")
    def check_total(self):
        if self.total != self.quantity * self.unit_price:
            raise ValueError(
                f"item {self.id} total {self.total} != {self.quantity} x {self.unit_price}"
            )
        return self


class SaleItemCreate(InputModel):
    id: Optional[str] = None
    product_id: str
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)


class Sale(EntityModel):
    """A sale. ``total`` is always the sum of item totals."""
    id: str = Field(..., description="Unique sale id")
    client_id: str = Field(..., description="Client reference (not enforced)")
    items: List[SaleItem] = Field(..., min_length=1)
    total: Decimal
    payment_method: PaymentMethod
    status: SaleStatus

    @model_validator(mode="after")
    def check_items(self):
        item_ids = [item.id for item in self.items]
        if len(set(item_ids)) != len(item_ids):
            raise ValueError("sale item ids must be unique within a sale")
        expected = sum((item.total for item in self.items), Decimal("0"))
        if self.total != expected:
            raise ValueError(f"sale total {self.total} != sum of item totals {expected}")
        return self


class SaleCreate(InputModel):
    client_id: str
    items: List[SaleItemCreate] = Field(..., min_length=1)
    payment_method: PaymentMethod
    status: SaleStatus = SaleStatus.PENDING


class SaleUpdate(InputModel):
    client_id: Optional[str] = None
    items: Optional[List[SaleItemCreate]] = Field(default=None, min_length=1)
    payment_method: Optional[PaymentMethod] = None
    status: Optional[SaleStatus] = None


def build_sale_items(items: List[SaleItemCreate]) -> List[SaleItem]:
    """Turn item payloads into sale items with ids and computed totals.

    Items without an id are numbered by position ("1", "2", ...).
    """
    built = []
    for position, item in enumerate(items, start=1):
        built.append(SaleItem(
            id=item.id if item.id is not None else str(position),
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total=item.quantity * item.unit_price,
        ))
    return built


def sum_item_totals(items: List[SaleItem]) -> Decimal:
    return sum((item.total for item in items), Decimal("0"))


# =============================================================================
# SUPPLIER
# =============================================================================

def _unique_categories(categories: List[str]) -> List[str]:
    # first occurrence wins
    return list(dict.fromkeys(categories))


class Supplier(EntityModel):
    id: int = Field(..., description="Store-assigned sequential id")
    name: str
    contact: str
    phone: str
    email: str
    address: str
    city: str
    state: str
    zip_code: str
    tax_id: str
    categories: List[str] = Field(default_factory=list)
    payment_terms: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("categories")
    @classmethod
    def dedupe_categories(cls, value: List[str]) -> List[str]:
        return _unique_categories(value)


class SupplierCreate(InputModel):
    name: str
    contact: str
    phone: str
    email: str
    address: str
    city: str
    state: str
    zip_code: str
    tax_id: str
    categories: List[str] = Field(default_factory=list)
    payment_terms: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("categories")
    @classmethod
    def dedupe_categories(cls, value: List[str]) -> List[str]:
        return _unique_categories(value)


class SupplierUpdate(InputModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    tax_id: Optional[str] = None
    categories: Optional[List[str]] = None
    payment_terms: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
