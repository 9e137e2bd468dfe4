"""Supplier registry service.

Supplier ids are integers handed out by the store's sequential allocator.
An id is never reused: with suppliers [1, 2], deleting 1 and creating a new
supplier yields id 3.
"""

from core.models.entities import Supplier, SupplierCreate, SupplierUpdate

from api.services.crud import CrudService


class SupplierService(CrudService[Supplier, SupplierCreate, SupplierUpdate]):
    entity_name = "supplier"
    entity_model = Supplier
    create_model = SupplierCreate
    update_model = SupplierUpdate
    searchable_fields = (
        "id",
        "name",
        "contact",
        "phone",
        "email",
        "address",
        "city",
        "state",
        "zip_code",
        "tax_id",
        "categories",
        "payment_terms",
        "website",
        "notes",
        "created_at",
        "updated_at",
    )
