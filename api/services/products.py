"""Product catalog service."""

from core.models.entities import Product, ProductCreate, ProductUpdate

from api.services.crud import CrudService


class ProductService(CrudService[Product, ProductCreate, ProductUpdate]):
    entity_name = "product"
    entity_model = Product
    create_model = ProductCreate
    update_model = ProductUpdate
    searchable_fields = (
        "id", "name", "description", "price", "stock", "created_at", "updated_at",
    )
