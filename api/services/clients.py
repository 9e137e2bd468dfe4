"""Client registry service."""

from core.models.entities import Client, ClientCreate, ClientUpdate

from api.services.crud import CrudService


class ClientService(CrudService[Client, ClientCreate, ClientUpdate]):
    entity_name = "client"
    entity_model = Client
    create_model = ClientCreate
    update_model = ClientUpdate
    searchable_fields = (
        "id", "name", "email", "phone", "address", "created_at", "updated_at",
    )
