"""Client repository: tenant-scoped CRUD over the Clients table."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.record_fields import CLIENT_ENTITY
from app.infrastructure.persistence.models.client import (
    CLIENT_EMAIL_CONSTRAINT,
    CLIENT_TENANT_USER_ID_CONSTRAINT,
    Client,
)
from app.infrastructure.persistence.repositories.record_repo import RecordRepository


class ClientRepository(RecordRepository[Client]):
    """Clients table. Email is unique within a tenant."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(
            db,
            Client,
            CLIENT_ENTITY,
            email_constraint=CLIENT_EMAIL_CONSTRAINT,
            handle_constraint=CLIENT_TENANT_USER_ID_CONSTRAINT,
        )
