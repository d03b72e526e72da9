"""User repository: tenant-scoped CRUD plus credential lookups for login."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserCredentials
from app.domain.record_fields import USER_ENTITY
from app.infrastructure.persistence.models.user import (
    USER_EMAIL_CONSTRAINT,
    USER_TENANT_USER_ID_CONSTRAINT,
    User,
)
from app.infrastructure.persistence.repositories.record_repo import RecordRepository
from app.shared.utils.datetime import utc_now


def _user_to_credentials(u: User) -> UserCredentials:
    """Map ORM User to application UserCredentials."""
    return UserCredentials(
        id=u.id,
        email=u.email,
        password_hash=u.password,
        active=bool(u.active),
        tenant_id=u.tenant_id,
        tenant_user_id=u.tenant_user_id,
    )


class UserRepository(RecordRepository[User]):
    """Users table. Email is globally unique, so login needs no tenant."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(
            db,
            User,
            USER_ENTITY,
            email_constraint=USER_EMAIL_CONSTRAINT,
            handle_constraint=USER_TENANT_USER_ID_CONSTRAINT,
        )

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        return _user_to_credentials(user) if user else None

    async def get_credentials(self, user_id: int) -> UserCredentials | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        return _user_to_credentials(user) if user else None

    async def set_password(self, user_id: int, password_hash: str, updated_by: str) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(password=password_hash, updated_by=updated_by, updated_date=utc_now())
        )
        return (result.rowcount or 0) > 0
