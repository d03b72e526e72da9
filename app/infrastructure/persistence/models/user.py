"""User ORM model (tenant-scoped, login identity)."""

from sqlalchemy import UniqueConstraint

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TenantRecordModel

USER_EMAIL_CONSTRAINT = "uq_users_email"
USER_TENANT_USER_ID_CONSTRAINT = "uq_users_tenant_user_id"


class User(TenantRecordModel, Base):
    """Table: Users. Email is unique across all tenants (login is a global lookup)."""

    __tablename__ = "Users"

    __table_args__ = (
        UniqueConstraint("Email", name=USER_EMAIL_CONSTRAINT),
        UniqueConstraint("TenantUserId", name=USER_TENANT_USER_ID_CONSTRAINT),
    )
