"""Tenant ORM model. Root of the multi-tenant hierarchy."""

from sqlalchemy import PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base

TENANT_PK_CONSTRAINT = "pk_tenants"


class Tenant(Base):
    """Table: Tenants. TenantId is a generated 4-hex code, never user-supplied."""

    __tablename__ = "Tenants"

    tenant_id: Mapped[str] = mapped_column("TenantId", String(4), primary_key=True)
    tenant_name: Mapped[str] = mapped_column("TenantName", String(200), nullable=False)

    __table_args__ = (PrimaryKeyConstraint("TenantId", name=TENANT_PK_CONSTRAINT),)
