"""Client ORM model (tenant-scoped, extra contact and PII fields)."""

from datetime import date

from sqlalchemy import Date, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TenantRecordModel

CLIENT_EMAIL_CONSTRAINT = "uq_clients_tenant_email"
CLIENT_TENANT_USER_ID_CONSTRAINT = "uq_clients_tenant_user_id"


class Client(TenantRecordModel, Base):
    """Table: Clients. Email is unique per tenant."""

    __tablename__ = "Clients"

    phone: Mapped[str | None] = mapped_column("Phone", String(50), nullable=True)
    address: Mapped[str | None] = mapped_column("Address", String(255), nullable=True)
    city: Mapped[str | None] = mapped_column("City", String(100), nullable=True)
    state: Mapped[str | None] = mapped_column("State", String(100), nullable=True)
    zip: Mapped[str | None] = mapped_column("Zip", String(20), nullable=True)
    country: Mapped[str | None] = mapped_column("Country", String(100), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column("DateOfBirth", Date, nullable=True)
    gender: Mapped[str | None] = mapped_column("Gender", String(20), nullable=True)

    __table_args__ = (
        UniqueConstraint("TenantId", "Email", name=CLIENT_EMAIL_CONSTRAINT),
        UniqueConstraint("TenantUserId", name=CLIENT_TENANT_USER_ID_CONSTRAINT),
    )
