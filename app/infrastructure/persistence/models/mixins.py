"""SQLAlchemy mixins shared by the tenant-scoped record tables.

Column names keep the legacy PascalCase spelling of the deployed schema;
ORM attribute names are snake_case.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, SmallInteger, String, Text, text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


class SerialIdMixin:
    """Auto-increment numeric primary key (Id)."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column("Id", Integer, primary_key=True, autoincrement=True)


class TenantMixin:
    """Owning tenant (TenantId FK) and the derived TenantUserId handle."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            "TenantId",
            String(4),
            ForeignKey("Tenants.TenantId"),
            nullable=False,
            index=True,
        )

    @declared_attr
    def tenant_user_id(cls) -> Mapped[str]:
        return mapped_column("TenantUserId", String(32), nullable=False)


class ProvenanceMixin:
    """CreatedBy/CreatedDate/UpdatedBy/UpdatedDate (actor is a TenantUserId or 'system'/'self')."""

    @declared_attr
    def created_by(cls) -> Mapped[str | None]:
        return mapped_column("CreatedBy", String(64), nullable=True)

    @declared_attr
    def created_date(cls) -> Mapped[datetime]:
        return mapped_column(
            "CreatedDate", DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_by(cls) -> Mapped[str | None]:
        return mapped_column("UpdatedBy", String(64), nullable=True)

    @declared_attr
    def updated_date(cls) -> Mapped[datetime | None]:
        return mapped_column("UpdatedDate", DateTime(timezone=True), nullable=True)


class PersonMixin:
    """Columns common to Users and Clients."""

    @declared_attr
    def first_name(cls) -> Mapped[str]:
        return mapped_column("FirstName", String(100), nullable=False)

    @declared_attr
    def last_name(cls) -> Mapped[str]:
        return mapped_column("LastName", String(100), nullable=False)

    @declared_attr
    def email(cls) -> Mapped[str]:
        return mapped_column("Email", String(255), nullable=False)

    @declared_attr
    def photo(cls) -> Mapped[str | None]:
        return mapped_column("Photo", String(255), nullable=True)

    @declared_attr
    def active(cls) -> Mapped[int]:
        return mapped_column("Active", SmallInteger, nullable=False, server_default=text("0"))

    @declared_attr
    def comments(cls) -> Mapped[str | None]:
        return mapped_column("Comments", Text, nullable=True)

    @declared_attr
    def password(cls) -> Mapped[str | None]:
        """bcrypt hash; NULL or empty means the password must be set at first login."""
        return mapped_column("Password", String(255), nullable=True)


class TenantRecordModel(SerialIdMixin, TenantMixin, PersonMixin, ProvenanceMixin):
    """Combined mixin for Users and Clients."""

    __abstract__ = True
