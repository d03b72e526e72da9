"""Audit ORM model. Append-only trail of mutations and security events.

This is the canonical layout created by migrations. Deployed databases
may carry CompanyId/CompanyUserId instead of TenantId/TenantUserId, or
neither, and ActionDate instead of CreatedDate; the audit writer detects
the actual columns and does not depend on this mapping.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Integer, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base


class AuditRecord(Base):
    """Audit entry: who did what to which table, when. No update/delete."""

    __tablename__ = "Audit"

    id: Mapped[int] = mapped_column("Id", Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str | None] = mapped_column("UserId", String(64), nullable=True, index=True)
    table_name: Mapped[str] = mapped_column("TableName", String(64), nullable=False)
    action_type: Mapped[str] = mapped_column("ActionType", String(32), nullable=False)
    tenant_id: Mapped[str | None] = mapped_column("TenantId", String(4), nullable=True, index=True)
    tenant_user_id: Mapped[str | None] = mapped_column("TenantUserId", String(32), nullable=True)
    message: Mapped[str | None] = mapped_column("Message", Text, nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), server_default=func.now(), nullable=False
    )


@event.listens_for(AuditRecord, "before_update")
def _prevent_audit_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditRecord
) -> None:
    """Audit entries are append-only; updates are forbidden."""
    raise ValueError("Audit entries are immutable and cannot be updated.")


@event.listens_for(AuditRecord, "before_delete")
def _prevent_audit_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditRecord
) -> None:
    """Audit entries cannot be deleted."""
    raise ValueError("Audit entries cannot be deleted.")
