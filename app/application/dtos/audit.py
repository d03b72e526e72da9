"""DTO for one audit trail entry, independent of the deployed table layout."""

from dataclasses import dataclass, field
from typing import Any

from app.domain.enums import AuditActionType


@dataclass(frozen=True)
class AuditEntry:
    """One row to append to the audit table.

    Attributes:
        action: ActionType column.
        table_name: Table the action concerns ("Users", "Clients", "Tenants", "HTTP").
        user_id: Acting user (None for anonymous or failed events).
        tenant_id: Acting tenant, when known.
        tenant_user_id: Acting TenantUserId, when known.
        message: JSON payload stored in the Message column.
    """

    action: AuditActionType
    table_name: str
    user_id: int | str | None = None
    tenant_id: str | None = None
    tenant_user_id: str | None = None
    message: dict[str, Any] = field(default_factory=dict)
