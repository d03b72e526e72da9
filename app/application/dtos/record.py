"""DTOs for tenant-scoped record operations (Users, Clients)."""

from dataclasses import dataclass, field
from typing import Any

# Records travel as dicts keyed by column name (Id, TenantId, FirstName, ...).
Record = dict[str, Any]


@dataclass(frozen=True)
class RecordCreated:
    """Result of create: new numeric id and the assigned TenantUserId."""

    id: int
    tenant_user_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "tenantUserId": self.tenant_user_id}


@dataclass(frozen=True)
class RecordUpdated:
    """Result of update; changed is 0 when nothing differed (no write happened)."""

    changes: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def changed(self) -> int:
        return len(self.changes)

    def to_dict(self) -> dict[str, Any]:
        return {"success": True, "changed": self.changed}
