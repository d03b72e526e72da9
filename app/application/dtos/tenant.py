"""DTOs for tenant use cases (no dependency on ORM)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TenantResult:
    """Tenant read-model (result of get, create, rename)."""

    tenant_id: str
    tenant_name: str

    def to_dict(self) -> dict[str, Any]:
        return {"TenantId": self.tenant_id, "TenantName": self.tenant_name}
