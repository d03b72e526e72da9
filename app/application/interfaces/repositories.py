"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.record import Record
    from app.application.dtos.tenant import TenantResult
    from app.application.dtos.user import UserCredentials


# Tenant repository interface
class ITenantRepository(Protocol):
    """Protocol for the tenant registry."""

    async def list_all(self) -> list[TenantResult]:
        """Return all tenants ordered by name."""

    async def get(self, tenant_id: str) -> TenantResult | None:
        """Return tenant by code, or None."""

    async def insert(self, tenant_id: str, tenant_name: str) -> TenantResult:
        """Insert a tenant; raise CandidateCollision when tenant_id is taken."""

    async def rename(self, tenant_id: str, tenant_name: str) -> TenantResult | None:
        """Rename tenant; None when it does not exist."""


# Tenant-scoped record repository interface (Users, Clients)
class IRecordRepository(Protocol):
    """Protocol for tenant-scoped CRUD. Rows are dicts keyed by column name.

    Credential columns are never included in returned rows.
    """

    async def list_all(self, tenant_id: str) -> list[Record]:
        """Return the tenant's records, newest (highest Id) first."""

    async def get(self, tenant_id: str, record_id: int) -> Record | None:
        """Return one record if it belongs to tenant_id, else None."""

    async def insert(
        self,
        tenant_id: str,
        tenant_user_id: str,
        values: dict[str, Any],
        created_by: str,
    ) -> int:
        """Insert a record and return its Id.

        Raises CandidateCollision when tenant_user_id is taken and
        DuplicateEmailException when the email is taken.
        """

    async def update(
        self,
        tenant_id: str,
        record_id: int,
        values: dict[str, Any],
        updated_by: str,
    ) -> bool:
        """Write values (column name -> value); False when the record is not in tenant_id."""

    async def delete(self, tenant_id: str, record_id: int) -> bool:
        """Hard delete; False when the record is not in tenant_id."""


# User credential lookups (login, password change)
class IUserRepository(IRecordRepository, Protocol):
    """Protocol for Users: record CRUD plus credential access."""

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Global (not tenant-scoped) lookup by email for login."""

    async def get_credentials(self, user_id: int) -> UserCredentials | None:
        """Return credentials by numeric Id."""

    async def set_password(self, user_id: int, password_hash: str, updated_by: str) -> bool:
        """Store a new hash and stamp UpdatedBy/UpdatedDate."""
