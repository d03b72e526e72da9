"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.audit import AuditEntry


# Audit writer interface (one fixed insert strategy per process)
class IAuditWriter(Protocol):
    """Protocol for appending entries to the audit table."""

    async def write(self, entry: AuditEntry) -> None:
        """Insert one entry. May raise; callers go through AuditLogger."""


# Audit logger interface (best-effort facade used by services)
class IAuditLogger(Protocol):
    """Protocol for best-effort audit logging. Never raises."""

    async def log(self, entry: AuditEntry) -> None:
        """Write entry; failures are logged locally and swallowed."""


# Password hashing interface
class IPasswordHasher(Protocol):
    """Protocol for password hashing (bcrypt in production)."""

    async def hash(self, plain: str) -> str:
        """Hash off the event loop."""

    async def verify(self, plain: str, hashed: str | None) -> bool:
        """Compare off the event loop; False for missing or malformed hashes."""

    async def verify_dummy(self, plain: str) -> None:
        """Spend one comparison's worth of time when there is no user to check."""


# Session store interface
class ISessionStore(Protocol):
    """Protocol for server-side sessions keyed by opaque token."""

    def create(self, data: dict[str, Any]) -> str:
        """Store data under a new token and return the token."""

    def get(self, token: str | None) -> dict[str, Any] | None:
        """Return session data, or None when missing or expired."""

    def regenerate(self, old_token: str | None, data: dict[str, Any]) -> str:
        """Invalidate old_token (if any) and store data under a new token."""

    def destroy(self, token: str | None) -> dict[str, Any] | None:
        """Remove the session and return what it held."""


# Photo storage interface
class IPhotoStorage(Protocol):
    """Protocol for storing uploaded record photos per tenant."""

    async def save(self, tenant_id: str, filename: str | None, data: bytes) -> str:
        """Store bytes and return the tenant-relative path ('<TenantId>/<file>')."""

    def resolve(self, relative_path: str) -> Any:
        """Return the on-disk path for a stored photo; reject traversal."""

    async def delete(self, relative_path: str) -> None:
        """Remove a stored photo (no error when it is already gone)."""
