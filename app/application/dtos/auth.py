"""DTOs for session authentication and tenant context."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TenantContext:
    """Identity attached to every authenticated request.

    Scoping always uses these values, never identifiers from a request body.
    """

    user_id: int
    email: str | None
    tenant_id: str
    tenant_user_id: str | None

    def to_session(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "email": self.email,
            "tenantId": self.tenant_id,
            "tenantUserId": self.tenant_user_id,
        }


@dataclass(frozen=True)
class Authenticated:
    """Login succeeded; token is the freshly issued session token."""

    context: TenantContext
    token: str


@dataclass(frozen=True)
class MustSetPassword:
    """User exists but has no password yet; no session was created.

    setup_token authorizes exactly one first-password call for user_id.
    """

    user_id: int
    setup_token: str


@dataclass(frozen=True)
class InvalidCredentials:
    """Unknown email, disabled account or wrong password (deliberately indistinguishable)."""


LoginOutcome = Authenticated | MustSetPassword | InvalidCredentials
