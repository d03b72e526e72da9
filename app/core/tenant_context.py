"""Tenant context resolution for session-authenticated requests.

The session cookie is looked up in the server-side store; its identity
fields are normalized once and turned into a TenantContext, or the request
is rejected and the rejection audited.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from starlette.requests import Request

from app.application.dtos.audit import AuditEntry
from app.application.dtos.auth import TenantContext
from app.application.services.session_identity import normalize_session_identity
from app.domain.enums import AuditActionType
from app.domain.exceptions import AuthenticationException
from app.shared.logging import get_logger
from app.shared.request_audit import request_summary

if TYPE_CHECKING:
    from app.application.interfaces.services import IAuditLogger, ISessionStore

logger = get_logger(__name__)


def context_from_session(data: dict[str, Any] | None) -> TenantContext | None:
    """Build a TenantContext from raw session data; None when it has no user or tenant."""
    if not data:
        return None
    identity = normalize_session_identity(data)
    if identity["userId"] is None or not identity["tenantId"]:
        return None
    return TenantContext(
        user_id=identity["userId"],
        email=identity["email"],
        tenant_id=str(identity["tenantId"]),
        tenant_user_id=identity["tenantUserId"],
    )


class TenantContextResolver:
    """Turns a request's session cookie into a TenantContext or rejects it.

    Args:
        session_store: Server-side sessions.
        audit_logger: Receives an ERROR entry for each rejected request.
        cookie_name: Name of the session cookie.
    """

    def __init__(
        self,
        session_store: ISessionStore,
        audit_logger: IAuditLogger,
        cookie_name: str = "sid",
    ) -> None:
        self.session_store = session_store
        self.audit_logger = audit_logger
        self.cookie_name = cookie_name

    def peek(self, request: Request) -> TenantContext | None:
        """Return the caller's context without auditing (None when anonymous)."""
        token = request.cookies.get(self.cookie_name)
        return context_from_session(self.session_store.get(token))

    async def resolve(self, request: Request) -> TenantContext:
        """Return the caller's context; audit and raise when there is none.

        Raises:
            AuthenticationException: No live session, or one without a tenant.
        """
        context = self.peek(request)
        if context is not None:
            return context
        summary = request_summary(request, 401)
        summary["message"] = "Unauthorized"
        logger.info("Unauthorized %s %s", request.method, request.url.path)
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.ERROR,
                table_name="HTTP",
                message=summary,
            )
        )
        raise AuthenticationException("Unauthorized")
