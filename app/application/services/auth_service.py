"""Session authentication: login, logout and password changes.

Failed logins are reported with one generic outcome whether the email is
unknown, the account is disabled or the password is wrong, so responses
cannot be used to discover accounts. Every attempt is audited.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.application.dtos.audit import AuditEntry
from app.application.dtos.auth import (
    Authenticated,
    InvalidCredentials,
    LoginOutcome,
    MustSetPassword,
    TenantContext,
)
from app.application.services.audit_logger import build_message
from app.application.services.session_identity import normalize_session_identity
from app.domain.enums import AuditActionType
from app.domain.exceptions import (
    AuthenticationException,
    PasswordMismatchException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.logging import get_logger
from app.shared.utils.normalization import MASK

if TYPE_CHECKING:
    from app.application.dtos.user import UserCredentials
    from app.application.interfaces.repositories import IUserRepository
    from app.application.interfaces.services import (
        IAuditLogger,
        IPasswordHasher,
        ISessionStore,
    )

logger = get_logger(__name__)

AUTH_TABLE = "Auth"
USERS_TABLE = "Users"


def _context_for(user: UserCredentials) -> TenantContext:
    return TenantContext(
        user_id=user.id,
        email=user.email,
        tenant_id=user.tenant_id,
        tenant_user_id=user.tenant_user_id,
    )


class SessionAuthenticator:
    """Login/logout/password change over the Users table and the session store.

    Args:
        users: User repository (credential lookups).
        hasher: Password hasher.
        sessions: Server-side session store.
        audit_logger: Best-effort audit sink.
        setup_tokens: Short-lived store for one-time first-login tokens.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: IPasswordHasher,
        sessions: ISessionStore,
        audit_logger: IAuditLogger,
        *,
        setup_tokens: ISessionStore,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.sessions = sessions
        self.audit_logger = audit_logger
        self.setup_tokens = setup_tokens

    async def _failed(self, email: str, user: UserCredentials | None, reason: str) -> InvalidCredentials:
        logger.info("Failed login (%s)", reason)
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.FAILED_LOGIN,
                table_name=AUTH_TABLE,
                user_id=user.id if user else None,
                tenant_id=user.tenant_id if user else None,
                tenant_user_id=user.tenant_user_id if user else None,
                message=build_message(updated={"Email": email, "Password": MASK}),
            )
        )
        return InvalidCredentials()

    async def login(
        self, email: str | None, password: str | None, current_token: str | None = None
    ) -> LoginOutcome:
        """Check credentials and open a session.

        Args:
            email: Submitted email (global lookup, no tenant).
            password: Submitted password.
            current_token: Session token the request arrived with, if any;
                it is invalidated when a new session is issued.

        Returns:
            Authenticated with the new token, MustSetPassword when the user
            has no password yet (no session is created, only a one-time
            setup token), or InvalidCredentials.

        Raises:
            ValidationException: Email or password missing.
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationException("Email and password required")

        user = await self.users.get_credentials_by_email(email)
        if user is None:
            await self.hasher.verify_dummy(password)
            return await self._failed(email, None, "unknown email")
        if not user.active:
            return await self._failed(email, user, "account disabled")
        if user.must_set_password:
            await self.audit_logger.log(
                AuditEntry(
                    action=AuditActionType.LOGIN,
                    table_name=AUTH_TABLE,
                    user_id=user.id,
                    tenant_id=user.tenant_id,
                    tenant_user_id=user.tenant_user_id,
                    message=build_message(
                        note="PASSWORD_CHANGE_REQUIRED", updated={"Email": user.email}
                    ),
                )
            )
            setup_token = self.setup_tokens.create({"userId": user.id})
            return MustSetPassword(user_id=user.id, setup_token=setup_token)
        if not await self.hasher.verify(password, user.password_hash):
            return await self._failed(email, user, "password mismatch")

        context = _context_for(user)
        token = self.sessions.regenerate(current_token, context.to_session())
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.LOGIN,
                table_name=AUTH_TABLE,
                user_id=user.id,
                tenant_id=user.tenant_id,
                tenant_user_id=user.tenant_user_id,
                message=build_message(updated={"Email": user.email}),
            )
        )
        return Authenticated(context=context, token=token)

    async def logout(self, token: str | None) -> None:
        """Destroy the session (if any) and audit LOGOUT. Never fails for anonymous callers."""
        data: dict[str, Any] = self.sessions.destroy(token) or {}
        identity = normalize_session_identity(data)
        user_id = identity["userId"]
        email = identity["email"]
        if not email and user_id is not None:
            try:
                user = await self.users.get_credentials(int(user_id))
            except Exception:
                logger.warning("Could not resolve email for logout audit", exc_info=True)
                user = None
            email = user.email if user else None
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.LOGOUT,
                table_name=AUTH_TABLE,
                user_id=user_id,
                tenant_id=identity["tenantId"],
                tenant_user_id=identity["tenantUserId"],
                message=build_message(updated={"Email": email}),
            )
        )

    async def change_password(
        self,
        user_id: int,
        new_password: str | None,
        confirm_password: str | None,
        updated_by: str = "self",
        actor: TenantContext | None = None,
        tenant_id: str | None = None,
        first_login: bool = False,
    ) -> None:
        """Hash and store a new password.

        Args:
            user_id: Target user.
            new_password: New plaintext password.
            confirm_password: Must equal new_password.
            updated_by: Stored in UpdatedBy ("self" for own changes).
            actor: Caller's context, for the audit entry.
            tenant_id: When given, the user must belong to this tenant.
            first_login: Only allow active users that have no password yet.

        Raises:
            PasswordMismatchException: Values differ.
            ValidationException: Empty password.
            ResourceNotFoundException: No such user (in the tenant).
            AuthenticationException: first_login for a disabled account.
        """
        if (new_password or "") != (confirm_password or ""):
            raise PasswordMismatchException()
        if not new_password:
            raise ValidationException("Password is required", field="Password")
        user = await self.users.get_credentials(user_id)
        if user is None or (tenant_id is not None and user.tenant_id != tenant_id):
            raise ResourceNotFoundException("User", user_id)
        if first_login and not user.active:
            raise AuthenticationException("Invalid credentials")
        if first_login and not user.must_set_password:
            raise ValidationException("Password has already been set")

        password_hash = await self.hasher.hash(new_password)
        await self.users.set_password(user_id, password_hash, updated_by)
        logger.info("Password changed for user %s", user_id)
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.UPDATE,
                table_name=USERS_TABLE,
                user_id=actor.user_id if actor else user_id,
                tenant_id=user.tenant_id,
                tenant_user_id=actor.tenant_user_id if actor else user.tenant_user_id,
                message=build_message(
                    note="PASSWORD_CHANGE",
                    existing={"Password": MASK},
                    updated={"Password": MASK},
                    entity_id=user_id,
                ),
            )
        )

    async def set_first_password(
        self,
        setup_token: str | None,
        new_password: str | None,
        confirm_password: str | None,
    ) -> int:
        """Set the first password of the user a login handed a setup token to.

        The token is single use and the user id comes only from it. Input
        errors are reported before the token is consumed, so the user can
        correct a typo without logging in again.

        Returns:
            The user id the password was set for.

        Raises:
            PasswordMismatchException: Values differ.
            ValidationException: Empty password, or a password already exists.
            AuthenticationException: Token missing, expired or already used;
                or the account is disabled.
        """
        if (new_password or "") != (confirm_password or ""):
            raise PasswordMismatchException()
        if not new_password:
            raise ValidationException("Password is required", field="Password")
        data = self.setup_tokens.destroy(setup_token)
        if not data or data.get("userId") is None:
            raise AuthenticationException("Password setup has expired, please log in again")
        user_id = int(data["userId"])
        await self.change_password(
            user_id, new_password, confirm_password, updated_by="self", first_login=True
        )
        return user_id
