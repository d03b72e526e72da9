"""DTOs for user credential lookups (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserCredentials:
    """What login and password change need to know about a user.

    password_hash is None or '' when the user has never set a password.
    """

    id: int
    email: str
    password_hash: str | None
    active: bool
    tenant_id: str
    tenant_user_id: str

    @property
    def must_set_password(self) -> bool:
        return not self.password_hash
