"""Identifier generators (tenant codes, tenant user handles, session tokens)."""

import secrets
from collections.abc import Callable

RandBelow = Callable[[int], int]

TENANT_CODE_SPACE = 0x10000
TENANT_USER_SUFFIX_SPACE = 0x100000000


def generate_tenant_code(randbelow: RandBelow = secrets.randbelow) -> str:
    """Draw a random 4-hex-character tenant code (e.g. '3f2c')."""
    return f"{randbelow(TENANT_CODE_SPACE):04x}"


def generate_tenant_user_id(
    tenant_id: str, randbelow: RandBelow = secrets.randbelow
) -> str:
    """Draw a TenantUserId of the form '<TenantId>:<8 hex>'.

    Args:
        tenant_id: Owning tenant code.
        randbelow: Random source; tests inject a deterministic one.

    Returns:
        A new candidate handle (uniqueness is enforced by the database).
    """
    return f"{tenant_id}:{randbelow(TENANT_USER_SUFFIX_SPACE):08x}"


def generate_session_token() -> str:
    """Return an unguessable opaque session token."""
    return secrets.token_urlsafe(32)


def generate_upload_name(extension: str = "") -> str:
    """Return a random file name for an uploaded photo, keeping the extension."""
    return f"{secrets.token_hex(16)}{extension}"
