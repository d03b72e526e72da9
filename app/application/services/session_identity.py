"""Compatibility adapter for identity fields stored in sessions.

Sessions written by older releases carry Company* identity fields
(companyId, CompanyUserId, ...). They are translated to the canonical
tenantId/tenantUserId shape here, once, when a session is loaded;
nothing downstream reads the legacy names.
"""

from typing import Any

# canonical key -> accepted spellings, canonical first
_IDENTITY_ALIASES: dict[str, tuple[str, ...]] = {
    "userId": ("userId", "UserId", "id", "Id"),
    "email": ("email", "Email"),
    "tenantId": ("tenantId", "TenantId", "companyId", "CompanyId"),
    "tenantUserId": ("tenantUserId", "TenantUserId", "companyUserId", "CompanyUserId"),
}
_ALL_ALIASES = frozenset(alias for aliases in _IDENTITY_ALIASES.values() for alias in aliases)


def normalize_session_identity(data: dict[str, Any]) -> dict[str, Any]:
    """Return session data with identity fields under their canonical names.

    Canonical names win over legacy ones when both are present; legacy keys
    are dropped from the result.

    Args:
        data: Raw session payload.

    Returns:
        New dict with userId, email, tenantId and tenantUserId (missing ones None).
    """
    normalized = {key: value for key, value in data.items() if key not in _ALL_ALIASES}
    for canonical, aliases in _IDENTITY_ALIASES.items():
        normalized[canonical] = next(
            (data[alias] for alias in aliases if data.get(alias) not in (None, "")),
            None,
        )
    return normalized
