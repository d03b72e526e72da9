"""Domain enumerations for the tenant records application.

Enums represent fixed sets of domain values (audit action types, audit
table column layouts, record field kinds).
"""

from enum import Enum


class AuditActionType(str, Enum):
    """Action recorded in the ActionType column of the audit table."""

    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    FAILED_LOGIN = "FAILED_LOGIN"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ERROR = "ERROR"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid action values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [action.value for action in cls]


class AuditColumnLayout(str, Enum):
    """Which tenant-identifier columns a deployed audit table carries.

    COMPANY: CompanyId/CompanyUserId (oldest deployments).
    TENANT: TenantId/TenantUserId (current schema).
    NONE: neither pair; tenant identity is only kept in the message.
    """

    COMPANY = "company"
    TENANT = "tenant"
    NONE = "none"


class FieldKind(str, Enum):
    """How a record field is normalized for storage and for diffs."""

    TEXT = "text"
    BIT = "bit"
    DATE = "date"
    SECRET = "secret"
