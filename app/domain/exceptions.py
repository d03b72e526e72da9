"""Errors raised by services and repositories.

Each carries a client-facing message and a machine-readable code. The
HTTP layer turns them into {"error": message} bodies with a status chosen
from the error code (see app.core.exception_handlers).
"""

from typing import Any


class RecordsException(Exception):
    """Root of the application error hierarchy.

    The HTTP status comes from error_code; unknown codes map to 400.

    Attributes:
        message: Human-readable error description (returned to the client).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the client-facing error body."""
        return {"error": self.message}


class ValidationException(RecordsException):
    """Raised when input validation fails (e.g. missing required field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class PasswordMismatchException(ValidationException):
    """Raised when a password and its confirmation differ."""

    def __init__(self) -> None:
        super().__init__("Passwords do not match", field="Password2")


class AuthenticationException(RecordsException):
    """Raised when authentication fails (invalid credentials or no session)."""

    def __init__(self, message: str = "Unauthorized") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(RecordsException):
    """Raised when a requested resource is not found.

    A record owned by another tenant raises this too, so callers cannot
    tell the two cases apart.
    """

    def __init__(self, resource_type: str, resource_id: str | int | None = None) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'User', 'Client').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(RecordsException):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(
        self, message: str, error_code: str = "CONFLICT", details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, error_code, details)


class DuplicateEmailException(ConflictException):
    """Raised when an email is already registered."""

    def __init__(self) -> None:
        super().__init__("Email is already registered", "DUPLICATE_EMAIL")


class TenantCodeExhaustedException(ConflictException):
    """Raised when the allocator ran out of attempts to find a free TenantId."""

    def __init__(self, attempts: int) -> None:
        """Initialize with the number of attempts made.

        Args:
            attempts: How many candidates were drawn before giving up.
        """
        super().__init__(
            f"A unique TenantId could not be found after {attempts} tries. "
            "Please try again or contact support.",
            "TENANT_CODE_EXHAUSTED",
            {"attempts": attempts},
        )


class PersistenceException(RecordsException):
    """Raised when the database rejects an operation for a non-recoverable reason."""

    def __init__(self, message: str = "Database operation failed") -> None:
        super().__init__(message, "PERSISTENCE_ERROR")


class SqlNotConfiguredException(RecordsException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
