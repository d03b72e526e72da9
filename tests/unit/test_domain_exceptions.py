"""Tests for domain exceptions (error_code, message, details) and their HTTP mapping."""

import pytest

from app.core.exception_handlers import _ERROR_CODE_STATUS
from app.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    DuplicateEmailException,
    PasswordMismatchException,
    PersistenceException,
    RecordsException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TenantCodeExhaustedException,
    ValidationException,
)


def test_records_exception_default_error_code() -> None:
    """Base RecordsException uses class name as error_code when not provided."""
    exc = RecordsException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "RecordsException"
    assert exc.details == {}
    assert exc.to_dict() == {"error": "Something failed"}


def test_validation_exception_field() -> None:
    exc = ValidationException("Bad", field="Email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "Email"}


def test_password_mismatch_is_validation() -> None:
    exc = PasswordMismatchException()
    assert isinstance(exc, ValidationException)
    assert exc.to_dict() == {"error": "Passwords do not match"}


def test_resource_not_found_message() -> None:
    exc = ResourceNotFoundException("Client", 12)
    assert exc.message == "Client not found"
    assert exc.details == {"resource_type": "Client", "resource_id": 12}


def test_tenant_code_exhausted_message_is_actionable() -> None:
    exc = TenantCodeExhaustedException(100)
    assert isinstance(exc, ConflictException)
    assert exc.message == (
        "A unique TenantId could not be found after 100 tries. "
        "Please try again or contact support."
    )


@pytest.mark.parametrize(
    "exc,status",
    [
        (ValidationException("x"), 400),
        (AuthenticationException(), 401),
        (ResourceNotFoundException("User"), 404),
        (DuplicateEmailException(), 409),
        (TenantCodeExhaustedException(1), 409),
        (PersistenceException(), 500),
        (SqlNotConfiguredException(), 503),
    ],
)
def test_error_codes_map_to_status(exc: RecordsException, status: int) -> None:
    assert _ERROR_CODE_STATUS[exc.error_code] == status
