"""Pydantic request/response schemas for the API."""

from app.schemas.auth import (
    ChangePasswordRequiredResponse,
    FirstLoginPasswordRequest,
    LoginRequest,
    LoginResponse,
    OkResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.tenant import TenantAdminRequest, TenantResponse, TenantWriteRequest
from app.schemas.user import (
    PasswordChangeRequest,
    RecordCreatedResponse,
    RecordUpdatedResponse,
    SuccessResponse,
)

__all__ = [
    "ChangePasswordRequiredResponse",
    "FirstLoginPasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "OkResponse",
    "PasswordChangeRequest",
    "RecordCreatedResponse",
    "RecordUpdatedResponse",
    "SuccessResponse",
    "TenantAdminRequest",
    "TenantResponse",
    "TenantWriteRequest",
]
