"""Application DTOs (no ORM dependency)."""

from app.application.dtos.audit import AuditEntry
from app.application.dtos.auth import (
    Authenticated,
    InvalidCredentials,
    LoginOutcome,
    MustSetPassword,
    TenantContext,
)
from app.application.dtos.record import Record, RecordCreated, RecordUpdated
from app.application.dtos.tenant import TenantResult
from app.application.dtos.user import UserCredentials

__all__ = [
    "AuditEntry",
    "Authenticated",
    "InvalidCredentials",
    "LoginOutcome",
    "MustSetPassword",
    "Record",
    "RecordCreated",
    "RecordUpdated",
    "TenantContext",
    "TenantResult",
    "UserCredentials",
]
