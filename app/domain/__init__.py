"""Domain layer: enums, the record field registry, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import AuditActionType, AuditColumnLayout, FieldKind
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
from app.domain.record_fields import CLIENT_ENTITY, USER_ENTITY, EntityDefinition, FieldSpec

__all__ = [
    # Enums
    "AuditActionType",
    "AuditColumnLayout",
    "FieldKind",
    # Exceptions
    "AuthenticationException",
    "ConflictException",
    "DuplicateEmailException",
    "PasswordMismatchException",
    "PersistenceException",
    "RecordsException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "TenantCodeExhaustedException",
    "ValidationException",
    # Record fields
    "CLIENT_ENTITY",
    "USER_ENTITY",
    "EntityDefinition",
    "FieldSpec",
]
