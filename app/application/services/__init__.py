"""Application services: records, tenants, authentication, audit."""

from app.application.services.allocator import (
    AllocationExhaustedError,
    BoundedRetryAllocator,
    CandidateCollision,
)
from app.application.services.audit_logger import AuditLogger, build_message
from app.application.services.auth_service import SessionAuthenticator
from app.application.services.record_service import RecordService
from app.application.services.tenant_service import TenantService

__all__ = [
    "AllocationExhaustedError",
    "AuditLogger",
    "BoundedRetryAllocator",
    "CandidateCollision",
    "RecordService",
    "SessionAuthenticator",
    "TenantService",
    "build_message",
]
