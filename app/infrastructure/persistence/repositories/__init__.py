"""Persistence repositories: tenant registry and tenant-scoped records."""

from app.infrastructure.persistence.repositories.client_repo import ClientRepository
from app.infrastructure.persistence.repositories.record_repo import RecordRepository
from app.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ClientRepository",
    "RecordRepository",
    "TenantRepository",
    "UserRepository",
]
