"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.audit_record import AuditRecord
from app.infrastructure.persistence.models.client import Client
from app.infrastructure.persistence.models.mixins import (
    PersonMixin,
    ProvenanceMixin,
    SerialIdMixin,
    TenantMixin,
    TenantRecordModel,
)
from app.infrastructure.persistence.models.tenant import Tenant
from app.infrastructure.persistence.models.user import User

__all__ = [
    "AuditRecord",
    "Client",
    "PersonMixin",
    "ProvenanceMixin",
    "SerialIdMixin",
    "Tenant",
    "TenantMixin",
    "TenantRecordModel",
    "User",
]
