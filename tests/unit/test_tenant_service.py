"""Unit tests for TenantService (code allocation, audits, rename)."""

import pytest

from app.application.services.audit_logger import AuditLogger
from app.application.services.tenant_service import TenantService
from app.domain.enums import AuditActionType
from app.domain.exceptions import (
    PersistenceException,
    ResourceNotFoundException,
    TenantCodeExhaustedException,
)
from tests.fakes import FakeTenantRepository, RecordingAuditWriter, scripted


class _BrokenTenantRepository(FakeTenantRepository):
    async def insert(self, tenant_id: str, tenant_name: str):
        self.insert_attempts.append(tenant_id)
        raise PersistenceException()


async def test_create_tenant_after_collision() -> None:
    """'00ab' exists, so the second draw '3f2c' is used."""
    repo = FakeTenantRepository(("00ab", "Existing"))
    writer = RecordingAuditWriter()
    service = TenantService(repo, AuditLogger(writer), randbelow=scripted(0x00AB, 0x3F2C))

    tenant = await service.create_tenant("Acme")

    assert tenant.to_dict() == {"TenantId": "3f2c", "TenantName": "Acme"}
    assert repo.tenants == {"00ab": "Existing", "3f2c": "Acme"}
    assert writer.of(AuditActionType.CREATE, "Tenants")[0].message["EntityId"] == "3f2c"


async def test_exhaustion_is_audited_and_raised() -> None:
    repo = FakeTenantRepository(("00ab", "Existing"))
    writer = RecordingAuditWriter()
    service = TenantService(
        repo, AuditLogger(writer), randbelow=lambda _upper: 0x00AB, max_attempts=4
    )
    with pytest.raises(TenantCodeExhaustedException) as exc_info:
        await service.create_tenant("Acme")
    assert exc_info.value.details == {"attempts": 4}
    assert len(repo.insert_attempts) == 4
    entry = writer.of(AuditActionType.ERROR, "Tenants")[0]
    assert entry.message["Note"] == "TENANT_CODE_EXHAUSTED"
    assert entry.message["Attempts"] == 4


async def test_hard_failure_aborts_without_retry() -> None:
    repo = _BrokenTenantRepository()
    writer = RecordingAuditWriter()
    service = TenantService(repo, AuditLogger(writer))
    with pytest.raises(PersistenceException):
        await service.create_tenant("Acme")
    assert len(repo.insert_attempts) == 1
    assert writer.of(AuditActionType.ERROR)[0].message["Note"] == "TENANT_CREATE_FAILED"


async def test_rename_same_name_is_not_audited() -> None:
    repo = FakeTenantRepository(("00ab", "Acme"))
    writer = RecordingAuditWriter()
    service = TenantService(repo, AuditLogger(writer))
    assert (await service.rename_tenant("00ab", " Acme ")).tenant_name == "Acme"
    assert writer.entries == []


async def test_rename_unknown_tenant() -> None:
    service = TenantService(FakeTenantRepository(), AuditLogger(RecordingAuditWriter()))
    with pytest.raises(ResourceNotFoundException):
        await service.rename_tenant("ffff", "Nope")
