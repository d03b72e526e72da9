"""Tenant repository. Returns application DTOs."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.tenant import TenantResult
from app.application.services.allocator import CandidateCollision
from app.domain.exceptions import PersistenceException
from app.infrastructure.persistence.models.tenant import TENANT_PK_CONSTRAINT, Tenant
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    violated_constraint,
)
from app.shared.logging import get_logger

logger = get_logger(__name__)


def _tenant_to_result(t: Tenant) -> TenantResult:
    """Map ORM Tenant to application TenantResult."""
    return TenantResult(tenant_id=t.tenant_id, tenant_name=t.tenant_name)


class TenantRepository(BaseRepository[Tenant]):
    """Tenant registry. Tenants are never deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant)

    async def list_all(self) -> list[TenantResult]:
        result = await self.db.execute(select(Tenant).order_by(Tenant.tenant_name))
        return [_tenant_to_result(t) for t in result.scalars().all()]

    async def get(self, tenant_id: str) -> TenantResult | None:
        tenant = await self.db.get(Tenant, tenant_id)
        return _tenant_to_result(tenant) if tenant else None

    async def insert(self, tenant_id: str, tenant_name: str) -> TenantResult:
        """Insert inside a savepoint; a primary-key violation is a collision."""
        tenant = Tenant(tenant_id=tenant_id, tenant_name=tenant_name)
        try:
            async with self.db.begin_nested():
                self.db.add(tenant)
                await self.db.flush()
        except IntegrityError as exc:
            if violated_constraint(exc, TENANT_PK_CONSTRAINT):
                raise CandidateCollision(tenant_id) from exc
            logger.error("Integrity error inserting tenant: %s", exc.orig)
            raise PersistenceException() from exc
        return _tenant_to_result(tenant)

    async def rename(self, tenant_id: str, tenant_name: str) -> TenantResult | None:
        tenant = await self.db.get(Tenant, tenant_id)
        if tenant is None:
            return None
        tenant.tenant_name = tenant_name
        await self.db.flush()
        return _tenant_to_result(tenant)
