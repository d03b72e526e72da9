"""Generic tenant-scoped repository for Users and Clients.

Every read and write filters on TenantId, so a record owned by another
tenant behaves exactly like a missing one. Rows are returned as dicts
keyed by column name; credential columns are left out.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.record import Record
from app.application.services.allocator import CandidateCollision
from app.domain.enums import FieldKind
from app.domain.exceptions import DuplicateEmailException, PersistenceException
from app.domain.record_fields import EntityDefinition
from app.infrastructure.persistence.models.mixins import TenantRecordModel
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    violated_constraint,
)
from app.shared.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_PROVENANCE = (
    ("Id", "id"),
    ("TenantId", "tenant_id"),
    ("TenantUserId", "tenant_user_id"),
    ("CreatedBy", "created_by"),
    ("CreatedDate", "created_date"),
    ("UpdatedBy", "updated_by"),
    ("UpdatedDate", "updated_date"),
)


ModelType = TypeVar("ModelType", bound=TenantRecordModel)


class RecordRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Tenant-scoped CRUD for one record kind.

    Args:
        db: Request session (transaction owned by the caller).
        model: ORM class (User or Client).
        entity: Field registry for the kind.
        email_constraint: Unique constraint name guarding Email.
        handle_constraint: Unique constraint name guarding TenantUserId.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        entity: EntityDefinition,
        email_constraint: str,
        handle_constraint: str,
    ) -> None:
        super().__init__(db, model)
        self.entity = entity
        self.email_constraint = email_constraint
        self.handle_constraint = handle_constraint

    def _to_record(self, obj: ModelType) -> Record:
        row: Record = {name: getattr(obj, attr) for name, attr in _PROVENANCE}
        for spec in self.entity.fields:
            if spec.kind != FieldKind.SECRET:
                row[spec.name] = getattr(obj, spec.attr)
        return row

    def _attr(self, column: str) -> str:
        return self.entity.spec(column).attr

    async def _get_entity(self, tenant_id: str, record_id: int) -> ModelType | None:
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == record_id, model.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self, tenant_id: str) -> list[Record]:
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.tenant_id == tenant_id).order_by(model.id.desc())
        )
        return [self._to_record(obj) for obj in result.scalars().all()]

    async def get(self, tenant_id: str, record_id: int) -> Record | None:
        obj = await self._get_entity(tenant_id, record_id)
        return self._to_record(obj) if obj is not None else None

    async def insert(
        self,
        tenant_id: str,
        tenant_user_id: str,
        values: dict[str, Any],
        created_by: str,
    ) -> int:
        """Insert inside a savepoint so a collision leaves the transaction usable."""
        obj = self.model(
            tenant_id=tenant_id,
            tenant_user_id=tenant_user_id,
            created_by=created_by,
            **{self._attr(name): value for name, value in values.items()},
        )
        try:
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
        except IntegrityError as exc:
            self._raise_for_integrity(exc, tenant_user_id)
        return obj.id

    async def update(
        self,
        tenant_id: str,
        record_id: int,
        values: dict[str, Any],
        updated_by: str,
    ) -> bool:
        obj = await self._get_entity(tenant_id, record_id)
        if obj is None:
            return False
        for name, value in values.items():
            setattr(obj, self._attr(name), value)
        obj.updated_by = updated_by
        obj.updated_date = utc_now()
        try:
            async with self.db.begin_nested():
                await self.db.flush()
        except IntegrityError as exc:
            self._raise_for_integrity(exc, obj.tenant_user_id)
        return True

    async def delete(self, tenant_id: str, record_id: int) -> bool:
        model: Any = self.model
        result = await self.db.execute(
            delete(self.model).where(model.id == record_id, model.tenant_id == tenant_id)
        )
        return (result.rowcount or 0) > 0

    def _raise_for_integrity(self, exc: IntegrityError, tenant_user_id: str) -> None:
        constraint = violated_constraint(exc, self.handle_constraint, self.email_constraint)
        if constraint == self.handle_constraint:
            raise CandidateCollision(tenant_user_id) from exc
        if constraint == self.email_constraint:
            raise DuplicateEmailException() from exc
        logger.error("Integrity error writing %s: %s", self.entity.table_name, exc.orig)
        raise PersistenceException() from exc
