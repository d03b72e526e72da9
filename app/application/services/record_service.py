"""Tenant-scoped record service for Users and Clients.

One implementation serves both kinds; the EntityDefinition says which
columns exist and how each is normalized. Every operation is scoped by
the caller's TenantContext, never by identifiers taken from the body,
and every mutation is written to the audit trail.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from app.application.dtos.audit import AuditEntry
from app.application.dtos.record import Record, RecordCreated, RecordUpdated
from app.application.services.allocator import (
    AllocationExhaustedError,
    BoundedRetryAllocator,
)
from app.application.services.audit_diff import (
    changed_values,
    compute_diff,
    masked_snapshot,
)
from app.application.services.audit_logger import build_message
from app.domain.enums import AuditActionType, FieldKind
from app.domain.exceptions import (
    ConflictException,
    PasswordMismatchException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.record_fields import EntityDefinition
from app.shared.logging import get_logger
from app.shared.utils.datetime import date_or_none
from app.shared.utils.generators import generate_tenant_user_id
from app.shared.utils.normalization import bit_from, norm_str

if TYPE_CHECKING:
    from app.application.dtos.auth import TenantContext
    from app.application.interfaces.repositories import IRecordRepository
    from app.application.interfaces.services import IAuditLogger, IPasswordHasher

logger = get_logger(__name__)

_CONFIRM_KEYS = ("Password2", "password2", "ConfirmPassword", "confirmPassword")


def confirmation_from(submitted: Mapping[str, Any]) -> Any:
    """Return the submitted password confirmation, if any."""
    for key in _CONFIRM_KEYS:
        if key in submitted:
            return submitted[key]
    return None


class RecordService:
    """CRUD for one record kind.

    Args:
        entity: Field registry of the kind.
        repo: Tenant-scoped repository.
        audit_logger: Best-effort audit sink.
        hasher: Password hasher.
        randbelow: Random source for TenantUserId suffixes.
        max_attempts: Allocation bound for TenantUserId.
    """

    def __init__(
        self,
        entity: EntityDefinition,
        repo: IRecordRepository,
        audit_logger: IAuditLogger,
        hasher: IPasswordHasher,
        randbelow: Callable[[int], int] = secrets.randbelow,
        max_attempts: int = 100,
    ) -> None:
        self.entity = entity
        self.repo = repo
        self.audit_logger = audit_logger
        self.hasher = hasher
        self.randbelow = randbelow
        self.max_attempts = max_attempts

    async def list(self, ctx: TenantContext) -> list[Record]:
        return await self.repo.list_all(ctx.tenant_id)

    async def get(self, ctx: TenantContext, record_id: int) -> Record:
        record = await self.repo.get(ctx.tenant_id, record_id)
        if record is None:
            raise ResourceNotFoundException(self.entity.label, record_id)
        return record

    def _normalize(self, values: dict[str, Any]) -> dict[str, Any]:
        """Coerce submitted values to their stored form (bits, dates, empty text -> None)."""
        normalized: dict[str, Any] = {}
        for name, value in values.items():
            kind = self.entity.spec(name).kind
            if kind == FieldKind.BIT:
                normalized[name] = bit_from(value)
            elif kind == FieldKind.DATE:
                normalized[name] = date_or_none(value, field=name)
            elif kind == FieldKind.SECRET:
                normalized[name] = value if value not in (None, "") else None
            else:
                normalized[name] = norm_str(value) or None
        return normalized

    def _check_password(self, values: dict[str, Any], submitted: Mapping[str, Any]) -> None:
        password = values.get("Password")
        if password is None:
            return
        confirm = confirmation_from(submitted)
        if confirm is not None and norm_str(confirm) != norm_str(password):
            raise PasswordMismatchException()

    async def _hash_password(self, values: dict[str, Any]) -> None:
        if values.get("Password") is not None:
            values["Password"] = await self.hasher.hash(str(values["Password"]))

    async def create(
        self,
        ctx: TenantContext,
        submitted: Mapping[str, Any],
        photo: str | None = None,
    ) -> RecordCreated:
        """Validate, normalize and insert a new record in the caller's tenant.

        Active defaults to 0 when not submitted. An empty or missing
        Password stores NULL, which forces the first-login password flow.
        TenantUserId is allocated with bounded retry on collision.

        Raises:
            ValidationException: A required field is missing.
            PasswordMismatchException: Password2 differs from Password.
            DuplicateEmailException: Email already registered.
        """
        raw = self.entity.extract(submitted)
        if photo is not None:
            raw["Photo"] = photo
        missing = [name for name in self.entity.required if not norm_str(raw.get(name)).strip()]
        if missing:
            raise ValidationException(
                f"Missing required fields: {', '.join(missing)}", field=missing[0]
            )
        values = self._normalize(raw)
        values.setdefault("Active", 0)
        self._check_password(values, submitted)
        audit_values = masked_snapshot(values, self.entity.kinds)
        await self._hash_password(values)

        created_by = ctx.tenant_user_id or "system"
        allocator: BoundedRetryAllocator[tuple[int, str]] = BoundedRetryAllocator(
            draw=lambda: generate_tenant_user_id(ctx.tenant_id, self.randbelow),
            max_attempts=self.max_attempts,
            label=f"{self.entity.label} TenantUserId",
        )

        async def _insert(candidate: str) -> tuple[int, str]:
            new_id = await self.repo.insert(ctx.tenant_id, candidate, values, created_by)
            return new_id, candidate

        try:
            new_id, tenant_user_id = await allocator.allocate(_insert)
        except AllocationExhaustedError as exc:
            raise ConflictException(
                f"A unique TenantUserId could not be found after {exc.attempts} tries. "
                "Please try again or contact support.",
                "TENANT_USER_ID_EXHAUSTED",
            ) from exc

        logger.info("%s %s created in tenant %s", self.entity.label, new_id, ctx.tenant_id)
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.CREATE,
                table_name=self.entity.table_name,
                user_id=ctx.user_id,
                tenant_id=ctx.tenant_id,
                tenant_user_id=ctx.tenant_user_id,
                message=build_message(
                    updated={**audit_values, "TenantUserId": tenant_user_id},
                    entity_id=new_id,
                ),
            )
        )
        return RecordCreated(id=new_id, tenant_user_id=tenant_user_id)

    async def update(
        self,
        ctx: TenantContext,
        record_id: int,
        submitted: Mapping[str, Any],
        photo: str | None = None,
    ) -> RecordUpdated:
        """Merge submitted fields into the stored record.

        Only submitted fields are considered. When none of them differs from
        the stored value nothing is written and nothing is audited.

        Raises:
            ValidationException: A required field is submitted empty.
            ResourceNotFoundException: No such record in the caller's tenant.
            PasswordMismatchException: Password2 differs from Password.
        """
        existing = await self.repo.get(ctx.tenant_id, record_id)
        if existing is None:
            raise ResourceNotFoundException(self.entity.label, record_id)
        raw = self.entity.extract(submitted)
        if photo is not None:
            raw["Photo"] = photo
        blank = [
            name for name in self.entity.required if name in raw and not norm_str(raw[name]).strip()
        ]
        if blank:
            raise ValidationException(
                f"Required fields cannot be empty: {', '.join(blank)}", field=blank[0]
            )
        values = self._normalize(raw)
        if values.get("Password") is None:
            values.pop("Password", None)
        self._check_password(values, submitted)

        changes = compute_diff(existing, values, self.entity.kinds)
        if not changes:
            return RecordUpdated()

        to_write = {name: values[name] for name in changes}
        await self._hash_password(to_write)
        updated_by = ctx.tenant_user_id or "system"
        found = await self.repo.update(ctx.tenant_id, record_id, to_write, updated_by)
        if not found:
            raise ResourceNotFoundException(self.entity.label, record_id)

        existing_values, updated_values = changed_values(changes)
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.UPDATE,
                table_name=self.entity.table_name,
                user_id=ctx.user_id,
                tenant_id=ctx.tenant_id,
                tenant_user_id=ctx.tenant_user_id,
                message=build_message(
                    existing=existing_values,
                    updated=updated_values,
                    changes=changes,
                    entity_id=record_id,
                ),
            )
        )
        return RecordUpdated(changes=changes)

    async def remove(self, ctx: TenantContext, record_id: int) -> None:
        """Hard delete (only for kinds that allow it).

        Raises:
            ResourceNotFoundException: No such record in the caller's tenant.
        """
        if not self.entity.deletable:
            raise ValidationException(f"{self.entity.label} records cannot be deleted")
        existing = await self.repo.get(ctx.tenant_id, record_id)
        if existing is None:
            raise ResourceNotFoundException(self.entity.label, record_id)
        await self.repo.delete(ctx.tenant_id, record_id)
        snapshot = masked_snapshot(
            {spec.name: existing.get(spec.name) for spec in self.entity.fields if spec.name in existing},
            self.entity.kinds,
        )
        await self.audit_logger.log(
            AuditEntry(
                action=AuditActionType.DELETE,
                table_name=self.entity.table_name,
                user_id=ctx.user_id,
                tenant_id=ctx.tenant_id,
                tenant_user_id=ctx.tenant_user_id,
                message=build_message(existing=snapshot, entity_id=record_id),
            )
        )
