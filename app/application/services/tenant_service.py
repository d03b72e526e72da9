"""Tenant registry: creation through the code allocator, rename, lookup."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from app.application.dtos.audit import AuditEntry
from app.application.dtos.tenant import TenantResult
from app.application.services.allocator import (
    AllocationExhaustedError,
    BoundedRetryAllocator,
)
from app.application.services.audit_diff import changed_values, compute_diff
from app.application.services.audit_logger import build_message
from app.domain.enums import AuditActionType
from app.domain.exceptions import (
    ResourceNotFoundException,
    TenantCodeExhaustedException,
    ValidationException,
)
from app.shared.logging import get_logger
from app.shared.utils.generators import generate_tenant_code

if TYPE_CHECKING:
    from app.application.dtos.auth import TenantContext
    from app.application.interfaces.repositories import ITenantRepository
    from app.application.interfaces.services import IAuditLogger

logger = get_logger(__name__)

TABLE_NAME = "Tenants"


def _clean_name(tenant_name: str | None) -> str:
    name = (tenant_name or "").strip()
    if not name:
        raise ValidationException("TenantName is required", field="TenantName")
    return name


class TenantService:
    """Creates tenants with collision-safe 4-hex codes.

    Args:
        repo: Tenant repository (its uniqueness constraint is the guarantee).
        audit_logger: Best-effort audit sink.
        randbelow: Random source for codes; tests inject a scripted one.
        max_attempts: Allocation bound (100 by default).
    """

    def __init__(
        self,
        repo: ITenantRepository,
        audit_logger: IAuditLogger,
        randbelow: Callable[[int], int] = secrets.randbelow,
        max_attempts: int = 100,
    ) -> None:
        self.repo = repo
        self.audit_logger = audit_logger
        self.allocator: BoundedRetryAllocator[TenantResult] = BoundedRetryAllocator(
            draw=lambda: generate_tenant_code(randbelow),
            max_attempts=max_attempts,
            label="TenantId",
        )

    async def list_tenants(self) -> list[TenantResult]:
        return await self.repo.list_all()

    async def get_tenant(self, tenant_id: str) -> TenantResult:
        tenant = await self.repo.get(tenant_id)
        if tenant is None:
            raise ResourceNotFoundException("Tenant", tenant_id)
        return tenant

    def _entry(
        self, ctx: TenantContext | None, action: AuditActionType, message: dict[str, Any]
    ) -> AuditEntry:
        return AuditEntry(
            action=action,
            table_name=TABLE_NAME,
            user_id=ctx.user_id if ctx else None,
            tenant_id=ctx.tenant_id if ctx else None,
            tenant_user_id=ctx.tenant_user_id if ctx else None,
            message=message,
        )

    async def create_tenant(
        self, tenant_name: str | None, ctx: TenantContext | None = None
    ) -> TenantResult:
        """Allocate a fresh TenantId and insert the tenant.

        Both outcomes are audited: CREATE on success, ERROR when the
        allocator gives up or the insert fails for another reason.

        Raises:
            ValidationException: Empty name.
            TenantCodeExhaustedException: Every drawn code was taken.
        """
        name = _clean_name(tenant_name)
        try:
            tenant = await self.allocator.allocate(lambda code: self.repo.insert(code, name))
        except AllocationExhaustedError as exc:
            await self.audit_logger.log(
                self._entry(
                    ctx,
                    AuditActionType.ERROR,
                    build_message(
                        note="TENANT_CODE_EXHAUSTED",
                        context={"TenantName": name, "Attempts": exc.attempts},
                    ),
                )
            )
            raise TenantCodeExhaustedException(exc.attempts) from exc
        except Exception as exc:
            await self.audit_logger.log(
                self._entry(
                    ctx,
                    AuditActionType.ERROR,
                    build_message(
                        note="TENANT_CREATE_FAILED",
                        context={"TenantName": name, "Error": type(exc).__name__},
                    ),
                )
            )
            raise

        logger.info("Tenant %s created", tenant.tenant_id)
        await self.audit_logger.log(
            self._entry(
                ctx,
                AuditActionType.CREATE,
                build_message(updated=tenant.to_dict(), entity_id=tenant.tenant_id),
            )
        )
        return tenant

    async def rename_tenant(
        self, tenant_id: str, tenant_name: str | None, ctx: TenantContext | None = None
    ) -> TenantResult:
        """Rename a tenant; audited as UPDATE with a diff when the name changed."""
        name = _clean_name(tenant_name)
        current = await self.get_tenant(tenant_id)
        changes = compute_diff({"TenantName": current.tenant_name}, {"TenantName": name}, {})
        if not changes:
            return current
        renamed = await self.repo.rename(tenant_id, name)
        if renamed is None:
            raise ResourceNotFoundException("Tenant", tenant_id)
        existing, updated = changed_values(changes)
        await self.audit_logger.log(
            self._entry(
                ctx,
                AuditActionType.UPDATE,
                build_message(
                    existing=existing,
                    updated=updated,
                    changes=changes,
                    entity_id=tenant_id,
                ),
            )
        )
        return renamed
