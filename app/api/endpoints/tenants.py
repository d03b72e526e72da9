"""Tenants API: registry listing, lookup, creation (allocated TenantId) and rename."""

from fastapi import APIRouter

from app.api.dependencies import TenantContextDep, TenantServiceDep
from app.schemas.tenant import TenantResponse, TenantWriteRequest

router = APIRouter()


@router.get("", response_model=list[TenantResponse])
async def list_tenants(ctx: TenantContextDep, service: TenantServiceDep) -> list[dict[str, str]]:
    return [t.to_dict() for t in await service.list_tenants()]


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: str, ctx: TenantContextDep, service: TenantServiceDep
) -> dict[str, str]:
    return (await service.get_tenant(tenant_id)).to_dict()


@router.post("", status_code=201, response_model=TenantResponse)
async def create_tenant(
    body: TenantWriteRequest, ctx: TenantContextDep, service: TenantServiceDep
) -> dict[str, str]:
    """Create a tenant; the 4-hex TenantId is generated, never taken from the body."""
    tenant = await service.create_tenant(body.tenant_name, ctx)
    return tenant.to_dict()


@router.put("/{tenant_id}", response_model=TenantResponse)
async def rename_tenant(
    tenant_id: str,
    body: TenantWriteRequest,
    ctx: TenantContextDep,
    service: TenantServiceDep,
) -> dict[str, str]:
    tenant = await service.rename_tenant(tenant_id, body.tenant_name, ctx)
    return tenant.to_dict()
