"""Clients API: tenant-scoped CRUD (no delete)."""

from typing import Any

from fastapi import APIRouter, Request

from app.api.dependencies import (
    ClientServiceDep,
    PhotoStorageDep,
    TenantContextDep,
    read_submitted,
    stored_photo,
)
from app.schemas.user import RecordCreatedResponse, RecordUpdatedResponse

router = APIRouter()


@router.get("")
async def list_clients(ctx: TenantContextDep, service: ClientServiceDep) -> list[dict[str, Any]]:
    return await service.list(ctx)


@router.get("/{client_id}")
async def get_client(
    client_id: int, ctx: TenantContextDep, service: ClientServiceDep
) -> dict[str, Any]:
    """Return one client; another tenant's client is reported as not found."""
    return await service.get(ctx, client_id)


@router.post("", status_code=201, response_model=RecordCreatedResponse)
async def create_client(
    request: Request,
    ctx: TenantContextDep,
    service: ClientServiceDep,
    storage: PhotoStorageDep,
) -> dict[str, Any]:
    fields, photo = await read_submitted(request)
    async with stored_photo(storage, ctx, photo) as photo_path:
        created = await service.create(ctx, fields, photo=photo_path)
    return created.to_dict()


@router.put("/{client_id}", response_model=RecordUpdatedResponse)
async def update_client(
    client_id: int,
    request: Request,
    ctx: TenantContextDep,
    service: ClientServiceDep,
    storage: PhotoStorageDep,
) -> dict[str, Any]:
    fields, photo = await read_submitted(request)
    async with stored_photo(storage, ctx, photo) as photo_path:
        result = await service.update(ctx, client_id, fields, photo=photo_path)
    return result.to_dict()
