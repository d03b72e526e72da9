"""Users API: tenant-scoped CRUD, own record and password change.

Accepts JSON or multipart form bodies; a multipart file field "photo" is
stored under the caller's tenant.
"""

from typing import Any

from fastapi import APIRouter, Request

from app.api.dependencies import (
    AuthenticatorDep,
    PhotoStorageDep,
    TenantContextDep,
    UserServiceDep,
    read_submitted,
    stored_photo,
)
from app.schemas.user import (
    PasswordChangeRequest,
    RecordCreatedResponse,
    RecordUpdatedResponse,
    SuccessResponse,
)

router = APIRouter()


@router.get("")
async def list_users(ctx: TenantContextDep, service: UserServiceDep) -> list[dict[str, Any]]:
    """List the caller's tenant users, newest first."""
    return await service.list(ctx)


@router.get("/me")
async def get_me(ctx: TenantContextDep, service: UserServiceDep) -> dict[str, Any]:
    """Return the logged-in user's own record."""
    return await service.get(ctx, int(ctx.user_id))


@router.get("/{user_id}")
async def get_user(
    user_id: int, ctx: TenantContextDep, service: UserServiceDep
) -> dict[str, Any]:
    """Return one user; 404 when it does not exist in the caller's tenant."""
    return await service.get(ctx, user_id)


@router.post("", status_code=201, response_model=RecordCreatedResponse)
async def create_user(
    request: Request,
    ctx: TenantContextDep,
    service: UserServiceDep,
    storage: PhotoStorageDep,
) -> dict[str, Any]:
    """Create a user in the caller's tenant. Without Password the user must set one at first login."""
    fields, photo = await read_submitted(request)
    async with stored_photo(storage, ctx, photo) as photo_path:
        created = await service.create(ctx, fields, photo=photo_path)
    return created.to_dict()


@router.put("/{user_id}", response_model=RecordUpdatedResponse)
@router.post("/{user_id}", response_model=RecordUpdatedResponse)
async def update_user(
    user_id: int,
    request: Request,
    ctx: TenantContextDep,
    service: UserServiceDep,
    storage: PhotoStorageDep,
) -> dict[str, Any]:
    """Merge submitted fields into the user (POST is kept as an alias of PUT)."""
    fields, photo = await read_submitted(request)
    async with stored_photo(storage, ctx, photo) as photo_path:
        result = await service.update(ctx, user_id, fields, photo=photo_path)
    return result.to_dict()


@router.patch("/{user_id}/password", response_model=SuccessResponse)
async def change_password(
    user_id: int,
    body: PasswordChangeRequest,
    ctx: TenantContextDep,
    authenticator: AuthenticatorDep,
) -> SuccessResponse:
    """Change a user's password (own or another user's in the same tenant)."""
    updated_by = "self" if user_id == int(ctx.user_id) else (ctx.tenant_user_id or "system")
    await authenticator.change_password(
        user_id,
        body.password,
        body.password2,
        updated_by=updated_by,
        actor=ctx,
        tenant_id=ctx.tenant_id,
    )
    return SuccessResponse()


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: int, ctx: TenantContextDep, service: UserServiceDep
) -> SuccessResponse:
    """Hard delete a user of the caller's tenant."""
    await service.remove(ctx, user_id)
    return SuccessResponse()
