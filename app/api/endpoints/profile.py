"""Profile API: the logged-in user's record (header/avatar data)."""

from typing import Any

from fastapi import APIRouter

from app.api.dependencies import TenantContextDep, UserServiceDep

router = APIRouter()


@router.get("")
async def get_profile(ctx: TenantContextDep, service: UserServiceDep) -> dict[str, Any]:
    record = await service.get(ctx, int(ctx.user_id))
    return {
        key: record.get(key)
        for key in ("Id", "FirstName", "LastName", "Email", "Active", "Photo", "TenantId")
    }
