"""Photos API: serve stored record photos to members of the owning tenant."""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.api.dependencies import PhotoStorageDep, TenantContextDep
from app.domain.exceptions import ResourceNotFoundException

router = APIRouter()


@router.get("/{tenant_id}/{filename}", response_class=FileResponse)
async def get_photo(
    tenant_id: str,
    filename: str,
    ctx: TenantContextDep,
    storage: PhotoStorageDep,
) -> FileResponse:
    """Return the photo file; another tenant's photo is reported as not found."""
    if tenant_id != ctx.tenant_id:
        raise ResourceNotFoundException("Photo", f"{tenant_id}/{filename}")
    path = storage.resolve(f"{tenant_id}/{filename}")
    if not path.is_file():
        raise ResourceNotFoundException("Photo", f"{tenant_id}/{filename}")
    return FileResponse(path)
