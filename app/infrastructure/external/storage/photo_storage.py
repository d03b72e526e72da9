"""Local filesystem storage for record photos, namespaced per tenant.

Files land in <root>/<TenantId>/<random><ext>; records store the
tenant-relative path "<TenantId>/<file>". Paths are validated against the
storage root so a stored or requested path can never escape it.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from app.domain.exceptions import ValidationException
from app.shared.logging import get_logger
from app.shared.utils.generators import generate_upload_name

logger = get_logger(__name__)

_TENANT_DIR_RE = re.compile(r"^[0-9a-fA-F]{4}$")
_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,8}$")


class LocalPhotoStorage:
    """Writes uploaded photos atomically (temp file + rename) under storage_root."""

    def __init__(self, storage_root: str) -> None:
        """Initialize storage.

        Args:
            storage_root: Base directory for uploads (created lazily).
        """
        self.storage_root = Path(storage_root).resolve()

    def resolve(self, relative_path: str) -> Path:
        """Resolve a stored path under storage_root; reject traversal."""
        full_path = (self.storage_root / relative_path).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise ValidationException("Invalid photo path", field="Photo") from e
        return full_path

    async def save(self, tenant_id: str, filename: str | None, data: bytes) -> str:
        """Store photo bytes for a tenant.

        Args:
            tenant_id: Owning tenant (becomes the directory name).
            filename: Client-supplied name; only its extension is kept.
            data: File content.

        Returns:
            Tenant-relative path, e.g. "3f2c/9a1b...e4.png".
        """
        if not _TENANT_DIR_RE.match(tenant_id or ""):
            raise ValidationException("TenantId is required for uploads", field="TenantId")
        extension = Path(filename or "").suffix.lower()
        if not _EXTENSION_RE.match(extension):
            extension = ""
        relative_path = f"{tenant_id}/{generate_upload_name(extension)}"
        target_path = self.resolve(relative_path)
        target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)

        temp_fd, temp_path = tempfile.mkstemp(
            dir=target_path.parent, prefix=".tmp_", suffix=extension
        )
        os.close(temp_fd)
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(data)
            os.replace(temp_path, target_path)
        except OSError:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
        logger.info("Stored photo %s (%d bytes)", relative_path, len(data))
        return relative_path

    async def delete(self, relative_path: str) -> None:
        """Remove a stored photo; a path that is already gone is ignored."""
        target_path = self.resolve(relative_path)
        try:
            await aiofiles.os.remove(target_path)
        except FileNotFoundError:
            logger.debug("Photo %s already removed", relative_path)
            return
        logger.info("Removed photo %s", relative_path)
