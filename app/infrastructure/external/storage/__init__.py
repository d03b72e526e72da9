"""Storage for uploaded files."""

from app.infrastructure.external.storage.photo_storage import LocalPhotoStorage

__all__ = ["LocalPhotoStorage"]
