"""
Storage Service

Apartment image uploads on top of the local storage adapter.

Path conventions:
- Apartment images: {apartment_image_prefix}/apartment-{millis}-{random}{ext}
"""
import logging
import random
import time
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from inventory_api.infra.local_storage import LocalStorageAdapter
from inventory_api.lib.config import settings
from inventory_api.lib.errors import ValidationError

logger = logging.getLogger(__name__)


class StorageService:
    """Apartment-aware storage service."""

    def __init__(
        self,
        storage: Optional[LocalStorageAdapter] = None,
        allowed_types: Optional[List[str]] = None,
        max_size: Optional[int] = None,
    ):
        self.storage = storage or LocalStorageAdapter()
        self.image_prefix = settings.apartment_image_prefix
        self.allowed_types = allowed_types or settings.allowed_image_types
        self.max_size = max_size or settings.max_image_size_bytes

    # --- Path Generation ---

    def get_apartment_image_path(self, filename: str) -> str:
        """Generate a unique storage path for an apartment image."""
        ext = PurePosixPath(filename or "").suffix.lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{self.image_prefix}/apartment-{unique_suffix}{ext}"

    # --- Upload Operations ---

    def validate_image(self, content_type: Optional[str], size: int) -> None:
        """Reject unsupported or oversized images before anything is written."""
        if content_type not in self.allowed_types:
            raise ValidationError(
                "Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed."
            )
        if size > self.max_size:
            raise ValidationError(
                f"Image exceeds the {self.max_size // (1024 * 1024)}MB size limit."
            )

    async def save_apartment_image(
        self,
        filename: str,
        content: bytes,
        content_type: Optional[str],
    ) -> Dict[str, Any]:
        """
        Validate and store an uploaded apartment image.

        Returns:
            {
                'storage_path': key inside storage,
                'url': public URL stored on apartments,
                'size': file size
            }
        """
        self.validate_image(content_type, len(content))

        storage_path = self.get_apartment_image_path(filename)
        result = await self.storage.upload_file(
            key=storage_path,
            body=content,
            content_type=content_type,
        )
        logger.info("Stored apartment image %s (%d bytes)", storage_path, result['size'])

        return {
            'storage_path': storage_path,
            'url': self.storage.get_public_url(storage_path),
            'size': result['size'],
        }

    # --- File Management ---

    def get_public_url(self, storage_path: str) -> str:
        return self.storage.get_public_url(storage_path)

    async def delete_image(self, storage_path: Optional[str]) -> bool:
        """
        Remove an uploaded image.

        Used to discard an upload whose database write did not take effect.
        """
        if not storage_path:
            return False

        try:
            deleted = await self.storage.delete_file(storage_path)
        except OSError:
            logger.exception("Error removing uploaded file %s", storage_path)
            return False

        if deleted:
            logger.info("Removed uploaded file %s", storage_path)
        return deleted

    async def file_exists(self, storage_path: str) -> bool:
        """Check if file exists."""
        return await self.storage.file_exists(storage_path)


_storage_service: Optional[StorageService] = None


def get_storage() -> StorageService:
    """FastAPI dependency for storage service."""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService()
    return _storage_service
