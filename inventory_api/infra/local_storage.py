"""
Local Disk Storage Adapter

Low-level file operations under a single upload root. Files are served back
by the API under the public prefix (StaticFiles mount).
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from inventory_api.lib.config import settings

logger = logging.getLogger(__name__)


class LocalStorageAdapter:
    """
    Disk-backed storage adapter.

    Keys are relative POSIX paths ("apartments/apartment-123.png") resolved
    against the upload root.
    """

    def __init__(self, root: Optional[str] = None, public_prefix: str = "/uploads"):
        self.root = Path(root or settings.upload_dir).resolve()
        self.public_prefix = public_prefix.rstrip('/')
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise ValueError(f"Key escapes storage root: {key}")
        return path

    async def upload_file(
        self,
        key: str,
        body: bytes,
        content_type: str,
    ) -> Dict[str, Any]:
        """Write file to storage."""
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(body)

        return {
            'key': key,
            'size': len(body),
            'content_type': content_type,
        }

    async def delete_file(self, key: str) -> bool:
        """Delete file. Returns False if it did not exist."""
        path = self._resolve(key)
        if not path.exists():
            return False

        path.unlink()
        return True

    async def file_exists(self, key: str) -> bool:
        """Check if file exists."""
        return self._resolve(key).is_file()

    def get_public_url(self, key: str) -> str:
        """Public URL path the API serves this file under."""
        return f"{self.public_prefix}/{key}"

