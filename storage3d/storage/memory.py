"""In-process blob store for development and tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import structlog

from .base import BlobStore, StoredObject, UnsupportedOperationError

logger = structlog.get_logger(__name__)


class InMemoryBlobStore(BlobStore):
    """Keeps objects in a dict; URLs use a configurable fake base URL."""

    name = "memory"
    supports_list = True
    supports_presign = True

    def __init__(
        self,
        base_url: str = "memory://storage3d",
        supports_list: bool = True,
        supports_presign: bool = True,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.supports_list = supports_list
        self.supports_presign = supports_presign
        self._objects: Dict[str, Tuple[bytes, str, datetime]] = {}

    @classmethod
    def from_settings(cls, settings) -> "InMemoryBlobStore":
        return cls(base_url=settings.memory_base_url)

    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        self._objects[key] = (bytes(data), content_type, datetime.now(timezone.utc))
        logger.debug("Stored object in memory", key=key, size=len(data))
        url = f"{self.base_url}/{key}"
        return StoredObject(key=key, url=url, download_url=url, size=len(data), content_type=content_type)

    async def list(self, prefix: str = "", max_keys: int = 100) -> List[StoredObject]:
        if not self.supports_list:
            raise UnsupportedOperationError("Listing disabled for this store", backend=self.name)

        items = sorted(self._objects.items())
        return [
            StoredObject(
                key=key,
                url=f"{self.base_url}/{key}",
                size=len(body),
                last_modified=modified,
                content_type=content_type,
            )
            for key, (body, content_type, modified) in items
            if key.startswith(prefix)
        ][:max_keys]

    async def presign(self, key: str, ttl_seconds: int = 3600) -> str:
        if not self.supports_presign:
            raise UnsupportedOperationError("Presigning disabled for this store", backend=self.name, key=key)
        return f"{self.base_url}/{key}?expires={ttl_seconds}"

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored body for key, or None."""
        entry = self._objects.get(key)
        return entry[0] if entry else None

    def content_type(self, key: str) -> Optional[str]:
        entry = self._objects.get(key)
        return entry[1] if entry else None

    def keys(self) -> List[str]:
        return sorted(self._objects)
