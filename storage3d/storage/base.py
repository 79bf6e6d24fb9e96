"""Port for object storage backing the MCP tools."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class BlobStoreError(RuntimeError):
    """Raised when the storage backend fails an operation."""

    def __init__(self, message: str, *, backend: str = "unknown", key: Optional[str] = None) -> None:
        super().__init__(message)
        self.backend = backend
        self.key = key


class UnsupportedOperationError(BlobStoreError):
    """Raised when a backend does not implement an optional capability."""


class StorageConfigurationError(RuntimeError):
    """Raised when a blob store cannot be built from the given settings."""


class StoredObject(BaseModel):
    """An object as reported by the storage backend."""

    key: str
    url: str
    size: Optional[int] = None
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None
    download_url: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "url": self.url,
            "size": self.size,
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
        }


class BlobStoreInfo(BaseModel):
    """Static description of a backend, used for discovery documents."""

    backend: str
    supports_list: bool = True
    supports_presign: bool = True
    console_url: Optional[str] = Field(default=None, description="Where to browse objects when listing is unsupported")


class BlobStore(ABC):
    """
    Port for blob storage operations.

    Implementations hold their own configuration and clients. The MCP
    tools never read credentials or process state, they only call this
    interface.
    """

    name: str = "blob"
    supports_list: bool = True
    supports_presign: bool = True
    console_url: Optional[str] = None

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        """
        Store bytes under key.

        Args:
            key: Object key, unique per upload
            data: Raw object body
            content_type: MIME type sent to the backend

        Returns:
            StoredObject with at least key and url populated
        """

    @abstractmethod
    async def list(self, prefix: str = "", max_keys: int = 100) -> List[StoredObject]:
        """
        List at most max_keys objects whose key starts with prefix.

        Raises:
            UnsupportedOperationError: if the backend cannot list
        """

    @abstractmethod
    async def presign(self, key: str, ttl_seconds: int = 3600) -> str:
        """
        Return a time-limited URL for key.

        The ttl is passed to the backend as-is; expiry is enforced there.

        Raises:
            UnsupportedOperationError: if the backend cannot presign
        """

    def info(self) -> BlobStoreInfo:
        return BlobStoreInfo(
            backend=self.name,
            supports_list=self.supports_list,
            supports_presign=self.supports_presign,
            console_url=self.console_url,
        )

    async def health_check(self) -> bool:
        """Check whether the backend is reachable."""
        return True

    async def close(self) -> None:
        """Release network resources held by the backend."""
