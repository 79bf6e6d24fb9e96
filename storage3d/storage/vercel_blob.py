"""
Vercel Blob store.

Uploads go through the Blob REST API with public access and no random
suffix, so the returned URL is derived from our own key. The API used here
has no listing or presigning, so both raise UnsupportedOperationError and
the tools report the gap instead of failing.
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

import httpx
import structlog

from .base import (
    BlobStore,
    BlobStoreError,
    StorageConfigurationError,
    StoredObject,
    UnsupportedOperationError,
)

logger = structlog.get_logger(__name__)

BLOB_API_VERSION = "7"
BLOB_CONSOLE_URL = "https://vercel.com/dashboard/stores/blob"


class VercelBlobStore(BlobStore):
    """Put-only blob store on top of the Vercel Blob HTTP API."""

    name = "vercel_blob"
    supports_list = False
    supports_presign = False
    console_url = BLOB_CONSOLE_URL

    def __init__(
        self,
        token: str,
        api_url: str = "https://blob.vercel-storage.com",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not token:
            raise StorageConfigurationError("Vercel Blob storage requires BLOB_READ_WRITE_TOKEN")

        self.api_url = api_url.rstrip("/")
        self._token = token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

        logger.info("Vercel Blob store initialized", api_url=self.api_url)

    @classmethod
    def from_settings(cls, settings) -> "VercelBlobStore":
        return cls(
            token=settings.blob_read_write_token or "",
            api_url=settings.blob_api_url,
            timeout=settings.blob_timeout_seconds,
        )

    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        try:
            response = await self._client.put(
                f"{self.api_url}/{quote(key, safe='/-_.~')}",
                content=data,
                headers={
                    "authorization": f"Bearer {self._token}",
                    "x-api-version": BLOB_API_VERSION,
                    "x-content-type": content_type,
                    "x-add-random-suffix": "0",
                },
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Vercel Blob upload rejected",
                key=key,
                status_code=exc.response.status_code,
                body=exc.response.text[:500],
            )
            raise BlobStoreError(
                f"Vercel Blob upload failed with status {exc.response.status_code}",
                backend=self.name,
                key=key,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Vercel Blob upload failed", key=key, error=str(exc))
            raise BlobStoreError(f"Vercel Blob upload failed: {exc}", backend=self.name, key=key) from exc

        if "url" not in body:
            raise BlobStoreError("Vercel Blob response did not include a url", backend=self.name, key=key)

        logger.info("Object uploaded to Vercel Blob", key=key, size=len(data))
        return StoredObject(
            key=body.get("pathname", key),
            url=body["url"],
            download_url=body.get("downloadUrl"),
            size=len(data),
            content_type=body.get("contentType", content_type),
        )

    async def list(self, prefix: str = "", max_keys: int = 100) -> List[StoredObject]:
        raise UnsupportedOperationError("Vercel Blob listing is not available", backend=self.name)

    async def presign(self, key: str, ttl_seconds: int = 3600) -> str:
        raise UnsupportedOperationError(
            "Vercel Blob objects are public; presigned URLs are not available",
            backend=self.name,
            key=key,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
