"""
S3-compatible blob store backed by the MinIO client.
"""

from __future__ import annotations

import asyncio
import io
from datetime import timedelta
from typing import List, Optional
from urllib.parse import quote, urlsplit

import structlog
from minio import Minio
from minio.error import S3Error

from .base import BlobStore, BlobStoreError, StorageConfigurationError, StoredObject

logger = structlog.get_logger(__name__)

MAX_PRESIGN_SECONDS = 7 * 24 * 3600


class MinioBlobStore(BlobStore):
    """MinIO/S3 client wrapper implementing put, list and presign."""

    name = "s3"
    supports_list = True
    supports_presign = True

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        region: str = "us-east-1",
        secure: bool = True,
        public_url: Optional[str] = None,
        client: Optional[Minio] = None,
    ) -> None:
        missing = [
            label
            for label, value in (
                ("endpoint", endpoint),
                ("access_key", access_key),
                ("secret_key", secret_key),
                ("bucket", bucket),
            )
            if not value
        ]
        if missing:
            raise StorageConfigurationError(
                f"S3 storage is missing configuration: {', '.join(missing)}"
            )

        self.host, self.secure = _split_endpoint(endpoint, secure)
        self.bucket = bucket
        self.region = region
        self.public_url = public_url.rstrip("/") if public_url else None

        self.client = client or Minio(
            endpoint=self.host,
            access_key=access_key,
            secret_key=secret_key,
            secure=self.secure,
            region=self.region,
        )

        logger.info(
            "MinIO blob store initialized",
            endpoint=self.host,
            bucket=self.bucket,
            public_url=self.public_url,
        )

    @classmethod
    def from_settings(cls, settings) -> "MinioBlobStore":
        return cls(
            endpoint=settings.s3_endpoint or "",
            access_key=settings.s3_access_key or "",
            secret_key=settings.s3_secret_key or "",
            bucket=settings.s3_bucket or "",
            region=settings.s3_region,
            secure=settings.s3_use_ssl,
            public_url=settings.s3_public_url,
        )

    def object_url(self, key: str) -> str:
        """Public URL of key, honouring the configured override."""
        quoted = quote(key, safe="/-_.~")
        if self.public_url:
            return f"{self.public_url}/{quoted}"
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}/{self.bucket}/{quoted}"

    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                bucket_name=self.bucket,
                object_name=key,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
        except S3Error as exc:
            logger.error("Failed to upload object", key=key, error=str(exc))
            raise BlobStoreError(f"S3 upload failed: {exc}", backend=self.name, key=key) from exc

        logger.info("Object uploaded to S3", bucket=self.bucket, key=key, size=len(data))
        url = self.object_url(key)
        return StoredObject(
            key=key,
            url=url,
            download_url=url,
            size=len(data),
            content_type=content_type,
        )

    async def list(self, prefix: str = "", max_keys: int = 100) -> List[StoredObject]:
        def _collect() -> List[StoredObject]:
            objects: List[StoredObject] = []
            for item in self.client.list_objects(
                bucket_name=self.bucket,
                prefix=prefix or None,
                recursive=True,
            ):
                if item.is_dir:
                    continue
                objects.append(
                    StoredObject(
                        key=item.object_name,
                        url=self.object_url(item.object_name),
                        size=item.size,
                        last_modified=item.last_modified,
                    )
                )
                if len(objects) >= max_keys:
                    break
            return objects

        try:
            objects = await asyncio.to_thread(_collect)
        except S3Error as exc:
            logger.error("Failed to list objects", prefix=prefix, error=str(exc))
            raise BlobStoreError(f"S3 list failed: {exc}", backend=self.name) from exc

        logger.debug("Listed S3 objects", prefix=prefix, count=len(objects), max_keys=max_keys)
        return objects

    async def presign(self, key: str, ttl_seconds: int = 3600) -> str:
        expires = timedelta(seconds=min(max(ttl_seconds, 1), MAX_PRESIGN_SECONDS))
        try:
            url = await asyncio.to_thread(
                self.client.presigned_get_object,
                bucket_name=self.bucket,
                object_name=key,
                expires=expires,
            )
        except S3Error as exc:
            logger.error("Failed to generate presigned URL", key=key, error=str(exc))
            raise BlobStoreError(f"S3 presign failed: {exc}", backend=self.name, key=key) from exc

        logger.info("Generated presigned URL", key=key, expires_in=int(expires.total_seconds()))
        return url

    async def health_check(self) -> bool:
        try:
            return await asyncio.to_thread(self.client.bucket_exists, bucket_name=self.bucket)
        except S3Error as exc:
            logger.warning("S3 health check failed", bucket=self.bucket, error=str(exc))
            return False


def _split_endpoint(endpoint: str, secure: bool) -> tuple[str, bool]:
    """Minio wants ``host[:port]``; accept full URLs and derive ``secure``."""
    if "://" not in endpoint:
        return endpoint.rstrip("/"), secure
    parts = urlsplit(endpoint)
    if not parts.netloc:
        raise StorageConfigurationError(f"Invalid S3 endpoint: {endpoint}")
    return parts.netloc, parts.scheme == "https"
