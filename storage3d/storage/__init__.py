"""Storage adapters behind the BlobStore port (S3/MinIO, Vercel Blob, memory)."""

from .base import (
    BlobStore,
    BlobStoreError,
    BlobStoreInfo,
    StorageConfigurationError,
    StoredObject,
    UnsupportedOperationError,
)
from .factory import build_blob_store
from .memory import InMemoryBlobStore
from .minio_store import MinioBlobStore
from .vercel_blob import VercelBlobStore

__all__ = [
    "BlobStore",
    "BlobStoreError",
    "BlobStoreInfo",
    "StorageConfigurationError",
    "StoredObject",
    "UnsupportedOperationError",
    "build_blob_store",
    "InMemoryBlobStore",
    "MinioBlobStore",
    "VercelBlobStore",
]
