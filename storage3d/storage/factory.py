"""Build the configured blob store."""

from __future__ import annotations

import structlog

from ..core.config import Settings
from .base import BlobStore, StorageConfigurationError
from .memory import InMemoryBlobStore
from .minio_store import MinioBlobStore
from .vercel_blob import VercelBlobStore

logger = structlog.get_logger(__name__)

_BACKENDS = {
    "s3": MinioBlobStore,
    "vercel_blob": VercelBlobStore,
    "memory": InMemoryBlobStore,
}


def build_blob_store(settings: Settings) -> BlobStore:
    """
    Construct the blob store selected by ``settings.storage_backend``.

    Raises:
        StorageConfigurationError: unknown backend, missing keys or a
            client that cannot be constructed
    """
    backend_cls = _BACKENDS.get(settings.storage_backend)
    if backend_cls is None:
        raise StorageConfigurationError(f"Unknown storage backend: {settings.storage_backend}")

    try:
        store = backend_cls.from_settings(settings)
    except StorageConfigurationError:
        logger.error(
            "Blob store configuration incomplete",
            backend=settings.storage_backend,
            required=settings.required_keys,
        )
        raise
    except (TypeError, ValueError) as exc:
        logger.error("Blob store could not be constructed", backend=settings.storage_backend, error=str(exc))
        raise StorageConfigurationError(
            f"Could not construct {settings.storage_backend} storage: {exc}"
        ) from exc

    logger.info("Blob store ready", backend=store.name)
    return store
