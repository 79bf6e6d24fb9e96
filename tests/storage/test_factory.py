"""Tests for build_blob_store."""

import pytest

from storage3d.core.config import Settings
from storage3d.storage.base import StorageConfigurationError
from storage3d.storage.factory import build_blob_store
from storage3d.storage.memory import InMemoryBlobStore
from storage3d.storage.minio_store import MinioBlobStore
from storage3d.storage.vercel_blob import VercelBlobStore


def _settings(**values):
    return Settings(_env_file=None, **values)


def test_memory_backend():
    store = build_blob_store(_settings(storage_backend="memory", memory_base_url="https://cdn.test"))

    assert isinstance(store, InMemoryBlobStore)
    assert store.base_url == "https://cdn.test"


def test_s3_backend_requires_credentials(monkeypatch):
    for key in ("S3_ENDPOINT", "S3_ACCESS_KEY", "S3_SECRET_KEY", "S3_BUCKET"):
        monkeypatch.delenv(key, raising=False)

    with pytest.raises(StorageConfigurationError, match="missing configuration"):
        build_blob_store(_settings(storage_backend="s3"))


def test_s3_backend_from_settings():
    store = build_blob_store(
        _settings(
            storage_backend="s3",
            s3_endpoint="http://localhost:9000",
            s3_access_key="minio",
            s3_secret_key="minio123",
            s3_bucket="models",
        )
    )

    assert isinstance(store, MinioBlobStore)
    assert store.host == "localhost:9000"
    assert store.secure is False


@pytest.mark.asyncio
async def test_vercel_backend_from_settings():
    store = build_blob_store(_settings(storage_backend="vercel_blob", blob_read_write_token="tok"))

    assert isinstance(store, VercelBlobStore)
    assert store.supports_list is False
    await store.close()


def test_vercel_backend_requires_token(monkeypatch):
    monkeypatch.delenv("BLOB_READ_WRITE_TOKEN", raising=False)

    with pytest.raises(StorageConfigurationError):
        build_blob_store(_settings(storage_backend="vercel_blob"))
