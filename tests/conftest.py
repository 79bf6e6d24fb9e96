"""
Pytest configuration and fixtures.

Provides:
- An in-memory blob store and deterministic id generators
- A registry/dispatcher wired with the storage tools
- A FastAPI TestClient over the full application
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from storage3d.core.config import Settings
from storage3d.main import create_app
from storage3d.mcp.dispatcher import ProtocolDispatcher
from storage3d.mcp.registry import ToolRegistry
from storage3d.mcp.tools import register_storage_tools
from storage3d.storage.memory import InMemoryBlobStore


@pytest.fixture
def memory_store():
    """Fresh in-memory store supporting list and presign."""
    return InMemoryBlobStore(base_url="https://cdn.test")


@pytest.fixture
def sequential_ids():
    """Deterministic id generator: id0000001, id0000002, ..."""
    counter = itertools.count(1)
    return lambda: f"id{next(counter):07d}"


@pytest.fixture
def registry(memory_store, sequential_ids):
    return register_storage_tools(ToolRegistry(), memory_store, id_generator=sequential_ids).freeze()


@pytest.fixture
def dispatcher(registry):
    return ProtocolDispatcher(registry, server_name="Test 3D Server", server_version="9.9.9")


@pytest.fixture
def settings():
    return Settings(_env_file=None, storage_backend="memory", service_name="Test 3D Server")


@pytest.fixture
def client(settings, memory_store):
    """TestClient over the full app, backed by memory_store."""
    app = create_app(settings=settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client
