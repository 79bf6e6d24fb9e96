"""List stored 3D models."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from pydantic import Field

from storage3d.mcp.base import BaseTool, ToolInput
from storage3d.storage.base import BlobStore, UnsupportedOperationError
from storage3d.storage.keys import MODELS_PREFIX

logger = structlog.get_logger(__name__)


class ListModelsInput(ToolInput):
    prefix: Optional[str] = Field(default=None, description="Only list keys starting with this prefix")
    max_keys: int = Field(default=100, ge=1, le=1000, description="Maximum number of objects to return")


class ListModelsTool(BaseTool):
    """
    Delegates to BlobStore.list.

    Backends without listing get an informational (non-error) result that
    points at the provider console.
    """

    name = "list_3d_files"
    description = "List all uploaded 3D model files"
    input_model = ListModelsInput

    def __init__(self, store: BlobStore, default_prefix: str = f"{MODELS_PREFIX}/") -> None:
        self.store = store
        self.default_prefix = default_prefix

    async def _execute(self, payload: ListModelsInput) -> Dict[str, Any]:
        prefix = self.default_prefix if payload.prefix is None else payload.prefix

        if not self.store.supports_list:
            return self._unsupported()

        try:
            objects = await self.store.list(prefix, payload.max_keys + 1)
        except UnsupportedOperationError:
            return self._unsupported()

        truncated = len(objects) > payload.max_keys
        objects = objects[: payload.max_keys]

        logger.info("Listed 3D models", prefix=prefix, count=len(objects), backend=self.store.name)
        return {
            "success": True,
            "prefix": prefix,
            "count": len(objects),
            "truncated": truncated,
            "files": [obj.to_payload() for obj in objects],
        }

    def _unsupported(self) -> Dict[str, Any]:
        logger.info("Listing not supported by backend", backend=self.store.name)
        body: Dict[str, Any] = {
            "success": True,
            "supported": False,
            "message": f"Listing is not available for the {self.store.name} backend. "
            "Use the storage provider's console for file management.",
        }
        if self.store.console_url:
            body["tip"] = f"Visit {self.store.console_url} to manage your files"
        return body
