"""Mint a temporary access URL for a stored object."""

from __future__ import annotations

from typing import Any, Dict

import structlog
from pydantic import Field

from storage3d.mcp.base import BaseTool, ToolInput
from storage3d.storage.base import BlobStore

logger = structlog.get_logger(__name__)


class PresignedUrlInput(ToolInput):
    file_name: str = Field(..., min_length=1, description="Object key (e.g., 3d-models/abc123-model.glb)")
    expires_in: int = Field(default=3600, ge=1, le=604800, description="URL lifetime in seconds")


class PresignedUrlTool(BaseTool):
    name = "s3_get_presigned_url"
    description = "Get a temporary presigned URL for a stored file"
    input_model = PresignedUrlInput

    def __init__(self, store: BlobStore) -> None:
        self.store = store

    async def _execute(self, payload: PresignedUrlInput) -> Dict[str, Any]:
        url = await self.store.presign(payload.file_name, payload.expires_in)
        logger.info("Presigned URL issued", key=payload.file_name, expires_in=payload.expires_in)
        return {
            "success": True,
            "url": url,
            "key": payload.file_name,
            "expiresIn": payload.expires_in,
        }
