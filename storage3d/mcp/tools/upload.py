"""Upload a base64 encoded 3D model to the blob store."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, Optional

import structlog
from pydantic import Field

from storage3d.mcp.base import BaseTool, DecodeError, ToolInput
from storage3d.storage.base import BlobStore
from storage3d.storage.keys import MODELS_PREFIX, IdGenerator, generate_id, make_key

logger = structlog.get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

MODEL_CONTENT_TYPES = {
    ".glb": "model/gltf-binary",
    ".gltf": "model/gltf+json",
    ".obj": "model/obj",
    ".stl": "model/stl",
    ".usdz": "model/vnd.usdz+zip",
}


class UploadModelInput(ToolInput):
    file_name: str = Field(..., min_length=1, description="File name (e.g., model.glb)")
    file_data: str = Field(..., description="Base64 encoded file data")
    content_type: Optional[str] = Field(
        default=None,
        description="MIME type; guessed from the file extension when omitted",
    )
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Free-form metadata (e.g., title, description) echoed back in the result",
    )


def decode_file_data(file_data: str) -> bytes:
    """
    Decode base64 upload data.

    Accepts data URLs (``data:...;base64,``) and embedded whitespace. An
    empty string decodes to zero bytes. Anything outside the base64
    alphabet or with bad padding raises DecodeError.
    """
    encoded = file_data.strip()
    if encoded.startswith("data:") and "," in encoded:
        header, encoded = encoded.split(",", 1)
        if not header.endswith(";base64"):
            raise DecodeError("fileData data URL is not base64 encoded", field="fileData")
    encoded = "".join(encoded.split())

    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"fileData is not valid base64: {exc}", field="fileData") from exc


def guess_content_type(file_name: str) -> str:
    lowered = file_name.lower()
    for extension, content_type in MODEL_CONTENT_TYPES.items():
        if lowered.endswith(extension):
            return content_type
    return DEFAULT_CONTENT_TYPE


class UploadModelTool(BaseTool):
    """Stores the decoded bytes under a collision-free key."""

    name = "upload_3d_file"
    description = "Upload a 3D model file (GLB/GLTF) to cloud storage"
    input_model = UploadModelInput

    def __init__(self, store: BlobStore, id_generator: IdGenerator = generate_id) -> None:
        self.store = store
        self.id_generator = id_generator

    async def _execute(self, payload: UploadModelInput) -> Dict[str, Any]:
        data = decode_file_data(payload.file_data)
        unique_id = self.id_generator()
        key = make_key(MODELS_PREFIX, unique_id, payload.file_name)
        content_type = payload.content_type or guess_content_type(payload.file_name)

        logger.info(
            "Uploading 3D model",
            key=key,
            size=len(data),
            content_type=content_type,
            backend=self.store.name,
        )
        stored = await self.store.put(key, data, content_type)

        return {
            "success": True,
            "url": stored.url,
            "downloadUrl": stored.download_url or stored.url,
            "key": stored.key,
            "id": unique_id,
            "size": len(data),
            "contentType": content_type,
            "metadata": payload.metadata or {},
        }
