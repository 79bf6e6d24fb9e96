"""Built-in 3D storage tools."""

from __future__ import annotations

from typing import Optional

from storage3d.mcp.registry import ToolRegistry
from storage3d.storage.base import BlobStore
from storage3d.storage.keys import IdGenerator, generate_id

from .listing import ListModelsTool
from .presign import PresignedUrlTool
from .upload import UploadModelTool
from .viewer_page import ViewerPageTool

__all__ = [
    "ListModelsTool",
    "PresignedUrlTool",
    "UploadModelTool",
    "ViewerPageTool",
    "register_storage_tools",
]


def register_storage_tools(
    registry: ToolRegistry,
    store: BlobStore,
    id_generator: IdGenerator = generate_id,
    include_s3_tools: Optional[bool] = None,
) -> ToolRegistry:
    """
    Register the tool set for ``store``.

    S3-compatible backends (those that can presign) also get the
    ``s3_upload_file`` / ``s3_list_files`` / ``s3_get_presigned_url`` names.
    """
    if include_s3_tools is None:
        include_s3_tools = store.supports_presign

    upload = UploadModelTool(store, id_generator=id_generator)
    registry.register_tool(upload)
    registry.register_tool(ViewerPageTool(store, id_generator=id_generator))
    registry.register_tool(ListModelsTool(store))

    if include_s3_tools:
        registry.register_tool(upload, name="s3_upload_file")
        registry.register_tool(ListModelsTool(store, default_prefix=""), name="s3_list_files")
        registry.register_tool(PresignedUrlTool(store))

    return registry
