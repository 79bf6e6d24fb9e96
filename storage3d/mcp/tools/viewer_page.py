"""Publish a model-viewer HTML page for a 3D model URL."""

from __future__ import annotations

from typing import Any, Callable, Dict, Union

import structlog
from pydantic import AnyUrl, Field, TypeAdapter, ValidationError, field_validator

from storage3d.mcp.base import BaseTool, ToolInput
from storage3d.storage.base import BlobStore
from storage3d.storage.keys import IdGenerator, generate_id, make_page_key
from storage3d.viewer import ViewerParams, render_viewer_page

logger = structlog.get_logger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"

_URL_ADAPTER = TypeAdapter(AnyUrl)


class ViewerPageInput(ToolInput):
    model_url: str = Field(..., description="URL of the 3D model file", json_schema_extra={"format": "uri"})
    title: str = "3D Model Viewer"
    background_color: str = "#111"
    camera_orbit: str = "45deg 75deg auto"
    exposure: Union[int, float] = 1
    shadow_intensity: Union[int, float] = 0.6

    @field_validator("model_url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        try:
            url = _URL_ADAPTER.validate_python(value)
        except ValidationError as exc:
            raise ValueError("modelUrl must be an absolute URL") from exc
        if not url.host:
            raise ValueError("modelUrl must be an absolute URL")
        return value


class ViewerPageTool(BaseTool):
    """Renders the viewer page and stores it under 3d-pages/<id>.html."""

    name = "generate_3d_viewer"
    description = "Generate a 3D viewer web page for a GLB/GLTF file"
    input_model = ViewerPageInput

    def __init__(
        self,
        store: BlobStore,
        id_generator: IdGenerator = generate_id,
        renderer: Callable[[ViewerParams], str] = render_viewer_page,
    ) -> None:
        self.store = store
        self.id_generator = id_generator
        self.renderer = renderer

    async def _execute(self, payload: ViewerPageInput) -> Dict[str, Any]:
        page = self.renderer(
            ViewerParams(
                model_url=payload.model_url,
                title=payload.title,
                background_color=payload.background_color,
                camera_orbit=payload.camera_orbit,
                exposure=payload.exposure,
                shadow_intensity=payload.shadow_intensity,
            )
        )
        page_id = self.id_generator()
        key = make_page_key(page_id)

        stored = await self.store.put(key, page.encode("utf-8"), HTML_CONTENT_TYPE)
        logger.info("Published 3D viewer page", key=key, model_url=payload.model_url)

        return {
            "success": True,
            "pageUrl": stored.url,
            "pageId": page_id,
            "key": stored.key,
            "modelUrl": payload.model_url,
        }
