"""FastAPI router exposing the MCP JSON-RPC endpoint and its discovery document."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..storage.base import BlobStoreInfo
from .dispatcher import ProtocolDispatcher

logger = structlog.get_logger(__name__)


def build_discovery_document(
    dispatcher: ProtocolDispatcher,
    store_info: Optional[BlobStoreInfo] = None,
    required_keys: Optional[list] = None,
    optional_keys: Optional[list] = None,
) -> Dict[str, Any]:
    """Informational document served on GET; not part of the protocol."""
    document: Dict[str, Any] = {
        "name": dispatcher.server_info.name,
        "version": dispatcher.server_info.version,
        "protocolVersion": dispatcher.protocol_version,
        "transport": "http-json-rpc",
        "backend": store_info.backend if store_info else "unknown",
        "tools": [
            {"name": definition.name, "description": definition.description}
            for definition in dispatcher.registry.list()
        ],
        "configuration": {
            "required": list(required_keys or []),
            "optional": list(optional_keys or []),
        },
    }
    if store_info is not None:
        document["capabilities"] = {
            "list": store_info.supports_list,
            "presign": store_info.supports_presign,
        }
        if store_info.console_url:
            document["consoleUrl"] = store_info.console_url
    return document


def create_mcp_router(
    dispatcher: ProtocolDispatcher,
    discovery_document: Optional[Dict[str, Any]] = None,
) -> APIRouter:
    """Create the MCP router. POST carries JSON-RPC, GET returns metadata."""

    if dispatcher is None:
        raise ValueError("dispatcher is required")

    document = discovery_document or build_discovery_document(dispatcher)
    router = APIRouter(prefix="/mcp", tags=["mcp"])

    @router.get("")
    async def describe_server() -> Dict[str, Any]:
        return document

    @router.post("")
    async def handle_rpc(request: Request) -> JSONResponse:
        body = await request.body()
        response = await dispatcher.dispatch(body)
        if "error" in response:
            logger.info(
                "MCP request answered with protocol error",
                request_id=response.get("id"),
                code=response["error"]["code"],
            )
        return JSONResponse(response)

    return router
