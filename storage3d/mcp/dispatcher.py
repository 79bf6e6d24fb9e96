"""JSON-RPC 2.0 dispatcher for initialize, tools/list and tools/call."""

from __future__ import annotations

import json
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from .executor import ToolExecutor
from .protocol import (
    PROTOCOL_VERSION,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    ToolCallRequest,
)
from .registry import ToolRegistry, UnknownToolError

logger = structlog.get_logger(__name__)

METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

RequestBody = Union[str, bytes, bytearray, Mapping[str, Any]]


class ProtocolError(Exception):
    """A fault in the request framing, reported through the JSON-RPC error field."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ProtocolDispatcher:
    """
    Stateless request -> response translation.

    Every response built from a parsed request echoes its ``id``; only a
    body that cannot be read as a JSON object answers with ``id: null``.
    Tool failures come back as results with ``isError`` set, never as
    protocol errors.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        executor: Optional[ToolExecutor] = None,
        *,
        server_name: str = "3D File Storage MCP Server",
        server_version: str = "1.0.0",
        protocol_version: str = PROTOCOL_VERSION,
    ) -> None:
        self.registry = registry
        self.executor = executor or ToolExecutor(registry)
        self.server_info = ServerInfo(name=server_name, version=server_version)
        self.protocol_version = protocol_version
        self._methods: Dict[str, Callable[[JsonRpcRequest], Awaitable[Dict[str, Any]]]] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    async def dispatch(self, body: RequestBody) -> Dict[str, Any]:
        """Handle one request body and return the response envelope as a dict."""
        try:
            payload = _parse_body(body)
        except ProtocolError as exc:
            logger.warning("Rejected unparseable MCP request", error=exc.message)
            return JsonRpcResponse.failure(None, exc.code, exc.message).to_wire()

        request_id = payload.get("id")
        try:
            request = JsonRpcRequest.model_validate(payload)
        except ValidationError as exc:
            message = "Invalid Request: " + "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}" for err in exc.errors()
            )
            logger.warning("Rejected malformed MCP request", request_id=request_id, error=message)
            return JsonRpcResponse.failure(request_id, INTERNAL_ERROR, message).to_wire()

        return (await self.handle(request)).to_wire()

    async def handle(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Route a validated request by method."""
        logger.debug("MCP request received", method=request.method, request_id=request.id)

        method = self._methods.get(request.method)
        if method is None:
            logger.info("Unknown MCP method", method=request.method, request_id=request.id)
            return JsonRpcResponse.failure(request.id, METHOD_NOT_FOUND, "Method not found")

        try:
            result = await method(request)
        except ProtocolError as exc:
            return JsonRpcResponse.failure(request.id, exc.code, exc.message)
        except Exception as exc:
            logger.error(
                "MCP dispatch crashed",
                method=request.method,
                request_id=request.id,
                error=str(exc),
                exc_info=True,
            )
            return JsonRpcResponse.failure(request.id, INTERNAL_ERROR, f"Internal error: {exc}")

        return JsonRpcResponse.success(request.id, result)

    async def _initialize(self, request: JsonRpcRequest) -> Dict[str, Any]:
        return InitializeResult(
            protocol_version=self.protocol_version,
            server_info=self.server_info,
        ).to_wire()

    async def _list_tools(self, request: JsonRpcRequest) -> Dict[str, Any]:
        return {"tools": [definition.to_wire() for definition in self.registry.list()]}

    async def _call_tool(self, request: JsonRpcRequest) -> Dict[str, Any]:
        try:
            call = ToolCallRequest.model_validate(request.params or {})
        except ValidationError as exc:
            raise ProtocolError(
                INTERNAL_ERROR,
                "Invalid params: tools/call requires a non-empty string 'name'",
            ) from exc

        try:
            result = await self.executor.execute(call.tool_name, call.arguments)
        except UnknownToolError as exc:
            logger.info("Unknown MCP tool", tool=exc.tool_name, request_id=request.id)
            raise ProtocolError(METHOD_NOT_FOUND, f"Tool not found: {exc.tool_name}") from exc

        return result.to_wire()


def _parse_body(body: RequestBody) -> Dict[str, Any]:
    if isinstance(body, Mapping):
        return dict(body)

    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProtocolError(INTERNAL_ERROR, f"Parse error: body is not UTF-8 ({exc.reason})") from exc

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ProtocolError(INTERNAL_ERROR, f"Parse error: {exc.msg}") from exc

    if not isinstance(payload, dict):
        raise ProtocolError(INTERNAL_ERROR, "Invalid Request: expected a JSON object")
    return payload
