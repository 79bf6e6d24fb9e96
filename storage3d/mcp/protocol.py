"""Shared Pydantic contracts for the MCP JSON-RPC surface."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"


class TextContent(BaseModel):
    """Single text item of a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Uniform payload returned by every tool call, success or failure."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ToolResult":
        """Serialize a handler's dict output as one JSON text item."""
        return cls.from_text(json.dumps(payload, default=str))

    @classmethod
    def failure(cls, message: str, *, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> "ToolResult":
        body: Dict[str, Any] = {"success": False, "error": message}
        if code:
            body["code"] = code
        if details:
            body["details"] = details
        return cls.from_text(json.dumps(body, default=str), is_error=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolDefinition(BaseModel):
    """Public metadata describing a tool, as listed by tools/list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    input_schema: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolCallRequest(BaseModel):
    """params of a tools/call request."""

    model_config = ConfigDict(populate_by_name=True)

    tool_name: str = Field(..., alias="name")
    arguments: Any = Field(default_factory=dict)

    @field_validator("tool_name")
    @classmethod
    def _non_empty_tool(cls, value: str) -> str:
        """Tool names are matched exactly; only the empty name is rejected here."""
        if not value:
            raise ValueError("name must not be empty")
        return value

    @field_validator("arguments", mode="before")
    @classmethod
    def _default_arguments(cls, value: Any) -> Any:
        return {} if value is None else value


class JsonRpcRequest(BaseModel):
    """Incoming request envelope. ``jsonrpc`` may be omitted by lenient clients."""

    jsonrpc: Optional[str] = JSONRPC_VERSION
    id: Any = None
    method: str
    params: Optional[Dict[str, Any]] = None

    @field_validator("jsonrpc")
    @classmethod
    def _check_version(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value != JSONRPC_VERSION:
            raise ValueError("jsonrpc must be '2.0'")
        return value


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None


class JsonRpcResponse(BaseModel):
    """Outgoing envelope; exactly one of result/error is serialized."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[JsonRpcError] = None

    @classmethod
    def success(cls, request_id: Any, result: Dict[str, Any]) -> "JsonRpcResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, code: int, message: str, data: Optional[Dict[str, Any]] = None) -> "JsonRpcResponse":
        return cls(id=request_id, error=JsonRpcError(code=code, message=message, data=data))

    def to_wire(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        else:
            body["result"] = self.result if self.result is not None else {}
        return body


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """Fixed capability descriptor returned by initialize."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    server_info: ServerInfo = Field(..., alias="serverInfo")
    capabilities: Dict[str, Any] = Field(default_factory=lambda: {"tools": {}})

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
