"""Model Context Protocol (MCP) primitives: registry, executor and JSON-RPC dispatcher."""

from .base import BaseTool, DecodeError, ToolExecutionError, ToolInput
from .dispatcher import INTERNAL_ERROR, METHOD_NOT_FOUND, ProtocolDispatcher
from .executor import ToolExecutor
from .protocol import ToolCallRequest, ToolDefinition, ToolResult
from .registry import DuplicateToolError, ToolRegistry, UnknownToolError

__all__ = [
    "BaseTool",
    "DecodeError",
    "ToolExecutionError",
    "ToolInput",
    "INTERNAL_ERROR",
    "METHOD_NOT_FOUND",
    "ProtocolDispatcher",
    "ToolExecutor",
    "ToolCallRequest",
    "ToolDefinition",
    "ToolResult",
    "DuplicateToolError",
    "ToolRegistry",
    "UnknownToolError",
]
