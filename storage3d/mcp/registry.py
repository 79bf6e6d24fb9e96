"""Tool registry: name -> definition, handler and input model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

import structlog
from pydantic import BaseModel

from .base import BaseTool
from .protocol import ToolDefinition

logger = structlog.get_logger(__name__)

ToolHandler = Callable[[Any], Awaitable[Any]]


class DuplicateToolError(ValueError):
    """Raised when a tool name is registered twice."""


class UnknownToolError(LookupError):
    """Raised when the requested tool is missing."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Tool '{tool_name}' is not registered")
        self.tool_name = tool_name


class RegistryFrozenError(RuntimeError):
    """Raised when registering after the registry has been frozen."""


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    handler: ToolHandler
    input_model: Optional[Type[BaseModel]] = None

    @property
    def name(self) -> str:
        return self.definition.name


class ToolRegistry:
    """
    In-memory registry of MCP tools.

    Built once at startup and then frozen; lookups after that are plain
    dict reads, safe to share between concurrent requests.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, RegisteredTool] = {}
        self._frozen = False

    def register(
        self,
        definition: ToolDefinition,
        handler: ToolHandler,
        input_model: Optional[Type[BaseModel]] = None,
    ) -> RegisteredTool:
        """Register a tool; handler receives the validated input model (or the raw dict)."""
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{definition.name}': registry is frozen")
        if definition.name in self._tools:
            raise DuplicateToolError(f"Tool '{definition.name}' is already registered")

        entry = RegisteredTool(definition=definition, handler=handler, input_model=input_model)
        self._tools[definition.name] = entry
        logger.info("Registered MCP tool", tool=definition.name)
        return entry

    def register_tool(self, tool: BaseTool, name: Optional[str] = None) -> RegisteredTool:
        """Register a BaseTool implementation, optionally under an alias."""
        return self.register(tool.definition(name), tool, tool.input_model)

    def lookup(self, tool_name: str) -> RegisteredTool:
        """Return a registered tool or raise UnknownToolError."""
        entry = self._tools.get(tool_name)
        if entry is None:
            raise UnknownToolError(tool_name)
        return entry

    def list(self) -> List[ToolDefinition]:
        """Definitions in registration order."""
        return [entry.definition for entry in self._tools.values()]

    def names(self) -> List[str]:
        return list(self._tools)

    def freeze(self) -> "ToolRegistry":
        self._frozen = True
        logger.info("Tool registry frozen", tools=list(self._tools))
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
