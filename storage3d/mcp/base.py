"""Base abstractions for MCP tools."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .protocol import ToolDefinition


class ToolExecutionError(RuntimeError):
    """Raised when the tool fails to produce a result."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "tool_error",
        retryable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retryable = retryable
        self.details = details or {}


class DecodeError(ToolExecutionError):
    """Raised when an encoded tool argument cannot be decoded."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message, code="decode_error", details={"field": field})
        self.field = field


class ToolInput(BaseModel):
    """
    Base input model for tool arguments.

    Arguments arrive camelCased, kinds are checked strictly (no "1" -> 1),
    and unknown fields are dropped so newer clients keep working.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
        protected_namespaces=(),
    )


class BaseTool(ABC):
    """Abstract base class for MCP tools."""

    name: str
    description: str = ""
    input_model: Type[ToolInput]

    def definition(self, name: Optional[str] = None) -> ToolDefinition:
        """Return the ToolDefinition for discovery, optionally under an alias."""
        return ToolDefinition(
            name=name or self.name,
            description=self.description,
            input_schema=self.input_model.model_json_schema(by_alias=True),
        )

    async def __call__(self, payload: ToolInput) -> Dict[str, Any]:
        return await self._execute(payload)

    @abstractmethod
    async def _execute(self, payload: ToolInput) -> Dict[str, Any]:
        """Execute tool logic and return plain dict."""
