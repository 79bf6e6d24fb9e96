"""Validates tool arguments, runs handlers and normalizes their results."""

from __future__ import annotations

import time
from typing import Any, List, Mapping

import structlog
from pydantic import ValidationError

from .base import ToolExecutionError
from .protocol import ToolResult
from .registry import RegisteredTool, ToolRegistry

logger = structlog.get_logger(__name__)


class ToolExecutor:
    """
    Runs one tool call and always returns a ToolResult.

    Only UnknownToolError leaves ``execute``: the tool never ran, so there
    is no result to report through. Invalid arguments and any exception
    raised by a handler become ``isError=true`` results.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def execute(self, tool_name: str, raw_arguments: Any) -> ToolResult:
        tool = self._registry.lookup(tool_name)
        started = time.perf_counter()

        try:
            arguments = self._validate(tool, raw_arguments)
        except ValidationError as exc:
            message = format_validation_error(tool.name, exc)
            logger.info("Tool arguments rejected", tool=tool.name, error=message)
            return ToolResult.failure(message, code="invalid_arguments")
        except TypeError as exc:
            logger.info("Tool arguments rejected", tool=tool.name, error=str(exc))
            return ToolResult.failure(str(exc), code="invalid_arguments")

        try:
            output = await tool.handler(arguments)
        except ToolExecutionError as exc:
            logger.warning(
                "Tool invocation failed",
                tool=tool.name,
                error=str(exc),
                code=exc.code,
                retryable=exc.retryable,
                latency_ms=_elapsed_ms(started),
            )
            return ToolResult.failure(str(exc), code=exc.code, details=exc.details)
        except Exception as exc:
            logger.error(
                "Tool invocation crashed",
                tool=tool.name,
                error=str(exc),
                error_type=type(exc).__name__,
                latency_ms=_elapsed_ms(started),
                exc_info=True,
            )
            return ToolResult.failure(str(exc) or type(exc).__name__, code="internal_error")

        result = _normalize(output)
        logger.info(
            "Tool invocation finished",
            tool=tool.name,
            is_error=result.is_error,
            latency_ms=_elapsed_ms(started),
        )
        return result

    @staticmethod
    def _validate(tool: RegisteredTool, raw_arguments: Any) -> Any:
        if raw_arguments is None:
            raw_arguments = {}
        if not isinstance(raw_arguments, Mapping):
            raise TypeError(f"Invalid arguments for '{tool.name}': arguments must be an object")
        if tool.input_model is None:
            return dict(raw_arguments)
        return tool.input_model.model_validate(dict(raw_arguments))


def format_validation_error(tool_name: str, exc: ValidationError) -> str:
    """One line per violated field, using the wire (camelCase) field names."""
    problems: List[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return f"Invalid arguments for '{tool_name}': " + "; ".join(problems)


def _normalize(output: Any) -> ToolResult:
    if isinstance(output, ToolResult):
        return output
    if isinstance(output, str):
        return ToolResult.from_text(output)
    if isinstance(output, Mapping):
        return ToolResult.from_payload(dict(output))
    return ToolResult.from_payload({"result": output})


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
