"""Unit tests for the MCP ToolRegistry."""

import pytest

from storage3d.mcp.base import BaseTool, ToolInput
from storage3d.mcp.protocol import ToolDefinition
from storage3d.mcp.registry import (
    DuplicateToolError,
    RegistryFrozenError,
    ToolRegistry,
    UnknownToolError,
)


class EchoInput(ToolInput):
    message: str


class EchoTool(BaseTool):
    """Mock tool for testing."""

    name = "echo"
    description = "Echo the message back"
    input_model = EchoInput

    async def _execute(self, payload):
        return {"echo": payload.message}


async def _noop(arguments):
    return {"ok": True}


def _definition(name, description="d"):
    return ToolDefinition(name=name, description=description)


class TestToolRegistry:
    """Test suite for ToolRegistry."""

    def test_register_and_lookup(self):
        """A registered handler is returned by lookup."""
        registry = ToolRegistry()
        registry.register(_definition("alpha"), _noop)

        entry = registry.lookup("alpha")

        assert entry.name == "alpha"
        assert entry.handler is _noop
        assert entry.input_model is None

    def test_register_duplicate_raises(self):
        """Registering the same name twice fails."""
        registry = ToolRegistry()
        registry.register(_definition("alpha"), _noop)

        with pytest.raises(DuplicateToolError, match="already registered"):
            registry.register(_definition("alpha", "other"), _noop)

    def test_lookup_unknown_raises(self):
        registry = ToolRegistry()

        with pytest.raises(UnknownToolError) as excinfo:
            registry.lookup("missing")

        assert excinfo.value.tool_name == "missing"
        assert isinstance(excinfo.value, LookupError)

    def test_list_preserves_registration_order(self):
        """tools/list relies on insertion order, not alphabetical order."""
        registry = ToolRegistry()
        names = ["zeta", "alpha", "mu", "beta"]
        for index, name in enumerate(names):
            registry.register(_definition(name, f"description {index}"), _noop)

        listed = registry.list()

        assert [d.name for d in listed] == names
        assert [d.description for d in listed] == [f"description {i}" for i in range(4)]

    def test_register_tool_uses_input_model_schema(self):
        registry = ToolRegistry()
        tool = EchoTool()

        entry = registry.register_tool(tool)

        schema = entry.definition.input_schema
        assert entry.handler is tool
        assert entry.input_model is EchoInput
        assert schema["required"] == ["message"]
        assert schema["properties"]["message"]["type"] == "string"

    def test_register_tool_under_alias(self):
        registry = ToolRegistry()
        tool = EchoTool()
        registry.register_tool(tool)
        registry.register_tool(tool, name="say")

        assert registry.names() == ["echo", "say"]
        assert registry.lookup("say").definition.description == tool.description

    def test_frozen_registry_rejects_registration(self):
        registry = ToolRegistry()
        registry.register(_definition("alpha"), _noop)
        registry.freeze()

        with pytest.raises(RegistryFrozenError):
            registry.register(_definition("beta"), _noop)

        assert registry.frozen is True
        assert "alpha" in registry
        assert len(registry) == 1

    def test_definitions_are_immutable(self):
        definition = _definition("alpha")

        with pytest.raises(Exception):
            definition.name = "beta"
