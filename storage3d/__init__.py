"""3D model storage exposed as MCP tools."""

__version__ = "1.0.0"
