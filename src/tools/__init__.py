"""Tool layer: JSON-in/text-out tools over ConfluenceAPI and their MCP server."""

from .dispatcher import TOOL_DEFINITIONS, ToolDispatcher, ToolNotFoundError, ToolResult

__all__ = [
    "TOOL_DEFINITIONS",
    "ToolDispatcher",
    "ToolNotFoundError",
    "ToolResult",
]
