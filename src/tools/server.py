"""MCP stdio server exposing the Confluence tools.

stdout carries the protocol stream, so all logging goes to stderr.
"""

import asyncio
import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .dispatcher import TOOL_DEFINITIONS, ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "confluence-gateway"


class ToolCallFailed(Exception):
    """Carries an error result's text back to the MCP host.

    The server library turns an exception raised by a tool handler into a
    result with isError set and the exception text as its content.
    """


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Register the tool handlers on a new MCP server.

    Args:
        dispatcher: Dispatcher the tool calls are routed to

    Returns:
        Configured (not yet running) Server
    """
    app = Server(SERVER_NAME)

    @app.list_tools()
    async def list_tools() -> List[Tool]:
        return [
            Tool(
                name=definition['name'],
                description=definition['description'],
                inputSchema=definition['inputSchema'],
            )
            for definition in TOOL_DEFINITIONS
        ]

    @app.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        # Operations block on HTTP; keep the protocol loop responsive
        result = await asyncio.to_thread(dispatcher.call, name, arguments or {})
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [TextContent(type="text", text=result.text)]

    return app


async def serve(dispatcher: ToolDispatcher) -> None:
    """Serve the tools over stdin/stdout until the host disconnects."""
    app = build_server(dispatcher)
    logger.info(f"{SERVER_NAME} MCP server running on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())
    logger.info(f"{SERVER_NAME} MCP server stopped")
