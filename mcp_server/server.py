"""
MCP protocol glue.

Maps ``tools/list`` and ``tools/call`` onto the ToolRegistry. Tools are
blocking (httpx + thread pools), so calls run in a worker thread to keep the
event loop serving the transport.
"""

import asyncio
import logging

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from tool_base import ToolRegistry
from version import VERSION

logger = logging.getLogger(__name__)

SERVER_NAME = "todoist-assignments-mcp"

INSTRUCTIONS = """
Tools to help you manage assignments of Todoist tasks: find who can be
assigned in a shared project, check eligibility, and assign, unassign or
reassign many tasks at once.
"""


class ToolCallError(Exception):
    """Raised from call_tool so the MCP layer replies with isError=true."""


def create_server(registry: ToolRegistry, use_structured_content: bool = False) -> Server:
    """
    Build an MCP server for the tools in ``registry``.

    Args:
        registry: Tools to expose
        use_structured_content: Return payloads as native structuredContent
            instead of a JSON text block
    """
    server = Server(SERVER_NAME, version=VERSION, instructions=INSTRUCTIONS)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.get_input_schema(),
                annotations=types.ToolAnnotations(readOnlyHint=tool.read_only),
            )
            for tool in registry.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None):
        output = await asyncio.to_thread(registry.call, name, arguments or {})
        if output.is_error:
            raise ToolCallError(output.text)

        rendered = output.to_content(use_structured_content)
        content = [
            types.TextContent(type="text", text=block["text"])
            for block in rendered["content"]
        ]
        if "structuredContent" in rendered:
            return content, rendered["structuredContent"]
        return content

    return server


async def serve_stdio(server: Server) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    logger.info(f"Starting {SERVER_NAME} {VERSION} on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
