"""
MCP server exposing the registered tools over stdio.
"""

from .server import SERVER_NAME, ToolCallError, create_server, serve_stdio

__all__ = [
    "SERVER_NAME",
    "ToolCallError",
    "create_server",
    "serve_stdio",
]
