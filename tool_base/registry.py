"""
Tool registry.

Keeps the tool instances exposed to the host and runs them, turning any
exception a tool raises into an error output so the host always gets a
well-formed response.
"""

import logging
from typing import Optional

from tool_base.output import ToolOutput, get_error_output
from tool_base.tool import TodoistTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registered tools, bound to one Todoist client."""

    def __init__(self, client):
        self.client = client
        self._tools: dict[str, TodoistTool] = {}

    def register(self, tool: TodoistTool) -> None:
        if not getattr(tool, "name", None):
            raise ValueError(f"{type(tool).__name__} must define a name")
        if tool.name in self._tools:
            logger.warning(f"Overwriting existing tool: {tool.name}")

        self._tools[tool.name] = tool
        logger.info(f"Registered tool: {tool.name}")

    def get(self, name: str) -> Optional[TodoistTool]:
        return self._tools.get(name)

    def list_tools(self) -> list[TodoistTool]:
        return list(self._tools.values())

    def call(self, name: str, arguments: Optional[dict]) -> ToolOutput:
        """
        Validate arguments and execute a tool.

        Never raises: unknown tools, schema violations and tool failures all
        come back as error outputs.
        """
        tool = self._tools.get(name)
        if not tool:
            return get_error_output(f"Unknown tool: {name}")

        try:
            args = tool.parse_args(arguments)
            return tool.execute(args, self.client)
        except Exception as e:
            logger.error(
                f"Error executing tool {name} with args {arguments}: {e}",
                exc_info=True,
            )
            return get_error_output(str(e) or "An unknown error occurred")
