"""
Tool output in the shape MCP clients expect.

Every tool returns a short text digest for the model plus a structured,
JSON-serializable payload. ``structuredContent`` is a fairly recent MCP
feature; clients that don't support it get the payload as a second text
block carrying JSON instead.
"""

import json
from dataclasses import dataclass
from typing import Optional


@dataclass
class ToolOutput:
    """Result of a tool call."""

    text: str
    structured_content: Optional[dict] = None
    is_error: bool = False

    def to_content(self, use_structured_content: bool = False) -> dict:
        """
        Render as an MCP CallToolResult-like dict.

        Args:
            use_structured_content: Return the payload under
                ``structuredContent`` instead of as a JSON text block
        """
        if self.is_error:
            return {
                "content": [{"type": "text", "text": self.text}],
                "isError": True,
            }

        if self.structured_content is None:
            return {"content": [{"type": "text", "text": self.text}]}

        if use_structured_content:
            return {
                "content": [{"type": "text", "text": self.text}],
                "structuredContent": self.structured_content,
            }

        return {
            "content": [
                {"type": "text", "text": self.text},
                {
                    "type": "text",
                    "mimeType": "application/json",
                    "text": json.dumps(self.structured_content),
                },
            ]
        }


def get_tool_output(text_content: str, structured_content: dict) -> ToolOutput:
    return ToolOutput(text=text_content, structured_content=structured_content)


def get_error_output(error: str) -> ToolOutput:
    return ToolOutput(text=error, is_error=True)
