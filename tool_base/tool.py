"""
Base class for Todoist tools.

A tool is what the conversational host calls: it has a name, a description
the LLM reads to decide when to use it, a typed parameter schema and an
execute() method that talks to the Todoist API.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tool_base.common import (
    FieldDefinition,
    ValidationResult,
    coerce_field_value,
    validate_params,
)
from tool_base.output import ToolOutput


class ToolInputError(ValueError):
    """Raised when tool arguments don't match the tool's parameter schema."""

    def __init__(self, tool_name: str, result: ValidationResult):
        super().__init__(f"Invalid arguments for {tool_name}: {result.error_message}")
        self.tool_name = tool_name
        self.result = result


class TodoistTool(ABC):
    """
    Base class for tools.

    Subclasses define:
    - name: Unique tool name (e.g., "manage-assignments")
    - description: Help text for the LLM
    - get_params(): Parameter schema
    - execute(): The tool logic

    execute() may raise for fatal input problems; the registry turns any
    exception into an error output.
    """

    name: str
    description: str

    # Tools that only read data; advertised to the host as a hint
    read_only: bool = False

    @classmethod
    @abstractmethod
    def get_params(cls) -> list[FieldDefinition]:
        """Define the tool's parameters."""
        pass

    @classmethod
    def validate_args(cls, args: dict) -> ValidationResult:
        return validate_params(cls.get_params(), args)

    @classmethod
    def parse_args(cls, args: Optional[dict]) -> dict:
        """
        Validate arguments and fill in defaults.

        Raises:
            ToolInputError: If any argument violates the schema
        """
        args = args or {}
        result = cls.validate_args(args)
        if not result.valid:
            raise ToolInputError(cls.name, result)

        return {p.name: coerce_field_value(p, args.get(p.name)) for p in cls.get_params()}

    @classmethod
    def get_input_schema(cls) -> dict:
        """JSON schema for the tool's arguments (MCP ``inputSchema``)."""
        params = cls.get_params()
        return {
            "type": "object",
            "properties": {p.name: p.to_json_schema() for p in params},
            "required": [p.name for p in params if p.required],
        }

    @abstractmethod
    def execute(self, args: dict, client) -> ToolOutput:
        """
        Run the tool.

        Args:
            args: Arguments already passed through parse_args()
            client: Todoist API client

        Returns:
            ToolOutput with text digest and structured payload
        """
        pass
