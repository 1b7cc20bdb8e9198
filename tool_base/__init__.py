# Tool framework public exports

from tool_base.common import (
    FieldDefinition,
    FieldType,
    ValidationError,
    ValidationResult,
    coerce_field_value,
    validate_field_value,
    validate_params,
)
from tool_base.output import ToolOutput, get_error_output, get_tool_output
from tool_base.registry import ToolRegistry
from tool_base.tool import TodoistTool, ToolInputError

__all__ = [
    # Parameter schema
    "FieldType",
    "FieldDefinition",
    "ValidationError",
    "ValidationResult",
    "coerce_field_value",
    "validate_field_value",
    "validate_params",
    # Output
    "ToolOutput",
    "get_tool_output",
    "get_error_output",
    # Tools
    "TodoistTool",
    "ToolInputError",
    "ToolRegistry",
]
