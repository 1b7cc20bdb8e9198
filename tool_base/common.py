"""
Parameter schema building blocks shared by all tools.

- FieldDefinition: declares one tool parameter
- FieldType: supported parameter types
- ValidationResult: result of validating tool arguments

Definitions double as the JSON schema advertised to the MCP host, so the
same list drives both validation and the ``inputSchema`` the LLM sees.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class FieldType(Enum):
    """Supported parameter types."""

    TEXT = "text"
    BOOLEAN = "boolean"
    SELECT = "select"
    STRING_LIST = "string_list"


@dataclass
class FieldDefinition:
    """
    Defines a tool parameter.

    Attributes:
        name: Argument key as sent by the host
        label: Short human-readable label
        field_type: Type of the value
        required: Whether the argument must be present
        default: Value used when the argument is omitted
        help_text: Description shown to the LLM
        options: For select fields - allowed values
        min_length/max_length: Characters for text, items for string lists
    """

    name: str
    label: str
    field_type: FieldType
    required: bool = False
    default: Any = None
    help_text: str = ""

    options: list[str] = field(default_factory=list)

    min_length: Optional[int] = None
    max_length: Optional[int] = None

    def to_json_schema(self) -> dict:
        """JSON schema fragment for this parameter."""
        schema: dict[str, Any] = {"description": self.help_text or self.label}

        if self.field_type == FieldType.TEXT:
            schema["type"] = "string"
            if self.min_length is not None:
                schema["minLength"] = self.min_length
            if self.max_length is not None:
                schema["maxLength"] = self.max_length
        elif self.field_type == FieldType.BOOLEAN:
            schema["type"] = "boolean"
        elif self.field_type == FieldType.SELECT:
            schema["type"] = "string"
            schema["enum"] = list(self.options)
        elif self.field_type == FieldType.STRING_LIST:
            schema["type"] = "array"
            schema["items"] = {"type": "string"}
            if self.min_length is not None:
                schema["minItems"] = self.min_length
            if self.max_length is not None:
                schema["maxItems"] = self.max_length

        if self.default is not None:
            schema["default"] = self.default

        return schema


@dataclass
class ValidationError:
    """Validation error for a specific field."""

    field: str
    message: str


@dataclass
class ValidationResult:
    """Result of argument validation."""

    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def error_message(self) -> str:
        """Combined error message for logging/display."""
        return "; ".join(f"{e.field}: {e.message}" for e in self.errors)


def validate_field_value(
    field_def: FieldDefinition, value: Any
) -> list[ValidationError]:
    """
    Validate a single value against its definition.

    Returns a list of ValidationErrors (empty if valid).
    """
    errors = []

    if field_def.required and (value is None or value == ""):
        errors.append(ValidationError(field_def.name, "This field is required"))
        return errors

    if value is None:
        return errors

    field_type = field_def.field_type

    if field_type == FieldType.TEXT:
        if not isinstance(value, str):
            errors.append(ValidationError(field_def.name, "Must be a string"))
            return errors
        if field_def.min_length is not None and len(value) < field_def.min_length:
            errors.append(
                ValidationError(field_def.name, f"Minimum length is {field_def.min_length}")
            )
        if field_def.max_length is not None and len(value) > field_def.max_length:
            errors.append(
                ValidationError(field_def.name, f"Maximum length is {field_def.max_length}")
            )

    elif field_type == FieldType.SELECT:
        if field_def.options and value not in field_def.options:
            errors.append(ValidationError(field_def.name, f"Invalid option: {value}"))

    elif field_type == FieldType.STRING_LIST:
        if not isinstance(value, list):
            errors.append(ValidationError(field_def.name, "Must be a list"))
            return errors
        if any(not isinstance(v, str) for v in value):
            errors.append(ValidationError(field_def.name, "All items must be strings"))
        if field_def.min_length is not None and len(value) < field_def.min_length:
            errors.append(
                ValidationError(
                    field_def.name, f"At least {field_def.min_length} item(s) required"
                )
            )
        if field_def.max_length is not None and len(value) > field_def.max_length:
            errors.append(
                ValidationError(
                    field_def.name, f"At most {field_def.max_length} item(s) allowed"
                )
            )

    elif field_type == FieldType.BOOLEAN:
        if not isinstance(value, bool):
            # Allow string representations
            if str(value).lower() not in ("true", "false", "1", "0"):
                errors.append(ValidationError(field_def.name, "Must be a boolean"))

    return errors


def validate_params(
    field_definitions: list[FieldDefinition], params: dict
) -> ValidationResult:
    """
    Validate an arguments dict against a list of field definitions.

    Args:
        field_definitions: Parameters declared by the tool
        params: Arguments sent by the host

    Returns:
        ValidationResult with valid flag and any errors
    """
    all_errors = []

    for field_def in field_definitions:
        all_errors.extend(validate_field_value(field_def, params.get(field_def.name)))

    return ValidationResult(valid=len(all_errors) == 0, errors=all_errors)


def coerce_field_value(field_def: FieldDefinition, value: Any) -> Any:
    """Normalise an already-validated value to its Python type."""
    if value is None:
        return field_def.default
    if field_def.field_type == FieldType.BOOLEAN and not isinstance(value, bool):
        return str(value).lower() in ("true", "1")
    return value
