"""
Unit tests for tool_base/

Tests parameter schemas, argument validation, output rendering and the
registry's error handling.
"""

import json
from unittest.mock import MagicMock

import pytest

from tool_base import (
    FieldDefinition,
    FieldType,
    TodoistTool,
    ToolInputError,
    ToolOutput,
    ToolRegistry,
    coerce_field_value,
    get_error_output,
    get_tool_output,
    validate_field_value,
    validate_params,
)


class EchoTool(TodoistTool):
    """Tool that returns its arguments."""

    name = "echo"
    description = "Echo arguments back"
    read_only = True

    @classmethod
    def get_params(cls) -> list[FieldDefinition]:
        return [
            FieldDefinition(name="message", label="Message", field_type=FieldType.TEXT, required=True),
            FieldDefinition(
                name="mode",
                label="Mode",
                field_type=FieldType.SELECT,
                default="plain",
                options=["plain", "shout"],
            ),
            FieldDefinition(name="loud", label="Loud", field_type=FieldType.BOOLEAN, default=False),
        ]

    def execute(self, args: dict, client) -> ToolOutput:
        if args["message"] == "fail":
            raise RuntimeError("tool blew up")
        return get_tool_output(text_content=args["message"], structured_content=args)


class TestFieldDefinition:
    """Tests for FieldDefinition."""

    def test_string_list_schema(self):
        field = FieldDefinition(
            name="ids",
            label="IDs",
            field_type=FieldType.STRING_LIST,
            min_length=1,
            max_length=50,
            help_text="Task IDs",
        )
        assert field.to_json_schema() == {
            "description": "Task IDs",
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "maxItems": 50,
        }

    def test_select_schema(self):
        field = FieldDefinition(
            name="op",
            label="Operation",
            field_type=FieldType.SELECT,
            options=["a", "b"],
        )
        schema = field.to_json_schema()
        assert schema["type"] == "string"
        assert schema["enum"] == ["a", "b"]
        assert schema["description"] == "Operation"

    def test_boolean_default_in_schema(self):
        field = FieldDefinition(name="dry", label="Dry", field_type=FieldType.BOOLEAN, default=False)
        assert field.to_json_schema() == {"description": "Dry", "type": "boolean", "default": False}


class TestValidateFieldValue:
    """Tests for validate_field_value."""

    def test_required_missing(self):
        field = FieldDefinition(name="x", label="X", field_type=FieldType.TEXT, required=True)
        errors = validate_field_value(field, None)
        assert errors[0].message == "This field is required"

    def test_optional_missing(self):
        field = FieldDefinition(name="x", label="X", field_type=FieldType.TEXT)
        assert validate_field_value(field, None) == []

    def test_text_type(self):
        field = FieldDefinition(name="x", label="X", field_type=FieldType.TEXT)
        assert validate_field_value(field, 42)[0].message == "Must be a string"

    def test_text_length(self):
        field = FieldDefinition(name="x", label="X", field_type=FieldType.TEXT, min_length=1)
        assert validate_field_value(field, "a") == []
        assert validate_field_value(field, "")[0].message == "Minimum length is 1"

    def test_string_list(self):
        field = FieldDefinition(
            name="ids", label="IDs", field_type=FieldType.STRING_LIST, min_length=1, max_length=2
        )
        assert validate_field_value(field, ["a"]) == []
        assert validate_field_value(field, "a")[0].message == "Must be a list"
        assert validate_field_value(field, [])[0].message == "At least 1 item(s) required"
        assert validate_field_value(field, ["a", "b", "c"])[0].message == "At most 2 item(s) allowed"
        assert validate_field_value(field, [1])[0].message == "All items must be strings"

    def test_select(self):
        field = FieldDefinition(
            name="op", label="Op", field_type=FieldType.SELECT, options=["assign", "unassign"]
        )
        assert validate_field_value(field, "assign") == []
        assert validate_field_value(field, "delete")[0].message == "Invalid option: delete"

    @pytest.mark.parametrize("value", [True, "true", "0"])
    def test_boolean_accepted(self, value):
        field = FieldDefinition(name="b", label="B", field_type=FieldType.BOOLEAN)
        assert validate_field_value(field, value) == []

    def test_boolean_rejected(self):
        field = FieldDefinition(name="b", label="B", field_type=FieldType.BOOLEAN)
        assert validate_field_value(field, "maybe")[0].message == "Must be a boolean"

    def test_validate_params_collects_all(self):
        result = validate_params(EchoTool.get_params(), {"mode": "whisper", "loud": "maybe"})

        assert result.valid is False
        assert [e.field for e in result.errors] == ["message", "mode", "loud"]
        assert result.error_message.startswith("message: This field is required; ")


class TestCoerceFieldValue:
    def test_default_for_missing(self):
        field = FieldDefinition(name="b", label="B", field_type=FieldType.BOOLEAN, default=False)
        assert coerce_field_value(field, None) is False

    def test_boolean_strings(self):
        field = FieldDefinition(name="b", label="B", field_type=FieldType.BOOLEAN)
        assert coerce_field_value(field, "true") is True
        assert coerce_field_value(field, "0") is False


class TestTodoistTool:
    """Tests for the TodoistTool base class."""

    def test_parse_args_fills_defaults(self):
        assert EchoTool.parse_args({"message": "hi"}) == {
            "message": "hi",
            "mode": "plain",
            "loud": False,
        }

    def test_parse_args_raises(self):
        with pytest.raises(ToolInputError) as exc_info:
            EchoTool.parse_args({"mode": "plain"})

        assert exc_info.value.tool_name == "echo"
        assert str(exc_info.value) == "Invalid arguments for echo: message: This field is required"

    def test_input_schema(self):
        schema = EchoTool.get_input_schema()

        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"message", "mode", "loud"}
        assert schema["required"] == ["message"]


class TestToolOutput:
    """Tests for rendering ToolOutput as MCP content."""

    def test_json_text_block_by_default(self):
        output = get_tool_output(text_content="Done", structured_content={"n": 1})

        rendered = output.to_content()

        assert rendered["content"][0] == {"type": "text", "text": "Done"}
        assert rendered["content"][1]["mimeType"] == "application/json"
        assert json.loads(rendered["content"][1]["text"]) == {"n": 1}
        assert "structuredContent" not in rendered

    def test_structured_content(self):
        output = get_tool_output(text_content="Done", structured_content={"n": 1})

        rendered = output.to_content(use_structured_content=True)

        assert rendered == {
            "content": [{"type": "text", "text": "Done"}],
            "structuredContent": {"n": 1},
        }

    def test_error(self):
        rendered = get_error_output("Bad things").to_content(use_structured_content=True)
        assert rendered == {
            "content": [{"type": "text", "text": "Bad things"}],
            "isError": True,
        }

    def test_text_only(self):
        rendered = ToolOutput(text="plain").to_content()
        assert rendered == {"content": [{"type": "text", "text": "plain"}]}


class TestToolRegistry:
    """Tests for ToolRegistry."""

    @pytest.fixture
    def registry(self):
        registry = ToolRegistry(MagicMock())
        registry.register(EchoTool())
        return registry

    def test_get_and_list(self, registry):
        assert isinstance(registry.get("echo"), EchoTool)
        assert registry.get("nope") is None
        assert [t.name for t in registry.list_tools()] == ["echo"]

    def test_register_requires_name(self, registry):
        tool = EchoTool()
        tool.name = ""
        with pytest.raises(ValueError):
            registry.register(tool)

    def test_register_overwrites(self, registry):
        replacement = EchoTool()
        registry.register(replacement)
        assert registry.get("echo") is replacement

    def test_call(self, registry):
        output = registry.call("echo", {"message": "hi", "loud": "true"})

        assert output.is_error is False
        assert output.structured_content == {"message": "hi", "mode": "plain", "loud": True}

    def test_call_none_arguments(self, registry):
        output = registry.call("echo", None)
        assert output.is_error is True

    def test_unknown_tool(self, registry):
        output = registry.call("nope", {})
        assert output.is_error is True
        assert output.text == "Unknown tool: nope"

    def test_invalid_arguments(self, registry):
        output = registry.call("echo", {"message": "hi", "mode": "whisper"})

        assert output.is_error is True
        assert output.text == "Invalid arguments for echo: mode: Invalid option: whisper"

    def test_tool_exception_becomes_error_output(self, registry):
        output = registry.call("echo", {"message": "fail"})

        assert output.is_error is True
        assert output.text == "tool blew up"
