"""
Tests for the per-provider ToolRegistry: registration rules, duplicate
handling and schema validation.
"""

import pytest
from pydantic import BaseModel

from multi_provider_mcp.protocol.errors import ErrorCode, ValidationError
from multi_provider_mcp.registry.tools import ToolDefinition, ToolRegistry, text_result


class GreetArgs(BaseModel):
    name: str
    times: int = 1


async def greet(args):
    return text_result(f"hello {args['name']}")


async def shout(args):
    return text_result(f"HELLO {args['name']}")


def greet_definition(description: str = "Greets someone") -> ToolDefinition:
    return ToolDefinition(
        name="greet",
        description=description,
        input_schema={
            "type": "object",
            "properties": {"name": {"type": "string"}, "times": {"type": "integer", "default": 1}},
            "required": ["name"]
        }
    )


class TestRegisterTool:
    """Registration returns booleans and never raises."""

    def setup_method(self):
        self.registry = ToolRegistry(owner="test")

    def test_register_success(self):
        assert self.registry.register_tool("greet", greet_definition(), greet, GreetArgs) is True
        assert [t.name for t in self.registry.get_tool_definitions()] == ["greet"]
        assert self.registry.get_tool_handler("greet") is greet

    @pytest.mark.parametrize("name,definition,handler", [
        ("", greet_definition(), greet),
        (None, greet_definition(), greet),
        ("greet", None, greet),
        ("greet", greet_definition(), None),
    ])
    def test_register_missing_parameters_returns_false(self, name, definition, handler):
        assert self.registry.register_tool(name, definition, handler) is False
        assert self.registry.get_tool_definitions() == []

    def test_register_name_mismatch_returns_false(self):
        assert self.registry.register_tool("other", greet_definition(), greet) is False
        assert self.registry.get_tool_handler("other") is None

    def test_definitions_keep_registration_order(self):
        for name in ["b", "a", "c"]:
            self.registry.register_tool(name, ToolDefinition(name=name, description=name), greet)

        assert [t.name for t in self.registry.get_tool_definitions()] == ["b", "a", "c"]

    def test_get_tool_definitions_returns_copy(self):
        self.registry.register_tool("greet", greet_definition(), greet)
        self.registry.get_tool_definitions().clear()

        assert len(self.registry.get_tool_definitions()) == 1

    def test_duplicate_name_replaces_definition_in_place(self):
        self.registry.register_tool("first", ToolDefinition(name="first", description="1"), greet)
        self.registry.register_tool("greet", greet_definition("old"), greet, GreetArgs)
        self.registry.register_tool("last", ToolDefinition(name="last", description="3"), greet)

        assert self.registry.register_tool("greet", greet_definition("new"), shout) is True

        definitions = self.registry.get_tool_definitions()
        assert [t.name for t in definitions] == ["first", "greet", "last"]
        assert definitions[1].description == "new"
        assert self.registry.get_tool_handler("greet") is shout

    def test_duplicate_without_schema_drops_old_schema(self):
        self.registry.register_tool("greet", greet_definition(), greet, GreetArgs)
        self.registry.register_tool("greet", greet_definition(), shout)

        assert self.registry.validate_args("greet", {"anything": 1}) == {"anything": 1}


class TestValidateArgs:

    def setup_method(self):
        self.registry = ToolRegistry(owner="test")
        self.registry.register_tool("greet", greet_definition(), greet, GreetArgs)
        self.registry.register_tool("raw", ToolDefinition(name="raw", description="raw"), greet)

    def test_no_schema_is_identity(self):
        args = {"whatever": [1, 2, 3]}
        assert self.registry.validate_args("raw", args) is args

    def test_unknown_tool_is_identity(self):
        args = {"x": 1}
        assert self.registry.validate_args("missing", args) is args

    def test_schema_applies_defaults(self):
        assert self.registry.validate_args("greet", {"name": "Ana"}) == {"name": "Ana", "times": 1}

    def test_schema_coerces_values(self):
        assert self.registry.validate_args("greet", {"name": "Ana", "times": "3"})["times"] == 3

    def test_missing_field_reports_field_detail(self):
        with pytest.raises(ValidationError) as exc_info:
            self.registry.validate_args("greet", {"times": 2})

        error = exc_info.value
        assert error.code == ErrorCode.INVALID_PARAMS
        assert error.tool_name == "greet"
        assert [e["field"] for e in error.errors] == ["name"]
        assert error.errors[0]["type"] == "missing"
        assert error.data["errors"] == error.errors

    def test_multiple_invalid_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            self.registry.validate_args("greet", {"name": 5, "times": "many"})

        fields = {e["field"] for e in exc_info.value.errors}
        assert fields == {"name", "times"}

    def test_non_object_arguments_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.registry.validate_args("greet", ["Ana"])

        assert "<root>" in exc_info.value.message


class TestToolDefinition:

    def test_definition_is_immutable(self):
        definition = greet_definition()
        with pytest.raises(AttributeError):
            definition.name = "other"

    def test_to_mcp_tool(self):
        tool = greet_definition().to_mcp_tool()

        assert tool.name == "greet"
        assert tool.description == "Greets someone"
        assert tool.inputSchema["required"] == ["name"]

    def test_to_mcp_tool_copies_schema(self):
        definition = greet_definition()
        tool = definition.to_mcp_tool()
        tool.inputSchema["required"].append("times")

        assert definition.input_schema["required"] == ["name"]
