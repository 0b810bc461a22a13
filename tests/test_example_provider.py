"""Tests for the example provider's echo and calculate tools."""

import pytest

from multi_provider_mcp.config import ExampleConfig
from multi_provider_mcp.protocol.errors import ToolExecutionError, ValidationError
from multi_provider_mcp.providers.example import ExampleProvider


@pytest.fixture
def provider(example_config) -> ExampleProvider:
    return ExampleProvider(example_config)


def text_of(result) -> str:
    return result.content[0].text


class TestExampleProvider:

    def test_registers_tools(self, provider):
        assert [t.name for t in provider.get_tool_definitions()] == ["echo", "calculate"]

    def test_disabled_by_config(self):
        assert ExampleProvider(ExampleConfig(enabled=False)).is_enabled() is False

    def test_default_config_enabled(self):
        assert ExampleProvider().is_enabled() is True

    def test_calculate_schema_advertises_operations(self, provider):
        calculate = provider.get_tool_definitions()[1]
        assert calculate.input_schema["properties"]["operation"]["enum"] == [
            "add", "subtract", "multiply", "divide"
        ]

    @pytest.mark.asyncio
    async def test_echo(self, provider):
        result = await provider.execute_tool("echo", {"message": "hi"})
        assert text_of(result) == "Echo: hi"

    @pytest.mark.asyncio
    async def test_echo_requires_message(self, provider):
        with pytest.raises(ValidationError):
            await provider.execute_tool("echo", {})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation,a,b,expected", [
        ("add", 2, 3, "2 add 3 = 5"),
        ("subtract", 10, 4, "10 subtract 4 = 6"),
        ("multiply", 2.5, 4, "2.5 multiply 4 = 10"),
        ("divide", 10, 4, "10 divide 4 = 2.5"),
        ("divide", 9, 3, "9 divide 3 = 3"),
    ])
    async def test_calculate(self, provider, operation, a, b, expected):
        result = await provider.execute_tool("calculate", {"operation": operation, "a": a, "b": b})
        assert expected in text_of(result)

    @pytest.mark.asyncio
    async def test_add_result_text(self, provider):
        result = await provider.execute_tool("calculate", {"operation": "add", "a": 2, "b": 3})
        assert text_of(result) == "Result of 2 add 3 = 5"

    @pytest.mark.asyncio
    async def test_divide_by_zero_is_an_error(self, provider):
        with pytest.raises(ToolExecutionError) as exc_info:
            await provider.execute_tool("calculate", {"operation": "divide", "a": 10, "b": 0})

        assert isinstance(exc_info.value.cause, ValueError)
        assert "cannot divide by zero" in str(exc_info.value).lower()

    @pytest.mark.asyncio
    async def test_large_integral_float_keeps_exponent_form(self, provider):
        result = await provider.execute_tool("calculate", {"operation": "multiply", "a": 1e308, "b": 1})
        assert text_of(result) == "Result of 1e+308 multiply 1 = 1e+308"

    @pytest.mark.asyncio
    async def test_overflowing_result_is_an_error(self, provider):
        with pytest.raises(ToolExecutionError) as exc_info:
            await provider.execute_tool("calculate", {"operation": "divide", "a": 1e308, "b": 1e-308})

        assert "not a finite number" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("a,b", [(True, 3), (1, "3"), (None, 2)])
    async def test_non_numeric_operands_rejected(self, provider, a, b):
        with pytest.raises(ValidationError):
            await provider.execute_tool("calculate", {"operation": "add", "a": a, "b": b})

    @pytest.mark.asyncio
    async def test_unknown_operation_rejected_by_schema(self, provider):
        with pytest.raises(ValidationError) as exc_info:
            await provider.execute_tool("calculate", {"operation": "modulo", "a": 1, "b": 2})

        assert [e["field"] for e in exc_info.value.errors] == ["operation"]
