"""
Example Provider - demonstrates how a provider registers and implements tools
"""

import math
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, StrictFloat, StrictInt

from ..config import ExampleConfig
from ..core.provider import BaseProvider
from ..registry.tools import ToolDefinition, ToolResult, text_result

Number = Union[StrictInt, StrictFloat]

# Floats beyond this magnitude are not exact integers
MAX_SAFE_INTEGER = 2 ** 53


class EchoArgs(BaseModel):
    message: str


class CalculateArgs(BaseModel):
    operation: Literal["add", "subtract", "multiply", "divide"]
    a: Number
    b: Number


def _format_number(value: Union[int, float]) -> str:
    """Render integral floats in the safe integer range without a trailing .0"""
    if isinstance(value, float) and value.is_integer() and abs(value) < MAX_SAFE_INTEGER:
        return str(int(value))
    return str(value)


class ExampleProvider(BaseProvider):
    """Demo provider with an echo tool and a four-operation calculator"""

    def __init__(self, config: Optional[ExampleConfig] = None):
        config = config or ExampleConfig()
        super().__init__("example", enabled=config.enabled)
        self.config = config

        self._register_tools()

    def _register_tools(self):
        self.register_tool(
            "echo",
            ToolDefinition(
                name="echo",
                description="Ecoa uma mensagem de volta",
                input_schema={
                    "type": "object",
                    "properties": {
                        "message": {"type": "string", "description": "Mensagem para ecoar de volta"}
                    },
                    "required": ["message"]
                }
            ),
            self._echo,
            EchoArgs
        )

        self.register_tool(
            "calculate",
            ToolDefinition(
                name="calculate",
                description="Executa uma operação matemática simples",
                input_schema={
                    "type": "object",
                    "properties": {
                        "operation": {
                            "type": "string",
                            "enum": ["add", "subtract", "multiply", "divide"],
                            "description": "Operação matemática a ser executada"
                        },
                        "a": {"type": "number", "description": "Primeiro operando"},
                        "b": {"type": "number", "description": "Segundo operando"}
                    },
                    "required": ["operation", "a", "b"]
                }
            ),
            self._calculate,
            CalculateArgs
        )

    async def _echo(self, args: Dict[str, Any]) -> ToolResult:
        return text_result(f"Echo: {args['message']}")

    async def _calculate(self, args: Dict[str, Any]) -> ToolResult:
        operation, a, b = args["operation"], args["a"], args["b"]

        if operation == "add":
            result = a + b
        elif operation == "subtract":
            result = a - b
        elif operation == "multiply":
            result = a * b
        elif operation == "divide":
            if b == 0:
                raise ValueError("Cannot divide by zero")
            result = a / b
        else:
            raise ValueError(f"Unknown operation: {operation}")

        if isinstance(result, float) and not math.isfinite(result):
            raise ValueError(f"Result of {operation} is not a finite number")

        return text_result(
            f"Result of {_format_number(a)} {operation} {_format_number(b)} = {_format_number(result)}"
        )
