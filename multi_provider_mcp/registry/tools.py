"""
Tool Registry - per-provider store of tool definitions, handlers and schemas

Each provider owns one ToolRegistry. Dispatch is a plain dict lookup keyed
by tool name; argument validation uses pydantic models.
"""

import copy
from typing import Dict, List, Any, Callable, Awaitable, Optional, Type
from dataclasses import dataclass, field

import pydantic
from mcp.types import CallToolResult, TextContent, Tool

from ..protocol.errors import ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

ToolResult = CallToolResult
ToolHandler = Callable[[Dict[str, Any]], Awaitable[ToolResult]]
ValidationSchema = Type[pydantic.BaseModel]


def text_result(text: str) -> ToolResult:
    """Wrap plain text as a single-item tool result"""
    return CallToolResult(content=[TextContent(type="text", text=text)])


@dataclass(frozen=True)
class ToolDefinition:
    """Advertised description of a tool: name, description and JSON input schema"""
    name: str
    description: str
    input_schema: Dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    def to_mcp_tool(self) -> Tool:
        """Convert to the MCP SDK tool type used in tools/list responses"""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=copy.deepcopy(self.input_schema)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema)
        }


class ToolRegistry:
    """Ordered tool definitions plus handler and schema lookup tables"""

    def __init__(self, owner: str = "unknown"):
        self.owner = owner
        self._definitions: List[ToolDefinition] = []
        self._handlers: Dict[str, ToolHandler] = {}
        self._schemas: Dict[str, ValidationSchema] = {}

    def register_tool(
        self,
        name: str,
        definition: ToolDefinition,
        handler: ToolHandler,
        schema: Optional[ValidationSchema] = None
    ) -> bool:
        """
        Register a tool

        Registering an existing name replaces its definition in place, so a
        tool is never advertised twice.

        Returns:
            False (and logs) when the registration call is malformed
        """
        if not name or definition is None or handler is None:
            logger.error(f"Failed to register tool in provider {self.owner}: missing required parameters")
            return False

        if definition.name != name:
            logger.error(
                f"Failed to register tool {name} in provider {self.owner}: "
                f"definition is named {definition.name}"
            )
            return False

        if name in self._handlers:
            logger.warning(f"Tool {name} is already registered in provider {self.owner}, replacing it")
            index = next(i for i, existing in enumerate(self._definitions) if existing.name == name)
            self._definitions[index] = definition
        else:
            self._definitions.append(definition)

        self._handlers[name] = handler
        if schema is not None:
            self._schemas[name] = schema
        else:
            self._schemas.pop(name, None)

        logger.info(f"Registered tool: {name} from provider {self.owner}")
        return True

    def get_tool_definitions(self) -> List[ToolDefinition]:
        return list(self._definitions)

    def get_tool_handler(self, name: str) -> Optional[ToolHandler]:
        return self._handlers.get(name)

    def validate_args(self, name: str, args: Any) -> Any:
        """
        Validate arguments against the tool's schema

        Tools without a schema get their arguments back unchanged.

        Raises:
            ValidationError: with one entry per offending field
        """
        schema = self._schemas.get(name)
        if schema is None:
            return args

        try:
            return schema.model_validate(args).model_dump()
        except pydantic.ValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"]
                }
                for error in e.errors()
            ]
            logger.error(f"Validation error for tool {name}: {errors}")
            raise ValidationError(name, errors) from e
