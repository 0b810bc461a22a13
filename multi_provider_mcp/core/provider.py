"""
Provider contract and default implementation

The manager only relies on the ``Provider`` protocol. ``BaseProvider``
implements it by composing a ToolRegistry and an immutable enabled flag.
"""

from typing import Any, Dict, List, Optional, Protocol

from ..protocol.errors import ProviderDisabledError, ToolExecutionError, ToolNotFoundError
from ..registry.tools import ToolDefinition, ToolHandler, ToolRegistry, ToolResult, ValidationSchema
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Provider(Protocol):
    """Interface every provider exposes to the ProviderManager"""

    name: str

    def is_enabled(self) -> bool: ...

    async def initialize(self) -> bool: ...

    def get_tool_definitions(self) -> List[ToolDefinition]: ...

    async def execute_tool(self, tool_name: str, args: Dict[str, Any]) -> ToolResult: ...


class BaseProvider:
    """Reusable provider behaviour: enablement, tool registry, validate and execute"""

    def __init__(self, name: str, enabled: bool = True, registry: Optional[ToolRegistry] = None):
        self.name = name
        self._enabled = bool(enabled)
        self.registry = registry if registry is not None else ToolRegistry(owner=name)

    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _disable(self, reason: str):
        """Force-disable during construction (missing configuration)"""
        logger.warning(f"Provider {self.name} disabled: {reason}")
        self._enabled = False

    async def initialize(self) -> bool:
        """
        Initialize the provider

        Returns False without side effects when disabled. Subclasses add
        provider-specific startup in ``on_initialize``.
        """
        if not self.is_enabled():
            logger.info(f"Provider {self.name} is disabled, skipping initialization")
            return False

        logger.info(f"Initializing provider: {self.name}")
        await self.on_initialize()
        return True

    async def on_initialize(self):
        """Provider-specific startup hook (no-op by default)"""

    def register_tool(
        self,
        name: str,
        definition: ToolDefinition,
        handler: ToolHandler,
        schema: Optional[ValidationSchema] = None
    ) -> bool:
        return self.registry.register_tool(name, definition, handler, schema)

    def get_tool_definitions(self) -> List[ToolDefinition]:
        return self.registry.get_tool_definitions()

    def get_tool_handler(self, name: str) -> Optional[ToolHandler]:
        return self.registry.get_tool_handler(name)

    def validate_args(self, tool_name: str, args: Any) -> Any:
        return self.registry.validate_args(tool_name, args)

    async def execute_tool(self, tool_name: str, args: Dict[str, Any]) -> ToolResult:
        """
        Run a tool with the given arguments

        Raises:
            ProviderDisabledError: provider is disabled
            ToolNotFoundError: no handler registered under ``tool_name``
            ValidationError: arguments rejected by the tool's schema
            ToolExecutionError: the handler raised (original kept as cause)
        """
        if not self.is_enabled():
            raise ProviderDisabledError(self.name)

        handler = self.get_tool_handler(tool_name)
        if handler is None:
            raise ToolNotFoundError(tool_name, self.name)

        validated_args = self.validate_args(tool_name, args)

        try:
            return await handler(validated_args)
        except Exception as e:
            logger.error(f"Error executing tool {tool_name} in provider {self.name}: {e}", exc_info=True)
            raise ToolExecutionError(tool_name, e) from e

    def __repr__(self) -> str:
        state = "enabled" if self._enabled else "disabled"
        return f"<{type(self).__name__} {self.name} ({state}, {len(self.get_tool_definitions())} tools)>"
