"""
Provider Manager - composes providers into one dispatchable tool surface

State is owned by the instance: ``providers`` (name -> provider) and
``tool_mappings`` (tool name -> ToolMapping). Both are written during
startup and only read while serving requests.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..protocol.errors import MappingConsistencyError, ToolNotFoundError
from ..registry.tools import ToolDefinition, ToolResult
from ..utils.logger import get_logger
from .provider import Provider

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolMapping:
    """Global index entry: which provider owns a tool"""
    provider: str
    original_name: str


@dataclass
class ProviderInitResult:
    """Outcome of initializing one provider"""
    name: str
    success: bool
    error: Optional[str] = None
    disabled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name, "success": self.success}
        if self.error is not None:
            result["error"] = self.error
        if self.disabled:
            result["disabled"] = True
        return result


class ProviderManager:
    """Manages all tool providers in the system"""

    def __init__(self):
        self.providers: Dict[str, Provider] = {}
        self.tool_mappings: Dict[str, ToolMapping] = {}

    def register_provider(self, provider: Provider) -> bool:
        """
        Register a provider and map its tools

        A provider registered under an existing name replaces the previous
        one (last registration wins).

        Returns:
            False when the provider is missing or has no name
        """
        name = getattr(provider, "name", None) if provider is not None else None
        if not name:
            logger.error("Cannot register provider: missing name or invalid provider")
            return False

        if name in self.providers:
            logger.warning(f"Provider {name} is already registered, it will be overwritten")

        self.providers[name] = provider
        logger.info(f"Registered provider: {name}")

        self._map_provider_tools(provider)
        return True

    def _map_provider_tools(self, provider: Provider):
        """Rebuild the mappings owned by ``provider``"""
        stale = [tool for tool, mapping in self.tool_mappings.items() if mapping.provider == provider.name]
        for tool_name in stale:
            del self.tool_mappings[tool_name]

        if not provider.is_enabled():
            logger.debug(f"Provider {provider.name} is disabled, no tools mapped")
        else:
            self._map_tools(provider)

        self._restore_shadowed_tools(stale, provider.name)

    def _restore_shadowed_tools(self, tool_names: List[str], released_by: str):
        """Hand tools released by one provider back to other enabled owners"""
        for tool_name in tool_names:
            if tool_name in self.tool_mappings:
                continue
            for name, other in self.providers.items():
                if name == released_by or not other.is_enabled():
                    continue
                if any(tool.name == tool_name for tool in other.get_tool_definitions()):
                    self.tool_mappings[tool_name] = ToolMapping(provider=name, original_name=tool_name)
            if tool_name in self.tool_mappings:
                logger.info(
                    f"Tool {tool_name} released by provider {released_by} "
                    f"is mapped back to provider {self.tool_mappings[tool_name].provider}"
                )

    def _map_tools(self, provider: Provider):
        for tool in provider.get_tool_definitions():
            existing = self.tool_mappings.get(tool.name)
            if existing is not None and existing.provider != provider.name:
                logger.warning(
                    f"Tool {tool.name} from provider {existing.provider} "
                    f"is overridden by provider {provider.name}"
                )

            self.tool_mappings[tool.name] = ToolMapping(provider=provider.name, original_name=tool.name)
            logger.debug(f"Mapped tool {tool.name} to provider {provider.name}")

    async def initialize_providers(self) -> List[ProviderInitResult]:
        """
        Initialize all registered providers in registration order

        A failing provider is recorded and the loop continues.
        """
        logger.info("Initializing all providers...")
        results: List[ProviderInitResult] = []

        for name, provider in self.providers.items():
            if not provider.is_enabled():
                logger.info(f"Provider {name} is disabled, skipping initialization")
                results.append(ProviderInitResult(name=name, success=False, disabled=True))
                continue

            try:
                success = await provider.initialize()
            except Exception as e:
                logger.error(f"Failed to initialize provider {name}: {e}", exc_info=True)
                results.append(ProviderInitResult(name=name, success=False, error=str(e) or type(e).__name__))
                continue

            results.append(ProviderInitResult(name=name, success=bool(success)))
            logger.info(f"Provider {name} initialized successfully")

        return results

    def get_all_tool_definitions(self) -> List[ToolDefinition]:
        """Tool definitions of every enabled provider, in registration order"""
        tools: List[ToolDefinition] = []

        for provider in self.providers.values():
            if provider.is_enabled():
                tools.extend(provider.get_tool_definitions())

        return tools

    def get_provider(self, name: str) -> Optional[Provider]:
        return self.providers.get(name)

    def list_tool_names(self) -> List[str]:
        return list(self.tool_mappings.keys())

    async def execute_tool(self, tool_name: str, args: Dict[str, Any]) -> ToolResult:
        """
        Execute a tool with given arguments

        Raises:
            ToolNotFoundError: no provider maps ``tool_name``
            MappingConsistencyError: the mapped provider is no longer registered
        """
        mapping = self.tool_mappings.get(tool_name)
        if mapping is None:
            raise ToolNotFoundError(tool_name)

        provider = self.providers.get(mapping.provider)
        if provider is None:
            logger.critical(
                f"Tool mapping for {tool_name} points at unregistered provider {mapping.provider}"
            )
            raise MappingConsistencyError(tool_name, mapping.provider)

        return await provider.execute_tool(mapping.original_name, args)
