"""
Multi-Provider MCP Server

Bridges MCP "tools/list" and "tools/call" requests to the ProviderManager
using the official MCP SDK low-level server. Tools are not declared here:
every provider registers its own, and the server advertises whatever the
enabled providers expose.
"""

import time
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .config import ServerConfig
from .core.provider import Provider
from .core.provider_manager import ProviderInitResult, ProviderManager
from .registry.tools import ToolResult
from .utils.logger import MCPOperationsLogger, get_logger

logger = get_logger(__name__)


class MCPServer:
    """MCP server that manages providers and their tools"""

    def __init__(
        self,
        server_config: Optional[ServerConfig] = None,
        provider_manager: Optional[ProviderManager] = None,
        operations_logger: Optional[MCPOperationsLogger] = None
    ):
        self.config = server_config or ServerConfig()
        self.provider_manager = provider_manager or ProviderManager()
        self.ops_logger = operations_logger or MCPOperationsLogger()

        self.server = Server(self.config.name, version=self.config.version)
        self._setup_request_handlers()

    def _setup_request_handlers(self):
        """Attach tools/list and tools/call handlers to the SDK server"""

        @self.server.list_tools()
        async def list_tools() -> List[types.Tool]:
            return await self.handle_list_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
            result = await self.handle_call_tool(name, arguments)
            return list(result.content)

    async def handle_list_tools(self) -> List[types.Tool]:
        logger.info("Client requested tool list")
        return [tool.to_mcp_tool() for tool in self.provider_manager.get_all_tool_definitions()]

    async def handle_call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        """
        Execute a tool for a client

        Failures are logged and re-raised; the SDK reports them to the
        client as an error result and keeps serving.
        """
        arguments = arguments or {}
        logger.info(f"Client called tool: {name}")
        self.ops_logger.log_tool_request(name, arguments)
        start_time = time.time()

        try:
            result = await self.provider_manager.execute_tool(name, arguments)
        except Exception as e:
            execution_time_ms = (time.time() - start_time) * 1000
            logger.error(f"Error executing tool {name}: {e}")
            self.ops_logger.log_tool_error(name, e, execution_time_ms)
            raise

        execution_time_ms = (time.time() - start_time) * 1000
        self.ops_logger.log_tool_response(name, execution_time_ms, len(result.content))
        return result

    def register_provider(self, provider: Provider) -> bool:
        return self.provider_manager.register_provider(provider)

    async def initialize_providers(self) -> List[ProviderInitResult]:
        return await self.provider_manager.initialize_providers()

    async def start(self, transport=None):
        """
        Initialize providers, then serve until the transport closes

        Args:
            transport: async context manager yielding (read_stream, write_stream);
                defaults to stdio
        """
        results = await self.initialize_providers()
        for result in results:
            if result.error:
                logger.warning(f"Provider {result.name} unavailable: {result.error}")

        if transport is None:
            transport = stdio_server()

        async with transport as (read_stream, write_stream):
            logger.info(f"MCP Server started ({self.config.name} v{self.config.version})")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )

        logger.info("MCP Server transport closed")
