"""
Entry point: MCP server mode or one-shot CLI tool execution

    multi-provider-mcp                       # serve MCP over stdio
    multi-provider-mcp echo '{"message": "hi"}'  # run one tool, print JSON
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from .config import Config, config as default_config
from .core.provider import Provider
from .core.provider_manager import ProviderManager
from .mcp_server import MCPServer
from .protocol.errors import ErrorHandler, ParseError
from .providers import EvolutionProvider, ExampleProvider
from .utils.logger import MCPOperationsLogger, get_logger, setup_mcp_logging

logger = get_logger(__name__)


def setup_providers(cfg: Config) -> List[Provider]:
    """Create every configured provider; disabled ones are still returned"""
    return [
        EvolutionProvider(cfg.providers.evolution),
        ExampleProvider(cfg.providers.example),
    ]


def build_provider_manager(cfg: Config) -> ProviderManager:
    manager = ProviderManager()
    for provider in setup_providers(cfg):
        manager.register_provider(provider)
    return manager


def parse_tool_arguments(raw: Optional[str]) -> Dict[str, Any]:
    """Decode the CLI JSON argument; it must be an object"""
    if not raw:
        return {}

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(str(e)) from e

    if not isinstance(parsed, dict):
        raise ParseError("tool arguments must be a JSON object")
    return parsed


async def run_cli_command(tool_name: str, raw_args: Optional[str], cfg: Config) -> int:
    """Run a single tool and print its result; returns the process exit code"""
    try:
        tool_args = parse_tool_arguments(raw_args)
        logger.info(f"Running tool {tool_name} with args: {tool_args}")

        manager = build_provider_manager(cfg)
        await manager.initialize_providers()

        result = await manager.execute_tool(tool_name, tool_args)
    except Exception as e:
        logger.error(f"Error executing {tool_name}: {e}")
        print(json.dumps({"error": ErrorHandler.to_error_payload(e)}, indent=2, ensure_ascii=False),
              file=sys.stderr)
        return 1

    print(json.dumps(result.model_dump(mode="json", exclude_none=True), indent=2, ensure_ascii=False))
    return 0


async def run_server(cfg: Config):
    """Create the MCP server, register providers and serve over stdio"""
    server = MCPServer(
        cfg.server,
        operations_logger=MCPOperationsLogger(cfg.logging.operations_file)
    )
    for provider in setup_providers(cfg):
        server.register_provider(provider)

    logger.info("=" * 60)
    logger.info(f"Server Name: {cfg.server.name}")
    logger.info(f"Server Version: {cfg.server.version}")
    logger.info(f"Providers: {', '.join(server.provider_manager.providers)}")
    logger.info(f"Total Tools: {len(server.provider_manager.list_tool_names())}")
    logger.info("=" * 60)

    await server.start()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multi-provider-mcp",
        description="Multi-provider MCP tools server. Without arguments, serves MCP over stdio."
    )
    parser.add_argument("tool", nargs="?", help="Tool to run once instead of starting the server")
    parser.add_argument("arguments", nargs="?", help="Tool arguments as a JSON object")
    return parser


def main(argv: Optional[List[str]] = None, cfg: Optional[Config] = None) -> int:
    """Main entry point; returns the process exit code"""
    cfg = cfg or default_config
    args = build_parser().parse_args(argv)

    setup_mcp_logging(level=cfg.logging.level, log_file=cfg.logging.file)

    if args.tool:
        return asyncio.run(run_cli_command(args.tool, args.arguments, cfg))

    try:
        asyncio.run(run_server(cfg))
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
