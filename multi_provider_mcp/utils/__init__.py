"""Utility modules for MCP Server"""

from .logger import get_logger, setup_mcp_logging, MCPOperationsLogger
from .http_client import HttpClient

__all__ = [
    "get_logger",
    "setup_mcp_logging",
    "MCPOperationsLogger",
    "HttpClient"
]
