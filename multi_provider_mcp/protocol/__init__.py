"""
Protocol Package - MCP Protocol Handling

This package contains:
- JSON-RPC / MCP error codes
- Tool layer error taxonomy
- Error formatting helpers
"""

from .errors import (
    MCPError,
    ParseError,
    ValidationError,
    ToolNotFoundError,
    ProviderDisabledError,
    ToolExecutionError,
    ProviderInitError,
    MappingConsistencyError,
    ErrorHandler,
    ErrorCode
)

__all__ = [
    'MCPError',
    'ParseError',
    'ValidationError',
    'ToolNotFoundError',
    'ProviderDisabledError',
    'ToolExecutionError',
    'ProviderInitError',
    'MappingConsistencyError',
    'ErrorHandler',
    'ErrorCode'
]
