"""
MCP Protocol Error Handling

JSON-RPC / MCP error codes plus the tool-layer error taxonomy used by
providers and the provider manager.
"""

from typing import Optional, Any, Dict, List
from enum import IntEnum


class ErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 and MCP error codes"""

    # JSON-RPC 2.0 Standard Errors
    PARSE_ERROR = -32700          # Invalid JSON was received
    INVALID_REQUEST = -32600       # The JSON sent is not a valid Request object
    METHOD_NOT_FOUND = -32601      # The method does not exist or is not available
    INVALID_PARAMS = -32602        # Invalid method parameter(s)
    INTERNAL_ERROR = -32603        # Internal JSON-RPC error


class MCPError(Exception):
    """Base class for all MCP protocol errors"""

    def __init__(
        self,
        code: int,
        message: str,
        data: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize MCP error

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            data: Optional additional error data
        """
        self.code = code
        self.message = message
        self.data = data or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to JSON-RPC error format"""
        error_dict = {
            "code": int(self.code),
            "message": self.message
        }
        if self.data:
            error_dict["data"] = self.data
        return error_dict


class ParseError(MCPError):
    """Invalid JSON was received"""

    def __init__(self, message: str = "Parse error", data: Optional[Dict] = None):
        super().__init__(
            ErrorCode.PARSE_ERROR,
            f"Parse error: {message}",
            data
        )


# ============================================================================
# TOOL LAYER ERRORS
# ============================================================================

class ValidationError(MCPError):
    """Tool arguments do not match the tool's schema"""

    def __init__(self, tool_name: str, errors: List[Dict[str, Any]]):
        self.tool_name = tool_name
        self.errors = errors
        fields = ", ".join(error["field"] or "<root>" for error in errors)
        super().__init__(
            ErrorCode.INVALID_PARAMS,
            f"Invalid arguments for tool {tool_name}: {fields}",
            {"tool": tool_name, "errors": errors}
        )


class ToolNotFoundError(MCPError):
    """No handler or mapping exists for the requested tool"""

    def __init__(self, tool_name: str, provider_name: Optional[str] = None):
        self.tool_name = tool_name
        self.provider_name = provider_name
        if provider_name:
            message = f"Tool {tool_name} not found in provider {provider_name}"
        else:
            message = f"Tool {tool_name} not found in any provider"
        data = {"tool": tool_name}
        if provider_name:
            data["provider"] = provider_name
        super().__init__(ErrorCode.METHOD_NOT_FOUND, message, data)


class ProviderDisabledError(MCPError):
    """A tool was dispatched to a disabled provider"""

    def __init__(self, provider_name: str):
        self.provider_name = provider_name
        super().__init__(
            ErrorCode.INTERNAL_ERROR,
            f"Provider {provider_name} is disabled",
            {"provider": provider_name}
        )


class ToolExecutionError(MCPError):
    """A tool handler raised; the original exception is kept as ``cause``"""

    def __init__(self, tool_name: str, cause: BaseException):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(
            ErrorCode.INTERNAL_ERROR,
            str(cause) or type(cause).__name__,
            {"tool": tool_name, "exception_type": type(cause).__name__}
        )


class ProviderInitError(MCPError):
    """Provider-specific startup failed"""

    def __init__(self, provider_name: str, message: str):
        self.provider_name = provider_name
        super().__init__(
            ErrorCode.INTERNAL_ERROR,
            f"Provider {provider_name} failed to initialize: {message}",
            {"provider": provider_name}
        )


class MappingConsistencyError(MCPError):
    """A tool mapping points at a provider that is no longer registered"""

    def __init__(self, tool_name: str, provider_name: str):
        self.tool_name = tool_name
        self.provider_name = provider_name
        super().__init__(
            ErrorCode.INTERNAL_ERROR,
            f"Provider {provider_name} not found for tool {tool_name}",
            {"tool": tool_name, "provider": provider_name}
        )


class ErrorHandler:
    """Utility class for handling and formatting errors"""

    @staticmethod
    def to_error_payload(e: BaseException) -> Dict[str, Any]:
        """
        Convert any exception to a JSON-RPC style error object

        Args:
            e: Exception to format

        Returns:
            Dict with code, message and optional data
        """
        if isinstance(e, MCPError):
            return e.to_dict()

        return {
            "code": int(ErrorCode.INTERNAL_ERROR),
            "message": str(e) or type(e).__name__,
            "data": {"exception_type": type(e).__name__}
        }
