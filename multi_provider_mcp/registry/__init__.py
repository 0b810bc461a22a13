"""
Registry Package

Per-provider tool registry: definitions, handlers and validation schemas.
"""

from .tools import ToolRegistry, ToolDefinition, ToolHandler, ToolResult, ValidationSchema, text_result

__all__ = [
    'ToolRegistry',
    'ToolDefinition',
    'ToolHandler',
    'ToolResult',
    'ValidationSchema',
    'text_result'
]
