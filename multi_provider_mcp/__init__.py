"""Multi-provider MCP tools server"""

__version__ = "1.0.0"
