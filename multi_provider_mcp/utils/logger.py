"""Logging utilities for MCP Server"""

import logging
import sys
import json
import os
from datetime import datetime, timezone
from typing import Optional, Dict, Any


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance

    Args:
        name: Logger name (usually __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Set level if provided
    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(log_level)

    return logger


def setup_mcp_logging(level: str = "INFO", log_file: Optional[str] = None, debug: bool = False):
    """
    Setup logging appropriate for MCP server

    MCP servers should only output JSON-RPC messages to stdout,
    so we redirect all logging to stderr.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file receiving a copy of every record
        debug: Enable debug logging regardless of level
    """
    log_level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARN': logging.WARNING,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    log_level = log_level_map.get(level.upper(), logging.INFO)

    # Override with debug flag if provided
    if debug:
        log_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    # Create stderr handler (so logs don't interfere with JSON-RPC on stdout)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not create log file {log_file}: {e}")

    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger


class MCPOperationsLogger:
    """Structured JSON logging for MCP tool calls"""

    def __init__(self, log_file: Optional[str] = None, max_log_size: int = 2000):
        self.max_log_size = max_log_size
        self.log_file = log_file

        # Records propagate to the root (stderr) handlers; a file copy is optional
        self.logger = logging.getLogger('mcp_operations')

        if self.log_file and not self.logger.handlers:
            self._setup_file_handler()

    def _setup_file_handler(self):
        """Setup file handler for MCP operations logging"""
        try:
            log_dir = os.path.dirname(self.log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(file_handler)
        except OSError as e:
            self.logger.error(f"Failed to setup operations log file, using stderr only: {e}")

    def _truncate_data(self, data: Any) -> Any:
        """Truncate large data structures for logging"""
        json_str = json.dumps(data, default=str)
        if len(json_str) <= self.max_log_size:
            return data

        truncated_str = json_str[:self.max_log_size] + '...[TRUNCATED]'
        return {"_truncated": True, "_size": len(json_str), "_data": truncated_str}

    @staticmethod
    def _timestamp() -> str:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def log_tool_request(self, tool_name: str, arguments: Dict[str, Any]):
        """Log MCP tool request"""
        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_request",
            "tool": tool_name,
            "arguments": self._truncate_data(arguments)
        }

        self.logger.info(f"[REQUEST] {json.dumps(log_entry, separators=(',', ':'), default=str)}")

    def log_tool_response(self, tool_name: str, execution_time_ms: float, content_items: int = 0):
        """Log MCP tool response with execution metrics"""
        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_response",
            "tool": tool_name,
            "execution_time_ms": round(execution_time_ms, 2),
            "status": "success",
            "content_items": content_items
        }

        self.logger.info(f"[RESPONSE] {json.dumps(log_entry, separators=(',', ':'))}")

    def log_tool_error(self, tool_name: str, error: BaseException, execution_time_ms: float):
        """Log MCP tool error"""
        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_error",
            "tool": tool_name,
            "execution_time_ms": round(execution_time_ms, 2),
            "status": "error",
            "error": {
                "type": type(error).__name__,
                "message": str(error)[:500]
            }
        }

        self.logger.error(f"[ERROR] {json.dumps(log_entry, separators=(',', ':'))}")
