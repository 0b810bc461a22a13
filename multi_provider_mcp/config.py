"""Configuration management for the Multi-Provider MCP Server"""

import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Note: logging is configured by setup_mcp_logging() at startup, not here.
# MCP servers must keep stdout clean for JSON-RPC communication


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag; anything other than true/false keeps the default"""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


@dataclass
class ServerConfig:
    """MCP server identity"""
    name: str = "multi-provider-tools-server"
    version: str = "1.0.0"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    file: Optional[str] = None
    operations_file: Optional[str] = None


@dataclass
class EvolutionConfig:
    """Evolution API provider configuration"""
    enabled: bool = True
    instancia: Optional[str] = None
    apikey: Optional[str] = None
    api_base: Optional[str] = None
    timeout: float = 30.0
    check_connection: bool = False
    debug_curl: bool = False

    @property
    def default_headers(self) -> Dict[str, str]:
        """Default headers for API requests"""
        return {
            "Content-Type": "application/json",
            "apikey": self.apikey or ""
        }


@dataclass
class ExampleConfig:
    """Example provider configuration"""
    enabled: bool = True


@dataclass
class ProvidersConfig:
    """Per-provider configuration"""
    evolution: EvolutionConfig = field(default_factory=EvolutionConfig)
    example: ExampleConfig = field(default_factory=ExampleConfig)


class Config:
    """Main configuration class"""

    def __init__(self):
        self.server = ServerConfig(
            name=os.getenv("MCP_SERVER_NAME", "multi-provider-tools-server"),
            version=os.getenv("MCP_SERVER_VERSION", "1.0.0")
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            file=os.getenv("LOG_FILE") or None,
            operations_file=os.getenv("MCP_OPERATIONS_LOG") or None
        )

        self.providers = ProvidersConfig(
            evolution=EvolutionConfig(
                enabled=_env_flag("EVOLUTION_ENABLED", True),
                instancia=os.getenv("EVOLUTION_INSTANCIA") or None,
                apikey=os.getenv("EVOLUTION_APIKEY") or None,
                api_base=os.getenv("EVOLUTION_API_BASE") or None,
                timeout=float(os.getenv("EVOLUTION_TIMEOUT", "30")),
                check_connection=_env_flag("EVOLUTION_CHECK_CONNECTION", False),
                debug_curl=_env_flag("DEBUG_CURL_LOGGING", False)
            ),
            example=ExampleConfig(
                enabled=_env_flag("EXAMPLE_ENABLED", True)
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (credentials redacted)"""
        evolution = self.providers.evolution
        return {
            "server": {
                "name": self.server.name,
                "version": self.server.version
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
                "operations_file": self.logging.operations_file
            },
            "providers": {
                "evolution": {
                    "enabled": evolution.enabled,
                    "instancia": evolution.instancia,
                    "apikey": "***" if evolution.apikey else None,
                    "api_base": evolution.api_base,
                    "timeout": evolution.timeout,
                    "check_connection": evolution.check_connection
                },
                "example": {
                    "enabled": self.providers.example.enabled
                }
            }
        }


# Global configuration instance
config = Config()
