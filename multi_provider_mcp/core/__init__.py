"""Provider contract and provider manager"""

from .provider import Provider, BaseProvider
from .provider_manager import ProviderManager, ProviderInitResult, ToolMapping

__all__ = [
    'Provider',
    'BaseProvider',
    'ProviderManager',
    'ProviderInitResult',
    'ToolMapping'
]
