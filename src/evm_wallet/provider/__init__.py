"""Network providers for the EVM wallet SDK"""

from .base import NetworkProvider
from .jsonrpc import ENDPOINTS, ProviderConfig, JsonRpcProvider

__all__ = [
    "NetworkProvider",
    "ENDPOINTS",
    "ProviderConfig",
    "JsonRpcProvider",
]
