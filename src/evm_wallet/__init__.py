"""
EVM Wallet SDK

HD accounts derived from a seed phrase, plus transaction population that
turns sparse transaction intents into fully specified legacy, access-list,
priority-fee or blob transactions.
"""

from .runtime.errors import *
from .tx import *
from .provider import NetworkProvider, ProviderConfig, JsonRpcProvider
from .wallet import (
    WalletConfig,
    WalletManager,
    WalletAccount,
    TransactionQuote,
    TransactionResult,
    TransferOptions,
)

__version__ = "1.0.0"
__all__ = [
    # Providers
    "NetworkProvider",
    "ProviderConfig",
    "JsonRpcProvider",

    # Wallet
    "WalletConfig",
    "WalletManager",
    "WalletAccount",
    "TransactionQuote",
    "TransactionResult",
    "TransferOptions",

    # Errors, records and population helpers are included via *
]
