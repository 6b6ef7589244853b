"""HD wallet management for EVM chains"""

from .config import WalletConfig
from .seed import generate_seed_phrase, is_valid_seed_phrase
from .account import TransactionQuote, TransactionResult, TransferOptions, WalletAccount
from .manager import WalletManager

__all__ = [
    "WalletConfig",
    "generate_seed_phrase",
    "is_valid_seed_phrase",
    "TransactionQuote",
    "TransactionResult",
    "TransferOptions",
    "WalletAccount",
    "WalletManager",
]
