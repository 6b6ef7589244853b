"""Runtime helpers for the EVM wallet SDK"""

from .errors import EvmWalletError, ErrorCode, ErrorHandler, error_from_response

__all__ = [
    "EvmWalletError",
    "ErrorCode",
    "ErrorHandler",
    "error_from_response",
]
