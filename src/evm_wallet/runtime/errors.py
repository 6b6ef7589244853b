"""
EVM Wallet Error Model

This module provides the error handling framework for the EVM wallet SDK.
Local validation failures, wallet misuse and network failures each get
their own error kind so callers can tell them apart.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Tuple
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes used across the SDK."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Network errors (200-299)
    NETWORK_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202
    RATE_LIMITED = 203
    SERVICE_UNAVAILABLE = 204
    RPC_ERROR = 205
    EXECUTION_REVERTED = 206
    HTTP_ERROR = 207

    # Transaction errors (400-499)
    INVALID_TRANSACTION = 400
    TRANSACTION_FAILED = 401
    FEE_LIMIT_EXCEEDED = 402

    # Validation errors (500-599)
    CONFLICTING_FIELDS = 500
    MISSING_FIELD = 501

    # Wallet errors (700-799)
    WALLET_ERROR = 700
    INVALID_SEED_PHRASE = 701
    ACCOUNT_DISPOSED = 702
    PROVIDER_REQUIRED = 703


class EvmWalletError(Exception):
    """
    Base class for all SDK errors.

    Carries a structured error code plus optional details and cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an SDK error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EvmWalletError':
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class NetworkError(EvmWalletError):
    """Network-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class ConnectionError(NetworkError):
    """Connection failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.CONNECTION_FAILED


class TimeoutError(NetworkError):
    """Request timeouts."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.TIMEOUT


class RpcError(NetworkError):
    """Error object returned by the node in a JSON-RPC response."""

    def __init__(self, message: str, rpc_code: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.EXECUTION_REVERTED if rpc_code == 3 else ErrorCode.RPC_ERROR
        self.rpc_code = rpc_code


class ValidationError(EvmWalletError):
    """Transaction and data validation errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_TRANSACTION,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class ConflictingFieldsError(ValidationError):
    """Transaction intent declares two field groups that cannot coexist."""

    def __init__(self, message: str, groups: Tuple[str, str],
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFLICTING_FIELDS, details)
        self.groups = groups


class MissingRequiredFieldError(ValidationError):
    """A field required by the resolved transaction type was not supplied."""

    def __init__(self, message: str, field: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.MISSING_FIELD, details)
        self.field = field


class WalletError(EvmWalletError):
    """Wallet and account errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.WALLET_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class InvalidSeedPhraseError(WalletError):
    """Seed phrase is not a valid BIP-39 mnemonic."""

    def __init__(self, message: str = "Invalid seed phrase",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_SEED_PHRASE, details, cause)


class AccountDisposedError(WalletError):
    """Account key material has been erased."""

    def __init__(self, message: str = "The wallet account has been disposed",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ACCOUNT_DISPOSED, details, cause)


class TransferFeeExceededError(WalletError):
    """Quoted transfer fee reached the configured maximum."""

    def __init__(self, message: str = "Exceeded maximum fee cost for transfer operation",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.FEE_LIMIT_EXCEEDED, details, cause)


def error_from_response(response: Dict[str, Any]) -> Optional[EvmWalletError]:
    """
    Create an appropriate error from a JSON-RPC response.

    Args:
        response: Decoded JSON-RPC response

    Returns:
        Error instance or None if the response carries no error
    """
    if "error" not in response or response["error"] is None:
        return None

    error_data = response["error"]
    if isinstance(error_data, str):
        return RpcError(error_data)

    if not isinstance(error_data, dict):
        return RpcError(str(error_data))

    message = error_data.get("message", "Unknown error")
    rpc_code = error_data.get("code")
    details: Dict[str, Any] = {}
    if rpc_code is not None:
        details["rpcCode"] = rpc_code
    if error_data.get("data") is not None:
        details["data"] = error_data["data"]

    # -32005 is the de-facto "limit exceeded" code used by hosted nodes
    if rpc_code == -32005:
        error = RpcError(message, rpc_code, details)
        error.code = ErrorCode.RATE_LIMITED
        return error

    return RpcError(message, rpc_code, details)


class ErrorHandler:
    """
    Utility class for handling and categorizing errors.
    """

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Check if an error is retryable.

        Args:
            error: Exception to check

        Returns:
            True if the error should be retried
        """
        # Validation, wallet and node-reported errors are final
        return isinstance(error, EvmWalletError) and error.code in (
            ErrorCode.NETWORK_ERROR, ErrorCode.CONNECTION_FAILED,
            ErrorCode.TIMEOUT, ErrorCode.SERVICE_UNAVAILABLE,
            ErrorCode.RATE_LIMITED,
        )


__all__ = [
    "ErrorCode",
    "EvmWalletError",
    "NetworkError",
    "ConnectionError",
    "TimeoutError",
    "RpcError",
    "ValidationError",
    "ConflictingFieldsError",
    "MissingRequiredFieldError",
    "WalletError",
    "InvalidSeedPhraseError",
    "AccountDisposedError",
    "TransferFeeExceededError",
    "error_from_response",
    "ErrorHandler",
]
