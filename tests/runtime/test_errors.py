"""
Test the SDK error model.
"""

import socket

import pytest

from evm_wallet.runtime.errors import (
    AccountDisposedError,
    ConflictingFieldsError,
    ConnectionError,
    ErrorCode,
    ErrorHandler,
    EvmWalletError,
    InvalidSeedPhraseError,
    MissingRequiredFieldError,
    NetworkError,
    RpcError,
    TimeoutError,
    TransferFeeExceededError,
    ValidationError,
    WalletError,
    error_from_response,
)


class TestEvmWalletError:

    def test_str_includes_code_details_and_cause(self):
        err = EvmWalletError("boom", ErrorCode.INTERNAL, {"key": 1}, cause=ValueError("inner"))
        text = str(err)

        assert text.startswith("[INTERNAL] boom")
        assert "Details: {'key': 1}" in text
        assert "Caused by: inner" in text

    def test_dict_round_trip(self):
        err = WalletError("no provider", code=ErrorCode.PROVIDER_REQUIRED, details={"a": 1})
        data = err.to_dict()

        assert data == {"code": 703, "message": "no provider", "details": {"a": 1}}
        restored = EvmWalletError.from_dict(data)
        assert restored.code == ErrorCode.PROVIDER_REQUIRED
        assert restored.details == {"a": 1}

    def test_from_dict_unknown_code(self):
        assert EvmWalletError.from_dict({"code": 99999}).code == ErrorCode.UNKNOWN


class TestErrorKinds:

    def test_network_hierarchy(self):
        assert isinstance(ConnectionError("x"), NetworkError)
        assert ConnectionError("x").code == ErrorCode.CONNECTION_FAILED
        assert TimeoutError("x").code == ErrorCode.TIMEOUT
        assert RpcError("x").code == ErrorCode.RPC_ERROR

    def test_reverted_rpc_code(self):
        err = RpcError("execution reverted", rpc_code=3)
        assert err.code == ErrorCode.EXECUTION_REVERTED
        assert err.rpc_code == 3

    def test_validation_errors(self):
        conflict = ConflictingFieldsError("bad", groups=("blob", "legacy"))
        missing = MissingRequiredFieldError("missing", field="maxFeePerBlobGas")

        assert isinstance(conflict, ValidationError)
        assert conflict.groups == ("blob", "legacy")
        assert missing.code == ErrorCode.MISSING_FIELD
        assert missing.field == "maxFeePerBlobGas"

    def test_wallet_errors_have_default_messages(self):
        assert InvalidSeedPhraseError().message == "Invalid seed phrase"
        assert AccountDisposedError().message == "The wallet account has been disposed"
        assert TransferFeeExceededError().code == ErrorCode.FEE_LIMIT_EXCEEDED
        assert isinstance(AccountDisposedError(), WalletError)


class TestErrorFromResponse:

    def test_success_response(self):
        assert error_from_response({"jsonrpc": "2.0", "id": 1, "result": "0x1"}) is None
        assert error_from_response({"error": None}) is None

    def test_error_object(self):
        err = error_from_response({"error": {"code": -32000, "message": "nonce too low", "data": "0x"}})

        assert isinstance(err, RpcError)
        assert err.message == "nonce too low"
        assert err.rpc_code == -32000
        assert err.details == {"rpcCode": -32000, "data": "0x"}

    def test_string_error(self):
        err = error_from_response({"error": "bad request"})
        assert isinstance(err, RpcError)
        assert err.message == "bad request"

    def test_limit_exceeded_is_rate_limited(self):
        err = error_from_response({"error": {"code": -32005, "message": "limit exceeded"}})
        assert err.code == ErrorCode.RATE_LIMITED


class TestErrorHandler:

    @pytest.mark.parametrize("error", [
        NetworkError("x"),
        ConnectionError("x"),
        TimeoutError("x"),
    ])
    def test_retryable(self, error):
        assert ErrorHandler.is_retryable(error)

    def test_rate_limited_is_retryable(self):
        err = NetworkError("slow down")
        err.code = ErrorCode.RATE_LIMITED
        assert ErrorHandler.is_retryable(err)

    @pytest.mark.parametrize("error", [
        RpcError("reverted", rpc_code=3),
        RpcError("nonce too low", rpc_code=-32000),
        ConflictingFieldsError("x", groups=("a", "b")),
        WalletError("x"),
        ValueError("x"),
        socket.gaierror(),
    ])
    def test_not_retryable(self, error):
        assert not ErrorHandler.is_retryable(error)
