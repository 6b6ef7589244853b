"""
Ethereum JSON-RPC provider.

Implements the NetworkProvider contract over HTTP JSON-RPC 2.0 with
connection reuse and retries with exponential backoff for transport
failures.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass
import itertools
import json
import logging
import time

import requests

from ..runtime.errors import (
    ErrorCode,
    ErrorHandler,
    EvmWalletError,
    NetworkError,
    RpcError,
    ConnectionError as NodeConnectionError,
    TimeoutError as NodeTimeoutError,
    error_from_response,
)
from ..tx.fees import fee_snapshot_from_block
from ..tx.types import FeeSnapshot, GasEstimateRequest, parse_quantity
from .base import NetworkProvider

logger = logging.getLogger(__name__)

# Well-known public endpoints
ENDPOINTS = {
    'mainnet': 'https://ethereum-rpc.publicnode.com',
    'sepolia': 'https://ethereum-sepolia-rpc.publicnode.com',
    'holesky': 'https://ethereum-holesky-rpc.publicnode.com',
    'local': 'http://127.0.0.1:8545',
}


@dataclass
class ProviderConfig:
    """Configuration for the JSON-RPC provider."""

    endpoint: str
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_backoff: float = 2.0
    debug: bool = False
    user_agent: str = "evm-wallet-sdk/1.0.0"


class JsonRpcProvider(NetworkProvider):
    """
    Network provider backed by an Ethereum JSON-RPC endpoint.

    Example:
        ```python
        with JsonRpcProvider("sepolia") as provider:
            chain_id = provider.get_chain_id()
            fees = provider.get_fee_snapshot()
        ```
    """

    def __init__(self, config: Union[str, ProviderConfig],
                 session: Optional[requests.Session] = None):
        """
        Initialize the provider.

        Args:
            config: Endpoint URL, well-known network name or ProviderConfig
            session: Optional requests.Session for connection pooling
        """
        if isinstance(config, str):
            config = ProviderConfig(endpoint=config)
        self.config = config

        endpoint = ENDPOINTS.get(config.endpoint.lower(), config.endpoint)
        self._endpoint = endpoint.rstrip('/')
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._ids = itertools.count(1)

        if self.config.debug:
            logger.setLevel(logging.DEBUG)

    @property
    def endpoint(self) -> str:
        """Get the resolved RPC endpoint."""
        return self._endpoint

    def close(self) -> None:
        """Close the HTTP session if owned by this provider."""
        if self._owns_session:
            self._session.close()

    # =========================================================================
    # Low-level RPC
    # =========================================================================

    def request(self, method: str, params: Optional[List[Any]] = None,
                retry: bool = True) -> Any:
        """
        Make a JSON-RPC call with retries.

        Args:
            method: RPC method name
            params: Positional parameters
            retry: Retry transport failures; disable for calls that must
                reach the node at most once

        Returns:
            The "result" member of the response

        Raises:
            NetworkError: On transport failures after all retries
            RpcError: If the node answers with an error object
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params if params is not None else [],
        }

        if self.config.debug:
            logger.debug(f"Request: {method} -> {json.dumps(payload)}")

        attempt = 0
        while True:
            try:
                response = self._post(payload)
                error = error_from_response(response)
                if error is not None:
                    raise error

                if self.config.debug:
                    logger.debug(f"Response: {method} -> {json.dumps(response)}")
                return response.get("result")

            except EvmWalletError as e:
                if (not retry or attempt >= self.config.max_retries
                        or not ErrorHandler.is_retryable(e)):
                    raise

                delay = self.config.retry_delay * (self.config.retry_backoff ** attempt)
                attempt += 1
                logger.warning(
                    f"{method} attempt {attempt} failed: {e.message}. "
                    f"Retrying in {delay:.2f}s..."
                )
                time.sleep(delay)

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Send one HTTP request and decode the JSON-RPC envelope."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

        try:
            response = self._session.post(
                self._endpoint,
                json=payload,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise NodeTimeoutError(f"Request to {self._endpoint} timed out", cause=e)
        except requests.exceptions.ConnectionError as e:
            raise NodeConnectionError(f"Cannot connect to {self._endpoint}", cause=e)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"HTTP request failed: {e}", cause=e)

        if response.status_code != 200:
            error = NetworkError(
                f"HTTP {response.status_code}: {response.reason}",
                details={"status": response.status_code},
            )
            if response.status_code == 429:
                error.code = ErrorCode.RATE_LIMITED
            elif response.status_code >= 500:
                error.code = ErrorCode.SERVICE_UNAVAILABLE
            else:
                error.code = ErrorCode.HTTP_ERROR
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise RpcError(f"Invalid JSON response: {e}", cause=e)

    # =========================================================================
    # NetworkProvider
    # =========================================================================

    def get_chain_id(self) -> int:
        return parse_quantity(self.request("eth_chainId"))

    def get_fee_snapshot(self) -> FeeSnapshot:
        """
        Read the current fee recommendation.

        Priority-fee values are only reported when the latest block has a
        base fee.
        """
        block = self.request("eth_getBlockByNumber", ["latest", False])
        gas_price = parse_quantity(self.request("eth_gasPrice"))

        base_fee = None
        if block and block.get("baseFeePerGas") is not None:
            base_fee = parse_quantity(block["baseFeePerGas"])

        priority_fee = None
        if base_fee is not None:
            try:
                priority_fee = parse_quantity(self.request("eth_maxPriorityFeePerGas"))
            except RpcError as e:
                logger.debug(f"eth_maxPriorityFeePerGas unavailable, using default tip: {e.message}")

        return fee_snapshot_from_block(gas_price, base_fee, priority_fee)

    def get_pending_nonce(self, address: str) -> int:
        return parse_quantity(self.request("eth_getTransactionCount", [address, "pending"]))

    def estimate_gas(self, request: GasEstimateRequest) -> int:
        return parse_quantity(self.request("eth_estimateGas", [request.to_rpc_params()]))

    def get_balance(self, address: str) -> int:
        return parse_quantity(self.request("eth_getBalance", [address, "latest"]))

    def call(self, to: str, data: str) -> str:
        return self.request("eth_call", [{"to": to, "data": data}, "latest"])

    def send_raw_transaction(self, raw_transaction: str) -> str:
        # Broadcasts are sent at most once
        tx_hash = self.request("eth_sendRawTransaction", [raw_transaction], retry=False)
        logger.info(f"Broadcast transaction {tx_hash}")
        return tx_hash

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return self.request("eth_getTransactionReceipt", [tx_hash])


__all__ = [
    "ENDPOINTS",
    "ProviderConfig",
    "JsonRpcProvider",
]
