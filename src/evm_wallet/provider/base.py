"""
Network provider contract.

The populator and wallet accounts only talk to the chain through this
interface, so any node client (or an in-memory fake) can stand in.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from abc import ABC, abstractmethod

from ..tx.types import FeeSnapshot, GasEstimateRequest


class NetworkProvider(ABC):
    """
    Abstract network collaborator.

    Implementations must raise on failure; callers propagate provider
    errors unchanged.
    """

    @abstractmethod
    def get_chain_id(self) -> int:
        """Get the chain identifier of the connected network."""
        pass

    @abstractmethod
    def get_fee_snapshot(self) -> FeeSnapshot:
        """Get the current fee recommendation."""
        pass

    @abstractmethod
    def get_pending_nonce(self, address: str) -> int:
        """
        Get the next nonce for an address, counting pending transactions.

        Args:
            address: Account address

        Returns:
            Pending transaction count
        """
        pass

    @abstractmethod
    def estimate_gas(self, request: GasEstimateRequest) -> int:
        """
        Estimate the gas limit of a call.

        Args:
            request: Call parameters

        Returns:
            Estimated gas units
        """
        pass

    @abstractmethod
    def get_balance(self, address: str) -> int:
        """Get the native balance of an address in wei."""
        pass

    @abstractmethod
    def call(self, to: str, data: str) -> str:
        """
        Execute a read-only call.

        Args:
            to: Contract address
            data: ABI-encoded calldata (0x-prefixed hex)

        Returns:
            Returned data as 0x-prefixed hex
        """
        pass

    @abstractmethod
    def send_raw_transaction(self, raw_transaction: str) -> str:
        """
        Broadcast a signed transaction.

        Args:
            raw_transaction: Signed transaction as 0x-prefixed hex

        Returns:
            Transaction hash
        """
        pass

    @abstractmethod
    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """Get a transaction receipt, or None while the transaction is pending."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

    def __enter__(self) -> NetworkProvider:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
