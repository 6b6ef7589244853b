r"""
Wallet management for EVM chains.

A wallet manager owns a seed phrase and hands out accounts derived from it
along BIP-44 paths (m/44'/60'/0'/0/{index}).
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from ..provider.base import NetworkProvider
from ..runtime.errors import ErrorCode, InvalidSeedPhraseError, WalletError
from ..tx.fees import fee_rates
from .account import WalletAccount
from .config import WalletConfig
from .seed import generate_seed_phrase, is_valid_seed_phrase

logger = logging.getLogger(__name__)


class WalletManager:
    """
    Wallet manager for EVM blockchains.

    Example:
        ```python
        wallet = WalletManager(WalletManager.get_random_seed_phrase(),
                               WalletConfig(provider="http://127.0.0.1:8545"))
        account = wallet.get_account(1)   # m/44'/60'/0'/0/1
        ```
    """

    def __init__(self, seed_phrase: str, config: Optional[WalletConfig] = None):
        """
        Initialize the wallet manager.

        Args:
            seed_phrase: BIP-39 seed phrase
            config: Wallet configuration

        Raises:
            InvalidSeedPhraseError: If the seed phrase is not valid
        """
        if not is_valid_seed_phrase(seed_phrase):
            raise InvalidSeedPhraseError()

        self._seed_phrase = seed_phrase
        self._config = config or WalletConfig()
        self._provider = self._config.build_provider()
        self._owns_provider = self._config.creates_provider
        self._accounts: Dict[str, WalletAccount] = {}

    @staticmethod
    def get_random_seed_phrase() -> str:
        """Return a random 12-word BIP-39 seed phrase."""
        return generate_seed_phrase(12)

    @staticmethod
    def is_valid_seed_phrase(seed_phrase: Any) -> bool:
        """Check if a seed phrase is valid."""
        return is_valid_seed_phrase(seed_phrase)

    @property
    def seed_phrase(self) -> str:
        return self._seed_phrase

    @property
    def provider(self) -> Optional[NetworkProvider]:
        return self._provider

    def get_account(self, index: int = 0) -> WalletAccount:
        """
        Get the account at an address index.

        Args:
            index: Address index (default: 0)

        Returns:
            Account at m/44'/60'/0'/0/{index}
        """
        if not isinstance(index, int) or isinstance(index, bool) or index < 0:
            raise WalletError(f"Account index must be a non-negative integer: {index}")
        return self.get_account_by_path(f"0'/0/{index}")

    def get_account_by_path(self, path: str) -> WalletAccount:
        """
        Get the account at a derivation path relative to m/44'/60'.

        Args:
            path: Relative path, e.g. "0'/0/1"

        Returns:
            The account; repeated calls return the same instance
        """
        account = self._accounts.get(path)
        if account is None:
            account = WalletAccount(self._seed_phrase, path, self._config, provider=self._provider)
            self._accounts[path] = account
            logger.debug(f"Created account {account.address} at {account.path}")
        return account

    def get_fee_rates(self) -> Dict[str, int]:
        """Current "normal" and "fast" fee rates in wei per gas."""
        if self._provider is None:
            raise WalletError(
                "The wallet must be connected to a provider to get fee rates",
                code=ErrorCode.PROVIDER_REQUIRED,
            )
        return fee_rates(self._provider.get_fee_snapshot())

    def dispose(self) -> None:
        """Dispose every derived account and close a provider built by this manager."""
        for account in self._accounts.values():
            account.dispose()
        self._accounts.clear()
        if self._owns_provider and self._provider is not None:
            self._provider.close()


__all__ = ["WalletManager"]
