"""
HD wallet account for EVM chains.

An account is derived from a seed phrase at a BIP-44 path. It signs
messages and transactions locally and relies on a NetworkProvider for
everything that needs chain state.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Union
import logging

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_keys import keys
from pydantic import BaseModel, ConfigDict

from ..provider.base import NetworkProvider
from ..runtime.errors import (
    AccountDisposedError,
    ErrorCode,
    InvalidSeedPhraseError,
    TransferFeeExceededError,
    WalletError,
)
from ..tx.fees import quote_fee
from ..tx.populate import populate_transaction
from ..tx.types import PopulatedTransaction, TransactionIntent
from .config import WalletConfig
from .erc20 import decode_uint256, encode_balance_of, encode_transfer
from .seed import full_path, is_valid_seed_phrase, path_index

logger = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()

Intent = Union[TransactionIntent, Dict[str, Any]]


class TransactionQuote(BaseModel):
    """Maximum fee of a transaction, in wei."""

    fee: int


class TransactionResult(BaseModel):
    """Hash and maximum fee of a broadcast transaction."""

    hash: str
    fee: int


class TransferOptions(BaseModel):
    """ERC-20 transfer request."""

    token: str
    recipient: str
    amount: int

    model_config = ConfigDict(frozen=True)


class WalletAccount:
    """
    Account derived from a seed phrase at a BIP-44 path.

    Example:
        ```python
        account = WalletAccount(seed_phrase, "0'/0/0", WalletConfig(provider="sepolia"))
        result = account.send_transaction({"to": recipient, "value": 1_000})
        ```
    """

    def __init__(self, seed_phrase: str, path: str,
                 config: Optional[WalletConfig] = None,
                 provider: Optional[NetworkProvider] = None):
        """
        Derive the account.

        Args:
            seed_phrase: BIP-39 seed phrase
            path: Derivation path relative to m/44'/60' (e.g. "0'/0/0")
            config: Wallet configuration
            provider: Provider to use instead of building one from config
        """
        if not is_valid_seed_phrase(seed_phrase):
            raise InvalidSeedPhraseError()

        self._config = config or WalletConfig()
        if provider is not None:
            self._provider: Optional[NetworkProvider] = provider
            self._owns_provider = False
        else:
            self._provider = self._config.build_provider()
            self._owns_provider = self._config.creates_provider
        self._path = full_path(path)
        self._index = path_index(self._path)
        self._account: Optional[LocalAccount] = Account.from_mnemonic(
            seed_phrase, account_path=self._path
        )
        self._address = self._account.address

        logger.debug(f"Derived account {self._address} at {self._path}")

    @property
    def index(self) -> int:
        """Address index of the derivation path."""
        return self._index

    @property
    def path(self) -> str:
        """Full derivation path."""
        return self._path

    @property
    def address(self) -> str:
        """Checksummed account address."""
        return self._address

    @property
    def provider(self) -> Optional[NetworkProvider]:
        return self._provider

    @property
    def key_pair(self) -> Dict[str, bytes]:
        """Raw private key and compressed public key."""
        account = self._require_key()
        private_key = bytes(account.key)
        public_key = keys.PrivateKey(private_key).public_key.to_compressed_bytes()
        return {"private_key": private_key, "public_key": public_key}

    # =========================================================================
    # Messages
    # =========================================================================

    def sign(self, message: str) -> str:
        """
        Sign a message with the EIP-191 personal message prefix.

        Args:
            message: Text to sign

        Returns:
            0x-prefixed 65-byte signature
        """
        account = self._require_key()
        signed = account.sign_message(encode_defunct(text=message))
        return "0x" + bytes(signed.signature).hex()

    def verify(self, message: str, signature: str) -> bool:
        """
        Check that a signature over a message was made by this account.

        Raises:
            ValueError: If the signature is not well-formed
        """
        recovered = Account.recover_message(encode_defunct(text=message), signature=signature)
        return recovered.lower() == self._address.lower()

    # =========================================================================
    # Chain state
    # =========================================================================

    def get_balance(self) -> int:
        """Native balance in wei."""
        return self._require_provider().get_balance(self._address)

    def get_token_balance(self, token_address: str) -> int:
        """ERC-20 balance of the account in the token's base units."""
        result = self._require_provider().call(token_address, encode_balance_of(self._address))
        return decode_uint256(result)

    # =========================================================================
    # Transactions
    # =========================================================================

    def populate_transaction(self, intent: Intent) -> PopulatedTransaction:
        """Populate an intent with this account as sender."""
        return populate_transaction(intent, self._address, self._require_provider())

    def quote_send_transaction(self, intent: Intent) -> TransactionQuote:
        """Quote the maximum fee of a transaction without sending it."""
        populated = self.populate_transaction(intent)
        return TransactionQuote(fee=quote_fee(populated))

    def send_transaction(self, intent: Intent) -> TransactionResult:
        """
        Populate, sign and broadcast a transaction.

        Args:
            intent: Transaction intent

        Returns:
            Transaction hash and maximum fee
        """
        account = self._require_key()
        provider = self._require_provider()

        populated = populate_transaction(intent, self._address, provider)
        tx_hash = self._sign_and_send(account, provider, populated)
        return TransactionResult(hash=tx_hash, fee=quote_fee(populated))

    def quote_transfer(self, options: Union[TransferOptions, Dict[str, Any]]) -> TransactionQuote:
        """Quote the maximum fee of an ERC-20 transfer."""
        options = TransferOptions.model_validate(options)
        return self.quote_send_transaction(self._transfer_intent(options))

    def transfer(self, options: Union[TransferOptions, Dict[str, Any]]) -> TransactionResult:
        """
        Transfer ERC-20 tokens.

        Raises:
            TransferFeeExceededError: If the quoted fee reaches the
                configured transfer_max_fee
        """
        options = TransferOptions.model_validate(options)
        account = self._require_key()
        provider = self._require_provider()

        populated = populate_transaction(self._transfer_intent(options), self._address, provider)
        fee = quote_fee(populated)

        max_fee = self._config.transfer_max_fee
        if max_fee is not None and fee >= max_fee:
            raise TransferFeeExceededError(details={"fee": fee, "transferMaxFee": max_fee})

        tx_hash = self._sign_and_send(account, provider, populated)
        return TransactionResult(hash=tx_hash, fee=fee)

    def dispose(self) -> None:
        """Erase the private key from memory and close a provider built by this account."""
        self._account = None
        if self._owns_provider and self._provider is not None:
            self._provider.close()
        logger.debug(f"Disposed account {self._address}")

    # =========================================================================
    # Internals
    # =========================================================================

    def _transfer_intent(self, options: TransferOptions) -> TransactionIntent:
        return TransactionIntent(
            to=options.token,
            data=encode_transfer(options.recipient, options.amount),
        )

    def _sign_and_send(self, account: LocalAccount, provider: NetworkProvider,
                       populated: PopulatedTransaction) -> str:
        kwargs = {"blobs": populated.blobs} if populated.blobs else {}
        signed = account.sign_transaction(populated.to_signable_dict(), **kwargs)
        raw = "0x" + bytes(signed.raw_transaction).hex()
        return provider.send_raw_transaction(raw)

    def _require_key(self) -> LocalAccount:
        if self._account is None:
            raise AccountDisposedError()
        return self._account

    def _require_provider(self) -> NetworkProvider:
        if self._provider is None:
            raise WalletError(
                "The wallet must be connected to a provider to perform this operation",
                code=ErrorCode.PROVIDER_REQUIRED,
            )
        return self._provider

    def __repr__(self) -> str:
        return f"WalletAccount(address='{self._address}', path='{self._path}')"


__all__ = [
    "TransactionQuote",
    "TransactionResult",
    "TransferOptions",
    "WalletAccount",
]
