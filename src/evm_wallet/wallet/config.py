"""Wallet configuration."""

from __future__ import annotations
from typing import Optional, Union
from dataclasses import dataclass

from ..provider.base import NetworkProvider
from ..provider.jsonrpc import JsonRpcProvider, ProviderConfig


@dataclass
class WalletConfig:
    """
    Configuration shared by a wallet manager and its accounts.

    Attributes:
        provider: RPC URL, well-known network name, ProviderConfig or a
            ready NetworkProvider. None leaves the wallet offline.
        transfer_max_fee: Upper bound (exclusive) in wei on the quoted fee
            of token transfers. None disables the check.
    """

    provider: Union[str, ProviderConfig, NetworkProvider, None] = None
    transfer_max_fee: Optional[int] = None

    @property
    def creates_provider(self) -> bool:
        """True when build_provider() creates a new provider owned by the caller."""
        return self.provider is not None and not isinstance(self.provider, NetworkProvider)

    def build_provider(self) -> Optional[NetworkProvider]:
        """Resolve the configured provider, creating a JSON-RPC one if needed."""
        if self.provider is None or isinstance(self.provider, NetworkProvider):
            return self.provider
        return JsonRpcProvider(self.provider)
