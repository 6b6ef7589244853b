"""
BIP-39 seed phrase and BIP-44 path helpers.
"""

from __future__ import annotations
from typing import Any

from mnemonic import Mnemonic

from ..runtime.errors import WalletError

MNEMONIC_LANG = "english"

# m / purpose' / coin_type' for Ethereum
BIP44_ETH_PREFIX = "m/44'/60'"


def generate_seed_phrase(words: int = 12) -> str:
    """
    Generate a random BIP-39 seed phrase.

    Args:
        words: Number of words (12, 15, 18, 21 or 24)

    Returns:
        Space-separated mnemonic
    """
    if words not in (12, 15, 18, 21, 24):
        raise ValueError(f"Unsupported seed phrase length: {words}")
    strength = words * 32 // 3
    return Mnemonic(MNEMONIC_LANG).generate(strength=strength)


def is_valid_seed_phrase(seed_phrase: Any) -> bool:
    """Check that a value is a BIP-39 mnemonic with a valid checksum."""
    if not isinstance(seed_phrase, str) or not seed_phrase.strip():
        return False
    return Mnemonic(MNEMONIC_LANG).check(seed_phrase.strip())


def full_path(relative_path: str) -> str:
    """
    Expand a path relative to the Ethereum BIP-44 root.

    ``"0'/0/5"`` becomes ``"m/44'/60'/0'/0/5"``.
    """
    relative_path = relative_path.strip().strip("/")
    if not relative_path:
        raise WalletError("Derivation path cannot be empty")
    return f"{BIP44_ETH_PREFIX}/{relative_path}"


def path_index(path: str) -> int:
    """Address index of a derivation path (its last component)."""
    last = path.rstrip("/").split("/")[-1]
    try:
        return int(last.rstrip("'"))
    except ValueError:
        raise WalletError(f"Invalid derivation path: {path}")
