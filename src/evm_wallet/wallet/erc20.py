"""ERC-20 calldata helpers."""

from __future__ import annotations

from eth_abi import decode, encode
from eth_utils import to_checksum_address

# keccak256("transfer(address,uint256)")[:4]
TRANSFER_SELECTOR = "a9059cbb"
# keccak256("balanceOf(address)")[:4]
BALANCE_OF_SELECTOR = "70a08231"


def encode_transfer(recipient: str, amount: int) -> str:
    """
    Encode calldata for ``transfer(recipient, amount)``.

    Args:
        recipient: Recipient address
        amount: Token amount in base units

    Returns:
        0x-prefixed calldata
    """
    if amount < 0:
        raise ValueError(f"Transfer amount must be non-negative: {amount}")
    args = encode(["address", "uint256"], [to_checksum_address(recipient), amount])
    return "0x" + TRANSFER_SELECTOR + args.hex()


def encode_balance_of(owner: str) -> str:
    """Encode calldata for ``balanceOf(owner)``."""
    args = encode(["address"], [to_checksum_address(owner)])
    return "0x" + BALANCE_OF_SELECTOR + args.hex()


def decode_uint256(result: str) -> int:
    """Decode a single uint256 return value."""
    raw = bytes.fromhex(result[2:] if result.startswith("0x") else result)
    (value,) = decode(["uint256"], raw)
    return value
