"""
Fee helpers for EVM transactions.

Derives fee snapshots from raw node data and quotes the maximum cost of a
populated transaction. Gas estimation itself is left to the node.
"""

from __future__ import annotations
from typing import Dict, Optional
from dataclasses import dataclass

from .types import FeeSnapshot, PopulatedTransaction

GWEI = 10 ** 9

# Tip used when the node cannot suggest one
DEFAULT_PRIORITY_FEE = 1 * GWEI


@dataclass
class FeeRateMultipliers:
    """Multipliers applied to the network max fee for fee-rate tiers, in percent."""

    normal: int = 110
    fast: int = 200


def fee_snapshot_from_block(
    gas_price: Optional[int],
    base_fee_per_gas: Optional[int],
    priority_fee: Optional[int] = None,
) -> FeeSnapshot:
    """
    Build a fee snapshot from node-reported values.

    Priority-fee values are only reported when the latest block carries a
    base fee; the max fee leaves room for the base fee to double.

    Args:
        gas_price: Result of eth_gasPrice, if available
        base_fee_per_gas: baseFeePerGas of the latest block, if any
        priority_fee: Result of eth_maxPriorityFeePerGas, if available

    Returns:
        Fee snapshot
    """
    max_fee_per_gas = None
    max_priority_fee_per_gas = None

    if base_fee_per_gas is not None:
        max_priority_fee_per_gas = priority_fee if priority_fee is not None else DEFAULT_PRIORITY_FEE
        max_fee_per_gas = base_fee_per_gas * 2 + max_priority_fee_per_gas

    return FeeSnapshot(
        gas_price=gas_price,
        max_fee_per_gas=max_fee_per_gas,
        max_priority_fee_per_gas=max_priority_fee_per_gas,
    )


def quote_fee(tx: PopulatedTransaction) -> int:
    """
    Maximum fee a populated transaction can cost, in wei.

    Args:
        tx: Populated transaction

    Returns:
        gas_limit multiplied by the max fee (or gas price for legacy types)

    Raises:
        ValueError: If the transaction carries no fee field at all
    """
    price = tx.effective_gas_price
    if price is None:
        raise ValueError(f"Type {tx.type} transaction carries no gas price to quote")
    return tx.gas_limit * price


def fee_rates(snapshot: FeeSnapshot,
              multipliers: Optional[FeeRateMultipliers] = None) -> Dict[str, int]:
    """
    Fee-rate tiers derived from the network max fee.

    Falls back to the legacy gas price on networks without priority fees.

    Args:
        snapshot: Network fee snapshot
        multipliers: Tier multipliers (uses defaults if None)

    Returns:
        Mapping with "normal" and "fast" rates in wei per gas
    """
    if multipliers is None:
        multipliers = FeeRateMultipliers()

    base = snapshot.max_fee_per_gas if snapshot.max_fee_per_gas is not None else snapshot.gas_price
    if base is None:
        raise ValueError("Fee snapshot carries neither maxFeePerGas nor gasPrice")

    return {
        "normal": base * multipliers.normal // 100,
        "fast": base * multipliers.fast // 100,
    }


__all__ = [
    "GWEI",
    "DEFAULT_PRIORITY_FEE",
    "FeeRateMultipliers",
    "fee_snapshot_from_block",
    "quote_fee",
    "fee_rates",
]
