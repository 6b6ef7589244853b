"""
Transaction infrastructure for EVM chains.

Provides the intent/populated transaction records, field-group
classification, type resolution and population, and fee helpers.
"""

from .types import (
    TxType,
    parse_quantity,
    AccessListEntry,
    TransactionIntent,
    FeeSnapshot,
    GasEstimateRequest,
    PopulatedTransaction,
)
from .fields import FieldGroup, DeclaredFields, classify, check_conflicts
from .populate import resolve_type, populate_transaction
from .fees import (
    GWEI,
    DEFAULT_PRIORITY_FEE,
    FeeRateMultipliers,
    fee_snapshot_from_block,
    quote_fee,
    fee_rates,
)

__all__ = [
    # Records
    "TxType",
    "parse_quantity",
    "AccessListEntry",
    "TransactionIntent",
    "FeeSnapshot",
    "GasEstimateRequest",
    "PopulatedTransaction",

    # Field groups
    "FieldGroup",
    "DeclaredFields",
    "classify",
    "check_conflicts",

    # Population
    "resolve_type",
    "populate_transaction",

    # Fees
    "GWEI",
    "DEFAULT_PRIORITY_FEE",
    "FeeRateMultipliers",
    "fee_snapshot_from_block",
    "quote_fee",
    "fee_rates",
]
