"""
Field-group classification of transaction intents.

An intent declares zero or more fee/payload field groups. The groups are
collected once into an immutable DeclaredFields value so that every rule
that combines them (conflict checks, type inference, pass-through copying)
reads the same classification.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Flag, auto
from typing import Optional

from ..runtime.errors import ConflictingFieldsError
from .types import TransactionIntent, TxType


class FieldGroup(Flag):
    """Fee and payload field groups an intent can declare."""

    NONE = 0
    PRIORITY_FEE = auto()   # maxFeePerGas / maxPriorityFeePerGas
    LEGACY_PRICE = auto()   # gasPrice
    ACCESS_LIST = auto()    # accessList
    BLOB = auto()           # blobs / blobVersionedHashes / maxFeePerBlobGas


@dataclass(frozen=True)
class DeclaredFields:
    """Field groups present on an intent, plus its explicit type tag."""

    groups: FieldGroup
    explicit_type: Optional[int] = None

    @property
    def has_priority_fee(self) -> bool:
        return FieldGroup.PRIORITY_FEE in self.groups

    @property
    def has_legacy_price(self) -> bool:
        return FieldGroup.LEGACY_PRICE in self.groups

    @property
    def has_access_list(self) -> bool:
        return FieldGroup.ACCESS_LIST in self.groups

    @property
    def has_blob_fields(self) -> bool:
        return FieldGroup.BLOB in self.groups

    @property
    def is_type_explicit(self) -> bool:
        return self.explicit_type is not None


def classify(intent: TransactionIntent) -> DeclaredFields:
    """
    Collect the field groups declared by an intent.

    Pure function of the intent; never touches the network.

    Args:
        intent: Transaction intent

    Returns:
        DeclaredFields describing which groups are present
    """
    groups = FieldGroup.NONE
    if intent.max_fee_per_gas is not None or intent.max_priority_fee_per_gas is not None:
        groups |= FieldGroup.PRIORITY_FEE
    if intent.gas_price is not None:
        groups |= FieldGroup.LEGACY_PRICE
    if intent.access_list is not None:
        groups |= FieldGroup.ACCESS_LIST
    if (intent.blobs is not None
            or intent.blob_versioned_hashes is not None
            or intent.max_fee_per_blob_gas is not None):
        groups |= FieldGroup.BLOB

    return DeclaredFields(groups=groups, explicit_type=intent.type)


def check_conflicts(declared: DeclaredFields) -> None:
    """
    Reject intents whose declared field groups contradict each other.

    Rules are evaluated in a fixed order and the first match wins:

    1. priority-fee transaction (explicit type 2, or untyped with
       priority-fee fields) carrying a legacy gas price
    2. explicit legacy-family type (0 or 1) carrying priority-fee fields
    3. blob transaction (explicit type 3, or blob fields) carrying a
       legacy gas price

    Args:
        declared: Classified intent fields

    Raises:
        ConflictingFieldsError: If any rule matches
    """
    explicit = declared.explicit_type

    is_priority_fee_tx = (
        explicit == TxType.DYNAMIC_FEE
        or (explicit is None and declared.has_priority_fee)
    )
    if is_priority_fee_tx and declared.has_legacy_price:
        raise ConflictingFieldsError(
            "priority-fee transaction does not support gasPrice",
            groups=("priority-fee", "legacy"),
        )

    if explicit in (TxType.LEGACY, TxType.ACCESS_LIST) and declared.has_priority_fee:
        raise ConflictingFieldsError(
            "legacy transaction does not support maxFeePerGas/maxPriorityFeePerGas",
            groups=("legacy-type", "priority-fee"),
        )

    is_blob_tx = explicit == TxType.BLOB or declared.has_blob_fields
    if is_blob_tx and declared.has_legacy_price:
        raise ConflictingFieldsError(
            "blob transaction does not support gasPrice",
            groups=("blob", "legacy"),
        )


__all__ = [
    "FieldGroup",
    "DeclaredFields",
    "classify",
    "check_conflicts",
]
