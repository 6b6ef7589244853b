"""
Transaction population for EVM chains.

Turns a sparse TransactionIntent into a PopulatedTransaction of exactly one
transaction shape (legacy, access-list, priority-fee or blob), filling
unspecified values from the network and rejecting self-contradictory
intents before any network access.
"""

from __future__ import annotations
from typing import Any, Dict, Union
import logging

from ..runtime.errors import MissingRequiredFieldError
from .fields import DeclaredFields, check_conflicts, classify
from .types import (
    FeeSnapshot,
    GasEstimateRequest,
    PopulatedTransaction,
    TransactionIntent,
    TxType,
)

logger = logging.getLogger(__name__)


def resolve_type(declared: DeclaredFields, snapshot: FeeSnapshot) -> int:
    """
    Resolve the effective transaction type.

    An explicit type is trusted as-is. Otherwise blob fields select type 3,
    a network that reports priority fees selects type 2, and anything else
    falls back to type 0.

    Args:
        declared: Classified intent fields
        snapshot: Network fee snapshot

    Returns:
        Transaction type tag
    """
    if declared.explicit_type is not None:
        return declared.explicit_type
    if declared.has_blob_fields:
        return TxType.BLOB
    if snapshot.supports_priority_fee:
        return TxType.DYNAMIC_FEE
    return TxType.LEGACY


def populate_transaction(
    intent: Union[TransactionIntent, Dict[str, Any]],
    from_address: str,
    provider: Any,
) -> PopulatedTransaction:
    """
    Produce a fully populated, type-consistent transaction.

    Args:
        intent: Transaction intent (model or camelCase/snake_case dict)
        from_address: Sender address
        provider: Network collaborator exposing get_chain_id,
            get_fee_snapshot, get_pending_nonce and estimate_gas

    Returns:
        Populated transaction

    Raises:
        ConflictingFieldsError: If the intent declares incompatible field groups
        MissingRequiredFieldError: If a type 3 intent lacks maxFeePerBlobGas

    Provider errors propagate unchanged.
    """
    if not isinstance(intent, TransactionIntent):
        intent = TransactionIntent.model_validate(intent)

    declared = classify(intent)
    check_conflicts(declared)

    chain_id = provider.get_chain_id()
    snapshot = provider.get_fee_snapshot()

    tx_type = resolve_type(declared, snapshot)

    to = intent.to
    data = intent.data if intent.data is not None else "0x"
    value = intent.value if intent.value is not None else 0

    if intent.nonce is not None:
        nonce = intent.nonce
    else:
        nonce = provider.get_pending_nonce(from_address)

    if intent.gas_limit is not None:
        gas_limit = intent.gas_limit
    else:
        gas_limit = provider.estimate_gas(
            GasEstimateRequest(from_address=from_address, to=to, data=data, value=value)
        )

    fields: Dict[str, Any] = {
        "from_address": from_address,
        "to": to,
        "data": data,
        "value": value,
        "chain_id": chain_id,
        "nonce": nonce,
        "gas_limit": gas_limit,
        "type": int(tx_type),
    }
    fields.update(_fee_fields(tx_type, intent, declared, snapshot))

    logger.debug(
        f"Populated type {tx_type} transaction from {from_address} "
        f"(nonce={nonce}, gas={gas_limit}, explicit={declared.is_type_explicit})"
    )
    return PopulatedTransaction(**fields)


def _fee_fields(
    tx_type: int,
    intent: TransactionIntent,
    declared: DeclaredFields,
    snapshot: FeeSnapshot,
) -> Dict[str, Any]:
    """Select the type-specific field cluster."""
    fields: Dict[str, Any] = {}

    if tx_type in (TxType.LEGACY, TxType.ACCESS_LIST):
        fields["gas_price"] = _first_present(
            intent.gas_price, snapshot.gas_price, snapshot.max_fee_per_gas
        )
        if tx_type == TxType.ACCESS_LIST and declared.has_access_list:
            fields["access_list"] = intent.access_list
        return fields

    if tx_type == TxType.DYNAMIC_FEE:
        if intent.gas_price is not None:
            fields["max_fee_per_gas"] = intent.gas_price
            fields["max_priority_fee_per_gas"] = intent.gas_price
        else:
            fields["max_fee_per_gas"] = _first_present(
                intent.max_fee_per_gas, snapshot.max_fee_per_gas
            )
            fields["max_priority_fee_per_gas"] = _first_present(
                intent.max_priority_fee_per_gas, snapshot.max_priority_fee_per_gas
            )
        if declared.has_access_list:
            fields["access_list"] = intent.access_list
        return fields

    if tx_type == TxType.BLOB:
        fields["max_fee_per_gas"] = _first_present(
            intent.max_fee_per_gas, snapshot.max_fee_per_gas
        )
        fields["max_priority_fee_per_gas"] = _first_present(
            intent.max_priority_fee_per_gas, snapshot.max_priority_fee_per_gas
        )
        if intent.max_fee_per_blob_gas is None:
            raise MissingRequiredFieldError(
                "maxFeePerBlobGas is required for type 3 transactions",
                field="maxFeePerBlobGas",
            )
        fields["max_fee_per_blob_gas"] = intent.max_fee_per_blob_gas
        if intent.blobs is not None:
            fields["blobs"] = intent.blobs
        if intent.blob_versioned_hashes is not None:
            fields["blob_versioned_hashes"] = intent.blob_versioned_hashes
        if declared.has_access_list:
            fields["access_list"] = intent.access_list
        return fields

    # Unknown future types: copy declared groups verbatim
    if declared.has_access_list:
        fields["access_list"] = intent.access_list
    if declared.has_legacy_price:
        fields["gas_price"] = intent.gas_price
    if declared.has_priority_fee:
        fields["max_fee_per_gas"] = intent.max_fee_per_gas
        fields["max_priority_fee_per_gas"] = intent.max_priority_fee_per_gas
    if declared.has_blob_fields:
        fields["max_fee_per_blob_gas"] = intent.max_fee_per_blob_gas
        if intent.blobs is not None:
            fields["blobs"] = intent.blobs
        if intent.blob_versioned_hashes is not None:
            fields["blob_versioned_hashes"] = intent.blob_versioned_hashes
    return fields


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


__all__ = [
    "resolve_type",
    "populate_transaction",
]
