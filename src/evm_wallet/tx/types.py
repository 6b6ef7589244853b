"""
Transaction records exchanged with callers and network providers.

TransactionIntent is the sparse, user-authored request; FeeSnapshot is the
node's fee recommendation; PopulatedTransaction is the closed, type-tagged
result handed to the signer. Field names follow Python conventions while
aliases accept and emit the camelCase wire shape (gasPrice, accessList, ...).
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from enum import IntEnum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TxType(IntEnum):
    """Transaction envelope types understood by the populator."""

    LEGACY = 0
    ACCESS_LIST = 1
    DYNAMIC_FEE = 2
    BLOB = 3


def parse_quantity(value: Any) -> Optional[int]:
    """
    Parse an integer quantity from an int or a hex/decimal string.

    Args:
        value: int, "0x"-prefixed hex string, decimal string or None

    Returns:
        Parsed integer, or None when value is None

    Raises:
        ValueError: If the value cannot be interpreted as an integer
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer quantity, got bool: {value}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text)
    raise ValueError(f"Cannot parse integer quantity from type: {type(value)}")


class AccessListEntry(BaseModel):
    """One address with the storage keys it will touch."""

    address: str
    storage_keys: List[str] = Field(default_factory=list, alias="storageKeys")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


AccessList = List[AccessListEntry]
BlobData = Union[bytes, str]


class TransactionIntent(BaseModel):
    """
    Sparse transaction request as written by the caller.

    Every field is optional and None means "not declared". Whether a field
    is declared is itself meaningful: the populator infers the transaction
    type from which field groups are present.
    """

    to: Optional[str] = None
    data: Optional[BlobData] = None
    value: Optional[int] = None
    type: Optional[int] = None
    nonce: Optional[int] = None
    gas_limit: Optional[int] = Field(default=None, alias="gasLimit")
    gas_price: Optional[int] = Field(default=None, alias="gasPrice")
    max_fee_per_gas: Optional[int] = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: Optional[int] = Field(default=None, alias="maxPriorityFeePerGas")
    access_list: Optional[AccessList] = Field(default=None, alias="accessList")
    blobs: Optional[List[BlobData]] = None
    blob_versioned_hashes: Optional[List[str]] = Field(default=None, alias="blobVersionedHashes")
    max_fee_per_blob_gas: Optional[int] = Field(default=None, alias="maxFeePerBlobGas")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator(
        'value', 'type', 'nonce', 'gas_limit', 'gas_price', 'max_fee_per_gas',
        'max_priority_fee_per_gas', 'max_fee_per_blob_gas',
        mode='before'
    )
    @classmethod
    def parse_int_fields(cls, v: Any) -> Optional[int]:
        return parse_quantity(v)

    @field_validator('access_list', mode='before')
    @classmethod
    def drop_non_sequence_access_list(cls, v: Any) -> Any:
        # Only a list/tuple counts as a declared access list
        if isinstance(v, (list, tuple)):
            return list(v)
        return None


class FeeSnapshot(BaseModel):
    """Point-in-time fee recommendation read from the network."""

    gas_price: Optional[int] = Field(default=None, alias="gasPrice")
    max_fee_per_gas: Optional[int] = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: Optional[int] = Field(default=None, alias="maxPriorityFeePerGas")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator('gas_price', 'max_fee_per_gas', 'max_priority_fee_per_gas', mode='before')
    @classmethod
    def parse_int_fields(cls, v: Any) -> Optional[int]:
        return parse_quantity(v)

    @property
    def supports_priority_fee(self) -> bool:
        """True when the network reported both priority-fee values."""
        return self.max_fee_per_gas is not None and self.max_priority_fee_per_gas is not None


class GasEstimateRequest(BaseModel):
    """Call parameters passed to the provider for gas estimation."""

    from_address: str = Field(alias="from")
    to: Optional[str] = None
    data: BlobData = "0x"
    value: int = 0

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_rpc_params(self) -> Dict[str, Any]:
        """Render as an eth_call / eth_estimateGas call object."""
        data = self.data.hex() if isinstance(self.data, bytes) else self.data
        if not data.startswith("0x"):
            data = "0x" + data
        params: Dict[str, Any] = {
            "from": self.from_address,
            "data": data,
            "value": hex(self.value),
        }
        if self.to is not None:
            params["to"] = self.to
        return params


class PopulatedTransaction(BaseModel):
    """
    Fully specified transaction ready for signing.

    Exactly one fee cluster is present, selected by ``type``:
    gas_price for types 0 and 1, the priority-fee pair for types 2 and 3,
    plus max_fee_per_blob_gas for type 3.
    """

    from_address: str = Field(alias="from")
    to: Optional[str] = None
    data: BlobData = "0x"
    value: int = 0
    chain_id: int = Field(alias="chainId")
    nonce: int
    gas_limit: int = Field(alias="gasLimit")
    type: int

    gas_price: Optional[int] = Field(default=None, alias="gasPrice")
    max_fee_per_gas: Optional[int] = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: Optional[int] = Field(default=None, alias="maxPriorityFeePerGas")
    access_list: Optional[AccessList] = Field(default=None, alias="accessList")
    max_fee_per_blob_gas: Optional[int] = Field(default=None, alias="maxFeePerBlobGas")
    blobs: Optional[List[BlobData]] = None
    blob_versioned_hashes: Optional[List[str]] = Field(default=None, alias="blobVersionedHashes")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def effective_gas_price(self) -> Optional[int]:
        """Upper bound on the price paid per gas unit."""
        if self.max_fee_per_gas is not None:
            return self.max_fee_per_gas
        return self.gas_price

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dict containing only the populated fields."""
        result = self.model_dump(by_alias=True, exclude_none=True)
        # Null recipient is meaningful (contract creation)
        result["to"] = self.to
        return result

    def to_signable_dict(self) -> Dict[str, Any]:
        """
        Convert to the transaction dict accepted by ``eth_account``.

        Blobs are not part of the signed payload and are passed to the
        signer separately.
        """
        tx: Dict[str, Any] = {
            "chainId": self.chain_id,
            "nonce": self.nonce,
            "gas": self.gas_limit,
            "value": self.value,
            "data": self.data,
        }
        if self.to is not None:
            tx["to"] = self.to
        if self.type != TxType.LEGACY:
            tx["type"] = self.type
        if self.gas_price is not None:
            tx["gasPrice"] = self.gas_price
        if self.max_fee_per_gas is not None:
            tx["maxFeePerGas"] = self.max_fee_per_gas
        if self.max_priority_fee_per_gas is not None:
            tx["maxPriorityFeePerGas"] = self.max_priority_fee_per_gas
        if self.access_list is not None:
            tx["accessList"] = [entry.model_dump(by_alias=True) for entry in self.access_list]
        if self.max_fee_per_blob_gas is not None:
            tx["maxFeePerBlobGas"] = self.max_fee_per_blob_gas
        if self.blob_versioned_hashes is not None:
            tx["blobVersionedHashes"] = list(self.blob_versioned_hashes)
        return tx


__all__ = [
    "TxType",
    "parse_quantity",
    "AccessListEntry",
    "AccessList",
    "TransactionIntent",
    "FeeSnapshot",
    "GasEstimateRequest",
    "PopulatedTransaction",
]
