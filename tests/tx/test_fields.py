"""
Test field-group classification and conflict rules.
"""

from dataclasses import FrozenInstanceError

import pytest

from helpers import BLOB_HASH, mk_access_list

from evm_wallet.runtime.errors import ConflictingFieldsError, ErrorCode
from evm_wallet.tx.fields import DeclaredFields, FieldGroup, check_conflicts, classify
from evm_wallet.tx.types import TransactionIntent


def _declared(**fields):
    return classify(TransactionIntent(**fields))


class TestClassify:
    """Tests for classify()."""

    def test_empty_intent(self):
        declared = _declared()
        assert declared.groups == FieldGroup.NONE
        assert not declared.is_type_explicit

    def test_single_priority_fee_field_declares_group(self):
        assert _declared(max_fee_per_gas=1).has_priority_fee
        assert _declared(max_priority_fee_per_gas=1).has_priority_fee

    def test_zero_counts_as_declared(self):
        """Presence matters, not truthiness."""
        declared = _declared(gas_price=0, max_fee_per_blob_gas=0)
        assert declared.has_legacy_price
        assert declared.has_blob_fields

    def test_each_blob_field_declares_group(self):
        assert _declared(blobs=[b"\x00"]).has_blob_fields
        assert _declared(blob_versioned_hashes=[BLOB_HASH]).has_blob_fields
        assert _declared(max_fee_per_blob_gas=1).has_blob_fields

    def test_access_list(self):
        declared = classify(TransactionIntent.model_validate({"accessList": mk_access_list()}))
        assert declared.has_access_list
        assert declared.groups == FieldGroup.ACCESS_LIST

    def test_combined_groups(self):
        declared = _declared(type=5, gas_price=1, max_fee_per_gas=2)
        assert declared.groups == FieldGroup.LEGACY_PRICE | FieldGroup.PRIORITY_FEE
        assert declared.explicit_type == 5

    def test_explicit_type_zero_is_explicit(self):
        assert _declared(type=0).is_type_explicit

    def test_declared_fields_is_immutable(self):
        declared = _declared()
        with pytest.raises(FrozenInstanceError):
            declared.explicit_type = 2


class TestCheckConflicts:
    """Tests for check_conflicts()."""

    @pytest.mark.parametrize("fields", [
        {},
        {"gas_price": 1},
        {"type": 0, "gas_price": 1},
        {"type": 1, "gas_price": 1},
        {"max_fee_per_gas": 1, "max_priority_fee_per_gas": 1},
        {"type": 2, "max_fee_per_gas": 1},
        {"type": 3, "max_fee_per_gas": 1, "max_fee_per_blob_gas": 1},
        {"type": 5, "gas_price": 1, "max_fee_per_gas": 1},
        {"type": 9, "max_fee_per_gas": 1, "blobs": [b"\x00"]},
    ])
    def test_accepted(self, fields):
        check_conflicts(_declared(**fields))

    def test_blob_fields_with_legacy_price_on_unknown_type(self):
        """Blob fields reject gasPrice whatever the explicit type."""
        declared = _declared(type=9, gas_price=1, blobs=[b"\x00"])

        with pytest.raises(ConflictingFieldsError) as exc_info:
            check_conflicts(declared)

        assert exc_info.value.groups == ("blob", "legacy")

    def test_first_matching_rule_wins(self):
        """Priority-fee and blob rules both match: the priority-fee rule is reported."""
        declared = _declared(gas_price=1, max_fee_per_gas=1, max_fee_per_blob_gas=1)

        with pytest.raises(ConflictingFieldsError) as exc_info:
            check_conflicts(declared)

        assert exc_info.value.groups == ("priority-fee", "legacy")
        assert exc_info.value.code == ErrorCode.CONFLICTING_FIELDS

    def test_explicit_blob_type_with_priority_and_legacy(self):
        """Explicit type 3 skips the priority-fee rule but hits the blob rule."""
        declared = _declared(type=3, gas_price=1, max_fee_per_gas=1)

        with pytest.raises(ConflictingFieldsError) as exc_info:
            check_conflicts(declared)

        assert exc_info.value.groups == ("blob", "legacy")

    def test_works_on_hand_built_declaration(self):
        declared = DeclaredFields(groups=FieldGroup.PRIORITY_FEE, explicit_type=1)

        with pytest.raises(ConflictingFieldsError, match="legacy transaction"):
            check_conflicts(declared)
