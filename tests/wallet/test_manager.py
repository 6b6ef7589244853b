"""
Tests for WalletManager.
"""

from unittest.mock import patch

import pytest

from helpers import ACCOUNT0, ACCOUNT1, GWEI, FakeProvider, LEGACY_SNAPSHOT

from evm_wallet.provider.jsonrpc import JsonRpcProvider
from evm_wallet.runtime.errors import (
    AccountDisposedError,
    ErrorCode,
    InvalidSeedPhraseError,
    WalletError,
)
from evm_wallet.wallet.config import WalletConfig
from evm_wallet.wallet.manager import WalletManager


@pytest.fixture
def wallet(seed_phrase, provider):
    return WalletManager(seed_phrase, WalletConfig(provider=provider))


class TestConstruction:

    def test_invalid_seed_phrase(self):
        with pytest.raises(InvalidSeedPhraseError):
            WalletManager(" ".join(["abandon"] * 12))

    def test_offline(self, seed_phrase):
        wallet = WalletManager(seed_phrase)
        assert wallet.provider is None
        assert wallet.seed_phrase == seed_phrase

    def test_provider_url_builds_json_rpc_provider(self, seed_phrase):
        wallet = WalletManager(seed_phrase, WalletConfig(provider="http://127.0.0.1:8545"))

        assert isinstance(wallet.provider, JsonRpcProvider)
        assert wallet.provider.endpoint == "http://127.0.0.1:8545"
        wallet.provider.close()

    def test_random_seed_phrase(self):
        phrase = WalletManager.get_random_seed_phrase()

        assert len(phrase.split()) == 12
        assert WalletManager.is_valid_seed_phrase(phrase)

    @pytest.mark.parametrize("value", [None, "", "   ", 12, "not a real phrase at all"])
    def test_invalid_values(self, value):
        assert not WalletManager.is_valid_seed_phrase(value)


class TestAccounts:

    def test_default_account(self, wallet):
        account = wallet.get_account()

        assert account.address == ACCOUNT0["address"]
        assert account.path == ACCOUNT0["path"]

    def test_account_by_index(self, wallet):
        assert wallet.get_account(1).address == ACCOUNT1["address"]

    def test_account_by_path(self, wallet):
        account = wallet.get_account_by_path("0'/0/1")

        assert account.address == ACCOUNT1["address"]
        assert account.index == 1

    def test_accounts_are_cached(self, wallet):
        assert wallet.get_account(1) is wallet.get_account_by_path("0'/0/1")

    def test_accounts_share_provider(self, wallet, provider):
        assert wallet.get_account(0).provider is provider

    @pytest.mark.parametrize("index", [-1, 1.5, "1", True])
    def test_invalid_index(self, wallet, index):
        with pytest.raises(WalletError):
            wallet.get_account(index)

    def test_empty_path(self, wallet):
        with pytest.raises(WalletError):
            wallet.get_account_by_path("")


class TestFeeRates:

    def test_priority_fee_network(self, wallet):
        assert wallet.get_fee_rates() == {"normal": 55 * GWEI, "fast": 100 * GWEI}

    def test_legacy_network(self, seed_phrase):
        wallet = WalletManager(seed_phrase, WalletConfig(provider=FakeProvider(snapshot=LEGACY_SNAPSHOT)))
        assert wallet.get_fee_rates() == {"normal": 22 * GWEI, "fast": 40 * GWEI}

    def test_requires_provider(self, seed_phrase):
        with pytest.raises(WalletError) as exc_info:
            WalletManager(seed_phrase).get_fee_rates()

        assert exc_info.value.code == ErrorCode.PROVIDER_REQUIRED


class TestDispose:

    def test_disposes_derived_accounts(self, wallet):
        first, second = wallet.get_account(0), wallet.get_account(1)

        wallet.dispose()

        for account in (first, second):
            with pytest.raises(AccountDisposedError):
                account.sign("hello")

    def test_new_accounts_after_dispose(self, wallet):
        old = wallet.get_account(0)
        wallet.dispose()

        fresh = wallet.get_account(0)

        assert fresh is not old
        assert fresh.sign("hello").startswith("0x")

    def test_closes_provider_it_built(self, seed_phrase):
        wallet = WalletManager(seed_phrase, WalletConfig(provider="local"))
        wallet.get_account(0)

        with patch.object(wallet.provider, "close") as close:
            wallet.dispose()

        close.assert_called_once()

    def test_leaves_supplied_provider_open(self, wallet, provider):
        wallet.get_account(0)
        wallet.dispose()

        assert not provider.closed
