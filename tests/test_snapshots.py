"""Tests for the BalanceSnapshotStore domain service."""

from dataclasses import FrozenInstanceError

import pytest

from conftest import at
from pocketledger.domain.errors import InvalidAmountError
from pocketledger.domain.snapshots import BalanceSnapshotStore
from pocketledger.domain.wallets import WalletRegistry


def test_capture_totals_balances(wallet_registry, snapshot_store):
    """A capture totals the given balances."""
    cash = wallet_registry.create("Cash")
    bank = wallet_registry.create("Bank")

    snapshot = snapshot_store.capture({cash.id: 12000, bank.id: 3000}, timestamp=at(1))

    assert snapshot.total_balance == 15000
    assert snapshot.balance_for(cash.id) == 12000
    assert snapshot_store.latest() == snapshot


def test_missing_wallets_count_as_zero(wallet_registry, snapshot_store):
    """Wallets left out count as 0."""
    cash = wallet_registry.create("Cash")
    bank = wallet_registry.create("Bank")

    snapshot = snapshot_store.capture({cash.id: 500})

    assert snapshot.total_balance == 500
    assert snapshot.balance_for(bank.id) == 0
    assert snapshot_store.current_balance(bank.id) == 0


def test_negative_balance_allowed(wallet_registry, snapshot_store):
    """Balances may be negative."""
    card = wallet_registry.create("Card")
    snapshot = snapshot_store.capture({card.id: -2500})
    assert snapshot.total_balance == -2500


def test_non_integer_balance_rejected(wallet_registry, snapshot_store):
    """Non-integer balances are rejected before capture."""
    cash = wallet_registry.create("Cash")
    with pytest.raises(InvalidAmountError):
        snapshot_store.capture({cash.id: 12.5})
    assert snapshot_store.snapshots == ()


def test_capture_marks_every_wallet_reconciled(wallet_registry, snapshot_store):
    """Every wallet is stamped with the capture time."""
    cash = wallet_registry.create("Cash")
    bank = wallet_registry.create("Bank")

    snapshot_store.capture({cash.id: 100}, timestamp=at(9))

    for wallet in wallet_registry.wallets:
        assert wallet.last_reconciled_at == at(9)
    assert wallet_registry.get(bank.id).last_reconciled_at == at(9)


def test_reconciled_time_persisted(temp_db, wallet_registry, snapshot_store):
    """The reconciled time survives a reload."""
    cash = wallet_registry.create("Cash")
    snapshot_store.capture({cash.id: 100}, timestamp=at(9))

    reloaded = WalletRegistry(temp_db)
    reloaded.load()
    assert reloaded.get(cash.id).last_reconciled_at == at(9)


def test_snapshot_is_immutable(wallet_registry, snapshot_store):
    """Snapshots cannot be changed after capture."""
    cash = wallet_registry.create("Cash")
    balances = {cash.id: 100}
    snapshot = snapshot_store.capture(balances)

    balances[cash.id] = 999
    assert snapshot.balance_for(cash.id) == 100

    with pytest.raises(TypeError):
        snapshot.balances[cash.id] = 5
    with pytest.raises(FrozenInstanceError):
        snapshot.timestamp = at(1)


def test_new_capture_leaves_previous_snapshots_untouched(wallet_registry, snapshot_store):
    """Capturing again does not alter earlier snapshots."""
    cash = wallet_registry.create("Cash")
    first = snapshot_store.capture({cash.id: 100}, timestamp=at(1))
    first_balances = dict(first.balances)
    first_total = first.total_balance

    snapshot_store.capture({cash.id: 700}, timestamp=at(2))

    assert dict(first.balances) == first_balances
    assert first.total_balance == first_total
    assert snapshot_store.snapshots[1] == first


def test_latest_by_timestamp_not_capture_order(wallet_registry, snapshot_store):
    """Latest is decided by timestamp, not capture order."""
    cash = wallet_registry.create("Cash")
    newer = snapshot_store.capture({cash.id: 200}, timestamp=at(5))
    older = snapshot_store.capture({cash.id: 100}, timestamp=at(2))

    assert snapshot_store.latest() == newer
    assert snapshot_store.snapshots == (newer, older)
    assert snapshot_store.previous(newer) == older
    assert snapshot_store.previous(older) is None


def test_latest_tie_broken_by_insertion_order(temp_db, wallet_registry, snapshot_store):
    """On equal timestamps the later capture wins, also after reload."""
    cash = wallet_registry.create("Cash")
    snapshot_store.capture({cash.id: 100}, timestamp=at(3))
    second = snapshot_store.capture({cash.id: 200}, timestamp=at(3))

    assert snapshot_store.latest() == second

    reloaded = BalanceSnapshotStore(temp_db, wallet_registry)
    reloaded.load()
    assert reloaded.latest() == second


def test_latest_none_when_empty(snapshot_store):
    """An empty store has no latest snapshot."""
    assert snapshot_store.latest() is None
    assert snapshot_store.total_balance == 0
