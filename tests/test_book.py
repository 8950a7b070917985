"""Tests for FinanceBook, change notifications and save failures."""

import pytest

from pocketledger.domain.book import FinanceBook
from pocketledger.domain.entities import AssetKind, EntryKind
from pocketledger.domain.errors import InvalidAmountError, PersistError
from pocketledger.domain.ledger import Ledger
from pocketledger.domain.notifier import ChangeNotifier


def test_open_seeds_default_wallets(book):
    """Opening a new book seeds the default wallets."""
    assert [w.name for w in book.wallets.wallets] == ["Cash", "Bank Card", "WeChat Pay", "Alipay"]
    assert book.last_save_error is None


def test_reopen_does_not_reseed(temp_db, book):
    """Reopening after deleting every wallet does not seed again."""
    for wallet in book.wallets.wallets:
        book.wallets.delete(wallet.id)

    reopened = FinanceBook(temp_db)
    reopened.open()
    assert reopened.wallets.wallets == ()


def test_notifier_triggers_reload(temp_db):
    """A notification reloads the book until it is closed."""
    notifier = ChangeNotifier()
    viewer = FinanceBook(temp_db, notifier=notifier)
    viewer.open()
    writer = FinanceBook(temp_db)
    writer.open()

    entry = writer.ledger.append(500, EntryKind.EXPENSE, writer.wallets.wallets[0].id)
    assert viewer.ledger.get(entry.id) is None

    notifier.notify()
    assert viewer.ledger.get(entry.id) == entry

    viewer.close()
    writer.ledger.delete(entry.id)
    notifier.notify()
    assert viewer.ledger.get(entry.id) == entry


def test_reconcile_latest(book):
    """Reconciling needs at least one snapshot."""
    cash = book.wallets.wallets[0]
    assert book.reconcile_latest() is None

    book.snapshots.capture({cash.id: 1000})
    result = book.reconcile_latest()
    assert result.actual_change == 1000


def test_latest_asset_delta(book):
    """Asset deltas need at least one asset snapshot."""
    assert book.latest_asset_delta() is None
    stocks = book.assets.add("Stocks", AssetKind.INVESTMENT, balance=100)
    book.asset_snapshots.capture()

    deltas = book.latest_asset_delta()
    assert [(d.asset_id, d.change) for d in deltas] == [(stocks.id, 100)]


class TestSaveFailures:
    """In-memory state survives storage failures; the failure is reported."""

    def test_failed_save_keeps_entry_in_memory(self, failing_db):
        """The entry stays in memory and the save error is reported."""
        book = FinanceBook(failing_db)
        book.open()
        wallet_id = book.wallets.wallets[0].id

        failing_db.fail_writes = True
        entry = book.ledger.append(1200, EntryKind.EXPENSE, wallet_id)

        assert book.ledger.get(entry.id) == entry
        assert isinstance(book.ledger.last_save_error, PersistError)
        assert book.last_save_error is book.ledger.last_save_error
        assert book.last_save_error.entity_id == entry.id

        failing_db.fail_writes = False
        book.reload()
        assert book.ledger.get(entry.id) is None

    def test_later_success_clears_error(self, failing_db):
        """A successful save clears the previous save error."""
        ledger = Ledger(failing_db)
        ledger.load()

        failing_db.fail_writes = True
        ledger.append(100, EntryKind.INCOME, "wallet")
        assert ledger.last_save_error is not None

        failing_db.fail_writes = False
        ledger.append(100, EntryKind.INCOME, "wallet")
        assert ledger.last_save_error is None

    def test_snapshot_capture_reports_first_failure(self, failing_db):
        """A failed capture still marks wallets and keeps the first error."""
        book = FinanceBook(failing_db)
        book.open()
        cash = book.wallets.wallets[0]

        failing_db.fail_writes = True
        snapshot = book.snapshots.capture({cash.id: 700})

        assert book.snapshots.latest() == snapshot
        assert book.snapshots.last_save_error.entity_id == snapshot.id
        assert book.wallets.get(cash.id).last_reconciled_at == snapshot.timestamp

    def test_validation_error_leaves_state_unchanged(self, failing_db):
        """Invalid input is rejected before anything is written."""
        book = FinanceBook(failing_db)
        book.open()
        failing_db.fail_writes = True

        with pytest.raises(InvalidAmountError):
            book.ledger.append(0, EntryKind.EXPENSE, book.wallets.wallets[0].id)

        assert book.ledger.entries == ()
        assert book.last_save_error is None
