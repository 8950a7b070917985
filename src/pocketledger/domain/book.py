"""Finance book: every finance store behind one object."""

from typing import Optional

import structlog

from pocketledger.database.base import Database
from pocketledger.domain.assets import AssetRegistry, AssetSnapshotStore
from pocketledger.domain.entities import AssetDelta, ReconciliationResult
from pocketledger.domain.errors import PersistError
from pocketledger.domain.ledger import Ledger
from pocketledger.domain.notifier import ChangeNotifier
from pocketledger.domain.reconciliation import asset_delta, reconcile
from pocketledger.domain.snapshots import BalanceSnapshotStore
from pocketledger.domain.wallets import WalletRegistry

logger = structlog.get_logger(__name__)


class FinanceBook:
    """Owns the ledger, wallets, assets and their snapshot stores."""

    def __init__(self, db: Database, notifier: Optional[ChangeNotifier] = None):
        """Initialize finance book.

        Args:
            db: Database instance
            notifier: Optional external-change signal; each notification
                triggers ``reload``
        """
        self.db = db
        self.ledger = Ledger(db)
        self.wallets = WalletRegistry(db)
        self.snapshots = BalanceSnapshotStore(db, self.wallets)
        self.assets = AssetRegistry(db)
        self.asset_snapshots = AssetSnapshotStore(db, self.assets)
        self.notifier = notifier
        if notifier is not None:
            notifier.subscribe(self.reload)

    @property
    def stores(self):
        return (self.ledger, self.wallets, self.snapshots, self.assets, self.asset_snapshots)

    def open(self) -> None:
        """Load every store and seed the default wallets on first use."""
        self.reload()
        self.wallets.seed_defaults()

    def reload(self) -> None:
        """Discard in-memory state and reload every store from the database."""
        for store in self.stores:
            store.load()
        logger.info("finance_book_reloaded")

    def close(self) -> None:
        if self.notifier is not None:
            self.notifier.unsubscribe(self.reload)

    @property
    def last_save_error(self) -> Optional[PersistError]:
        """The first pending persistence warning across stores, if any."""
        for store in self.stores:
            if store.last_save_error is not None:
                return store.last_save_error
        return None

    def reconcile_latest(self) -> Optional[ReconciliationResult]:
        """Reconcile the latest balance snapshot against the one before it.

        Returns:
            None if no snapshot has been captured yet
        """
        latest = self.snapshots.latest()
        if latest is None:
            return None
        return reconcile(self.snapshots.previous(latest), latest, self.ledger)

    def latest_asset_delta(self) -> Optional[list[AssetDelta]]:
        """Asset movement between the latest asset snapshot and the one before it.

        Returns:
            None if no asset snapshot has been captured yet
        """
        latest = self.asset_snapshots.latest()
        if latest is None:
            return None
        return asset_delta(self.asset_snapshots.previous(latest), latest, self.assets)
