"""Balance snapshot domain service."""

import uuid
from datetime import datetime
from typing import Mapping, Optional

import structlog

from pocketledger.database.base import Database
from pocketledger.domain.entities import BalanceSnapshot
from pocketledger.domain.money import require_balance
from pocketledger.domain.store import Store
from pocketledger.domain.wallets import WalletRegistry
from pocketledger.utils.timestamps import ensure_utc, utc_now

logger = structlog.get_logger(__name__)


def newest_first(snapshots):
    """Sort snapshots by timestamp, later insertion winning ties, newest first."""
    return sorted(snapshots, key=lambda s: (s.timestamp, s.sequence), reverse=True)


class BalanceSnapshotStore(Store):
    """Immutable captures of per-wallet balances, newest first."""

    def __init__(self, db: Database, wallets: WalletRegistry):
        """Initialize snapshot store.

        Args:
            db: Database instance
            wallets: Registry whose wallets are marked reconciled on capture
        """
        super().__init__(db)
        self.wallets = wallets
        self._snapshots: list[BalanceSnapshot] = []

    def load(self) -> None:
        """Replace in-memory snapshots with the persisted ones."""
        with self.lock:
            self._snapshots = newest_first(self.db.list_balance_snapshots())
        logger.debug("balance_snapshots_loaded", count=len(self._snapshots))

    @property
    def snapshots(self) -> tuple[BalanceSnapshot, ...]:
        """All snapshots, newest first."""
        with self.lock:
            return tuple(self._snapshots)

    def latest(self) -> Optional[BalanceSnapshot]:
        """The newest snapshot, or None if nothing was captured yet."""
        with self.lock:
            return self._snapshots[0] if self._snapshots else None

    def previous(self, snapshot: BalanceSnapshot) -> Optional[BalanceSnapshot]:
        """The snapshot captured just before the given one, or None."""
        with self.lock:
            for index, candidate in enumerate(self._snapshots):
                if candidate.id == snapshot.id:
                    if index + 1 < len(self._snapshots):
                        return self._snapshots[index + 1]
                    return None
        return None

    def current_balance(self, wallet_id: str) -> int:
        """A wallet's balance according to the latest snapshot (0 if none)."""
        latest = self.latest()
        if latest is None:
            return 0
        return latest.balance_for(wallet_id)

    @property
    def total_balance(self) -> int:
        latest = self.latest()
        return latest.total_balance if latest is not None else 0

    def capture(
        self, balances: Mapping[str, int], timestamp: Optional[datetime] = None
    ) -> BalanceSnapshot:
        """Capture a snapshot and mark every wallet reconciled at its timestamp.

        Wallets left out of ``balances`` count as 0 in the total.

        Args:
            balances: Wallet ID to balance in minor units (may be negative)
            timestamp: Capture time; defaults to now

        Returns:
            The new snapshot

        Raises:
            InvalidAmountError: If any balance is not an integer
        """
        checked = {str(wallet_id): require_balance(b) for wallet_id, b in balances.items()}
        timestamp = ensure_utc(timestamp) if timestamp is not None else utc_now()

        with self.lock, self.wallets.lock:
            sequence = max((s.sequence for s in self._snapshots), default=0) + 1
            snapshot = BalanceSnapshot(
                id=str(uuid.uuid4()),
                timestamp=timestamp,
                balances=checked,
                sequence=sequence,
            )
            self._snapshots = newest_first([snapshot, *self._snapshots])
            logger.debug(
                "balance_snapshot_captured",
                snapshot_id=snapshot.id,
                total=snapshot.total_balance,
                wallets=len(checked),
            )
            self._persist(self.db.save_balance_snapshot, snapshot)
            self.wallets.mark_reconciled(timestamp)
        return snapshot
