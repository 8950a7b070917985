"""Reconciliation engine.

Pure functions comparing what the user recorded in the ledger with what their
snapshots say they actually have. Nothing here mutates state.

Precondition for both functions: ``new_snapshot`` is not older than
``old_snapshot``. Callers must ensure this; it is not checked here.
"""

from typing import Optional

from pocketledger.domain.assets import AssetRegistry
from pocketledger.domain.entities import (
    AssetDelta,
    AssetSnapshot,
    BalanceSnapshot,
    EntryKind,
    ReconciliationResult,
)
from pocketledger.domain.ledger import Ledger


def reconcile(
    old_snapshot: Optional[BalanceSnapshot],
    new_snapshot: BalanceSnapshot,
    ledger: Ledger,
) -> ReconciliationResult:
    """Compare the observed balance change with the recorded one.

    Without an old snapshot the whole new total is the actual change and every
    entry up to the new snapshot counts as recorded. The entry window is closed
    on both ends, unlike ``Ledger.entries_in_window``. Transfers are ignored.
    """
    old_total = old_snapshot.total_balance if old_snapshot is not None else 0
    actual_change = new_snapshot.total_balance - old_total

    start = old_snapshot.timestamp if old_snapshot is not None else None
    entries = ledger.entries_between(start, new_snapshot.timestamp)
    recorded_income = Ledger.sum_amounts(entries, EntryKind.INCOME)
    recorded_expense = Ledger.sum_amounts(entries, EntryKind.EXPENSE)
    recorded_change = recorded_income - recorded_expense

    return ReconciliationResult(
        actual_change=actual_change,
        recorded_change=recorded_change,
        drift=actual_change - recorded_change,
    )


def asset_delta(
    old_snapshot: Optional[AssetSnapshot],
    new_snapshot: AssetSnapshot,
    registry: AssetRegistry,
) -> list[AssetDelta]:
    """Per-asset movement between two snapshots for assets currently registered.

    Assets missing from a snapshot count as 0 there; assets no longer in the
    registry are left out.
    """
    deltas = []
    for asset in registry.assets:
        new_balance = new_snapshot.balance_for(asset.id)
        old_balance = old_snapshot.balance_for(asset.id) if old_snapshot is not None else 0
        deltas.append(
            AssetDelta(
                asset_id=asset.id,
                old_balance=old_balance,
                new_balance=new_balance,
                change=new_balance - old_balance,
            )
        )
    return deltas
