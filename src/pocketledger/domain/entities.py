"""Domain model entities for pocketledger.

These are pure data classes representing business concepts, independent of
database schema. Records refer to each other by string id only, so deleting a
wallet or asset never dangles or cascades into entries and snapshots.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from pocketledger.domain.money import total


class EntryKind(str, Enum):
    """Kind of ledger entry; determines the sign of its amount."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class AssetKind(str, Enum):
    """Kind of tracked holding."""

    CURRENT = "current"
    INVESTMENT = "investment"
    LIABILITY = "liability"


def _frozen_balances(balances: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(balances))


@dataclass(frozen=True)
class LedgerEntry:
    """Ledger entry domain entity.

    ``amount`` is always a positive magnitude; the sign comes from ``kind``.
    """

    id: str
    amount: int
    kind: EntryKind
    category: str
    timestamp: datetime
    wallet_id: str
    note: Optional[str] = None
    to_wallet_id: Optional[str] = None

    @property
    def signed_amount(self) -> int:
        """Contribution of this entry to a net total (transfers contribute 0)."""
        if self.kind == EntryKind.INCOME:
            return self.amount
        if self.kind == EntryKind.EXPENSE:
            return -self.amount
        return 0


@dataclass(frozen=True)
class Wallet:
    """Liquidity source domain entity. Wallets never hold a live balance."""

    id: str
    name: str
    icon: str
    color: str
    order: int
    last_reconciled_at: datetime


@dataclass(frozen=True)
class BalanceSnapshot:
    """Immutable point-in-time capture of per-wallet balances."""

    id: str
    timestamp: datetime
    balances: Mapping[str, int] = field(hash=False)
    sequence: int = 0

    def __post_init__(self):
        object.__setattr__(self, "balances", _frozen_balances(self.balances))

    @property
    def total_balance(self) -> int:
        return total(self.balances.values())

    def balance_for(self, wallet_id: str) -> int:
        """Balance for a wallet, 0 if the wallet was not captured."""
        return self.balances.get(wallet_id, 0)


@dataclass(frozen=True)
class Asset:
    """Tracked holding with a live balance.

    For liabilities ``current_balance`` is a magnitude owed regardless of its
    stored sign.
    """

    id: str
    name: str
    icon: str
    color: str
    kind: AssetKind
    order: int
    current_balance: int
    last_updated: datetime

    @property
    def is_liability(self) -> bool:
        return self.kind == AssetKind.LIABILITY


@dataclass(frozen=True)
class NetWorthTotals:
    """Aggregate of asset balances at one instant."""

    total_assets: int
    total_liabilities: int

    @property
    def net_worth(self) -> int:
        return self.total_assets - self.total_liabilities


@dataclass(frozen=True)
class AssetSnapshot:
    """Point-in-time capture of asset balances with aggregates frozen at capture."""

    id: str
    timestamp: datetime
    balances: Mapping[str, int] = field(hash=False)
    total_assets: int = 0
    total_liabilities: int = 0
    net_worth: int = 0
    sequence: int = 0

    def __post_init__(self):
        object.__setattr__(self, "balances", _frozen_balances(self.balances))

    def balance_for(self, asset_id: str) -> int:
        """Balance for an asset, 0 if the asset was not captured."""
        return self.balances.get(asset_id, 0)


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of comparing two balance snapshots against the ledger."""

    actual_change: int
    recorded_change: int
    drift: int

    @property
    def is_balanced(self) -> bool:
        return self.drift == 0


@dataclass(frozen=True)
class AssetDelta:
    """Movement of one asset between two asset snapshots."""

    asset_id: str
    old_balance: int
    new_balance: int
    change: int


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount for one category."""

    category: str
    amount: int


@dataclass(frozen=True)
class PeriodStats:
    """Income and expense statistics over an inclusive range of days."""

    start_date: date
    end_date: date
    total_income: int
    total_expense: int
    day_count: int
    expense_by_category: tuple[CategoryTotal, ...]

    @property
    def net(self) -> int:
        return self.total_income - self.total_expense

    @property
    def daily_average_expense(self) -> int:
        return self.total_expense // self.day_count
