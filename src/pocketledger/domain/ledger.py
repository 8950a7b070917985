"""Ledger domain service."""

import uuid
from collections import defaultdict
from datetime import date, datetime, time, timedelta, UTC
from typing import Iterable, Optional

import structlog

from pocketledger.database.base import Database
from pocketledger.domain.categories import (
    DEFAULT_EXPENSE_CATEGORY,
    DEFAULT_INCOME_CATEGORY,
    TRANSFER_CATEGORY,
)
from pocketledger.domain.entities import CategoryTotal, EntryKind, LedgerEntry, PeriodStats
from pocketledger.domain.errors import ValidationError, unknown_kind
from pocketledger.domain.money import require_positive, total
from pocketledger.domain.store import Store
from pocketledger.utils.timestamps import ensure_utc, utc_now

logger = structlog.get_logger(__name__)


def parse_entry_kind(kind: EntryKind | str) -> EntryKind:
    """Coerce a kind value to EntryKind.

    Raises:
        ValidationError: If kind is not a known entry kind
    """
    try:
        return EntryKind(kind)
    except ValueError:
        raise ValidationError(unknown_kind("entry", kind, [k.value for k in EntryKind]))


def day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """Half-open UTC window covering the calendar days start_date..end_date."""
    start = datetime.combine(start_date, time.min, tzinfo=UTC)
    end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=UTC)
    return start, end


class Ledger(Store):
    """Append-and-delete log of income, expense and transfer entries.

    Entries are kept newest first for display. Queries filter and sum and
    never depend on that order.
    """

    def __init__(self, db: Database):
        """Initialize ledger.

        Args:
            db: Database instance
        """
        super().__init__(db)
        self._entries: list[LedgerEntry] = []
        self.last_expense_category = DEFAULT_EXPENSE_CATEGORY
        self.last_income_category = DEFAULT_INCOME_CATEGORY

    def load(self) -> None:
        """Replace in-memory entries with the persisted ones."""
        with self.lock:
            self._entries = self.db.list_entries()
        logger.debug("ledger_loaded", count=len(self._entries))

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        with self.lock:
            return tuple(self._entries)

    def get(self, entry_id: str) -> Optional[LedgerEntry]:
        """Get entry by ID, or None if not found."""
        with self.lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def append(
        self,
        amount: int,
        kind: EntryKind | str,
        wallet_id: str,
        category: Optional[str] = None,
        note: Optional[str] = None,
        timestamp: Optional[datetime] = None,
        to_wallet_id: Optional[str] = None,
    ) -> LedgerEntry:
        """Record a new entry.

        Args:
            amount: Positive magnitude in minor units
            kind: Income, expense or transfer
            wallet_id: Source wallet ID (not checked against the registry)
            category: Category ID; defaults to the last one used for this kind
            note: Optional note
            timestamp: When the entry happened; defaults to now
            to_wallet_id: Destination wallet ID, required for transfers

        Returns:
            The created entry. If saving fails, the entry is still kept and
            ``last_save_error`` is set.

        Raises:
            InvalidAmountError: If amount is not a positive integer
            ValidationError: If kind is unknown or a transfer has no destination
        """
        entry_kind = parse_entry_kind(kind)
        require_positive(amount)
        if entry_kind == EntryKind.TRANSFER:
            if not to_wallet_id:
                raise ValidationError("Transfer entries require a destination wallet")
            category = TRANSFER_CATEGORY
        elif to_wallet_id is not None:
            raise ValidationError("Only transfer entries may have a destination wallet")

        timestamp = ensure_utc(timestamp) if timestamp is not None else utc_now()

        with self.lock:
            if category is None:
                category = (
                    self.last_income_category
                    if entry_kind == EntryKind.INCOME
                    else self.last_expense_category
                )
            entry = LedgerEntry(
                id=str(uuid.uuid4()),
                amount=amount,
                kind=entry_kind,
                category=category,
                timestamp=timestamp,
                wallet_id=wallet_id,
                note=note,
                to_wallet_id=to_wallet_id,
            )
            self._entries.insert(0, entry)
            if entry_kind == EntryKind.EXPENSE:
                self.last_expense_category = category
            elif entry_kind == EntryKind.INCOME:
                self.last_income_category = category
            logger.debug("entry_appended", entry_id=entry.id, kind=entry_kind.value, amount=amount)
            self._persist(self.db.save_entry, entry)
        return entry

    def delete(self, entry_id: str) -> None:
        """Delete an entry regardless of age. Absent IDs are ignored."""
        with self.lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if e.id != entry_id]
            if len(self._entries) == before:
                return
            logger.debug("entry_deleted", entry_id=entry_id)
            self._persist(self.db.delete_entry, entry_id)

    def entries_in_window(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list[LedgerEntry]:
        """Entries with ``start <= timestamp < end``.

        A bound of None leaves that side open.
        """
        start = ensure_utc(start) if start is not None else None
        end = ensure_utc(end) if end is not None else None
        with self.lock:
            return [
                e
                for e in self._entries
                if (start is None or e.timestamp >= start) and (end is None or e.timestamp < end)
            ]

    def entries_between(self, start: Optional[datetime], end: datetime) -> list[LedgerEntry]:
        """Entries with ``start <= timestamp <= end``.

        Both bounds are inclusive, which is what reconciliation needs so that
        an entry recorded at the same instant as a snapshot is counted.
        """
        start = ensure_utc(start) if start is not None else None
        end = ensure_utc(end)
        with self.lock:
            return [
                e
                for e in self._entries
                if (start is None or e.timestamp >= start) and e.timestamp <= end
            ]

    @staticmethod
    def sum_amounts(entries: Iterable[LedgerEntry], kind: EntryKind | str) -> int:
        """Sum the amounts of entries of one kind."""
        entry_kind = parse_entry_kind(kind)
        return total(e.amount for e in entries if e.kind == entry_kind)

    @staticmethod
    def net_change(entries: Iterable[LedgerEntry]) -> int:
        """Income minus expense; transfers contribute nothing."""
        entries = list(entries)
        return Ledger.sum_amounts(entries, EntryKind.INCOME) - Ledger.sum_amounts(
            entries, EntryKind.EXPENSE
        )

    def today_entries(self, now: Optional[datetime] = None) -> list[LedgerEntry]:
        """Entries on the current UTC calendar day."""
        today = ensure_utc(now or utc_now()).date()
        return self.entries_in_window(*day_bounds(today, today))

    def month_to_date(self, now: Optional[datetime] = None) -> list[LedgerEntry]:
        """Entries from the first of the current month onwards."""
        now = ensure_utc(now or utc_now())
        month_start = datetime.combine(now.date().replace(day=1), time.min, tzinfo=UTC)
        return self.entries_in_window(month_start, None)

    def month_income(self, now: Optional[datetime] = None) -> int:
        return self.sum_amounts(self.month_to_date(now), EntryKind.INCOME)

    def month_expense(self, now: Optional[datetime] = None) -> int:
        return self.sum_amounts(self.month_to_date(now), EntryKind.EXPENSE)

    def month_net(self, now: Optional[datetime] = None) -> int:
        return self.month_income(now) - self.month_expense(now)

    def grouped_by_day(self) -> list[tuple[date, list[LedgerEntry]]]:
        """Entries grouped by UTC calendar day, newest day first."""
        grouped: dict[date, list[LedgerEntry]] = defaultdict(list)
        for entry in sorted(self.entries, key=lambda e: e.timestamp, reverse=True):
            grouped[entry.timestamp.date()].append(entry)
        return sorted(grouped.items(), key=lambda item: item[0], reverse=True)

    def period_stats(self, start_date: date, end_date: date) -> PeriodStats:
        """Income and expense statistics for the calendar days start_date..end_date.

        Raises:
            ValidationError: If end_date is before start_date
        """
        if end_date < start_date:
            raise ValidationError(f"End date {end_date} is before start date {start_date}")

        entries = self.entries_in_window(*day_bounds(start_date, end_date))

        by_category: dict[str, int] = defaultdict(int)
        for entry in entries:
            if entry.kind == EntryKind.EXPENSE:
                by_category[entry.category] += entry.amount
        expense_by_category = tuple(
            CategoryTotal(category=category, amount=amount)
            for category, amount in sorted(by_category.items(), key=lambda item: (-item[1], item[0]))
        )

        return PeriodStats(
            start_date=start_date,
            end_date=end_date,
            total_income=self.sum_amounts(entries, EntryKind.INCOME),
            total_expense=self.sum_amounts(entries, EntryKind.EXPENSE),
            day_count=max(1, (end_date - start_date).days + 1),
            expense_by_category=expense_by_category,
        )
