"""Asset registry and asset snapshot domain services.

Net-worth totals are computed by one routine, ``compute_totals``. The
registry calls it on live balances for dashboards; the snapshot store calls
it once at capture time and freezes the result for history.
"""

import dataclasses
import uuid
from datetime import datetime
from typing import Iterable, Optional

import structlog

from pocketledger.database.base import Database
from pocketledger.domain.entities import Asset, AssetKind, AssetSnapshot, NetWorthTotals
from pocketledger.domain.errors import (
    NotFoundError,
    ValidationError,
    asset_not_found,
    unknown_kind,
)
from pocketledger.domain.money import require_balance, total
from pocketledger.domain.snapshots import newest_first
from pocketledger.domain.store import Store
from pocketledger.utils.timestamps import ensure_utc, utc_now

logger = structlog.get_logger(__name__)

MISSING_ASSET_LABEL = "Missing asset"

# (kind, name, icon, color)
ASSET_PRESETS: tuple[tuple[AssetKind, str, str, str], ...] = (
    (AssetKind.CURRENT, "Cash", "banknote.fill", "PixelGreen"),
    (AssetKind.CURRENT, "Bank Card", "creditcard.fill", "PixelBlue"),
    (AssetKind.CURRENT, "WeChat Pay", "message.fill", "PixelGreen"),
    (AssetKind.CURRENT, "Alipay", "bolt.circle.fill", "PixelBlue"),
    (AssetKind.INVESTMENT, "Stocks", "chart.line.uptrend.xyaxis", "PixelBlue"),
    (AssetKind.INVESTMENT, "Funds", "chart.pie.fill", "PixelGreen"),
    (AssetKind.INVESTMENT, "Fixed Deposit", "building.columns.fill", "PixelAccent"),
    (AssetKind.LIABILITY, "Credit Card", "creditcard.fill", "PixelRed"),
    (AssetKind.LIABILITY, "Loan", "dollarsign.circle.fill", "PixelRed"),
)


def parse_asset_kind(kind: AssetKind | str) -> AssetKind:
    """Coerce a kind value to AssetKind.

    Raises:
        ValidationError: If kind is not a known asset kind
    """
    try:
        return AssetKind(kind)
    except ValueError:
        raise ValidationError(unknown_kind("asset", kind, [k.value for k in AssetKind]))


def presets_for(kind: AssetKind | str) -> list[tuple[str, str, str]]:
    """Preset (name, icon, color) choices for an asset kind."""
    asset_kind = parse_asset_kind(kind)
    return [(name, icon, color) for k, name, icon, color in ASSET_PRESETS if k == asset_kind]


def compute_totals(assets: Iterable[Asset]) -> NetWorthTotals:
    """Total held assets and total owed liabilities.

    Liability balances count by magnitude whatever their stored sign.
    """
    assets = list(assets)
    return NetWorthTotals(
        total_assets=total(a.current_balance for a in assets if not a.is_liability),
        total_liabilities=total(abs(a.current_balance) for a in assets if a.is_liability),
    )


class AssetRegistry(Store):
    """Typed holdings with live balances."""

    def __init__(self, db: Database):
        """Initialize asset registry.

        Args:
            db: Database instance
        """
        super().__init__(db)
        self._assets: list[Asset] = []

    def load(self) -> None:
        """Replace in-memory assets with the persisted ones."""
        with self.lock:
            self._assets = self.db.list_assets()
        logger.debug("assets_loaded", count=len(self._assets))

    @property
    def assets(self) -> tuple[Asset, ...]:
        with self.lock:
            return tuple(self._assets)

    def by_kind(self, kind: AssetKind | str) -> list[Asset]:
        """Assets of one kind in display order."""
        asset_kind = parse_asset_kind(kind)
        return sorted((a for a in self.assets if a.kind == asset_kind), key=lambda a: a.order)

    def get(self, asset_id: str) -> Optional[Asset]:
        """Get asset by ID, or None if not found."""
        with self.lock:
            for asset in self._assets:
                if asset.id == asset_id:
                    return asset
        return None

    def display_name(self, asset_id: str) -> str:
        """Name of an asset, or the missing-asset label for unknown IDs."""
        asset = self.get(asset_id)
        if asset is None:
            return MISSING_ASSET_LABEL
        return asset.name

    def totals(self) -> NetWorthTotals:
        """Totals derived from current live balances."""
        return compute_totals(self.assets)

    def add(
        self,
        name: str,
        kind: AssetKind | str,
        balance: int = 0,
        icon: str = "",
        color: str = "",
    ) -> Asset:
        """Register a new asset, placed last among assets of its kind.

        Raises:
            ValidationError: If name is empty or kind is unknown
            InvalidAmountError: If balance is not an integer
        """
        name = name.strip()
        if not name:
            raise ValidationError("Asset name must not be empty")
        asset_kind = parse_asset_kind(kind)
        require_balance(balance)

        with self.lock:
            asset = Asset(
                id=str(uuid.uuid4()),
                name=name,
                icon=icon,
                color=color,
                kind=asset_kind,
                order=sum(1 for a in self._assets if a.kind == asset_kind),
                current_balance=balance,
                last_updated=utc_now(),
            )
            self._assets.append(asset)
            logger.debug("asset_added", asset_id=asset.id, kind=asset_kind.value)
            self._persist(self.db.save_asset, asset)
        return asset

    def update_balance(
        self, asset_id: str, new_balance: int, timestamp: Optional[datetime] = None
    ) -> Asset:
        """Set an asset's live balance immediately, without taking a snapshot.

        Raises:
            InvalidAmountError: If new_balance is not an integer
            NotFoundError: If the asset does not exist
        """
        require_balance(new_balance)
        updated_at = ensure_utc(timestamp) if timestamp is not None else utc_now()

        with self.lock:
            for index, asset in enumerate(self._assets):
                if asset.id == asset_id:
                    break
            else:
                raise NotFoundError(asset_not_found(asset_id))
            updated = dataclasses.replace(
                asset, current_balance=new_balance, last_updated=updated_at
            )
            self._assets[index] = updated
            logger.debug("asset_balance_updated", asset_id=asset_id, balance=new_balance)
            self._persist(self.db.save_asset, updated)
        return updated

    def delete(self, asset_id: str) -> None:
        """Delete an asset. Snapshots that mention it are untouched."""
        with self.lock:
            before = len(self._assets)
            self._assets = [a for a in self._assets if a.id != asset_id]
            if len(self._assets) == before:
                return
            logger.debug("asset_deleted", asset_id=asset_id)
            self._persist(self.db.delete_asset, asset_id)


class AssetSnapshotStore(Store):
    """Captures of every asset's live balance with frozen net-worth totals."""

    def __init__(self, db: Database, registry: AssetRegistry):
        """Initialize asset snapshot store.

        Args:
            db: Database instance
            registry: Registry whose live balances are captured
        """
        super().__init__(db)
        self.registry = registry
        self._snapshots: list[AssetSnapshot] = []

    def load(self) -> None:
        """Replace in-memory snapshots with the persisted ones."""
        with self.lock:
            self._snapshots = newest_first(self.db.list_asset_snapshots())
        logger.debug("asset_snapshots_loaded", count=len(self._snapshots))

    @property
    def snapshots(self) -> tuple[AssetSnapshot, ...]:
        """All snapshots, newest first."""
        with self.lock:
            return tuple(self._snapshots)

    def latest(self) -> Optional[AssetSnapshot]:
        with self.lock:
            return self._snapshots[0] if self._snapshots else None

    def previous(self, snapshot: AssetSnapshot) -> Optional[AssetSnapshot]:
        """The snapshot captured just before the given one, or None."""
        with self.lock:
            for index, candidate in enumerate(self._snapshots):
                if candidate.id == snapshot.id:
                    if index + 1 < len(self._snapshots):
                        return self._snapshots[index + 1]
                    return None
        return None

    def capture(self, timestamp: Optional[datetime] = None) -> AssetSnapshot:
        """Capture every registered asset's current balance."""
        timestamp = ensure_utc(timestamp) if timestamp is not None else utc_now()

        with self.lock, self.registry.lock:
            assets = self.registry.assets
            totals = compute_totals(assets)
            snapshot = AssetSnapshot(
                id=str(uuid.uuid4()),
                timestamp=timestamp,
                balances={a.id: a.current_balance for a in assets},
                total_assets=totals.total_assets,
                total_liabilities=totals.total_liabilities,
                net_worth=totals.net_worth,
                sequence=max((s.sequence for s in self._snapshots), default=0) + 1,
            )
            self._snapshots = newest_first([snapshot, *self._snapshots])
            logger.debug("asset_snapshot_captured", snapshot_id=snapshot.id, net_worth=totals.net_worth)
            self._persist(self.db.save_asset_snapshot, snapshot)
        return snapshot
