"""Mapper functions to convert between domain models and SQLAlchemy models.

SQLite drops timezone information, so timestamps are written as UTC wall
clock time and read back as UTC-aware datetimes.
"""

from datetime import datetime

from pocketledger.domain import entities as domain
from pocketledger.database.models import (
    Asset as ORMAsset,
    AssetSnapshot as ORMAssetSnapshot,
    BalanceSnapshot as ORMBalanceSnapshot,
    LedgerEntry as ORMLedgerEntry,
    Wallet as ORMWallet,
)
from pocketledger.utils.timestamps import ensure_utc


def _to_storage(value: datetime) -> datetime:
    return ensure_utc(value).replace(tzinfo=None)


def _balances_to_domain(balances: dict | None) -> dict[str, int]:
    return {str(key): int(value) for key, value in (balances or {}).items()}


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        amount=int(orm_entry.amount),
        kind=domain.EntryKind(orm_entry.kind),
        category=orm_entry.category,
        timestamp=ensure_utc(orm_entry.timestamp),
        wallet_id=orm_entry.wallet_id,
        note=orm_entry.note,
        to_wallet_id=orm_entry.to_wallet_id,
    )


def entry_to_orm(entry: domain.LedgerEntry) -> ORMLedgerEntry:
    """Convert domain LedgerEntry entity to SQLAlchemy LedgerEntry model."""
    return ORMLedgerEntry(
        id=entry.id,
        amount=entry.amount,
        kind=entry.kind.value,
        category=entry.category,
        note=entry.note,
        timestamp=_to_storage(entry.timestamp),
        wallet_id=entry.wallet_id,
        to_wallet_id=entry.to_wallet_id,
    )


def wallet_to_domain(orm_wallet: ORMWallet) -> domain.Wallet:
    """Convert SQLAlchemy Wallet model to domain Wallet entity."""
    return domain.Wallet(
        id=orm_wallet.id,
        name=orm_wallet.name,
        icon=orm_wallet.icon,
        color=orm_wallet.color,
        order=orm_wallet.order,
        last_reconciled_at=ensure_utc(orm_wallet.last_reconciled_at),
    )


def wallet_to_orm(wallet: domain.Wallet) -> ORMWallet:
    """Convert domain Wallet entity to SQLAlchemy Wallet model."""
    return ORMWallet(
        id=wallet.id,
        name=wallet.name,
        icon=wallet.icon,
        color=wallet.color,
        order=wallet.order,
        last_reconciled_at=_to_storage(wallet.last_reconciled_at),
    )


def balance_snapshot_to_domain(orm_snapshot: ORMBalanceSnapshot) -> domain.BalanceSnapshot:
    """Convert SQLAlchemy BalanceSnapshot model to domain BalanceSnapshot entity."""
    return domain.BalanceSnapshot(
        id=orm_snapshot.id,
        timestamp=ensure_utc(orm_snapshot.timestamp),
        balances=_balances_to_domain(orm_snapshot.balances),
        sequence=orm_snapshot.sequence,
    )


def balance_snapshot_to_orm(snapshot: domain.BalanceSnapshot) -> ORMBalanceSnapshot:
    """Convert domain BalanceSnapshot entity to SQLAlchemy BalanceSnapshot model."""
    return ORMBalanceSnapshot(
        id=snapshot.id,
        timestamp=_to_storage(snapshot.timestamp),
        sequence=snapshot.sequence,
        balances=dict(snapshot.balances),
    )


def asset_to_domain(orm_asset: ORMAsset) -> domain.Asset:
    """Convert SQLAlchemy Asset model to domain Asset entity."""
    return domain.Asset(
        id=orm_asset.id,
        name=orm_asset.name,
        icon=orm_asset.icon,
        color=orm_asset.color,
        kind=domain.AssetKind(orm_asset.kind),
        order=orm_asset.order,
        current_balance=int(orm_asset.current_balance),
        last_updated=ensure_utc(orm_asset.last_updated),
    )


def asset_to_orm(asset: domain.Asset) -> ORMAsset:
    """Convert domain Asset entity to SQLAlchemy Asset model."""
    return ORMAsset(
        id=asset.id,
        name=asset.name,
        icon=asset.icon,
        color=asset.color,
        kind=asset.kind.value,
        order=asset.order,
        current_balance=asset.current_balance,
        last_updated=_to_storage(asset.last_updated),
    )


def asset_snapshot_to_domain(orm_snapshot: ORMAssetSnapshot) -> domain.AssetSnapshot:
    """Convert SQLAlchemy AssetSnapshot model to domain AssetSnapshot entity."""
    return domain.AssetSnapshot(
        id=orm_snapshot.id,
        timestamp=ensure_utc(orm_snapshot.timestamp),
        balances=_balances_to_domain(orm_snapshot.balances),
        total_assets=int(orm_snapshot.total_assets),
        total_liabilities=int(orm_snapshot.total_liabilities),
        net_worth=int(orm_snapshot.net_worth),
        sequence=orm_snapshot.sequence,
    )


def asset_snapshot_to_orm(snapshot: domain.AssetSnapshot) -> ORMAssetSnapshot:
    """Convert domain AssetSnapshot entity to SQLAlchemy AssetSnapshot model."""
    return ORMAssetSnapshot(
        id=snapshot.id,
        timestamp=_to_storage(snapshot.timestamp),
        sequence=snapshot.sequence,
        balances=dict(snapshot.balances),
        total_assets=snapshot.total_assets,
        total_liabilities=snapshot.total_liabilities,
        net_worth=snapshot.net_worth,
    )
