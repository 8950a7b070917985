"""Abstract database interface.

This is the persistence collaborator used by the domain stores. Stores apply
changes in memory first and then call ``save_*``/``delete_*``; implementations
report storage failures by raising ``PersistError``.
"""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from pocketledger.domain.entities import (
    Asset,
    AssetSnapshot,
    BalanceSnapshot,
    LedgerEntry,
    Wallet,
)


class Database(ABC):
    """Abstract database interface for pocketledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Ledger entry operations
    @abstractmethod
    def save_entry(self, entry: LedgerEntry) -> None:
        """Insert a ledger entry."""
        pass

    @abstractmethod
    def delete_entry(self, entry_id: str) -> None:
        """Delete a ledger entry. Absent ids are ignored."""
        pass

    @abstractmethod
    def list_entries(self) -> list[LedgerEntry]:
        """List all ledger entries, newest first."""
        pass

    # Wallet operations
    @abstractmethod
    def save_wallet(self, wallet: Wallet) -> None:
        """Insert or update a wallet."""
        pass

    @abstractmethod
    def delete_wallet(self, wallet_id: str) -> None:
        """Delete a wallet. Absent ids are ignored."""
        pass

    @abstractmethod
    def list_wallets(self) -> list[Wallet]:
        """List all wallets in display order."""
        pass

    # Balance snapshot operations
    @abstractmethod
    def save_balance_snapshot(self, snapshot: BalanceSnapshot) -> None:
        """Insert a balance snapshot."""
        pass

    @abstractmethod
    def list_balance_snapshots(self) -> list[BalanceSnapshot]:
        """List balance snapshots, newest first."""
        pass

    # Asset operations
    @abstractmethod
    def save_asset(self, asset: Asset) -> None:
        """Insert or update an asset."""
        pass

    @abstractmethod
    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset. Absent ids are ignored."""
        pass

    @abstractmethod
    def list_assets(self) -> list[Asset]:
        """List all assets in display order."""
        pass

    # Asset snapshot operations
    @abstractmethod
    def save_asset_snapshot(self, snapshot: AssetSnapshot) -> None:
        """Insert an asset snapshot."""
        pass

    @abstractmethod
    def list_asset_snapshots(self) -> list[AssetSnapshot]:
        """List asset snapshots, newest first."""
        pass

    # Application metadata
    @abstractmethod
    def get_metadata(self, key: str) -> Optional[str]:
        """Get a metadata value, or None if unset."""
        pass

    @abstractmethod
    def set_metadata(self, key: str, value: str) -> None:
        """Set a metadata value."""
        pass
