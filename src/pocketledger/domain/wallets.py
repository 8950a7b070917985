"""Wallet registry domain service."""

import dataclasses
import uuid
from datetime import datetime
from typing import Optional

import structlog

from pocketledger.database.base import Database
from pocketledger.domain.entities import Wallet
from pocketledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_name,
    wallet_not_found,
)
from pocketledger.domain.store import Store
from pocketledger.utils.timestamps import ensure_utc, utc_now

logger = structlog.get_logger(__name__)

MISSING_WALLET_LABEL = "Missing wallet"
SEEDED_METADATA_KEY = "wallets_seeded"

DEFAULT_WALLET_ICON = "wallet.pass.fill"
DEFAULT_WALLET_COLOR = "PixelBlue"

# (name, icon, color)
DEFAULT_WALLETS: tuple[tuple[str, str, str], ...] = (
    ("Cash", "banknote.fill", "PixelGreen"),
    ("Bank Card", "creditcard.fill", "PixelBlue"),
    ("WeChat Pay", "message.fill", "PixelGreen"),
    ("Alipay", "bolt.circle.fill", "PixelBlue"),
)


class WalletRegistry(Store):
    """Named liquidity sources in display order."""

    def __init__(self, db: Database):
        """Initialize wallet registry.

        Args:
            db: Database instance
        """
        super().__init__(db)
        self._wallets: list[Wallet] = []
        self._seeded = False

    def load(self) -> None:
        """Replace in-memory wallets with the persisted ones."""
        with self.lock:
            self._wallets = self.db.list_wallets()
            self._seeded = self._seeded or self.db.get_metadata(SEEDED_METADATA_KEY) == "1"
        logger.debug("wallets_loaded", count=len(self._wallets))

    @property
    def wallets(self) -> tuple[Wallet, ...]:
        with self.lock:
            return tuple(sorted(self._wallets, key=lambda w: w.order))

    @property
    def has_been_seeded(self) -> bool:
        return self._seeded

    def seed_defaults(self) -> list[Wallet]:
        """Create the default wallets once per registry lifetime.

        Seeding happens only if the registry is empty and has never been
        seeded. A registry that already holds wallets counts as seeded, so
        deleting every wallet later never brings the defaults back.

        Returns:
            The wallets created, empty if seeding was skipped
        """
        with self.lock:
            if self._seeded:
                return []
            created: list[Wallet] = []
            if not self._wallets:
                now = utc_now()
                for order, (name, icon, color) in enumerate(DEFAULT_WALLETS):
                    created.append(
                        Wallet(
                            id=str(uuid.uuid4()),
                            name=name,
                            icon=icon,
                            color=color,
                            order=order,
                            last_reconciled_at=now,
                        )
                    )
                self._wallets.extend(created)
            self._seeded = True
            logger.info("wallets_seeded", created=len(created))
            writes = [(self.db.save_wallet, wallet) for wallet in created]
            writes.append((self.db.set_metadata, SEEDED_METADATA_KEY, "1"))
            self._persist_each(writes)
            return created

    def get(self, wallet_id: str) -> Optional[Wallet]:
        """Get wallet by ID, or None if not found."""
        with self.lock:
            for wallet in self._wallets:
                if wallet.id == wallet_id:
                    return wallet
        return None

    def display_name(self, wallet_id: Optional[str]) -> str:
        """Name of a wallet, or the missing-wallet label for unknown IDs."""
        if wallet_id is None:
            return MISSING_WALLET_LABEL
        wallet = self.get(wallet_id)
        if wallet is None:
            return MISSING_WALLET_LABEL
        return wallet.name

    def create(
        self,
        name: str,
        icon: str = DEFAULT_WALLET_ICON,
        color: str = DEFAULT_WALLET_COLOR,
        order: Optional[int] = None,
    ) -> Wallet:
        """Create a new wallet.

        Args:
            name: Wallet name
            icon: Icon name
            color: Theme color name
            order: Display position; defaults to after the last wallet

        Returns:
            The created wallet

        Raises:
            ValidationError: If name is empty
            ConflictError: If a wallet with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Wallet name must not be empty")

        with self.lock:
            if any(w.name == name for w in self._wallets):
                raise ConflictError(duplicate_name("Wallet", name))
            if order is None:
                order = max((w.order for w in self._wallets), default=-1) + 1
            wallet = Wallet(
                id=str(uuid.uuid4()),
                name=name,
                icon=icon,
                color=color,
                order=order,
                last_reconciled_at=utc_now(),
            )
            self._wallets.append(wallet)
            logger.debug("wallet_created", wallet_id=wallet.id, name=name)
            self._persist(self.db.save_wallet, wallet)
        return wallet

    def update(
        self,
        wallet_id: str,
        name: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
        order: Optional[int] = None,
    ) -> Wallet:
        """Rename, restyle or reorder a wallet.

        Args:
            wallet_id: Wallet ID to update
            name: New name (if None, the name is not updated)
            icon: New icon name (if None, the icon is not updated)
            color: New theme color name (if None, the color is not updated)
            order: New display position (if None, the order is not updated)

        Returns:
            The updated wallet

        Raises:
            ValidationError: If name is empty
            NotFoundError: If the wallet does not exist
            ConflictError: If another wallet already has the name
        """
        changes = {}
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Wallet name must not be empty")
            changes["name"] = name
        if icon is not None:
            changes["icon"] = icon
        if color is not None:
            changes["color"] = color
        if order is not None:
            changes["order"] = order

        with self.lock:
            for index, wallet in enumerate(self._wallets):
                if wallet.id == wallet_id:
                    break
            else:
                raise NotFoundError(wallet_not_found(wallet_id))
            if name is not None and any(
                w.name == name and w.id != wallet_id for w in self._wallets
            ):
                raise ConflictError(duplicate_name("Wallet", name))

            updated = dataclasses.replace(wallet, **changes)
            self._wallets[index] = updated
            logger.debug("wallet_updated", wallet_id=wallet_id, fields=sorted(changes))
            self._persist(self.db.save_wallet, updated)
        return updated

    def delete(self, wallet_id: str) -> None:
        """Delete a wallet. Entries and snapshots that mention it are untouched."""
        with self.lock:
            before = len(self._wallets)
            self._wallets = [w for w in self._wallets if w.id != wallet_id]
            if len(self._wallets) == before:
                return
            logger.debug("wallet_deleted", wallet_id=wallet_id)
            self._persist(self.db.delete_wallet, wallet_id)

    def mark_reconciled(self, timestamp: datetime) -> tuple[Wallet, ...]:
        """Set ``last_reconciled_at`` on every wallet.

        Callers capturing a snapshot hold ``lock`` around this and the capture.
        """
        timestamp = ensure_utc(timestamp)
        with self.lock:
            self._wallets = [
                dataclasses.replace(w, last_reconciled_at=timestamp) for w in self._wallets
            ]
            self._persist_each([(self.db.save_wallet, w) for w in self._wallets])
            return tuple(self._wallets)
