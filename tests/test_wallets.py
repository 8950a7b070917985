"""Tests for the WalletRegistry domain service."""

import pytest

from pocketledger.domain.errors import ConflictError, NotFoundError, ValidationError
from pocketledger.domain.wallets import DEFAULT_WALLETS, MISSING_WALLET_LABEL, WalletRegistry


def test_seed_defaults_on_empty_registry(wallet_registry):
    """An empty registry gets the default wallets in order."""
    created = wallet_registry.seed_defaults()

    assert [w.name for w in created] == [name for name, _, _ in DEFAULT_WALLETS]
    assert [w.order for w in wallet_registry.wallets] == [0, 1, 2, 3]
    assert wallet_registry.has_been_seeded


def test_seed_defaults_runs_once(wallet_registry):
    """Seeding a second time does nothing."""
    wallet_registry.seed_defaults()
    assert wallet_registry.seed_defaults() == []
    assert len(wallet_registry.wallets) == 4


def test_seeding_not_repeated_after_deleting_all_wallets(temp_db):
    """Deleting every wallet does not bring the defaults back."""
    registry = WalletRegistry(temp_db)
    registry.load()
    registry.seed_defaults()
    for wallet in registry.wallets:
        registry.delete(wallet.id)

    reloaded = WalletRegistry(temp_db)
    reloaded.load()
    assert reloaded.seed_defaults() == []
    assert reloaded.wallets == ()


def test_existing_wallets_block_seeding(temp_db, wallet_registry):
    """A registry that already has wallets is never seeded."""
    wallet_registry.create("Savings")

    reloaded = WalletRegistry(temp_db)
    reloaded.load()
    assert reloaded.seed_defaults() == []
    assert [w.name for w in reloaded.wallets] == ["Savings"]

    reloaded.delete(reloaded.wallets[0].id)
    assert reloaded.seed_defaults() == []
    assert reloaded.wallets == ()


def test_create_wallet_appends_in_order(wallet_registry):
    """New wallets go after the existing ones."""
    first = wallet_registry.create("Savings")
    second = wallet_registry.create("Travel", icon="airplane", color="PixelRed")

    assert first.order == 0
    assert second.order == 1
    assert second.icon == "airplane"
    assert wallet_registry.get(second.id) == second


def test_create_wallet_rejects_duplicate_name(wallet_registry):
    """Duplicate wallet names are rejected."""
    wallet_registry.create("Savings")
    with pytest.raises(ConflictError):
        wallet_registry.create("Savings")


def test_create_wallet_rejects_empty_name(wallet_registry):
    """Blank wallet names are rejected."""
    with pytest.raises(ValidationError):
        wallet_registry.create("   ")


def test_wallets_sorted_by_order(wallet_registry):
    """Wallets are listed by order, not creation."""
    wallet_registry.create("Last", order=5)
    wallet_registry.create("First", order=0)
    assert [w.name for w in wallet_registry.wallets] == ["First", "Last"]


def test_delete_is_idempotent(wallet_registry):
    """Deleting a wallet twice is harmless."""
    wallet = wallet_registry.create("Savings")
    wallet_registry.delete(wallet.id)
    wallet_registry.delete(wallet.id)
    assert wallet_registry.get(wallet.id) is None


def test_display_name_for_missing_wallet(wallet_registry):
    """Missing wallets render with the missing label."""
    wallet = wallet_registry.create("Savings")
    assert wallet_registry.display_name(wallet.id) == "Savings"

    wallet_registry.delete(wallet.id)
    assert wallet_registry.display_name(wallet.id) == MISSING_WALLET_LABEL
    assert wallet_registry.display_name(None) == MISSING_WALLET_LABEL


def test_wallets_persisted(temp_db, wallet_registry):
    """Created wallets survive a reload."""
    wallet = wallet_registry.create("Savings")

    reloaded = WalletRegistry(temp_db)
    reloaded.load()
    assert reloaded.wallets == (wallet,)


def test_update_renames_wallet(temp_db, wallet_registry):
    """Renaming keeps the id and is persisted."""
    wallet = wallet_registry.create("Savings")

    updated = wallet_registry.update(wallet.id, name="  Rainy Day ")

    assert updated.id == wallet.id
    assert updated.name == "Rainy Day"
    assert updated.icon == wallet.icon
    reloaded = WalletRegistry(temp_db)
    reloaded.load()
    assert reloaded.get(wallet.id).name == "Rainy Day"


def test_update_keeping_own_name_is_allowed(wallet_registry):
    """A wallet may be updated to the name it already has."""
    wallet = wallet_registry.create("Savings")
    assert wallet_registry.update(wallet.id, name="Savings", color="PixelRed").color == "PixelRed"


def test_update_rejects_duplicate_name(wallet_registry):
    """Renaming onto another wallet's name fails without changing anything."""
    wallet_registry.create("Savings")
    travel = wallet_registry.create("Travel")

    with pytest.raises(ConflictError):
        wallet_registry.update(travel.id, name="Savings", order=9)

    assert wallet_registry.get(travel.id) == travel


def test_update_rejects_empty_name(wallet_registry):
    """An empty name is rejected."""
    wallet = wallet_registry.create("Savings")
    with pytest.raises(ValidationError):
        wallet_registry.update(wallet.id, name=" ")
    assert wallet_registry.get(wallet.id) == wallet


def test_update_unknown_wallet(wallet_registry):
    """Updating an unknown id raises NotFoundError."""
    with pytest.raises(NotFoundError):
        wallet_registry.update("missing", name="Anything")


def test_update_reorders_wallets(wallet_registry):
    """Changing order changes the listing order."""
    first = wallet_registry.create("First")
    wallet_registry.create("Second")

    wallet_registry.update(first.id, order=5)

    assert [w.name for w in wallet_registry.wallets] == ["Second", "First"]
