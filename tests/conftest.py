"""Shared pytest fixtures for pocketledger tests."""

import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, UTC

import pytest

from pocketledger.database.factories import create_sqlite_database
from pocketledger.database.sqlalchemy_db import SQLAlchemyDatabase
from pocketledger.domain.assets import AssetRegistry, AssetSnapshotStore
from pocketledger.domain.book import FinanceBook
from pocketledger.domain.errors import PersistError
from pocketledger.domain.ledger import Ledger
from pocketledger.domain.snapshots import BalanceSnapshotStore
from pocketledger.domain.wallets import WalletRegistry


class FailingWritesDatabase(SQLAlchemyDatabase):
    """In-memory database whose writes can be made to fail on demand."""

    def __init__(self):
        super().__init__("sqlite://")
        self.fail_writes = False

    @contextmanager
    def _write(self, action, entity, entity_id):
        if self.fail_writes:
            raise PersistError(
                f"Failed to {action} {entity} {entity_id}: disk full",
                entity=entity,
                entity_id=entity_id,
            )
        with super()._write(action, entity, entity_id) as session:
            yield session


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def failing_db():
    """Create an in-memory database with switchable write failures."""
    db = FailingWritesDatabase()
    yield db
    db.disconnect()


@pytest.fixture
def ledger(temp_db):
    """Create an empty Ledger with a temporary database."""
    store = Ledger(temp_db)
    store.load()
    return store


@pytest.fixture
def wallet_registry(temp_db):
    """Create a WalletRegistry with a temporary database."""
    registry = WalletRegistry(temp_db)
    registry.load()
    return registry


@pytest.fixture
def snapshot_store(temp_db, wallet_registry):
    """Create a BalanceSnapshotStore sharing the wallet registry."""
    store = BalanceSnapshotStore(temp_db, wallet_registry)
    store.load()
    return store


@pytest.fixture
def asset_registry(temp_db):
    """Create an AssetRegistry with a temporary database."""
    registry = AssetRegistry(temp_db)
    registry.load()
    return registry


@pytest.fixture
def asset_snapshot_store(temp_db, asset_registry):
    """Create an AssetSnapshotStore sharing the asset registry."""
    store = AssetSnapshotStore(temp_db, asset_registry)
    store.load()
    return store


@pytest.fixture
def book(temp_db):
    """Create an opened FinanceBook (default wallets seeded)."""
    finance_book = FinanceBook(temp_db)
    finance_book.open()
    return finance_book


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def at(day: int, hour: int = 12, minute: int = 0, second: int = 0) -> datetime:
    """UTC timestamp in January 2024, for readable test data."""
    return datetime(2024, 1, day, hour, minute, second, tzinfo=UTC)
