"""SQLAlchemy models for pocketledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    BigInteger,
    Column,
    DateTime,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class LedgerEntry(Base):
    """Ledger entry model. Wallet ids are plain strings, not foreign keys."""

    __tablename__ = "ledger_entries"

    id = Column(String(36), primary_key=True)
    amount = Column(BigInteger, nullable=False)
    kind = Column(String, nullable=False)
    category = Column(String, nullable=False)
    note = Column(String, nullable=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    wallet_id = Column(String(36), nullable=False)
    to_wallet_id = Column(String(36), nullable=True)


class Wallet(Base):
    """Wallet model."""

    __tablename__ = "wallets"

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    color = Column(String, nullable=False)
    order = Column("display_order", Integer, nullable=False, default=0)
    last_reconciled_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class BalanceSnapshot(Base):
    """Balance snapshot model with balances stored as JSON."""

    __tablename__ = "balance_snapshots"

    id = Column(String(36), primary_key=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    sequence = Column(Integer, nullable=False, default=0)
    balances = Column(JSON, nullable=False, default=dict)


class Asset(Base):
    """Asset model."""

    __tablename__ = "assets"

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    color = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    order = Column("display_order", Integer, nullable=False, default=0)
    current_balance = Column(BigInteger, nullable=False, default=0)
    last_updated = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class AssetSnapshot(Base):
    """Asset snapshot model with aggregates frozen at capture time."""

    __tablename__ = "asset_snapshots"

    id = Column(String(36), primary_key=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    sequence = Column(Integer, nullable=False, default=0)
    balances = Column(JSON, nullable=False, default=dict)
    total_assets = Column(BigInteger, nullable=False)
    total_liabilities = Column(BigInteger, nullable=False)
    net_worth = Column(BigInteger, nullable=False)


class AppMetadata(Base):
    """Key/value application state such as one-shot initialization flags."""

    __tablename__ = "app_metadata"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    if database_url == "sqlite://":
        # Keep a single connection so the in-memory database outlives sessions
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
