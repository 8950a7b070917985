"""CLI helpers for wallet and asset resolution."""

from __future__ import annotations

import click
from pocketledger.domain.book import FinanceBook
from pocketledger.domain.errors import DomainError
from pocketledger.utils.resolver import resolve_reference


def resolve_wallet_or_exit(ctx: click.Context, book: FinanceBook, wallet: str) -> str:
    """Resolve wallet name or ID, or exit with a CLI error."""
    try:
        return resolve_reference(book.wallets.wallets, wallet, "Wallet")
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_asset_or_exit(ctx: click.Context, book: FinanceBook, asset: str) -> str:
    """Resolve asset name or ID, or exit with a CLI error."""
    try:
        return resolve_reference(book.assets.assets, asset, "Asset")
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
