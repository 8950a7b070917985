"""CLI error handling helpers."""

import click

from pocketledger.domain.book import FinanceBook
from pocketledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def warn_if_unsaved(book: FinanceBook) -> None:
    """Tell the user when a change was applied but could not be saved."""
    error = book.last_save_error
    if error is not None:
        click.echo(f"Warning: change not saved: {error}", err=True)
