"""Wallet management commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error, warn_if_unsaved
from pocketledger.cli.resolution import resolve_wallet_or_exit
from pocketledger.domain.errors import DomainError
from pocketledger.domain.money import format_money


@click.group()
def wallet_group():
    """Manage wallets."""
    pass


@wallet_group.command("list")
@click.pass_context
def list_wallets(ctx):
    """List wallets with their balance from the latest snapshot."""
    book = ctx.obj["book"]

    wallets = book.wallets.wallets
    if not wallets:
        click.echo("No wallets found.")
        return

    click.echo("\nWallets:")
    click.echo("-" * 72)
    for w in wallets:
        balance = format_money(book.snapshots.current_balance(w.id))
        reconciled = w.last_reconciled_at.strftime("%Y-%m-%d %H:%M")
        click.echo(f"{w.id[:8]} | {w.name:20s} | {balance:>12s} | Reconciled: {reconciled}")


@wallet_group.command("create")
@click.argument("name", metavar="WALLET_NAME")
@click.option("--icon", default="wallet.pass.fill", show_default=True, help="Icon name")
@click.option("--color", default="PixelBlue", show_default=True, help="Theme color name")
@click.pass_context
def create_wallet(ctx, name: str, icon: str, color: str):
    """Create a new wallet.

    Examples:
        pocketledger wallet create "Savings"
        pocketledger wallet create "Travel Card" --icon creditcard.fill
    """
    book = ctx.obj["book"]

    try:
        created = book.wallets.create(name=name, icon=icon, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created wallet '{created.name}' (ID: {created.id})")
    warn_if_unsaved(book)


@wallet_group.command("update")
@click.argument("wallet", metavar="WALLET")
@click.option("--name", help="New wallet name")
@click.option("--icon", help="New icon name")
@click.option("--color", help="New theme color name")
@click.option("--order", type=int, help="New display position")
@click.pass_context
def update_wallet(
    ctx, wallet: str, name: str | None, icon: str | None, color: str | None, order: int | None
) -> None:
    """Rename, restyle or reorder a wallet.

    WALLET can be a wallet name or ID.

    Examples:
        pocketledger wallet update Cash --name "Pocket Cash"
        pocketledger wallet update "Bank Card" --order 0
    """
    book = ctx.obj["book"]
    wallet_id = resolve_wallet_or_exit(ctx, book, wallet)

    if name is None and icon is None and color is None and order is None:
        click.echo("Error: Nothing to update; pass --name, --icon, --color or --order", err=True)
        ctx.exit(1)

    try:
        updated = book.wallets.update(wallet_id, name=name, icon=icon, color=color, order=order)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated wallet '{updated.name}' (order {updated.order})")
    warn_if_unsaved(book)


@wallet_group.command("delete")
@click.argument("wallet", metavar="WALLET")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_wallet(ctx, wallet: str, yes: bool) -> None:
    """Delete a wallet.

    WALLET can be a wallet name or ID. Entries and snapshots that mention
    the wallet are kept and show it as a missing wallet.
    """
    book = ctx.obj["book"]
    wallet_id = resolve_wallet_or_exit(ctx, book, wallet)
    name = book.wallets.display_name(wallet_id)

    if not yes and not click.confirm(f"Are you sure you want to delete wallet '{name}'?"):
        click.echo("Deletion cancelled.")
        return

    book.wallets.delete(wallet_id)
    click.echo(f"Deleted wallet '{name}'")
    warn_if_unsaved(book)


def register_commands(cli):
    """Register wallet commands with main CLI."""
    cli.add_command(wallet_group, name="wallet")
