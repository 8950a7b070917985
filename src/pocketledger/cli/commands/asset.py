"""Asset and net-worth commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error, warn_if_unsaved
from pocketledger.cli.resolution import resolve_asset_or_exit
from pocketledger.domain.assets import presets_for
from pocketledger.domain.entities import AssetKind
from pocketledger.domain.errors import DomainError
from pocketledger.domain.money import format_money
from pocketledger.utils.amount_parser import parse_amount

KIND_TITLES = {
    AssetKind.CURRENT: "Current",
    AssetKind.INVESTMENT: "Investment",
    AssetKind.LIABILITY: "Liabilities",
}


def _asset_balance_text(asset) -> str:
    amount = format_money(abs(asset.current_balance) if asset.is_liability else asset.current_balance)
    return f"-{amount}" if asset.is_liability else amount


@click.group()
def asset_group():
    """Track assets, liabilities and net worth."""
    pass


@asset_group.command("add")
@click.argument("name", metavar="ASSET_NAME")
@click.option("--kind", type=click.Choice([k.value for k in AssetKind]), required=True)
@click.option("--balance", default="0", show_default=True, help="Current balance, e.g. 1500.00")
@click.option("--icon", help="Icon name (defaults to the matching preset)")
@click.option("--color", help="Theme color name (defaults to the matching preset)")
@click.pass_context
def add_asset(ctx, name: str, kind: str, balance: str, icon: str | None, color: str | None):
    """Add an asset or liability.

    Examples:
        pocketledger asset add Stocks --kind investment --balance 5000
        pocketledger asset add "Credit Card" --kind liability --balance 820.15
    """
    book = ctx.obj["book"]

    preset = next((p for p in presets_for(kind) if p[0] == name), None)
    if icon is None:
        icon = preset[1] if preset else ""
    if color is None:
        color = preset[2] if preset else ""

    try:
        created = book.assets.add(
            name=name, kind=kind, balance=parse_amount(balance), icon=icon, color=color
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added {created.kind.value} asset '{created.name}' (ID: {created.id})")
    warn_if_unsaved(book)


@asset_group.command("list")
@click.pass_context
def list_assets(ctx):
    """List assets by kind with live net worth."""
    book = ctx.obj["book"]

    if not book.assets.assets:
        click.echo("No assets found.")
        return

    for kind in AssetKind:
        assets = book.assets.by_kind(kind)
        if not assets:
            continue
        click.echo(f"\n{KIND_TITLES[kind]}:")
        for a in assets:
            click.echo(f"  {a.id[:8]} | {a.name:20s} | {_asset_balance_text(a):>14s}")

    _echo_totals(book.assets.totals())


@asset_group.command("update")
@click.argument("asset", metavar="ASSET")
@click.argument("balance", metavar="AMOUNT")
@click.pass_context
def update_asset(ctx, asset: str, balance: str):
    """Set an asset's current balance.

    ASSET can be an asset name or ID.
    """
    book = ctx.obj["book"]
    asset_id = resolve_asset_or_exit(ctx, book, asset)

    try:
        updated = book.assets.update_balance(asset_id, parse_amount(balance))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated '{updated.name}' to {_asset_balance_text(updated)}")
    warn_if_unsaved(book)


@asset_group.command("delete")
@click.argument("asset", metavar="ASSET")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_asset(ctx, asset: str, yes: bool):
    """Delete an asset. Past snapshots keep their totals."""
    book = ctx.obj["book"]
    asset_id = resolve_asset_or_exit(ctx, book, asset)
    name = book.assets.display_name(asset_id)

    if not yes and not click.confirm(f"Are you sure you want to delete asset '{name}'?"):
        click.echo("Deletion cancelled.")
        return

    book.assets.delete(asset_id)
    click.echo(f"Deleted asset '{name}'")
    warn_if_unsaved(book)


@asset_group.command("snapshot")
@click.pass_context
def snapshot_assets(ctx):
    """Capture current asset balances and show what moved."""
    book = ctx.obj["book"]

    created = book.asset_snapshots.capture()
    click.echo(f"Captured asset snapshot {created.id[:8]}")
    _echo_frozen_totals(created)
    _echo_deltas(book, book.latest_asset_delta())
    warn_if_unsaved(book)


@asset_group.command("history")
@click.pass_context
def asset_history(ctx):
    """List asset snapshots with the net worth recorded at the time."""
    book = ctx.obj["book"]

    snapshots = book.asset_snapshots.snapshots
    if not snapshots:
        click.echo("No asset snapshots found.")
        return

    for s in snapshots:
        click.echo(
            f"{s.id[:8]} | {s.timestamp.strftime('%Y-%m-%d %H:%M')} | "
            f"assets {format_money(s.total_assets)} | liabilities {format_money(s.total_liabilities)} | "
            f"net worth {format_money(s.net_worth)}"
        )


@asset_group.command("delta")
@click.pass_context
def asset_delta_command(ctx):
    """Show how current assets moved between the last two asset snapshots."""
    book = ctx.obj["book"]

    deltas = book.latest_asset_delta()
    if deltas is None:
        click.echo("No asset snapshots yet. Capture one with 'asset snapshot'.")
        return
    _echo_deltas(book, deltas)


@click.command("networth")
@click.pass_context
def networth(ctx):
    """Show live totals and net worth."""
    book = ctx.obj["book"]
    _echo_totals(book.assets.totals())


def _echo_totals(totals) -> None:
    click.echo(f"\nTotal assets:      {format_money(totals.total_assets):>14s}")
    click.echo(f"Total liabilities: {format_money(totals.total_liabilities):>14s}")
    click.echo(f"Net worth:         {format_money(totals.net_worth):>14s}")


def _echo_frozen_totals(snapshot) -> None:
    click.echo(f"Total assets:      {format_money(snapshot.total_assets):>14s}")
    click.echo(f"Total liabilities: {format_money(snapshot.total_liabilities):>14s}")
    click.echo(f"Net worth:         {format_money(snapshot.net_worth):>14s}")


def _echo_deltas(book, deltas) -> None:
    if not deltas:
        return
    click.echo("\nChanges:")
    for d in deltas:
        sign = "+" if d.change > 0 else ""
        click.echo(
            f"  {book.assets.display_name(d.asset_id):20s} "
            f"{format_money(d.old_balance):>12s} -> {format_money(d.new_balance):>12s} "
            f"({sign}{format_money(d.change)})"
        )


def register_commands(cli):
    """Register asset commands with main CLI."""
    cli.add_command(asset_group, name="asset")
    cli.add_command(networth)
