"""Balance snapshot and reconciliation commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error, warn_if_unsaved
from pocketledger.cli.resolution import resolve_wallet_or_exit
from pocketledger.domain.errors import DomainError
from pocketledger.domain.money import format_money
from pocketledger.domain.reconciliation import reconcile
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_datetime


@click.group()
def snapshot_group():
    """Capture and review wallet balance snapshots."""
    pass


@snapshot_group.command("capture")
@click.argument("balances", nargs=-1, metavar="WALLET=AMOUNT...")
@click.option("--at", "at", help="Capture time (ISO timestamp, date, or 'now')")
@click.option(
    "--no-prefill",
    is_flag=True,
    help="Leave out wallets not given (they count as 0) instead of carrying their last balance",
)
@click.pass_context
def capture_snapshot(ctx, balances: tuple[str, ...], at: str | None, no_prefill: bool):
    """Record what each wallet actually holds, then reconcile.

    Wallets not listed keep the balance from the latest snapshot unless
    --no-prefill is given.

    Examples:
        pocketledger snapshot capture Cash=120.50 "Bank Card=2500"
    """
    book = ctx.obj["book"]

    values: dict[str, int] = {}
    if not no_prefill:
        for w in book.wallets.wallets:
            values[w.id] = book.snapshots.current_balance(w.id)

    for item in balances:
        name, sep, raw_amount = item.rpartition("=")
        if not sep or not name:
            click.echo(f"Error: Expected WALLET=AMOUNT, got '{item}'", err=True)
            ctx.exit(1)
        wallet_id = resolve_wallet_or_exit(ctx, book, name)
        try:
            values[wallet_id] = parse_amount(raw_amount)
        except DomainError as e:
            handle_domain_error(ctx, e)

    previous = book.snapshots.latest()
    try:
        timestamp = parse_datetime(at) if at else None
        if previous is not None and timestamp is not None and timestamp < previous.timestamp:
            click.echo("Error: Snapshot time is earlier than the latest snapshot", err=True)
            ctx.exit(1)
        created = book.snapshots.capture(values, timestamp=timestamp)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Captured snapshot {created.id[:8]} total {format_money(created.total_balance)}")
    _echo_reconciliation(reconcile(previous, created, book.ledger))
    warn_if_unsaved(book)


@snapshot_group.command("list")
@click.pass_context
def list_snapshots(ctx):
    """List snapshots, newest first."""
    book = ctx.obj["book"]

    snapshots = book.snapshots.snapshots
    if not snapshots:
        click.echo("No snapshots found.")
        return

    for s in snapshots:
        _echo_snapshot(book, s)


@snapshot_group.command("latest")
@click.pass_context
def latest_snapshot(ctx):
    """Show the most recent snapshot."""
    book = ctx.obj["book"]

    latest = book.snapshots.latest()
    if latest is None:
        click.echo("No snapshots found.")
        return
    _echo_snapshot(book, latest)


@click.command("reconcile")
@click.pass_context
def reconcile_latest(ctx):
    """Compare the latest snapshot with the previous one and the ledger."""
    book = ctx.obj["book"]

    result = book.reconcile_latest()
    if result is None:
        click.echo("No snapshots yet. Capture one with 'snapshot capture'.")
        return
    _echo_reconciliation(result)


def _echo_snapshot(book, snapshot) -> None:
    click.echo(
        f"{snapshot.id[:8]} | {snapshot.timestamp.strftime('%Y-%m-%d %H:%M')} | "
        f"{format_money(snapshot.total_balance):>14s}"
    )
    for wallet_id, balance in snapshot.balances.items():
        click.echo(f"    {book.wallets.display_name(wallet_id):20s} {format_money(balance):>14s}")


def _echo_reconciliation(result) -> None:
    click.echo(f"Actual change:   {format_money(result.actual_change):>14s}")
    click.echo(f"Recorded change: {format_money(result.recorded_change):>14s}")
    click.echo(f"Drift:           {format_money(result.drift):>14s}")
    if result.is_balanced:
        click.echo("Everything is accounted for.")
    else:
        click.echo("Some changes were not recorded.")


def register_commands(cli):
    """Register snapshot commands with main CLI."""
    cli.add_command(snapshot_group, name="snapshot")
    cli.add_command(reconcile_latest)
