"""Ledger entry commands."""

import click
from pocketledger.cli.date_filters import resolve_cli_date_range
from pocketledger.cli.error_handling import handle_domain_error, warn_if_unsaved
from pocketledger.cli.resolution import resolve_wallet_or_exit
from pocketledger.domain.categories import categories_for, category_label
from pocketledger.domain.entities import EntryKind
from pocketledger.domain.errors import DomainError
from pocketledger.domain.money import format_money
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_datetime


def signed_text(entry) -> str:
    """Amount with a sign that shows its effect on the total."""
    amount = format_money(entry.amount)
    if entry.kind == EntryKind.INCOME:
        return f"+{amount}"
    if entry.kind == EntryKind.EXPENSE:
        return f"-{amount}"
    return amount


@click.group()
def entry_group():
    """Record and review ledger entries."""
    pass


@entry_group.command("add")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in EntryKind]),
    default=EntryKind.EXPENSE.value,
    show_default=True,
)
@click.option("--amount", required=True, help="Amount, e.g. 12.50")
@click.option("--wallet", help="Source wallet name or ID (defaults to the first wallet)")
@click.option("--to-wallet", help="Destination wallet name or ID (transfers only)")
@click.option("--category", help="Category ID, e.g. food or salary")
@click.option("--note", help="Note")
@click.option("--at", "at", help="When it happened (ISO timestamp, date, or 'now')")
@click.pass_context
def add_entry(
    ctx,
    kind: str,
    amount: str,
    wallet: str | None,
    to_wallet: str | None,
    category: str | None,
    note: str | None,
    at: str | None,
):
    """Add a ledger entry.

    Examples:
        pocketledger entry add --amount 12.50 --category food
        pocketledger entry add --kind income --amount 3000 --category salary --wallet "Bank Card"
        pocketledger entry add --kind transfer --amount 200 --wallet Cash --to-wallet "Bank Card"
    """
    book = ctx.obj["book"]

    if wallet is not None:
        wallet_id = resolve_wallet_or_exit(ctx, book, wallet)
    elif book.wallets.wallets:
        wallet_id = book.wallets.wallets[0].id
    else:
        click.echo("Error: No wallets exist; create one or pass --wallet", err=True)
        ctx.exit(1)

    to_wallet_id = resolve_wallet_or_exit(ctx, book, to_wallet) if to_wallet else None

    try:
        minor = parse_amount(amount)
        timestamp = parse_datetime(at) if at else None
        created = book.ledger.append(
            amount=minor,
            kind=kind,
            wallet_id=wallet_id,
            category=category,
            note=note,
            timestamp=timestamp,
            to_wallet_id=to_wallet_id,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created entry {created.id}")
    click.echo(f"  Amount: {signed_text(created)}")
    click.echo(f"  Wallet: {book.wallets.display_name(created.wallet_id)}")
    if created.to_wallet_id:
        click.echo(f"  To: {book.wallets.display_name(created.to_wallet_id)}")
    else:
        click.echo(f"  Category: {category_label(created.category)}")
    warn_if_unsaved(book)


@entry_group.command("list")
@click.option("--start-date", help="First day to include")
@click.option("--end-date", help="Last day to include")
@click.option("--this-month", is_flag=True, help="Only this month")
@click.option("--last-month", is_flag=True, help="Only last month")
@click.pass_context
def list_entries(ctx, start_date, end_date, this_month, last_month):
    """List entries grouped by day, newest first."""
    book = ctx.obj["book"]
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={"this-month": this_month, "last-month": last_month},
    )

    shown = 0
    for day, entries in book.ledger.grouped_by_day():
        if (start is not None and day < start) or (end is not None and day > end):
            continue
        click.echo(f"\n{day.isoformat()}")
        for e in entries:
            label = (
                f"{book.wallets.display_name(e.wallet_id)} -> {book.wallets.display_name(e.to_wallet_id)}"
                if e.kind == EntryKind.TRANSFER
                else category_label(e.category)
            )
            note = f" | {e.note}" if e.note else ""
            click.echo(
                f"  {e.id[:8]} {e.timestamp.strftime('%H:%M')} {signed_text(e):>12s} {label}{note}"
            )
            shown += 1

    if shown == 0:
        click.echo("No entries found.")


@entry_group.command("today")
@click.pass_context
def today_entries(ctx):
    """Show today's entries and month-to-date totals."""
    book = ctx.obj["book"]
    ledger = book.ledger

    entries = ledger.today_entries()
    click.echo(f"Today: {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")
    for e in entries:
        click.echo(f"  {e.timestamp.strftime('%H:%M')} {signed_text(e):>12s} {category_label(e.category)}")
    click.echo(f"Month income:  {format_money(ledger.month_income())}")
    click.echo(f"Month expense: {format_money(ledger.month_expense())}")
    click.echo(f"Month net:     {format_money(ledger.month_net())}")


@entry_group.command("categories")
@click.option("--kind", type=click.Choice([EntryKind.INCOME.value, EntryKind.EXPENSE.value]))
def list_categories(kind: str | None):
    """List the built-in category IDs."""
    kinds = [EntryKind(kind)] if kind else [EntryKind.INCOME, EntryKind.EXPENSE]
    for entry_kind in kinds:
        click.echo(f"\n{entry_kind.value.capitalize()}:")
        for info in categories_for(entry_kind):
            click.echo(f"  {info.id:15s} {info.name}")


@entry_group.command("delete")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def delete_entry(ctx, entry_id: str):
    """Delete an entry by ID or unique ID prefix."""
    book = ctx.obj["book"]
    matches = [e.id for e in book.ledger.entries if e.id.startswith(entry_id)]
    if len(matches) > 1:
        click.echo(f"Error: Entry ID prefix '{entry_id}' is ambiguous", err=True)
        ctx.exit(1)

    target = matches[0] if matches else entry_id
    book.ledger.delete(target)
    click.echo(f"Deleted entry {target}")
    warn_if_unsaved(book)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
