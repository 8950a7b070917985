"""Period statistics command."""

import click
from dateutil.relativedelta import relativedelta

from pocketledger.cli.date_filters import resolve_cli_date_range
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.categories import category_label
from pocketledger.domain.errors import DomainError
from pocketledger.domain.money import format_money
from pocketledger.utils.timestamps import utc_now


@click.command("stats")
@click.option("--start-date", help="First day to include (default: one month ago)")
@click.option("--end-date", help="Last day to include (default: today)")
@click.option("--this-week", is_flag=True, help="This week so far")
@click.option("--this-month", is_flag=True, help="This month so far")
@click.option("--this-year", is_flag=True, help="This year so far")
@click.option("--last-week", is_flag=True, help="Last week")
@click.option("--last-month", is_flag=True, help="Last month")
@click.option("--last-year", is_flag=True, help="Last year")
@click.pass_context
def show_stats(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    this_year: bool,
    last_week: bool,
    last_month: bool,
    last_year: bool,
):
    """Show income, expense and spending by category for a period.

    Examples:
        pocketledger stats
        pocketledger stats --last-month
        pocketledger stats --start-date 2024-01-01 --end-date 2024-03-31
    """
    book = ctx.obj["book"]

    today = utc_now().date()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "this-month": this_month,
            "this-year": this_year,
            "last-week": last_week,
            "last-month": last_month,
            "last-year": last_year,
        },
        default_range=(today - relativedelta(months=1), today),
    )
    start = start or end - relativedelta(months=1)
    end = end or today

    try:
        stats = book.ledger.period_stats(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nStatistics {stats.start_date} - {stats.end_date} ({stats.day_count} days)")
    click.echo("-" * 48)
    click.echo(f"Income:          {format_money(stats.total_income):>14s}")
    click.echo(f"Expense:         {format_money(stats.total_expense):>14s}")
    click.echo(f"Net:             {format_money(stats.net):>14s}")
    click.echo(f"Daily expense:   {format_money(stats.daily_average_expense):>14s}")

    if stats.expense_by_category:
        click.echo("\nExpense by category:")
        for item in stats.expense_by_category:
            click.echo(f"  {category_label(item.category):20s} {format_money(item.amount):>14s}")


def register_commands(cli):
    """Register stats command with main CLI."""
    cli.add_command(show_stats)
