"""CLI helpers for date range resolution."""

from datetime import date

import click

from pocketledger.utils.date_parser import get_date_range, parse_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]
    flag_names = ", ".join(f"--{period}" for period in period_flags)

    if len(selected) > 1:
        click.echo(f"Error: Only one period option ({flag_names}) can be specified at a time.", err=True)
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = None
    end = None
    for label, raw in (("start", start_date), ("end", end_date)):
        if not raw:
            continue
        try:
            parsed = parse_date(raw)
        except ValueError as e:
            click.echo(f"Error: Invalid {label} date: {e}", err=True)
            ctx.exit(1)
        if label == "start":
            start = parsed
        else:
            end = parsed

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end
