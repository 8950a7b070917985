"""Date and timestamp parsing utilities."""

from datetime import date, datetime, time, timedelta, UTC
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from pocketledger.utils.timestamps import ensure_utc, utc_now

PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def _period_start(which: str, period: str, today: date) -> date | None:
    week_start = today - timedelta(days=today.weekday())
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)
    starts = {
        "this": {"week": week_start, "month": month_start, "year": year_start},
        "last": {
            "week": week_start - timedelta(days=7),
            "month": month_start - relativedelta(months=1),
            "year": year_start - relativedelta(years=1),
        },
        "next": {
            "week": week_start + timedelta(days=7),
            "month": month_start + relativedelta(months=1),
            "year": year_start + relativedelta(years=1),
        },
    }
    return starts.get(which, {}).get(period)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones ("today", "yesterday", "tomorrow", "this month", "last week",
    "next year"). Week periods start on Monday.

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = utc_now().date()

    relative_days = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if date_str in relative_days:
        return today + timedelta(days=relative_days[date_str])

    which, _, period = date_str.partition(" ")
    if period:
        start = _period_start(which, period, today)
        if start is not None:
            return start

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str) -> datetime:
    """Parse a timestamp string into a UTC-aware datetime.

    "now" is the current instant. Strings without a time of day, including
    relative dates, mean midnight UTC on that day. Times without an offset
    are taken as UTC.

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip()
    if text.lower() == "now":
        return utc_now()

    try:
        parsed = date_parser.isoparse(text)
    except ValueError:
        return datetime.combine(parse_date(text), time.min, tzinfo=UTC)
    return ensure_utc(parsed)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods end today; "last-*" periods end on their final day.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if period not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    today = utc_now().date()
    which, _, unit = period.partition("-")
    start = _period_start(which, unit, today)
    if which == "this":
        return start, today
    end = _period_start("this", unit, today) - timedelta(days=1)
    return start, end
