"""Tests for CLI date range resolution."""

from datetime import date

import click
import pytest

from pocketledger.cli.date_filters import resolve_cli_date_range
from pocketledger.utils.date_parser import get_date_range

STATS_FLAGS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def _flags(*selected):
    return {flag: flag in selected for flag in STATS_FLAGS}


def _resolve(**kwargs):
    kwargs.setdefault("start_date", None)
    kwargs.setdefault("end_date", None)
    kwargs.setdefault("period_flags", _flags())
    return resolve_cli_date_range(click.Context(click.Command("stats")), **kwargs)


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"period_flags": _flags("this-week", "last-year")}, "Only one period option"),
        ({"period_flags": _flags("last-month"), "end_date": "2024-01-31"}, "cannot be combined"),
        ({"start_date": "someday"}, "Invalid start date"),
        ({"end_date": "31/31/2024"}, "Invalid end date"),
    ],
)
def test_invalid_combinations_exit(capsys, kwargs, message):
    """Conflicting or invalid options exit with an error."""
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(**kwargs)

    assert excinfo.value.exit_code == 1
    assert message in capsys.readouterr().err


def test_period_flag_uses_named_range():
    """A period flag resolves to its named range."""
    assert _resolve(period_flags=_flags("last-week")) == get_date_range("last-week")


def test_explicit_dates_win_over_default():
    """Explicit dates replace the default range."""
    start, end = _resolve(
        start_date="2024-02-01",
        end_date="2024-02-29",
        default_range=(date(2020, 1, 1), date(2020, 1, 31)),
    )
    assert (start, end) == (date(2024, 2, 1), date(2024, 2, 29))


def test_single_bound_keeps_other_open():
    """Giving only a start date leaves the end open."""
    assert _resolve(start_date="2024-02-01") == (date(2024, 2, 1), None)


def test_default_range_when_nothing_given():
    """The default range applies only when nothing is given."""
    default_range = (date(2020, 1, 1), date(2020, 1, 31))
    assert _resolve(default_range=default_range) == default_range
    assert _resolve() == (None, None)
