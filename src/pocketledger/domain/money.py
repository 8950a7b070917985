"""Money helpers.

Money is always an ``int`` count of minor currency units (cents). Floats are
only ever produced for display ratios and never fed back into stored values.
"""

from decimal import Decimal, Inexact, InvalidOperation, localcontext
from typing import Iterable, NewType

from pocketledger.domain.errors import InvalidAmountError, invalid_amount, invalid_balance

Money = NewType("Money", int)

MINOR_UNITS_PER_MAJOR = 100

# Amounts are stored in signed 64-bit columns.
MAX_MINOR_UNITS = 2**63 - 1


def is_money(value: object) -> bool:
    """Return True if value is usable as a Money amount.

    That is an int (not a bool) that fits the 64-bit storage range.
    """
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) <= MAX_MINOR_UNITS


def require_positive(amount: object) -> int:
    """Validate a ledger magnitude.

    Raises:
        InvalidAmountError: If amount is not an int greater than zero
    """
    if not is_money(amount) or amount <= 0:
        raise InvalidAmountError(invalid_amount(amount))
    return amount


def require_balance(balance: object) -> int:
    """Validate a balance, which may be zero or negative.

    Raises:
        InvalidAmountError: If balance is not an int
    """
    if not is_money(balance):
        raise InvalidAmountError(invalid_balance(balance))
    return balance


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit Decimal (e.g. 12.34) to minor units (1234).

    The scaling runs with inexact results trapped, so large amounts are
    rejected rather than rounded.

    Raises:
        InvalidAmountError: If the amount has more precision than one minor
            unit or does not fit in storage
    """
    if not amount.is_finite():
        raise InvalidAmountError(f"Could not convert amount '{amount}'")
    try:
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            scaled = amount.scaleb(2)
            minor = scaled.to_integral_value()
    except (Inexact, InvalidOperation) as e:
        raise InvalidAmountError(f"Could not convert amount '{amount}': {e!r}")
    if minor != scaled:
        raise InvalidAmountError(
            f"Amount '{amount}' has more than two decimal places"
        )
    if abs(minor) > MAX_MINOR_UNITS:
        raise InvalidAmountError(f"Amount '{amount}' is too large")
    return int(minor)


def format_money(minor: int) -> str:
    """Render minor units as a major-unit string with two fraction digits.

    Uses integer division so the conversion never rounds.
    """
    sign = "-" if minor < 0 else ""
    major, cents = divmod(abs(minor), MINOR_UNITS_PER_MAJOR)
    return f"{sign}{major}.{cents:02d}"


def total(amounts: Iterable[int]) -> int:
    """Sum minor-unit amounts exactly."""
    result = 0
    for amount in amounts:
        result += amount
    return result
