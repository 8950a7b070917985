"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from pocketledger.domain.errors import InvalidAmountError
from pocketledger.domain.money import to_minor_units

CURRENCY_NOISE = re.compile(r"[$€£¥,]")


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into minor units.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string in major units

    Returns:
        Amount in minor units (e.g. 12345 for "123.45")

    Raises:
        InvalidAmountError: If amount string cannot be parsed or has
            more than two decimal places
    """
    text = (amount_str or "").strip()
    if not text:
        raise InvalidAmountError("Empty amount string")

    is_negative = text.startswith("(") and text.endswith(")")
    if is_negative:
        text = text[1:-1]
    amount_str = CURRENCY_NOISE.sub("", text).strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Could not parse amount '{amount_str}': {e}")

    minor = to_minor_units(amount)
    return -minor if is_negative else minor
