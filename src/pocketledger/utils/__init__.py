"""Utility functions for pocketledger."""

from pocketledger.utils.date_parser import parse_date, parse_datetime
from pocketledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_datetime", "parse_amount"]
