"""Tests for the built-in category catalogue."""

from pocketledger.domain.categories import (
    UNCATEGORIZED_LABEL,
    categories_for,
    category_label,
    find_category,
)
from pocketledger.domain.entities import EntryKind


def test_categories_per_kind():
    """Income and expense have separate catalogues; transfers have none."""
    income_ids = [c.id for c in categories_for(EntryKind.INCOME)]
    expense_ids = [c.id for c in categories_for(EntryKind.EXPENSE)]

    assert income_ids[0] == "salary"
    assert expense_ids[0] == "food"
    assert not set(income_ids) & set(expense_ids)
    assert categories_for(EntryKind.TRANSFER) == ()


def test_find_category():
    """Categories are found by id."""
    assert find_category("health").kind == EntryKind.EXPENSE
    assert find_category("nope") is None


def test_unknown_category_renders_uncategorized():
    """Unknown ids render as the uncategorized label."""
    assert category_label("bonus") == "Bonus"
    assert category_label("crypto_mining") == UNCATEGORIZED_LABEL
