"""Built-in ledger categories.

Category ids on entries are opaque strings; nothing is validated against this
catalogue. It only supplies display names and the choices offered per kind.
"""

from dataclasses import dataclass

from pocketledger.domain.entities import EntryKind

UNCATEGORIZED_LABEL = "Uncategorized"

DEFAULT_EXPENSE_CATEGORY = "food"
DEFAULT_INCOME_CATEGORY = "salary"
TRANSFER_CATEGORY = "transfer"


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for a built-in category."""

    id: str
    name: str
    icon: str
    kind: EntryKind


INCOME_CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo("salary", "Salary", "briefcase.fill", EntryKind.INCOME),
    CategoryInfo("bonus", "Bonus", "star.fill", EntryKind.INCOME),
    CategoryInfo("investment", "Investment", "chart.line.uptrend.xyaxis", EntryKind.INCOME),
    CategoryInfo("gift_in", "Gift", "gift.fill", EntryKind.INCOME),
    CategoryInfo("refund", "Refund", "arrow.uturn.backward.circle.fill", EntryKind.INCOME),
    CategoryInfo("other_in", "Other", "ellipsis.circle.fill", EntryKind.INCOME),
)

EXPENSE_CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo("food", "Food", "fork.knife", EntryKind.EXPENSE),
    CategoryInfo("transport", "Transport", "car.fill", EntryKind.EXPENSE),
    CategoryInfo("shopping", "Shopping", "cart.fill", EntryKind.EXPENSE),
    CategoryInfo("entertainment", "Entertainment", "gamecontroller.fill", EntryKind.EXPENSE),
    CategoryInfo("bills", "Bills", "doc.text.fill", EntryKind.EXPENSE),
    CategoryInfo("health", "Health", "cross.case.fill", EntryKind.EXPENSE),
    CategoryInfo("education", "Education", "book.fill", EntryKind.EXPENSE),
    CategoryInfo("gift_out", "Gifts", "gift.fill", EntryKind.EXPENSE),
    CategoryInfo("other_out", "Other", "ellipsis.circle.fill", EntryKind.EXPENSE),
)


def categories_for(kind: EntryKind) -> tuple[CategoryInfo, ...]:
    """Return the categories offered for an entry kind (none for transfers)."""
    if kind == EntryKind.INCOME:
        return INCOME_CATEGORIES
    if kind == EntryKind.EXPENSE:
        return EXPENSE_CATEGORIES
    return ()


def find_category(category_id: str) -> CategoryInfo | None:
    """Look up a built-in category by id."""
    for info in INCOME_CATEGORIES + EXPENSE_CATEGORIES:
        if info.id == category_id:
            return info
    return None


def category_label(category_id: str) -> str:
    """Display name for a category id; unknown ids render as uncategorized."""
    info = find_category(category_id)
    if info is None:
        return UNCATEGORIZED_LABEL
    return info.name
