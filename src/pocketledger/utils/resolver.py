"""Utility for resolving wallet and asset references to IDs."""

from typing import Iterable, Protocol

from pocketledger.domain.errors import NotFoundError, ValidationError


class Named(Protocol):
    id: str
    name: str


def resolve_reference(items: Iterable[Named], reference: str, label: str) -> str:
    """Resolve a name, full ID or unique ID prefix to an ID.

    Exact names win over IDs so that a wallet can be called by what the user
    sees.

    Args:
        items: Wallets or assets to search
        reference: Name, ID or ID prefix
        label: Entity label used in error messages (e.g. "Wallet")

    Returns:
        The matching ID

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If an ID prefix matches more than one item
    """
    items = list(items)
    reference = reference.strip()

    for item in items:
        if item.name == reference:
            return item.id

    for item in items:
        if item.id == reference:
            return item.id

    matches = [item.id for item in items if item.id.startswith(reference)] if reference else []
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValidationError(f"{label} ID prefix '{reference}' is ambiguous")

    raise NotFoundError(f"{label} '{reference}' not found")
