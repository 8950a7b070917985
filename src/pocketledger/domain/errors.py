"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Amount is not a usable count of minor units."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PersistError(DomainError):
    """The persistence collaborator failed to save or delete an entity.

    The in-memory change that triggered the write has already been applied
    and is not rolled back.
    """

    def __init__(self, message: str, entity: str | None = None, entity_id: str | None = None):
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


def invalid_amount(amount: object) -> str:
    """Return message for an amount that is not a positive minor-unit integer."""
    return f"Amount must be a positive whole number of minor units, got {amount!r}"


def invalid_balance(balance: object) -> str:
    """Return message for a balance that is not a minor-unit integer."""
    return f"Balance must be a whole number of minor units, got {balance!r}"


def wallet_not_found(wallet_id: str) -> str:
    """Return message for missing wallet."""
    return f"Wallet {wallet_id} not found"


def asset_not_found(asset_id: str) -> str:
    """Return message for missing asset."""
    return f"Asset {asset_id} not found"


def persist_failed(action: str, entity: str, entity_id: str, cause: Exception) -> str:
    """Return message when the storage layer rejects a write."""
    return f"Failed to {action} {entity} {entity_id}: {cause}"


def duplicate_name(entity: str, name: str) -> str:
    """Return message for a name that is already taken."""
    return f"{entity} with name '{name}' already exists"


def unknown_kind(entity: str, value: object, choices: list[str]) -> str:
    """Return message for an unrecognized kind value."""
    return f"Unknown {entity} kind {value!r}. Expected one of: {', '.join(choices)}"
