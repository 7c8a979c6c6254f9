"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent or protected domain data."""


class StoreError(DomainError):
    """A persistence gateway call failed.

    The gateway logs the underlying cause; callers only learn that the
    operation did not go through.
    """


NO_CASH_ACCOUNT = "no cash account configured"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"


def record_not_found(kind: str, record_id: int) -> str:
    """Return message for a missing goal, debt or other plain record."""
    return f"{kind} {record_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name already in use."""
    return f"Account with name '{name}' already exists"


def duplicate_category_name(name: str, category_type: str) -> str:
    """Return message for a category name already in use for its type."""
    return f"Category '{name}' already exists for type '{category_type}'"


def store_failed(action: str) -> str:
    """Return message for a failed gateway call."""
    return f"Failed to {action}"
