"""Utility for resolving account names to IDs."""

from walletbook.domain.account import AccountService
from walletbook.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int):
        account_id = account
    else:
        try:
            account_id = int(account)
        except (ValueError, TypeError):
            # Not a number, treat as name
            found = account_service.find_by_name(account)
            if found is None:
                raise NotFoundError(f"Account '{account}' not found")
            return found.id

    return account_service.require_account(account_id).id
