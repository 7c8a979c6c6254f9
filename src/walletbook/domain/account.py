"""Account ("platform") domain service."""

import logging
from decimal import Decimal
from typing import Optional

from walletbook.database.base import Database, Table
from walletbook.domain.classification import find_cash_account, to_cents
from walletbook.domain.entities import AccountStats, AccountType, Platform
from walletbook.domain.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
    account_not_found,
    duplicate_account_name,
    store_failed,
)
from walletbook.domain.summary import account_stats

logger = logging.getLogger(__name__)

ACCOUNT_TYPES = tuple(t.value for t in AccountType)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database, user_id: Optional[str] = None):
        """Initialize account service.

        Args:
            db: Database instance
            user_id: Optional user scope for every read and write
        """
        self.db = db
        self.user_id = user_id

    def _validate_type(self, account_type: str) -> None:
        if account_type not in ACCOUNT_TYPES:
            raise ValidationError(
                f"Invalid account type '{account_type}'. Expected one of: {', '.join(ACCOUNT_TYPES)}"
            )

    def _check_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.list_accounts():
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(duplicate_account_name(name))

    def create_account(
        self,
        name: str,
        account_type: str = AccountType.BANK.value,
        balance: Decimal = Decimal("0"),
        is_savings: bool = False,
        color: str = "blue",
    ) -> Platform:
        """Create a new account.

        Args:
            name: Display name, unique per user
            account_type: "Bank Account", "E-Wallet" or "Cash"
            balance: Opening balance, rounded to cents
            is_savings: Whether the balance counts as savings
            color: Display color tag

        Returns:
            Created account

        Raises:
            ValidationError: If name is empty, type is unknown or balance is not a number
            ConflictError: If account name already exists
            StoreError: If the account could not be stored
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        self._validate_type(account_type)
        if not isinstance(balance, Decimal) or not balance.is_finite():
            raise ValidationError("Opening balance must be a number")
        self._check_unique_name(name)

        account = self.db.insert_row(
            Table.PLATFORMS,
            {
                "name": name,
                "account_type": account_type,
                "balance": to_cents(balance),
                "is_savings": is_savings,
                "color": color,
            },
            user_id=self.user_id,
        )
        if account is None:
            raise StoreError(store_failed("save account"))
        return account

    def get_account(self, account_id: int) -> Optional[Platform]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_row(Table.PLATFORMS, account_id, user_id=self.user_id)

    def require_account(self, account_id: int) -> Platform:
        """Get account by ID or raise NotFoundError."""
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, account_type: Optional[str] = None) -> list[Platform]:
        """List accounts ordered by name, optionally of one type."""
        if account_type is not None:
            return self.db.list_rows(Table.PLATFORMS, user_id=self.user_id, account_type=account_type)
        return self.db.list_rows(Table.PLATFORMS, user_id=self.user_id)

    def find_by_name(self, name: str) -> Optional[Platform]:
        """Find an account by its display name."""
        for acc in self.list_accounts():
            if acc.name == name:
                return acc
        return None

    def find_cash_account(self) -> Optional[Platform]:
        """Return the first account typed Cash, if any."""
        return find_cash_account(self.list_accounts())

    def rename_account(self, account_id: int, name: str) -> Platform:
        """Rename an account.

        Transactions reference the account by ID, so no history changes.

        Raises:
            NotFoundError: If account not found
            ConflictError: If name already exists
        """
        self.require_account(account_id)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        self._check_unique_name(name, exclude_id=account_id)
        return self._update(account_id, {"name": name})

    def update_account(
        self,
        account_id: int,
        account_type: Optional[str] = None,
        is_savings: Optional[bool] = None,
        color: Optional[str] = None,
    ) -> Platform:
        """Update display fields of an account.

        The balance is not editable here; it only moves with transactions.
        """
        self.require_account(account_id)
        values: dict = {}
        if account_type is not None:
            self._validate_type(account_type)
            values["account_type"] = account_type
        if is_savings is not None:
            values["is_savings"] = is_savings
        if color is not None:
            values["color"] = color
        if not values:
            raise ValidationError("Nothing to update")
        return self._update(account_id, values)

    def _update(self, account_id: int, values: dict) -> Platform:
        account = self.db.update_row(Table.PLATFORMS, account_id, values, user_id=self.user_id)
        if account is None:
            raise StoreError(store_failed(f"update account {account_id}"))
        return account

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Transactions referencing the account are kept; they show the account
        as unknown afterwards.

        Raises:
            NotFoundError: If account not found
            StoreError: If the delete failed
        """
        account = self.require_account(account_id)
        if not self.db.delete_row(Table.PLATFORMS, account_id, user_id=self.user_id):
            raise StoreError(store_failed(f"delete account {account_id}"))
        logger.info("Deleted account %s (%s)", account_id, account.name)

    def get_account_stats(self, account_id: int) -> AccountStats:
        """Income, expense and transaction count attributed to an account."""
        self.require_account(account_id)
        transactions = self.db.list_rows(Table.TRANSACTIONS, user_id=self.user_id)
        return account_stats(transactions, account_id)
