"""Transaction domain service.

Every mutation keeps account balances equal to the sum of their transaction
history. The transaction row and the one or two balance writes it causes are
made inside a single ``Database.atomic()`` block: if any write fails, none of
them persist. Balances are read fresh inside the block, but there is no
locking across sessions, so concurrent writers can still lose updates.
"""

import logging
import time
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from walletbook.database.base import Database, Table
from walletbook.domain.balance import (
    Effect,
    apply_transaction_effect,
    reverse_effect,
    transaction_effect,
    update_effect,
)
from walletbook.domain.classification import (
    classify,
    resolve_transfer_destination,
    signed_amount,
)
from walletbook.domain.entities import (
    Platform,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from walletbook.domain.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    account_not_found,
    store_failed,
    transaction_not_found,
)
from walletbook.storage.base import ObjectStore

logger = logging.getLogger(__name__)

SORT_FIELDS = ("date", "amount", "description")


def prepare_transaction(draft: TransactionDraft, accounts: Sequence[Platform]) -> dict[str, Any]:
    """Validate a draft against the loaded accounts and build the row values.

    Pure: makes no gateway calls, so a rejected draft never causes a write.

    Args:
        draft: Transaction as entered
        accounts: The user's accounts

    Returns:
        Row values for the transactions table

    Raises:
        ValidationError: If a required field is missing, the amount is not
            positive, or the transfer destination cannot be resolved
        NotFoundError: If the source or chosen destination account is unknown
    """
    if draft.date is None:
        raise ValidationError("Date is required")
    if not draft.category:
        raise ValidationError("Category is required")
    if not (draft.description or "").strip():
        raise ValidationError("Description is required")

    txn_type = classify(draft.category)
    amount = signed_amount(txn_type, draft.amount)

    source = next((acc for acc in accounts if acc.id == draft.account_id), None)
    if source is None:
        raise NotFoundError(account_not_found(draft.account_id))

    destination_id = None
    if txn_type == TransactionType.TRANSFER:
        destination = resolve_transfer_destination(
            draft.subcategory, source, accounts, draft.destination_account_id
        )
        destination_id = destination.id

    return {
        "date": draft.date,
        "description": draft.description.strip(),
        "category": draft.category,
        "subcategory": draft.subcategory or "",
        "amount": amount,
        "account_id": source.id,
        "destination_account_id": destination_id,
    }


class TransactionService:
    """Service for managing transactions and their balance effects."""

    def __init__(self, db: Database, user_id: Optional[str] = None, store: Optional[ObjectStore] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            user_id: Optional user scope for every read and write
            store: Object store for receipt attachments
        """
        self.db = db
        self.user_id = user_id
        self.store = store

    def _accounts(self) -> list[Platform]:
        return self.db.list_rows(Table.PLATFORMS, user_id=self.user_id)

    def _apply_effect(self, effect: Effect) -> dict[int, Decimal]:
        """Write the balances resulting from ``effect``.

        Accounts are read fresh and written in effect order: source first,
        then destination. Must run inside ``db.atomic()``.
        """
        accounts = []
        for account_id in effect:
            account = self.db.get_row(Table.PLATFORMS, account_id, user_id=self.user_id)
            if account is not None:
                accounts.append(account)

        balances = apply_transaction_effect(effect, accounts)
        for account_id, balance in balances.items():
            updated = self.db.update_row(
                Table.PLATFORMS, account_id, {"balance": balance}, user_id=self.user_id
            )
            if updated is None:
                raise StoreError(store_failed(f"update balance of account {account_id}"))
            logger.info("Account %s balance set to %s", account_id, balance)
        return balances

    def _upload_receipt(self, name: str, data: bytes) -> str:
        """Upload a receipt and return its object path."""
        if self.store is None:
            raise ValidationError("No attachment storage configured for receipts")
        path = f"receipts/{int(time.time() * 1000)}-{name}"
        if not self.store.upload(path, data):
            raise StoreError(store_failed("upload receipt"))
        return path

    def create_transaction(
        self,
        draft: TransactionDraft,
        receipt_name: Optional[str] = None,
        receipt_data: Optional[bytes] = None,
    ) -> Transaction:
        """Record a transaction and apply its balance effect.

        Args:
            draft: Transaction as entered (positive amount)
            receipt_name: Optional file name of a receipt attachment
            receipt_data: Receipt contents

        Returns:
            Created transaction

        Raises:
            ValidationError: If the draft is invalid; nothing is written
            NotFoundError: If an account does not exist; nothing is written
            StoreError: If any write failed; all writes are rolled back
                and an uploaded receipt is removed
        """
        values = prepare_transaction(draft, self._accounts())

        receipt_path = None
        if receipt_data is not None:
            receipt_path = self._upload_receipt(receipt_name or "receipt", receipt_data)
            values["receipt_url"] = self.store.get_public_url(receipt_path)

        try:
            with self.db.atomic():
                txn = self.db.insert_row(Table.TRANSACTIONS, values, user_id=self.user_id)
                if txn is None:
                    raise StoreError(store_failed("save transaction"))
                self._apply_effect(transaction_effect(txn))
        except Exception:
            if receipt_path is not None and not self.store.remove(receipt_path):
                logger.warning("Orphaned receipt left at %s", receipt_path)
            raise

        logger.info("Created transaction %s (%s %s)", txn.id, txn.category, txn.amount)
        return txn

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_row(Table.TRANSACTIONS, transaction_id, user_id=self.user_id)

    def require_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        amount: Optional[Decimal] = None,
        account_id: Optional[int] = None,
        destination_account_id: Optional[int] = None,
    ) -> Transaction:
        """Edit a transaction and rebalance the affected accounts.

        Fields left as None keep their current value. ``amount`` is a positive
        magnitude; its sign follows the (possibly new) category. The old
        balance effect is reversed before the new one is applied.

        Raises:
            NotFoundError: If the transaction or an account does not exist
            ValidationError: If the edited transaction is invalid
            StoreError: If any write failed; all writes are rolled back
        """
        old = self.require_transaction(transaction_id)

        draft = TransactionDraft(
            date=date if date is not None else old.date,
            description=description if description is not None else old.description,
            category=category if category is not None else old.category,
            subcategory=subcategory if subcategory is not None else old.subcategory,
            amount=amount if amount is not None else abs(old.amount),
            account_id=account_id if account_id is not None else old.account_id,
            destination_account_id=(
                destination_account_id
                if destination_account_id is not None
                else old.destination_account_id
            ),
        )
        values = prepare_transaction(draft, self._accounts())

        with self.db.atomic():
            txn = self.db.update_row(Table.TRANSACTIONS, transaction_id, values, user_id=self.user_id)
            if txn is None:
                raise StoreError(store_failed(f"update transaction {transaction_id}"))
            self._apply_effect(update_effect(old, txn))

        logger.info("Updated transaction %s", transaction_id)
        return txn

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and reverse its balance effect.

        Raises:
            NotFoundError: If the transaction does not exist
            StoreError: If any write failed; all writes are rolled back
        """
        txn = self.require_transaction(transaction_id)

        with self.db.atomic():
            if not self.db.delete_row(Table.TRANSACTIONS, transaction_id, user_id=self.user_id):
                raise StoreError(store_failed(f"delete transaction {transaction_id}"))
            self._apply_effect(reverse_effect(transaction_effect(txn)))

        logger.info("Deleted transaction %s", transaction_id)

    def toggle_struck(self, transaction_id: int) -> Transaction:
        """Flip the struck marker. Balances are not touched."""
        txn = self.require_transaction(transaction_id)
        updated = self.db.update_row(
            Table.TRANSACTIONS, transaction_id, {"struck": not txn.struck}, user_id=self.user_id
        )
        if updated is None:
            raise StoreError(store_failed(f"update transaction {transaction_id}"))
        return updated

    def list_transactions(
        self,
        account_id: Optional[int] = None,
        category: Optional[str] = None,
        transaction_type: Optional[TransactionType | str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        search: Optional[str] = None,
        sort_by: str = "date",
        ascending: bool = False,
    ) -> list[Transaction]:
        """List transactions with filters.

        Args:
            account_id: Transactions where the account is source or destination
            category: Exact category label
            transaction_type: income, expense or transfer
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            search: Case-insensitive substring of the description
            sort_by: date, amount (by magnitude) or description
            ascending: Sort direction

        Returns:
            List of transaction entities
        """
        if sort_by not in SORT_FIELDS:
            raise ValidationError(f"Cannot sort by '{sort_by}'. Expected one of: {', '.join(SORT_FIELDS)}")
        if transaction_type is not None:
            transaction_type = TransactionType(transaction_type)
        needle = search.lower() if search else None

        result = []
        for txn in self.db.list_rows(Table.TRANSACTIONS, user_id=self.user_id):
            if account_id is not None and account_id not in (txn.account_id, txn.destination_account_id):
                continue
            if category is not None and txn.category != category:
                continue
            if transaction_type is not None and classify(txn.category) != transaction_type:
                continue
            if start_date is not None and txn.date < start_date:
                continue
            if end_date is not None and txn.date > end_date:
                continue
            if needle and needle not in (txn.description or "").lower():
                continue
            result.append(txn)

        if sort_by == "amount":
            key = lambda txn: (abs(txn.amount), txn.id)
        elif sort_by == "description":
            key = lambda txn: ((txn.description or "").lower(), txn.id)
        else:
            key = lambda txn: (txn.date, txn.id)
        result.sort(key=key, reverse=not ascending)
        return result
