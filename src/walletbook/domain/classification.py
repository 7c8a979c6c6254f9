"""Transaction classification and transfer counterpart resolution."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from walletbook.domain.entities import (
    AccountType,
    INCOME_CATEGORY,
    Platform,
    TRANSFER_CATEGORY,
    TransactionType,
    WITHDRAW_CASH,
)
from walletbook.domain.errors import (
    NO_CASH_ACCOUNT,
    NotFoundError,
    ValidationError,
    account_not_found,
)

# Amounts and balances are stored with two decimal places
CENTS = Decimal("0.01")


def classify(category: str) -> TransactionType:
    """Derive a transaction's type from its category label.

    Labels are compared exactly: no case folding or whitespace trimming.
    """
    if category == INCOME_CATEGORY:
        return TransactionType.INCOME
    if category == TRANSFER_CATEGORY:
        return TransactionType.TRANSFER
    return TransactionType.EXPENSE


def to_cents(amount: Decimal) -> Decimal:
    """Round an amount to whole cents, half away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def signed_amount(transaction_type: TransactionType, amount: Decimal) -> Decimal:
    """Convert a positive draft amount into the stored signed amount.

    Args:
        transaction_type: Type of the transaction being entered
        amount: Amount as typed by the user, must be positive

    Returns:
        Positive amount for income, negative for expenses and transfers

    Raises:
        ValidationError: If amount is not a positive number of cents
    """
    if amount is None or not isinstance(amount, Decimal) or not amount.is_finite():
        raise ValidationError("Amount must be a number")
    amount = to_cents(amount)
    if amount <= 0:
        raise ValidationError("Amount must be a positive number")
    if transaction_type == TransactionType.INCOME:
        return amount
    return -amount


def find_cash_account(accounts: Sequence[Platform]) -> Optional[Platform]:
    """Return the first account typed Cash, if any."""
    for account in accounts:
        if account.account_type == AccountType.CASH.value:
            return account
    return None


def resolve_transfer_destination(
    subcategory: str,
    source: Platform,
    accounts: Sequence[Platform],
    destination_id: Optional[int] = None,
) -> Platform:
    """Resolve the account credited by a transfer.

    "Withdraw cash from" always targets the first Cash account; any other
    transfer needs an explicit destination.

    Raises:
        ValidationError: If no Cash account exists for a withdrawal, no
            destination was selected, or the destination is the source
        NotFoundError: If the selected destination does not exist
    """
    if subcategory == WITHDRAW_CASH:
        destination = find_cash_account(accounts)
        if destination is None:
            raise ValidationError(NO_CASH_ACCOUNT)
    else:
        if destination_id is None:
            raise ValidationError("Destination account is required for transfers")
        destination = next((acc for acc in accounts if acc.id == destination_id), None)
        if destination is None:
            raise NotFoundError(account_not_found(destination_id))

    if destination.id == source.id:
        raise ValidationError("Source and destination accounts must differ")
    return destination
