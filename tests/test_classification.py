"""Tests for transaction classification and transfer resolution."""

from datetime import datetime, UTC
from decimal import Decimal

import pytest

from walletbook.domain.classification import (
    classify,
    find_cash_account,
    resolve_transfer_destination,
    signed_amount,
)
from walletbook.domain.entities import Platform, TransactionType
from walletbook.domain.errors import NO_CASH_ACCOUNT, NotFoundError, ValidationError


def make_account(account_id, name, account_type="Bank Account", balance="0"):
    return Platform(
        id=account_id,
        name=name,
        account_type=account_type,
        balance=Decimal(balance),
        is_savings=False,
        color="blue",
        user_id=None,
        created_at=datetime.now(UTC),
    )


@pytest.fixture
def accounts():
    return [
        make_account(1, "BCA"),
        make_account(2, "GoPay", "E-Wallet"),
        make_account(3, "Wallet", "Cash"),
        make_account(4, "Piggy Bank", "Cash"),
    ]


class TestClassify:
    def test_income_label(self):
        assert classify("Income") == TransactionType.INCOME

    def test_transfer_label(self):
        assert classify("Transfer") == TransactionType.TRANSFER

    def test_other_labels_are_expenses(self):
        assert classify("Expense") == TransactionType.EXPENSE
        assert classify("Debt") == TransactionType.EXPENSE
        assert classify("Groceries") == TransactionType.EXPENSE

    def test_match_is_exact(self):
        """Case or whitespace differences fall back to expense."""
        assert classify("income") == TransactionType.EXPENSE
        assert classify(" Income") == TransactionType.EXPENSE
        assert classify("TRANSFER") == TransactionType.EXPENSE


class TestSignedAmount:
    def test_income_is_positive(self):
        assert signed_amount(TransactionType.INCOME, Decimal("8000000")) == Decimal("8000000")

    def test_expense_is_negative(self):
        assert signed_amount(TransactionType.EXPENSE, Decimal("50000")) == Decimal("-50000")

    def test_transfer_source_leg_is_negative(self):
        assert signed_amount(TransactionType.TRANSFER, Decimal("100000")) == Decimal("-100000")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), Decimal("NaN"), Decimal("Infinity"), None])
    def test_rejects_non_positive_or_non_finite(self, amount):
        with pytest.raises(ValidationError):
            signed_amount(TransactionType.EXPENSE, amount)

    def test_rejects_floats(self):
        with pytest.raises(ValidationError):
            signed_amount(TransactionType.INCOME, 10.5)

    @pytest.mark.parametrize(
        "amount, expected",
        [(Decimal("10.005"), Decimal("-10.01")), (Decimal("10.004"), Decimal("-10.00")), (Decimal("7"), Decimal("-7.00"))],
    )
    def test_rounds_to_cents(self, amount, expected):
        assert signed_amount(TransactionType.EXPENSE, amount) == expected

    def test_rejects_amount_that_rounds_to_zero(self):
        with pytest.raises(ValidationError):
            signed_amount(TransactionType.INCOME, Decimal("0.004"))


class TestTransferDestination:
    def test_withdraw_cash_uses_first_cash_account(self, accounts):
        destination = resolve_transfer_destination("Withdraw cash from", accounts[0], accounts)
        assert destination.id == 3

    def test_withdraw_cash_ignores_explicit_destination(self, accounts):
        destination = resolve_transfer_destination("Withdraw cash from", accounts[0], accounts, destination_id=2)
        assert destination.id == 3

    def test_withdraw_cash_without_cash_account(self, accounts):
        no_cash = [acc for acc in accounts if acc.account_type != "Cash"]
        with pytest.raises(ValidationError, match=NO_CASH_ACCOUNT):
            resolve_transfer_destination("Withdraw cash from", no_cash[0], no_cash)

    def test_allocate_uses_selected_account(self, accounts):
        destination = resolve_transfer_destination("Allocate to", accounts[0], accounts, destination_id=2)
        assert destination.name == "GoPay"

    def test_missing_destination(self, accounts):
        with pytest.raises(ValidationError, match="Destination account is required"):
            resolve_transfer_destination("Allocate to", accounts[0], accounts)

    def test_unknown_destination(self, accounts):
        with pytest.raises(NotFoundError):
            resolve_transfer_destination("Allocate to", accounts[0], accounts, destination_id=99)

    def test_self_transfer_rejected(self, accounts):
        with pytest.raises(ValidationError, match="must differ"):
            resolve_transfer_destination("Allocate to", accounts[0], accounts, destination_id=1)

    def test_withdraw_cash_from_cash_account_is_self_transfer(self, accounts):
        with pytest.raises(ValidationError, match="must differ"):
            resolve_transfer_destination("Withdraw cash from", accounts[2], accounts)

    def test_find_cash_account(self, accounts):
        assert find_cash_account(accounts).name == "Wallet"
        assert find_cash_account(accounts[:2]) is None
