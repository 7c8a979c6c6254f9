"""Tests for balance effects of transactions."""

from datetime import date, datetime, UTC
from decimal import Decimal

from walletbook.domain.balance import (
    apply_transaction_effect,
    merge_effects,
    reverse_effect,
    transaction_effect,
    update_effect,
)
from walletbook.domain.entities import Platform, Transaction


def make_txn(category, amount, account_id=1, destination_account_id=None, txn_id=1):
    return Transaction(
        id=txn_id,
        date=date(2024, 6, 15),
        description="test",
        category=category,
        subcategory="",
        amount=Decimal(amount),
        account_id=account_id,
        destination_account_id=destination_account_id,
        receipt_url=None,
        struck=False,
        user_id=None,
        created_at=datetime.now(UTC),
    )


def make_account(account_id, balance):
    return Platform(
        id=account_id,
        name=f"Account {account_id}",
        account_type="Bank Account",
        balance=Decimal(balance),
        is_savings=False,
        color="blue",
        user_id=None,
        created_at=datetime.now(UTC),
    )


def test_expense_effect_touches_source_only():
    assert transaction_effect(make_txn("Expense", "-50000")) == {1: Decimal("-50000")}


def test_income_effect():
    assert transaction_effect(make_txn("Income", "8000000")) == {1: Decimal("8000000")}


def test_transfer_effect_credits_destination():
    effect = transaction_effect(make_txn("Transfer", "-100000", destination_account_id=2))
    assert effect == {1: Decimal("-100000"), 2: Decimal("100000")}
    # Source is written first
    assert list(effect) == [1, 2]


def test_transfer_without_destination_only_debits_source():
    effect = transaction_effect(make_txn("Transfer", "-100000"))
    assert effect == {1: Decimal("-100000")}


def test_destination_ignored_for_non_transfers():
    effect = transaction_effect(make_txn("Expense", "-100", destination_account_id=2))
    assert effect == {1: Decimal("-100")}


def test_reverse_effect():
    effect = {1: Decimal("-100"), 2: Decimal("100")}
    assert reverse_effect(effect) == {1: Decimal("100"), 2: Decimal("-100")}


def test_merge_effects_drops_zero_changes():
    merged = merge_effects({1: Decimal("-100")}, {1: Decimal("100"), 2: Decimal("5")})
    assert merged == {2: Decimal("5")}


def test_update_effect_changing_amount():
    old = make_txn("Expense", "-50000")
    new = make_txn("Expense", "-80000")
    assert update_effect(old, new) == {1: Decimal("-30000")}


def test_update_effect_moving_account():
    old = make_txn("Expense", "-50000", account_id=1)
    new = make_txn("Expense", "-50000", account_id=2)
    assert update_effect(old, new) == {1: Decimal("50000"), 2: Decimal("-50000")}


def test_update_effect_expense_to_income():
    old = make_txn("Expense", "-50000")
    new = make_txn("Income", "50000")
    assert update_effect(old, new) == {1: Decimal("100000")}


def test_apply_effect_computes_new_balances():
    accounts = [make_account(1, "1000"), make_account(2, "500")]
    balances = apply_transaction_effect({1: Decimal("-100"), 2: Decimal("100")}, accounts)
    assert balances == {1: Decimal("900"), 2: Decimal("600")}


def test_apply_effect_skips_missing_accounts(caplog):
    accounts = [make_account(1, "1000")]
    balances = apply_transaction_effect({1: Decimal("-100"), 7: Decimal("100")}, accounts)
    assert balances == {1: Decimal("900")}
    assert "missing account 7" in caplog.text
