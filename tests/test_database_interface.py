"""Tests for the row-store gateway implementations."""

from datetime import date
from decimal import Decimal

import pytest

from walletbook.database.base import Table
from walletbook.domain.errors import StoreError


@pytest.fixture(params=["sqlite", "memory"])
def db(request, temp_db, memory_db):
    """Run each test against both gateway implementations."""
    return temp_db if request.param == "sqlite" else memory_db


def add_account(db, name, balance="0", user_id=None):
    return db.insert_row(
        Table.PLATFORMS,
        {"name": name, "account_type": "Bank Account", "balance": Decimal(balance)},
        user_id=user_id,
    )


def test_insert_and_get_account(db):
    account = add_account(db, "BCA", "1500000.50")

    fetched = db.get_row(Table.PLATFORMS, account.id)
    assert fetched.name == "BCA"
    assert fetched.balance == Decimal("1500000.50")
    assert fetched.is_savings is False
    assert fetched.color == "blue"
    assert fetched.created_at is not None


def test_transaction_round_trip_keeps_sign_and_references(db):
    txn = db.insert_row(
        Table.TRANSACTIONS,
        {
            "date": date(2024, 6, 1),
            "description": "Top up",
            "category": "Transfer",
            "subcategory": "Allocate to",
            "amount": Decimal("-250000"),
            "account_id": 1,
            "destination_account_id": 2,
        },
    )

    fetched = db.get_row(Table.TRANSACTIONS, txn.id)
    assert fetched.amount == Decimal("-250000")
    assert fetched.date == date(2024, 6, 1)
    assert fetched.destination_account_id == 2
    assert fetched.receipt_url is None
    assert fetched.struck is False


def test_transactions_listed_newest_first(db):
    for day in (3, 1, 2):
        db.insert_row(
            Table.TRANSACTIONS,
            {
                "date": date(2024, 6, day),
                "category": "Expense",
                "amount": Decimal("-1"),
                "account_id": 1,
            },
        )

    assert [t.date.day for t in db.list_rows(Table.TRANSACTIONS)] == [3, 2, 1]


def test_list_filters_by_field(db):
    add_account(db, "BCA")
    db.insert_row(Table.PLATFORMS, {"name": "Wallet", "account_type": "Cash"})

    cash = db.list_rows(Table.PLATFORMS, account_type="Cash")
    assert [a.name for a in cash] == ["Wallet"]


def test_unknown_filter_returns_empty(db):
    add_account(db, "BCA")
    assert db.list_rows(Table.PLATFORMS, nickname="BCA") == []


def test_unknown_field_fails_insert(db):
    assert db.insert_row(Table.PLATFORMS, {"name": "BCA", "account_type": "Cash", "nickname": "x"}) is None


def test_update_row(db):
    account = add_account(db, "BCA", "100")

    updated = db.update_row(Table.PLATFORMS, account.id, {"balance": Decimal("250")})

    assert updated.balance == Decimal("250")
    assert db.get_row(Table.PLATFORMS, account.id).balance == Decimal("250")


def test_update_missing_row_returns_none(db):
    assert db.update_row(Table.PLATFORMS, 999, {"balance": Decimal("1")}) is None


def test_delete_row(db):
    account = add_account(db, "BCA")

    assert db.delete_row(Table.PLATFORMS, account.id) is True
    assert db.get_row(Table.PLATFORMS, account.id) is None
    assert db.delete_row(Table.PLATFORMS, account.id) is False


def test_rows_are_scoped_to_user(db):
    mine = add_account(db, "Mine", user_id="alice")
    add_account(db, "Theirs", user_id="bob")

    assert [a.name for a in db.list_rows(Table.PLATFORMS, user_id="alice")] == ["Mine"]
    assert db.get_row(Table.PLATFORMS, mine.id, user_id="bob") is None
    assert db.update_row(Table.PLATFORMS, mine.id, {"name": "Stolen"}, user_id="bob") is None
    assert db.delete_row(Table.PLATFORMS, mine.id, user_id="bob") is False


def test_global_categories_visible_to_every_user(db):
    shared = db.insert_row(Table.CATEGORIES, {"name": "Expense", "category_type": "expense"})
    db.insert_row(Table.CATEGORIES, {"name": "Pets", "category_type": "expense"}, user_id="alice")

    assert {c.name for c in db.list_rows(Table.CATEGORIES, user_id="alice")} == {"Expense", "Pets"}
    assert [c.name for c in db.list_rows(Table.CATEGORIES, user_id="bob")] == ["Expense"]
    assert db.get_row(Table.CATEGORIES, shared.id, user_id="bob") is not None


def test_global_categories_only_changed_without_user(db):
    shared = db.insert_row(Table.CATEGORIES, {"name": "Groceries", "category_type": "expense"})

    assert db.update_row(Table.CATEGORIES, shared.id, {"name": "Alice Food"}, user_id="alice") is None
    assert db.delete_row(Table.CATEGORIES, shared.id, user_id="alice") is False
    assert db.get_row(Table.CATEGORIES, shared.id, user_id="bob").name == "Groceries"


def test_atomic_commits_together(db):
    with db.atomic():
        account = add_account(db, "BCA", "100")
        db.update_row(Table.PLATFORMS, account.id, {"balance": Decimal("50")})

    assert db.get_row(Table.PLATFORMS, account.id).balance == Decimal("50")


def test_atomic_rolls_back_on_error(db):
    account = add_account(db, "BCA", "100")

    with pytest.raises(RuntimeError):
        with db.atomic():
            db.update_row(Table.PLATFORMS, account.id, {"balance": Decimal("0")})
            add_account(db, "GoPay")
            raise RuntimeError("boom")

    assert db.get_row(Table.PLATFORMS, account.id).balance == Decimal("100")
    assert [a.name for a in db.list_rows(Table.PLATFORMS)] == ["BCA"]


def test_nested_atomic_joins_outer(db):
    account = add_account(db, "BCA", "100")

    with pytest.raises(RuntimeError):
        with db.atomic():
            with db.atomic():
                db.update_row(Table.PLATFORMS, account.id, {"balance": Decimal("0")})
            raise RuntimeError("boom")

    assert db.get_row(Table.PLATFORMS, account.id).balance == Decimal("100")


def test_settings_defaults(db):
    settings = db.insert_row(Table.SETTINGS, {}, user_id="alice")

    assert settings.language == "id"
    assert settings.theme == "system"
    assert settings.budget_warning_threshold == 80


def test_failed_commit_raises_store_error(temp_db, monkeypatch):
    session = temp_db._get_session()

    def broken_commit():
        from sqlalchemy.exc import OperationalError

        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    with pytest.raises(StoreError):
        with temp_db.atomic():
            add_account(temp_db, "BCA")
            monkeypatch.setattr(session, "commit", broken_commit)

    assert temp_db.list_rows(Table.PLATFORMS) == []
