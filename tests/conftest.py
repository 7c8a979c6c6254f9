"""Shared pytest fixtures for walletbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from walletbook import config
from walletbook.database.factories import create_memory_database, create_sqlite_database
from walletbook.domain.account import AccountService
from walletbook.domain.budget import BudgetService
from walletbook.domain.category import CategoryService
from walletbook.domain.entities import TransactionDraft
from walletbook.domain.profile import ProfileService
from walletbook.domain.summary import SummaryService
from walletbook.domain.transaction import TransactionService
from walletbook.storage.local import LocalObjectStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the user's real ~/.walletbook."""
    for name in (
        "WALLETBOOK_DB_PATH",
        "WALLETBOOK_DATABASE_URL",
        "WALLETBOOK_STORAGE_DIR",
        "WALLETBOOK_PUBLIC_URL",
        "WALLETBOOK_LOG_LEVEL",
        "WALLETBOOK_USER",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WALLETBOOK_DATA_DIR", str(tmp_path / "data"))
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an in-memory database that records gateway calls."""
    return create_memory_database()


@pytest.fixture
def store(tmp_path):
    """Create an object store in a temporary directory."""
    return LocalObjectStore(tmp_path / "storage", public_url="http://files.test")


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db, store):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db, store=store)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def profile_service(temp_db, store):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db, user_id="user-1", store=store)


@pytest.fixture
def sample_accounts(account_service):
    """Create a bank account, a savings e-wallet and a cash account."""
    return {
        "bank": account_service.create_account("BCA", "Bank Account", balance=Decimal("1000000")),
        "wallet": account_service.create_account(
            "GoPay", "E-Wallet", balance=Decimal("250000"), is_savings=True
        ),
        "cash": account_service.create_account("Wallet", "Cash", balance=Decimal("50000")),
    }


@pytest.fixture
def sample_categories(category_service):
    """Seed the default category tree."""
    category_service.initialize_defaults()
    return category_service.get_category_tree()


@pytest.fixture
def make_draft():
    """Build transaction drafts with sensible defaults."""

    def _make(account_id, category="Expense", amount="50000", **overrides):
        values = {
            "date": date(2024, 6, 15),
            "description": "Test transaction",
            "category": category,
            "subcategory": "Groceries" if category == "Expense" else "",
            "amount": Decimal(amount),
            "account_id": account_id,
        }
        values.update(overrides)
        return TransactionDraft(**values)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
