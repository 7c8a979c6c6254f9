"""Tests for SummaryService."""

from datetime import date
from decimal import Decimal

import pytest

from walletbook.domain.entities import Period
from walletbook.domain.profile import ProfileService


@pytest.fixture
def june_history(transaction_service, sample_accounts, make_draft):
    bank, wallet = sample_accounts["bank"], sample_accounts["wallet"]
    transaction_service.create_transaction(make_draft(bank.id, amount="10000", date=date(2024, 5, 31)))
    transaction_service.create_transaction(make_draft(bank.id, amount="20000", date=date(2024, 6, 1)))
    transaction_service.create_transaction(
        make_draft(bank.id, category="Income", amount="5000000", subcategory="Salary", date=date(2024, 6, 10))
    )
    transaction_service.create_transaction(
        make_draft(
            bank.id, category="Transfer", amount="300000", subcategory="Allocate to",
            destination_account_id=wallet.id, date=date(2024, 6, 12),
        )
    )


def test_dashboard_monthly(summary_service, june_history, sample_accounts):
    result = summary_service.dashboard(Period.MONTHLY, reference=date(2024, 6, 15))

    assert result.start_date == date(2024, 6, 1)
    assert result.totals.income_total == Decimal("5000000")
    assert result.totals.expense_total == Decimal("20000")
    # 1,000,000 + 250,000 + 50,000 opening, -30,000 spent, +5,000,000 earned
    assert result.balances.total_balance == Decimal("6270000")
    assert result.balances.savings_balance == Decimal("550000")
    assert result.balances.daily_balance == Decimal("5720000")
    assert result.account_stats[sample_accounts["wallet"].id].income == Decimal("300000")


def test_dashboard_uses_payroll_date_from_settings(temp_db, summary_service, june_history):
    ProfileService(temp_db).update_settings(payroll_date=11)

    result = summary_service.dashboard("monthly", reference=date(2024, 6, 15))

    assert result.start_date == date(2024, 6, 11)
    assert result.totals.income_total == 0


def test_dashboard_without_settings_uses_first_of_month(summary_service, june_history):
    result = summary_service.dashboard("monthly", reference=date(2024, 6, 15))
    assert result.start_date == date(2024, 6, 1)


def test_other_settings_keep_month_on_the_first(temp_db, summary_service, june_history):
    before = summary_service.dashboard("monthly", reference=date(2024, 6, 15))
    ProfileService(temp_db).update_settings(theme="dark")

    after = summary_service.dashboard("monthly", reference=date(2024, 6, 15))

    assert after.start_date == date(2024, 6, 1)
    assert after.totals.expense_total == before.totals.expense_total == Decimal("20000")


def test_explicit_month_start_overrides_settings(temp_db, summary_service, june_history):
    ProfileService(temp_db).update_settings(payroll_date=11)

    result = summary_service.dashboard("monthly", reference=date(2024, 6, 15), month_start_day=1)

    assert result.start_date == date(2024, 6, 1)


def test_dashboard_weekly(summary_service, june_history):
    result = summary_service.dashboard("weekly", reference=date(2024, 6, 15))

    assert result.start_date == date(2024, 6, 9)
    assert result.totals.income_total == Decimal("5000000")
    assert result.totals.expense_total == 0
