"""Period totals, balance overview and per-account statistics."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from walletbook.database.base import Database, Table
from walletbook.domain.classification import classify
from walletbook.domain.entities import (
    AccountStats,
    BalanceOverview,
    DashboardSummary,
    Period,
    PeriodTotals,
    Platform,
    Transaction,
    TransactionType,
)
from walletbook.domain.periods import period_start

ZERO = Decimal("0")


def summarize(
    transactions: Sequence[Transaction],
    period: Period | str,
    reference: date,
    month_start_day: int = 1,
) -> PeriodTotals:
    """Income and expense totals from the start of the period onwards.

    The window has no end bound. Transfers count towards neither total.
    """
    start = period_start(period, reference, month_start_day)
    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.date < start:
            continue
        txn_type = classify(txn.category)
        if txn_type == TransactionType.INCOME:
            income += txn.amount
        elif txn_type == TransactionType.EXPENSE:
            expense += abs(txn.amount)
    return PeriodTotals(income_total=income, expense_total=expense)


def balance_overview(accounts: Sequence[Platform]) -> BalanceOverview:
    """Split total balance into savings and spendable ("daily") money."""
    total = sum((acc.balance for acc in accounts), ZERO)
    savings = sum((acc.balance for acc in accounts if acc.is_savings), ZERO)
    return BalanceOverview(
        total_balance=total,
        savings_balance=savings,
        daily_balance=total - savings,
    )


def account_stats(transactions: Sequence[Transaction], account_id: int) -> AccountStats:
    """Income and expense attributed to one account.

    Income is the account's own income plus transfers it received; expense is
    its own spending plus transfers it sent. Each transfer leg is counted once
    for each side.
    """
    income = ZERO
    expense = ZERO
    count = 0
    for txn in transactions:
        is_source = txn.account_id == account_id
        is_destination = txn.destination_account_id == account_id
        if not (is_source or is_destination):
            continue
        count += 1
        txn_type = classify(txn.category)
        if txn_type == TransactionType.INCOME and is_source:
            income += abs(txn.amount)
        elif txn_type == TransactionType.EXPENSE and is_source:
            expense += abs(txn.amount)
        elif txn_type == TransactionType.TRANSFER:
            if is_destination:
                income += abs(txn.amount)
            if is_source:
                expense += abs(txn.amount)
    return AccountStats(income=income, expense=expense, transaction_count=count)


class SummaryService:
    """Service for building dashboard summaries."""

    def __init__(self, db: Database, user_id: Optional[str] = None):
        """Initialize summary service.

        Args:
            db: Database instance
            user_id: Optional user scope
        """
        self.db = db
        self.user_id = user_id

    def _payroll_day(self) -> int:
        """The payroll day the user chose, or the 1st when none was set."""
        rows = self.db.list_rows(Table.SETTINGS, user_id=self.user_id)
        if rows and rows[0].payroll_date is not None:
            return rows[0].payroll_date
        return 1

    def dashboard(
        self,
        period: Period | str = Period.MONTHLY,
        reference: Optional[date] = None,
        month_start_day: Optional[int] = None,
    ) -> DashboardSummary:
        """Build the dashboard summary for a period.

        Accounts and transactions are loaded in full before anything is
        computed, so totals never reflect a partial load.

        Args:
            period: daily, weekly, monthly or yearly
            reference: Date the period is anchored on (defaults to today)
            month_start_day: Day a monthly period starts on. Defaults to the
                user's payroll date when one was set, else the 1st.
        """
        period = Period(period)
        reference = reference or date.today()
        if month_start_day is None:
            month_start_day = self._payroll_day()

        accounts = self.db.list_rows(Table.PLATFORMS, user_id=self.user_id)
        transactions = self.db.list_rows(Table.TRANSACTIONS, user_id=self.user_id)

        return DashboardSummary(
            period=period,
            start_date=period_start(period, reference, month_start_day),
            reference_date=reference,
            totals=summarize(transactions, period, reference, month_start_day),
            balances=balance_overview(accounts),
            account_stats={acc.id: account_stats(transactions, acc.id) for acc in accounts},
        )
