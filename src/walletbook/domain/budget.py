"""Budget domain service.

Budgets cap monthly spending on one expense subcategory. Spending is never
stored; it is recomputed from transactions every time statuses are read.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from walletbook.database.base import Database, Table
from walletbook.domain.entities import (
    EXPENSE_CATEGORY,
    Budget,
    BudgetState,
    BudgetStatus,
    Transaction,
)
from walletbook.domain.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    budget_not_found,
    store_failed,
)
from walletbook.domain.periods import calendar_month_bounds

logger = logging.getLogger(__name__)

DEFAULT_WARNING_THRESHOLD = 80


def compute_spent(budget: Budget, transactions: Sequence[Transaction], reference: date) -> Decimal:
    """Sum of expenses in the budget's subcategory during the reference month."""
    start, end = calendar_month_bounds(reference)
    return sum(
        (
            abs(txn.amount)
            for txn in transactions
            if txn.category == EXPENSE_CATEGORY
            and txn.subcategory == budget.subcategory
            and start <= txn.date <= end
        ),
        Decimal("0"),
    )


def budget_state(percentage: Decimal, warning_threshold: int = DEFAULT_WARNING_THRESHOLD) -> BudgetState:
    """Classify a spent percentage.

    >>> budget_state(Decimal("80"))
    <BudgetState.WARNING: 'warning'>
    """
    if percentage >= 100:
        return BudgetState.OVER
    if percentage >= warning_threshold:
        return BudgetState.WARNING
    return BudgetState.OK


def budget_status(
    budget: Budget,
    transactions: Sequence[Transaction],
    reference: date,
    warning_threshold: int = DEFAULT_WARNING_THRESHOLD,
) -> BudgetStatus:
    """Recompute spend, percentage and state for one budget."""
    spent = compute_spent(budget, transactions, reference)
    percentage = spent / budget.amount * 100 if budget.amount > 0 else Decimal("0")
    return BudgetStatus(
        budget=budget,
        spent=spent,
        percentage=percentage,
        status=budget_state(percentage, warning_threshold),
    )


class BudgetService:
    """Service for managing budgets."""

    def __init__(self, db: Database, user_id: Optional[str] = None):
        self.db = db
        self.user_id = user_id

    def _validate(self, subcategory: str, amount: Decimal) -> None:
        if not (subcategory or "").strip():
            raise ValidationError("Budget subcategory is required")
        if amount is None or amount <= 0:
            raise ValidationError("Budget amount must be a positive number")

    def create_budget(
        self,
        subcategory: str,
        amount: Decimal,
        category: str = EXPENSE_CATEGORY,
        reference: Optional[date] = None,
    ) -> Budget:
        """Create a monthly budget covering the month of ``reference``.

        Args:
            subcategory: Expense subcategory the budget tracks
            amount: Monthly limit, must be positive
            category: Category label the budget belongs to
            reference: Any date in the budget's month (defaults to today)

        Returns:
            Created budget
        """
        self._validate(subcategory, amount)
        start, end = calendar_month_bounds(reference or date.today())
        budget = self.db.insert_row(
            Table.BUDGETS,
            {
                "category": category,
                "subcategory": subcategory.strip(),
                "amount": amount,
                "period": "monthly",
                "start_date": start,
                "end_date": end,
            },
            user_id=self.user_id,
        )
        if budget is None:
            raise StoreError(store_failed("save budget"))
        return budget

    def get_budget(self, budget_id: int) -> Optional[Budget]:
        return self.db.get_row(Table.BUDGETS, budget_id, user_id=self.user_id)

    def require_budget(self, budget_id: int) -> Budget:
        """Get budget by ID or raise NotFoundError."""
        budget = self.get_budget(budget_id)
        if budget is None:
            raise NotFoundError(budget_not_found(budget_id))
        return budget

    def list_budgets(self, active_only: bool = True) -> list[Budget]:
        """List budgets ordered by category."""
        if active_only:
            return self.db.list_rows(Table.BUDGETS, user_id=self.user_id, is_active=True)
        return self.db.list_rows(Table.BUDGETS, user_id=self.user_id)

    def update_budget(
        self,
        budget_id: int,
        subcategory: Optional[str] = None,
        amount: Optional[Decimal] = None,
        reference: Optional[date] = None,
    ) -> Budget:
        """Update a budget and move it to the month of ``reference``.

        Raises:
            NotFoundError: If budget not found
            ValidationError: If the new values are invalid
        """
        budget = self.require_budget(budget_id)
        subcategory = subcategory if subcategory is not None else budget.subcategory
        amount = amount if amount is not None else budget.amount
        self._validate(subcategory, amount)

        start, end = calendar_month_bounds(reference or date.today())
        updated = self.db.update_row(
            Table.BUDGETS,
            budget_id,
            {"subcategory": subcategory.strip(), "amount": amount, "start_date": start, "end_date": end},
            user_id=self.user_id,
        )
        if updated is None:
            raise StoreError(store_failed(f"update budget {budget_id}"))
        return updated

    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget.

        Raises:
            NotFoundError: If budget not found
        """
        self.require_budget(budget_id)
        if not self.db.delete_row(Table.BUDGETS, budget_id, user_id=self.user_id):
            raise StoreError(store_failed(f"delete budget {budget_id}"))
        logger.info("Deleted budget %s", budget_id)

    def warning_threshold(self) -> int:
        """The user's warning threshold, or the default when unset."""
        rows = self.db.list_rows(Table.SETTINGS, user_id=self.user_id)
        return rows[0].budget_warning_threshold if rows else DEFAULT_WARNING_THRESHOLD

    def budget_statuses(
        self,
        transactions: Optional[Sequence[Transaction]] = None,
        reference: Optional[date] = None,
    ) -> list[BudgetStatus]:
        """Recompute spending for every active budget.

        Args:
            transactions: Transactions to measure against (loaded when omitted)
            reference: Date whose calendar month is measured (defaults to today)

        Returns:
            One status per active budget, in budget order
        """
        if transactions is None:
            transactions = self.db.list_rows(Table.TRANSACTIONS, user_id=self.user_id)
        reference = reference or date.today()
        threshold = self.warning_threshold()
        return [
            budget_status(budget, transactions, reference, threshold)
            for budget in self.list_budgets()
        ]
