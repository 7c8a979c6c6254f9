"""Domain layer for walletbook application."""

from walletbook.domain.account import AccountService
from walletbook.domain.budget import BudgetService
from walletbook.domain.category import CategoryService
from walletbook.domain.debt import DebtService
from walletbook.domain.goal import GoalService
from walletbook.domain.profile import ProfileService
from walletbook.domain.summary import SummaryService
from walletbook.domain.transaction import TransactionService

__all__ = [
    "AccountService",
    "BudgetService",
    "CategoryService",
    "DebtService",
    "GoalService",
    "ProfileService",
    "SummaryService",
    "TransactionService",
]
