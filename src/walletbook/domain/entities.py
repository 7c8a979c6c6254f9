"""Domain model entities for walletbook.

These are pure data classes representing business concepts, independent of
database schema. Transactions reference accounts by stable ID, so renaming an
account only touches the account row.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kinds of money containers a user can hold."""

    BANK = "Bank Account"
    E_WALLET = "E-Wallet"
    CASH = "Cash"


class TransactionType(str, Enum):
    """Semantic transaction type, derived from the category label."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class CategoryType(str, Enum):
    """Category type."""

    EXPENSE = "expense"
    INCOME = "income"
    TRANSFER = "transfer"
    DEBT = "debt"


class Period(str, Enum):
    """Aggregation window for dashboard totals."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BudgetState(str, Enum):
    """Spend-vs-budget classification."""

    OK = "ok"
    WARNING = "warning"
    OVER = "over"


# Category labels carried by transactions
INCOME_CATEGORY = "Income"
EXPENSE_CATEGORY = "Expense"
TRANSFER_CATEGORY = "Transfer"
DEBT_CATEGORY = "Debt"

# Fixed subcategories of the synthetic Transfer category
ALLOCATE_TO = "Allocate to"
WITHDRAW_CASH = "Withdraw cash from"
TRANSFER_SUBCATEGORIES = (ALLOCATE_TO, WITHDRAW_CASH)


@dataclass(frozen=True)
class Platform:
    """Account ("platform") domain entity."""

    id: int
    name: str
    account_type: str
    balance: Decimal
    is_savings: bool
    color: str
    user_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is signed: negative for outflows (expenses and the source leg
    of a transfer), positive for income.
    """

    id: int
    date: date
    description: str
    category: str
    subcategory: str
    amount: Decimal
    account_id: int
    destination_account_id: Optional[int]
    receipt_url: Optional[str]
    struck: bool
    user_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class TransactionDraft:
    """A transaction as entered, before classification and signing.

    ``amount`` is the positive magnitude typed by the user.
    """

    date: date
    description: str
    category: str
    subcategory: str
    amount: Decimal
    account_id: int
    destination_account_id: Optional[int] = None


@dataclass(frozen=True)
class Category:
    """Category domain entity with a single level of nesting."""

    id: int
    name: str
    category_type: str
    parent_id: Optional[int]
    is_default: bool
    is_active: bool
    user_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Budget:
    """Monthly budget for one expense subcategory."""

    id: int
    category: str
    subcategory: str
    amount: Decimal
    period: str
    start_date: date
    end_date: date
    is_active: bool
    user_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Goal:
    """Savings goal."""

    id: int
    name: str
    target: Decimal
    current: Decimal
    deadline: Optional[date]
    description: Optional[str]
    user_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Debt:
    """Outstanding debt."""

    id: int
    name: str
    total: Decimal
    remaining: Decimal
    interest: Decimal
    minimum: Decimal
    due_date: Optional[date]
    description: Optional[str]
    user_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class UserProfile:
    """Display fields for a user."""

    id: int
    user_id: Optional[str]
    full_name: Optional[str]
    phone_number: Optional[str]
    location: Optional[str]
    birth_date: Optional[date]
    avatar_url: Optional[str]


@dataclass(frozen=True)
class UserSettings:
    """Per-user preferences."""

    id: Optional[int]
    user_id: Optional[str]
    language: str = "id"
    theme: str = "system"
    payroll_date: Optional[int] = None
    budget_warning_threshold: int = 80
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CategoryTreeNode:
    """Root category with its subcategories, as shown in pickers."""

    name: str
    category_type: str
    id: Optional[int] = None
    is_default: bool = False
    subcategories: tuple["Category | str", ...] = ()

    @property
    def subcategory_names(self) -> tuple[str, ...]:
        return tuple(
            sub if isinstance(sub, str) else sub.name for sub in self.subcategories
        )


@dataclass(frozen=True)
class PeriodTotals:
    """Income and expense totals for a period."""

    income_total: Decimal
    expense_total: Decimal


@dataclass(frozen=True)
class BalanceOverview:
    """Balance split across all accounts."""

    total_balance: Decimal
    savings_balance: Decimal
    daily_balance: Decimal


@dataclass(frozen=True)
class AccountStats:
    """Income/expense attributed to one account."""

    income: Decimal
    expense: Decimal
    transaction_count: int


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the dashboard shows for a period."""

    period: Period
    start_date: date
    reference_date: date
    totals: PeriodTotals
    balances: BalanceOverview
    account_stats: dict[int, AccountStats] = field(default_factory=dict)


@dataclass(frozen=True)
class BudgetStatus:
    """A budget with its spend recomputed from transactions."""

    budget: Budget
    spent: Decimal
    percentage: Decimal
    status: BudgetState

    @property
    def remaining(self) -> Decimal:
        return max(Decimal("0"), self.budget.amount - self.spent)
