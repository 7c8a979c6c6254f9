"""Mapper functions to convert SQLAlchemy rows into domain entities.

This layer isolates the conversion logic, so the schema can change without
touching the services.
"""

from decimal import Decimal
from typing import Any, Callable, Optional

from walletbook.domain import entities as domain
from walletbook.database.base import Table
from walletbook.database.models import (
    Base,
    Platform as ORMPlatform,
    Transaction as ORMTransaction,
    Category as ORMCategory,
    Budget as ORMBudget,
    Goal as ORMGoal,
    Debt as ORMDebt,
    Profile as ORMProfile,
    UserSettings as ORMUserSettings,
)


def _decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def platform_to_domain(orm_platform: ORMPlatform) -> domain.Platform:
    """Convert SQLAlchemy Platform model to domain Platform entity."""
    return domain.Platform(
        id=orm_platform.id,
        name=orm_platform.name,
        account_type=orm_platform.account_type,
        balance=_decimal(orm_platform.balance),
        is_savings=bool(orm_platform.is_savings),
        color=orm_platform.color,
        user_id=orm_platform.user_id,
        created_at=orm_platform.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        category=orm_transaction.category,
        subcategory=orm_transaction.subcategory or "",
        amount=_decimal(orm_transaction.amount),
        account_id=orm_transaction.account_id,
        destination_account_id=orm_transaction.destination_account_id,
        receipt_url=orm_transaction.receipt_url,
        struck=bool(orm_transaction.struck),
        user_id=orm_transaction.user_id,
        created_at=orm_transaction.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=orm_category.category_type,
        parent_id=orm_category.parent_id,
        is_default=bool(orm_category.is_default),
        is_active=bool(orm_category.is_active),
        user_id=orm_category.user_id,
        created_at=orm_category.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        category=orm_budget.category,
        subcategory=orm_budget.subcategory,
        amount=_decimal(orm_budget.amount),
        period=orm_budget.period,
        start_date=orm_budget.start_date,
        end_date=orm_budget.end_date,
        is_active=bool(orm_budget.is_active),
        user_id=orm_budget.user_id,
        created_at=orm_budget.created_at,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        name=orm_goal.name,
        target=_decimal(orm_goal.target),
        current=_decimal(orm_goal.current),
        deadline=orm_goal.deadline,
        description=orm_goal.description,
        user_id=orm_goal.user_id,
        created_at=orm_goal.created_at,
    )


def debt_to_domain(orm_debt: ORMDebt) -> domain.Debt:
    """Convert SQLAlchemy Debt model to domain Debt entity."""
    return domain.Debt(
        id=orm_debt.id,
        name=orm_debt.name,
        total=_decimal(orm_debt.total),
        remaining=_decimal(orm_debt.remaining),
        interest=_decimal(orm_debt.interest),
        minimum=_decimal(orm_debt.minimum),
        due_date=orm_debt.due_date,
        description=orm_debt.description,
        user_id=orm_debt.user_id,
        created_at=orm_debt.created_at,
    )


def profile_to_domain(orm_profile: ORMProfile) -> domain.UserProfile:
    """Convert SQLAlchemy Profile model to domain UserProfile entity."""
    return domain.UserProfile(
        id=orm_profile.id,
        user_id=orm_profile.user_id,
        full_name=orm_profile.full_name,
        phone_number=orm_profile.phone_number,
        location=orm_profile.location,
        birth_date=orm_profile.birth_date,
        avatar_url=orm_profile.avatar_url,
    )


def settings_to_domain(orm_settings: ORMUserSettings) -> domain.UserSettings:
    """Convert SQLAlchemy UserSettings model to domain UserSettings entity."""
    return domain.UserSettings(
        id=orm_settings.id,
        user_id=orm_settings.user_id,
        language=orm_settings.language,
        theme=orm_settings.theme,
        payroll_date=orm_settings.payroll_date,
        budget_warning_threshold=orm_settings.budget_warning_threshold,
        updated_at=orm_settings.updated_at,
    )


# ORM model and converter for each gateway table
TABLE_MAPPINGS: dict[Table, tuple[type[Base], Callable[[Any], Any]]] = {
    Table.PLATFORMS: (ORMPlatform, platform_to_domain),
    Table.TRANSACTIONS: (ORMTransaction, transaction_to_domain),
    Table.CATEGORIES: (ORMCategory, category_to_domain),
    Table.BUDGETS: (ORMBudget, budget_to_domain),
    Table.GOALS: (ORMGoal, goal_to_domain),
    Table.DEBTS: (ORMDebt, debt_to_domain),
    Table.PROFILES: (ORMProfile, profile_to_domain),
    Table.SETTINGS: (ORMUserSettings, settings_to_domain),
}


def to_domain(table: Table, row: Optional[Any]) -> Optional[Any]:
    """Convert an ORM row of ``table`` to its domain entity."""
    if row is None:
        return None
    _, converter = TABLE_MAPPINGS[table]
    return converter(row)
