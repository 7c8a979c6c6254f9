"""Debt domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from walletbook.database.base import Database, Table
from walletbook.domain.entities import Debt
from walletbook.domain.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    record_not_found,
    store_failed,
)


def progress_percentage(debt: Debt) -> Decimal:
    """Share of the debt already paid off, in percent."""
    if debt.total <= 0:
        return Decimal("0")
    return (debt.total - debt.remaining) / debt.total * 100


def _validate(name: str, total: Decimal, remaining: Decimal, interest: Decimal, minimum: Decimal) -> None:
    if not (name or "").strip():
        raise ValidationError("Debt name is required")
    if total is None or total <= 0:
        raise ValidationError("Debt total must be a positive number")
    if remaining is None or remaining < 0:
        raise ValidationError("Remaining amount cannot be negative")
    if remaining > total:
        raise ValidationError("Remaining amount cannot exceed the total")
    if interest < 0:
        raise ValidationError("Interest cannot be negative")
    if minimum < 0:
        raise ValidationError("Minimum payment cannot be negative")


class DebtService:
    """Service for managing debts."""

    def __init__(self, db: Database, user_id: Optional[str] = None):
        self.db = db
        self.user_id = user_id

    def create_debt(
        self,
        name: str,
        total: Decimal,
        remaining: Optional[Decimal] = None,
        interest: Decimal = Decimal("0"),
        minimum: Decimal = Decimal("0"),
        due_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> Debt:
        """Create a debt.

        Args:
            name: Debt name
            total: Amount originally owed
            remaining: Amount still owed (defaults to the total)
            interest: Interest rate in percent
            minimum: Minimum payment
            due_date: Next payment due date
            description: Free-form note

        Raises:
            ValidationError: If the amounts are inconsistent
        """
        if remaining is None:
            remaining = total
        _validate(name, total, remaining, interest, minimum)
        debt = self.db.insert_row(
            Table.DEBTS,
            {
                "name": name.strip(),
                "total": total,
                "remaining": remaining,
                "interest": interest,
                "minimum": minimum,
                "due_date": due_date,
                "description": description,
            },
            user_id=self.user_id,
        )
        if debt is None:
            raise StoreError(store_failed("save debt"))
        return debt

    def get_debt(self, debt_id: int) -> Optional[Debt]:
        return self.db.get_row(Table.DEBTS, debt_id, user_id=self.user_id)

    def require_debt(self, debt_id: int) -> Debt:
        debt = self.get_debt(debt_id)
        if debt is None:
            raise NotFoundError(record_not_found("Debt", debt_id))
        return debt

    def list_debts(self) -> list[Debt]:
        """List debts ordered by due date."""
        return self.db.list_rows(Table.DEBTS, user_id=self.user_id)

    def update_debt(
        self,
        debt_id: int,
        name: Optional[str] = None,
        total: Optional[Decimal] = None,
        remaining: Optional[Decimal] = None,
        interest: Optional[Decimal] = None,
        minimum: Optional[Decimal] = None,
        due_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> Debt:
        """Update a debt. Fields left as None keep their value."""
        debt = self.require_debt(debt_id)
        values = {
            "name": (name if name is not None else debt.name).strip(),
            "total": total if total is not None else debt.total,
            "remaining": remaining if remaining is not None else debt.remaining,
            "interest": interest if interest is not None else debt.interest,
            "minimum": minimum if minimum is not None else debt.minimum,
            "due_date": due_date if due_date is not None else debt.due_date,
            "description": description if description is not None else debt.description,
        }
        _validate(values["name"], values["total"], values["remaining"], values["interest"], values["minimum"])

        updated = self.db.update_row(Table.DEBTS, debt_id, values, user_id=self.user_id)
        if updated is None:
            raise StoreError(store_failed(f"update debt {debt_id}"))
        return updated

    def delete_debt(self, debt_id: int) -> None:
        self.require_debt(debt_id)
        if not self.db.delete_row(Table.DEBTS, debt_id, user_id=self.user_id):
            raise StoreError(store_failed(f"delete debt {debt_id}"))
