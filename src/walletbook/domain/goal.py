"""Savings goal domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from walletbook.database.base import Database, Table
from walletbook.domain.entities import Goal
from walletbook.domain.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    record_not_found,
    store_failed,
)


def progress_percentage(goal: Goal) -> Decimal:
    """Share of the target already saved, in percent."""
    if goal.target <= 0:
        return Decimal("0")
    return goal.current / goal.target * 100


def _validate(name: str, target: Decimal, current: Decimal) -> None:
    if not (name or "").strip():
        raise ValidationError("Goal name is required")
    if target is None or target <= 0:
        raise ValidationError("Goal target must be a positive number")
    if current is None or current < 0:
        raise ValidationError("Goal progress cannot be negative")


class GoalService:
    """Service for managing savings goals."""

    def __init__(self, db: Database, user_id: Optional[str] = None):
        self.db = db
        self.user_id = user_id

    def create_goal(
        self,
        name: str,
        target: Decimal,
        current: Decimal = Decimal("0"),
        deadline: Optional[date] = None,
        description: Optional[str] = None,
    ) -> Goal:
        """Create a savings goal.

        Raises:
            ValidationError: If name is empty, target is not positive or
                current is negative
        """
        _validate(name, target, current)
        goal = self.db.insert_row(
            Table.GOALS,
            {
                "name": name.strip(),
                "target": target,
                "current": current,
                "deadline": deadline,
                "description": description,
            },
            user_id=self.user_id,
        )
        if goal is None:
            raise StoreError(store_failed("save goal"))
        return goal

    def get_goal(self, goal_id: int) -> Optional[Goal]:
        return self.db.get_row(Table.GOALS, goal_id, user_id=self.user_id)

    def require_goal(self, goal_id: int) -> Goal:
        goal = self.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(record_not_found("Goal", goal_id))
        return goal

    def list_goals(self) -> list[Goal]:
        """List goals ordered by deadline."""
        return self.db.list_rows(Table.GOALS, user_id=self.user_id)

    def update_goal(
        self,
        goal_id: int,
        name: Optional[str] = None,
        target: Optional[Decimal] = None,
        current: Optional[Decimal] = None,
        deadline: Optional[date] = None,
        description: Optional[str] = None,
    ) -> Goal:
        """Update a goal. Fields left as None keep their value."""
        goal = self.require_goal(goal_id)
        values = {
            "name": (name if name is not None else goal.name).strip(),
            "target": target if target is not None else goal.target,
            "current": current if current is not None else goal.current,
            "deadline": deadline if deadline is not None else goal.deadline,
            "description": description if description is not None else goal.description,
        }
        _validate(values["name"], values["target"], values["current"])

        updated = self.db.update_row(Table.GOALS, goal_id, values, user_id=self.user_id)
        if updated is None:
            raise StoreError(store_failed(f"update goal {goal_id}"))
        return updated

    def delete_goal(self, goal_id: int) -> None:
        self.require_goal(goal_id)
        if not self.db.delete_row(Table.GOALS, goal_id, user_id=self.user_id):
            raise StoreError(store_failed(f"delete goal {goal_id}"))
