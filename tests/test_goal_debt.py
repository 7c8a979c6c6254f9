"""Tests for savings goals and debts."""

from datetime import date
from decimal import Decimal

import pytest

from walletbook.domain import debt as debt_module
from walletbook.domain import goal as goal_module
from walletbook.domain.debt import DebtService
from walletbook.domain.errors import NotFoundError, ValidationError
from walletbook.domain.goal import GoalService


@pytest.fixture
def goal_service(temp_db):
    return GoalService(temp_db)


@pytest.fixture
def debt_service(temp_db):
    return DebtService(temp_db)


class TestGoals:
    def test_create_and_progress(self, goal_service):
        goal = goal_service.create_goal(
            "Emergency Fund", Decimal("10000000"), current=Decimal("2500000"), deadline=date(2025, 1, 1)
        )

        assert goal.name == "Emergency Fund"
        assert goal_module.progress_percentage(goal) == Decimal("25")

    @pytest.mark.parametrize(
        "name, target, current",
        [
            ("", Decimal("100"), Decimal("0")),
            ("Laptop", Decimal("0"), Decimal("0")),
            ("Laptop", Decimal("100"), Decimal("-1")),
        ],
    )
    def test_create_validates(self, goal_service, name, target, current):
        with pytest.raises(ValidationError):
            goal_service.create_goal(name, target, current=current)

    def test_update_keeps_unset_fields(self, goal_service):
        goal = goal_service.create_goal("Laptop", Decimal("15000000"), description="New laptop")

        updated = goal_service.update_goal(goal.id, current=Decimal("5000000"))

        assert updated.current == Decimal("5000000")
        assert updated.target == Decimal("15000000")
        assert updated.description == "New laptop"

    def test_list_ordered_by_deadline(self, goal_service):
        goal_service.create_goal("Later", Decimal("1"), deadline=date(2026, 1, 1))
        goal_service.create_goal("Sooner", Decimal("1"), deadline=date(2025, 1, 1))

        assert [g.name for g in goal_service.list_goals()] == ["Sooner", "Later"]

    def test_delete(self, goal_service):
        goal = goal_service.create_goal("Laptop", Decimal("1"))
        goal_service.delete_goal(goal.id)

        assert goal_service.get_goal(goal.id) is None
        with pytest.raises(NotFoundError, match="Goal"):
            goal_service.delete_goal(goal.id)


class TestDebts:
    def test_remaining_defaults_to_total(self, debt_service):
        debt = debt_service.create_debt("Car Loan", Decimal("50000000"), interest=Decimal("5.5"))

        assert debt.remaining == Decimal("50000000")
        assert debt.interest == Decimal("5.5")
        assert debt_module.progress_percentage(debt) == 0

    def test_progress_is_share_paid(self, debt_service):
        debt = debt_service.create_debt("Card", Decimal("2000000"), remaining=Decimal("500000"))

        assert debt_module.progress_percentage(debt) == Decimal("75")

    @pytest.mark.parametrize(
        "values",
        [
            {"total": Decimal("0")},
            {"remaining": Decimal("-1")},
            {"remaining": Decimal("200")},
            {"interest": Decimal("-1")},
            {"minimum": Decimal("-1")},
        ],
    )
    def test_create_validates(self, debt_service, values):
        kwargs = {"total": Decimal("100"), **values}
        with pytest.raises(ValidationError):
            debt_service.create_debt("Card", **kwargs)

    def test_update_payment(self, debt_service):
        debt = debt_service.create_debt("Card", Decimal("2000000"))

        updated = debt_service.update_debt(debt.id, remaining=Decimal("1500000"), due_date=date(2024, 7, 1))

        assert updated.remaining == Decimal("1500000")
        assert updated.due_date == date(2024, 7, 1)

    def test_update_cannot_exceed_total(self, debt_service):
        debt = debt_service.create_debt("Card", Decimal("100"))
        with pytest.raises(ValidationError):
            debt_service.update_debt(debt.id, remaining=Decimal("101"))

    def test_delete_missing(self, debt_service):
        with pytest.raises(NotFoundError, match="Debt 42 not found"):
            debt_service.delete_debt(42)
