"""Tests for period start computation."""

from datetime import date

import pytest

from walletbook.domain.periods import calendar_month_bounds, period_start


def test_daily_starts_on_reference():
    assert period_start("daily", date(2024, 6, 15)) == date(2024, 6, 15)


@pytest.mark.parametrize(
    "reference, expected",
    [
        (date(2024, 6, 15), date(2024, 6, 9)),  # Saturday
        (date(2024, 6, 16), date(2024, 6, 16)),  # Sunday
        (date(2024, 6, 17), date(2024, 6, 16)),  # Monday
    ],
)
def test_weekly_starts_on_sunday(reference, expected):
    assert period_start("weekly", reference) == expected


def test_monthly_starts_on_first():
    assert period_start("monthly", date(2024, 6, 15)) == date(2024, 6, 1)


def test_yearly_starts_on_january_first():
    assert period_start("yearly", date(2024, 6, 15)) == date(2024, 1, 1)


def test_monthly_with_payroll_day_after_reference():
    assert period_start("monthly", date(2024, 6, 15), month_start_day=25) == date(2024, 5, 25)


def test_monthly_with_payroll_day_before_reference():
    assert period_start("monthly", date(2024, 6, 27), month_start_day=25) == date(2024, 6, 25)


def test_payroll_day_clamped_to_short_month():
    # February 2024 has 29 days
    assert period_start("monthly", date(2024, 3, 10), month_start_day=31) == date(2024, 2, 29)
    assert period_start("monthly", date(2024, 2, 29), month_start_day=31) == date(2024, 2, 29)


def test_unknown_period():
    with pytest.raises(ValueError):
        period_start("fortnightly", date(2024, 6, 15))


def test_calendar_month_bounds():
    assert calendar_month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
