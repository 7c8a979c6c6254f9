"""Tests for date parser with relative dates."""

from datetime import date, timedelta

import pytest
from dateutil.relativedelta import relativedelta

from walletbook.utils.date_parser import parse_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_iso_keeps_month_first():
    """Test that ISO dates are not read day-first."""
    assert parse_date("2024-06-05") == date(2024, 6, 5)


def test_parse_written_date():
    """Test parsing a written-out date."""
    assert parse_date("15 January 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month'."""
    expected = (date.today() - relativedelta(months=1)).replace(day=1)
    assert parse_date("last month") == expected


def test_parse_this_month():
    """Test parsing 'this month'."""
    assert parse_date("this month") == date.today().replace(day=1)


def test_parse_this_year():
    """Test parsing 'this year'."""
    assert parse_date("this year") == date(date.today().year, 1, 1)


def test_parse_last_year():
    """Test parsing 'last year'."""
    assert parse_date("last year") == date(date.today().year - 1, 1, 1)


def test_parse_this_week_starts_on_sunday():
    """Test that weeks start on Sunday."""
    result = parse_date("this week")
    assert result.weekday() == 6
    assert 0 <= (date.today() - result).days < 7


def test_parse_last_week():
    """Test parsing 'last week'."""
    assert parse_date("last week") == parse_date("this week") - timedelta(days=7)


def test_parse_last_weekday():
    """Test parsing 'last friday'."""
    result = parse_date("last friday")
    assert result.weekday() == 4
    assert 1 <= (date.today() - result).days <= 7


def test_parse_invalid():
    """Test that invalid dates raise ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")
