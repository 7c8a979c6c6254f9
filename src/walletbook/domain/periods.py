"""Period window computation for dashboard aggregation."""

import calendar
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta

from walletbook.domain.entities import Period


def period_start(period: Period | str, reference: date, month_start_day: int = 1) -> date:
    """Return the first day of the period containing ``reference``.

    Args:
        period: daily, weekly, monthly or yearly
        reference: Date the period is anchored on
        month_start_day: Day of month a monthly period starts on (payroll
            date). Days past the end of a short month clamp to its last day.

    Returns:
        Start date of the period. Periods are open-ended: they run up to now.

    Raises:
        ValueError: If period is not recognized
    """
    period = Period(period)

    if period == Period.DAILY:
        return reference

    if period == Period.WEEKLY:
        # Weeks start on Sunday; date.weekday() has Monday == 0
        days_since_sunday = (reference.weekday() + 1) % 7
        return reference - timedelta(days=days_since_sunday)

    if period == Period.YEARLY:
        return reference.replace(month=1, day=1)

    if month_start_day <= 1:
        return reference.replace(day=1)

    start = _clamped_day(reference.year, reference.month, month_start_day)
    if start > reference:
        previous = reference - relativedelta(months=1)
        start = _clamped_day(previous.year, previous.month, month_start_day)
    return start


def calendar_month_bounds(reference: date) -> tuple[date, date]:
    """Return the first and last day of the calendar month of ``reference``."""
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def _clamped_day(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))
