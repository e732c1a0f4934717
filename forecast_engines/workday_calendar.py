"""
Module: forecast_engines.workday_calendar
Responsibility:
    Pure date arithmetic for the forecast: counting Monday-Friday workdays,
    counting the distinct weekday dates covered by holidays, deriving the
    available hours of a calendar month clipped to a project's date range,
    and the month-string helpers (``YYYY-MM``) shared by the other engines.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Leaf module: consulted per month by the cost calculator and the
    forecast orchestrator.

Invariants enforced:
    - Purity: no clock access, no I/O.
    - Overlapping holidays are de-duplicated by date, so a double-booked
      day is subtracted once.
    - ``get_monthly_work_hours`` is never negative, even when holidays cover
      more days than the clipped range has workdays.

Failure modes:
    - InvalidMonthError from ``parse_month`` (and every helper taking a
      month string) when the literal is not ``YYYY-MM``.
    - No failure for empty or inverted date ranges: they count as zero.

Usage:
    from datetime import date
    from forecast_engines.workday_calendar import get_monthly_work_hours

    hours = get_monthly_work_hours(
        "2026-06", date(2026, 6, 15), date(2026, 6, 30), holidays=[],
    )  # Decimal("96")
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from forecast_kernel.domain.values import Holiday
from forecast_kernel.exceptions import InvalidMonthError
from forecast_kernel.logging_config import get_logger

logger = get_logger("engines.workday_calendar")

HOURS_PER_DAY = Decimal("8")

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")

_ONE_DAY = timedelta(days=1)


# ============================================================================
# Month helpers
# ============================================================================


def parse_month(month: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` literal into ``(year, month)``."""
    match = _MONTH_RE.match(month) if isinstance(month, str) else None
    if match is None:
        raise InvalidMonthError(month)
    year, mon = int(match.group(1)), int(match.group(2))
    if not 1 <= mon <= 12:
        raise InvalidMonthError(month)
    return year, mon


def format_month(day: date) -> str:
    """Format a date as its ``YYYY-MM`` month."""
    return f"{day.year:04d}-{day.month:02d}"


def days_in_month(month: str) -> int:
    year, mon = parse_month(month)
    return calendar.monthrange(year, mon)[1]


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of a month."""
    year, mon = parse_month(month)
    last = calendar.monthrange(year, mon)[1]
    return date(year, mon, 1), date(year, mon, last)


def generate_month_range(start_month: str, end_month: str) -> list[str]:
    """
    Inclusive list of ``YYYY-MM`` months from start to end.

    Crosses year boundaries (``2026-11`` .. ``2027-02`` yields four months).
    Returns an empty list when start is after end.
    """
    year, mon = parse_month(start_month)
    end_year, end_mon = parse_month(end_month)

    months: list[str] = []
    while (year, mon) <= (end_year, end_mon):
        months.append(f"{year:04d}-{mon:02d}")
        mon += 1
        if mon > 12:
            mon = 1
            year += 1
    return months


def add_months(day: date, months: int) -> date:
    """
    Shift a date by whole calendar months (spreadsheet EDATE).

    The day of month is kept, clipped to the last day of the target month:
    ``add_months(date(2026, 1, 31), 1)`` is ``2026-02-28``.
    """
    index = day.year * 12 + (day.month - 1) + months
    year, mon = divmod(index, 12)
    mon += 1
    last = calendar.monthrange(year, mon)[1]
    return date(year, mon, min(day.day, last))


# ============================================================================
# Workday counting
# ============================================================================


def count_workdays(start: date, end: date) -> int:
    """
    Number of Monday-Friday days in ``[start, end]``, both ends inclusive.

    Returns 0 when ``start`` is after ``end``.
    """
    if start > end:
        return 0

    total_days = (end - start).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5

    tail = start + timedelta(days=full_weeks * 7)
    for offset in range(remainder):
        if (tail + timedelta(days=offset)).weekday() < 5:
            count += 1
    return count


def count_holiday_workdays(
    start: date,
    end: date,
    holidays: Iterable[Holiday],
) -> int:
    """
    Number of distinct weekday dates in ``[start, end]`` covered by holidays.

    Each holiday is clipped to the range first.  Dates are collected in a
    set, so overlapping holidays never subtract the same day twice.
    """
    if start > end:
        return 0

    days_off: set[date] = set()
    for holiday in holidays:
        lo = max(holiday.start_date, start)
        hi = min(holiday.end_date, end)
        day = lo
        while day <= hi:
            if day.weekday() < 5:
                days_off.add(day)
            day += _ONE_DAY
    return len(days_off)


def get_monthly_work_hours(
    month: str,
    project_start: date,
    project_end: date,
    holidays: Iterable[Holiday],
) -> Decimal:
    """
    Available working hours for one month of a project.

    The calendar month is clipped to ``[project_start, project_end]``;
    months entirely outside the project yield 0.  Holiday workdays inside
    the clipped range are subtracted before multiplying by HOURS_PER_DAY,
    and the result is floored at 0.
    """
    first, last = month_bounds(month)
    start = max(first, project_start)
    end = min(last, project_end)

    if start > end:
        return Decimal("0")

    workdays = count_workdays(start, end)
    holiday_days = count_holiday_workdays(start, end, holidays)
    hours = max(0, workdays - holiday_days) * HOURS_PER_DAY

    logger.debug("monthly_work_hours_calculated", extra={
        "month": month,
        "clipped_start": start.isoformat(),
        "clipped_end": end.isoformat(),
        "workdays": workdays,
        "holiday_workdays": holiday_days,
        "hours": str(hours),
    })
    return hours
