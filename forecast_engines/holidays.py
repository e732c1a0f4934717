"""
US federal holiday generator.

Produces the eleven federal holidays for a year plus their observed dates
when a holiday falls on a weekend:

  - Saturday -> observed on the preceding Friday
  - Sunday   -> observed on the following Monday

Observed dates are separate entries with an "(Observed)" suffix.  The
output can be turned into single-day ``Holiday`` settings entries with
``federal_holidays_as_settings``.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from forecast_kernel.domain.values import Holiday
from forecast_kernel.logging_config import get_logger

logger = get_logger("engines.holidays")

MONDAY = 0
THURSDAY = 3
SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True)
class FederalHoliday:
    name: str
    date: date


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """The ``n``-th (1-based) occurrence of ``weekday`` (Monday=0) in a month."""
    first = date(year, month, 1)
    diff = (weekday - first.weekday()) % 7
    return first + timedelta(days=diff + (n - 1) * 7)


def last_weekday(year: int, month: int, weekday: int) -> date:
    """The last occurrence of ``weekday`` (Monday=0) in a month."""
    last = date(year, month, calendar.monthrange(year, month)[1])
    diff = (last.weekday() - weekday) % 7
    return last - timedelta(days=diff)


def get_us_federal_holidays(year: int) -> list[FederalHoliday]:
    """Federal holidays for ``year`` with observed dates, sorted by date."""
    holidays = [
        # Fixed-date holidays
        FederalHoliday("New Year's Day", date(year, 1, 1)),
        FederalHoliday("Juneteenth", date(year, 6, 19)),
        FederalHoliday("Independence Day", date(year, 7, 4)),
        FederalHoliday("Veterans Day", date(year, 11, 11)),
        FederalHoliday("Christmas Day", date(year, 12, 25)),
        # Floating holidays
        FederalHoliday("Martin Luther King Jr. Day", nth_weekday(year, 1, MONDAY, 3)),
        FederalHoliday("Presidents' Day", nth_weekday(year, 2, MONDAY, 3)),
        FederalHoliday("Memorial Day", last_weekday(year, 5, MONDAY)),
        FederalHoliday("Labor Day", nth_weekday(year, 9, MONDAY, 1)),
        FederalHoliday("Columbus Day", nth_weekday(year, 10, MONDAY, 2)),
        FederalHoliday("Thanksgiving Day", nth_weekday(year, 11, THURSDAY, 4)),
    ]

    result: list[FederalHoliday] = []
    for holiday in holidays:
        result.append(holiday)
        dow = holiday.date.weekday()
        if dow == SATURDAY:
            result.append(FederalHoliday(
                f"{holiday.name} (Observed)", holiday.date - timedelta(days=1),
            ))
        elif dow == SUNDAY:
            result.append(FederalHoliday(
                f"{holiday.name} (Observed)", holiday.date + timedelta(days=1),
            ))

    result.sort(key=lambda h: h.date)
    return result


def federal_holidays_as_settings(year: int) -> tuple[Holiday, ...]:
    """Single-day Holiday entries with deterministic ids (``us-federal-YYYY-MM-DD``)."""
    holidays = tuple(
        Holiday(
            id=f"us-federal-{h.date.isoformat()}",
            name=h.name,
            start_date=h.date,
            end_date=h.date,
        )
        for h in get_us_federal_holidays(year)
    )
    logger.debug("federal_holidays_generated", extra={
        "year": year,
        "count": len(holidays),
    })
    return holidays
