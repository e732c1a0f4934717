"""
Module: forecast_engines.productivity
Responsibility:
    Blend a set of date-ranged productivity windows into one capacity factor
    per calendar month.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Algorithm:
    1. No window overlaps the month -> 1 (full productivity).
    2. Otherwise, for every calendar day of the month, take the minimum
       factor among the windows covering that day (1 when none does).
    3. The month's factor is the arithmetic mean of the per-day factors.

    A reduced week inside a long month therefore yields a factor close to 1
    rather than collapsing the whole month to the window's factor: one week
    at factor 0 inside a 30-day month blends to about 0.77.

    Days are weighted over the full calendar month, not over workdays and
    not clipped to the project range.  PRODUCTIVITY_WEIGHTING names the rule
    so a change of intent shows up as a failing test.

Invariants enforced:
    - Result lies in [min(covering factors), 1] for factors in [0, 1].
    - Bounded loop: at most 31 iterations per month.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta
from decimal import Decimal

from forecast_kernel.domain.values import ProductivityWindow
from forecast_kernel.logging_config import get_logger
from forecast_engines.workday_calendar import month_bounds

logger = get_logger("engines.productivity")

PRODUCTIVITY_WEIGHTING = "calendar_days"

_ONE = Decimal("1")


def get_productivity_factor(
    month: str,
    windows: Iterable[ProductivityWindow],
) -> Decimal:
    """
    Day-weighted productivity factor for a ``YYYY-MM`` month.

    Overlapping windows resolve to the most restrictive (minimum) factor
    on each day they share.
    """
    month_start, month_end = month_bounds(month)

    overlapping = [
        w for w in windows
        if w.start_date <= month_end and w.end_date >= month_start
    ]
    if not overlapping:
        return _ONE

    total = Decimal("0")
    day_count = 0
    day = month_start
    while day <= month_end:
        covering = [
            w.factor for w in overlapping
            if w.start_date <= day <= w.end_date
        ]
        total += min(covering) if covering else _ONE
        day_count += 1
        day += timedelta(days=1)

    factor = total / day_count

    logger.debug("productivity_factor_blended", extra={
        "month": month,
        "window_count": len(overlapping),
        "factor": str(factor),
    })
    return factor
