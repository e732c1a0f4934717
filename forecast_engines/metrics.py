"""
Module: forecast_engines.metrics
Responsibility:
    Aggregate forecast formulas: ETC, EAC, variance, variance percent,
    budget performance ratio, weekly burn rate and the cumulative monthly
    breakdown.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Called by ``forecast_engines.forecast`` once the per-month costs and
    hours are known.

Invariants enforced:
    - Every result is a finite Decimal.  Each division has an explicit guard
      returning 0 instead of raising (zero baseline, zero EAC, no active
      months, zero ETC).
    - ``generate_monthly_calculations`` produces prefix sums; a month missing
      from the cost or hours mapping contributes 0.

Non-goals:
    - The budget ratio is baseline / EAC.  It is NOT an earned-value CPI;
      earned value is not tracked.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from forecast_kernel.domain.results import MonthlyCalculation
from forecast_kernel.logging_config import get_logger
from forecast_engines.workday_calendar import add_months

logger = get_logger("engines.metrics")

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_DAYS_PER_WEEK = Decimal("7")


def calculate_etc(monthly_costs: Iterable[Decimal]) -> Decimal:
    """Estimate to Complete: sum of the forecast monthly costs."""
    return sum(monthly_costs, _ZERO)


def calculate_eac(actual_cost: Decimal, etc: Decimal) -> Decimal:
    """Estimate at Completion: cost already spent plus the remaining forecast."""
    return actual_cost + etc


def calculate_variance(eac: Decimal, baseline: Decimal) -> Decimal:
    """Budget variance: positive = over budget, negative = under budget."""
    return eac - baseline


def calculate_variance_percent(eac: Decimal, baseline: Decimal) -> Decimal:
    """Variance as a percentage of baseline; 0 when the baseline is 0."""
    if baseline == _ZERO:
        return _ZERO
    return (eac - baseline) / baseline * _HUNDRED


def calculate_budget_performance_ratio(baseline_budget: Decimal, eac: Decimal) -> Decimal:
    """
    Budget Performance Ratio = baseline / EAC.

      > 1 forecasting under budget
      = 1 on budget
      < 1 forecasting over budget

    Returns 0 when EAC is 0.
    """
    if eac == _ZERO:
        return _ZERO
    return baseline_budget / eac


def count_burn_weeks(start_date: date, active_month_count: int) -> int:
    """
    Weeks in the burn-rate period, never fewer than 1.

    Reproduces the spreadsheet formula
    ``ROUND(DATEDIF(start, EDATE(start, n), "d") / 7, 0)``: the period ends
    ``n`` calendar months after the project start (not at the end of the last
    active month), and the day count is rounded half-up to whole weeks.
    """
    end_date = add_months(start_date, active_month_count)
    days = (end_date - start_date).days
    weeks = int((Decimal(days) / _DAYS_PER_WEEK).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(1, weeks)


def calculate_weekly_burn_rate(
    etc: Decimal,
    start_date: date,
    active_months: Sequence[str],
) -> Decimal:
    """
    Weekly burn rate = ETC / weeks in the active period.

    The period length counts active months (months with real work), not the
    full project span.  Returns 0 when there are no active months or ETC
    is 0.
    """
    if not active_months or etc == _ZERO:
        return _ZERO
    weeks = count_burn_weeks(start_date, len(active_months))

    logger.debug("weekly_burn_rate_calculated", extra={
        "start_date": start_date.isoformat(),
        "active_month_count": len(active_months),
        "weeks": weeks,
    })
    return etc / Decimal(weeks)


def generate_monthly_calculations(
    months: Sequence[str],
    monthly_costs: Mapping[str, Decimal],
    monthly_hours: Mapping[str, Decimal],
) -> list[MonthlyCalculation]:
    """Per-month cost and hours with running cumulative totals."""
    cumulative_cost = _ZERO
    cumulative_hours = _ZERO

    rows: list[MonthlyCalculation] = []
    for month in months:
        cost = monthly_costs.get(month, _ZERO)
        hours = monthly_hours.get(month, _ZERO)
        cumulative_cost += cost
        cumulative_hours += hours
        rows.append(MonthlyCalculation(
            month=month,
            cost=cost,
            hours=hours,
            cumulative_cost=cumulative_cost,
            cumulative_hours=cumulative_hours,
        ))
    return rows
