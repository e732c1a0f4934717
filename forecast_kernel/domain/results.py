"""
Result objects produced by the forecast engines.

All results are freshly allocated frozen dataclasses; nothing here is
persisted.  Every numeric field is a finite ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class MonthlyCalculation:
    """
    Cost and hours for one month plus running totals.

    Guarantees:
        ``cumulative_cost`` / ``cumulative_hours`` are prefix sums over the
        month sequence the calculation was generated from.
    """

    month: str
    cost: Decimal
    hours: Decimal
    cumulative_cost: Decimal
    cumulative_hours: Decimal


@dataclass(frozen=True)
class ForecastDiagnostics:
    """
    References the engines could not resolve.

    Informational only: totals are computed exactly as if these entries
    contributed zero.
    """

    unresolved_roles: tuple[str, ...] = ()
    orphaned_member_ids: tuple[str, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not self.unresolved_roles and not self.orphaned_member_ids


@dataclass(frozen=True)
class ProjectMetrics:
    """
    Aggregate forecast for a project.

    Attributes:
        etc: Estimate to complete (sum of forecast monthly costs)
        eac: Estimate at completion (actual cost + etc)
        variance: eac - baseline budget (positive = over budget)
        variance_percent: variance as a percentage of baseline (0 when baseline is 0)
        budget_ratio: baseline / eac (0 when eac is 0); not an earned-value CPI
        weekly_burn_rate: etc per week of the active period
        npv: discounted value of the monthly cost stream
        total_hours: sum of forecast monthly hours
        monthly_data: per-month costs and hours with running totals
        diagnostics: unresolved roles and orphaned allocations
    """

    etc: Decimal
    eac: Decimal
    variance: Decimal
    variance_percent: Decimal
    budget_ratio: Decimal
    weekly_burn_rate: Decimal
    npv: Decimal
    total_hours: Decimal
    monthly_data: tuple[MonthlyCalculation, ...] = ()
    diagnostics: ForecastDiagnostics = field(default_factory=ForecastDiagnostics)
