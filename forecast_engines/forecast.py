"""
Module: forecast_engines.forecast
Responsibility:
    Main entry point of the calculation engine.  Selects the project's active
    reforecast, walks the project's month range through the calendar,
    productivity, and cost engines, and aggregates the results into
    ProjectMetrics.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Drives workday_calendar, allocation_index, productivity, costs, metrics
    and npv.  Its output is the only input of the traffic-light classifier.

Invariants enforced:
    - Purity and idempotence: every call recomputes from scratch; identical
      inputs produce identical ProjectMetrics.  Nothing is cached.
    - Inputs are read-only; results are freshly allocated.
    - All numeric outputs are finite (guards live in ``metrics``).

Failure modes:
    - None for business data.  Without an active reforecast a degenerate
      result is returned (ETC 0, no monthly data).
    - InvalidMonthError only if a date cannot be turned into a month, which
      cannot happen for ``datetime.date`` inputs.

Usage:
    from forecast_engines.forecast import calculate_project_metrics

    metrics = calculate_project_metrics(project, settings, team_members)
    print(metrics.eac, metrics.weekly_burn_rate)
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from decimal import Decimal

from forecast_kernel.domain.results import ForecastDiagnostics, ProjectMetrics
from forecast_kernel.domain.values import Project, Settings, TeamMember
from forecast_kernel.logging_config import LogContext, get_logger
from forecast_engines.allocation_index import AllocationIndex, get_active_months
from forecast_engines.costs import (
    DiagnosticsCollector,
    calculate_total_monthly_cost,
    calculate_total_monthly_hours,
)
from forecast_engines.metrics import (
    calculate_budget_performance_ratio,
    calculate_eac,
    calculate_etc,
    calculate_variance,
    calculate_variance_percent,
    calculate_weekly_burn_rate,
    generate_monthly_calculations,
)
from forecast_engines.npv import calculate_npv
from forecast_engines.productivity import get_productivity_factor
from forecast_engines.reforecast import get_active_reforecast
from forecast_engines.tracer import traced_engine
from forecast_engines.workday_calendar import (
    format_month,
    generate_month_range,
    get_monthly_work_hours,
)

logger = get_logger("engines.forecast")

_ZERO = Decimal("0")


def _empty_metrics() -> ProjectMetrics:
    # No reforecast means no actual cost or baseline either.
    actual_cost = _ZERO
    baseline = _ZERO
    return ProjectMetrics(
        etc=_ZERO,
        eac=actual_cost,
        variance=calculate_variance(actual_cost, baseline),
        variance_percent=calculate_variance_percent(actual_cost, baseline),
        budget_ratio=calculate_budget_performance_ratio(baseline, actual_cost),
        weekly_burn_rate=_ZERO,
        npv=_ZERO,
        total_hours=_ZERO,
        monthly_data=(),
        diagnostics=ForecastDiagnostics(),
    )


@traced_engine("forecast", "1.0", fingerprint_fields=("project", "settings", "team_members"))
def calculate_project_metrics(
    project: Project,
    settings: Settings,
    team_members: Sequence[TeamMember],
) -> ProjectMetrics:
    """
    Forecast a project from its active reforecast.

    Preconditions:
        Inputs are fully formed and already validated upstream; the team
        list is already resolved from the project's assignments.

    Postconditions:
        - ``etc`` is the sum of monthly costs over the project's months.
        - ``monthly_data`` covers every month from the start month to the
          end month inclusive, with prefix-sum cumulative values.
        - ``diagnostics`` lists unresolved roles and orphaned allocations;
          they contribute zero to every total.
    """
    t0 = time.monotonic()
    reforecast = get_active_reforecast(project)

    if reforecast is None:
        logger.info("project_metrics_no_reforecast", extra={
            "project_id": project.id,
        })
        return _empty_metrics()

    with LogContext.bind(project_id=project.id, reforecast_id=reforecast.id):
        logger.info("project_metrics_started", extra={
            "start_date": project.start_date.isoformat(),
            "end_date": project.end_date.isoformat(),
            "team_size": len(team_members),
            "allocation_count": len(reforecast.allocations),
            "window_count": len(reforecast.productivity_windows),
        })

        index = AllocationIndex.build(reforecast.allocations)
        months = generate_month_range(
            format_month(project.start_date), format_month(project.end_date),
        )
        diagnostics = DiagnosticsCollector()

        monthly_costs: list[Decimal] = []
        monthly_hours: list[Decimal] = []
        cost_by_month: dict[str, Decimal] = {}
        hours_by_month: dict[str, Decimal] = {}

        for month in months:
            factor = get_productivity_factor(month, reforecast.productivity_windows)
            available_hours = get_monthly_work_hours(
                month, project.start_date, project.end_date, settings.holidays,
            )
            cost = calculate_total_monthly_cost(
                month,
                index,
                team_members,
                settings.labor_rates,
                available_hours,
                factor,
                diagnostics=diagnostics,
            )
            hours = calculate_total_monthly_hours(
                month,
                index,
                available_hours,
                factor,
                team_members=team_members,
                diagnostics=diagnostics,
            )
            monthly_costs.append(cost)
            monthly_hours.append(hours)
            cost_by_month[month] = cost
            hours_by_month[month] = hours

        etc = calculate_etc(monthly_costs)
        eac = calculate_eac(reforecast.actual_cost, etc)
        baseline = reforecast.baseline_budget
        active_months = get_active_months(reforecast.allocations)

        metrics = ProjectMetrics(
            etc=etc,
            eac=eac,
            variance=calculate_variance(eac, baseline),
            variance_percent=calculate_variance_percent(eac, baseline),
            budget_ratio=calculate_budget_performance_ratio(baseline, eac),
            weekly_burn_rate=calculate_weekly_burn_rate(
                etc, project.start_date, active_months,
            ),
            npv=calculate_npv(settings.discount_rate_annual, monthly_costs),
            total_hours=sum(monthly_hours, _ZERO),
            monthly_data=tuple(
                generate_monthly_calculations(months, cost_by_month, hours_by_month)
            ),
            diagnostics=diagnostics.freeze(),
        )

        duration_ms = round((time.monotonic() - t0) * 1000, 2)
        logger.info("project_metrics_completed", extra={
            "month_count": len(months),
            "active_month_count": len(active_months),
            "etc": str(metrics.etc),
            "eac": str(metrics.eac),
            "variance_percent": str(metrics.variance_percent),
            "unresolved_roles": list(metrics.diagnostics.unresolved_roles),
            "orphaned_member_ids": list(metrics.diagnostics.orphaned_member_ids),
            "duration_ms": duration_ms,
        })
        return metrics
