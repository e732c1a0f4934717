"""
Module: forecast_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for callers.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import forecast_kernel (domain values, logging, exceptions)
    and sibling engine modules.

Invariants enforced:
    - Purity: engines never call ``datetime.now()`` or ``date.today()``.
      Reforecast creation receives an explicit Clock.
    - Decimal-only arithmetic: amounts, hours, fractions and rates are
      ``Decimal``; floats never enter a calculation.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from forecast_engines import calculate_project_metrics, classify_metrics

    metrics = calculate_project_metrics(project, settings, team_members)
    status = classify_metrics(metrics, settings.traffic_light_thresholds)
"""

from forecast_kernel.logging_config import get_logger

logger = get_logger("engines")

from forecast_engines.allocation_index import (
    AllocationIndex,
    get_active_months,
)
from forecast_engines.costs import (
    DiagnosticsCollector,
    calculate_member_monthly_cost,
    calculate_member_monthly_hours,
    calculate_total_monthly_cost,
    calculate_total_monthly_hours,
    get_hourly_rate,
)
from forecast_engines.forecast import calculate_project_metrics
from forecast_engines.formatting import (
    format_currency,
    format_month_label,
    format_number,
    format_percent_value,
)
from forecast_engines.holidays import (
    FederalHoliday,
    federal_holidays_as_settings,
    get_us_federal_holidays,
)
from forecast_engines.metrics import (
    calculate_budget_performance_ratio,
    calculate_eac,
    calculate_etc,
    calculate_variance,
    calculate_variance_percent,
    calculate_weekly_burn_rate,
    count_burn_weeks,
    generate_monthly_calculations,
)
from forecast_engines.npv import calculate_npv
from forecast_engines.productivity import (
    PRODUCTIVITY_WEIGHTING,
    get_productivity_factor,
)
from forecast_engines.reforecast import (
    create_baseline_reforecast,
    create_new_reforecast,
    get_active_reforecast,
    get_most_recent_reforecast,
)
from forecast_engines.traffic_light import (
    DEFAULT_THRESHOLDS,
    TrafficLightDisplay,
    TrafficLightStatus,
    classify_metrics,
    get_traffic_light_display,
    get_traffic_light_status,
)
from forecast_engines.workday_calendar import (
    HOURS_PER_DAY,
    add_months,
    count_holiday_workdays,
    count_workdays,
    format_month,
    generate_month_range,
    get_monthly_work_hours,
    month_bounds,
    parse_month,
)

__all__ = [
    # Workday calendar
    "HOURS_PER_DAY",
    "add_months",
    "count_holiday_workdays",
    "count_workdays",
    "format_month",
    "generate_month_range",
    "get_monthly_work_hours",
    "month_bounds",
    "parse_month",
    # Allocation index
    "AllocationIndex",
    "get_active_months",
    # Productivity
    "PRODUCTIVITY_WEIGHTING",
    "get_productivity_factor",
    # Costs
    "DiagnosticsCollector",
    "get_hourly_rate",
    "calculate_member_monthly_cost",
    "calculate_member_monthly_hours",
    "calculate_total_monthly_cost",
    "calculate_total_monthly_hours",
    # Metrics
    "calculate_etc",
    "calculate_eac",
    "calculate_variance",
    "calculate_variance_percent",
    "calculate_budget_performance_ratio",
    "calculate_weekly_burn_rate",
    "count_burn_weeks",
    "generate_monthly_calculations",
    "calculate_npv",
    # Orchestrator
    "calculate_project_metrics",
    # Reforecast
    "get_active_reforecast",
    "get_most_recent_reforecast",
    "create_baseline_reforecast",
    "create_new_reforecast",
    # Traffic light
    "DEFAULT_THRESHOLDS",
    "TrafficLightStatus",
    "TrafficLightDisplay",
    "get_traffic_light_status",
    "classify_metrics",
    "get_traffic_light_display",
    # Holidays
    "FederalHoliday",
    "get_us_federal_holidays",
    "federal_holidays_as_settings",
    # Formatting
    "format_currency",
    "format_number",
    "format_percent_value",
    "format_month_label",
]
