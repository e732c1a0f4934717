"""
Pure domain layer.

This module contains immutable value objects and result types
with NO dependencies on:
- Storage
- Time/clock (except the injectable Clock interface)
- I/O

All domain objects are immutable and deterministic.
"""

from forecast_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from forecast_kernel.domain.results import (
    ForecastDiagnostics,
    MonthlyCalculation,
    ProjectMetrics,
)
from forecast_kernel.domain.values import (
    Holiday,
    LaborRate,
    MonthlyAllocation,
    ProductivityWindow,
    Project,
    ProjectAssignment,
    Reforecast,
    Settings,
    TeamMember,
    TrafficLightThresholds,
    to_decimal,
)

__all__ = [
    # Clock
    "Clock",
    "DeterministicClock",
    "SystemClock",
    # Inputs
    "Holiday",
    "LaborRate",
    "MonthlyAllocation",
    "ProductivityWindow",
    "Project",
    "ProjectAssignment",
    "Reforecast",
    "Settings",
    "TeamMember",
    "TrafficLightThresholds",
    "to_decimal",
    # Results
    "ForecastDiagnostics",
    "MonthlyCalculation",
    "ProjectMetrics",
]
