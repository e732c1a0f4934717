"""
Module: forecast_engines.traffic_light
Responsibility:
    Map a forecast's variance percent to a three-state budget-health status
    and its fixed display attributes.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumes only the orchestrator's ProjectMetrics.

Classification (positive variance percent = over budget):
    variance_percent >  red_percent    -> RED
    variance_percent >  amber_percent  -> AMBER
    otherwise                          -> GREEN

    Red is checked first.  With ``red_percent < amber_percent`` the amber
    band is empty: anything above ``red_percent`` is red even when it is
    below ``amber_percent``.  Such a configuration is accepted as-is; the
    settings validator reports it as a warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from forecast_kernel.domain.results import ProjectMetrics
from forecast_kernel.domain.values import TrafficLightThresholds
from forecast_kernel.logging_config import get_logger

logger = get_logger("engines.traffic_light")

DEFAULT_THRESHOLDS = TrafficLightThresholds(
    amber_percent=Decimal("5"),
    red_percent=Decimal("15"),
)


class TrafficLightStatus(str, Enum):
    """Budget-health status."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"


@dataclass(frozen=True)
class TrafficLightDisplay:
    """Display attributes for a status: label, indicator glyph, color token."""

    status: TrafficLightStatus
    label: str
    indicator: str
    color: str


_INDICATOR = "●"

_DISPLAY: dict[TrafficLightStatus, TrafficLightDisplay] = {
    TrafficLightStatus.GREEN: TrafficLightDisplay(
        status=TrafficLightStatus.GREEN,
        label="On Track",
        indicator=_INDICATOR,
        color="text-green-600 dark:text-green-400",
    ),
    TrafficLightStatus.AMBER: TrafficLightDisplay(
        status=TrafficLightStatus.AMBER,
        label="At Risk",
        indicator=_INDICATOR,
        color="text-amber-500 dark:text-amber-400",
    ),
    TrafficLightStatus.RED: TrafficLightDisplay(
        status=TrafficLightStatus.RED,
        label="Over Budget",
        indicator=_INDICATOR,
        color="text-red-600 dark:text-red-400",
    ),
}


def get_traffic_light_status(
    variance_percent: Decimal,
    thresholds: TrafficLightThresholds = DEFAULT_THRESHOLDS,
) -> TrafficLightStatus:
    """Classify a variance percent against the thresholds."""
    if variance_percent > thresholds.red_percent:
        return TrafficLightStatus.RED
    if variance_percent > thresholds.amber_percent:
        return TrafficLightStatus.AMBER
    return TrafficLightStatus.GREEN


def classify_metrics(
    metrics: ProjectMetrics,
    thresholds: TrafficLightThresholds = DEFAULT_THRESHOLDS,
) -> TrafficLightStatus:
    """Classify a forecast by its variance percent."""
    status = get_traffic_light_status(metrics.variance_percent, thresholds)
    logger.debug("traffic_light_classified", extra={
        "variance_percent": str(metrics.variance_percent),
        "amber_percent": str(thresholds.amber_percent),
        "red_percent": str(thresholds.red_percent),
        "status": status.value,
    })
    return status


def get_traffic_light_display(status: TrafficLightStatus) -> TrafficLightDisplay:
    """Fixed display lookup for a status."""
    return _DISPLAY[TrafficLightStatus(status)]
