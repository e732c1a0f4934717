"""
Tests for the traffic-light classifier.

Covers:
- Boundary behaviour (strictly greater than each threshold)
- Custom and inverted thresholds
- Classification from ProjectMetrics
- Display attributes
"""

from decimal import Decimal

import pytest

from forecast_engines.traffic_light import (
    DEFAULT_THRESHOLDS,
    TrafficLightStatus,
    classify_metrics,
    get_traffic_light_display,
    get_traffic_light_status,
)
from forecast_kernel.domain.results import ProjectMetrics
from forecast_kernel.domain.values import TrafficLightThresholds


def _metrics(variance_percent: str) -> ProjectMetrics:
    zero = Decimal("0")
    return ProjectMetrics(
        etc=zero,
        eac=zero,
        variance=zero,
        variance_percent=Decimal(variance_percent),
        budget_ratio=zero,
        weekly_burn_rate=zero,
        npv=zero,
        total_hours=zero,
    )


class TestTrafficLightStatus:
    """Default thresholds: amber above 5%, red above 15%."""

    def test_default_thresholds(self):
        assert DEFAULT_THRESHOLDS.amber_percent == Decimal("5")
        assert DEFAULT_THRESHOLDS.red_percent == Decimal("15")

    @pytest.mark.parametrize("variance_percent,expected", [
        ("-20", TrafficLightStatus.GREEN),
        ("0", TrafficLightStatus.GREEN),
        ("5", TrafficLightStatus.GREEN),
        ("5.01", TrafficLightStatus.AMBER),
        ("10", TrafficLightStatus.AMBER),
        ("15", TrafficLightStatus.AMBER),
        ("15.01", TrafficLightStatus.RED),
        ("25", TrafficLightStatus.RED),
    ])
    def test_boundaries(self, variance_percent, expected):
        assert get_traffic_light_status(Decimal(variance_percent)) == expected

    def test_custom_thresholds(self):
        thresholds = TrafficLightThresholds(amber_percent=Decimal("2"), red_percent=Decimal("8"))
        assert get_traffic_light_status(Decimal("3"), thresholds) == TrafficLightStatus.AMBER
        assert get_traffic_light_status(Decimal("9"), thresholds) == TrafficLightStatus.RED

    def test_red_below_amber_has_no_amber_band(self):
        thresholds = TrafficLightThresholds(amber_percent=Decimal("15"), red_percent=Decimal("5"))
        assert get_traffic_light_status(Decimal("4"), thresholds) == TrafficLightStatus.GREEN
        assert get_traffic_light_status(Decimal("10"), thresholds) == TrafficLightStatus.RED
        assert get_traffic_light_status(Decimal("20"), thresholds) == TrafficLightStatus.RED

    def test_status_values(self):
        assert TrafficLightStatus.GREEN.value == "green"
        assert TrafficLightStatus.AMBER == "amber"


class TestClassifyMetrics:

    def test_classify_uses_variance_percent(self):
        assert classify_metrics(_metrics("10")) == TrafficLightStatus.AMBER

    def test_classify_with_thresholds(self):
        thresholds = TrafficLightThresholds(amber_percent=Decimal("20"), red_percent=Decimal("30"))
        assert classify_metrics(_metrics("25"), thresholds) == TrafficLightStatus.AMBER


class TestTrafficLightDisplay:

    @pytest.mark.parametrize("status,label", [
        (TrafficLightStatus.GREEN, "On Track"),
        (TrafficLightStatus.AMBER, "At Risk"),
        (TrafficLightStatus.RED, "Over Budget"),
    ])
    def test_labels(self, status, label):
        display = get_traffic_light_display(status)
        assert display.status == status
        assert display.label == label
        assert display.indicator == "●"

    def test_color_tokens(self):
        assert get_traffic_light_display(TrafficLightStatus.RED).color == "text-red-600 dark:text-red-400"

    def test_accepts_raw_value(self):
        assert get_traffic_light_display("green").label == "On Track"
