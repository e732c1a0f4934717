"""
Pytest fixtures for the labor forecast test suite.

Provides:
- Structured logging configured for the suite, plus JSON log capture
- A deterministic clock
- Builders for projects, reforecasts and teams
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from pathlib import Path

import pytest

from forecast_kernel.domain.clock import DeterministicClock
from forecast_kernel.domain.values import (
    LaborRate,
    MonthlyAllocation,
    ProductivityWindow,
    Project,
    Reforecast,
    Settings,
    TeamMember,
)
from forecast_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture forecast_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            calculate_project_metrics(project, settings, team)
            logs = captured_logs()
            assert any(r["message"] == "project_metrics_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("forecast_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing."""
    return DeterministicClock(datetime(2026, 6, 1, 9, 0, 0, tzinfo=timezone.utc))


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def dev_team():
    """Two members with rated roles."""
    return (
        TeamMember(id="a1", name="Dana Developer", role="Dev"),
        TeamMember(id="a2", name="Avery Analyst", role="BA"),
    )


@pytest.fixture
def basic_settings():
    """Rates for Dev/BA/PM, no holidays, default thresholds, zero discounting."""
    return Settings(
        discount_rate_annual=Decimal("0"),
        labor_rates=(
            LaborRate("Dev", Decimal("100")),
            LaborRate("BA", Decimal("75")),
            LaborRate("PM", Decimal("150")),
        ),
    )


@pytest.fixture
def make_reforecast():
    """
    Factory for reforecasts.

    ``allocations`` is a list of ``(member_id, month, fraction)`` tuples and
    ``windows`` a list of ``(start, end, factor)`` tuples.
    """

    def _make(
        rf_id: str = "rf1",
        allocations=(),
        windows=(),
        actual_cost: Decimal = Decimal("0"),
        baseline_budget: Decimal = Decimal("0"),
        reforecast_date: date = date(2026, 6, 1),
        created_at: datetime = datetime(2026, 6, 1, 9, 0, 0, tzinfo=timezone.utc),
        name: str = "Baseline",
    ) -> Reforecast:
        return Reforecast(
            id=rf_id,
            name=name,
            created_at=created_at,
            start_date="2026-06",
            reforecast_date=reforecast_date,
            allocations=tuple(
                MonthlyAllocation(member_id, month, Decimal(str(fraction)))
                for member_id, month, fraction in allocations
            ),
            productivity_windows=tuple(
                ProductivityWindow(f"w{i}", start, end, Decimal(str(factor)))
                for i, (start, end, factor) in enumerate(windows, start=1)
            ),
            actual_cost=actual_cost,
            baseline_budget=baseline_budget,
        )

    return _make


@pytest.fixture
def make_project():
    """Factory for projects wrapping one or more reforecasts."""

    def _make(
        start_date: date,
        end_date: date,
        reforecasts=(),
        active_reforecast_id: str | None = None,
        project_id: str = "p1",
    ) -> Project:
        return Project(
            id=project_id,
            name="Forecast Test Project",
            start_date=start_date,
            end_date=end_date,
            reforecasts=tuple(reforecasts),
            active_reforecast_id=active_reforecast_id,
        )

    return _make
