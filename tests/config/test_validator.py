"""Tests for settings and project validation."""

from datetime import date, datetime, timezone
from decimal import Decimal

from forecast_config.loader import ForecastInputs
from forecast_config.validator import (
    ValidationResult,
    validate_forecast_inputs,
    validate_project,
    validate_settings,
)
from forecast_kernel.domain.values import (
    Holiday,
    LaborRate,
    MonthlyAllocation,
    ProductivityWindow,
    Project,
    Reforecast,
    Settings,
    TeamMember,
    TrafficLightThresholds,
)


def _reforecast(**overrides) -> Reforecast:
    fields = {
        "id": "rf1",
        "name": "Baseline",
        "created_at": datetime(2026, 6, 1, tzinfo=timezone.utc),
        "start_date": "2026-06",
        "reforecast_date": date(2026, 6, 1),
    }
    fields.update(overrides)
    return Reforecast(**fields)


def _project(*reforecasts, **overrides) -> Project:
    fields = {
        "id": "p1",
        "name": "Apollo",
        "start_date": date(2026, 6, 15),
        "end_date": date(2026, 9, 30),
        "reforecasts": reforecasts,
    }
    fields.update(overrides)
    return Project(**fields)


class TestValidationResult:

    def test_valid_when_no_errors(self):
        result = ValidationResult()
        result.add_warning("just a warning")
        assert result.is_valid

    def test_invalid_with_error(self):
        result = ValidationResult()
        result.add_error("bad")
        assert not result.is_valid

    def test_merge(self):
        a = ValidationResult(errors=["e1"])
        b = ValidationResult(errors=["e2"], warnings=["w1"])
        a.merge(b)
        assert a.errors == ["e1", "e2"]
        assert a.warnings == ["w1"]


class TestValidateSettings:

    def test_defaults_are_valid(self):
        result = validate_settings(Settings())
        assert result.is_valid
        assert result.warnings == []

    def test_negative_rate(self):
        result = validate_settings(Settings(labor_rates=(LaborRate("Dev", Decimal("-1")),)))
        assert len(result.errors) == 1
        assert "hourly_rate" in result.errors[0]

    def test_duplicate_role(self):
        result = validate_settings(Settings(labor_rates=(
            LaborRate("Dev", Decimal("100")),
            LaborRate("Dev", Decimal("110")),
        )))
        assert len(result.errors) == 1
        assert "duplicate role 'Dev'" in result.errors[0]

    def test_blank_role(self):
        result = validate_settings(Settings(labor_rates=(LaborRate("  ", Decimal("100")),)))
        assert not result.is_valid

    def test_discount_rate_out_of_range(self):
        assert not validate_settings(Settings(discount_rate_annual=Decimal("1.5"))).is_valid
        assert not validate_settings(Settings(discount_rate_annual=Decimal("-0.01"))).is_valid
        assert validate_settings(Settings(discount_rate_annual=Decimal("1"))).is_valid

    def test_inverted_holiday(self):
        result = validate_settings(Settings(holidays=(
            Holiday("h1", "Backwards", date(2026, 7, 3), date(2026, 7, 1)),
        )))
        assert len(result.errors) == 1
        assert "Backwards" in result.errors[0]

    def test_negative_thresholds(self):
        result = validate_settings(Settings(
            traffic_light_thresholds=TrafficLightThresholds(Decimal("-1"), Decimal("-2")),
        ))
        assert len(result.errors) == 2

    def test_red_below_amber_warns(self):
        result = validate_settings(Settings(
            traffic_light_thresholds=TrafficLightThresholds(Decimal("15"), Decimal("5")),
        ))
        assert result.is_valid
        assert len(result.warnings) == 1
        assert "red_percent" in result.warnings[0]


class TestValidateProject:

    def test_valid_project(self):
        project = _project(_reforecast(
            allocations=(MonthlyAllocation("a1", "2026-06", Decimal("0.5")),),
        ))
        result = validate_project(project, (TeamMember("a1", "Dana", "Dev"),))
        assert result.is_valid
        assert result.warnings == []

    def test_inverted_project_dates(self):
        result = validate_project(_project(start_date=date(2026, 10, 1)))
        assert len(result.errors) == 1

    def test_unknown_active_reforecast(self):
        result = validate_project(_project(_reforecast(), active_reforecast_id="gone"))
        assert len(result.errors) == 1
        assert "gone" in result.errors[0]

    def test_allocation_out_of_range(self):
        project = _project(_reforecast(allocations=(
            MonthlyAllocation("a1", "2026-06", Decimal("1.5")),
            MonthlyAllocation("a1", "2026-07", Decimal("-0.1")),
        )))
        assert len(validate_project(project).errors) == 2

    def test_malformed_month(self):
        project = _project(_reforecast(allocations=(
            MonthlyAllocation("a1", "2026-6", Decimal("0.5")),
        )))
        result = validate_project(project)
        assert len(result.errors) == 1
        assert "YYYY-MM" in result.errors[0]

    def test_window_checks(self):
        project = _project(_reforecast(productivity_windows=(
            ProductivityWindow("w1", date(2026, 9, 6), date(2026, 9, 1), Decimal("0.5")),
            ProductivityWindow("w2", date(2026, 9, 1), date(2026, 9, 6), Decimal("1.2")),
        )))
        assert len(validate_project(project).errors) == 2

    def test_negative_budget_figures(self):
        project = _project(_reforecast(actual_cost=Decimal("-1"), baseline_budget=Decimal("-1")))
        assert len(validate_project(project).errors) == 2

    def test_orphaned_allocations_warn_once_per_member(self):
        project = _project(_reforecast(allocations=(
            MonthlyAllocation("a9", "2026-06", Decimal("0.5")),
            MonthlyAllocation("a9", "2026-07", Decimal("0.5")),
        )))
        result = validate_project(project, (TeamMember("a1", "Dana", "Dev"),))
        assert result.is_valid
        assert len(result.warnings) == 1
        assert "'a9'" in result.warnings[0]

    def test_orphans_not_checked_without_team(self):
        project = _project(_reforecast(allocations=(
            MonthlyAllocation("a9", "2026-06", Decimal("0.5")),
        )))
        assert validate_project(project).warnings == []

    def test_unknown_role_warns_with_settings(self):
        team = (TeamMember("a1", "Dana", "Dev"), TeamMember("a3", "Morgan", "Director"))
        settings = Settings(labor_rates=(LaborRate("Dev", Decimal("100")),))
        result = validate_project(_project(), team, settings)
        assert result.is_valid
        assert len(result.warnings) == 1
        assert "Director" in result.warnings[0]


class TestValidateForecastInputs:

    def test_settings_and_project_merged(self):
        inputs = ForecastInputs(
            settings=Settings(
                discount_rate_annual=Decimal("2"),
                labor_rates=(LaborRate("Dev", Decimal("100")),),
            ),
            project=_project(_reforecast(allocations=(
                MonthlyAllocation("a9", "2026-06", Decimal("0.5")),
            ))),
            team_members=(TeamMember("a1", "Dana", "Dev"),),
        )
        result = validate_forecast_inputs(inputs)
        assert len(result.errors) == 1
        assert "discount_rate_annual" in result.errors[0]
        assert len(result.warnings) == 1
        assert "'a9'" in result.warnings[0]
