"""
Configuration Loader (``forecast_config.loader``).

Responsibility
--------------
Loads YAML documents and parses them into the frozen value objects of
``forecast_kernel.domain.values``: global settings, a project with its
reforecasts, and the resolved team list.  Used by tests and tooling; the
engines themselves never read files.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends on the kernel domain
only; has no dependency on the engines.

Invariants enforced
-------------------
* Missing required keys raise ``ConfigurationLoadError`` naming the key;
  there are no silent defaults for required fields.
* Numbers are converted with ``Decimal(str(value))`` so YAML floats never
  reach the engines.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing key or unparseable date/number  -> ``ConfigurationLoadError``.
* ``load_forecast_inputs(..., validate=True)`` with validation errors
  -> ``InvalidConfigurationError``.

Document layout
---------------
::

    settings:
      discount_rate_annual: 0.03
      labor_rates:
        - {role: Dev, hourly_rate: 100}
      holidays:
        - {id: h1, name: Labor Day, start_date: 2026-09-07, end_date: 2026-09-07}
      traffic_light_thresholds: {amber_percent: 5, red_percent: 15}
    team:
      - {id: a1, name: Dev 1, role: Dev}
    project:
      id: p1
      name: Example
      start_date: 2026-06-15
      end_date: 2026-09-30
      active_reforecast_id: rf1
      reforecasts:
        - id: rf1
          ...
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import date, datetime
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

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
from forecast_kernel.exceptions import ConfigurationLoadError, InvalidConfigurationError
from forecast_kernel.logging_config import get_logger

logger = get_logger("config.loader")

DEFAULTS_RESOURCE = "defaults.yaml"


@dataclass(frozen=True)
class ForecastInputs:
    """Everything one forecast calculation needs."""

    settings: Settings
    project: Project
    team_members: tuple[TeamMember, ...]


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of a configuration mapping (sorted keys)."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigurationLoadError(f"{context}: expected a mapping", key=key)
    if key not in data:
        raise ConfigurationLoadError(f"{context}: missing required key '{key}'", key=key)
    return data[key]


def parse_date(value: Any, key: str = "date") -> date:
    """Parse a date from YAML (ISO string or date object)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise ConfigurationLoadError(f"Cannot parse date from {value!r}", key=key) from e
    raise ConfigurationLoadError(f"Cannot parse date from {value!r}", key=key)


def parse_datetime(value: Any, key: str = "datetime") -> datetime:
    """Parse a timestamp from YAML (ISO string, datetime or bare date)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise ConfigurationLoadError(f"Cannot parse timestamp from {value!r}", key=key) from e
    raise ConfigurationLoadError(f"Cannot parse timestamp from {value!r}", key=key)


def parse_decimal(value: Any, key: str = "value"):
    try:
        return to_decimal(value, key)
    except ValueError as e:
        raise ConfigurationLoadError(str(e), key=key) from e


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def parse_labor_rate(data: dict[str, Any]) -> LaborRate:
    return LaborRate(
        role=str(_require(data, "role", "labor_rate")),
        hourly_rate=parse_decimal(_require(data, "hourly_rate", "labor_rate"), "hourly_rate"),
    )


def parse_holiday(data: dict[str, Any]) -> Holiday:
    start = parse_date(_require(data, "start_date", "holiday"), "start_date")
    end = parse_date(data["end_date"], "end_date") if data.get("end_date") else start
    return Holiday(
        id=str(_require(data, "id", "holiday")),
        name=str(_require(data, "name", "holiday")),
        start_date=start,
        end_date=end,
    )


def parse_thresholds(data: dict[str, Any] | None) -> TrafficLightThresholds:
    if not data:
        return TrafficLightThresholds()
    return TrafficLightThresholds(
        amber_percent=parse_decimal(_require(data, "amber_percent", "traffic_light_thresholds"), "amber_percent"),
        red_percent=parse_decimal(_require(data, "red_percent", "traffic_light_thresholds"), "red_percent"),
    )


def parse_settings(data: dict[str, Any]) -> Settings:
    """
    Parse a ``Settings`` from a dict.

    ``discount_rate_annual`` is required; rate and holiday tables default
    to empty; thresholds default to amber 5 / red 15.
    """
    return Settings(
        discount_rate_annual=parse_decimal(
            _require(data, "discount_rate_annual", "settings"), "discount_rate_annual",
        ),
        labor_rates=tuple(parse_labor_rate(r) for r in data.get("labor_rates") or ()),
        holidays=tuple(parse_holiday(h) for h in data.get("holidays") or ()),
        traffic_light_thresholds=parse_thresholds(data.get("traffic_light_thresholds")),
    )


def default_settings() -> Settings:
    """Settings used when none are configured."""
    return Settings()


def load_settings(path: Path) -> Settings:
    """Load settings from a YAML file whose top level is the settings mapping."""
    data = load_yaml_file(path)
    settings = parse_settings(data.get("settings", data))
    logger.info("settings_loaded", extra={
        "path": str(path),
        "checksum": compute_checksum(data),
        "labor_rate_count": len(settings.labor_rates),
        "holiday_count": len(settings.holidays),
    })
    return settings


def load_default_settings() -> Settings:
    """Settings shipped with the package (``forecast_config/defaults.yaml``)."""
    text = resources.files("forecast_config").joinpath(DEFAULTS_RESOURCE).read_text()
    return parse_settings(yaml.safe_load(text) or {})


# ---------------------------------------------------------------------------
# Team / project
# ---------------------------------------------------------------------------


def parse_team_member(data: dict[str, Any]) -> TeamMember:
    return TeamMember(
        id=str(_require(data, "id", "team_member")),
        name=str(data.get("name", "")),
        role=str(data.get("role", "")),
    )


def parse_team(data: list[dict[str, Any]] | None) -> tuple[TeamMember, ...]:
    return tuple(parse_team_member(m) for m in data or ())


def parse_allocation(data: dict[str, Any]) -> MonthlyAllocation:
    return MonthlyAllocation(
        member_id=str(_require(data, "member_id", "allocation")),
        month=str(_require(data, "month", "allocation")),
        allocation=parse_decimal(_require(data, "allocation", "allocation"), "allocation"),
    )


def parse_productivity_window(data: dict[str, Any]) -> ProductivityWindow:
    return ProductivityWindow(
        id=str(_require(data, "id", "productivity_window")),
        start_date=parse_date(_require(data, "start_date", "productivity_window"), "start_date"),
        end_date=parse_date(_require(data, "end_date", "productivity_window"), "end_date"),
        factor=parse_decimal(_require(data, "factor", "productivity_window"), "factor"),
    )


def parse_reforecast(data: dict[str, Any]) -> Reforecast:
    return Reforecast(
        id=str(_require(data, "id", "reforecast")),
        name=str(data.get("name", "")),
        created_at=parse_datetime(_require(data, "created_at", "reforecast"), "created_at"),
        start_date=str(_require(data, "start_date", "reforecast")),
        reforecast_date=parse_date(_require(data, "reforecast_date", "reforecast"), "reforecast_date"),
        allocations=tuple(parse_allocation(a) for a in data.get("allocations") or ()),
        productivity_windows=tuple(
            parse_productivity_window(w) for w in data.get("productivity_windows") or ()
        ),
        actual_cost=parse_decimal(data.get("actual_cost", 0), "actual_cost"),
        baseline_budget=parse_decimal(data.get("baseline_budget", 0), "baseline_budget"),
    )


def parse_project(data: dict[str, Any]) -> Project:
    return Project(
        id=str(_require(data, "id", "project")),
        name=str(data.get("name", "")),
        start_date=parse_date(_require(data, "start_date", "project"), "start_date"),
        end_date=parse_date(_require(data, "end_date", "project"), "end_date"),
        assignments=tuple(
            ProjectAssignment(
                id=str(_require(a, "id", "assignment")),
                pool_member_id=str(_require(a, "pool_member_id", "assignment")),
            )
            for a in data.get("assignments") or ()
        ),
        reforecasts=tuple(parse_reforecast(r) for r in data.get("reforecasts") or ()),
        active_reforecast_id=data.get("active_reforecast_id"),
    )


def load_forecast_inputs(path: Path, validate: bool = False) -> ForecastInputs:
    """
    Load settings, project and team from one YAML document.

    With ``validate=True`` the inputs are checked by
    ``forecast_config.validator`` and any error raises
    ``InvalidConfigurationError``; warnings are logged.
    """
    data = load_yaml_file(path)
    try:
        inputs = ForecastInputs(
            settings=parse_settings(_require(data, "settings", str(path))),
            project=parse_project(_require(data, "project", str(path))),
            team_members=parse_team(data.get("team")),
        )
    except ConfigurationLoadError as e:
        e.path = str(path)
        raise

    logger.info("forecast_inputs_loaded", extra={
        "path": str(path),
        "checksum": compute_checksum(data),
        "project_id": inputs.project.id,
        "reforecast_count": len(inputs.project.reforecasts),
        "team_size": len(inputs.team_members),
    })

    if validate:
        from forecast_config.validator import validate_forecast_inputs

        result = validate_forecast_inputs(inputs)
        for warning in result.warnings:
            logger.warning("forecast_inputs_warning", extra={"detail": warning})
        if not result.is_valid:
            logger.error("forecast_inputs_invalid", extra={"errors": result.errors})
            raise InvalidConfigurationError(result.errors)

    return inputs
