"""
Input Validator (``forecast_config.validator``).

Responsibility
--------------
The structural validation boundary in front of the engines.  The engines
assume well-formed inputs and only guard numeric edge cases; this module
checks ranges, date ordering, month literals and cross-references before a
forecast runs.

Architecture position
---------------------
**Config layer** -- validation.  Reads kernel value objects; never raises
for bad data, it reports.

Errors (inputs MUST NOT be forecast)
------------------------------------
* negative hourly rate, blank or duplicate role
* discount rate outside [0, 1]
* negative traffic-light thresholds
* holiday or productivity window with start after end
* productivity factor or allocation outside [0, 1]
* allocation month not ``YYYY-MM``
* negative actual cost or baseline budget
* project start after end
* ``active_reforecast_id`` that matches no reforecast

Warnings (forecast runs; results may read low)
----------------------------------------------
* red threshold below amber threshold (the amber band is empty)
* team roles missing from the rate table (priced at 0)
* allocations for members not on the team (contribute nothing)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from forecast_config.loader import ForecastInputs
from forecast_kernel.domain.values import Project, Settings, TeamMember
from forecast_kernel.exceptions import InvalidMonthError
from forecast_engines.workday_calendar import parse_month

_ZERO = Decimal("0")
_ONE = Decimal("1")


@dataclass
class ValidationResult:
    """
    Result of input validation.

    Contract
    --------
    * ``is_valid`` returns ``True`` only when ``errors`` is empty.
    * Warnings do not block a forecast but should be reviewed.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def merge(self, other: ValidationResult) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def validate_settings(settings: Settings) -> ValidationResult:
    """Check the rate table, holidays, discount rate and thresholds."""
    result = ValidationResult()

    rate = settings.discount_rate_annual
    if rate < _ZERO or rate > _ONE:
        result.add_error(f"settings.discount_rate_annual: expected 0..1, got {rate}")

    seen: set[str] = set()
    for i, labor_rate in enumerate(settings.labor_rates):
        path = f"settings.labor_rates[{i}]"
        if not labor_rate.role.strip():
            result.add_error(f"{path}.role: expected non-empty string")
        elif labor_rate.role in seen:
            result.add_error(f"{path}.role: duplicate role '{labor_rate.role}'")
        seen.add(labor_rate.role)
        if labor_rate.hourly_rate < _ZERO:
            result.add_error(f"{path}.hourly_rate: expected non-negative, got {labor_rate.hourly_rate}")

    for i, holiday in enumerate(settings.holidays):
        if holiday.start_date > holiday.end_date:
            result.add_error(
                f"settings.holidays[{i}] ({holiday.name}): start_date "
                f"{holiday.start_date} is after end_date {holiday.end_date}"
            )

    thresholds = settings.traffic_light_thresholds
    if thresholds.amber_percent < _ZERO:
        result.add_error("settings.traffic_light_thresholds.amber_percent: expected non-negative")
    if thresholds.red_percent < _ZERO:
        result.add_error("settings.traffic_light_thresholds.red_percent: expected non-negative")
    if thresholds.red_percent < thresholds.amber_percent:
        result.add_warning(
            f"settings.traffic_light_thresholds: red_percent {thresholds.red_percent} is below "
            f"amber_percent {thresholds.amber_percent}; no forecast can be classified amber"
        )

    return result


def validate_project(
    project: Project,
    team_members: Sequence[TeamMember] | None = None,
    settings: Settings | None = None,
) -> ValidationResult:
    """
    Check a project's dates and every reforecast.

    Team and settings are optional; when given, cross-reference warnings
    (unknown roles, orphaned allocations) are added.
    """
    result = ValidationResult()

    if project.start_date > project.end_date:
        result.add_error(
            f"project.start_date {project.start_date} is after end_date {project.end_date}"
        )

    if project.active_reforecast_id is not None and not any(
        rf.id == project.active_reforecast_id for rf in project.reforecasts
    ):
        result.add_error(
            f"project.active_reforecast_id '{project.active_reforecast_id}' matches no reforecast"
        )

    team_ids = {m.id for m in team_members} if team_members is not None else None

    for r, reforecast in enumerate(project.reforecasts):
        path = f"project.reforecasts[{r}]"
        if reforecast.actual_cost < _ZERO:
            result.add_error(f"{path}.actual_cost: expected non-negative")
        if reforecast.baseline_budget < _ZERO:
            result.add_error(f"{path}.baseline_budget: expected non-negative")

        orphaned: set[str] = set()
        for i, alloc in enumerate(reforecast.allocations):
            apath = f"{path}.allocations[{i}]"
            try:
                parse_month(alloc.month)
            except InvalidMonthError:
                result.add_error(f"{apath}.month: expected YYYY-MM, got {alloc.month!r}")
            if alloc.allocation < _ZERO or alloc.allocation > _ONE:
                result.add_error(f"{apath}.allocation: expected 0..1, got {alloc.allocation}")
            if team_ids is not None and alloc.member_id not in team_ids:
                orphaned.add(alloc.member_id)

        for member_id in sorted(orphaned):
            result.add_warning(
                f"{path}: allocations for member '{member_id}' who is not on the team are ignored"
            )

        for i, window in enumerate(reforecast.productivity_windows):
            wpath = f"{path}.productivity_windows[{i}]"
            if window.start_date > window.end_date:
                result.add_error(
                    f"{wpath}: start_date {window.start_date} is after end_date {window.end_date}"
                )
            if window.factor < _ZERO or window.factor > _ONE:
                result.add_error(f"{wpath}.factor: expected 0..1, got {window.factor}")

    if team_members is not None and settings is not None:
        known_roles = {r.role for r in settings.labor_rates}
        for member in team_members:
            if member.role not in known_roles:
                result.add_warning(
                    f"team member '{member.id}' has role '{member.role}' with no labor rate; "
                    f"their cost is 0"
                )

    return result


def validate_forecast_inputs(inputs: ForecastInputs) -> ValidationResult:
    """Validate settings and project (with team cross-references) together."""
    result = validate_settings(inputs.settings)
    result.merge(validate_project(inputs.project, inputs.team_members, inputs.settings))
    return result
