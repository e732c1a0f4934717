"""
Module: forecast_engines.costs
Responsibility:
    Combine available hours, allocation fraction, labor rate and
    productivity factor into member-level and month-level cost and hours.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumes the allocation index; driven per month by the forecast
    orchestrator.

Formulas:
    member cost  = hourly_rate x available_hours x allocation x factor
    member hours = available_hours x allocation x factor

Invariants enforced:
    - Only members whose allocation is strictly greater than 0 contribute;
      members at 0 (or absent) do not trigger a rate lookup.
    - An unresolved role prices at 0 (silent degradation, not an error).
    - Allocations for member ids that are not on the resolved team
      ("orphaned", e.g. after an assignment was removed) contribute nothing.
    - Diagnostics never change a computed total.

Failure modes:
    None for business data.  Unresolved roles and orphaned allocations are
    recorded on an optional DiagnosticsCollector and logged at WARNING the
    first time each one is seen.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal

from forecast_kernel.domain.results import ForecastDiagnostics
from forecast_kernel.domain.values import LaborRate, TeamMember
from forecast_kernel.logging_config import get_logger
from forecast_engines.allocation_index import AllocationIndex

logger = get_logger("engines.costs")

_ZERO = Decimal("0")
_ONE = Decimal("1")


class DiagnosticsCollector:
    """
    Side channel for references the cost calculator could not resolve.

    Contract:
        Mutable accumulator owned by a single orchestrator call.
        ``freeze()`` returns an immutable ForecastDiagnostics snapshot with
        sorted, de-duplicated entries.
    """

    def __init__(self) -> None:
        self._unresolved_roles: set[str] = set()
        self._orphaned_member_ids: set[str] = set()

    def record_unresolved_role(self, role: str, member_id: str, month: str) -> None:
        if role in self._unresolved_roles:
            return
        self._unresolved_roles.add(role)
        logger.warning("member_role_unresolved", extra={
            "role": role,
            "member_id": member_id,
            "month": month,
        })

    def record_orphaned_allocation(self, member_id: str, month: str) -> None:
        if member_id in self._orphaned_member_ids:
            return
        self._orphaned_member_ids.add(member_id)
        logger.warning("allocation_member_not_on_team", extra={
            "member_id": member_id,
            "month": month,
        })

    def freeze(self) -> ForecastDiagnostics:
        return ForecastDiagnostics(
            unresolved_roles=tuple(sorted(self._unresolved_roles)),
            orphaned_member_ids=tuple(sorted(self._orphaned_member_ids)),
        )


def _find_rate(role: str, labor_rates: Iterable[LaborRate]) -> LaborRate | None:
    for rate in labor_rates:
        if rate.role == role:
            return rate
    return None


def get_hourly_rate(role: str, labor_rates: Iterable[LaborRate]) -> Decimal:
    """Hourly rate for a role; 0 when the role is not in the rate table."""
    rate = _find_rate(role, labor_rates)
    return rate.hourly_rate if rate is not None else _ZERO


def calculate_member_monthly_cost(
    allocation: Decimal,
    hourly_rate: Decimal,
    available_hours: Decimal,
    productivity_factor: Decimal = _ONE,
) -> Decimal:
    """cost = hourly_rate x available_hours x allocation x productivity_factor"""
    return hourly_rate * available_hours * allocation * productivity_factor


def calculate_member_monthly_hours(
    allocation: Decimal,
    available_hours: Decimal,
    productivity_factor: Decimal = _ONE,
) -> Decimal:
    """hours = available_hours x allocation x productivity_factor"""
    return available_hours * allocation * productivity_factor


def _record_orphans(
    month: str,
    month_allocations: Mapping[str, Decimal],
    team_ids: set[str],
    diagnostics: DiagnosticsCollector | None,
) -> None:
    if diagnostics is None:
        return
    for member_id, allocation in month_allocations.items():
        if member_id not in team_ids and allocation > _ZERO:
            diagnostics.record_orphaned_allocation(member_id, month)


def calculate_total_monthly_cost(
    month: str,
    index: AllocationIndex,
    team_members: Sequence[TeamMember],
    labor_rates: Sequence[LaborRate],
    available_hours: Decimal,
    productivity_factor: Decimal = _ONE,
    diagnostics: DiagnosticsCollector | None = None,
) -> Decimal:
    """
    Total cost of a month across the resolved team.

    The team list is required for role resolution; allocations for ids not
    on the team are skipped.
    """
    month_allocations = index.month(month)
    if not month_allocations:
        return _ZERO

    total = _ZERO
    for member in team_members:
        allocation = month_allocations.get(member.id, _ZERO)
        if allocation > _ZERO:
            rate = _find_rate(member.role, labor_rates)
            if rate is None:
                if diagnostics is not None:
                    diagnostics.record_unresolved_role(member.role, member.id, month)
                hourly_rate = _ZERO
            else:
                hourly_rate = rate.hourly_rate
            total += calculate_member_monthly_cost(
                allocation, hourly_rate, available_hours, productivity_factor,
            )

    _record_orphans(
        month, month_allocations, {m.id for m in team_members}, diagnostics,
    )
    return total


def calculate_total_monthly_hours(
    month: str,
    index: AllocationIndex,
    available_hours: Decimal,
    productivity_factor: Decimal = _ONE,
    team_members: Sequence[TeamMember] | None = None,
    diagnostics: DiagnosticsCollector | None = None,
) -> Decimal:
    """
    Total hours of a month.  Role-agnostic: no rate lookup is needed.

    When ``team_members`` is given, only allocations for members on the
    team count (orphaned allocations are skipped, matching the cost total).
    Without it every allocation recorded for the month counts.
    """
    month_allocations = index.month(month)
    if not month_allocations:
        return _ZERO

    if team_members is None:
        allocations = [a for a in month_allocations.values() if a > _ZERO]
    else:
        team_ids = {m.id for m in team_members}
        allocations = [
            a for member_id, a in month_allocations.items()
            if member_id in team_ids and a > _ZERO
        ]
        _record_orphans(month, month_allocations, team_ids, diagnostics)

    total = _ZERO
    for allocation in allocations:
        total += calculate_member_monthly_hours(
            allocation, available_hours, productivity_factor,
        )
    return total
