"""
Value Objects -- Immutable inputs to the forecast engines.

Responsibility:
    Frozen dataclasses describing the records the engines read: labor rates,
    holidays, productivity windows, monthly allocations, team members,
    reforecasts, projects and global settings.

Architecture position:
    Kernel > Domain -- pure value layer, zero I/O, no engine imports.

Invariants enforced:
    - Every numeric field is a finite ``Decimal``.  Ints and strings are
      coerced at construction; anything that cannot be read as a number,
      and NaN or infinity, raises ``ValueError``.
    - Collections are tuples, so a constructed object is never mutated by
      the engines that consume it.

Non-goals:
    Range checks (allocation in [0, 1], start <= end, non-negative rates)
    are NOT enforced here.  They belong to ``forecast_config.validator``;
    engines defend only against numeric edge cases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation


def to_decimal(value: Decimal | int | str | float, name: str = "value") -> Decimal:
    """Coerce a number-like value to a finite Decimal via its string form."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name}: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"Invalid {name}: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Invalid {name}: {value!r} is not a finite number")
    return result


def _coerce(obj: object, *names: str) -> None:
    for name in names:
        object.__setattr__(obj, name, to_decimal(getattr(obj, name), name))


def _freeze(obj: object, *names: str) -> None:
    for name in names:
        value = getattr(obj, name)
        if not isinstance(value, tuple):
            object.__setattr__(obj, name, tuple(value))


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LaborRate:
    """Hourly rate for a role. Roles are unique within a rate table."""

    role: str
    hourly_rate: Decimal

    def __post_init__(self) -> None:
        _coerce(self, "hourly_rate")


@dataclass(frozen=True)
class Holiday:
    """
    A non-working date range subtracted from available workdays.

    ``end_date`` equals ``start_date`` for single-day holidays.
    """

    id: str
    name: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class TrafficLightThresholds:
    """
    Variance-percent thresholds for the budget-health indicator.

    No ordering between the two is enforced: ``red_percent`` below
    ``amber_percent`` is accepted and yields an empty amber band.
    """

    amber_percent: Decimal = Decimal("5")
    red_percent: Decimal = Decimal("15")

    def __post_init__(self) -> None:
        _coerce(self, "amber_percent", "red_percent")


@dataclass(frozen=True)
class Settings:
    """Global settings shared by every project forecast."""

    discount_rate_annual: Decimal = Decimal("0.03")
    labor_rates: tuple[LaborRate, ...] = ()
    holidays: tuple[Holiday, ...] = ()
    traffic_light_thresholds: TrafficLightThresholds = field(
        default_factory=TrafficLightThresholds
    )

    def __post_init__(self) -> None:
        _coerce(self, "discount_rate_annual")
        _freeze(self, "labor_rates", "holidays")


# ---------------------------------------------------------------------------
# Team
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TeamMember:
    """
    A resolved team member.

    ``id`` is the project assignment id, so ``MonthlyAllocation.member_id``
    references it directly.  Resolution against the team pool happens
    upstream.
    """

    id: str
    name: str
    role: str


@dataclass(frozen=True)
class ProjectAssignment:
    """Links a pool member into a project."""

    id: str
    pool_member_id: str


# ---------------------------------------------------------------------------
# Reforecast
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MonthlyAllocation:
    """Fraction of a member's capacity planned for a month (YYYY-MM)."""

    member_id: str
    month: str
    allocation: Decimal

    def __post_init__(self) -> None:
        _coerce(self, "allocation")


@dataclass(frozen=True)
class ProductivityWindow:
    """A date range during which capacity is multiplied by ``factor``."""

    id: str
    start_date: date
    end_date: date
    factor: Decimal

    def __post_init__(self) -> None:
        _coerce(self, "factor")


@dataclass(frozen=True)
class Reforecast:
    """
    A named snapshot of allocations, productivity windows and budget figures.

    ``start_date`` is the YYYY-MM month the snapshot was opened for;
    ``reforecast_date`` is the day it was prepared.
    """

    id: str
    name: str
    created_at: datetime
    start_date: str
    reforecast_date: date
    allocations: tuple[MonthlyAllocation, ...] = ()
    productivity_windows: tuple[ProductivityWindow, ...] = ()
    actual_cost: Decimal = Decimal("0")
    baseline_budget: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        _coerce(self, "actual_cost", "baseline_budget")
        _freeze(self, "allocations", "productivity_windows")


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Project:
    """A project with its reforecast history and the selector for the active one."""

    id: str
    name: str
    start_date: date
    end_date: date
    assignments: tuple[ProjectAssignment, ...] = ()
    reforecasts: tuple[Reforecast, ...] = ()
    active_reforecast_id: str | None = None

    def __post_init__(self) -> None:
        _freeze(self, "assignments", "reforecasts")
