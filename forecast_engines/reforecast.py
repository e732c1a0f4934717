"""
Module: forecast_engines.reforecast
Responsibility:
    Select the reforecast a calculation runs against, and build new
    reforecast snapshots (a project's initial baseline, or a copy of an
    existing reforecast under a new name).

Architecture position:
    Engines -- pure helpers, zero I/O.  Creation takes an injected Clock
    for ``created_at`` and ``reforecast_date``; ids are random UUIDs.

Selection rules:
    - Active: the reforecast whose id equals ``active_reforecast_id``, else
      the first reforecast in the project's list, else None.
    - Most recent: latest ``reforecast_date``; ties go to the latest
      ``created_at``.

Usage:
    from forecast_engines.reforecast import create_new_reforecast

    rf = create_new_reforecast("Q3 refresh", project.start_date, clock, source=baseline)
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from uuid import uuid4

from forecast_kernel.domain.clock import Clock
from forecast_kernel.domain.values import Project, Reforecast
from forecast_kernel.logging_config import get_logger
from forecast_engines.workday_calendar import format_month

logger = get_logger("engines.reforecast")

BASELINE_NAME = "Baseline"


def generate_id() -> str:
    return str(uuid4())


def get_active_reforecast(project: Project) -> Reforecast | None:
    """The reforecast a calculation should use, or None if there is none."""
    if project.active_reforecast_id is not None:
        for reforecast in project.reforecasts:
            if reforecast.id == project.active_reforecast_id:
                return reforecast
        logger.debug("active_reforecast_not_found", extra={
            "project_id": project.id,
            "active_reforecast_id": project.active_reforecast_id,
        })
    return project.reforecasts[0] if project.reforecasts else None


def get_most_recent_reforecast(project: Project) -> Reforecast | None:
    """The newest reforecast by ``reforecast_date``, then ``created_at``."""
    if not project.reforecasts:
        return None
    return max(
        project.reforecasts,
        key=lambda rf: (rf.reforecast_date, rf.created_at),
    )


def create_baseline_reforecast(
    project_start_date: date,
    clock: Clock,
    baseline_budget: Decimal = Decimal("0"),
) -> Reforecast:
    """An empty "Baseline" reforecast for a new project."""
    now = clock.now_utc()
    return Reforecast(
        id=generate_id(),
        name=BASELINE_NAME,
        created_at=now,
        start_date=format_month(project_start_date),
        reforecast_date=now.date(),
        baseline_budget=baseline_budget,
    )


def create_new_reforecast(
    name: str,
    project_start_date: date,
    clock: Clock,
    source: Reforecast | None = None,
) -> Reforecast:
    """
    A new reforecast, optionally seeded from ``source``.

    Allocations are copied as-is; productivity windows are copied with
    fresh ids.  Actual cost and baseline budget carry over (the budget
    persists until re-baselined).  ``reforecast_date`` is always today.
    """
    now = clock.now_utc()

    if source is None:
        allocations = ()
        windows = ()
        actual_cost = Decimal("0")
        baseline_budget = Decimal("0")
    else:
        allocations = source.allocations
        windows = tuple(replace(w, id=generate_id()) for w in source.productivity_windows)
        actual_cost = source.actual_cost
        baseline_budget = source.baseline_budget

    reforecast = Reforecast(
        id=generate_id(),
        name=name,
        created_at=now,
        start_date=format_month(project_start_date),
        reforecast_date=now.date(),
        allocations=allocations,
        productivity_windows=windows,
        actual_cost=actual_cost,
        baseline_budget=baseline_budget,
    )

    logger.info("reforecast_created", extra={
        "reforecast_id": reforecast.id,
        "source_id": source.id if source is not None else None,
        "allocation_count": len(allocations),
        "window_count": len(windows),
    })
    return reforecast
