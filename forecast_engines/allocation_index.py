"""
Module: forecast_engines.allocation_index
Responsibility:
    Aggregate a reforecast's flat list of monthly allocations into a
    two-level lookup (month -> member_id -> fraction) for constant-time
    access by the cost calculator.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Last write wins: the index is built in a single pass over the input
      list in its original order, so a later entry for the same
      (member_id, month) replaces an earlier one.  The outcome depends only
      on input order, never on dict iteration order.
    - Absent pairs read as 0, indistinguishable from an explicit 0%.
    - The index is read-only once built.

Usage:
    from forecast_engines.allocation_index import AllocationIndex

    index = AllocationIndex.build(reforecast.allocations)
    index.get("2026-07", "a1")  # Decimal("0.5"), or Decimal("0") if absent
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from types import MappingProxyType

from forecast_kernel.domain.values import MonthlyAllocation
from forecast_kernel.logging_config import get_logger

logger = get_logger("engines.allocation_index")

_ZERO = Decimal("0")
_EMPTY: Mapping[str, Decimal] = MappingProxyType({})


class AllocationIndex:
    """
    Two-level allocation lookup.

    Contract:
        Built once via ``build``; never mutated afterwards.
    Guarantees:
        - ``get`` never raises for unknown months or members.
        - ``month`` returns a read-only view (empty for unknown months).
    """

    __slots__ = ("_by_month",)

    def __init__(self, by_month: dict[str, dict[str, Decimal]]):
        self._by_month = by_month

    @classmethod
    def build(cls, allocations: Iterable[MonthlyAllocation]) -> AllocationIndex:
        by_month: dict[str, dict[str, Decimal]] = {}
        entries = 0
        overwritten = 0
        for alloc in allocations:
            members = by_month.setdefault(alloc.month, {})
            if alloc.member_id in members:
                overwritten += 1
            members[alloc.member_id] = alloc.allocation
            entries += 1

        if overwritten:
            logger.debug("allocation_duplicates_overwritten", extra={
                "entries": entries,
                "overwritten": overwritten,
            })
        return cls(by_month)

    def get(self, month: str, member_id: str) -> Decimal:
        """Allocation fraction for a member in a month, 0 if absent."""
        members = self._by_month.get(month)
        if members is None:
            return _ZERO
        return members.get(member_id, _ZERO)

    def month(self, month: str) -> Mapping[str, Decimal]:
        """All member allocations recorded for a month."""
        members = self._by_month.get(month)
        if members is None:
            return _EMPTY
        return MappingProxyType(members)

    @property
    def months(self) -> tuple[str, ...]:
        """Months with at least one entry, in first-seen order."""
        return tuple(self._by_month)

    def __contains__(self, month: object) -> bool:
        return month in self._by_month

    def __len__(self) -> int:
        return sum(len(members) for members in self._by_month.values())


def get_active_months(allocations: Iterable[MonthlyAllocation]) -> list[str]:
    """
    Sorted months holding at least one non-zero allocation entry.

    Used only to size the burn-rate period.  Counted over the raw entries,
    before last-write-wins aggregation: a month stays active even when a
    later duplicate sets its only allocation back to 0.  Allocations for
    members outside the current team still count.
    """
    return sorted({alloc.month for alloc in allocations if alloc.allocation > _ZERO})
