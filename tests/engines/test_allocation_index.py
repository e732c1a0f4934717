"""
Tests for the allocation index.

Covers:
- Two-level lookup with zero default
- Last-write-wins for duplicate (member, month) entries
- Active months from raw allocation entries
"""

from decimal import Decimal

import pytest

from forecast_engines.allocation_index import AllocationIndex, get_active_months
from forecast_kernel.domain.values import MonthlyAllocation


def _alloc(member_id: str, month: str, fraction: str) -> MonthlyAllocation:
    return MonthlyAllocation(member_id=member_id, month=month, allocation=Decimal(fraction))


class TestAllocationIndexLookup:
    """Tests for get/month lookups."""

    def setup_method(self):
        self.index = AllocationIndex.build([
            _alloc("a1", "2026-06", "0.5"),
            _alloc("a2", "2026-06", "0.25"),
            _alloc("a1", "2026-07", "1"),
        ])

    def test_get_present(self):
        assert self.index.get("2026-06", "a1") == Decimal("0.5")
        assert self.index.get("2026-07", "a1") == Decimal("1")

    def test_get_absent_member_is_zero(self):
        assert self.index.get("2026-07", "a2") == Decimal("0")

    def test_get_absent_month_is_zero(self):
        assert self.index.get("2027-01", "a1") == Decimal("0")

    def test_month_view(self):
        assert dict(self.index.month("2026-06")) == {
            "a1": Decimal("0.5"),
            "a2": Decimal("0.25"),
        }

    def test_month_view_unknown_month_empty(self):
        assert dict(self.index.month("2030-01")) == {}

    def test_month_view_is_read_only(self):
        view = self.index.month("2026-06")
        with pytest.raises(TypeError):
            view["a3"] = Decimal("1")  # type: ignore[index]

    def test_contains_and_len(self):
        assert "2026-06" in self.index
        assert "2026-08" not in self.index
        assert len(self.index) == 3

    def test_months_first_seen_order(self):
        assert self.index.months == ("2026-06", "2026-07")


class TestLastWriteWins:
    """Duplicate (member, month) entries resolve to the last one in input order."""

    def test_later_entry_replaces_earlier(self):
        index = AllocationIndex.build([
            _alloc("a1", "2026-06", "0.5"),
            _alloc("a1", "2026-06", "0.8"),
        ])
        assert index.get("2026-06", "a1") == Decimal("0.8")
        assert len(index) == 1

    def test_order_matters(self):
        index = AllocationIndex.build([
            _alloc("a1", "2026-06", "0.8"),
            _alloc("a1", "2026-06", "0.5"),
        ])
        assert index.get("2026-06", "a1") == Decimal("0.5")

    def test_duplicate_logged(self, captured_logs):
        AllocationIndex.build([
            _alloc("a1", "2026-06", "0.5"),
            _alloc("a1", "2026-06", "0.8"),
        ])
        records = [r for r in captured_logs() if r["message"] == "allocation_duplicates_overwritten"]
        assert len(records) == 1
        assert records[0]["overwritten"] == 1

    def test_empty_input(self):
        index = AllocationIndex.build([])
        assert len(index) == 0
        assert index.months == ()


class TestActiveMonths:
    """Active months are months with any non-zero raw allocation entry."""

    def test_sorted_and_non_zero_only(self):
        allocations = [
            _alloc("a1", "2026-09", "0.5"),
            _alloc("a1", "2026-06", "0.5"),
            _alloc("a1", "2026-07", "0"),
        ]
        assert get_active_months(allocations) == ["2026-06", "2026-09"]

    def test_overwritten_to_zero_stays_active(self):
        allocations = [
            _alloc("a1", "2026-06", "0.5"),
            _alloc("a1", "2026-06", "0"),
        ]
        # The index keeps the later 0, but the month still had work booked
        assert AllocationIndex.build(allocations).get("2026-06", "a1") == Decimal("0")
        assert get_active_months(allocations) == ["2026-06"]

    def test_any_member_activates_month(self):
        allocations = [
            _alloc("a1", "2026-06", "0"),
            _alloc("a9", "2026-06", "0.1"),
        ]
        assert get_active_months(allocations) == ["2026-06"]

    def test_months_listed_once(self):
        allocations = [
            _alloc("a1", "2026-07", "0.5"),
            _alloc("a2", "2026-07", "0.5"),
            _alloc("a1", "2026-07", "1"),
        ]
        assert get_active_months(allocations) == ["2026-07"]

    def test_empty(self):
        assert get_active_months([]) == []
