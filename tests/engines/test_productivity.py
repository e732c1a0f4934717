"""Tests for the day-weighted productivity factor."""

from datetime import date
from decimal import Decimal

from forecast_engines.productivity import PRODUCTIVITY_WEIGHTING, get_productivity_factor
from forecast_kernel.domain.values import ProductivityWindow


def _window(wid: str, start: date, end: date, factor: str) -> ProductivityWindow:
    return ProductivityWindow(id=wid, start_date=start, end_date=end, factor=Decimal(factor))


class TestProductivityFactor:

    def test_weighting_rule(self):
        assert PRODUCTIVITY_WEIGHTING == "calendar_days"

    def test_no_windows_is_full_productivity(self):
        assert get_productivity_factor("2026-09", []) == Decimal("1")

    def test_window_outside_month_ignored(self):
        windows = [_window("w1", date(2026, 7, 1), date(2026, 7, 31), "0.5")]
        assert get_productivity_factor("2026-09", windows) == Decimal("1")

    def test_window_covering_whole_month(self):
        windows = [_window("w1", date(2026, 8, 20), date(2026, 10, 10), "0.5")]
        assert get_productivity_factor("2026-09", windows) == Decimal("0.5")

    def test_one_week_at_zero_blends(self):
        """A reduced week lowers the month only in proportion to its days."""
        windows = [_window("w1", date(2026, 9, 1), date(2026, 9, 7), "0")]
        factor = get_productivity_factor("2026-09", windows)
        assert factor == Decimal(23) / Decimal(30)
        assert Decimal("0.76") < factor < Decimal("0.77")

    def test_overlap_takes_minimum(self):
        windows = [
            _window("w1", date(2026, 9, 1), date(2026, 9, 6), "0.5"),
            _window("w2", date(2026, 9, 4), date(2026, 9, 6), "0.25"),
        ]
        # 3 days at 0.5, 3 days at 0.25, 24 days at 1
        assert get_productivity_factor("2026-09", windows) == Decimal("0.875")

    def test_overlap_order_independent(self):
        first = _window("w1", date(2026, 9, 1), date(2026, 9, 6), "0.5")
        second = _window("w2", date(2026, 9, 4), date(2026, 9, 6), "0.25")
        assert get_productivity_factor("2026-09", [first, second]) == get_productivity_factor(
            "2026-09", [second, first],
        )

    def test_window_spanning_month_boundary(self):
        windows = [_window("w1", date(2026, 8, 25), date(2026, 9, 5), "0")]
        assert get_productivity_factor("2026-08", windows) == Decimal(24) / Decimal(31)
        assert get_productivity_factor("2026-09", windows) == Decimal(25) / Decimal(30)

    def test_factor_above_one_not_capped(self):
        windows = [_window("w1", date(2026, 9, 1), date(2026, 9, 30), "1.2")]
        assert get_productivity_factor("2026-09", windows) == Decimal("1.2")

    def test_result_within_bounds(self):
        windows = [
            _window("w1", date(2026, 2, 2), date(2026, 2, 13), "0.3"),
            _window("w2", date(2026, 2, 10), date(2026, 2, 20), "0.6"),
        ]
        factor = get_productivity_factor("2026-02", windows)
        assert Decimal("0.3") <= factor <= Decimal("1")
