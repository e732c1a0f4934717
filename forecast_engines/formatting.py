"""
Display formatting for forecast figures.

Rounding is half away from zero (``ROUND_HALF_UP`` on Decimal), matching
how spreadsheet and browser number formatting present the same values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from forecast_engines.workday_calendar import parse_month

# English regardless of the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _quantum(decimals: int) -> Decimal:
    return Decimal(1).scaleb(-decimals)


def format_number(value: Decimal, decimals: int = 0) -> str:
    """Thousands-separated number: ``format_number(Decimal("1234.5"))`` -> ``"1,235"``."""
    rounded = Decimal(value).quantize(_quantum(decimals), rounding=ROUND_HALF_UP)
    return f"{rounded:,.{decimals}f}"


def format_currency(value: Decimal, show_cents: bool = False) -> str:
    """US dollar amount, whole dollars unless ``show_cents``: ``"-$1,250"``."""
    decimals = 2 if show_cents else 0
    rounded = Decimal(value).quantize(_quantum(decimals), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.{decimals}f}"


def format_percent_value(value: Decimal, decimals: int = 1) -> str:
    """An already-computed percentage: ``Decimal("10.54")`` -> ``"10.5%"``. Does not multiply by 100."""
    rounded = Decimal(value).quantize(_quantum(decimals), rounding=ROUND_HALF_UP)
    return f"{rounded:.{decimals}f}%"


def format_month_label(month: str) -> str:
    """``"2026-06"`` -> ``"Jun 2026"``."""
    year, mon = parse_month(month)
    return f"{MONTH_ABBREVIATIONS[mon - 1]} {year}"
