"""
Net present value of a monthly cost stream.

The discount rate is stored ANNUAL and converted to a monthly rate
(``annual / 12``) before discounting.  This differs on purpose from a
spreadsheet ``=NPV(rate, flows)``, which takes the per-period rate directly.

    NPV = sum( cash_flow_i / (1 + annual / 12) ** i )  for i = 1..n

An empty stream is worth 0; a zero rate yields the undiscounted sum.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from forecast_kernel.logging_config import get_logger
from forecast_engines.tracer import traced_engine

logger = get_logger("engines.npv")

MONTHS_PER_YEAR = Decimal("12")


@traced_engine("npv", "1.0", fingerprint_fields=("annual_discount_rate", "monthly_cash_flows"))
def calculate_npv(
    annual_discount_rate: Decimal,
    monthly_cash_flows: Sequence[Decimal],
) -> Decimal:
    monthly_rate = annual_discount_rate / MONTHS_PER_YEAR
    growth = Decimal("1") + monthly_rate

    npv = Decimal("0")
    for period, cash_flow in enumerate(monthly_cash_flows, start=1):
        npv += cash_flow / growth ** period

    logger.debug("npv_calculated", extra={
        "annual_discount_rate": str(annual_discount_rate),
        "periods": len(monthly_cash_flows),
        "npv": str(npv),
    })
    return npv
