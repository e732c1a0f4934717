"""
forecast_engines.tracer -- Engine invocation tracer emitting FORECAST_ENGINE_TRACE.

Responsibility:
    Provide a lightweight decorator (``@traced_engine``) that wraps pure
    engine invocations with structured trace logging.  The trace captures
    engine_name, engine_version, input_fingerprint (deterministic SHA-256
    hash of selected inputs), and duration_ms.

    The outermost traced call binds a fresh ``calculation_id`` in
    ``LogContext``; every record logged during the call, nested engine
    traces included, carries it.  Nested traced calls reuse the id.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Does NOT introduce I/O into engines; emits a log record only.

Invariants enforced:
    - Fingerprint computation is deterministic: _canonicalize produces
      stable string representations of values; dict keys are sorted; the
      hash is SHA-256 truncated to 16 hex chars.
    - Engine purity: the decorator only reads arguments and emits a log
      record; it does not mutate inputs or inject side effects.

Failure modes:
    - If fingerprint_fields reference parameters that were not supplied, the
      missing field is recorded as "null".

Usage:
    from forecast_engines.tracer import traced_engine

    @traced_engine("npv", "1.0", fingerprint_fields=("annual_discount_rate",))
    def calculate_npv(annual_discount_rate, monthly_cash_flows):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import time
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import uuid4

from forecast_kernel.logging_config import LogContext, get_logger

_logger = get_logger("engines.tracer")


def _canonicalize(value: Any) -> str:
    """Produce a stable string representation of a value for fingerprinting.

    Postconditions:
        Returns a deterministic string for None, numbers, Decimal, dates,
        str, dataclasses (field order), dict (sorted keys) and list/tuple
        (order-preserved).  Unknown types fall back to ``str(value)``.
    """
    if value is None:
        return "null"
    if isinstance(value, (bool, int, float, Decimal)):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        items = [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
        return (
            type(value).__name__
            + "("
            + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items)
            + ")"
        )
    if isinstance(value, dict):
        items = sorted(value.items())
        return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: dict[str, Any],
) -> str:
    """Compute a deterministic SHA-256 fingerprint of selected input fields.

    Only the fields listed in fingerprint_fields are included. Missing
    fields are recorded as "null". The result is a hex digest prefix (16 chars).
    """
    parts: list[str] = []
    for name in fingerprint_fields:
        val = arguments.get(name)
        parts.append(f"{name}={_canonicalize(val)}")
    canonical = "|".join(parts)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorator that emits FORECAST_ENGINE_TRACE for pure engine invocations.

    Args:
        engine_name: Engine identifier (e.g., "forecast").
        engine_version: Engine version (e.g., "1.0").
        fingerprint_fields: Parameter names (positional or keyword) to
            include in the input fingerprint hash.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fp = ""
            if fingerprint_fields:
                bound = signature.bind_partial(*args, **kwargs)
                fp = compute_input_fingerprint(fingerprint_fields, dict(bound.arguments))

            # Nested engines join the calculation of the outermost call
            calculation_id = LogContext.get("calculation_id") or uuid4().hex
            with LogContext.bind(calculation_id=calculation_id):
                t0 = time.monotonic()
                result = func(*args, **kwargs)
                duration_ms = round((time.monotonic() - t0) * 1000, 2)

                _logger.info(
                    "FORECAST_ENGINE_TRACE",
                    extra={
                        "trace_type": "FORECAST_ENGINE_TRACE",
                        "engine_name": engine_name,
                        "engine_version": engine_version,
                        "input_fingerprint": fp,
                        "duration_ms": duration_ms,
                        "function": func.__qualname__,
                    },
                )
            return result

        return wrapper

    return decorator
