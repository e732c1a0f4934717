"""
Structured JSON logging for the forecast kernel.

Every record under the ``forecast_kernel`` logger namespace is rendered as
one JSON object per line.  A record carries:

- the envelope: ``ts`` (UTC, ISO-8601), ``level``, ``logger``, ``message``;
- the calculation context bound through ``LogContext`` (``project_id``,
  ``reforecast_id``, ``calculation_id``);
- every ``extra=`` field passed by the caller;
- for records logged with ``exc_info``, the exception type, message, code
  and the structured attributes of ``ForecastKernelError`` subclasses.

Engine log messages are event names (``project_metrics_started``), never
prose, so log consumers can filter on ``message`` directly.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any, TextIO
from uuid import UUID

_LOGGER_PREFIX = "forecast_kernel"


# ---------------------------------------------------------------------------
# Calculation context
# ---------------------------------------------------------------------------


class LogContext:
    """
    Calculation-scoped fields attached to every record.

    ``project_id`` and ``reforecast_id`` are bound by the forecast
    orchestrator; ``calculation_id`` is bound by the engine tracer for the
    outermost traced call, so every record of one calculation (including
    nested engine traces) shares it.  Values live in ``contextvars`` and
    are therefore isolated per thread and per asyncio task.
    """

    FIELDS = ("project_id", "reforecast_id", "calculation_id")

    _vars: dict[str, ContextVar[str | None]] = {
        name: ContextVar(f"forecast_log_{name}", default=None) for name in FIELDS
    }

    @classmethod
    def get(cls, name: str) -> str | None:
        var = cls._vars.get(name)
        return var.get() if var is not None else None

    @classmethod
    def get_all(cls) -> dict[str, str]:
        """Bound fields only; unset fields are omitted."""
        return {
            name: value
            for name, var in cls._vars.items()
            if (value := var.get()) is not None
        }

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Set fields for the rest of the current context. None values and unknown names are skipped."""
        for name, value in fields.items():
            if value is not None and name in cls._vars:
                cls._vars[name].set(value)

    @classmethod
    def clear(cls) -> None:
        for var in cls._vars.values():
            var.set(None)

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[type["LogContext"]]:
        """Bind fields for the duration of a ``with`` block, then restore the previous values."""
        tokens = [
            (cls._vars[name], cls._vars[name].set(value))
            for name, value in fields.items()
            if value is not None and name in cls._vars
        ]
        try:
            yield cls
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------

# Attributes every LogRecord has; anything else on a record came from extra=
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (Decimal, UUID)):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    if isinstance(obj, tuple):
        return list(obj)
    return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    for name, value in vars(exc).items():
        if not name.startswith("_") and name != "code":
            fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Logger ``forecast_kernel.<name>``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: TextIO | None = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one structured handler to the ``forecast_kernel`` logger.

    Only the first call has an effect until ``reset_logging`` is called.
    Records do not propagate to the root logger once configured.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(handler)


def reset_logging() -> None:
    """Undo ``configure_logging``. Used by tests."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
