"""
Typed Exception Hierarchy for the Forecast Kernel.

===============================================================================
WHEN THE KERNEL RAISES
===============================================================================

The calculation engines never raise for business-data edge cases. A zero
baseline, a zero EAC, an unknown labor role or an allocation that points at a
member no longer on the team all degrade to a zero contribution and are
reported through ``ForecastDiagnostics`` and WARNING log records.

Exceptions are reserved for input that cannot be interpreted at all:

  - a month literal that is not ``YYYY-MM``
  - a configuration document that cannot be read or is missing keys

Every exception carries a class-level ``code`` (machine-readable) and stores
its context as attributes so it can be logged or serialized without parsing
the message.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    ForecastKernelError (base)
    |
    +-- CalendarError
    |   +-- InvalidMonthError
    |
    +-- ConfigurationError
        +-- ConfigurationLoadError
        +-- InvalidConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Calendar        | INVALID_MONTH               | Month literal is not YYYY-MM
----------------|-----------------------------|-----------------------------------------
Configuration   | CONFIGURATION_LOAD_FAILED   | YAML missing keys or unparseable values
                | INVALID_CONFIGURATION       | Loaded config failed validation

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        inputs = load_forecast_inputs(path)
    except ConfigurationLoadError as e:
        log.error("config_load_failed", extra={"path": e.path, "key": e.key})
"""


class ForecastKernelError(Exception):
    """
    Base exception for all forecast kernel errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "FORECAST_KERNEL_ERROR"


# Calendar exceptions


class CalendarError(ForecastKernelError):
    """Base exception for malformed month literals."""

    code: str = "CALENDAR_ERROR"


class InvalidMonthError(CalendarError):
    """Month literal could not be parsed as YYYY-MM."""

    code: str = "INVALID_MONTH"

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid month {value!r}: expected YYYY-MM")


# Configuration exceptions


class ConfigurationError(ForecastKernelError):
    """Base exception for configuration loading and validation."""

    code: str = "CONFIGURATION_ERROR"


class ConfigurationLoadError(ConfigurationError):
    """A configuration document is missing a key or holds an unparseable value."""

    code: str = "CONFIGURATION_LOAD_FAILED"

    def __init__(self, message: str, key: str | None = None, path: str | None = None):
        self.key = key
        self.path = path
        super().__init__(message)


class InvalidConfigurationError(ConfigurationError):
    """Loaded configuration failed validation."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Configuration has {len(errors)} error(s): " + "; ".join(errors)
        )
