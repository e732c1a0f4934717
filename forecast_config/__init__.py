"""
forecast_config -- YAML input loading and validation for the forecast engines.

Responsibility:
    Turns YAML documents into the kernel's frozen value objects
    (``Settings``, ``Project``, resolved ``TeamMember`` list) and checks them
    before a forecast runs.  The engines never read files; this package is
    the only place configuration is parsed.

Architecture position:
    Configuration -- sits above ``forecast_kernel``.  The kernel MUST NEVER
    import from ``forecast_config``.

Failure modes:
    - ``ConfigurationLoadError`` -- missing key or unparseable value.
    - ``InvalidConfigurationError`` -- ``load_forecast_inputs(validate=True)``
      found validation errors.

Usage:
    from forecast_config import load_forecast_inputs

    inputs = load_forecast_inputs(Path("project.yaml"), validate=True)
"""

from forecast_config.loader import (
    ForecastInputs,
    compute_checksum,
    default_settings,
    load_default_settings,
    load_forecast_inputs,
    load_settings,
    parse_project,
    parse_settings,
    parse_team,
)
from forecast_config.validator import (
    ValidationResult,
    validate_forecast_inputs,
    validate_project,
    validate_settings,
)

__all__ = [
    "ForecastInputs",
    "compute_checksum",
    "default_settings",
    "load_default_settings",
    "load_forecast_inputs",
    "load_settings",
    "parse_project",
    "parse_settings",
    "parse_team",
    "ValidationResult",
    "validate_forecast_inputs",
    "validate_project",
    "validate_settings",
]
