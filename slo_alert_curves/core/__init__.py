"""
Core module - constants, exceptions, logging and utilities.

Configuration lives in ``slo_alert_curves.core.config``; it is not
re-exported here because it depends on the burnrate models.
"""

from slo_alert_curves.core.constants import (
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_SEVERITY_ORDER,
    DEFAULT_SLO_PERIOD_DAYS,
    DEFAULT_SLO_TARGET_PERCENT,
    REFERENCE_WINDOWS,
    OutputFormat,
    Severity,
)
from slo_alert_curves.core.exceptions import (
    ConfigurationError,
    CurveError,
    ExportError,
    InvalidErrorRateError,
    InvalidWindowError,
)
from slo_alert_curves.core.logging import (
    EventType,
    LogContext,
    configure_logging,
    get_logger,
    log_event,
)

__all__ = [
    # Constants
    "DEFAULT_SAMPLE_COUNT",
    "DEFAULT_SEVERITY_ORDER",
    "DEFAULT_SLO_PERIOD_DAYS",
    "DEFAULT_SLO_TARGET_PERCENT",
    "REFERENCE_WINDOWS",
    "OutputFormat",
    "Severity",
    # Exceptions
    "ConfigurationError",
    "CurveError",
    "ExportError",
    "InvalidErrorRateError",
    "InvalidWindowError",
    # Logging
    "EventType",
    "LogContext",
    "configure_logging",
    "get_logger",
    "log_event",
]
