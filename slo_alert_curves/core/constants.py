"""
Constants shared across the burn-rate curve generator.

Severity classes, sweep parameters, the reference alerting policy and the
chart domain advertised to downstream renderers live here so that every
module reads them from one place.
"""

from __future__ import annotations

from enum import Enum

# =============================================================================
# Severity Classes
# =============================================================================


class Severity(str, Enum):
    """Known alert severity classes.

    The set of severities is open: any non-empty label is accepted by the
    curve generator. These are the classes of the reference policy.
    """

    PAGE = "page"  # Immediate response
    TICKET = "ticket"  # Deferred response

    def __str__(self) -> str:
        return self.value


# Most severe first. Equal detection times resolve to the earlier class.
DEFAULT_SEVERITY_ORDER: tuple[str, ...] = (Severity.PAGE.value, Severity.TICKET.value)


# =============================================================================
# Sampling
# =============================================================================

DEFAULT_SAMPLE_COUNT: int = 1000

# x_i = SWEEP_BASE ** ((n - i - 1) * SWEEP_EXPONENT_STEP)
SWEEP_BASE: float = 0.995
SWEEP_EXPONENT_STEP: int = 2

# Error-rate fractions are reported as percentages on the curve x axis
PERCENT_SCALE: float = 100.0


# =============================================================================
# Reference Policy
# =============================================================================

DEFAULT_SLO_TARGET_PERCENT: float = 99.9
DEFAULT_SLO_PERIOD_DAYS: float = 30.0

# (duration, burn rate, severity)
REFERENCE_WINDOWS: tuple[tuple[str, float, str], ...] = (
    ("1h", 14.4, Severity.PAGE.value),
    ("6h", 6.0, Severity.PAGE.value),
    ("24h", 3.0, Severity.TICKET.value),
    ("72h", 1.0, Severity.TICKET.value),
)


# =============================================================================
# Chart Domain (consumed by external renderers)
# =============================================================================

CHART_X_MIN_PERCENT: float = 0.09
CHART_X_MAX_PERCENT: float = 100.0
CHART_Y_MIN_HOURS: float = 1 / 120.0  # 30 seconds


def chart_y_max_hours(slo_period_days: float) -> float:
    """Upper bound of the detection-time axis for an SLO period."""
    return slo_period_days * 24.0


# =============================================================================
# Output
# =============================================================================


class OutputFormat(str, Enum):
    """Supported curve export formats."""

    CSV = "csv"
    JSON = "json"


DEFAULT_OUTPUT_PATH: str = "slo_alert_curves.csv"
DEFAULT_OUTPUT_FORMAT: str = OutputFormat.CSV.value
