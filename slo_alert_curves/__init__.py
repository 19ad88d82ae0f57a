"""
SLO Burn-Rate Alerting Curves.

Computes multi-window burn-rate alerting curves for a service-level
objective: for a swept range of observed error rates, the minimum time to
detection and the severity class (page, ticket, ...) that detects first.

Package Structure:
    - core: Configuration, constants, exceptions, logging, utils
    - burnrate: Window thresholds and detection-time curve sampling
    - api: Versioned data contract for chart renderers
    - export: DataFrame / CSV / JSON hand-off of the curves

Example usage:
    from slo_alert_curves import CurveSampler, get_config
    from slo_alert_curves.export import write_curves

    curves = CurveSampler(get_config()).generate()
    page_points = curves["page"]
"""

__version__ = "1.0.0"

# Core exports - most commonly used items
from slo_alert_curves.burnrate import (
    AlertCurves,
    CurveSampler,
    DetectionResult,
    Point,
    ThresholdEntry,
    Window,
    compute_thresholds,
    detection_time,
    error_budget,
    generate_curves,
)
from slo_alert_curves.core.config import CurvesConfig, get_config
from slo_alert_curves.core.constants import Severity
from slo_alert_curves.core.exceptions import CurveError
from slo_alert_curves.core.logging import configure_logging, get_logger

__all__ = [
    # Version
    "__version__",
    # Config
    "get_config",
    "CurvesConfig",
    # Constants
    "Severity",
    # Models
    "Window",
    "ThresholdEntry",
    "Point",
    "DetectionResult",
    "AlertCurves",
    # Curve generation
    "error_budget",
    "compute_thresholds",
    "detection_time",
    "generate_curves",
    "CurveSampler",
    # Exceptions
    "CurveError",
    # Logging
    "get_logger",
    "configure_logging",
]
