"""
Multi-window burn-rate alerting curves.

This module converts alerting windows into per-severity error-rate
thresholds and samples the fastest detection time over a sweep of
observed error rates.
"""

from slo_alert_curves.burnrate.models import (
    AlertCurves,
    DetectionResult,
    Point,
    ThresholdEntry,
    ThresholdMap,
    Window,
)
from slo_alert_curves.burnrate.thresholds import (
    compute_thresholds,
    error_budget,
    order_severities,
    validate_windows,
)
from slo_alert_curves.burnrate.sampler import (
    CurveSampler,
    detection_time,
    generate_curves,
    sweep_error_rates,
)

__all__ = [
    "AlertCurves",
    "DetectionResult",
    "Point",
    "ThresholdEntry",
    "ThresholdMap",
    "Window",
    "compute_thresholds",
    "error_budget",
    "order_severities",
    "validate_windows",
    "CurveSampler",
    "detection_time",
    "generate_curves",
    "sweep_error_rates",
]
