"""
Detection-time curve sampling.

Sweeps observed error rates over an exponential schedule and, for each
sample, finds the severity whose windows would detect it fastest. The
result is one ordered point sequence per severity, ready for a log-log
chart of error rate (percent) against detection time (hours).

Tie-break: severities are scanned in threshold-map order (most severe
first by default) and a candidate replaces the running best only when it
is strictly faster, so equal detection times go to the earlier severity.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import numpy as np

from slo_alert_curves.burnrate.models import (
    AlertCurves,
    DetectionResult,
    Point,
    ThresholdMap,
    Window,
)
from slo_alert_curves.burnrate.thresholds import (
    compute_thresholds,
    error_budget as compute_error_budget,
    validate_windows,
)
from slo_alert_curves.core.constants import (
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_SEVERITY_ORDER,
    PERCENT_SCALE,
    SWEEP_BASE,
    SWEEP_EXPONENT_STEP,
)
from slo_alert_curves.core.exceptions import ConfigurationError, InvalidErrorRateError
from slo_alert_curves.core.logging import EventType, get_logger, log_event

if TYPE_CHECKING:
    from slo_alert_curves.core.config import CurvesConfig

logger = get_logger(__name__)


def sweep_error_rates(sample_count: int = DEFAULT_SAMPLE_COUNT, base: float = SWEEP_BASE) -> np.ndarray:
    """Return the swept error-rate fractions in ascending sample order.

    ``x_i = base ** ((n - i - 1) * 2)``: dense near zero, ending at exactly
    1.0 for the last sample.

    Raises:
        ConfigurationError: If ``sample_count`` is below 1 or ``base`` is
            outside (0, 1).
    """
    if sample_count < 1:
        raise ConfigurationError("sample_count", reason="must be at least 1", value=sample_count)
    if not 0.0 < base < 1.0:
        raise ConfigurationError("sweep_base", reason="must be strictly between 0 and 1", value=base)

    exponents = (sample_count - np.arange(sample_count) - 1) * SWEEP_EXPONENT_STEP
    return np.power(base, exponents.astype(np.float64))


def detection_time(thresholds: ThresholdMap, x: float) -> DetectionResult:
    """Find the severity that detects error rate ``x`` fastest.

    Args:
        thresholds: Per-severity threshold entries, scanned in map order.
        x: Observed error-rate fraction, strictly positive.

    Returns:
        The winning severity and its detection time. Candidates slower than
        their own window duration are discarded; if none remain, the result
        carries no severity.

    Raises:
        InvalidErrorRateError: If ``x`` is not a finite positive number.
    """
    if not math.isfinite(x) or x <= 0.0:
        raise InvalidErrorRateError(x)

    best_severity: str | None = None
    best_value: float | None = None

    for severity, entries in thresholds.items():
        for entry in entries:
            v = entry.error_threshold / x
            if v > entry.duration:
                continue
            if best_value is None or v < best_value:
                best_value = v
                best_severity = severity

    return DetectionResult(severity=best_severity, detection_hours=best_value)


def generate_curves(
    error_budget: float,
    windows: Sequence[Window],
    *,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    severity_order: Sequence[str] | None = None,
    stats: dict[str, int] | None = None,
) -> AlertCurves:
    """Sample detection-time curves for a set of alerting windows.

    Args:
        error_budget: Allowed failure fraction, ``1 - slo / 100``.
        windows: Alerting windows; assumed valid.
        sample_count: Number of swept error rates.
        severity_order: Severity scan order. Every severity listed here gets
            a series even when it never detects anything.
        stats: Optional counters to accumulate sample outcomes into.

    Returns:
        Curves with points ``(x * 100, detection_hours)`` per severity.
    """
    order = DEFAULT_SEVERITY_ORDER if severity_order is None else severity_order
    thresholds = compute_thresholds(error_budget, windows, severity_order=order)

    series: dict[str, list[Point]] = {str(s): [] for s in order}
    for severity in thresholds:
        series.setdefault(severity, [])

    counts = {"evaluated": 0, "detected": 0, "undetected": 0, "skipped": 0}

    for i, x in enumerate(sweep_error_rates(sample_count).tolist()):
        if x <= 0.0:
            # Underflow for very large sample counts
            counts["skipped"] += 1
            log_event(
                logger,
                logging.WARNING,
                EventType.SAMPLE_SKIPPED,
                f"budget={error_budget:g}",
                "error rate underflowed to zero",
                sample_index=i,
            )
            continue

        counts["evaluated"] += 1
        result = detection_time(thresholds, x)
        if not result.detected:
            counts["undetected"] += 1
            continue

        counts["detected"] += 1
        series[result.severity].append(Point(x=x * PERCENT_SCALE, y=result.detection_hours))

    if stats is not None:
        for key, value in counts.items():
            stats[key] = stats.get(key, 0) + value

    logger.debug(
        "Sampled %d error rates: %d detected, %d undetected, %d skipped",
        sample_count,
        counts["detected"],
        counts["undetected"],
        counts["skipped"],
    )

    return AlertCurves(
        series={severity: tuple(points) for severity, points in series.items()},
        error_budget=error_budget,
        sample_count=sample_count,
    )


class CurveSampler:
    """
    Generates burn-rate alerting curves for a configured policy.

    Validates the policy before sampling and keeps running statistics
    across runs.

    Usage:
        sampler = CurveSampler(get_config())
        curves = sampler.generate()
    """

    def __init__(self, config: CurvesConfig):
        """
        Initialize the curve sampler.

        Args:
            config: Configuration holding the policy and sampling settings.
        """
        self.config = config
        self._run_count = 0
        self._stats: dict[str, int] = {}

    @property
    def policy_label(self) -> str:
        return f"slo={self.config.policy.slo_target_percent:g}"

    def generate(self, windows: Sequence[Window] | None = None) -> AlertCurves:
        """
        Generate curves for the configured policy.

        Args:
            windows: Optional windows replacing the configured ones.

        Returns:
            Curves for every configured severity.

        Raises:
            ConfigurationError: If the SLO target or a window is invalid.
        """
        policy = self.config.policy
        active_windows = tuple(policy.windows if windows is None else windows)

        budget = compute_error_budget(policy.slo_target_percent)
        validate_windows(active_windows)

        curves = generate_curves(
            budget,
            active_windows,
            sample_count=self.config.sampling.sample_count,
            severity_order=policy.severity_order,
            stats=self._stats,
        )
        self._run_count += 1

        log_event(
            logger,
            logging.INFO,
            EventType.CURVES_GENERATED,
            self.policy_label,
            f"{curves.total_points} points across {len(curves.severities)} severities",
            windows=len(active_windows),
            samples=curves.sample_count,
        )
        return curves

    def get_stats(self) -> dict[str, Any]:
        """Get sampling statistics."""
        return {
            "runs": self._run_count,
            "samples_evaluated": self._stats.get("evaluated", 0),
            "samples_detected": self._stats.get("detected", 0),
            "samples_undetected": self._stats.get("undetected", 0),
            "samples_skipped": self._stats.get("skipped", 0),
        }
