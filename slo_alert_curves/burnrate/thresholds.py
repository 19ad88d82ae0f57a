"""
Error-budget thresholds for multi-window burn-rate alerting.

A window with burn rate ``b`` and duration ``d`` fires once the observed
error rate ``x`` has been sustained for ``b * budget * d / x``. The
numerator is the window's error threshold; ``d`` bounds how long the
window can take to see the condition.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from datetime import timedelta

from slo_alert_curves.burnrate.models import HOUR, ThresholdEntry, ThresholdMap, Window
from slo_alert_curves.core.constants import DEFAULT_SEVERITY_ORDER
from slo_alert_curves.core.exceptions import ConfigurationError, InvalidWindowError
from slo_alert_curves.core.logging import EventType, get_logger, log_event

logger = get_logger(__name__)


def error_budget(slo_target_percent: float) -> float:
    """Return the error budget fraction for an SLO target in percent.

    Raises:
        ConfigurationError: If the target is not strictly between 0 and 100.
    """
    if not 0.0 < slo_target_percent < 100.0:
        raise ConfigurationError(
            "slo_target_percent",
            reason="must be strictly between 0 and 100",
            value=slo_target_percent,
        )
    return 1.0 - (slo_target_percent / 100.0)


def validate_windows(windows: Sequence[Window]) -> None:
    """Reject window definitions that would produce degenerate curves.

    Raises:
        InvalidWindowError: On the first window with a non-positive duration
            or burn rate, or an empty severity label.
    """
    for index, window in enumerate(windows):
        if window.duration.total_seconds() <= 0:
            raise InvalidWindowError(
                index, "duration", reason="must be positive", value=window.duration
            )
        if not window.burn_rate > 0 or math.isinf(window.burn_rate):
            raise InvalidWindowError(
                index, "burn_rate", reason="must be a positive number", value=window.burn_rate
            )
        if not str(window.severity).strip():
            raise InvalidWindowError(index, "severity", reason="must not be empty")


def order_severities(
    windows: Iterable[Window],
    severity_order: Sequence[str] | None = None,
) -> list[str]:
    """Return the scan order for the severities used by ``windows``.

    Severities listed in ``severity_order`` come first, in that order;
    anything else follows in order of first appearance.
    """
    preferred = [str(s) for s in (DEFAULT_SEVERITY_ORDER if severity_order is None else severity_order)]
    seen = list(dict.fromkeys(str(w.severity) for w in windows))
    ordered = [s for s in preferred if s in seen]
    ordered.extend(s for s in seen if s not in ordered)
    return ordered


def compute_thresholds(
    error_budget: float,
    windows: Sequence[Window],
    *,
    severity_order: Sequence[str] | None = None,
    unit: timedelta = HOUR,
) -> ThresholdMap:
    """Derive per-severity error-rate thresholds from window definitions.

    No validation is performed here; see :func:`validate_windows`.

    Args:
        error_budget: Allowed failure fraction, ``1 - slo / 100``.
        windows: Alerting windows.
        severity_order: Severity scan order used to break ties between
            classes. Defaults to most severe first.
        unit: Time unit of the curve's detection-time axis.

    Returns:
        Mapping of severity to threshold entries, iterated in scan order.
        Entries within a severity keep window order.
    """
    thresholds: ThresholdMap = {
        severity: [] for severity in order_severities(windows, severity_order)
    }

    for window in windows:
        d = window.duration_in(unit)
        thresholds[str(window.severity)].append(
            ThresholdEntry(error_threshold=window.burn_rate * error_budget * d, duration=d)
        )

    log_event(
        logger,
        logging.DEBUG,
        EventType.THRESHOLDS_COMPUTED,
        f"budget={error_budget:g}",
        f"{len(windows)} windows across {len(thresholds)} severities",
        entries=",".join(f"{severity}:{len(entries)}" for severity, entries in thresholds.items()),
    )
    return thresholds
