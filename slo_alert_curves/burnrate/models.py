"""
Data types for multi-window burn-rate alerting curves.

Window definitions flow one way: windows -> thresholds -> sampled curves.
Every type here is immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class Window:
    """A single alerting rule.

    Attributes:
        duration: Lookback span of the window.
        burn_rate: Multiplier on the error budget the window tolerates
            before alerting.
        severity: Severity class the window alerts with (e.g. "page").
    """

    duration: timedelta
    burn_rate: float
    severity: str

    def duration_in(self, unit: timedelta = HOUR) -> float:
        """Return the duration as a float number of ``unit``."""
        return self.duration / unit


@dataclass(frozen=True)
class ThresholdEntry:
    """Error-rate threshold derived from one window.

    ``error_threshold`` divided by an observed error rate gives the time
    the window needs to fire; ``duration`` (same unit) bounds that time.
    """

    error_threshold: float
    duration: float


# Severity class -> entries, in deterministic scan order
ThresholdMap = dict[str, list[ThresholdEntry]]


@dataclass(frozen=True)
class Point:
    """One curve sample: error rate in percent, detection time in hours."""

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class DetectionResult:
    """Fastest detection for one observed error rate.

    When no window can fire, both fields are None.
    """

    severity: str | None = None
    detection_hours: float | None = None

    @property
    def detected(self) -> bool:
        return self.severity is not None


@dataclass(frozen=True)
class AlertCurves:
    """Detection-time curves, one ordered point sequence per severity.

    Points inside a series follow ascending sample index, which is also
    ascending error rate for the exponential sweep.
    """

    series: dict[str, tuple[Point, ...]] = field(default_factory=dict)
    error_budget: float = 0.0
    sample_count: int = 0

    @property
    def severities(self) -> tuple[str, ...]:
        return tuple(self.series)

    @property
    def total_points(self) -> int:
        return sum(len(points) for points in self.series.values())

    def get(self, severity: str) -> tuple[Point, ...]:
        """Return the series for a severity, empty when it never detects."""
        return self.series.get(str(severity), ())

    def __getitem__(self, severity: str) -> tuple[Point, ...]:
        return self.get(severity)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_budget": self.error_budget,
            "sample_count": self.sample_count,
            "series": {
                severity: [point.as_tuple() for point in points]
                for severity, points in self.series.items()
            },
        }
