"""
Pydantic data models for handing alerting curves to a renderer.

This module defines the stable, versioned data contract between the curve
generator and chart renderers:
- Curve points and per-severity series
- The chart domain the curves are meant to be drawn in
- Policy metadata needed to label a chart

Renderers consume the JSON form of ``CurvesPayload``; nothing flows back.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator

from slo_alert_curves.burnrate.models import AlertCurves
from slo_alert_curves.core.constants import (
    CHART_X_MAX_PERCENT,
    CHART_X_MIN_PERCENT,
    CHART_Y_MIN_HOURS,
    chart_y_max_hours,
)

# =============================================================================
# Schema Version - Increment when breaking changes are made
# =============================================================================

API_SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Curve Models
# =============================================================================


class PointModel(BaseModel):
    """One curve sample."""

    x: float = Field(..., gt=0, description="Error rate in percent")
    y: float = Field(..., ge=0, description="Detection time in hours")


class SeriesModel(BaseModel):
    """Ordered curve samples for one severity class."""

    severity: str = Field(..., min_length=1, description="Severity class, e.g. page or ticket")
    points: list[PointModel] = Field(default_factory=list, description="Points in sweep order")


class ChartDomain(BaseModel):
    """Log-log axis bounds the curves are drawn in."""

    x_min: float = Field(CHART_X_MIN_PERCENT, gt=0, description="Lowest error rate in percent")
    x_max: float = Field(CHART_X_MAX_PERCENT, gt=0, description="Highest error rate in percent")
    y_min: float = Field(CHART_Y_MIN_HOURS, gt=0, description="Fastest detection time in hours")
    y_max: float = Field(..., gt=0, description="Slowest detection time in hours")

    @model_validator(mode="after")
    def validate_bounds(self) -> ChartDomain:
        """Ensure both axes are non-empty ranges."""
        if self.x_min >= self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must be below x_max ({self.x_max})")
        if self.y_min >= self.y_max:
            raise ValueError(f"y_min ({self.y_min}) must be below y_max ({self.y_max})")
        return self

    @classmethod
    def for_period(cls, slo_period_days: float) -> ChartDomain:
        """Domain for an SLO period: detection time up to the whole period."""
        return cls(y_max=chart_y_max_hours(slo_period_days))


# =============================================================================
# Payload
# =============================================================================


class CurvesPayload(BaseModel):
    """Complete curve export for one alerting policy."""

    schema_version: str = Field(default=API_SCHEMA_VERSION)
    generated_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="ISO timestamp of generation",
    )
    slo_target_percent: float = Field(..., gt=0, lt=100, description="SLO target, e.g. 99.9")
    slo_period_days: float = Field(..., gt=0, description="SLO period in days")
    error_budget: float = Field(..., gt=0, lt=1, description="1 - slo / 100")
    sample_count: int = Field(..., ge=1, description="Number of swept error rates")
    chart_domain: ChartDomain
    series: list[SeriesModel] = Field(default_factory=list)

    def get_series(self, severity: str) -> SeriesModel | None:
        """Return the series for a severity, if present."""
        for item in self.series:
            if item.severity == severity:
                return item
        return None

    @classmethod
    def from_curves(
        cls,
        curves: AlertCurves,
        *,
        slo_target_percent: float,
        slo_period_days: float,
    ) -> CurvesPayload:
        """Build the payload from sampled curves."""
        return cls(
            slo_target_percent=slo_target_percent,
            slo_period_days=slo_period_days,
            error_budget=curves.error_budget,
            sample_count=curves.sample_count,
            chart_domain=ChartDomain.for_period(slo_period_days),
            series=[
                SeriesModel(
                    severity=severity,
                    points=[PointModel(x=p.x, y=p.y) for p in points],
                )
                for severity, points in curves.series.items()
            ],
        )
