"""
API module - data contract for chart renderers.

This module contains:
    - models: Pydantic data models for the exported curve payload
"""

from slo_alert_curves.api.models import (
    API_SCHEMA_VERSION,
    ChartDomain,
    CurvesPayload,
    PointModel,
    SeriesModel,
)

__all__ = [
    "API_SCHEMA_VERSION",
    "ChartDomain",
    "CurvesPayload",
    "PointModel",
    "SeriesModel",
]
