"""
Hand-off of sampled curves to external renderers.

Curves are flattened into a pandas DataFrame for CSV output and tabular
summaries, or wrapped in the versioned pydantic payload for JSON output.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from slo_alert_curves.api.models import CurvesPayload
from slo_alert_curves.burnrate.models import AlertCurves
from slo_alert_curves.core.constants import OutputFormat
from slo_alert_curves.core.exceptions import ExportError
from slo_alert_curves.core.logging import EventType, get_logger, log_event
from slo_alert_curves.core.utils import ensure_directory

logger = get_logger(__name__)

FRAME_COLUMNS = ["severity", "sample_index", "error_rate_percent", "detection_hours"]
SUMMARY_COLUMNS = [
    "points",
    "min_error_rate_percent",
    "max_error_rate_percent",
    "fastest_detection_hours",
    "slowest_detection_hours",
]


def curves_to_frame(curves: AlertCurves) -> pd.DataFrame:
    """Flatten curves into one row per point.

    ``sample_index`` is the position of the point within its severity's
    series, so sorting by (severity, sample_index) restores sweep order.
    """
    rows = [
        (severity, index, point.x, point.y)
        for severity, points in curves.series.items()
        for index, point in enumerate(points)
    ]
    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    return frame.astype(
        {
            "severity": "object",
            "sample_index": "int64",
            "error_rate_percent": "float64",
            "detection_hours": "float64",
        }
    )


def summarize_curves(curves: AlertCurves) -> pd.DataFrame:
    """Per-severity summary: point count, error-rate range, detection range.

    Severities without points are kept with a zero count and NaN ranges.
    """
    frame = curves_to_frame(curves)
    if frame.empty:
        summary = pd.DataFrame(
            {column: float("nan") for column in SUMMARY_COLUMNS[1:]},
            index=pd.Index(list(curves.severities), name="severity", dtype="object"),
        )
        summary.insert(0, "points", 0)
        return summary

    summary = frame.groupby("severity", sort=False).agg(
        points=("sample_index", "size"),
        min_error_rate_percent=("error_rate_percent", "min"),
        max_error_rate_percent=("error_rate_percent", "max"),
        fastest_detection_hours=("detection_hours", "min"),
        slowest_detection_hours=("detection_hours", "max"),
    )
    summary = summary.reindex(list(curves.severities))
    summary["points"] = summary["points"].fillna(0).astype("int64")
    summary.index.name = "severity"
    return summary


def write_curves(
    curves: AlertCurves,
    path: str | Path,
    *,
    fmt: str = OutputFormat.CSV.value,
    slo_target_percent: float,
    slo_period_days: float,
) -> Path:
    """Write curves to disk for a renderer.

    Args:
        curves: Sampled curves.
        path: Destination file. Parent directories are created.
        fmt: "csv" or "json".
        slo_target_percent: SLO target recorded in JSON output.
        slo_period_days: SLO period, sets the chart's detection-time bound.

    Returns:
        The written path.

    Raises:
        ExportError: On an unsupported format or a failed write.
    """
    output_path = Path(path)
    fmt = str(fmt).lower()
    if fmt not in {f.value for f in OutputFormat}:
        raise ExportError(str(output_path), reason=f"unsupported format '{fmt}'")

    policy = f"slo={slo_target_percent:g}"
    try:
        ensure_directory(output_path.parent)
        if fmt == OutputFormat.CSV.value:
            curves_to_frame(curves).to_csv(output_path, index=False)
        else:
            payload = CurvesPayload.from_curves(
                curves,
                slo_target_percent=slo_target_percent,
                slo_period_days=slo_period_days,
            )
            output_path.write_text(payload.model_dump_json(indent=2))
    except ValidationError as e:
        log_event(
            logger,
            logging.ERROR,
            EventType.EXPORT_FAILED,
            policy,
            f"{e.error_count()} validation errors",
            path=output_path,
        )
        raise ExportError(str(output_path), reason="curves do not fit the renderer contract", cause=e) from e
    except OSError as e:
        log_event(logger, logging.ERROR, EventType.EXPORT_FAILED, policy, str(e), path=output_path)
        raise ExportError(str(output_path), reason="write failed", cause=e) from e

    log_event(
        logger,
        logging.INFO,
        EventType.CURVES_EXPORTED,
        policy,
        f"wrote {curves.total_points} points",
        path=output_path,
        format=fmt,
    )
    return output_path
