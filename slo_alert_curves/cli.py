"""
Generate multi-window burn-rate alerting curves from the command line.

Usage:
    # Reference policy (config.json or built-in defaults), CSV output
    slo-alert-curves

    # Specific config file, JSON payload for a renderer
    slo-alert-curves --config ./config/policy.json --format json --output curves.json

    # Override the SLO target and sample count
    slo-alert-curves --slo 99.95 --samples 2000
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Sequence

from slo_alert_curves.burnrate.models import AlertCurves
from slo_alert_curves.burnrate.sampler import CurveSampler
from slo_alert_curves.core.config import CurvesConfig
from slo_alert_curves.core.constants import OutputFormat
from slo_alert_curves.core.exceptions import ConfigurationError, ExportError
from slo_alert_curves.core.logging import EventType, configure_logging, get_logger, log_event
from slo_alert_curves.core.utils import format_duration, format_hours
from slo_alert_curves.export import summarize_curves, write_curves

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 2
EXIT_EXPORT_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate detection-time curves for multi-window burn-rate SLO alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Reference policy: SLO 99.9%, windows 1h/6h page and 24h/72h ticket
  slo-alert-curves

  # Write the renderer payload as JSON
  slo-alert-curves --format json --output slo_alert_curves.json

  # Evaluate a different SLO target against the configured windows
  slo-alert-curves --slo 99.5
        """,
    )

    parser.add_argument("--config", "-c", type=str, help="Path to JSON config file (default: search standard locations)")
    parser.add_argument("--slo", type=float, help="SLO target percent, e.g. 99.9")
    parser.add_argument("--samples", "-n", type=int, help="Number of swept error rates (default: 1000)")
    parser.add_argument("--output", "-o", type=str, help="Output file path")
    parser.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in OutputFormat],
        help="Output format (default: csv)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit log records as JSON lines")
    return parser


def load_config(args: argparse.Namespace) -> CurvesConfig:
    """Load configuration and apply command-line overrides.

    Raises:
        ConfigurationError: If the resulting configuration is invalid.
    """
    if args.config:
        try:
            config = CurvesConfig.from_file(args.config)
        except FileNotFoundError as e:
            raise ConfigurationError("config", reason="file not found", value=args.config) from e
    else:
        config = CurvesConfig.from_env()

    policy = config.policy
    if args.slo is not None:
        policy = replace(policy, slo_target_percent=args.slo)
        policy.validate()

    sampling = config.sampling
    if args.samples is not None:
        if args.samples < 1:
            raise ConfigurationError("samples", reason="must be a positive integer", value=args.samples)
        sampling = replace(sampling, sample_count=args.samples)

    output = config.output
    if args.output:
        output = replace(output, path=args.output)
    if args.format:
        output = replace(output, format=args.format)

    return replace(config, policy=policy, sampling=sampling, output=output)


def log_policy(config: CurvesConfig) -> None:
    policy = config.policy
    logger.info(
        f"SLO {policy.slo_target_percent:g}% over {policy.slo_period_days:g} days "
        f"(error budget {policy.error_budget:.4%})"
    )
    for window in policy.windows:
        logger.info(
            f"  {window.severity:<8} {format_duration(window.duration):>7}  burn rate {window.burn_rate:g}x"
        )


def log_summary(curves: AlertCurves, sampler: CurveSampler) -> None:
    summary = summarize_curves(curves)
    for severity, row in summary.iterrows():
        if row["points"] == 0:
            logger.info(f"  {severity:<8} no detections")
            continue
        logger.info(
            f"  {severity:<8} {int(row['points']):>5} points  "
            f"error rate {row['min_error_rate_percent']:.3f}%-{row['max_error_rate_percent']:.1f}%  "
            f"detection {format_hours(row['fastest_detection_hours'])}-{format_hours(row['slowest_detection_hours'])}"
        )
    stats = sampler.get_stats()
    logger.debug(f"Sampler stats: {stats}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the curve generator. Returns a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, json_format=args.json_logs)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        log_event(logger, logging.ERROR, EventType.CONFIG_INVALID, "cli", str(e))
        return EXIT_CONFIG_ERROR

    log_event(
        logger,
        logging.DEBUG,
        EventType.CONFIG_LOADED,
        f"slo={config.policy.slo_target_percent:g}",
        "configuration loaded",
        source=config.config_file_path or "defaults",
    )
    log_policy(config)

    sampler = CurveSampler(config)
    try:
        curves = sampler.generate()
    except ConfigurationError as e:
        log_event(logger, logging.ERROR, EventType.CONFIG_INVALID, sampler.policy_label, str(e))
        return EXIT_CONFIG_ERROR

    log_summary(curves, sampler)

    try:
        path = write_curves(
            curves,
            config.output.path,
            fmt=config.output.format,
            slo_target_percent=config.policy.slo_target_percent,
            slo_period_days=config.policy.slo_period_days,
        )
    except ExportError as e:
        logger.error(str(e))
        return EXIT_EXPORT_ERROR

    print(f"Curves written to {path}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
