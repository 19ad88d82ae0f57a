"""
Logging setup for the burn-rate curve generator.

Every module logs under the ``slo_alert_curves`` logger hierarchy.
``configure_logging`` attaches one stdout handler to the top of that
hierarchy (replacing it on repeated calls) and leaves the root logger to
the host application. Structured events carry their type, policy and
fields on the record so the JSON formatter can emit them as keys.
"""

from __future__ import annotations

import json
import logging
import sys
from types import TracebackType
from typing import IO, Any

PACKAGE_LOGGER = "slo_alert_curves"

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handler installed by configure_logging, swapped out on reconfiguration
_handler: logging.Handler | None = None


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with event fields promoted to keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        event_type = getattr(record, "event_type", None)
        if event_type:
            payload["event"] = event_type
            payload["policy"] = getattr(record, "policy", None)
            payload.update(getattr(record, "event_fields", {}))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: int = logging.INFO,
    verbose: bool = False,
    json_format: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Send package log output to a stream.

    Safe to call more than once; the previous handler is replaced.

    Args:
        level: Base logging level.
        verbose: If True, sets level to DEBUG.
        json_format: If True, emit one JSON object per record.
        stream: Destination, stdout by default.

    Returns:
        The package logger.
    """
    global _handler

    if verbose:
        level = logging.DEBUG

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT, DATE_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    _handler = handler

    _configure_third_party_loggers()
    return package_logger


def _configure_third_party_loggers() -> None:
    # pandas' optional accelerators announce thread counts at INFO
    logging.getLogger("numexpr").setLevel(logging.WARNING)
    logging.getLogger("numexpr.utils").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the package hierarchy.

    Names outside it (``__main__`` when a module runs as a script) are
    nested under the package logger so they share its handler.
    """
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


class LogContext:
    """Temporarily change a logger's level.

    Usage:
        with LogContext(logging.DEBUG, "slo_alert_curves.burnrate"):
            generate_curves(budget, windows)
    """

    def __init__(self, level: int, logger_name: str = PACKAGE_LOGGER) -> None:
        self.level = level
        self.logger_name = logger_name
        self._saved_level: int | None = None

    def __enter__(self) -> LogContext:
        logger = logging.getLogger(self.logger_name)
        self._saved_level = logger.level
        logger.setLevel(self.level)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._saved_level is not None:
            logging.getLogger(self.logger_name).setLevel(self._saved_level)


def log_event(
    logger: logging.Logger,
    level: int,
    event_type: str,
    policy: str,
    message: str,
    **fields: Any,
) -> None:
    """Log a curve-generation event.

    The text form is ``EVENT - policy: message [k=v ...]``; the same
    values travel on the record as ``event_type``, ``policy`` and
    ``event_fields``.

    Args:
        logger: Logger instance to use.
        level: Logging level.
        event_type: One of the ``EventType`` names.
        policy: Policy the event belongs to, e.g. "slo=99.9" or "budget=0.001".
        message: Human-readable message.
        **fields: Additional values to attach.
    """
    text = f"{event_type} - {policy}: {message}"
    if fields:
        text = f"{text} [{' '.join(f'{k}={v}' for k, v in fields.items())}]"
    logger.log(
        level,
        text,
        extra={"event_type": event_type, "policy": policy, "event_fields": fields},
    )


class EventType:
    """Event names used with ``log_event``."""

    # Configuration
    CONFIG_LOADED = "CONFIG_LOADED"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Curve generation
    THRESHOLDS_COMPUTED = "THRESHOLDS_COMPUTED"
    CURVES_GENERATED = "CURVES_GENERATED"
    SAMPLE_SKIPPED = "SAMPLE_SKIPPED"

    # Export
    CURVES_EXPORTED = "CURVES_EXPORTED"
    EXPORT_FAILED = "EXPORT_FAILED"
