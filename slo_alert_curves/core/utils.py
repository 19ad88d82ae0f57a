"""
Utility functions and helpers for the burn-rate curve generator.

This module provides common operations used across multiple components,
reducing code duplication and centralizing shared logic.
"""

from __future__ import annotations

import re
from datetime import timedelta
from pathlib import Path

# =============================================================================
# Duration Parsing
# =============================================================================

_DURATION_UNITS: dict[str, float] = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
    "w": 604800.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d|w)")


def parse_duration(value: str | int | float | timedelta) -> timedelta:
    """Parse a window duration into a timedelta.

    Accepts Prometheus-style strings ("90s", "30m", "1h", "3d", "1h30m"),
    plain numbers interpreted as seconds, or an existing timedelta.

    Args:
        value: Duration to parse.

    Returns:
        Parsed duration. The sign is preserved so callers can reject
        non-positive windows with a meaningful message.

    Raises:
        ValueError: If the string is not a recognised duration.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return timedelta(seconds=value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid duration: {value!r}") from e
    if not isinstance(value, str):
        raise TypeError(f"Duration must be a string or number, got {type(value).__name__}")

    text = value.strip().lower()
    sign = 1.0
    if text.startswith("-"):
        sign = -1.0
        text = text[1:]

    if not text:
        raise ValueError(f"Invalid duration: {value!r}")

    # Bare numbers in strings are seconds too
    try:
        return timedelta(seconds=sign * float(text))
    except (ValueError, OverflowError):
        pass

    position = 0
    total_seconds = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            raise ValueError(f"Invalid duration: {value!r}")
        total_seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    if position == 0 or position != len(text):
        raise ValueError(f"Invalid duration: {value!r}")

    return timedelta(seconds=sign * total_seconds)


# =============================================================================
# Duration Formatting
# =============================================================================


def format_hours(hours: float) -> str:
    """Format a detection time expressed in hours as HH:MM:SS.

    Fractional seconds are truncated. Hours are not wrapped at 24.

    Args:
        hours: Time in hours.

    Returns:
        Zero-padded HH:MM:SS string.
    """
    remaining = int(hours * 3600)
    h = remaining // 3600
    remaining -= h * 3600
    m = remaining // 60
    s = remaining - m * 60
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_duration(duration: timedelta) -> str:
    """Format a window duration to a compact human-readable string.

    Args:
        duration: Window duration.

    Returns:
        Strings such as "45m", "1h", "6h 30m" or "3d".
    """
    minutes = int(duration.total_seconds() // 60)
    if minutes < 60:
        return f"{minutes}m"
    elif minutes < 1440 or minutes % 1440:
        hours = minutes // 60
        mins = minutes % 60
        return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
    else:
        return f"{minutes // 1440}d"


# =============================================================================
# Path Utilities
# =============================================================================


def ensure_directory(path: str | Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.

    Returns:
        Path object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path
