"""
Centralized configuration management for the burn-rate curve generator.

This module provides a single source of truth for all configuration values,
supporting:
- JSON configuration file (config.json)
- Environment variable overrides
- Programmatic defaults

Configuration is loaded in priority order:
1. Environment variables (highest priority)
2. JSON config file
3. Dataclass defaults (lowest priority)

Window definitions are validated while loading, so a policy with a
non-positive duration or burn rate never reaches the sampler.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from slo_alert_curves.burnrate.models import Window
from slo_alert_curves.burnrate.thresholds import error_budget, validate_windows
from slo_alert_curves.core.constants import (
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_SEVERITY_ORDER,
    DEFAULT_SLO_PERIOD_DAYS,
    DEFAULT_SLO_TARGET_PERCENT,
    REFERENCE_WINDOWS,
    OutputFormat,
)
from slo_alert_curves.core.exceptions import ConfigurationError, InvalidWindowError
from slo_alert_curves.core.logging import EventType, get_logger, log_event
from slo_alert_curves.core.utils import parse_duration

logger = get_logger(__name__)

# Default config file locations (searched in order)
CONFIG_FILE_PATHS = [
    Path("config.json"),  # Current directory
    Path("./config/config.json"),  # Config subdirectory
    Path.home() / ".slo_alert_curves" / "config.json",  # User home
    Path("/etc/slo_alert_curves/config.json"),  # System-wide
]


def _read_config_json(path: Path) -> Any:
    """Read one config file.

    Raises:
        ConfigurationError: If the file is not valid JSON.
    """
    try:
        with path.open() as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError("config", reason=f"invalid JSON: {e}", value=str(path)) from e
    log_event(logger, logging.DEBUG, EventType.CONFIG_LOADED, "config", "read config file", path=path)
    return config_dict


def _load_config_file() -> dict[str, Any]:
    """Load configuration from JSON file.

    Searches for config file in standard locations, or uses
    CONFIG_FILE environment variable if set.

    Returns:
        Parsed configuration, or empty dict if no file found.

    Raises:
        ConfigurationError: If the file found is not valid JSON.
    """
    env_config_path = os.getenv("CONFIG_FILE")
    if env_config_path:
        config_path = Path(env_config_path)
        if config_path.exists():
            return _read_config_json(config_path)
        else:
            # Fall back to the standard locations
            logger.warning(f"CONFIG_FILE specified but not found: {env_config_path}")

    for path in CONFIG_FILE_PATHS:
        if path.exists():
            return _read_config_json(path)

    return {}


def _get_env_or_config(
    env_key: str,
    config_dict: dict[str, Any],
    config_key: str,
    default: Any,
    type_cast: type | None = None
) -> Any:
    """Get value from environment, config file, or default (in priority order).

    Args:
        env_key: Environment variable name
        config_dict: Config dictionary section
        config_key: Key within config dictionary
        default: Default value if not found
        type_cast: Optional type to cast the value to

    Returns:
        Configuration value from highest priority source

    Raises:
        ConfigurationError: If the environment value cannot be cast.
    """
    env_value = os.getenv(env_key)
    if env_value is not None:
        if type_cast is bool:
            return env_value.lower() in ("true", "1", "yes")
        try:
            return type_cast(env_value) if type_cast else env_value
        except ValueError as e:
            raise ConfigurationError(env_key, reason=str(e), value=env_value) from e

    if config_key in config_dict:
        return config_dict[config_key]

    return default


def _parse_window(raw: Any, index: int) -> Window:
    """Build a Window from a config entry.

    Entries are objects with ``duration``, ``burn_rate`` and ``severity``
    keys. Durations are strings such as "1h" or numbers of seconds.
    """
    if not isinstance(raw, dict):
        raise InvalidWindowError(index, "definition", reason="must be an object", value=raw)

    for key in ("duration", "burn_rate", "severity"):
        if key not in raw:
            raise InvalidWindowError(index, key, reason="is required")

    try:
        duration = parse_duration(raw["duration"])
    except (TypeError, ValueError) as e:
        raise InvalidWindowError(index, "duration", reason=str(e), value=raw["duration"]) from e

    burn_rate = raw["burn_rate"]
    if isinstance(burn_rate, bool) or not isinstance(burn_rate, (int, float)):
        raise InvalidWindowError(index, "burn_rate", reason="must be a number", value=burn_rate)

    severity = raw["severity"]
    if not isinstance(severity, str):
        raise InvalidWindowError(index, "severity", reason="must be a string", value=severity)

    return Window(duration=duration, burn_rate=float(burn_rate), severity=severity.strip())


def _as_float(parameter: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(parameter, reason="must be a number", value=value)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(parameter, reason="must be a number", value=value) from e


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a top-level config section, empty when absent."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(name, reason="must be an object", value=section)
    return section


def _parse_severity_order(raw: Any) -> tuple[str, ...]:
    """Tie-break order: a list of non-empty severity labels, no repeats."""
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError("policy.severity_order", reason="must be a list of severities", value=raw)
    order = []
    for label in raw:
        if not isinstance(label, str) or not label.strip():
            raise ConfigurationError(
                "policy.severity_order", reason="entries must be non-empty strings", value=raw
            )
        order.append(label.strip())
    if len(set(order)) != len(order):
        raise ConfigurationError("policy.severity_order", reason="contains duplicates", value=raw)
    return tuple(order)


def _reference_windows() -> tuple[Window, ...]:
    return tuple(
        Window(duration=parse_duration(duration), burn_rate=burn_rate, severity=severity)
        for duration, burn_rate, severity in REFERENCE_WINDOWS
    )


@dataclass(frozen=True)
class AlertPolicyConfig:
    """SLO target and the multi-window alerting rules evaluated against it."""

    slo_target_percent: float = DEFAULT_SLO_TARGET_PERCENT
    slo_period_days: float = DEFAULT_SLO_PERIOD_DAYS
    windows: tuple[Window, ...] = field(default_factory=_reference_windows)

    # Tie-break order, most severe first
    severity_order: tuple[str, ...] = DEFAULT_SEVERITY_ORDER

    @property
    def error_budget(self) -> float:
        return error_budget(self.slo_target_percent)

    def validate(self) -> None:
        """Validate the policy.

        Raises:
            ConfigurationError: If the SLO target, period or any window is
                invalid.
        """
        error_budget(self.slo_target_percent)
        if not self.slo_period_days > 0:
            raise ConfigurationError(
                "slo_period_days", reason="must be positive", value=self.slo_period_days
            )
        validate_windows(self.windows)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> AlertPolicyConfig:
        """Create configuration from config dict with environment overrides."""
        policy_config = _section(config, "policy")

        raw_windows = policy_config.get("windows")
        if raw_windows is None:
            windows = _reference_windows()
        elif isinstance(raw_windows, list):
            windows = tuple(_parse_window(raw, i) for i, raw in enumerate(raw_windows))
        else:
            raise ConfigurationError("policy.windows", reason="must be a list", value=raw_windows)

        policy = cls(
            slo_target_percent=_as_float(
                "policy.slo_target_percent",
                _get_env_or_config("SLO_TARGET_PERCENT", policy_config, "slo_target_percent", cls.slo_target_percent, float),
            ),
            slo_period_days=_as_float(
                "policy.slo_period_days",
                _get_env_or_config("SLO_PERIOD_DAYS", policy_config, "slo_period_days", cls.slo_period_days, float),
            ),
            windows=windows,
            severity_order=_parse_severity_order(policy_config.get("severity_order", cls.severity_order)),
        )
        policy.validate()
        return policy

    @classmethod
    def from_env(cls) -> AlertPolicyConfig:
        """Create configuration from environment variables and config file."""
        return cls.from_config(_load_config_file())


@dataclass(frozen=True)
class SamplingConfig:
    """Configuration for the error-rate sweep."""

    sample_count: int = DEFAULT_SAMPLE_COUNT

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> SamplingConfig:
        """Create configuration from config dict with environment overrides."""
        sampling_config = _section(config, "sampling")
        sample_count = _get_env_or_config("SAMPLE_COUNT", sampling_config, "sample_count", cls.sample_count, int)
        if isinstance(sample_count, bool) or not isinstance(sample_count, int) or sample_count < 1:
            raise ConfigurationError("sampling.sample_count", reason="must be a positive integer", value=sample_count)
        return cls(sample_count=sample_count)


@dataclass(frozen=True)
class OutputConfig:
    """Configuration for handing curves to a renderer."""

    path: str = DEFAULT_OUTPUT_PATH
    format: str = DEFAULT_OUTPUT_FORMAT

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> OutputConfig:
        """Create configuration from config dict with environment overrides."""
        output_config = _section(config, "output")
        fmt = str(_get_env_or_config("OUTPUT_FORMAT", output_config, "format", cls.format)).lower()
        if fmt not in {f.value for f in OutputFormat}:
            raise ConfigurationError("output.format", reason="must be 'csv' or 'json'", value=fmt)
        return cls(
            path=_get_env_or_config("OUTPUT_PATH", output_config, "path", cls.path),
            format=fmt,
        )


@dataclass
class CurvesConfig:
    """Root configuration aggregating all sub-configurations."""

    policy: AlertPolicyConfig = field(default_factory=AlertPolicyConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Track which config file was loaded (if any)
    config_file_path: str | None = None

    @classmethod
    def from_file(cls, file_path: str | Path) -> CurvesConfig:
        """Load configuration from a specific JSON file.

        Args:
            file_path: Path to the JSON configuration file.

        Returns:
            CurvesConfig instance loaded from the file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ConfigurationError: If the file is not valid JSON or the policy is
                invalid.
        """
        path = Path(file_path)
        return cls.from_config(_read_config_json(path), config_file_path=str(path))

    @classmethod
    def from_config(cls, config: dict[str, Any], config_file_path: str | None = None) -> CurvesConfig:
        """Create full configuration from config dictionary.

        Args:
            config: Configuration dictionary (typically loaded from JSON).
            config_file_path: Optional path to the config file (for tracking).

        Returns:
            CurvesConfig instance.

        Raises:
            ConfigurationError: If the configuration is not a JSON object or
                any section is invalid.
        """
        if not isinstance(config, dict):
            raise ConfigurationError("config", reason="top level must be a JSON object", value=type(config).__name__)
        return cls(
            policy=AlertPolicyConfig.from_config(config),
            sampling=SamplingConfig.from_config(config),
            output=OutputConfig.from_config(config),
            config_file_path=config_file_path,
        )

    @classmethod
    def from_env(cls) -> CurvesConfig:
        """Create full configuration from config file and environment variables.

        Searches for config file in standard locations, then applies
        environment variable overrides.
        """
        config_dict = _load_config_file()

        config_path = None
        env_config = os.getenv("CONFIG_FILE")
        if env_config and Path(env_config).exists():
            config_path = env_config
        else:
            for path in CONFIG_FILE_PATHS:
                if path.exists():
                    config_path = str(path)
                    break

        return cls.from_config(config_dict, config_file_path=config_path)

    @classmethod
    def default(cls) -> CurvesConfig:
        """Create configuration with all defaults (no file loading)."""
        return cls()


# Global configuration instance - can be overridden for testing
_config: CurvesConfig | None = None


def get_config() -> CurvesConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = CurvesConfig.from_env()
    return _config


def set_config(config: CurvesConfig) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset configuration to be reloaded on next access."""
    global _config
    _config = None
