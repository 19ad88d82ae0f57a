"""
Pytest configuration and shared fixtures.

This module provides reusable fixtures for testing the slo_alert_curves package.
"""

from __future__ import annotations

import json
from collections.abc import Generator
from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest

from slo_alert_curves.burnrate import (
    ThresholdMap,
    Window,
    compute_thresholds,
    error_budget,
)
from slo_alert_curves.core.config import CurvesConfig, reset_config, set_config

# Environment variables read by the configuration layer
CONFIG_ENV_VARS = (
    "CONFIG_FILE",
    "SLO_TARGET_PERCENT",
    "SLO_PERIOD_DAYS",
    "SAMPLE_COUNT",
    "OUTPUT_PATH",
    "OUTPUT_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment overrides out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Policy Fixtures
# =============================================================================


@pytest.fixture
def reference_windows() -> tuple[Window, ...]:
    """The reference multi-window policy: two page and two ticket windows."""
    return (
        Window(duration=timedelta(hours=1), burn_rate=14.4, severity="page"),
        Window(duration=timedelta(hours=6), burn_rate=6.0, severity="page"),
        Window(duration=timedelta(hours=24), burn_rate=3.0, severity="ticket"),
        Window(duration=timedelta(hours=72), burn_rate=1.0, severity="ticket"),
    )


@pytest.fixture
def reference_budget() -> float:
    """Error budget of a 99.9% SLO."""
    return error_budget(99.9)


@pytest.fixture
def reference_thresholds(reference_budget: float, reference_windows: tuple[Window, ...]) -> ThresholdMap:
    """Thresholds of the reference policy."""
    return compute_thresholds(reference_budget, reference_windows)


@pytest.fixture
def policy_dict() -> dict[str, Any]:
    """A complete config dictionary mirroring config.json."""
    return {
        "policy": {
            "slo_target_percent": 99.9,
            "slo_period_days": 30,
            "severity_order": ["page", "ticket"],
            "windows": [
                {"duration": "1h", "burn_rate": 14.4, "severity": "page"},
                {"duration": "6h", "burn_rate": 6, "severity": "page"},
                {"duration": "24h", "burn_rate": 3, "severity": "ticket"},
                {"duration": "72h", "burn_rate": 1, "severity": "ticket"},
            ],
        },
        "sampling": {"sample_count": 1000},
        "output": {"path": "slo_alert_curves.csv", "format": "csv"},
    }


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config_file(tmp_path: Path, policy_dict: dict[str, Any]) -> Path:
    """Write the policy dictionary to a temporary config file."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(policy_dict))
    return path


@pytest.fixture
def test_config() -> Generator[CurvesConfig, None, None]:
    """Provide the default configuration as the global config."""
    config = CurvesConfig.default()
    set_config(config)
    yield config
    reset_config()
