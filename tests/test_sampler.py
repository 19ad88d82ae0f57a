"""
Tests for detection-time curve sampling.

This module tests:
- The exponential error-rate sweep
- Per-sample detection time and its window-duration bound
- Deterministic tie-break between severities
- Curve generation for the reference policy
- The CurveSampler wrapper and its statistics
"""

from __future__ import annotations

import logging
from datetime import timedelta

import numpy as np
import pytest

from slo_alert_curves.burnrate import (
    CurveSampler,
    ThresholdEntry,
    Window,
    detection_time,
    generate_curves,
    sweep_error_rates,
)
from slo_alert_curves.core.config import AlertPolicyConfig, CurvesConfig, SamplingConfig
from slo_alert_curves.core.constants import Severity
from slo_alert_curves.core.exceptions import (
    ConfigurationError,
    InvalidErrorRateError,
    InvalidWindowError,
)


class TestSweepErrorRates:
    """Tests for the exponential sweep schedule."""

    def test_length_and_end_points(self):
        xs = sweep_error_rates(1000)
        assert len(xs) == 1000
        assert xs[0] == pytest.approx(0.995 ** 1998)
        assert xs[-1] == 1.0

    def test_strictly_increasing(self):
        xs = sweep_error_rates(1000)
        assert np.all(np.diff(xs) > 0)

    def test_single_sample_is_full_error_rate(self):
        assert sweep_error_rates(1).tolist() == [1.0]

    def test_samples_concentrate_at_low_error_rates(self):
        xs = sweep_error_rates(1000)
        assert np.sum(xs < 0.1) > np.sum(xs >= 0.1)

    def test_huge_sample_counts_underflow_to_zero(self):
        assert sweep_error_rates(80_000)[0] == 0.0

    @pytest.mark.parametrize("sample_count", [0, -10])
    def test_rejects_non_positive_sample_count(self, sample_count: int):
        with pytest.raises(ConfigurationError):
            sweep_error_rates(sample_count)

    @pytest.mark.parametrize("base", [0.0, 1.0, 1.5])
    def test_rejects_non_decaying_base(self, base: float):
        with pytest.raises(ConfigurationError):
            sweep_error_rates(10, base=base)


class TestDetectionTime:
    """Tests for detection_time()."""

    def test_below_every_threshold_detects_nothing(self, reference_thresholds):
        result = detection_time(reference_thresholds, 0.0005)
        assert not result.detected
        assert result.severity is None
        assert result.detection_hours is None

    def test_low_error_rate_detected_by_slowest_ticket_window(self, reference_thresholds):
        """At 0.2% only the 72h/1x window can fire: 0.072 / 0.002 = 36h."""
        result = detection_time(reference_thresholds, 0.002)
        assert result.severity == "ticket"
        assert result.detection_hours == pytest.approx(36.0)

    def test_shorter_ticket_window_becomes_eligible(self, reference_thresholds):
        result = detection_time(reference_thresholds, 0.004)
        assert result.severity == "ticket"
        assert result.detection_hours == pytest.approx(18.0)

    def test_page_takes_over_when_six_hour_window_is_eligible(self, reference_thresholds):
        """At 1% the 6h page window fires in 3.6h, ahead of ticket's 7.2h."""
        result = detection_time(reference_thresholds, 0.01)
        assert result.severity == "page"
        assert result.detection_hours == pytest.approx(3.6)

    def test_full_outage_detected_by_one_hour_window(self, reference_thresholds):
        result = detection_time(reference_thresholds, 1.0)
        assert result.severity == "page"
        assert result.detection_hours == pytest.approx(0.0144)

    def test_detection_equal_to_window_duration_is_accepted(self):
        thresholds = {"page": [ThresholdEntry(error_threshold=2.0, duration=4.0)]}
        result = detection_time(thresholds, 0.5)
        assert result.severity == "page"
        assert result.detection_hours == 4.0

    def test_detection_slower_than_window_duration_is_rejected(self):
        thresholds = {"page": [ThresholdEntry(error_threshold=2.0, duration=3.999)]}
        assert not detection_time(thresholds, 0.5).detected

    def test_first_accepted_candidate_is_taken(self):
        thresholds = {"ticket": [ThresholdEntry(error_threshold=72.0, duration=72.0)]}
        result = detection_time(thresholds, 1.0)
        assert result.severity == "ticket"
        assert result.detection_hours == 72.0

    def test_faster_window_wins_across_severities(self):
        thresholds = {
            "page": [ThresholdEntry(error_threshold=1.0, duration=10.0)],
            "ticket": [ThresholdEntry(error_threshold=0.5, duration=10.0)],
        }
        result = detection_time(thresholds, 0.5)
        assert result.severity == "ticket"
        assert result.detection_hours == 1.0

    def test_detection_time_non_increasing_in_error_rate(self):
        thresholds = {"page": [ThresholdEntry(error_threshold=0.036, duration=6.0)]}
        values = [detection_time(thresholds, x).detection_hours for x in (0.006, 0.01, 0.1, 0.5, 1.0)]
        assert values == sorted(values, reverse=True)

    def test_empty_thresholds_detect_nothing(self):
        for x in (1e-6, 0.01, 1.0):
            assert not detection_time({}, x).detected

    @pytest.mark.parametrize("x", [0.0, -0.01, float("nan"), float("inf")])
    def test_rejects_unusable_error_rate(self, reference_thresholds, x: float):
        with pytest.raises(InvalidErrorRateError):
            detection_time(reference_thresholds, x)


class TestTieBreak:
    """Tests for the deterministic tie-break between severities."""

    @pytest.fixture
    def identical_windows(self) -> list[Window]:
        return [
            Window(duration=timedelta(hours=6), burn_rate=6.0, severity="ticket"),
            Window(duration=timedelta(hours=6), burn_rate=6.0, severity="page"),
        ]

    def test_equal_candidates_go_to_first_scanned_severity(self):
        entry = ThresholdEntry(error_threshold=1.0, duration=10.0)
        assert detection_time({"page": [entry], "ticket": [entry]}, 0.5).severity == "page"
        assert detection_time({"ticket": [entry], "page": [entry]}, 0.5).severity == "ticket"

    def test_default_order_prefers_page(self, identical_windows):
        curves = generate_curves(0.001, identical_windows, sample_count=200)
        assert len(curves["page"]) > 0
        assert curves["ticket"] == ()

    def test_custom_order_prefers_ticket(self, identical_windows):
        curves = generate_curves(
            0.001, identical_windows, sample_count=200, severity_order=["ticket", "page"]
        )
        assert len(curves["ticket"]) > 0
        assert curves["page"] == ()


class TestGenerateCurves:
    """Tests for generate_curves() with the reference policy."""

    @pytest.fixture
    def curves(self, reference_budget, reference_windows):
        return generate_curves(reference_budget, reference_windows)

    def test_one_series_per_severity(self, curves):
        assert curves.severities == ("page", "ticket")
        assert curves.sample_count == 1000
        assert curves.error_budget == pytest.approx(0.001)

    def test_ticket_detects_lowest_error_rates(self, curves):
        ticket, page = curves["ticket"], curves["page"]
        assert ticket[0].x < page[0].x
        assert ticket[0].x >= 0.1 - 1e-9
        assert ticket[0].y <= 72.0

    def test_severities_split_at_six_hour_page_threshold(self, curves):
        """Page wins from 0.6% upward, where the 6h window becomes eligible."""
        assert max(p.x for p in curves["ticket"]) < 0.6 + 1e-9
        assert min(p.x for p in curves["page"]) >= 0.6 - 1e-9

    def test_full_outage_point(self, curves):
        last = curves["page"][-1]
        assert last.x == pytest.approx(100.0)
        assert last.y == pytest.approx(0.0144)

    def test_detection_bounded_by_window_durations(self, curves):
        assert all(p.y <= 6.0 + 1e-9 for p in curves["page"])
        assert all(p.y <= 72.0 + 1e-9 for p in curves["ticket"])

    def test_points_follow_sweep_order(self, curves):
        for severity in curves.severities:
            xs = [p.x for p in curves[severity]]
            assert xs == sorted(xs)
            assert len(set(xs)) == len(xs)

    def test_undetected_samples_are_below_lowest_threshold(self, reference_budget, reference_windows):
        stats: dict[str, int] = {}
        curves = generate_curves(reference_budget, reference_windows, stats=stats)

        xs = sweep_error_rates(1000)
        assert np.sum(xs < 0.00099) <= stats["undetected"] <= np.sum(xs < 0.00101)
        assert stats["detected"] == curves.total_points
        assert stats["detected"] + stats["undetected"] == 1000
        assert stats["skipped"] == 0

    def test_deterministic(self, reference_budget, reference_windows):
        first = generate_curves(reference_budget, reference_windows)
        second = generate_curves(reference_budget, reference_windows)
        assert first == second

    def test_no_windows_gives_empty_series(self):
        stats: dict[str, int] = {}
        curves = generate_curves(0.001, [], stats=stats)
        assert curves.severities == ("page", "ticket")
        assert curves["page"] == ()
        assert curves["ticket"] == ()
        assert curves.total_points == 0
        assert stats["undetected"] == 1000

    def test_unknown_severity_gets_its_own_series(self):
        windows = [Window(duration=timedelta(hours=1), burn_rate=1.0, severity="email")]
        curves = generate_curves(0.01, windows, sample_count=100)
        assert curves.severities == ("page", "ticket", "email")
        assert len(curves["email"]) > 0

    def test_severity_enum_labels(self):
        windows = [Window(duration=timedelta(hours=1), burn_rate=14.4, severity=Severity.PAGE)]
        curves = generate_curves(0.001, windows, sample_count=100)
        assert len(curves["page"]) > 0
        assert curves.severities == ("page", "ticket")

    def test_zero_error_rates_are_skipped(self, reference_budget, reference_windows, monkeypatch, caplog):
        monkeypatch.setattr(
            "slo_alert_curves.burnrate.sampler.sweep_error_rates",
            lambda sample_count: np.array([0.0, 0.5, 1.0]),
        )
        stats: dict[str, int] = {}

        with caplog.at_level(logging.WARNING):
            curves = generate_curves(reference_budget, reference_windows, sample_count=3, stats=stats)

        assert stats["skipped"] == 1
        assert stats["detected"] == 2
        assert [p.x for p in curves["page"]] == pytest.approx([50.0, 100.0])
        assert "SAMPLE_SKIPPED" in caplog.text

    def test_to_dict(self, curves):
        data = curves.to_dict()
        assert set(data["series"]) == {"page", "ticket"}
        assert data["series"]["page"][-1] == pytest.approx((100.0, 0.0144))


class TestCurveSampler:
    """Tests for the CurveSampler wrapper."""

    def test_generates_reference_curves(self, test_config, reference_budget, reference_windows):
        sampler = CurveSampler(test_config)
        assert sampler.generate() == generate_curves(reference_budget, reference_windows)

    def test_tracks_statistics(self, test_config):
        sampler = CurveSampler(test_config)
        sampler.generate()
        sampler.generate()

        stats = sampler.get_stats()
        assert stats["runs"] == 2
        assert stats["samples_evaluated"] == 2000
        assert stats["samples_detected"] + stats["samples_undetected"] == 2000
        assert stats["samples_skipped"] == 0

    def test_uses_configured_sample_count(self):
        config = CurvesConfig(sampling=SamplingConfig(sample_count=50))
        curves = CurveSampler(config).generate()
        assert curves.sample_count == 50
        assert curves.total_points <= 50

    def test_window_override(self, test_config):
        windows = [Window(duration=timedelta(hours=1), burn_rate=14.4, severity="page")]
        curves = CurveSampler(test_config).generate(windows)
        assert curves["ticket"] == ()
        assert len(curves["page"]) > 0

    def test_rejects_invalid_window_override(self, test_config):
        windows = [Window(duration=timedelta(hours=1), burn_rate=0.0, severity="page")]
        with pytest.raises(InvalidWindowError):
            CurveSampler(test_config).generate(windows)

    def test_rejects_invalid_slo_target(self):
        config = CurvesConfig(policy=AlertPolicyConfig(slo_target_percent=100.0))
        with pytest.raises(ConfigurationError):
            CurveSampler(config).generate()

    def test_logs_generation(self, test_config, caplog):
        with caplog.at_level(logging.INFO, logger="slo_alert_curves.burnrate.sampler"):
            CurveSampler(test_config).generate()
        assert "CURVES_GENERATED - slo=99.9" in caplog.text
