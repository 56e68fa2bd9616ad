# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for the observability metrics module.

Tests cover:
- InterpreterMetrics: Dataclass for tracking interpreter activity
- PrometheusInterpreterMetrics: Prometheus counters for the same signals
- Module-level functions: get_prometheus_interpreter_metrics,
  reset_prometheus_interpreter_metrics
"""

from __future__ import annotations

import json
import threading
from unittest.mock import MagicMock, patch

import pytest
from prometheus_client import CollectorRegistry

from stream_event_interpreter.observability import constants
from stream_event_interpreter.observability.metrics import (
    InterpreterMetrics,
    PrometheusInterpreterMetrics,
    get_prometheus_interpreter_metrics,
    reset_prometheus_interpreter_metrics,
)


class TestInterpreterMetricsInitialization:
    """Test InterpreterMetrics initialization."""

    def test_all_counters_start_at_zero(self) -> None:
        metrics = InterpreterMetrics()

        assert metrics.bytes_received == 0
        assert metrics.frames_processed == 0
        assert metrics.events_emitted == 0
        assert metrics.errors_reported == 0
        assert metrics.events_ignored == 0
        assert metrics.sentinels_seen == 0

    def test_breakdowns_start_empty(self) -> None:
        stats = InterpreterMetrics().get_stats()

        assert stats["events_by_type"] == {}
        assert stats["errors_by_kind"] == {}
        assert stats["ignored_by_type"] == {}


class TestInterpreterMetricsRecording:
    """Test the record_* methods."""

    @pytest.fixture
    def metrics(self) -> InterpreterMetrics:
        """Create a fresh InterpreterMetrics instance."""
        return InterpreterMetrics()

    def test_record_bytes_accumulates(self, metrics: InterpreterMetrics) -> None:
        metrics.record_bytes(10)
        metrics.record_bytes(5)
        assert metrics.bytes_received == 15

    def test_record_frame_and_sentinel(self, metrics: InterpreterMetrics) -> None:
        metrics.record_frame()
        metrics.record_frame()
        metrics.record_sentinel()
        assert metrics.frames_processed == 2
        assert metrics.sentinels_seen == 1

    def test_record_event_by_type(self, metrics: InterpreterMetrics) -> None:
        metrics.record_event("response.output_text.delta")
        metrics.record_event("response.output_text.delta")
        metrics.record_event("response.completed")

        stats = metrics.get_stats()
        assert stats["events_emitted"] == 3
        assert stats["events_by_type"] == {
            "response.output_text.delta": 2,
            "response.completed": 1,
        }

    def test_record_error_by_kind(self, metrics: InterpreterMetrics) -> None:
        metrics.record_error("decode_failure")
        assert metrics.get_stats()["errors_by_kind"] == {"decode_failure": 1}

    def test_record_ignored_missing_type(self, metrics: InterpreterMetrics) -> None:
        metrics.record_ignored(None)
        metrics.record_ignored("response.audio.delta")
        assert metrics.get_stats()["ignored_by_type"] == {
            "<missing>": 1,
            "response.audio.delta": 1,
        }

    def test_concurrent_recording(self, metrics: InterpreterMetrics) -> None:
        def worker() -> None:
            for _ in range(1000):
                metrics.record_error("malformed_input")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert metrics.get_stats()["errors_by_kind"]["malformed_input"] == 4000


class TestInterpreterMetricsStats:
    """Test get_error_rate(), get_stats() and reset()."""

    def test_error_rate_with_no_activity(self) -> None:
        assert InterpreterMetrics().get_error_rate() == 0.0

    def test_error_rate(self) -> None:
        metrics = InterpreterMetrics()
        metrics.record_event("response.completed")
        metrics.record_event("response.completed")
        metrics.record_event("response.completed")
        metrics.record_error("decode_failure")
        assert metrics.get_error_rate() == 0.25

    def test_stats_are_json_serializable(self) -> None:
        metrics = InterpreterMetrics()
        metrics.record_event("response.completed")
        json.dumps(metrics.get_stats())

    def test_reset(self) -> None:
        metrics = InterpreterMetrics()
        metrics.record_bytes(3)
        metrics.record_event("response.completed")
        metrics.record_error("decode_failure")
        metrics.record_ignored("x")

        metrics.reset()

        stats = metrics.get_stats()
        assert stats["bytes_received"] == 0
        assert stats["events_emitted"] == 0
        assert stats["events_by_type"] == {}
        assert stats["errors_by_kind"] == {}
        assert stats["ignored_by_type"] == {}


class TestMetricConstants:
    """Metric names share a prefix and follow counter naming."""

    @pytest.mark.parametrize(
        "name",
        [
            constants.BYTES_RECEIVED_TOTAL,
            constants.FRAMES_TOTAL,
            constants.EVENTS_EMITTED_TOTAL,
            constants.ERRORS_TOTAL,
            constants.EVENTS_IGNORED_TOTAL,
            constants.SENTINELS_TOTAL,
        ],
    )
    def test_prefix_and_suffix(self, name: str) -> None:
        assert name.startswith(f"{constants.METRIC_PREFIX}_")
        assert name.endswith("_total")


class TestPrometheusInterpreterMetrics:
    """Test PrometheusInterpreterMetrics against an isolated registry."""

    @pytest.fixture
    def registry(self) -> CollectorRegistry:
        return CollectorRegistry()

    def test_observe_methods(self, registry: CollectorRegistry) -> None:
        prom = PrometheusInterpreterMetrics(registry=registry)

        prom.observe_bytes(128)
        prom.observe_frame()
        prom.observe_event("response.completed")
        prom.observe_error("decode_failure")
        prom.observe_ignored()
        prom.observe_sentinel()

        assert registry.get_sample_value("stream_interp_bytes_received_total") == 128.0
        assert registry.get_sample_value("stream_interp_frames_total") == 1.0
        assert (
            registry.get_sample_value(
                "stream_interp_events_emitted_total",
                {"event_type": "response.completed"},
            )
            == 1.0
        )
        assert (
            registry.get_sample_value(
                "stream_interp_errors_total", {"kind": "decode_failure"}
            )
            == 1.0
        )
        assert registry.get_sample_value("stream_interp_events_ignored_total") == 1.0
        assert registry.get_sample_value("stream_interp_sentinels_total") == 1.0

    def test_duplicate_registration_raises(self, registry: CollectorRegistry) -> None:
        PrometheusInterpreterMetrics(registry=registry)
        with pytest.raises(ValueError):
            PrometheusInterpreterMetrics(registry=registry)


class TestPrometheusSingleton:
    """Test get_prometheus_interpreter_metrics / reset_prometheus_interpreter_metrics."""

    @pytest.fixture(autouse=True)
    def reset_singleton(self):
        reset_prometheus_interpreter_metrics()
        yield
        reset_prometheus_interpreter_metrics()

    def test_returns_same_instance(self) -> None:
        fake = MagicMock()
        with patch(
            "stream_event_interpreter.observability.metrics.PrometheusInterpreterMetrics",
            return_value=fake,
        ) as factory:
            first = get_prometheus_interpreter_metrics()
            second = get_prometheus_interpreter_metrics()

        assert first is fake
        assert second is fake
        factory.assert_called_once_with()

    def test_returns_none_on_registration_failure(self) -> None:
        with patch(
            "stream_event_interpreter.observability.metrics.PrometheusInterpreterMetrics",
            side_effect=ValueError("Duplicated timeseries"),
        ):
            assert get_prometheus_interpreter_metrics() is None

    def test_reset_forces_new_instance(self) -> None:
        with patch(
            "stream_event_interpreter.observability.metrics.PrometheusInterpreterMetrics",
            side_effect=[MagicMock(), MagicMock()],
        ):
            first = get_prometheus_interpreter_metrics()
            reset_prometheus_interpreter_metrics()
            second = get_prometheus_interpreter_metrics()

        assert first is not second
