# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Interpreter metrics for the stream event interpreter.

This module provides:
1. InterpreterMetrics - Dataclass for tracking interpreter activity in-process
2. PrometheusInterpreterMetrics - Prometheus counters for the same signals

Usage:
    metrics = InterpreterMetrics()

    metrics.record_bytes(512)
    metrics.record_frame()
    metrics.record_event("response.output_text.delta")
    metrics.record_error("decode_failure")

    # Get stats for JSON serialization
    stats = metrics.get_stats()

Important Notes on Labels:
    Per-type dictionaries are keyed by event discriminants and error kinds,
    both categorical. Never key them by response or item identifiers.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter as TallyCounter
from dataclasses import dataclass, field
from typing import Any

from prometheus_client import CollectorRegistry, Counter

from .constants import (
    BYTES_RECEIVED_TOTAL,
    ERRORS_TOTAL,
    EVENTS_EMITTED_TOTAL,
    EVENTS_IGNORED_TOTAL,
    FRAMES_TOTAL,
    SENTINELS_TOTAL,
)

logger = logging.getLogger(__name__)


@dataclass
class InterpreterMetrics:
    """
    In-process counters describing what an interpreter has seen.

    Thread Safety:
        Simple counter increments use Python's GIL for atomicity.
        Per-type dictionary updates use a threading.Lock so that metrics can
        be read from another thread while a stream is being processed.

    Example:
        >>> metrics = InterpreterMetrics()
        >>> metrics.record_frame()
        >>> metrics.record_event("response.output_text.delta")
        >>> metrics.get_stats()["events_emitted"]
        1
    """

    bytes_received: int = 0
    frames_processed: int = 0
    events_emitted: int = 0
    errors_reported: int = 0
    events_ignored: int = 0
    sentinels_seen: int = 0

    _events_by_type: TallyCounter[str] = field(default_factory=TallyCounter, repr=False)
    _errors_by_kind: TallyCounter[str] = field(default_factory=TallyCounter, repr=False)
    _ignored_by_type: TallyCounter[str] = field(
        default_factory=TallyCounter, repr=False
    )

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_bytes(self, count: int) -> None:
        self.bytes_received += count

    def record_frame(self) -> None:
        self.frames_processed += 1

    def record_sentinel(self) -> None:
        self.sentinels_seen += 1

    def record_event(self, event_type: str) -> None:
        """Record a typed event delivered to the event callback."""
        self.events_emitted += 1
        with self._lock:
            self._events_by_type[event_type] += 1

    def record_error(self, kind: str) -> None:
        """
        Record an error delivered to the error callback.

        Args:
            kind: Error kind, as exposed by ``StreamInterpreterError.kind``
        """
        self.errors_reported += 1
        with self._lock:
            self._errors_by_kind[kind] += 1

    def record_ignored(self, event_type: str | None) -> None:
        """Record a frame dropped under the ignore policy."""
        self.events_ignored += 1
        with self._lock:
            self._ignored_by_type[event_type or "<missing>"] += 1

    def get_error_rate(self) -> float:
        """
        Proportion of dispatched frames that ended in an error.

        Returns:
            A float between 0.0 and 1.0. Returns 0.0 if nothing has been
            dispatched yet.
        """
        dispatched = self.events_emitted + self.errors_reported
        return self.errors_reported / dispatched if dispatched > 0 else 0.0

    def get_stats(self) -> dict[str, Any]:
        """
        Return metrics as a dictionary for JSON serialization.

        Returns:
            Dictionary containing all counters and per-type breakdowns.
        """
        with self._lock:
            events_by_type = dict(self._events_by_type)
            errors_by_kind = dict(self._errors_by_kind)
            ignored_by_type = dict(self._ignored_by_type)
        return {
            "bytes_received": self.bytes_received,
            "frames_processed": self.frames_processed,
            "events_emitted": self.events_emitted,
            "errors_reported": self.errors_reported,
            "events_ignored": self.events_ignored,
            "sentinels_seen": self.sentinels_seen,
            "error_rate": self.get_error_rate(),
            "events_by_type": events_by_type,
            "errors_by_kind": errors_by_kind,
            "ignored_by_type": ignored_by_type,
        }

    def reset(self) -> None:
        """Reset all metrics to zero."""
        self.bytes_received = 0
        self.frames_processed = 0
        self.events_emitted = 0
        self.errors_reported = 0
        self.events_ignored = 0
        self.sentinels_seen = 0

        with self._lock:
            self._events_by_type.clear()
            self._errors_by_kind.clear()
            self._ignored_by_type.clear()


class PrometheusInterpreterMetrics:
    """
    Prometheus counters for stream interpreter observability.

    Metrics:
        - stream_interp_bytes_received_total: Bytes handed to interpreters
        - stream_interp_frames_total: Complete SSE frames extracted
        - stream_interp_events_emitted_total: Typed events, by event_type
        - stream_interp_errors_total: Errors, by kind
        - stream_interp_events_ignored_total: Ignored frames
        - stream_interp_sentinels_total: End-of-stream sentinels

    Usage:
        >>> prom_metrics = PrometheusInterpreterMetrics(registry=CollectorRegistry())
        >>> prom_metrics.observe_event("response.output_text.delta")
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """
        Initialize Prometheus interpreter metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.
        """
        kwargs: dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry

        self.bytes_received = Counter(
            BYTES_RECEIVED_TOTAL,
            "Total bytes handed to the stream interpreter",
            **kwargs,
        )
        self.frames = Counter(
            FRAMES_TOTAL,
            "Complete SSE frames extracted from the stream",
            **kwargs,
        )
        self.events_emitted = Counter(
            EVENTS_EMITTED_TOTAL,
            "Typed stream events delivered to the event callback",
            ["event_type"],
            **kwargs,
        )
        self.errors = Counter(
            ERRORS_TOTAL,
            "Errors delivered to the error callback",
            ["kind"],
            **kwargs,
        )
        self.events_ignored = Counter(
            EVENTS_IGNORED_TOTAL,
            "Frames with an unrecognized event type that were ignored",
            **kwargs,
        )
        self.sentinels = Counter(
            SENTINELS_TOTAL,
            "End-of-stream sentinel payloads consumed",
            **kwargs,
        )

        logger.info("Prometheus interpreter metrics initialized")

    def observe_bytes(self, count: int) -> None:
        self.bytes_received.inc(count)

    def observe_frame(self) -> None:
        self.frames.inc()

    def observe_event(self, event_type: str) -> None:
        self.events_emitted.labels(event_type=event_type).inc()

    def observe_error(self, kind: str) -> None:
        self.errors.labels(kind=kind).inc()

    def observe_ignored(self) -> None:
        self.events_ignored.inc()

    def observe_sentinel(self) -> None:
        self.sentinels.inc()


# Module-level singleton registered against the default registry
_prometheus_interpreter_metrics: PrometheusInterpreterMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_interpreter_metrics() -> PrometheusInterpreterMetrics | None:
    """
    Get or create the Prometheus interpreter metrics singleton.

    Thread-safe singleton initialization using double-checked locking to
    prevent duplicate registration errors from prometheus_client.

    Returns:
        The shared PrometheusInterpreterMetrics instance, or None if the
        metrics could not be registered.
    """
    global _prometheus_interpreter_metrics

    if _prometheus_interpreter_metrics is None:
        with _prometheus_lock:
            if _prometheus_interpreter_metrics is None:
                try:
                    _prometheus_interpreter_metrics = PrometheusInterpreterMetrics()
                except ValueError as e:
                    # Raised by prometheus_client for duplicated timeseries
                    logger.warning(
                        f"Failed to initialize Prometheus interpreter metrics: {e}"
                    )
                    return None

    return _prometheus_interpreter_metrics


def reset_prometheus_interpreter_metrics() -> None:
    """Reset the Prometheus interpreter metrics singleton (mainly for testing)."""
    global _prometheus_interpreter_metrics
    _prometheus_interpreter_metrics = None


__all__ = [
    "InterpreterMetrics",
    "PrometheusInterpreterMetrics",
    "get_prometheus_interpreter_metrics",
    "reset_prometheus_interpreter_metrics",
]
