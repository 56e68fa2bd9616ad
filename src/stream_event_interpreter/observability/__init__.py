# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the stream event interpreter.

Classes:
    InterpreterMetrics: In-process counters for interpreter activity.
    PrometheusInterpreterMetrics: Prometheus counters for the same signals.

Functions:
    get_prometheus_interpreter_metrics: Get or create the Prometheus metrics singleton.
    reset_prometheus_interpreter_metrics: Reset the Prometheus metrics singleton.
"""

from .constants import (
    BYTES_RECEIVED_TOTAL,
    ERRORS_TOTAL,
    EVENTS_EMITTED_TOTAL,
    EVENTS_IGNORED_TOTAL,
    FRAMES_TOTAL,
    METRIC_PREFIX,
    SENTINELS_TOTAL,
)
from .metrics import (
    InterpreterMetrics,
    PrometheusInterpreterMetrics,
    get_prometheus_interpreter_metrics,
    reset_prometheus_interpreter_metrics,
)

__all__ = [
    "BYTES_RECEIVED_TOTAL",
    "ERRORS_TOTAL",
    "EVENTS_EMITTED_TOTAL",
    "EVENTS_IGNORED_TOTAL",
    "FRAMES_TOTAL",
    "METRIC_PREFIX",
    "SENTINELS_TOTAL",
    "InterpreterMetrics",
    "PrometheusInterpreterMetrics",
    "get_prometheus_interpreter_metrics",
    "reset_prometheus_interpreter_metrics",
]
