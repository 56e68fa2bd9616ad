# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the ``stream_interp_`` prefix.

Naming Conventions:
    - Counter metrics end with `_total`

Label Best Practices:
    To prevent label cardinality explosion, use only:
    - `event_type` - Stream event discriminant (categorical)
    - `kind` - Error kind (enum: malformed_input, decode_failure,
      application_error, unrecognized_event)

    NEVER use:
    - `item_id` / response ids - Unique per response (unbounded!)
    - payload text - Unbounded
"""


METRIC_PREFIX = "stream_interp"
"""Prefix for all Prometheus metrics in this library."""

BYTES_RECEIVED_TOTAL = f"{METRIC_PREFIX}_bytes_received_total"
"""Total bytes handed to the interpreter."""

FRAMES_TOTAL = f"{METRIC_PREFIX}_frames_total"
"""Total complete SSE frames extracted (sentinels included)."""

EVENTS_EMITTED_TOTAL = f"{METRIC_PREFIX}_events_emitted_total"
"""Total typed events delivered to the event callback, by event_type."""

ERRORS_TOTAL = f"{METRIC_PREFIX}_errors_total"
"""Total errors delivered to the error callback, by kind."""

EVENTS_IGNORED_TOTAL = f"{METRIC_PREFIX}_events_ignored_total"
"""Total frames with an unrecognized discriminant that were ignored."""

SENTINELS_TOTAL = f"{METRIC_PREFIX}_sentinels_total"
"""Total end-of-stream sentinel payloads consumed."""


__all__ = [
    "BYTES_RECEIVED_TOTAL",
    "ERRORS_TOTAL",
    "EVENTS_EMITTED_TOTAL",
    "EVENTS_IGNORED_TOTAL",
    "FRAMES_TOTAL",
    "METRIC_PREFIX",
    "SENTINELS_TOTAL",
]
