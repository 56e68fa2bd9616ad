# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Stream event interpreter for streamed model responses.

This module provides ResponseEventsStreamInterpreter, which consumes the raw
bytes of a ``text/event-stream`` response body and reports every frame to
exactly one of two registered callbacks: a typed event, or an error.

Pipeline per frame:
1. The SSE scanner extracts the frame's payload text
2. The ``[DONE]`` sentinel is consumed silently
3. The payload is decoded into a JSONValue (MalformedInputError on failure)
4. An error envelope or in-band ``error`` event becomes an ApplicationError
5. The ``type`` discriminant selects a model from the event catalog
6. The model validates the payload (DecodeFailureError on failure)

Key Design Decisions:
- Errors are local to a frame: they are delivered to ``on_error`` and never
  raised out of ``process_data``, so one bad frame cannot stop the stream.
- Frames split across ``process_data`` calls are reassembled by the scanner.
- Unknown discriminants follow ``InterpreterConfig.unknown_event_policy``.
- Exceptions raised by callbacks are logged and do not affect later frames.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import cast

from pydantic import ValidationError

from ..exceptions import (
    ApplicationError,
    CallbacksNotSetError,
    ConfigurationError,
    DecodeFailureError,
    MalformedInputError,
    StreamInterpreterError,
    UnrecognizedEventError,
)
from ..observability.metrics import InterpreterMetrics, PrometheusInterpreterMetrics
from ..protocols.handler import StreamEventHandler
from ..types.events import StreamEventModel, event_model_for
from ..types.json_value import (
    JSONInteger,
    JSONObject,
    JSONString,
    JSONValue,
    decode,
)
from .config import InterpreterConfig, UnknownEventPolicy
from .frames import DiscardedFrame, SSEFrameScanner, StreamFrame

logger = logging.getLogger(__name__)

EventCallback = Callable[[StreamEventModel], None]
ErrorCallback = Callable[[StreamInterpreterError], None]

_ERROR_EVENT_TYPE = "error"


def _string_member(obj: JSONObject, key: str) -> str | None:
    member = obj.get(key)
    if isinstance(member, JSONString):
        return member.value
    if isinstance(member, JSONInteger):
        return str(member.value)
    return None


def _application_error(obj: JSONObject, in_band: bool = False) -> ApplicationError:
    """
    Build an ApplicationError from an error object, keeping server text verbatim.

    For an in-band ``error`` event the ``type`` member is the discriminant,
    not an error category, so it is not copied.
    """
    return ApplicationError(
        message=_string_member(obj, "message") or "Unknown error",
        code=_string_member(obj, "code"),
        error_type=None if in_band else _string_member(obj, "type"),
        param=_string_member(obj, "param"),
    )


class ResponseEventsStreamInterpreter:
    """
    Turns streamed response bytes into typed events or errors.

    The interpreter is synchronous and single-threaded: ``process_data``
    calls must be serialized by the caller, and callbacks run inside the
    call that completed their frame.

    Usage:
        interpreter = ResponseEventsStreamInterpreter()
        interpreter.set_callbacks(
            on_event=lambda event: print(event.type),
            on_error=lambda error: print(f"{error.kind}: {error}"),
        )

        async for chunk in response.aiter_bytes():
            interpreter.process_data(chunk)
    """

    def __init__(
        self,
        config: InterpreterConfig | None = None,
        metrics: InterpreterMetrics | None = None,
        prometheus_metrics: PrometheusInterpreterMetrics | None = None,
    ) -> None:
        """
        Initialize the interpreter.

        Args:
            config: Interpreter configuration, defaults to InterpreterConfig()
            metrics: Metrics instance to record into. Created automatically
                when metrics are enabled and none is given.
            prometheus_metrics: Optional Prometheus counters to update
        """
        self._config = config or InterpreterConfig()
        self._scanner = SSEFrameScanner(max_frame_bytes=self._config.max_buffer_bytes)
        self._on_event: EventCallback | None = None
        self._on_error: ErrorCallback | None = None
        self._finished = False

        if metrics is None and self._config.metrics_enabled:
            metrics = InterpreterMetrics()
        self._metrics = metrics
        self._prometheus = prometheus_metrics

    @property
    def config(self) -> InterpreterConfig:
        return self._config

    @property
    def metrics(self) -> InterpreterMetrics | None:
        return self._metrics

    @property
    def finished(self) -> bool:
        """True once the end-of-stream sentinel has been consumed."""
        return self._finished

    @property
    def buffered_bytes(self) -> int:
        """Bytes of the current, not yet completed frame."""
        return self._scanner.pending_bytes

    def set_callbacks(self, on_event: EventCallback, on_error: ErrorCallback) -> None:
        """
        Register the success and error callbacks.

        Both callbacks must be given together, before any data is processed.

        Raises:
            ConfigurationError: If either callback is not callable.
        """
        if not callable(on_event) or not callable(on_error):
            raise ConfigurationError("on_event and on_error must both be callable")
        self._on_event = on_event
        self._on_error = on_error

    def set_handler(self, handler: StreamEventHandler) -> None:
        """Register both callbacks from an object implementing StreamEventHandler."""
        self.set_callbacks(handler.on_event, handler.on_error)

    def process_data(self, data: bytes) -> None:
        """
        Append a chunk of the response body and dispatch every completed frame.

        Args:
            data: The next chunk of bytes, in arrival order. May hold zero,
                one or many frames and may end in the middle of a frame.

        Raises:
            CallbacksNotSetError: If called before set_callbacks().
        """
        if self._on_event is None or self._on_error is None:
            raise CallbacksNotSetError()

        if self._metrics is not None:
            self._metrics.record_bytes(len(data))
        if self._prometheus is not None:
            self._prometheus.observe_bytes(len(data))

        for frame in self._scanner.feed(data):
            if isinstance(frame, DiscardedFrame):
                self._emit_error(
                    MalformedInputError(
                        f"Frame of at least {frame.size} bytes exceeds "
                        f"max_buffer_bytes={self._config.max_buffer_bytes}"
                    )
                )
                continue
            self._process_frame(frame)

    def flush(self) -> int:
        """
        Signal end of input, dropping any incomplete trailing frame.

        Returns:
            Number of bytes that were discarded.
        """
        discarded = self._scanner.flush()
        if discarded:
            logger.warning(f"Discarded {discarded} bytes of an incomplete frame")
        return discarded

    def reset(self) -> None:
        """Clear buffered input and the finished flag. Callbacks stay registered."""
        self._scanner.reset()
        self._finished = False

    def _process_frame(self, frame: StreamFrame) -> None:
        if self._metrics is not None:
            self._metrics.record_frame()
        if self._prometheus is not None:
            self._prometheus.observe_frame()

        if frame.data.strip() == self._config.done_sentinel:
            self._finished = True
            logger.debug("Stream finished sentinel received")
            if self._metrics is not None:
                self._metrics.record_sentinel()
            if self._prometheus is not None:
                self._prometheus.observe_sentinel()
            return

        try:
            value = decode(frame.data)
        except MalformedInputError as e:
            self._emit_error(e)
            return

        outcome = self._classify(value, frame)
        if outcome is None:
            return
        if isinstance(outcome, StreamInterpreterError):
            self._emit_error(outcome)
        else:
            self._emit_event(outcome)

    def _classify(
        self, value: JSONValue, frame: StreamFrame
    ) -> StreamEventModel | StreamInterpreterError | None:
        """Map a decoded payload to an event, an error, or None when ignored."""
        if not isinstance(value, JSONObject):
            return DecodeFailureError(
                f"Expected a JSON object payload, got {value.kind}",
                payload=frame.data,
            )

        error = value.get("error")
        if isinstance(error, JSONObject):
            return _application_error(error)

        discriminant = value.get("type")
        if discriminant is None:
            if not (self._config.use_sse_event_name and frame.event):
                return self._unrecognized(None, frame)
            event_type = frame.event
        elif isinstance(discriminant, JSONString):
            event_type = discriminant.value
        else:
            return DecodeFailureError(
                f"Event type must be a string, got {discriminant.kind}",
                field="type",
                payload=frame.data,
            )

        if event_type == _ERROR_EVENT_TYPE:
            return _application_error(value, in_band=True)

        model = event_model_for(event_type)
        if model is None:
            return self._unrecognized(event_type, frame)

        try:
            return model.model_validate(value.to_python())
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or None
            return DecodeFailureError(
                f"Invalid {event_type} event: {first['msg']} (field: {field})",
                event_type=event_type,
                field=field,
                payload=frame.data,
            )

    def _unrecognized(
        self, event_type: str | None, frame: StreamFrame
    ) -> UnrecognizedEventError | None:
        if self._config.unknown_event_policy is UnknownEventPolicy.ERROR:
            return UnrecognizedEventError(event_type, payload=frame.data)

        logger.debug(f"Ignoring stream event with unrecognized type: {event_type}")
        if self._metrics is not None:
            self._metrics.record_ignored(event_type)
        if self._prometheus is not None:
            self._prometheus.observe_ignored()
        return None

    def _emit_event(self, event: StreamEventModel) -> None:
        if self._metrics is not None:
            self._metrics.record_event(event.type)
        if self._prometheus is not None:
            self._prometheus.observe_event(event.type)

        on_event = cast(EventCallback, self._on_event)
        try:
            on_event(event)
        except Exception:
            logger.exception(f"on_event callback failed for {event.type} event")

    def _emit_error(self, error: StreamInterpreterError) -> None:
        logger.warning(f"Stream frame failed ({error.kind}): {error}")
        if self._metrics is not None:
            self._metrics.record_error(error.kind)
        if self._prometheus is not None:
            self._prometheus.observe_error(error.kind)

        on_error = cast(ErrorCallback, self._on_error)
        try:
            on_error(error)
        except Exception:
            logger.exception(f"on_error callback failed for {error.kind} error")


__all__ = [
    "ErrorCallback",
    "EventCallback",
    "ResponseEventsStreamInterpreter",
]
