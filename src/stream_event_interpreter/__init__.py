# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Stream Event Interpreter - Typed events from streamed model responses.

This library turns the raw bytes of a ``text/event-stream`` response into
strongly typed event objects, delivering every frame to exactly one of two
callbacks: a decoded event, or a classified error.

Key Features:
    - Incremental SSE framing that survives arbitrary chunk boundaries
    - A dynamic JSON value type that keeps integers and floats apart
    - A closed, discriminated catalog of response stream events
    - Per-frame error isolation: one bad frame never stops the stream
    - Configurable handling of unrecognized event types
    - An ``async for`` adapter over any async byte iterator

Quick Start:
    >>> from stream_event_interpreter import ResponseEventsStreamInterpreter
    >>>
    >>> interpreter = ResponseEventsStreamInterpreter()
    >>> interpreter.set_callbacks(
    ...     on_event=lambda event: print(event.type),
    ...     on_error=lambda error: print(error.kind),
    ... )
    >>> interpreter.process_data(b'data: {"type":"error","message":"boom"}\\n\\n')
    application_error

Main Exports:
    - ResponseEventsStreamInterpreter: Bytes in, events or errors out
    - ResponseEventAsyncIterator: Async adapter for response bodies
    - InterpreterConfig, UnknownEventPolicy: Configuration options
    - JSONValue and its variants: Dynamic JSON representation
    - Event models: One pydantic model per event type

Version: 1.0.0
"""

__version__ = "1.0.0"

from .exceptions import (
    ApplicationError,
    CallbacksNotSetError,
    ConfigurationError,
    DecodeFailureError,
    MalformedInputError,
    StreamInterpreterError,
    UnrecognizedEventError,
)
from .observability import (
    InterpreterMetrics,
    PrometheusInterpreterMetrics,
    get_prometheus_interpreter_metrics,
    reset_prometheus_interpreter_metrics,
)
from .protocols import JSONRepresentable, StreamEventHandler
from .streaming import (
    InterpreterConfig,
    ResponseEventAsyncIterator,
    ResponseEventsStreamInterpreter,
    SSEFrameScanner,
    StreamFrame,
    UnknownEventPolicy,
)
from .types import (
    EVENT_TYPES,
    NULL,
    FunctionCallArgumentsDeltaEvent,
    FunctionCallArgumentsDoneEvent,
    IncompleteDetails,
    IncompleteReason,
    JSONArray,
    JSONBool,
    JSONInteger,
    JSONNull,
    JSONNumber,
    JSONObject,
    JSONString,
    JSONValue,
    OutputItemAddedEvent,
    OutputItemDoneEvent,
    OutputTextDeltaEvent,
    OutputTextDoneEvent,
    RefusalDeltaEvent,
    RefusalDoneEvent,
    ResponseCompletedEvent,
    ResponseCreatedEvent,
    ResponseFailedEvent,
    ResponseIncompleteEvent,
    ResponseInProgressEvent,
    ResponseSnapshot,
    ResponseStreamEvent,
    StreamEventModel,
    decode,
    encode,
    event_model_for,
    register_event_type,
    to_json_value,
)

__all__ = [
    "EVENT_TYPES",
    "NULL",
    # Exceptions
    "ApplicationError",
    "CallbacksNotSetError",
    "ConfigurationError",
    "DecodeFailureError",
    # Events
    "FunctionCallArgumentsDeltaEvent",
    "FunctionCallArgumentsDoneEvent",
    "IncompleteDetails",
    "IncompleteReason",
    # Streaming
    "InterpreterConfig",
    # Observability
    "InterpreterMetrics",
    # JSON values
    "JSONArray",
    "JSONBool",
    "JSONInteger",
    "JSONNull",
    "JSONNumber",
    "JSONObject",
    # Protocols
    "JSONRepresentable",
    "JSONString",
    "JSONValue",
    "MalformedInputError",
    "OutputItemAddedEvent",
    "OutputItemDoneEvent",
    "OutputTextDeltaEvent",
    "OutputTextDoneEvent",
    "PrometheusInterpreterMetrics",
    "RefusalDeltaEvent",
    "RefusalDoneEvent",
    "ResponseCompletedEvent",
    "ResponseCreatedEvent",
    "ResponseEventAsyncIterator",
    "ResponseEventsStreamInterpreter",
    "ResponseFailedEvent",
    "ResponseInProgressEvent",
    "ResponseIncompleteEvent",
    "ResponseSnapshot",
    "ResponseStreamEvent",
    "SSEFrameScanner",
    "StreamEventHandler",
    "StreamEventModel",
    "StreamFrame",
    "StreamInterpreterError",
    "UnknownEventPolicy",
    "UnrecognizedEventError",
    "__version__",
    "decode",
    "encode",
    "event_model_for",
    "get_prometheus_interpreter_metrics",
    "register_event_type",
    "reset_prometheus_interpreter_metrics",
    "to_json_value",
]
