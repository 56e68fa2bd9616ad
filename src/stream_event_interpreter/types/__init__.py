# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions: the dynamic JSON value and the typed event catalog."""

from .events import (
    EVENT_TYPES,
    FunctionCallArgumentsDeltaEvent,
    FunctionCallArgumentsDoneEvent,
    IncompleteDetails,
    IncompleteReason,
    OutputItemAddedEvent,
    OutputItemDoneEvent,
    OutputTextDeltaEvent,
    OutputTextDoneEvent,
    RefusalDeltaEvent,
    RefusalDoneEvent,
    ResponseCompletedEvent,
    ResponseCreatedEvent,
    ResponseErrorDetail,
    ResponseFailedEvent,
    ResponseIncompleteEvent,
    ResponseInProgressEvent,
    ResponseSnapshot,
    ResponseStreamEvent,
    ResponseUsage,
    StreamEventModel,
    event_model_for,
    register_event_type,
)
from .json_value import (
    NULL,
    JSONArray,
    JSONBool,
    JSONInteger,
    JSONNull,
    JSONNumber,
    JSONObject,
    JSONString,
    JSONValue,
    decode,
    encode,
    to_json_value,
)

__all__ = [
    "EVENT_TYPES",
    "NULL",
    "FunctionCallArgumentsDeltaEvent",
    "FunctionCallArgumentsDoneEvent",
    "IncompleteDetails",
    "IncompleteReason",
    # JSON values
    "JSONArray",
    "JSONBool",
    "JSONInteger",
    "JSONNull",
    "JSONNumber",
    "JSONObject",
    "JSONString",
    "JSONValue",
    "OutputItemAddedEvent",
    "OutputItemDoneEvent",
    # Events
    "OutputTextDeltaEvent",
    "OutputTextDoneEvent",
    "RefusalDeltaEvent",
    "RefusalDoneEvent",
    "ResponseCompletedEvent",
    "ResponseCreatedEvent",
    "ResponseErrorDetail",
    "ResponseFailedEvent",
    "ResponseInProgressEvent",
    "ResponseIncompleteEvent",
    "ResponseSnapshot",
    "ResponseStreamEvent",
    "ResponseUsage",
    "StreamEventModel",
    "decode",
    "encode",
    "event_model_for",
    "register_event_type",
    "to_json_value",
]
