# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Typed event catalog for streamed model responses.

Every streamed payload carries a ``type`` discriminant. This module defines
one pydantic model per known discriminant, the closed ``ResponseStreamEvent``
union of those models, and the registry the interpreter uses to select a
model for a payload.

Scalar fields use pydantic strict types: a payload that sends ``"0"`` where
an index is expected is a decode failure, not a silent coercion. Unknown
payload fields are ignored so that servers can add fields freely.

Consumers are expected to match exhaustively on the union:

    >>> match event:
    ...     case OutputTextDeltaEvent(delta=delta):
    ...         buffer.append(delta)
    ...     case ResponseIncompleteEvent(incomplete_details=None):
    ...         logger.info("response stopped early")
    ...     case ResponseIncompleteEvent(incomplete_details=details):
    ...         logger.info(f"response stopped early: {details.reason.value}")
    ...     case _:
    ...         pass

Adding a variant means defining a model with a literal ``type`` default,
registering it with ``register_event_type`` and adding it to
``ResponseStreamEvent``. The interpreter dispatches through the registry, so
a model that is only registered is still delivered to ``on_event``, but
exhaustive matches over the union will not account for it.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

from .json_value import JSONObject, JSONValue


class IncompleteReason(str, Enum):
    """Why a response ended before completion."""

    MAX_OUTPUT_TOKENS = "max_output_tokens"
    CONTENT_FILTER = "content_filter"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


def _none_as_empty(value: Any) -> Any:
    """Read a ``null`` sequence as an empty one."""
    return () if value is None else value


class IncompleteDetails(_FrozenModel):
    """Detail object attached to an incomplete response."""

    reason: IncompleteReason


class ResponseUsage(_FrozenModel):
    """Token accounting reported with a finished response."""

    input_tokens: StrictInt | None = None
    output_tokens: StrictInt | None = None
    total_tokens: StrictInt | None = None


class ResponseErrorDetail(_FrozenModel):
    """Error object attached to a failed response."""

    message: StrictStr
    code: StrictStr | None = None


class ResponseSnapshot(_FrozenModel):
    """
    State of the response object at the time of a lifecycle event.

    Only the members useful for stream handling are typed; output items are
    kept as dynamic JSON since their shape varies by item kind.
    """

    id: StrictStr
    status: StrictStr | None = None
    model: StrictStr | None = None
    created_at: StrictInt | StrictFloat | None = None
    usage: ResponseUsage | None = None
    error: ResponseErrorDetail | None = None
    incomplete_details: IncompleteDetails | None = None
    output: tuple[JSONValue, ...] = ()

    @field_validator("output", mode="before")
    @classmethod
    def _null_output_as_empty(cls, value: Any) -> Any:
        return _none_as_empty(value)


class StreamEventModel(_FrozenModel):
    """Base class of every typed stream event."""

    type: str
    sequence_number: StrictInt | None = None


# =============================================================================
# Output text
# =============================================================================


class OutputTextDeltaEvent(StreamEventModel):
    """An incremental piece of output text."""

    type: Literal["response.output_text.delta"] = "response.output_text.delta"
    item_id: StrictStr
    output_index: StrictInt
    content_index: StrictInt
    delta: StrictStr
    sequence_number: StrictInt
    logprobs: tuple[JSONValue, ...] = ()

    @field_validator("logprobs", mode="before")
    @classmethod
    def _null_logprobs_as_empty(cls, value: Any) -> Any:
        return _none_as_empty(value)


class OutputTextDoneEvent(StreamEventModel):
    type: Literal["response.output_text.done"] = "response.output_text.done"
    item_id: StrictStr
    output_index: StrictInt
    content_index: StrictInt
    text: StrictStr


class RefusalDeltaEvent(StreamEventModel):
    type: Literal["response.refusal.delta"] = "response.refusal.delta"
    item_id: StrictStr
    output_index: StrictInt
    content_index: StrictInt
    delta: StrictStr


class RefusalDoneEvent(StreamEventModel):
    type: Literal["response.refusal.done"] = "response.refusal.done"
    item_id: StrictStr
    output_index: StrictInt
    content_index: StrictInt
    refusal: StrictStr


# =============================================================================
# Function calls and output items
# =============================================================================


class FunctionCallArgumentsDeltaEvent(StreamEventModel):
    type: Literal["response.function_call_arguments.delta"] = (
        "response.function_call_arguments.delta"
    )
    item_id: StrictStr
    output_index: StrictInt
    delta: StrictStr


class FunctionCallArgumentsDoneEvent(StreamEventModel):
    type: Literal["response.function_call_arguments.done"] = (
        "response.function_call_arguments.done"
    )
    item_id: StrictStr
    output_index: StrictInt
    arguments: StrictStr


class OutputItemAddedEvent(StreamEventModel):
    type: Literal["response.output_item.added"] = "response.output_item.added"
    output_index: StrictInt
    item: JSONObject


class OutputItemDoneEvent(StreamEventModel):
    type: Literal["response.output_item.done"] = "response.output_item.done"
    output_index: StrictInt
    item: JSONObject


# =============================================================================
# Response lifecycle
# =============================================================================


class ResponseCreatedEvent(StreamEventModel):
    type: Literal["response.created"] = "response.created"
    response: ResponseSnapshot


class ResponseInProgressEvent(StreamEventModel):
    type: Literal["response.in_progress"] = "response.in_progress"
    response: ResponseSnapshot


class ResponseCompletedEvent(StreamEventModel):
    type: Literal["response.completed"] = "response.completed"
    response: ResponseSnapshot


class ResponseFailedEvent(StreamEventModel):
    type: Literal["response.failed"] = "response.failed"
    response: ResponseSnapshot


class ResponseIncompleteEvent(StreamEventModel):
    """
    Terminal event for a response that stopped before completion.

    The detail object may be sent at the top level of the payload or nested
    in the response snapshot; the top level wins when both are present. A
    ``null`` or missing detail decodes to None.
    """

    type: Literal["response.incomplete"] = "response.incomplete"
    incomplete_details: IncompleteDetails | None = None
    response: ResponseSnapshot | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_incomplete_details(cls, data: Any) -> Any:
        if (
            isinstance(data, dict)
            and "incomplete_details" not in data
            and isinstance(data.get("response"), dict)
        ):
            return {**data, "incomplete_details": data["response"].get("incomplete_details")}
        return data

    @property
    def reason(self) -> IncompleteReason | None:
        if self.incomplete_details is None:
            return None
        return self.incomplete_details.reason


ResponseStreamEvent = Annotated[
    Union[
        OutputTextDeltaEvent,
        OutputTextDoneEvent,
        RefusalDeltaEvent,
        RefusalDoneEvent,
        FunctionCallArgumentsDeltaEvent,
        FunctionCallArgumentsDoneEvent,
        OutputItemAddedEvent,
        OutputItemDoneEvent,
        ResponseCreatedEvent,
        ResponseInProgressEvent,
        ResponseCompletedEvent,
        ResponseFailedEvent,
        ResponseIncompleteEvent,
    ],
    Field(discriminator="type"),
]
"""Closed union of every typed stream event."""


# =============================================================================
# Discriminant registry
# =============================================================================

EVENT_TYPES: dict[str, type[StreamEventModel]] = {}
"""Maps a ``type`` discriminant to the model that decodes it."""


def register_event_type(model: type[StreamEventModel]) -> type[StreamEventModel]:
    """
    Register an event model under its ``type`` discriminant.

    The discriminant is read from the default of the model's ``type`` field.
    Usable as a class decorator.

    Registration alone makes the interpreter decode and deliver the model.
    Add the model to ``ResponseStreamEvent`` as well so that exhaustive
    matches over the union cover it.

    Raises:
        ValueError: If the model has no string default for ``type`` or the
            discriminant is already registered to another model.
    """
    discriminant = model.model_fields["type"].default
    if not isinstance(discriminant, str):
        raise ValueError(f"{model.__name__} must declare a literal default for 'type'")
    existing = EVENT_TYPES.get(discriminant)
    if existing is not None and existing is not model:
        raise ValueError(
            f"Event type {discriminant!r} is already registered to {existing.__name__}"
        )
    EVENT_TYPES[discriminant] = model
    return model


def event_model_for(event_type: str) -> type[StreamEventModel] | None:
    """Return the model registered for a discriminant, or None if unknown."""
    return EVENT_TYPES.get(event_type)


for _model in (
    OutputTextDeltaEvent,
    OutputTextDoneEvent,
    RefusalDeltaEvent,
    RefusalDoneEvent,
    FunctionCallArgumentsDeltaEvent,
    FunctionCallArgumentsDoneEvent,
    OutputItemAddedEvent,
    OutputItemDoneEvent,
    ResponseCreatedEvent,
    ResponseInProgressEvent,
    ResponseCompletedEvent,
    ResponseFailedEvent,
    ResponseIncompleteEvent,
):
    register_event_type(_model)


__all__ = [
    "EVENT_TYPES",
    "FunctionCallArgumentsDeltaEvent",
    "FunctionCallArgumentsDoneEvent",
    "IncompleteDetails",
    "IncompleteReason",
    "OutputItemAddedEvent",
    "OutputItemDoneEvent",
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
    "event_model_for",
    "register_event_type",
]
