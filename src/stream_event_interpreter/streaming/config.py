# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Interpreter Configuration

This module provides the configuration class for the stream event
interpreter, including the policy for event types unknown to this build.
"""

from dataclasses import dataclass
from enum import Enum


class UnknownEventPolicy(Enum):
    """What to do with a payload whose ``type`` is not in the event catalog.

    - IGNORE: Drop the frame without invoking any callback. Keeps consumers
      working when the server introduces new event kinds.
    - ERROR: Report an UnrecognizedEventError through the error callback.
      Use when every event kind must be accounted for, e.g. in contract tests.
    """

    IGNORE = "ignore"
    ERROR = "error"


@dataclass
class InterpreterConfig:
    """
    Configuration for the stream event interpreter.

    The defaults match the streaming Responses API.
    """

    unknown_event_policy: UnknownEventPolicy = UnknownEventPolicy.IGNORE
    """Handling of payloads with an unrecognized or missing discriminant."""

    done_sentinel: str = "[DONE]"
    """Payload that marks the end of the stream. Consumed silently."""

    use_sse_event_name: bool = True
    """Use the SSE ``event:`` field as discriminant when the payload has no ``type``."""

    max_buffer_bytes: int | None = None
    """Largest frame accepted, in bytes. Larger frames are reported as malformed.

    None disables the limit.
    """

    metrics_enabled: bool = True
    """Enable in-process metrics collection."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.unknown_event_policy, UnknownEventPolicy):
            raise ValueError("unknown_event_policy must be an UnknownEventPolicy")
        if not self.done_sentinel or not self.done_sentinel.strip():
            raise ValueError("done_sentinel must be a non-empty string")
        if self.max_buffer_bytes is not None and self.max_buffer_bytes < 1:
            raise ValueError("max_buffer_bytes must be at least 1")


__all__ = [
    "InterpreterConfig",
    "UnknownEventPolicy",
]
