# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Streaming support for response event interpretation.

Classes:
    SSEFrameScanner: Incremental ``text/event-stream`` frame extraction.
    StreamFrame: One complete SSE frame.
    ResponseEventsStreamInterpreter: Bytes in, typed events or errors out,
        through two registered callbacks.
    ResponseEventAsyncIterator: ``async for`` adapter over an async byte
        iterator.
    InterpreterConfig, UnknownEventPolicy: Interpreter configuration.
"""

from .config import InterpreterConfig, UnknownEventPolicy
from .frames import DiscardedFrame, SSEFrameScanner, StreamFrame
from .interpreter import ErrorCallback, EventCallback, ResponseEventsStreamInterpreter
from .iterator import ResponseEventAsyncIterator

__all__ = [
    "DiscardedFrame",
    "ErrorCallback",
    "EventCallback",
    "InterpreterConfig",
    "ResponseEventAsyncIterator",
    "ResponseEventsStreamInterpreter",
    "SSEFrameScanner",
    "StreamFrame",
    "UnknownEventPolicy",
]
