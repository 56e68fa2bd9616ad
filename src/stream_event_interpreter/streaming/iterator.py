# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Async iterator adapter over the callback-based interpreter.

This module provides the ResponseEventAsyncIterator class, which wraps the
raw byte iterator of an HTTP response and yields typed stream events. It
adapts the interpreter's synchronous callback contract to ``async for``.

The wrapper:
1. Pulls chunks from the underlying byte iterator
2. Feeds them to a ResponseEventsStreamInterpreter
3. Yields queued events in arrival order
4. Raises or collects frame errors depending on ``raise_on_error``
5. Stops at the end of the body or after the ``[DONE]`` sentinel

Key Design Decisions:
- Events decoded before an error are yielded before the error is raised.
- Idempotent close: ``aclose()`` may be called any number of times.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import AsyncGenerator, AsyncIterator
from typing import cast

from typing_extensions import Self

from ..exceptions import StreamInterpreterError
from ..types.events import StreamEventModel
from .interpreter import ResponseEventsStreamInterpreter

logger = logging.getLogger(__name__)


class ResponseEventAsyncIterator(AsyncIterator[StreamEventModel]):
    """
    Async iterator yielding typed events from a streamed response body.

    Usage:
        async with httpx.AsyncClient() as client:
            async with client.stream("POST", url, json=body) as response:
                async with ResponseEventAsyncIterator(response.aiter_bytes()) as events:
                    async for event in events:
                        if isinstance(event, OutputTextDeltaEvent):
                            print(event.delta, end="")

    Note:
        For early break from iteration, use the async context manager form
        so that ``aclose()`` closes the underlying byte iterator.
    """

    __slots__ = (
        "__weakref__",
        "_closed",
        "_errors",
        "_exhausted",
        "_inner",
        "_interpreter",
        "_queue",
        "_raise_on_error",
    )

    def __init__(
        self,
        inner: AsyncIterator[bytes],
        interpreter: ResponseEventsStreamInterpreter | None = None,
        raise_on_error: bool = True,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            inner: The underlying async iterator of response body chunks
            interpreter: Interpreter to use. A default one is created when
                omitted; its callbacks are replaced by the adapter's own.
            raise_on_error: Raise frame errors from ``__anext__``. When
                False, errors are logged and collected in ``errors``.
        """
        self._inner = inner
        self._interpreter = interpreter or ResponseEventsStreamInterpreter()
        self._raise_on_error = raise_on_error
        self._queue: deque[StreamEventModel | StreamInterpreterError] = deque()
        self._errors: list[StreamInterpreterError] = []
        self._exhausted = False
        self._closed = False
        self._interpreter.set_callbacks(self._queue.append, self._queue.append)

    @property
    def interpreter(self) -> ResponseEventsStreamInterpreter:
        return self._interpreter

    @property
    def errors(self) -> list[StreamInterpreterError]:
        """Errors collected while ``raise_on_error`` is False."""
        return list(self._errors)

    async def __anext__(self) -> StreamEventModel:
        """
        Return the next event, reading more of the body as needed.

        Raises:
            StreamInterpreterError: A frame error, when ``raise_on_error``
            StopAsyncIteration: At end of body or after the sentinel
        """
        while True:
            while self._queue:
                item = self._queue.popleft()
                if isinstance(item, StreamEventModel):
                    return item
                if self._raise_on_error:
                    raise item
                logger.warning(f"Skipping stream frame ({item.kind}): {item}")
                self._errors.append(item)

            if self._exhausted or self._closed or self._interpreter.finished:
                raise StopAsyncIteration

            try:
                chunk = await self._inner.__anext__()
            except StopAsyncIteration:
                self._exhausted = True
                self._interpreter.flush()
                continue

            self._interpreter.process_data(chunk)

    async def aclose(self) -> None:
        """
        Explicit close with cleanup.

        Closes the underlying iterator if it supports ``aclose()``. This
        method is idempotent - multiple calls are safe.
        """
        if self._closed:
            return
        self._closed = True
        self._queue.clear()

        if hasattr(self._inner, "aclose"):
            try:
                await cast(AsyncGenerator[bytes, None], self._inner).aclose()
            except Exception as e:
                # Log but don't propagate - we're in cleanup
                logger.debug(
                    f"Error closing inner iterator: {type(e).__name__}: {e}"
                )

    def __aiter__(self) -> Self:
        """Return self as the async iterator."""
        return self

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["ResponseEventAsyncIterator"]
