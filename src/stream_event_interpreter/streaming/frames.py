# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Incremental ``text/event-stream`` frame scanner.

This module turns an ordered sequence of byte chunks into complete SSE
frames. Chunk boundaries may fall anywhere: inside a field name, inside a
line terminator, or inside a multi-byte UTF-8 sequence. Bytes that do not
yet form a complete line stay buffered until the next ``feed`` call, and the
fields of a frame whose blank-line terminator has not arrived yet are kept
as pending state.

Framing rules:
- Lines end with ``\\n``, ``\\r\\n`` or ``\\r``. A ``\\r`` at the very end of
  the buffer is held back until it is known whether a ``\\n`` follows.
- A line is ``field: value``; one space after the colon is stripped. A line
  without a colon is a field with an empty value.
- ``data`` lines accumulate and are joined with ``\\n``; ``event``, ``id``
  and ``retry`` are recorded; lines starting with ``:`` are comments; any
  other field is ignored.
- A blank line completes the frame. A frame without ``data`` lines
  produces nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_LF = 0x0A
_BOM = "\ufeff"


@dataclass(frozen=True)
class StreamFrame:
    """
    One complete SSE event.

    Attributes:
        data: Payload text, ``data`` lines joined with ``\\n``
        event: Value of the ``event`` field, if the frame had one
        id: Last event id seen on the stream, if any
        retry: Reconnection hint in milliseconds sent with this frame, if any
    """

    data: str
    event: str | None = None
    id: str | None = None
    retry: int | None = None


@dataclass(frozen=True)
class DiscardedFrame:
    """A frame dropped because it grew beyond the configured size limit."""

    size: int


class SSEFrameScanner:
    """
    Extracts complete SSE frames from incrementally delivered bytes.

    The scanner is synchronous and not thread-safe; ``feed`` calls must be
    serialized by the caller.

    Example:
        >>> scanner = SSEFrameScanner()
        >>> scanner.feed(b'data: {"a"')
        []
        >>> scanner.feed(b': 1}\\n\\n')
        [StreamFrame(data='{"a": 1}', event=None, id=None, retry=None)]
    """

    def __init__(self, max_frame_bytes: int | None = None) -> None:
        """
        Initialize the scanner.

        Args:
            max_frame_bytes: Optional upper bound on the size of a single
                frame. A frame that grows beyond it is dropped and reported
                as a DiscardedFrame; the rest of it is skipped up to the next
                blank line.
        """
        self._max_frame_bytes = max_frame_bytes
        self._buffer = bytearray()
        self._data_lines: list[str] = []
        self._event: str | None = None
        self._retry: int | None = None
        self._last_event_id: str | None = None
        self._frame_bytes = 0
        self._discarding = False
        self._skip_line = False
        self._at_stream_start = True

    @property
    def pending_bytes(self) -> int:
        """Bytes belonging to the frame that has not been completed yet."""
        return len(self._buffer) + self._frame_bytes

    def feed(self, data: bytes) -> list[StreamFrame | DiscardedFrame]:
        """
        Append bytes and return every frame completed by them, in order.

        Args:
            data: The next chunk of the stream

        Returns:
            Completed frames, plus a DiscardedFrame marker for each frame
            that exceeded the size limit.
        """
        self._buffer.extend(data)
        results: list[StreamFrame | DiscardedFrame] = []
        buffer = self._buffer
        pos = 0

        while True:
            lf = buffer.find(b"\n", pos)
            cr = buffer.find(b"\r", pos, lf if lf != -1 else len(buffer))
            if cr != -1:
                if cr + 1 == len(buffer):
                    break
                end = cr
                next_pos = cr + 2 if buffer[cr + 1] == _LF else cr + 1
            elif lf != -1:
                end = lf
                next_pos = lf + 1
            else:
                break

            line = bytes(buffer[pos:end]).decode("utf-8", errors="replace")
            line_size = next_pos - pos
            pos = next_pos

            if self._skip_line:
                # Tail of a line whose head was dropped with an oversized frame
                self._skip_line = False
                continue

            if self._at_stream_start:
                self._at_stream_start = False
                line = line.removeprefix(_BOM)

            result = self._process_line(line, line_size)
            if result is not None:
                results.append(result)

        del buffer[:pos]

        if not self._discarding and self._exceeds_limit(self._frame_bytes + len(buffer)):
            results.append(self._discard(len(buffer)))
        if self._discarding:
            # Skip the rest of an oversized frame, keeping a possible CR half
            keep = 1 if buffer.endswith(b"\r") else 0
            if len(buffer) > keep:
                self._skip_line = True
            del buffer[: len(buffer) - keep]

        return results

    def flush(self) -> int:
        """
        Signal end of stream and drop any incomplete frame.

        Returns:
            Number of bytes that were discarded.
        """
        discarded = self.pending_bytes if not self._discarding else 0
        self._buffer.clear()
        self._reset_frame()
        self._discarding = False
        self._skip_line = False
        return discarded

    def reset(self) -> None:
        """Clear all state so the scanner can be reused for a new stream."""
        self.flush()
        self._last_event_id = None
        self._at_stream_start = True

    def _process_line(
        self, line: str, line_size: int
    ) -> StreamFrame | DiscardedFrame | None:
        if not line:
            if self._discarding:
                self._discarding = False
                return None
            return self._dispatch()

        if self._discarding:
            return None

        self._frame_bytes += line_size
        if self._exceeds_limit(self._frame_bytes):
            return self._discard(0)

        if line.startswith(":"):
            return None

        name, separator, value = line.partition(":")
        if separator and value.startswith(" "):
            value = value[1:]

        if name == "data":
            self._data_lines.append(value)
        elif name == "event":
            self._event = value
        elif name == "id":
            if "\0" not in value:
                self._last_event_id = value
        elif name == "retry":
            if value.isascii() and value.isdigit():
                self._retry = int(value)
        else:
            logger.debug(f"Ignoring unknown SSE field: {name!r}")

        return None

    def _dispatch(self) -> StreamFrame | None:
        if not self._data_lines:
            self._reset_frame()
            return None
        frame = StreamFrame(
            data="\n".join(self._data_lines),
            event=self._event or None,
            id=self._last_event_id,
            retry=self._retry,
        )
        self._reset_frame()
        return frame

    def _discard(self, partial_bytes: int) -> DiscardedFrame:
        size = self._frame_bytes + partial_bytes
        logger.warning(
            f"Discarding SSE frame of at least {size} bytes "
            f"(limit: {self._max_frame_bytes})"
        )
        self._reset_frame()
        self._discarding = True
        return DiscardedFrame(size=size)

    def _exceeds_limit(self, size: int) -> bool:
        return self._max_frame_bytes is not None and size > self._max_frame_bytes

    def _reset_frame(self) -> None:
        self._data_lines = []
        self._event = None
        self._retry = None
        self._frame_bytes = 0


__all__ = ["DiscardedFrame", "SSEFrameScanner", "StreamFrame"]
