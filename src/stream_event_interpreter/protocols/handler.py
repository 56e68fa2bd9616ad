# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for stream event consumers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..exceptions import StreamInterpreterError
    from ..types.events import StreamEventModel


@runtime_checkable
class StreamEventHandler(Protocol):
    """
    Protocol for objects that consume interpreter output.

    An implementation can be registered in one call with
    ``ResponseEventsStreamInterpreter.set_handler``. Both methods are called
    synchronously from within ``process_data``; implementations that need to
    do slow work should hand it off to another execution context.
    """

    def on_event(self, event: StreamEventModel) -> None:
        """Receive one successfully decoded event."""
        ...

    def on_error(self, error: StreamInterpreterError) -> None:
        """Receive the error for one frame that could not be turned into an event."""
        ...
