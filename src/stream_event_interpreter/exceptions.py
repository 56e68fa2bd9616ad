# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the stream event interpreter.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from StreamInterpreterError, making it easy to handle
every error delivered to an ``on_error`` callback with a single except clause
or isinstance check.

Frame-level errors (MalformedInputError, DecodeFailureError, ApplicationError,
UnrecognizedEventError) are never raised out of ``process_data``; they are
constructed by the interpreter and handed to the registered error callback.
ConfigurationError and CallbacksNotSetError signal API misuse and are raised
directly.
"""


class StreamInterpreterError(Exception):
    """Base exception for all stream interpreter errors.

    Example:
        def on_error(error: StreamInterpreterError) -> None:
            logger.error(f"Stream frame failed: {error}")
    """

    kind = "error"


class MalformedInputError(StreamInterpreterError):
    """Raised when a payload is not syntactically valid JSON.

    Attributes:
        payload: The raw payload text that failed to parse. May be None when
            the input was not available as text (e.g. invalid UTF-8).

    Example:
        try:
            value = decode(b"{not json")
        except MalformedInputError as e:
            logger.warning(f"Dropping frame: {e} ({e.payload!r})")
    """

    kind = "malformed_input"

    def __init__(self, message: str, payload: str | None = None):
        super().__init__(message)
        self.payload = payload


class DecodeFailureError(StreamInterpreterError):
    """Raised when valid JSON does not match the shape of its event variant.

    Attributes:
        event_type: The discriminant of the variant being decoded, when known.
        field: Dotted path of the first offending field, when known.
        payload: The raw payload text of the frame, when available.

    Example:
        def on_error(error: StreamInterpreterError) -> None:
            if isinstance(error, DecodeFailureError):
                logger.warning(
                    f"Bad {error.event_type} event, field {error.field}: {error}"
                )
    """

    kind = "decode_failure"

    def __init__(
        self,
        message: str,
        event_type: str | None = None,
        field: str | None = None,
        payload: str | None = None,
    ):
        super().__init__(message)
        self.event_type = event_type
        self.field = field
        self.payload = payload


class ApplicationError(StreamInterpreterError):
    """An error reported by the server inside an otherwise well-formed stream.

    The server-supplied values are carried verbatim so that they can be
    displayed or logged without further context.

    Attributes:
        message: Human readable message from the server.
        code: Machine readable error code, if supplied.
        error_type: Error category (the ``type`` member), if supplied.
        param: Name of the request parameter at fault, if supplied.
    """

    kind = "application_error"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        error_type: str | None = None,
        param: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.error_type = error_type
        self.param = param

    def __repr__(self) -> str:
        return (
            f"ApplicationError(message={self.message!r}, code={self.code!r}, "
            f"error_type={self.error_type!r}, param={self.param!r})"
        )


class UnrecognizedEventError(StreamInterpreterError):
    """Raised for a payload whose discriminant is unknown to this build.

    Only delivered when the interpreter runs with
    ``UnknownEventPolicy.ERROR``; the default policy ignores such frames.

    Attributes:
        event_type: The unrecognized discriminant, or None when absent.
    """

    kind = "unrecognized_event"

    def __init__(self, event_type: str | None, payload: str | None = None):
        if event_type is None:
            message = "Stream event has no type discriminant"
        else:
            message = f"Unrecognized stream event type: {event_type}"
        super().__init__(message)
        self.event_type = event_type
        self.payload = payload


class ConfigurationError(StreamInterpreterError):
    """Raised when the interpreter is configured or used incorrectly.

    Example:
        try:
            interpreter.set_callbacks(on_event, None)
        except ConfigurationError as e:
            logger.error(f"Invalid interpreter setup: {e}")
            raise SystemExit(1)
    """

    kind = "configuration"


class CallbacksNotSetError(ConfigurationError):
    """Raised when data is processed before callbacks are registered."""

    def __init__(self) -> None:
        super().__init__(
            "Callbacks must be registered with set_callbacks() before processing data"
        )
