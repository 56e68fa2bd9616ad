# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Unit tests for the exception hierarchy."""

import pytest

from stream_event_interpreter.exceptions import (
    ApplicationError,
    CallbacksNotSetError,
    ConfigurationError,
    DecodeFailureError,
    MalformedInputError,
    StreamInterpreterError,
    UnrecognizedEventError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [
            MalformedInputError,
            DecodeFailureError,
            ApplicationError,
            UnrecognizedEventError,
            ConfigurationError,
            CallbacksNotSetError,
        ],
    )
    def test_all_derive_from_base(self, exc_class):
        assert issubclass(exc_class, StreamInterpreterError)

    def test_kinds_are_distinct(self):
        kinds = {
            MalformedInputError.kind,
            DecodeFailureError.kind,
            ApplicationError.kind,
            UnrecognizedEventError.kind,
            ConfigurationError.kind,
        }
        assert len(kinds) == 5


class TestExceptionAttributes:
    def test_malformed_input(self):
        error = MalformedInputError("bad json", payload="{")
        assert str(error) == "bad json"
        assert error.payload == "{"
        assert error.kind == "malformed_input"

    def test_decode_failure(self):
        error = DecodeFailureError(
            "bad shape", event_type="response.incomplete", field="type", payload="{}"
        )
        assert error.event_type == "response.incomplete"
        assert error.field == "type"
        assert error.payload == "{}"

    def test_decode_failure_defaults(self):
        error = DecodeFailureError("bad shape")
        assert error.event_type is None
        assert error.field is None

    def test_application_error_keeps_server_values(self):
        error = ApplicationError(
            "Rate limit reached", code="rate_limit", error_type="requests", param="model"
        )
        assert str(error) == "Rate limit reached"
        assert error.message == "Rate limit reached"
        assert error.code == "rate_limit"
        assert error.error_type == "requests"
        assert error.param == "model"
        assert "rate_limit" in repr(error)

    def test_unrecognized_event_message(self):
        error = UnrecognizedEventError("response.audio.delta")
        assert "response.audio.delta" in str(error)
        assert error.event_type == "response.audio.delta"

    def test_unrecognized_event_without_type(self):
        error = UnrecognizedEventError(None)
        assert str(error) == "Stream event has no type discriminant"

    def test_callbacks_not_set_message(self):
        error = CallbacksNotSetError()
        assert "set_callbacks()" in str(error)
        assert error.kind == "configuration"
