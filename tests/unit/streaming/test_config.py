# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Unit tests for InterpreterConfig validation."""

import pytest

from stream_event_interpreter.streaming.config import (
    InterpreterConfig,
    UnknownEventPolicy,
)


class TestInterpreterConfig:
    def test_defaults(self):
        """Verify the defaults match the streaming Responses API."""
        config = InterpreterConfig()

        assert config.unknown_event_policy is UnknownEventPolicy.IGNORE
        assert config.done_sentinel == "[DONE]"
        assert config.use_sse_event_name is True
        assert config.max_buffer_bytes is None
        assert config.metrics_enabled is True

    def test_policy_must_be_enum(self):
        with pytest.raises(ValueError, match="unknown_event_policy"):
            InterpreterConfig(unknown_event_policy="error")  # type: ignore[arg-type]

    @pytest.mark.parametrize("sentinel", ["", "   "])
    def test_blank_sentinel_rejected(self, sentinel):
        with pytest.raises(ValueError, match="done_sentinel"):
            InterpreterConfig(done_sentinel=sentinel)

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_buffer_limit_rejected(self, limit):
        with pytest.raises(ValueError, match="max_buffer_bytes"):
            InterpreterConfig(max_buffer_bytes=limit)

    def test_valid_overrides(self):
        config = InterpreterConfig(
            unknown_event_policy=UnknownEventPolicy.ERROR,
            done_sentinel="END",
            max_buffer_bytes=1,
        )

        assert config.unknown_event_policy is UnknownEventPolicy.ERROR
        assert config.max_buffer_bytes == 1

    def test_policy_values(self):
        assert UnknownEventPolicy("ignore") is UnknownEventPolicy.IGNORE
        assert UnknownEventPolicy("error") is UnknownEventPolicy.ERROR
