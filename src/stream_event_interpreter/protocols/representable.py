# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for objects that convert themselves into a JSONValue."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..types.json_value import JSONValue


@runtime_checkable
class JSONRepresentable(Protocol):
    """
    Protocol for types that know how to render themselves as JSON.

    Anything implementing this protocol can be passed wherever a JSONValue
    literal is accepted (``to_json_value``, pydantic fields typed as
    ``JSONValue``, nested inside lists and mappings).

    Example:
        >>> class Tone(Enum):
        ...     FORMAL = "formal"
        ...
        ...     @property
        ...     def json_value(self) -> JSONValue:
        ...         return JSONString(self.value.upper())
    """

    @property
    def json_value(self) -> JSONValue:
        """Return the JSONValue rendering of this object."""
        ...
