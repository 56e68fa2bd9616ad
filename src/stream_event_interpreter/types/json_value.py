# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Dynamic JSON value type.

This module provides JSONValue, a recursive sum type able to represent any
JSON document, together with lossless decode/encode functions and the
``to_json_value`` construction helper.

Variants:
    JSONString, JSONInteger, JSONNumber, JSONBool, JSONArray, JSONObject,
    JSONNull

Decode precedence:
    A numeric literal is tried as a signed 64-bit integer first and as a
    double second. A literal without fraction or exponent therefore always
    decodes to JSONInteger (``42`` -> ``JSONInteger(42)``), while ``42.5``,
    ``42.0`` and ``1e3`` decode to JSONNumber. Integer literals outside the
    64-bit range fall through to JSONNumber. Literals that fit neither are
    rejected as malformed input.

Usage:
    >>> value = decode(b'{"tokens": 42, "ratio": 0.5}')
    >>> value["tokens"]
    JSONInteger(value=42)
    >>> encode(to_json_value({"ok": True, "items": [1, "two", None]}))
    b'{"ok":true,"items":[1,"two",null]}'

JSONValue can also be used as a pydantic field annotation for "any JSON"
fields; inputs are converted with ``to_json_value`` and serialized back with
``to_python``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..exceptions import MalformedInputError
from ..protocols.representable import JSONRepresentable

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class JSONValue:
    """Base class of every JSON variant."""

    __slots__ = ()

    kind: ClassVar[str] = "value"

    @property
    def is_null(self) -> bool:
        return False

    @property
    def json_value(self) -> JSONValue:
        return self

    def to_python(self) -> Any:
        """Convert to plain Python (str, int, float, bool, list, dict, None)."""
        raise NotImplementedError

    @classmethod
    def from_python(cls, value: Any) -> JSONValue:
        """Build a JSONValue from a native Python value. See ``to_json_value``."""
        return to_json_value(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def validate(value: Any) -> JSONValue:
            try:
                converted = to_json_value(value)
            except TypeError as e:
                # pydantic only reports ValueError/AssertionError as validation errors
                raise ValueError(str(e)) from e
            if not isinstance(converted, cls):
                raise ValueError(f"expected JSON {cls.kind}, got {converted.kind}")
            return converted

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_python()
            ),
        )


@dataclass(frozen=True, slots=True)
class JSONString(JSONValue):
    value: str

    kind: ClassVar[str] = "string"

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class JSONInteger(JSONValue):
    value: int

    kind: ClassVar[str] = "integer"

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class JSONNumber(JSONValue):
    value: float

    kind: ClassVar[str] = "number"

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class JSONBool(JSONValue):
    value: bool

    kind: ClassVar[str] = "bool"

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class JSONArray(JSONValue):
    """Ordered sequence of values. Equality is order-sensitive."""

    items: tuple[JSONValue, ...] = ()

    kind: ClassVar[str] = "array"

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __getitem__(self, index: int) -> JSONValue:
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[JSONValue]:
        return iter(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class JSONObject(JSONValue):
    """String-keyed mapping of values. Equality and hashing ignore key order."""

    members: dict[str, JSONValue] = field(default_factory=dict)

    kind: ClassVar[str] = "object"

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", dict(self.members))

    def __hash__(self) -> int:
        return hash(frozenset(self.members.items()))

    def get(self, key: str, default: JSONValue | None = None) -> JSONValue | None:
        return self.members.get(key, default)

    def __getitem__(self, key: str) -> JSONValue:
        return self.members[key]

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def keys(self) -> Iterable[str]:
        return self.members.keys()

    def items(self) -> Iterable[tuple[str, JSONValue]]:
        return self.members.items()

    def to_python(self) -> dict[str, Any]:
        return {key: member.to_python() for key, member in self.members.items()}


@dataclass(frozen=True, slots=True)
class JSONNull(JSONValue):
    kind: ClassVar[str] = "null"

    @property
    def is_null(self) -> bool:
        return True

    def to_python(self) -> None:
        return None


NULL = JSONNull()


def to_json_value(value: Any) -> JSONValue:
    """
    Build a JSONValue from a native Python value.

    Accepts existing JSONValues, None, objects implementing
    JSONRepresentable, Enum members (converted through their ``value``),
    bool, int, float, str, string-keyed mappings, lists and tuples. ``bool`` is
    checked before ``int`` so ``True`` never becomes ``JSONInteger(1)``.

    Raises:
        TypeError: For unsupported objects or non-string mapping keys.
        ValueError: For integers too large to represent even as a double.
    """
    if isinstance(value, JSONValue):
        return value
    if value is None:
        return NULL
    if isinstance(value, JSONRepresentable):
        return to_json_value(value.json_value)
    if isinstance(value, Enum):
        return to_json_value(value.value)
    if isinstance(value, bool):
        return JSONBool(value)
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return JSONInteger(value)
        try:
            return JSONNumber(float(value))
        except OverflowError as e:
            raise ValueError(f"Integer {value} is out of range for JSON") from e
    if isinstance(value, float):
        return JSONNumber(value)
    if isinstance(value, str):
        return JSONString(value)
    if isinstance(value, Mapping):
        members: dict[str, JSONValue] = {}
        for key, member in value.items():
            if not isinstance(key, str):
                raise TypeError(
                    f"JSON object keys must be strings, got {type(key).__name__}"
                )
            members[key] = to_json_value(member)
        return JSONObject(members)
    if isinstance(value, (list, tuple)):
        return JSONArray(tuple(to_json_value(item) for item in value))
    raise TypeError(f"Cannot convert {type(value).__name__} to a JSON value")


def _parse_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number {literal} does not fit in a double")
    return value


def _parse_int(literal: str) -> int | float:
    value = int(literal)
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return _parse_float(literal)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode(data: bytes | bytearray | str) -> JSONValue:
    """
    Decode JSON text into a JSONValue.

    Args:
        data: UTF-8 encoded bytes or an already decoded string.

    Returns:
        The decoded value, mirroring the structure of the input.

    Raises:
        MalformedInputError: If the input is not valid UTF-8 or not
            syntactically valid JSON, or holds a number that fits neither
            a 64-bit integer nor a double.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"Payload is not valid UTF-8: {e}") from e
    else:
        text = data

    try:
        parsed = json.loads(
            text,
            parse_int=_parse_int,
            parse_float=_parse_float,
            parse_constant=_reject_constant,
        )
        return to_json_value(parsed)
    except (ValueError, RecursionError) as e:
        raise MalformedInputError(f"Payload is not valid JSON: {e}", payload=text) from e


def _encodable(value: JSONValue) -> Any:
    if isinstance(value, JSONNumber) and not math.isfinite(value.value):
        return None
    if isinstance(value, JSONArray):
        return [_encodable(item) for item in value.items]
    if isinstance(value, JSONObject):
        return {key: _encodable(member) for key, member in value.members.items()}
    return value.to_python()


def encode(value: JSONValue) -> bytes:
    """
    Encode a JSONValue as compact UTF-8 JSON.

    Never fails: non-finite numbers (only constructible programmatically)
    are rendered as ``null``, and strings holding lone surrogates are
    written with ASCII escapes.
    """
    encodable = _encodable(value)
    try:
        return json.dumps(
            encodable, ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(encodable, separators=(",", ":")).encode("ascii")


__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "NULL",
    "JSONArray",
    "JSONBool",
    "JSONInteger",
    "JSONNull",
    "JSONNumber",
    "JSONObject",
    "JSONString",
    "JSONValue",
    "decode",
    "encode",
    "to_json_value",
]
