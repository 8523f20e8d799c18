from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ScalarType(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TIMESTAMP = "timestamp"


# GraphML attr.type -> scalar type. A key without attr.type is a string.
_GRAPHML_TYPES = {
    "string": ScalarType.STRING,
    "boolean": ScalarType.BOOLEAN,
    "int": ScalarType.INTEGER,
    "long": ScalarType.INTEGER,
    "float": ScalarType.FLOAT,
    "double": ScalarType.FLOAT,
}

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


@dataclass(frozen=True)
class DecodeFailed:
    """A raw value that could not be read as the scalar its key declares."""

    raw: str
    expected: ScalarType


AttributeValue = Union[str, bool, int, float, DecodeFailed]


@dataclass(frozen=True)
class KeyDeclaration:
    """One GraphML <key>: maps a data key id to an attribute name and type."""

    id: str
    name: str
    domain: str
    scalar_type: ScalarType
    default: str | None = None

    def applies_to(self, element: str) -> bool:
        return self.domain in (element, "all")


def scalar_type_for(
    attr_type: str | None, name: str, timestamp_key: str = "timestamp"
) -> ScalarType:
    """
    Resolve the scalar type of a key from its GraphML attr.type.
    The timestamp key is always read as a timestamp. Raises KeyError on an
    attr.type outside the GraphML vocabulary.
    """
    if name == timestamp_key:
        return ScalarType.TIMESTAMP
    if attr_type is None:
        return ScalarType.STRING
    return _GRAPHML_TYPES[attr_type]


def _decode_bool(raw: str) -> bool | DecodeFailed:
    text = raw.strip()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return DecodeFailed(raw, ScalarType.BOOLEAN)


def _decode_int(raw: str) -> int | DecodeFailed:
    try:
        return int(raw.strip(), 10)
    except ValueError:
        return DecodeFailed(raw, ScalarType.INTEGER)


def _decode_float(raw: str) -> float | DecodeFailed:
    try:
        return float(raw.strip())
    except ValueError:
        return DecodeFailed(raw, ScalarType.FLOAT)


def _decode_timestamp(raw: str) -> int | float | DecodeFailed:
    value = _decode_int(raw)
    if not isinstance(value, DecodeFailed):
        return value
    number = _decode_float(raw)
    if isinstance(number, DecodeFailed) or not math.isfinite(number):
        return DecodeFailed(raw, ScalarType.TIMESTAMP)
    return int(number) if number.is_integer() else number


_DECODERS = {
    ScalarType.STRING: lambda raw: raw,
    ScalarType.BOOLEAN: _decode_bool,
    ScalarType.INTEGER: _decode_int,
    ScalarType.FLOAT: _decode_float,
    ScalarType.TIMESTAMP: _decode_timestamp,
}


def decode_value(raw: str, scalar_type: ScalarType) -> AttributeValue:
    """Decode one raw attribute string. Never raises; failures become DecodeFailed."""
    return _DECODERS[scalar_type](raw)


def _to_raw(value: AttributeValue) -> str:
    if isinstance(value, DecodeFailed):
        return value.raw
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce(value: AttributeValue, target: type) -> AttributeValue:
    """
    Convert a decoded scalar to the Python type a variant field expects.
    Values already of that type pass through; others are re-decoded from
    their string form. bool is never accepted where int is expected.
    """
    if target is str:
        return _to_raw(value)
    if target is bool:
        if isinstance(value, bool):
            return value
        return _decode_bool(_to_raw(value))
    if target is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return _decode_int(_to_raw(value))
    if target is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return _decode_float(_to_raw(value))
    raise TypeError(f"Unsupported attribute field type {target!r}")
