from __future__ import annotations

import pytest

from pagegraph.parsers.attributes import (
    DecodeFailed,
    KeyDeclaration,
    ScalarType,
    coerce,
    decode_value,
    scalar_type_for,
)


def test_graphml_attr_types_map_to_scalars() -> None:
    assert scalar_type_for("boolean", "is deleted") is ScalarType.BOOLEAN
    assert scalar_type_for("int", "node id") is ScalarType.INTEGER
    assert scalar_type_for("long", "request id") is ScalarType.INTEGER
    assert scalar_type_for("double", "weight") is ScalarType.FLOAT
    assert scalar_type_for("string", "tag name") is ScalarType.STRING
    # GraphML default attr.type is string
    assert scalar_type_for(None, "url") is ScalarType.STRING


def test_timestamp_key_overrides_declared_type() -> None:
    assert scalar_type_for("string", "timestamp") is ScalarType.TIMESTAMP
    assert scalar_type_for("int", "ts", timestamp_key="ts") is ScalarType.TIMESTAMP


def test_unknown_attr_type_raises_key_error() -> None:
    with pytest.raises(KeyError):
        scalar_type_for("complex", "x")


def test_boolean_vocabulary() -> None:
    assert decode_value("true", ScalarType.BOOLEAN) is True
    assert decode_value(" false ", ScalarType.BOOLEAN) is False
    assert decode_value("1", ScalarType.BOOLEAN) is True
    assert decode_value("0", ScalarType.BOOLEAN) is False
    failed = decode_value("yes", ScalarType.BOOLEAN)
    assert failed == DecodeFailed("yes", ScalarType.BOOLEAN)


def test_integer_and_float_decoding() -> None:
    assert decode_value("42", ScalarType.INTEGER) == 42
    assert decode_value("-7", ScalarType.INTEGER) == -7
    assert decode_value("1.5", ScalarType.FLOAT) == 1.5
    assert isinstance(decode_value("4x", ScalarType.INTEGER), DecodeFailed)
    assert isinstance(decode_value("", ScalarType.FLOAT), DecodeFailed)


def test_timestamp_decoding() -> None:
    assert decode_value("1700000000", ScalarType.TIMESTAMP) == 1700000000
    assert decode_value("12.0", ScalarType.TIMESTAMP) == 12
    assert isinstance(decode_value("12.0", ScalarType.TIMESTAMP), int)
    assert decode_value("12.25", ScalarType.TIMESTAMP) == 12.25
    assert isinstance(decode_value("nan", ScalarType.TIMESTAMP), DecodeFailed)
    assert isinstance(decode_value("soon", ScalarType.TIMESTAMP), DecodeFailed)


def test_strings_are_kept_verbatim() -> None:
    assert decode_value("  <div>  ", ScalarType.STRING) == "  <div>  "


def test_coerce_between_scalars() -> None:
    assert coerce("17", int) == 17
    assert coerce(17, str) == "17"
    assert coerce(True, str) == "true"
    assert coerce("true", bool) is True
    assert coerce(3.0, int) == 3
    assert coerce(2, float) == 2.0
    # bool never stands in for an integer
    assert isinstance(coerce(True, int), DecodeFailed)
    assert coerce(DecodeFailed("abc", ScalarType.INTEGER), str) == "abc"
    assert isinstance(coerce("abc", int), DecodeFailed)


def test_key_declaration_domain() -> None:
    node_key = KeyDeclaration("d0", "node type", "node", ScalarType.STRING)
    any_key = KeyDeclaration("d1", "timestamp", "all", ScalarType.TIMESTAMP)
    assert node_key.applies_to("node")
    assert not node_key.applies_to("edge")
    assert any_key.applies_to("edge")
