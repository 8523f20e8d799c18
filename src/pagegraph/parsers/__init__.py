"""GraphML decoding: attribute decoder, schema classifier and graph assembler."""

from .assemble import GraphAssembler
from .attributes import (
    AttributeValue,
    DecodeFailed,
    KeyDeclaration,
    ScalarType,
    coerce,
    decode_value,
)
from .classify import RawElement, classify_edge, classify_node, element_timestamp
from .graphml import PageGraphParser, decode, decode_file

__all__ = [
    "PageGraphParser",
    "decode",
    "decode_file",
    "GraphAssembler",
    "RawElement",
    "classify_node",
    "classify_edge",
    "element_timestamp",
    "ScalarType",
    "KeyDeclaration",
    "DecodeFailed",
    "AttributeValue",
    "decode_value",
    "coerce",
]
