"""Decode PageGraph provenance graphs into a typed, queryable model."""

from .config import DecodeOptions
from .errors import (
    AnalysisError,
    DanglingEdgeReferenceError,
    DecodeError,
    DuplicateIdentifierError,
    MalformedDocumentError,
    MissingRequiredFieldError,
    NodeNotFoundError,
    UnclassifiableElementError,
)
from .graph import Direction, Edge, EdgeType, Graph, Node, NodeType
from .parsers import PageGraphParser, decode, decode_file

__version__ = "0.1.0"

__all__ = [
    "decode",
    "decode_file",
    "PageGraphParser",
    "DecodeOptions",
    "Graph",
    "Node",
    "Edge",
    "NodeType",
    "EdgeType",
    "Direction",
    "DecodeError",
    "MalformedDocumentError",
    "UnclassifiableElementError",
    "MissingRequiredFieldError",
    "DuplicateIdentifierError",
    "DanglingEdgeReferenceError",
    "NodeNotFoundError",
    "AnalysisError",
]
