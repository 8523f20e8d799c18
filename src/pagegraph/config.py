from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodeOptions:
    """
    Decode policy.
    strict: unknown kinds and missing required fields abort the decode;
        when False they degrade to UnknownNode / UnknownEdge.
    The *_key fields name the GraphML attributes PageGraph uses for the kind
    discriminants and for timestamps.
    """

    strict: bool = True
    node_kind_key: str = "node type"
    edge_kind_key: str = "edge type"
    timestamp_key: str = "timestamp"


DEFAULT_OPTIONS = DecodeOptions()
