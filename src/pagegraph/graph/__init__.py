"""Typed PageGraph model, query engine and provenance analyses."""

from . import types
from .analysis import (
    all_downstream_effects,
    direct_downstream_effects,
    html_element_modifications,
    nodes_of_html_tag_name,
    resources_from_script,
    root_url,
)
from .model import Direction, Edge, Graph, Node
from .types import (
    EDGE_KINDS,
    EDGE_VARIANTS,
    NODE_KINDS,
    NODE_VARIANTS,
    EdgeType,
    NodeType,
    kind_of,
)

__all__ = [
    "Graph",
    "Node",
    "Edge",
    "Direction",
    "NodeType",
    "EdgeType",
    "NODE_KINDS",
    "EDGE_KINDS",
    "NODE_VARIANTS",
    "EDGE_VARIANTS",
    "kind_of",
    "types",
    "nodes_of_html_tag_name",
    "html_element_modifications",
    "resources_from_script",
    "root_url",
    "direct_downstream_effects",
    "all_downstream_effects",
]
