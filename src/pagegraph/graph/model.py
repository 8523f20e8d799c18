from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

import networkx as nx

from pagegraph.errors import NodeNotFoundError
from pagegraph.graph.types import EdgeType, NodeType

Timestamp = int | float


@dataclass(frozen=True)
class Node:
    """A side effect of the page load."""

    id: str
    node_type: NodeType
    timestamp: Timestamp | None = None


@dataclass(frozen=True)
class Edge:
    """An action taken during the page load, from source to target."""

    id: str
    source: str
    target: str
    edge_type: EdgeType
    timestamp: Timestamp | None = None


class Direction(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    BOTH = "both"


class Graph:
    """
    Read-only PageGraph. Built by GraphAssembler, which guarantees every edge
    endpoint is a node of this graph and that ids are unique. Iteration over
    nodes and edges follows document order.
    """

    def __init__(
        self,
        nodes: dict[str, Node],
        edges: dict[str, Edge],
        topology: nx.MultiDiGraph,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self._nodes = MappingProxyType(nodes)
        self._edges = MappingProxyType(edges)
        self._topology = topology
        self._metadata = MappingProxyType(dict(metadata or {}))

    @property
    def nodes(self) -> Mapping[str, Node]:
        return self._nodes

    @property
    def edges(self) -> Mapping[str, Edge]:
        return self._edges

    @property
    def metadata(self) -> Mapping[str, Any]:
        """Decoded graph-level <data> values."""
        return self._metadata

    @property
    def topology(self) -> nx.MultiDiGraph:
        """Frozen networkx view: node ids as nodes, edge ids as multi-edge keys."""
        return self._topology

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    def node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def filter_nodes(self, predicate: Callable[[NodeType], bool]) -> list[Node]:
        return [n for n in self._nodes.values() if predicate(n.node_type)]

    def filter_edges(self, predicate: Callable[[EdgeType], bool]) -> list[Edge]:
        return [e for e in self._edges.values() if predicate(e.edge_type)]

    def incident_edges(
        self, node_id: str, direction: Direction | str = Direction.BOTH
    ) -> list[Edge]:
        """Edges touching node_id in the given direction, in document order."""
        direction = Direction(direction)
        if node_id not in self._nodes:
            raise NodeNotFoundError(node_id)
        found: dict[str, int] = {}
        if direction in (Direction.OUTGOING, Direction.BOTH):
            for _, _, key, pos in self._topology.out_edges(node_id, keys=True, data="position"):
                found[key] = pos
        if direction in (Direction.INCOMING, Direction.BOTH):
            for _, _, key, pos in self._topology.in_edges(node_id, keys=True, data="position"):
                found[key] = pos
        return [self._edges[key] for key in sorted(found, key=found.__getitem__)]

    def neighbors(
        self, node_id: str, direction: Direction | str = Direction.BOTH
    ) -> list[Node]:
        """
        Nodes at the other end of node_id's incident edges, ordered by the
        first edge reaching them. A self-loop yields node_id itself.
        """
        seen: dict[str, None] = {}
        for edge in self.incident_edges(node_id, direction):
            other = edge.target if edge.source == node_id else edge.source
            seen.setdefault(other, None)
        return [self._nodes[other] for other in seen]
