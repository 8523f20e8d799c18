from __future__ import annotations

from typing import Any

import networkx as nx

from pagegraph.errors import DanglingEdgeReferenceError, DuplicateIdentifierError
from pagegraph.graph.model import Edge, Graph, Node, Timestamp
from pagegraph.graph.types import EdgeType, NodeType


class GraphAssembler:
    """
    Collects classified nodes and edges in document order and links them into
    a Graph. Duplicate ids fail on registration; edge endpoints are resolved
    in build(), so edges may precede the nodes they reference.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}

    def add_node(
        self, node_id: str, node_type: NodeType, timestamp: Timestamp | None = None
    ) -> Node:
        if node_id in self._nodes:
            raise DuplicateIdentifierError(node_id, element="node")
        node = Node(id=node_id, node_type=node_type, timestamp=timestamp)
        self._nodes[node_id] = node
        return node

    def add_edge(
        self,
        edge_id: str,
        source: str,
        target: str,
        edge_type: EdgeType,
        timestamp: Timestamp | None = None,
    ) -> Edge:
        if edge_id in self._edges:
            raise DuplicateIdentifierError(edge_id, element="edge")
        edge = Edge(
            id=edge_id,
            source=source,
            target=target,
            edge_type=edge_type,
            timestamp=timestamp,
        )
        self._edges[edge_id] = edge
        return edge

    def _validate_endpoints(self) -> None:
        for edge in self._edges.values():
            for endpoint in (edge.source, edge.target):
                if endpoint not in self._nodes:
                    raise DanglingEdgeReferenceError(edge.id, endpoint)

    def _build_topology(self) -> nx.MultiDiGraph:
        topology = nx.MultiDiGraph()
        topology.add_nodes_from(self._nodes)
        for position, edge in enumerate(self._edges.values()):
            topology.add_edge(edge.source, edge.target, key=edge.id, position=position)
        return nx.freeze(topology)

    def build(self, metadata: dict[str, Any] | None = None) -> Graph:
        self._validate_endpoints()
        return Graph(
            dict(self._nodes),
            dict(self._edges),
            self._build_topology(),
            metadata=metadata,
        )
