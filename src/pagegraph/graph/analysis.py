from __future__ import annotations

from pagegraph.errors import AnalysisError, NodeNotFoundError
from pagegraph.graph.model import Direction, Edge, Graph, Node
from pagegraph.graph.types import (
    DomRoot,
    HtmlElement,
    RequestComplete,
    Resource,
    Script,
    Structure,
)


def _require_node(graph: Graph, node_id: str) -> Node:
    node = graph.node(node_id)
    if node is None:
        raise NodeNotFoundError(node_id)
    return node


def _is_script_element(node: Node) -> bool:
    return isinstance(node.node_type, HtmlElement) and node.node_type.tag_name.lower() == "script"


def _out_neighbors_of_type(graph: Graph, node_id: str, variant: type) -> list[Node]:
    return [
        n
        for n in graph.neighbors(node_id, Direction.OUTGOING)
        if isinstance(n.node_type, variant)
    ]


def _unique(nodes: list[Node]) -> list[Node]:
    return list({n.id: n for n in nodes}.values())


def nodes_of_html_tag_name(graph: Graph, tag_name: str) -> list[Node]:
    """HtmlElement nodes with the given tag name, compared case-insensitively."""
    wanted = tag_name.lower()
    return graph.filter_nodes(
        lambda t: isinstance(t, HtmlElement) and t.tag_name.lower() == wanted
    )


def html_element_modifications(graph: Graph, node_id: str) -> list[Edge]:
    """
    Every non-structure edge into an HtmlElement, i.e. each time it was
    created, inserted, removed, deleted or had an attribute changed.
    Sorted by timestamp; edges without one go last, in document order.
    """
    node = _require_node(graph, node_id)
    if not isinstance(node.node_type, HtmlElement):
        raise AnalysisError(f"Node '{node_id}' is not an HTML element", node_id=node_id)
    modifications = [
        e
        for e in graph.incident_edges(node_id, Direction.INCOMING)
        if not isinstance(e.edge_type, Structure)
    ]
    # sorted() is stable, so document order breaks ties
    return sorted(
        modifications,
        key=lambda e: (e.timestamp is None, e.timestamp if e.timestamp is not None else 0),
    )


def resources_from_script(graph: Graph, node_id: str) -> list[Node]:
    """
    Resource nodes whose requests were started by a Script node or a <script>
    HtmlElement. For the element, resources requested by the scripts it
    executes are included after its own (src="...") requests.
    """
    node = _require_node(graph, node_id)
    resources = _out_neighbors_of_type(graph, node_id, Resource)
    if isinstance(node.node_type, Script):
        return resources
    if not _is_script_element(node):
        raise AnalysisError(
            f"Node '{node_id}' is neither a script nor a <script> element", node_id=node_id
        )
    for script in _out_neighbors_of_type(graph, node_id, Script):
        resources.extend(_out_neighbors_of_type(graph, script.id, Resource))
    return _unique(resources)


def root_url(graph: Graph) -> str:
    """URL of the page the graph was recorded from: the DOM root with no incoming edges."""
    roots = [
        n
        for n in graph.filter_nodes(lambda t: isinstance(t, DomRoot))
        if not graph.incident_edges(n.id, Direction.INCOMING)
    ]
    if len(roots) != 1:
        raise AnalysisError(f"Expected one top-level DOM root, found {len(roots)}")
    url = roots[0].node_type.url
    if not url:
        raise AnalysisError("Top-level DOM root has no URL", node_id=roots[0].id)
    return url


def direct_downstream_effects(graph: Graph, node_id: str) -> list[Node]:
    """
    Nodes directly caused by node_id.
    - Resource: scripts run by the <script> elements the resource completed into.
    - <script> element: the resources it requested, or, for an inline script,
      the scripts it executed.
    - Script: resources whose requests completed to it, then scripts it executed.
    Other kinds have no modelled effects and yield an empty list.
    """
    node = _require_node(graph, node_id)
    node_type = node.node_type

    if isinstance(node_type, Resource):
        effects: list[Node] = []
        for edge in graph.incident_edges(node_id, Direction.OUTGOING):
            if not isinstance(edge.edge_type, RequestComplete):
                continue
            element = graph.nodes[edge.target]
            if _is_script_element(element):
                effects.extend(_out_neighbors_of_type(graph, element.id, Script))
        return _unique(effects)

    if _is_script_element(node):
        requested = _out_neighbors_of_type(graph, node_id, Resource)
        return requested or _out_neighbors_of_type(graph, node_id, Script)

    if isinstance(node_type, Script):
        fetched = [
            graph.nodes[edge.source]
            for edge in graph.incident_edges(node_id, Direction.INCOMING)
            if isinstance(edge.edge_type, RequestComplete)
        ]
        return _unique(fetched + _out_neighbors_of_type(graph, node_id, Script))

    return []


def all_downstream_effects(graph: Graph, node_id: str) -> list[Node]:
    """
    Transitive closure of direct_downstream_effects, starting with node_id
    itself. Each node appears once, in the order it was reached.
    """
    _require_node(graph, node_id)
    visited: dict[str, None] = {}
    pending = [node_id]
    while pending:
        current = pending.pop()
        if current in visited:
            continue
        visited[current] = None
        for effect in reversed(direct_downstream_effects(graph, current)):
            if effect.id not in visited:
                pending.append(effect.id)
    return [graph.nodes[n] for n in visited]
