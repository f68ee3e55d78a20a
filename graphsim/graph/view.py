"""
Graph View
==========

Read-only adjacency interface consumed by the similarity algorithms.

Any object exposing vertices(), edges(), predecessors(v), successors(v),
is_directed() and is_multiedged() satisfies GraphView. networkx graphs are
wrapped by NetworkXGraph. Other graph objects may return edges as Edge
records or as (source, target[, label]) tuples; EdgeRecordGraph converts
them. as_graph_view() does the coercion.

Edge labels:
    Multi-edged graphs identify parallel edges by label. For a networkx
    multigraph the label is the 'label' edge attribute when present,
    otherwise the edge key (the id given to add_edge(u, v, key=...)).
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Protocol, runtime_checkable

import networkx as nx


@dataclass(frozen=True)
class Edge:
    """Directed edge with an optional label."""
    source: Hashable
    target: Hashable
    label: Optional[Hashable] = None


@runtime_checkable
class GraphView(Protocol):
    """Capability set the algorithms rely on."""

    def vertices(self) -> List[Hashable]: ...

    def edges(self) -> List[Edge]: ...

    def predecessors(self, v: Hashable) -> List[Hashable]: ...

    def successors(self, v: Hashable) -> List[Hashable]: ...

    def is_directed(self) -> bool: ...

    def is_multiedged(self) -> bool: ...


class NetworkXGraph:
    """
    GraphView over a networkx graph.

    The wrapped graph is not copied; adjacency queries read it directly.
    """

    def __init__(self, graph: nx.Graph, label_attr: str = 'label'):
        self.graph = graph
        self.label_attr = label_attr

    def vertices(self) -> List[Hashable]:
        return list(self.graph.nodes)

    def edges(self) -> List[Edge]:
        if self.graph.is_multigraph():
            return [
                Edge(u, v, data.get(self.label_attr, key))
                for u, v, key, data in self.graph.edges(keys=True, data=True)
            ]
        return [
            Edge(u, v, data.get(self.label_attr))
            for u, v, data in self.graph.edges(data=True)
        ]

    def edges_by_label(self, label: Hashable) -> List[Edge]:
        return [e for e in self.edges() if e.label == label]

    def predecessors(self, v: Hashable) -> List[Hashable]:
        if self.graph.is_directed():
            return list(self.graph.predecessors(v))
        return list(self.graph.neighbors(v))

    def successors(self, v: Hashable) -> List[Hashable]:
        if self.graph.is_directed():
            return list(self.graph.successors(v))
        return list(self.graph.neighbors(v))

    def is_directed(self) -> bool:
        return self.graph.is_directed()

    def is_multiedged(self) -> bool:
        return self.graph.is_multigraph()

    def __repr__(self) -> str:
        return (
            f"NetworkXGraph({type(self.graph).__name__}, "
            f"{self.graph.number_of_nodes()} vertices, "
            f"{self.graph.number_of_edges()} edges)"
        )


def as_edge(record: Any) -> Edge:
    """
    Edge from an Edge, a (source, target) pair or a (source, target, label)
    triple.

    Raises:
        TypeError: For any other shape.
    """
    if isinstance(record, Edge):
        return record
    if isinstance(record, tuple) and len(record) in (2, 3):
        return Edge(*record)
    raise TypeError(
        f"edge {record!r} is not an Edge, (source, target) or "
        f"(source, target, label)"
    )


class EdgeRecordGraph:
    """
    GraphView over a user graph object whose edges() may yield plain tuples.

    Adjacency queries are forwarded; edges() converts each record to Edge.
    """

    def __init__(self, graph: Any):
        self.graph = graph

    def vertices(self) -> List[Hashable]:
        return list(self.graph.vertices())

    def edges(self) -> List[Edge]:
        return [as_edge(record) for record in self.graph.edges()]

    def predecessors(self, v: Hashable) -> List[Hashable]:
        return list(self.graph.predecessors(v))

    def successors(self, v: Hashable) -> List[Hashable]:
        return list(self.graph.successors(v))

    def is_directed(self) -> bool:
        return bool(self.graph.is_directed())

    def is_multiedged(self) -> bool:
        return bool(self.graph.is_multiedged())

    def __repr__(self) -> str:
        return f"EdgeRecordGraph({type(self.graph).__name__})"


def as_graph_view(graph: Any) -> GraphView:
    """
    Coerce a graph object to a GraphView.

    networkx graphs are wrapped in NetworkXGraph and NetworkXGraph views are
    returned unchanged. Other objects satisfying the protocol are wrapped in
    EdgeRecordGraph; their edge records are checked here.

    Raises:
        TypeError: If the object lacks the interface or an edge record has
            an unsupported shape.
    """
    if isinstance(graph, nx.Graph):
        return NetworkXGraph(graph)
    if isinstance(graph, (NetworkXGraph, EdgeRecordGraph)):
        return graph
    if isinstance(graph, GraphView):
        view = EdgeRecordGraph(graph)
        view.edges()
        return view
    raise TypeError(
        f"{type(graph).__name__} does not provide the graph interface "
        f"(vertices, edges, predecessors, successors, is_directed, is_multiedged)"
    )


def vertex_index(vertices: List[Hashable]) -> Dict[Hashable, int]:
    """Map each vertex to its row/column position."""
    return {v: i for i, v in enumerate(vertices)}
