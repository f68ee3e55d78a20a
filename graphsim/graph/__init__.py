"""
Graph adapters.

Exports:
    - GraphView: protocol the algorithms consume
    - Edge: directed, optionally labelled edge record
    - NetworkXGraph: GraphView over a networkx graph
    - EdgeRecordGraph: GraphView over other graph objects, edge tuples accepted
    - as_graph_view: coerce networkx graphs / GraphView objects
"""

from .view import (
    Edge,
    EdgeRecordGraph,
    GraphView,
    NetworkXGraph,
    as_graph_view,
    as_edge,
    vertex_index,
)

__all__ = [
    'Edge',
    'EdgeRecordGraph',
    'GraphView',
    'NetworkXGraph',
    'as_graph_view',
    'as_edge',
    'vertex_index',
]
