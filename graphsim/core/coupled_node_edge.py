"""
Coupled Node-Edge Scoring
=========================

Node and edge similarity between two directed graphs, computed together
(Zager & Verghese, "Graph Similarity Scoring and Matching").

For graph G with n vertices and m edges:
    G_S  n x m source incidence,   G_S[i, e] = 1 if edge e leaves vertex i
    G_T  n x m terminal incidence, G_T[i, e] = 1 if edge e enters vertex i

Scores, starting from all-ones X_0 (n_A x n_B) and Y_0 (m_A x m_B):

    Y' = A_S^T X B_S + A_T^T X B_T      edges similar if endpoints similar
    X' = A_S Y B_S^T + A_T Y B_T^T      vertices similar if incident edges similar

Both updates read the previous sweep only. X' and Y' are then normalized
separately (Frobenius norm by default). Parallel edges count as distinct
edges. The paper's limit is taken over even iterates, so the iteration
budget should stay even.
"""

import logging
from typing import Any, Optional, Tuple

import numpy as np

from graphsim.core.base import BaseAlgorithm, DEFAULT_NUM_OF_ITERATION
from graphsim.core.matrix import SimilarityMatrix
from graphsim.core.normalization import NormMethod, max_abs_change, normalize
from graphsim.graph import GraphView, vertex_index


logger = logging.getLogger(__name__)


def incidence_matrices(graph: GraphView) -> Tuple[np.ndarray, np.ndarray]:
    """
    Source and terminal incidence matrices.

    Returns:
        (source, terminal), each n_vertices x n_edges, in vertices() / edges() order
    """
    vertices = graph.vertices()
    edges = graph.edges()
    index = vertex_index(vertices)

    source = np.zeros((len(vertices), len(edges)))
    terminal = np.zeros((len(vertices), len(edges)))
    for k, edge in enumerate(edges):
        source[index[edge.source], k] = 1.0
        terminal[index[edge.target], k] = 1.0
    return source, terminal


class CoupledNodeEdgeScoring(BaseAlgorithm):
    """Coupled node-edge similarity between graph A and graph B."""

    algorithm_name = 'CoupledNodeEdgeScoring'

    def __init__(
        self,
        graphs: Any,
        normalization: str = NormMethod.FROBENIUS.value,
        num_of_iteration: int = DEFAULT_NUM_OF_ITERATION,
        tolerance: Optional[float] = None,
    ):
        super().__init__(graphs, num_of_iteration, tolerance)
        self.normalization = NormMethod(normalization)
        self.edge_scores: Optional[np.ndarray] = None

    def set_normalization(self, method: str) -> None:
        self.normalization = NormMethod(method)

    def _initial_state(self) -> Tuple[np.ndarray, np.ndarray]:
        graph_a, graph_b = self.graphs
        self._vertices_a = graph_a.vertices()
        self._vertices_b = graph_b.vertices()
        self.edges_a = graph_a.edges()
        self.edges_b = graph_b.edges()

        self._a_source, self._a_terminal = incidence_matrices(graph_a)
        self._b_source, self._b_terminal = incidence_matrices(graph_b)

        logger.debug(
            "CoupledNodeEdgeScoring: %d x %d vertex pairs, %d x %d edge pairs",
            len(self._vertices_a), len(self._vertices_b),
            len(self.edges_a), len(self.edges_b),
        )

        nodes = np.ones((len(self._vertices_a), len(self._vertices_b)))
        edges = np.ones((len(self.edges_a), len(self.edges_b)))
        return nodes, edges

    def _sweep(self, state: Tuple[np.ndarray, np.ndarray]) -> Tuple[np.ndarray, np.ndarray]:
        nodes, edges = state
        A_S, A_T = self._a_source, self._a_terminal
        B_S, B_T = self._b_source, self._b_terminal

        new_edges = A_S.T @ nodes @ B_S + A_T.T @ nodes @ B_T
        new_nodes = A_S @ edges @ B_S.T + A_T @ edges @ B_T.T

        return (
            normalize(new_nodes, self.normalization),
            normalize(new_edges, self.normalization),
        )

    def _change(self, previous, current) -> float:
        return max(
            max_abs_change(previous[0], current[0]),
            max_abs_change(previous[1], current[1]),
        )

    def _to_matrix(self, state: Tuple[np.ndarray, np.ndarray]) -> SimilarityMatrix:
        nodes, edges = state
        self.edge_scores = edges
        return SimilarityMatrix.from_array(nodes, self._vertices_a, self._vertices_b)

    def get_edge_similarity(self, edge_a, edge_b) -> Optional[float]:
        """
        Score between an edge of A and an edge of B.

        Edges are matched against edges_a / edges_b by equality; the first
        match is used. None if not calculated or not found.
        """
        if self.edge_scores is None:
            return None
        try:
            i = self.edges_a.index(edge_a)
            j = self.edges_b.index(edge_b)
        except ValueError:
            return None
        return float(self.edge_scores[i, j])
