"""
Similarity Flooding
===================

Label-driven similarity propagation between two multi-edged directed graphs
(Melnik, Garcia-Molina & Rahm, "Similarity Flooding: A Versatile Graph
Matching Algorithm and its Application to Schema Matching").

Pairwise connectivity graph (PCG):
    (a, b) -l-> (a', b')  whenever  a -l-> a' in A  and  b -l-> b' in B

Induced propagation graph: every PCG edge propagates both ways.
    forward  (a, b) -> (a', b'):  1 / #(l-labelled PCG out-edges of (a, b))
    backward (a', b') -> (a, b):  1 / #(l-labelled PCG in-edges of (a', b'))

phi(s) sums the weighted scores flowing into each pair. Fixpoint formulas:

    basic   s' = norm(s + phi(s))
    A       s' = norm(s0 + phi(s))
    B       s' = norm(phi(s0 + s))
    C       s' = norm(s0 + s + phi(s0 + s))

norm divides by the maximum score. s0 is 1.0 for every PCG pair unless an
initial mapping is supplied. Pairs outside the PCG score 0.
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional, Tuple

import numpy as np
from scipy import sparse

from graphsim.core.base import BaseAlgorithm, DEFAULT_NUM_OF_ITERATION
from graphsim.core.matrix import SimilarityMatrix
from graphsim.core.normalization import NormMethod, normalize, residual_norm
from graphsim.graph import Edge, GraphView, vertex_index


logger = logging.getLogger(__name__)

Pair = Tuple[Hashable, Hashable]


class FixpointFormula(str, Enum):
    """Fixpoint formulas from the flooding paper."""
    BASIC = "basic"
    A = "A"
    B = "B"
    C = "C"


def _edges_by_label(graph: GraphView) -> Dict[Hashable, List[Edge]]:
    groups = defaultdict(list)
    for edge in graph.edges():
        groups[edge.label].append(edge)
    return groups


def connectivity_graph(
    graph_a: GraphView,
    graph_b: GraphView,
) -> Tuple[List[Pair], List[Tuple[int, int, Hashable]]]:
    """
    Pairwise connectivity graph of A and B.

    Returns:
        pairs: PCG nodes (vertex of A, vertex of B), in first-seen order
        edges: (source index, target index, label) into pairs
    """
    groups_b = _edges_by_label(graph_b)

    pair_index: Dict[Pair, int] = {}
    pcg_edges = []

    def index_of(pair: Pair) -> int:
        if pair not in pair_index:
            pair_index[pair] = len(pair_index)
        return pair_index[pair]

    for label, edges_a in _edges_by_label(graph_a).items():
        for ea in edges_a:
            for eb in groups_b.get(label, ()):
                src = index_of((ea.source, eb.source))
                dst = index_of((ea.target, eb.target))
                pcg_edges.append((src, dst, label))

    return list(pair_index), pcg_edges


def propagation_matrix(
    n_pairs: int,
    pcg_edges: List[Tuple[int, int, Hashable]],
) -> sparse.csr_matrix:
    """
    Propagation coefficients as a sparse matrix P with phi(s) = P @ s.

    P[j, i] is the total weight flowing from pair i into pair j.
    """
    out_count = defaultdict(int)
    in_count = defaultdict(int)
    for src, dst, label in pcg_edges:
        out_count[(src, label)] += 1
        in_count[(dst, label)] += 1

    rows, cols, weights = [], [], []
    for src, dst, label in pcg_edges:
        # forward
        rows.append(dst)
        cols.append(src)
        weights.append(1.0 / out_count[(src, label)])
        # backward
        rows.append(src)
        cols.append(dst)
        weights.append(1.0 / in_count[(dst, label)])

    # duplicate (row, col) entries are summed
    return sparse.coo_matrix(
        (np.asarray(weights, dtype=np.float64),
         (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
        shape=(n_pairs, n_pairs),
    ).tocsr()


class SimilarityFlooding(BaseAlgorithm):
    """Similarity flooding between graph A and graph B."""

    algorithm_name = 'SimilarityFlooding'

    def __init__(
        self,
        graphs: Any,
        formula: str = FixpointFormula.C.value,
        normalization: str = NormMethod.MAX.value,
        initial: Optional[Dict[Pair, float]] = None,
        num_of_iteration: int = DEFAULT_NUM_OF_ITERATION,
        tolerance: Optional[float] = None,
    ):
        super().__init__(graphs, num_of_iteration, tolerance)
        self.formula = FixpointFormula(formula)
        self.normalization = NormMethod(normalization)
        self.initial = dict(initial or {})

    def set_formula(self, formula: str) -> None:
        """One of 'basic', 'A', 'B', 'C'."""
        self.formula = FixpointFormula(formula)

    def set_initial_similarity(self, initial: Dict[Pair, float]) -> None:
        """
        Initial scores s0 keyed by (vertex of A, vertex of B).

        PCG pairs missing from the mapping start at 1.0; entries for pairs
        outside the PCG are ignored.
        """
        self.initial = dict(initial)

    def _initial_state(self) -> np.ndarray:
        graph_a, graph_b = self.graphs
        self._vertices_a = graph_a.vertices()
        self._vertices_b = graph_b.vertices()

        self.pairs, pcg_edges = connectivity_graph(graph_a, graph_b)
        self._propagation = propagation_matrix(len(self.pairs), pcg_edges)
        self._sigma0 = np.array(
            [float(self.initial.get(pair, 1.0)) for pair in self.pairs]
        )

        logger.debug(
            "SimilarityFlooding: %d PCG pairs, %d PCG edges, formula %s",
            len(self.pairs), len(pcg_edges), self.formula.value,
        )

        return self._sigma0.copy()

    def _phi(self, scores: np.ndarray) -> np.ndarray:
        return self._propagation @ scores

    def _sweep(self, state: np.ndarray) -> np.ndarray:
        s0 = self._sigma0

        if self.formula == FixpointFormula.BASIC:
            new_state = state + self._phi(state)
        elif self.formula == FixpointFormula.A:
            new_state = s0 + self._phi(state)
        elif self.formula == FixpointFormula.B:
            new_state = self._phi(s0 + state)
        else:
            combined = s0 + state
            new_state = combined + self._phi(combined)

        return normalize(new_state, self.normalization)

    def _change(self, previous: np.ndarray, current: np.ndarray) -> float:
        return residual_norm(previous, current)

    def _to_matrix(self, state: np.ndarray) -> SimilarityMatrix:
        index_a = vertex_index(self._vertices_a)
        index_b = vertex_index(self._vertices_b)

        scores = np.zeros((len(self._vertices_a), len(self._vertices_b)))
        for (a, b), value in zip(self.pairs, state):
            scores[index_a[a], index_b[b]] = value

        return SimilarityMatrix.from_array(scores, self._vertices_a, self._vertices_b)
