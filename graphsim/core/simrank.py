"""
SimRank
=======

Structural-context similarity within one directed graph
(Jeh & Widom, "SimRank: A Measure of Structural-Context Similarity").

"Two vertices are similar if their predecessors are similar":

    s(a, a) = 1
    s(a, b) = C / (|I(a)| |I(b)|) * sum_{i in I(a), j in I(b)} s(i, j)
    s(a, b) = 0 if I(a) or I(b) is empty

I(v) is the predecessor set of v and C the damping constant. Every sweep is
computed from the previous sweep's matrix only.

In matrix form, with sparse W[p, v] = 1 / |I(v)| for each predecessor p of v:

    S' = C * W^T S W,  diag(S') = 1

Cost per sweep is O(V^2 d) with d the mean in-degree (the pairwise form is
O(V^2 d^2)). This is the hot path for large graphs.
"""

import logging
from typing import Any, Optional

import numpy as np
from scipy import sparse

from graphsim.core.base import BaseAlgorithm, DEFAULT_NUM_OF_ITERATION
from graphsim.core.matrix import SimilarityMatrix
from graphsim.graph import vertex_index


logger = logging.getLogger(__name__)

DEFAULT_CONSTANT = 0.6


def check_constant(value: Any) -> float:
    value = float(value)
    if not 0.0 < value <= 1.0:
        raise ValueError(f"constant must lie in (0, 1], got {value}")
    return value


class SimRank(BaseAlgorithm):
    """SimRank over a single directed graph."""

    algorithm_name = 'SimRank'

    def __init__(
        self,
        graph: Any,
        constant: float = DEFAULT_CONSTANT,
        num_of_iteration: int = DEFAULT_NUM_OF_ITERATION,
        tolerance: Optional[float] = None,
    ):
        super().__init__(graph, num_of_iteration, tolerance)
        self.constant = check_constant(constant)

    @property
    def graph(self):
        return self.graphs[0]

    def set_constant(self, value: float) -> None:
        """Set the damping constant C (the paper uses 0.8)."""
        self.constant = check_constant(value)

    def _in_weights(self) -> sparse.csr_matrix:
        """W[p, v] = 1 / |I(v)| for p in I(v), as a sparse matrix."""
        vertices = self.graph.vertices()
        index = vertex_index(vertices)

        rows, cols, weights = [], [], []
        for v in vertices:
            preds = set(self.graph.predecessors(v))
            if not preds:
                continue
            share = 1.0 / len(preds)
            for p in preds:
                rows.append(index[p])
                cols.append(index[v])
                weights.append(share)

        return sparse.coo_matrix(
            (np.asarray(weights, dtype=np.float64),
             (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
            shape=(len(vertices), len(vertices)),
        ).tocsr()

    def _initial_state(self) -> np.ndarray:
        self._vertices = self.graph.vertices()
        self._weights_t = self._in_weights().T.tocsr()

        logger.debug("SimRank: %d vertices, C=%s", len(self._vertices), self.constant)

        return np.eye(len(self._vertices))

    def _sweep(self, state: np.ndarray) -> np.ndarray:
        W_T = self._weights_t
        # W^T S W with sparse products only: (W^T (W^T S)^T)^T
        left = np.asarray(W_T @ state)
        new_state = self.constant * np.asarray(W_T @ left.T).T
        # exact symmetry; the two matmul orders can differ in the last bit
        new_state = (new_state + new_state.T) / 2.0
        np.fill_diagonal(new_state, 1.0)
        return new_state

    def _to_matrix(self, state: np.ndarray) -> SimilarityMatrix:
        return SimilarityMatrix.from_array(state, self._vertices, self._vertices)
