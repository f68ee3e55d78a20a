"""
Tests for Coupled Node-Edge Scoring.

Validates:
    1. Incidence matrix construction
    2. Hand-computed scores on single-edge graphs
    3. Normalization of node scores
    4. Degenerate inputs (no edges) and edge score queries
"""

import networkx as nx
import numpy as np
import pytest

from graphsim.core.coupled_node_edge import CoupledNodeEdgeScoring, incidence_matrices
from graphsim.graph import Edge, NetworkXGraph


def _path(*vertices):
    g = nx.DiGraph()
    g.add_nodes_from(vertices)
    g.add_edges_from(zip(vertices, vertices[1:]))
    return g


def _tree():
    g = nx.DiGraph()
    g.add_edges_from([('a', 'b'), ('b', 'c'), ('a', 'd'), ('d', 'e')])
    return g


class TestIncidence:
    """Source/terminal incidence matrices."""

    def test_path_incidence(self):
        """Each edge column has one source row and one terminal row."""
        source, terminal = incidence_matrices(NetworkXGraph(_path('x', 'y', 'z')))

        np.testing.assert_array_equal(source, [[1, 0], [0, 1], [0, 0]])
        np.testing.assert_array_equal(terminal, [[0, 0], [1, 0], [0, 1]])

    def test_parallel_edges_are_distinct(self):
        """Multi-edges get their own columns."""
        g = nx.MultiDiGraph()
        g.add_edge('u', 'v', key='p')
        g.add_edge('u', 'v', key='q')
        source, terminal = incidence_matrices(NetworkXGraph(g))

        assert source.shape == (2, 2)
        np.testing.assert_array_equal(source.sum(axis=1), [2, 0])
        np.testing.assert_array_equal(terminal.sum(axis=1), [0, 2])


class TestCoupledScores:
    """Score values."""

    def test_single_edge_graphs(self):
        """Endpoints match endpoints with weight 1/sqrt(2); cross pairs score 0."""
        method = CoupledNodeEdgeScoring([_path('u', 'v'), _path('x', 'y')])
        method.calculate()

        assert method.get_similarity('u', 'x') == pytest.approx(1 / np.sqrt(2))
        assert method.get_similarity('v', 'y') == pytest.approx(1 / np.sqrt(2))
        assert method.get_similarity('u', 'y') == 0.0
        assert method.get_similarity('v', 'x') == 0.0
        assert method.get_edge_similarity(Edge('u', 'v'), Edge('x', 'y')) == pytest.approx(1.0)

    def test_frobenius_normalized(self):
        """Node scores have unit Frobenius norm."""
        method = CoupledNodeEdgeScoring([_path('A', 'B', 'C'), _tree()])
        sim = method.calculate()

        values = sim.to_numpy(['A', 'B', 'C'], ['a', 'b', 'c', 'd', 'e'])
        assert np.linalg.norm(values) == pytest.approx(1.0)
        assert values.min() >= 0.0

    def test_max_normalization(self):
        """With max normalization the best pair scores 1."""
        method = CoupledNodeEdgeScoring(
            [_path('A', 'B', 'C'), _tree()], normalization='max',
        )
        sim = method.calculate()
        assert max(s for _, _, s in sim) == pytest.approx(1.0)

    def test_domains(self):
        """Outer keys come from graph A, inner keys from graph B."""
        sim = CoupledNodeEdgeScoring([_path('A', 'B', 'C'), _tree()]).calculate()

        assert sim.outer_keys() == ['A', 'B', 'C']
        assert sim.inner_keys() == ['a', 'b', 'c', 'd', 'e']
        assert len(sim) == 15

    def test_middle_vertex_matches_inner_vertex(self):
        """The interior of a path is most similar to an interior vertex."""
        sim = CoupledNodeEdgeScoring([_path('A', 'B', 'C'), _tree()]).calculate()
        best, _ = sim.best_matches()['B']
        assert best in ('b', 'd')

    def test_idempotent(self):
        """Repeated runs give identical matrices."""
        method = CoupledNodeEdgeScoring([_path('A', 'B', 'C'), _tree()])
        assert method.calculate() == method.calculate()

    def test_tolerance(self):
        """Tolerance stop ends before the budget on a convergent input."""
        method = CoupledNodeEdgeScoring([_path('u', 'v'), _path('x', 'y')], tolerance=1e-9)
        method.calculate()
        assert method.iterations_run < 100


class TestDegenerate:
    """Inputs without edges."""

    def test_graph_without_edges(self):
        """No edges: every node pair scores 0, no error."""
        empty = nx.DiGraph()
        empty.add_nodes_from(['p', 'q'])
        method = CoupledNodeEdgeScoring([_path('A', 'B'), empty])
        method.calculate()

        assert method.get_similarity('A', 'p') == 0.0
        assert method.get_similarity('B', 'q') == 0.0

    def test_zero_iterations(self):
        """Zero sweeps leave the all-ones start."""
        method = CoupledNodeEdgeScoring([_path('A', 'B'), _path('x', 'y')], num_of_iteration=0)
        method.calculate()
        assert method.get_similarity('A', 'y') == 1.0

    def test_edge_similarity_before_calculate(self):
        """Edge scores are unavailable until calculated."""
        method = CoupledNodeEdgeScoring([_path('A', 'B'), _path('x', 'y')])
        assert method.get_edge_similarity(Edge('A', 'B'), Edge('x', 'y')) is None

    def test_unknown_edge(self):
        """Unknown edges return None."""
        method = CoupledNodeEdgeScoring([_path('A', 'B'), _path('x', 'y')])
        method.calculate()
        assert method.get_edge_similarity(Edge('B', 'A'), Edge('x', 'y')) is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
