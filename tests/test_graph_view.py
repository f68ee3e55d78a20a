"""
Tests for the networkx graph adapter.
"""

import networkx as nx
import pytest

from graphsim.graph import Edge, EdgeRecordGraph, GraphView, NetworkXGraph, as_edge, as_graph_view


class TestNetworkXGraph:
    """Adjacency queries through the adapter."""

    def test_directed(self):
        g = nx.DiGraph()
        g.add_edges_from([('a', 'b'), ('c', 'b')])
        view = NetworkXGraph(g)

        assert view.vertices() == ['a', 'b', 'c']
        assert sorted(view.predecessors('b')) == ['a', 'c']
        assert view.successors('a') == ['b']
        assert view.predecessors('a') == []
        assert view.is_directed()
        assert not view.is_multiedged()
        assert view.edges() == [Edge('a', 'b'), Edge('c', 'b')]

    def test_multigraph_keys_are_labels(self):
        """Edge keys label parallel edges."""
        g = nx.MultiDiGraph()
        g.add_edge('I', 'coffee', key='drink')
        g.add_edge('I', 'coffee', key='smell')
        view = NetworkXGraph(g)

        assert view.is_multiedged()
        assert [e.label for e in view.edges()] == ['drink', 'smell']
        assert view.predecessors('coffee') == ['I']
        assert view.edges_by_label('smell') == [Edge('I', 'coffee', 'smell')]

    def test_label_attribute_wins(self):
        g = nx.MultiDiGraph()
        g.add_edge('a', 'b', key='k1', label='rel')
        assert NetworkXGraph(g).edges() == [Edge('a', 'b', 'rel')]

    def test_label_attribute_on_digraph(self):
        g = nx.DiGraph()
        g.add_edge('a', 'b', label='rel')
        assert NetworkXGraph(g).edges()[0].label == 'rel'

    def test_undirected_neighbours(self):
        g = nx.Graph()
        g.add_edge('a', 'b')
        view = NetworkXGraph(g)
        assert not view.is_directed()
        assert view.predecessors('a') == ['b']


class TestCoercion:
    """as_graph_view()."""

    def test_wraps_networkx(self):
        view = as_graph_view(nx.DiGraph())
        assert isinstance(view, NetworkXGraph)
        assert isinstance(view, GraphView)

    def test_passes_views_through(self):
        view = NetworkXGraph(nx.DiGraph())
        assert as_graph_view(view) is view

    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            as_graph_view({'a': ['b']})

    def test_wraps_other_graph_objects(self):
        """Tuple edge records of custom graphs come back as Edge."""
        class Pairs:
            def vertices(self):
                return ['a', 'b']

            def edges(self):
                return [('a', 'b'), ('b', 'a', 'back'), Edge('a', 'a', 'loop')]

            def predecessors(self, v):
                return ['b'] if v == 'a' else ['a']

            def successors(self, v):
                return self.predecessors(v)

            def is_directed(self):
                return True

            def is_multiedged(self):
                return True

        view = as_graph_view(Pairs())
        assert isinstance(view, EdgeRecordGraph)
        assert view.edges() == [Edge('a', 'b'), Edge('b', 'a', 'back'), Edge('a', 'a', 'loop')]
        assert as_graph_view(view) is view

    @pytest.mark.parametrize('record', [('a',), ('a', 'b', 'l', 'extra'), 'ab', ['a', 'b']])
    def test_rejects_malformed_edge_records(self, record):
        with pytest.raises(TypeError):
            as_edge(record)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
