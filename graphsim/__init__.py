"""
graphsim: vertex similarity within and across directed graphs.

Public API:
    from graphsim import GraphSimilarity
    method = GraphSimilarity([g]).use('SimRank')
    method.calculate()
    method.get_similarity('c', 'e')

Algorithms:
    SimRank                 one directed graph
    CoupledNodeEdgeScoring  two directed graphs
    SimilarityFlooding      two directed, multi-edged (labelled) graphs

Graphs are networkx graphs or any object implementing graphsim.graph.GraphView.

Also:
    graphsim.config      Defaults and YAML configuration
    graphsim.validation  Graph requirement checks (ConfigurationError)
"""

from graphsim.core import (
    CoupledNodeEdgeScoring,
    GraphSimilarity,
    SimilarityFlooding,
    SimilarityMatrix,
    SimRank,
    select,
)
from graphsim.validation import ConfigurationError

__all__ = [
    'ConfigurationError',
    'CoupledNodeEdgeScoring',
    'GraphSimilarity',
    'SimRank',
    'SimilarityFlooding',
    'SimilarityMatrix',
    'select',
]
