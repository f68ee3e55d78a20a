"""
Similarity engines.

    base                 Shared iteration harness (BaseAlgorithm)
    matrix               SimilarityMatrix result container
    normalization        Score normalization (max, frobenius)
    simrank              SimRank, one directed graph
    coupled_node_edge    Coupled node-edge scoring, two directed graphs
    similarity_flooding  Similarity flooding, two multi-edged directed graphs
    registry             Name-based selection and validation
"""

from .base import AlgorithmConfig, BaseAlgorithm
from .coupled_node_edge import CoupledNodeEdgeScoring
from .matrix import SimilarityMatrix
from .normalization import NormMethod, normalize
from .registry import AlgorithmRegistry, GraphSimilarity, get_registry, select
from .similarity_flooding import FixpointFormula, SimilarityFlooding
from .simrank import SimRank

__all__ = [
    'AlgorithmConfig',
    'AlgorithmRegistry',
    'BaseAlgorithm',
    'CoupledNodeEdgeScoring',
    'FixpointFormula',
    'GraphSimilarity',
    'NormMethod',
    'SimRank',
    'SimilarityFlooding',
    'SimilarityMatrix',
    'get_registry',
    'normalize',
    'select',
]
