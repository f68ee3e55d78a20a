"""
Algorithm Registry - selects and builds similarity algorithms by name.

The registry provides:
1. Name -> algorithm class lookup
2. Eager validation of the graphs against the algorithm's requirements
3. Construction with configured defaults (num_of_iteration, constant, ...)
"""

import inspect
import logging
from typing import Any, Dict, List, Optional, Type

from graphsim.config import get_algorithm_config, load_config
from graphsim.core.base import BaseAlgorithm
from graphsim.core.coupled_node_edge import CoupledNodeEdgeScoring
from graphsim.core.similarity_flooding import SimilarityFlooding
from graphsim.core.simrank import SimRank
from graphsim.validation import ALGORITHM_REQUIREMENTS, ConfigurationError


logger = logging.getLogger(__name__)


class AlgorithmRegistry:
    """Registry of available similarity algorithms."""

    def __init__(self):
        self._algorithms: Dict[str, Type[BaseAlgorithm]] = {}

    def register(self, algorithm: Type[BaseAlgorithm]) -> None:
        name = algorithm.algorithm_name
        if name not in ALGORITHM_REQUIREMENTS:
            raise KeyError(f"No graph requirements defined for '{name}'")
        self._algorithms[name] = algorithm

    def list_algorithms(self) -> List[str]:
        """List all available algorithm names."""
        return sorted(self._algorithms)

    def has_algorithm(self, name: str) -> bool:
        return name in self._algorithms

    def get(self, name: str) -> Type[BaseAlgorithm]:
        """
        Algorithm class for a name.

        Raises:
            ConfigurationError: If the name is unknown
        """
        if name not in self._algorithms:
            raise ConfigurationError(
                name,
                [f"{name} is not supported. "
                 f"Available: {', '.join(self.list_algorithms())}"],
            )
        return self._algorithms[name]

    def select(
        self,
        name: str,
        graphs: Any,
        config: Optional[Dict[str, Any]] = None,
        **overrides: Any,
    ) -> BaseAlgorithm:
        """
        Validate graphs and build the named algorithm.

        Args:
            name: 'SimRank', 'SimilarityFlooding' or 'CoupledNodeEdgeScoring'
            graphs: One graph or a sequence of one or two graphs
            config: Output of graphsim.config.load_config(); loaded from
                    GRAPHSIM_CONFIG (or the built-in defaults) if None
            **overrides: Constructor arguments that win over config

        Returns:
            Algorithm bound to the graphs, ready for calculate()

        Raises:
            ConfigurationError: Unknown name, or graphs that do not fit
            TypeError: An override the algorithm does not take
        """
        algorithm = self.get(name)
        graphs = algorithm.validate(graphs)

        accepted = inspect.signature(algorithm.__init__).parameters
        unknown = sorted(k for k in overrides if k not in accepted)
        if unknown:
            raise TypeError(f"{name} got unexpected settings: {', '.join(unknown)}")

        if config is None:
            config = load_config()
        settings = get_algorithm_config(name, config)
        settings.update(overrides)

        kwargs = {
            k: v for k, v in settings.items()
            if k in accepted and k not in ('self', 'graph', 'graphs')
        }

        logger.info("Selected %s for %d graph(s)", name, len(graphs))

        if algorithm.requirements().n_graphs == 1:
            return algorithm(graphs[0], **kwargs)
        return algorithm(graphs, **kwargs)


# Global registry instance (lazy initialized)
_registry: Optional[AlgorithmRegistry] = None


def get_registry() -> AlgorithmRegistry:
    """Get or create global algorithm registry."""
    global _registry
    if _registry is None:
        _registry = AlgorithmRegistry()
        for algorithm in (SimRank, SimilarityFlooding, CoupledNodeEdgeScoring):
            _registry.register(algorithm)
    return _registry


def reset_registry():
    """Reset the global registry (for testing)."""
    global _registry
    _registry = None


def select(
    name: str,
    graphs: Any,
    config: Optional[Dict[str, Any]] = None,
    **overrides: Any,
) -> BaseAlgorithm:
    """Validate graphs and build the named algorithm. See AlgorithmRegistry.select."""
    return get_registry().select(name, graphs, config, **overrides)


class GraphSimilarity:
    """
    Entry point bound to one or two graphs.

    Usage:
        s = GraphSimilarity([g])
        method = s.use('SimRank')
        method.set_constant(0.8)
        method.calculate()
        method.get_similarity('c', 'e')
    """

    def __init__(self, graphs: Any, config: Optional[Dict[str, Any]] = None):
        if not isinstance(graphs, (list, tuple)):
            graphs = [graphs]
        self.graphs = list(graphs)
        self.config = config

    def use(self, name: str, **overrides: Any) -> BaseAlgorithm:
        """Select an algorithm for the bound graphs."""
        return select(name, self.graphs, self.config, **overrides)
