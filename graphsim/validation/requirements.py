"""
Algorithm Graph Requirements

Validates the supplied graph(s) against the structural requirements of a
similarity algorithm before any computation starts.

PRINCIPLE: "Check before compute, not after failure"

Usage:
    from graphsim.validation import check_requirements, ConfigurationError

    try:
        check_requirements('SimRank', [g])
    except ConfigurationError as e:
        print(f"Cannot run: {e}")
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from graphsim.graph import GraphView, as_graph_view


class ConfigurationError(Exception):
    """Raised when an algorithm cannot be configured for the given graphs."""

    def __init__(
        self,
        algorithm: str,
        reasons: List[str],
        message: Optional[str] = None,
    ):
        self.algorithm = algorithm
        self.reasons = reasons

        if message is None:
            message = (
                f"Cannot use '{algorithm}':\n"
                + "\n".join(f"  - {r}" for r in reasons)
            )

        super().__init__(message)


@dataclass
class GraphRequirements:
    """
    Structural requirements of an algorithm.

    Attributes:
        algorithm: Algorithm name
        n_graphs: Exact number of graphs the algorithm takes
        directed: All graphs must be directed
        multiedged: All graphs must be multi-edged (labelled edges)
        description: Human-readable description of the algorithm
    """
    algorithm: str
    n_graphs: int
    directed: bool = True
    multiedged: bool = False
    description: str = ""

    def check(self, graphs: Sequence[GraphView]) -> List[str]:
        """
        Check graphs against the requirements.

        Returns:
            List of violated requirements (empty if all satisfied)
        """
        problems = []
        if len(graphs) != self.n_graphs:
            noun = "graph" if self.n_graphs == 1 else "graphs"
            problems.append(
                f"This algorithm takes exactly {self.n_graphs} {noun}, "
                f"got {len(graphs)}"
            )
        if self.directed and not all(g.is_directed() for g in graphs):
            problems.append("The graph needs to be directed graph")
        if self.multiedged and not all(g.is_multiedged() for g in graphs):
            problems.append("The graph needs to be multiedged")
        return problems

    def is_satisfied(self, graphs: Sequence[GraphView]) -> bool:
        """Check if requirements are satisfied."""
        return len(self.check(graphs)) == 0


# =============================================================================
# ALGORITHM DEFINITIONS
# =============================================================================

ALGORITHM_REQUIREMENTS: Dict[str, GraphRequirements] = {
    'SimRank': GraphRequirements(
        algorithm='SimRank',
        n_graphs=1,
        directed=True,
        description='Structural-context similarity within one directed graph',
    ),

    'CoupledNodeEdgeScoring': GraphRequirements(
        algorithm='CoupledNodeEdgeScoring',
        n_graphs=2,
        directed=True,
        description='Coupled node and edge similarity between two directed graphs',
    ),

    'SimilarityFlooding': GraphRequirements(
        algorithm='SimilarityFlooding',
        n_graphs=2,
        directed=True,
        multiedged=True,
        description='Label-driven similarity propagation between two multi-edged graphs',
    ),
}


def coerce_graphs(algorithm: str, graphs: Any) -> List[GraphView]:
    """
    Wrap each graph as a GraphView.

    A single graph (not in a list) is accepted and treated as a one-element
    sequence.

    Raises:
        ConfigurationError: If an object does not provide the graph interface
    """
    if not isinstance(graphs, (list, tuple)):
        graphs = [graphs]

    views = []
    problems = []
    for i, g in enumerate(graphs):
        try:
            views.append(as_graph_view(g))
        except TypeError as e:
            problems.append(f"graph {i}: {e}")
    if problems:
        raise ConfigurationError(algorithm, problems)
    return views


def check_requirements(
    algorithm: str,
    graphs: Any,
    raise_on_failure: bool = True,
) -> Dict[str, Any]:
    """
    Check that the graphs fit an algorithm.

    Args:
        algorithm: Algorithm name (e.g., 'SimRank')
        graphs: One graph or a sequence of graphs
        raise_on_failure: If True, raise ConfigurationError on violations

    Returns:
        Dict with:
            - satisfied: bool
            - problems: List[str] of violated requirements
            - graphs: List[GraphView] of the coerced graphs
            - algorithm, description

    Raises:
        ConfigurationError: If the algorithm is unknown, or requirements are
            not met and raise_on_failure=True
    """
    if algorithm not in ALGORITHM_REQUIREMENTS:
        raise ConfigurationError(
            algorithm,
            [f"{algorithm} is not supported. "
             f"Valid algorithms: {list(ALGORITHM_REQUIREMENTS.keys())}"],
        )

    requirements = ALGORITHM_REQUIREMENTS[algorithm]
    views = coerce_graphs(algorithm, graphs)

    problems = requirements.check(views)
    satisfied = len(problems) == 0

    if not satisfied and raise_on_failure:
        raise ConfigurationError(algorithm, problems)

    return {
        'satisfied': satisfied,
        'problems': problems,
        'graphs': views,
        'algorithm': algorithm,
        'description': requirements.description,
    }
