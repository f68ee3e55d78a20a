"""
Base algorithm class with the shared iteration harness.

Algorithms own their iteration state. Subclasses describe one sweep;
the harness runs sweeps up to the iteration budget (or an optional
tolerance stop) and publishes the result as a frozen SimilarityMatrix.
"""

import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Hashable, List, Optional, TextIO, Tuple

import numpy as np

from graphsim.core.matrix import SimilarityMatrix
from graphsim.core.normalization import max_abs_change
from graphsim.graph import GraphView
from graphsim.validation import ALGORITHM_REQUIREMENTS, check_requirements


logger = logging.getLogger(__name__)

DEFAULT_NUM_OF_ITERATION = 100


@dataclass
class AlgorithmConfig:
    """Iteration settings shared by every algorithm."""
    num_of_iteration: int = DEFAULT_NUM_OF_ITERATION
    tolerance: Optional[float] = None

    def __post_init__(self):
        self.num_of_iteration = check_num_of_iteration(self.num_of_iteration)
        self.tolerance = check_tolerance(self.tolerance)


def check_num_of_iteration(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"num_of_iteration must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"num_of_iteration must be >= 0, got {value}")
    return int(value)


def check_tolerance(value: Any) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if not value > 0:
        raise ValueError(f"tolerance must be positive or None, got {value}")
    return value


class BaseAlgorithm(ABC):
    """
    Base class for all similarity algorithms.

    Subclasses must:
    1. Define algorithm_name (must match an ALGORITHM_REQUIREMENTS key)
    2. Implement _initial_state(), _sweep() and _to_matrix()
    3. Override _change() if their state is not a single ndarray
    """

    algorithm_name: str = ""

    def __init__(
        self,
        graphs: Any,
        num_of_iteration: int = DEFAULT_NUM_OF_ITERATION,
        tolerance: Optional[float] = None,
    ):
        self.graphs: List[GraphView] = self.validate(graphs)
        self.config = AlgorithmConfig(num_of_iteration, tolerance)
        self.sim: Optional[SimilarityMatrix] = None
        self.iterations_run = 0

    @classmethod
    def validate(cls, graphs: Any) -> List[GraphView]:
        """
        Check graphs against this algorithm's requirements.

        Returns:
            The graphs as GraphView objects

        Raises:
            ConfigurationError: If the graphs do not fit
        """
        return check_requirements(cls.algorithm_name, graphs)['graphs']

    @classmethod
    def requirements(cls):
        return ALGORITHM_REQUIREMENTS[cls.algorithm_name]

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def num_of_iteration(self) -> int:
        return self.config.num_of_iteration

    @property
    def tolerance(self) -> Optional[float]:
        return self.config.tolerance

    def set_num_of_iteration(self, value: int) -> None:
        """Set the number of sweeps run by calculate()."""
        self.config.num_of_iteration = check_num_of_iteration(value)

    def set_tolerance(self, value: Optional[float]) -> None:
        """Stop early once a sweep changes scores by less than value. None disables."""
        self.config.tolerance = check_tolerance(value)

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    @abstractmethod
    def _initial_state(self) -> Any:
        """Iteration state before the first sweep."""
        pass

    @abstractmethod
    def _sweep(self, state: Any) -> Any:
        """Compute the next state from the previous one. Must not mutate state."""
        pass

    @abstractmethod
    def _to_matrix(self, state: Any) -> SimilarityMatrix:
        """Publish the final state."""
        pass

    def _change(self, previous: Any, current: Any) -> float:
        """Distance between successive states, compared against tolerance."""
        return max_abs_change(previous, current)

    def calculate(self) -> SimilarityMatrix:
        """
        Run the algorithm.

        Every call starts from the initial state, so repeated calls with the
        same settings give identical results.

        Returns:
            Frozen SimilarityMatrix, also kept as self.sim for get_similarity()
        """
        state = self._initial_state()
        tolerance = self.config.tolerance

        self.iterations_run = 0
        for _ in range(self.config.num_of_iteration):
            new_state = self._sweep(state)
            self.iterations_run += 1
            if tolerance is not None:
                change = self._change(state, new_state)
                if change < tolerance:
                    logger.debug(
                        "%s converged after %d sweeps (change=%.3g)",
                        self.algorithm_name, self.iterations_run, change,
                    )
                    state = new_state
                    break
            state = new_state

        logger.debug("%s ran %d sweeps", self.algorithm_name, self.iterations_run)

        self.sim = self._to_matrix(state).freeze()
        return self.sim

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_similarity(self, a: Hashable, b: Hashable) -> Optional[float]:
        """Score for a vertex pair in either order; None if absent or not calculated."""
        if self.sim is None:
            return None
        return self.sim.get(a, b)

    def dump_all(self) -> List[Tuple[Hashable, Hashable, float]]:
        """All (a, b, score) triples of the last calculation."""
        if self.sim is None:
            return []
        return self.sim.items()

    def show_all_similarities(self, file: Optional[TextIO] = None) -> None:
        """Print every pair of the last calculation."""
        if self.sim is None:
            return
        self.sim.show(file if file is not None else sys.stdout)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_of_iteration={self.config.num_of_iteration}, "
            f"tolerance={self.config.tolerance})"
        )

