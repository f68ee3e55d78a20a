"""
Score Normalization
===================

Per-sweep normalization of score matrices for the dual-graph algorithms.
Without it the propagated scores grow without bound.

Methods:
- max: divide by the largest entry - Similarity Flooding, scores land in [0, 1]
- frobenius: divide by the Frobenius norm - Coupled Node-Edge Scoring
- none: leave the scores as they are

An all-zero matrix is returned unchanged under every method.
"""

from enum import Enum
from typing import Union

import numpy as np


class NormMethod(str, Enum):
    """Score normalization methods."""
    MAX = "max"
    FROBENIUS = "frobenius"
    NONE = "none"


ZERO_TOLERANCE = 1e-300


def normalize_max(scores: np.ndarray) -> np.ndarray:
    """Divide by the largest absolute entry."""
    scores = np.asarray(scores, dtype=np.float64)
    if scores.size == 0:
        return scores
    peak = np.max(np.abs(scores))
    if peak < ZERO_TOLERANCE:
        return scores
    return scores / peak


def normalize_frobenius(scores: np.ndarray) -> np.ndarray:
    """Divide by the Frobenius norm (Euclidean length of all entries)."""
    scores = np.asarray(scores, dtype=np.float64)
    norm = np.linalg.norm(scores)
    if norm < ZERO_TOLERANCE:
        return scores
    return scores / norm


def normalize(scores: np.ndarray, method: Union[str, NormMethod] = NormMethod.MAX) -> np.ndarray:
    """
    Normalize a score matrix.

    Args:
        scores: Score array of any shape
        method: 'max', 'frobenius' or 'none'

    Returns:
        Normalized array (a new array unless method is 'none')

    Raises:
        ValueError: If method is unknown
    """
    method = NormMethod(method)

    if method == NormMethod.MAX:
        return normalize_max(scores)
    if method == NormMethod.FROBENIUS:
        return normalize_frobenius(scores)
    return np.asarray(scores, dtype=np.float64)


def max_abs_change(previous: np.ndarray, current: np.ndarray) -> float:
    """Largest element-wise change between two sweeps."""
    if previous.size == 0:
        return 0.0
    return float(np.max(np.abs(current - previous)))


def residual_norm(previous: np.ndarray, current: np.ndarray) -> float:
    """Euclidean length of the residual vector between two sweeps."""
    return float(np.linalg.norm(current - previous))
