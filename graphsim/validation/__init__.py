"""
Validation Module

Validates graph inputs before a similarity algorithm is built.

Exports:
    - check_requirements: Validate graphs against an algorithm's requirements
    - ConfigurationError: Raised when requirements are not met
    - GraphRequirements: Per-algorithm requirement definitions
    - ALGORITHM_REQUIREMENTS: Requirement table keyed by algorithm name
"""

from .requirements import (
    ALGORITHM_REQUIREMENTS,
    ConfigurationError,
    GraphRequirements,
    check_requirements,
    coerce_graphs,
)

__all__ = [
    'check_requirements',
    'coerce_graphs',
    'ConfigurationError',
    'GraphRequirements',
    'ALGORITHM_REQUIREMENTS',
]
