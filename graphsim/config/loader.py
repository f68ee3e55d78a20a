"""
Configuration Loader
====================

Algorithm defaults, optionally overridden from a YAML file.

File layout:

    defaults:
      num_of_iteration: 100
      tolerance: null
    algorithms:
      SimRank:
        constant: 0.8
      SimilarityFlooding:
        formula: A

Algorithm sections override defaults. When no path is given the
GRAPHSIM_CONFIG environment variable is consulted.

Usage:
    from graphsim.config import load_config, get_algorithm_config

    config = load_config('graphsim.yaml')
    simrank = get_algorithm_config('SimRank', config)
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'GRAPHSIM_CONFIG'


def get_default_config() -> Dict[str, Any]:
    """Built-in configuration."""
    return {
        'defaults': {
            'num_of_iteration': 100,
            'tolerance': None,
        },
        'algorithms': {
            'SimRank': {
                'constant': 0.6,
            },
            'CoupledNodeEdgeScoring': {
                'normalization': 'frobenius',
            },
            'SimilarityFlooding': {
                'formula': 'C',
                'normalization': 'max',
            },
        },
    }


def get_config_path() -> Optional[Path]:
    """Config file named by GRAPHSIM_CONFIG, if set."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return None


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration, merged over the built-in defaults.

    Args:
        path: YAML file. If None, GRAPHSIM_CONFIG is used; if that is unset
              too, the built-in defaults are returned.

    Returns:
        Dict with 'defaults' and 'algorithms' sections

    Raises:
        FileNotFoundError: If the config file does not exist
    """
    config = get_default_config()

    config_file = Path(path) if path is not None else get_config_path()
    if config_file is None:
        return config

    if not config_file.exists():
        raise FileNotFoundError(f"No config file at {config_file}")

    with open(config_file) as f:
        raw = yaml.safe_load(f) or {}

    logger.debug("Loaded config from %s", config_file)

    config['defaults'].update(raw.get('defaults') or {})
    for name, section in (raw.get('algorithms') or {}).items():
        config['algorithms'].setdefault(name, {}).update(section or {})

    return config


def get_algorithm_config(
    name: str,
    config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Merged settings for one algorithm.

    Args:
        name: Algorithm name (e.g., 'SimRank')
        config: Output of load_config(); built-in defaults if None

    Returns:
        Flat dict: defaults overridden by the algorithm's own section
    """
    if config is None:
        config = get_default_config()

    merged = copy.deepcopy(config.get('defaults', {}))
    merged.update(config.get('algorithms', {}).get(name, {}))
    return merged
