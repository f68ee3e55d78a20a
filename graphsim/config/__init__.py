"""Configuration management (built-in defaults plus optional YAML file)."""

from .loader import (
    CONFIG_ENV_VAR,
    get_algorithm_config,
    get_default_config,
    load_config,
)

__all__ = [
    'CONFIG_ENV_VAR',
    'get_algorithm_config',
    'get_default_config',
    'load_config',
]
