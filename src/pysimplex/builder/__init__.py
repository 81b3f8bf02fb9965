"""
Builder module for configuration-driven setup.
"""

from .config_loader import (
    build_minimizer_from_config,
    build_objective_from_config,
    load_and_run,
    load_yaml,
    parse_minimizer_config,
)

__all__ = [
    "load_yaml",
    "parse_minimizer_config",
    "build_minimizer_from_config",
    "build_objective_from_config",
    "load_and_run",
]
