"""
Configuration loader for YAML-based minimization setup.

Provides functions to build a minimizer, its observers and a benchmark
objective from a configuration dictionary, and to run a complete
minimization described by a YAML file.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

from pysimplex.core import MinimizationResult, SimplexConfig
from pysimplex.fitting import get_objective
from pysimplex.minimizer import SimplexMinimizer
from pysimplex.observer import (
    CompositeObserver,
    HistoryObserver,
    LoggingObserver,
    ProgressObserver,
)

logger = logging.getLogger(__name__)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration (empty for an empty file).
    """
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_minimizer_config(config: Dict[str, Any]) -> SimplexConfig:
    """Parse the `minimizer` section into a validated SimplexConfig."""
    min_config = dict(config.get("minimizer") or {})
    algorithm = str(min_config.pop("algorithm", "simplex")).lower()
    if algorithm not in ("simplex", "nelder_mead", "downhill_simplex"):
        raise ValueError(f"Unknown minimizer algorithm: {algorithm}")

    params = SimplexConfig.from_dict(min_config)
    params.validate()
    return params


def _parse_observer(config: Dict[str, Any]) -> Optional[ProgressObserver]:
    """Parse observers from config; None when none are enabled."""
    obs_config = config.get("observers") or {}
    observers = []
    if obs_config.get("history", False):
        observers.append(HistoryObserver())
    if obs_config.get("logging", False):
        level = obs_config.get("level", "INFO")
        if not isinstance(level, int):
            level_name = str(level).upper()
            level = logging.getLevelName(level_name)
            if not isinstance(level, int):
                raise ValueError(f"Unknown logging level: {level_name}")
        observers.append(LoggingObserver(level=level))

    if not observers:
        return None
    if len(observers) == 1:
        return observers[0]
    return CompositeObserver(observers)


def build_minimizer_from_config(config: Dict[str, Any]) -> SimplexMinimizer:
    """
    Build a SimplexMinimizer, with observers attached, from configuration.

    Args:
        config: Configuration dictionary (typically from YAML).

    Returns:
        Configured SimplexMinimizer.

    Example config:
        minimizer:
          algorithm: simplex
          max_steps: 1000
          expansion_factor: 1.2
          contraction_factor: 0.8
          size_tol: 1.0e-8
          progress_frequency: 10   # used when observers.frequency is absent
        observers:
          logging: true
          history: false
          frequency: 10
    """
    minimizer = SimplexMinimizer.from_config(parse_minimizer_config(config))

    observer = _parse_observer(config)
    if observer is not None:
        obs_config = config.get("observers") or {}
        frequency = int(obs_config.get("frequency", minimizer.progress_frequency or 10))
        minimizer.set_progress_callback(frequency, observer)
    return minimizer


def build_objective_from_config(config: Dict[str, Any]) -> Callable[[Any], float]:
    """
    Build a named benchmark objective from the `objective` section.

    Example config:
        objective:
          name: shifted_quadratic
          center: [1.0, -2.0]
    """
    obj_config = dict(config.get("objective") or {})
    if "name" not in obj_config:
        raise ValueError("objective section must define a name")
    name = obj_config.pop("name")
    return get_objective(name, **obj_config)


def load_and_run(path: Union[str, Path]) -> MinimizationResult:
    """
    Load configuration from YAML and run the minimization.

    Args:
        path: Path to YAML configuration file.

    Returns:
        MinimizationResult of the run.
    """
    config = load_yaml(path)
    minimizer = build_minimizer_from_config(config)
    objective = build_objective_from_config(config)

    start_config = config.get("start") or {}
    if "x0" not in start_config:
        raise ValueError("start section must define x0")
    x0 = [float(v) for v in start_config["x0"]]
    size = float(start_config.get("size", 1.0))

    logger.info("Running %s from %s", minimizer.get_name(), path)
    return minimizer.run(objective, x0, size)
