"""
Configuration and result schemas.

SimplexConfig holds the tunable parameters of the downhill-simplex
minimizer; MinimizationResult carries everything a run produces.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

import numpy as np

from .vertex import ValuedVertex


@dataclass
class SimplexConfig:
    """Parameters for the downhill-simplex minimizer."""

    max_steps: int = 1000
    expansion_factor: float = 1.2
    contraction_factor: float = 0.8
    progress_frequency: int = 0
    size_tol: float = 1e-8

    def validate(self) -> None:
        """
        Check parameter ranges.

        Raises:
            ValueError: If a parameter is outside its valid range.
        """
        if self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")
        if self.expansion_factor <= 1.0:
            raise ValueError(
                f"expansion_factor must be > 1, got {self.expansion_factor}"
            )
        if not 0.0 < self.contraction_factor < 1.0:
            raise ValueError(
                f"contraction_factor must be in (0, 1), got {self.contraction_factor}"
            )
        if self.progress_frequency < 0:
            raise ValueError(
                f"progress_frequency must be non-negative, got {self.progress_frequency}"
            )
        if self.size_tol < 0:
            raise ValueError(f"size_tol must be non-negative, got {self.size_tol}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SimplexConfig":
        """
        Build a config from a dictionary; missing keys take defaults.

        Raises:
            ValueError: If the dictionary contains an unknown key.
        """
        unknown = sorted(set(d) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown minimizer parameters: {unknown}")
        return cls(
            max_steps=int(d.get("max_steps", 1000)),
            expansion_factor=float(d.get("expansion_factor", 1.2)),
            contraction_factor=float(d.get("contraction_factor", 0.8)),
            progress_frequency=int(d.get("progress_frequency", 0)),
            size_tol=float(d.get("size_tol", 1e-8)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_steps": self.max_steps,
            "expansion_factor": self.expansion_factor,
            "contraction_factor": self.contraction_factor,
            "progress_frequency": self.progress_frequency,
            "size_tol": self.size_tol,
        }


@dataclass
class MinimizationResult:
    """
    Result of a minimization run.

    Attributes:
        best: Best vertex found and its objective value.
        converged: Whether the simplex shrank below the size tolerance
            before the step budget ran out.
        n_steps: Number of simplex steps taken.
        n_evaluations: Number of objective function evaluations.
        value_history: Best value in the simplex after each step.
        message: Human-readable description of the outcome.
        info: Algorithm-specific diagnostics.
    """
    best: ValuedVertex
    converged: bool
    n_steps: int
    n_evaluations: int
    value_history: List[Any] = field(default_factory=list)
    message: str = ""
    info: Dict[str, Any] = field(default_factory=dict)

    @property
    def x(self) -> np.ndarray:
        """Coordinates of the best vertex."""
        return self.best.vertex.coords

    @property
    def fun(self) -> Any:
        """Objective value at the best vertex."""
        return self.best.value
