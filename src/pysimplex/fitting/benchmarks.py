"""
Named benchmark objectives.

Small analytic test functions with known minima, used by examples, the
YAML runner and the test suite.
"""
from typing import Any, Callable, Dict, Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike


def shifted_quadratic(
    center: Sequence[float],
    weights: Optional[Sequence[float]] = None,
) -> Callable[[ArrayLike], float]:
    """
    Weighted quadratic bowl with its minimum (value 0) at `center`.

    f(x) = sum_i w_i * (x_i - c_i)^2
    """
    c = np.asarray(center, dtype=float)
    w = np.ones_like(c) if weights is None else np.asarray(weights, dtype=float)
    if w.shape != c.shape:
        raise ValueError(
            f"weights shape {w.shape} does not match center shape {c.shape}"
        )

    def objective(x: ArrayLike) -> float:
        diff = np.asarray(x, dtype=float) - c
        return float(np.sum(w * diff**2))

    return objective


def rosenbrock(a: float = 1.0, b: float = 100.0) -> Callable[[ArrayLike], float]:
    """
    Generalized Rosenbrock function, minimum 0 at (a, a^2, ...).

    For a = 1 the minimum is at (1, 1, ..., 1).
    """

    def objective(x: ArrayLike) -> float:
        x = np.asarray(x, dtype=float)
        return float(np.sum(b * (x[1:] - x[:-1] ** 2) ** 2 + (a - x[:-1]) ** 2))

    return objective


def abs_sum(center: Sequence[float]) -> Callable[[ArrayLike], float]:
    """Non-differentiable L1 bowl with its minimum at `center`."""
    c = np.asarray(center, dtype=float)

    def objective(x: ArrayLike) -> float:
        return float(np.sum(np.abs(np.asarray(x, dtype=float) - c)))

    return objective


_REGISTRY: Dict[str, Callable[..., Callable[[ArrayLike], float]]] = {
    "shifted_quadratic": shifted_quadratic,
    "quadratic": shifted_quadratic,
    "rosenbrock": rosenbrock,
    "abs_sum": abs_sum,
}


def get_objective(name: str, **params: Any) -> Callable[[ArrayLike], float]:
    """
    Build a benchmark objective by name.

    Args:
        name: One of the registered benchmark names.
        **params: Keyword arguments for the benchmark factory.

    Raises:
        ValueError: If the name is unknown.
    """
    key = name.lower()
    if key not in _REGISTRY:
        raise ValueError(
            f"Unknown objective: {name}. Available: {sorted(_REGISTRY)}"
        )
    return _REGISTRY[key](**params)
