"""
Fitting helpers built on the minimizer.

Provides:
- Benchmark objectives with known minima
- LinearTransform and least-squares fitting of its parameters
"""

from .benchmarks import abs_sum, get_objective, rosenbrock, shifted_quadratic
from .linear import LinearTransform, fit_linear_transform

__all__ = [
    "shifted_quadratic",
    "rosenbrock",
    "abs_sum",
    "get_objective",
    "LinearTransform",
    "fit_linear_transform",
]
