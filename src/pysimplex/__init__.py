"""
pysimplex - Derivative-free downhill-simplex minimization.

Minimizes arbitrary scalar objective functions over an N-dimensional
search space without gradients. Built to sit inside geometric fitting and
calibration pipelines where the objective is expensive, noisy or not
differentiable.

Main features:
- Downhill-simplex minimizer with cycle-avoiding worst-vertex selection
- Progress observers (history, logging, composite, plain callables)
- YAML configuration for complete minimization runs
- Linear transform fitting on top of the minimizer
"""

__version__ = "0.1.0"
__author__ = "pysimplex Team"

from pysimplex.core import MinimizationResult, SimplexConfig, ValuedVertex, Vertex
from pysimplex.minimizer import Minimizer, SimplexMinimizer

__all__ = [
    "Vertex",
    "ValuedVertex",
    "SimplexConfig",
    "MinimizationResult",
    "Minimizer",
    "SimplexMinimizer",
]
