"""
Minimizer module for derivative-free minimization.

Provides minimization algorithms driven by objective values only:
- SimplexMinimizer: downhill simplex with expansion and two contractions
"""

from .minimizer import Minimizer, Objective
from .simplex import SimplexMinimizer, SimplexState

__all__ = [
    "Minimizer",
    "Objective",
    "SimplexMinimizer",
    "SimplexState",
]
