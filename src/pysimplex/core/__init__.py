"""
Core data types: vertices, valued vertices, configuration and results.
"""

from .vertex import Vertex, ValuedVertex
from .schemas import SimplexConfig, MinimizationResult

__all__ = [
    "Vertex",
    "ValuedVertex",
    "SimplexConfig",
    "MinimizationResult",
]
