"""
Downhill-simplex (Nelder-Mead family) minimizer.

Keeps a simplex of D+1 vertices in a D-dimensional search space and, on
every step, replaces its worst vertex by a reflected, expanded or
contracted point. Only objective values are used, and only through `<=`,
so the objective may be expensive, noisy or non-differentiable.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pysimplex.core import SimplexConfig, ValuedVertex, Vertex

from .minimizer import Minimizer

logger = logging.getLogger(__name__)


@dataclass
class SimplexState:
    """
    Per-run simplex.

    Attributes:
        vertices: The D+1 vertices.
        values: Objective value of each vertex; values[i] always belongs
            to vertices[i].
        last_worst: Index replaced on the previous step, or None before
            the first step.
        worst_history: Index replaced on every step so far.
        moves: Count of each kind of move taken.
    """
    vertices: List[Vertex]
    values: List[Any]
    last_worst: Optional[int] = None
    worst_history: List[int] = field(default_factory=list)
    moves: Counter = field(default_factory=Counter)

    @property
    def size(self) -> int:
        return len(self.vertices)

    def replace(self, index: int, vertex: Vertex, value: Any) -> None:
        self.vertices[index] = vertex
        self.values[index] = value

    def rank(self, value: Any) -> int:
        """Number of simplex values that `value` is at least as good as."""
        return sum(1 for v in self.values if value <= v)

    def worst_index(self) -> int:
        """
        Index of the highest value, skipping the previous step's worst.

        The vertex replaced on the previous step is never picked again
        immediately, so a freshly moved vertex cannot bounce back and forth.
        Ties keep the earliest index.
        """
        excluded = self.last_worst
        worst = 1 if excluded == 0 else 0
        for i, value in enumerate(self.values):
            if i == excluded:
                continue
            if not value <= self.values[worst]:
                worst = i
        return worst

    def best_index(self) -> int:
        """Index of the lowest value (earliest on ties)."""
        best = 0
        for i, value in enumerate(self.values):
            if not self.values[best] <= value:
                best = i
        return best


class SimplexMinimizer(Minimizer):
    """
    Downhill-simplex minimizer.

    Each step reflects the worst vertex through the centroid of the
    opposite face and ranks the trial point against the simplex:

    - better than every vertex: try an expansion, keep it if it is still
      the best, otherwise keep the reflection
    - better than at least half: keep the reflection
    - better than at least a quarter: contract the worst vertex toward
      the face center
    - otherwise: contract on the far side of the face

    The half and quarter thresholds use integer division of D+2.

    Attributes:
        expansion_factor: Scale of the expansion move (> 1).
        contraction_factor: Scale of the contraction moves (in (0, 1)).
        size_tol: Coordinate spread below which the simplex counts as
            converged.

    Example:
        >>> minimizer = SimplexMinimizer()
        >>> best = minimizer.minimize(lambda x: (x[0] - 3.0) ** 2, [0.0], 1.0)
        >>> round(float(best.vertex[0]), 3)
        3.0
    """

    def __init__(
        self,
        max_steps: int = 1000,
        expansion_factor: float = 1.2,
        contraction_factor: float = 0.8,
        size_tol: float = 1e-8,
    ) -> None:
        """
        Initialize simplex minimizer.

        Args:
            max_steps: Maximum number of simplex steps.
            expansion_factor: Scale of the expansion move.
            contraction_factor: Scale of the contraction moves.
            size_tol: Convergence threshold on the simplex coordinate spread.

        Raises:
            ValueError: If a parameter is outside its valid range.
        """
        super().__init__(max_steps=max_steps)

        if expansion_factor <= 1.0:
            raise ValueError(f"expansion_factor must be > 1, got {expansion_factor}")
        if not 0.0 < contraction_factor < 1.0:
            raise ValueError(
                f"contraction_factor must be in (0, 1), got {contraction_factor}"
            )
        if size_tol < 0:
            raise ValueError(f"size_tol must be non-negative, got {size_tol}")

        self.expansion_factor = expansion_factor
        self.contraction_factor = contraction_factor
        self.size_tol = size_tol

    @classmethod
    def from_config(cls, config: SimplexConfig) -> "SimplexMinimizer":
        """Create a minimizer from a SimplexConfig."""
        config.validate()
        minimizer = cls(
            max_steps=config.max_steps,
            expansion_factor=config.expansion_factor,
            contraction_factor=config.contraction_factor,
            size_tol=config.size_tol,
        )
        minimizer._progress_frequency = config.progress_frequency
        return minimizer

    def to_config(self) -> SimplexConfig:
        return SimplexConfig(
            max_steps=self.max_steps,
            expansion_factor=self.expansion_factor,
            contraction_factor=self.contraction_factor,
            progress_frequency=self.progress_frequency,
            size_tol=self.size_tol,
        )

    def _initialize(
        self,
        evaluate: Callable[[Vertex], Any],
        initial_vertex: Vertex,
        initial_simplex_size: float,
    ) -> SimplexState:
        """
        Build the initial simplex around `initial_vertex`.

        Vertex 0 is the initial vertex shifted by -size/(D+1) on every axis
        so the simplex is roughly centered on the guess; vertex i is vertex 0
        moved by +size along axis i-1.
        """
        dim = initial_vertex.dimension
        if dim == 0:
            raise ValueError("initial_vertex must have at least one coordinate")

        base = initial_vertex
        offset = -initial_simplex_size / (dim + 1)
        for axis in range(dim):
            base = base.moved(axis, offset)

        vertices = [base] + [base.moved(axis, initial_simplex_size) for axis in range(dim)]
        values = [evaluate(v) for v in vertices]
        return SimplexState(vertices=vertices, values=values)

    def _step(self, evaluate: Callable[[Vertex], Any], state: SimplexState) -> None:
        n = state.size
        half = (n + 1) // 2
        quarter = (n + 1) // 4

        worst = state.worst_index()
        worst_vertex = state.vertices[worst]
        face_center = Vertex.face_center(state.vertices, worst)

        reflected = worst_vertex.towards(face_center, 1.0)
        reflected_value = evaluate(reflected)
        rank = state.rank(reflected_value)

        if rank == n:
            expanded = worst_vertex.towards(face_center, self.expansion_factor)
            expanded_value = evaluate(expanded)
            if state.rank(expanded_value) == n:
                state.replace(worst, expanded, expanded_value)
                state.moves["expansion"] += 1
            else:
                state.replace(worst, reflected, reflected_value)
                state.moves["reflection"] += 1
        elif rank >= half:
            state.replace(worst, reflected, reflected_value)
            state.moves["reflection"] += 1
        elif rank >= quarter:
            contracted = worst_vertex.towards(face_center, -self.contraction_factor)
            state.replace(worst, contracted, evaluate(contracted))
            state.moves["contraction"] += 1
        else:
            contracted = worst_vertex.towards(face_center, self.contraction_factor)
            state.replace(worst, contracted, evaluate(contracted))
            state.moves["outside_contraction"] += 1

        state.last_worst = worst
        state.worst_history.append(worst)

    def _has_converged(self, state: SimplexState) -> bool:
        return Vertex.is_too_small(state.vertices, self.size_tol)

    def _best(self, state: SimplexState) -> ValuedVertex:
        best = state.best_index()
        return ValuedVertex(state.vertices[best], state.values[best])

    def _diagnostics(self, state: SimplexState) -> Dict[str, Any]:
        return {
            "worst_history": list(state.worst_history),
            "moves": dict(state.moves),
            "simplex": [ValuedVertex(v, f) for v, f in zip(state.vertices, state.values)],
        }

    def get_name(self) -> str:
        """Get human-readable name."""
        return (
            f"SimplexMinimizer(max_steps={self.max_steps}, "
            f"expansion={self.expansion_factor}, contraction={self.contraction_factor})"
        )
