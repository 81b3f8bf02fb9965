"""
Abstract base class for derivative-free minimizers.

This module provides the Minimizer ABC that defines the interface for
minimization algorithms driven only by objective function values, and
implements the shared iteration loop (step budget, convergence check,
progress notification, evaluation counting).
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from numpy.typing import ArrayLike

from pysimplex.core import MinimizationResult, ValuedVertex, Vertex
from pysimplex.observer import ObserverLike

logger = logging.getLogger(__name__)

Objective = Callable[[Any], Any]


class Minimizer(ABC):
    """
    Abstract base for minimization algorithms (Strategy + Template Method).

    The run() method implements the iteration loop (template), while
    subclasses provide the algorithm-specific _initialize(), _step(),
    _has_converged() and _best() logic. All per-run state lives in the
    object returned by _initialize(), so one minimizer instance carries
    only configuration between calls.

    Attributes:
        max_steps: Maximum number of iterations per run.

    Example:
        >>> from pysimplex.minimizer import SimplexMinimizer
        >>> minimizer = SimplexMinimizer(max_steps=500)
        >>> best = minimizer.minimize(lambda x: (x[0] - 3.0) ** 2, [0.0], 1.0)
        >>> print(best.vertex, best.value)
    """

    def __init__(self, max_steps: int = 1000) -> None:
        """
        Initialize minimizer.

        Args:
            max_steps: Maximum number of iterations. Zero is allowed and
                returns the best vertex of the initial simplex.

        Raises:
            ValueError: If max_steps is negative.
        """
        if max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")

        self.max_steps = max_steps
        self._progress_frequency = 0
        self._observer: Optional[ObserverLike] = None

    @property
    def progress_frequency(self) -> int:
        return self._progress_frequency

    @property
    def observer(self) -> Optional[ObserverLike]:
        return self._observer

    def set_progress_callback(
        self,
        frequency: int,
        observer: Optional[ObserverLike] = None,
    ) -> None:
        """
        Register a progress observer, replacing any previous one.

        Args:
            frequency: Number of steps between notifications. Zero disables
                notifications and drops the observer.
            observer: Callable accepting a ValuedVertex (the current best).

        Raises:
            ValueError: If frequency is negative.
        """
        if frequency < 0:
            raise ValueError(f"frequency must be non-negative, got {frequency}")
        if frequency == 0:
            observer = None
        self._progress_frequency = frequency
        self._observer = observer

    def minimize(
        self,
        function: Objective,
        initial_vertex: ArrayLike,
        initial_simplex_size: float,
    ) -> ValuedVertex:
        """
        Minimize `function` starting around `initial_vertex`.

        Args:
            function: Objective mapping a coordinate array to a value.
            initial_vertex: Starting guess.
            initial_simplex_size: Edge length of the initial simplex.

        Returns:
            Best vertex found and its objective value.
        """
        return self.run(function, initial_vertex, initial_simplex_size).best

    def run(
        self,
        function: Objective,
        initial_vertex: ArrayLike,
        initial_simplex_size: float,
    ) -> MinimizationResult:
        """
        Minimize `function` and report run statistics (template method).

        Process:
        1. Call _initialize() to build the algorithm state
        2. Loop up to max_steps: _step() -> _has_converged() -> progress
        3. Finalize the observer
        4. Return MinimizationResult built around _best()

        Exceptions raised by `function` or the observer propagate to the
        caller unchanged.
        """
        n_evaluations = 0

        def evaluate(vertex: Vertex) -> Any:
            nonlocal n_evaluations
            n_evaluations += 1
            return function(vertex.coords)

        x0 = initial_vertex if isinstance(initial_vertex, Vertex) else Vertex(initial_vertex)
        logger.debug(
            "%s: starting run in %d dimensions from %s",
            self.get_name(), x0.dimension, x0.coords.tolist(),
        )

        state = self._initialize(evaluate, x0, initial_simplex_size)

        observer = self._observer
        countdown = self._progress_frequency
        value_history: List[Any] = []
        converged = False
        n_steps = 0
        for _ in range(self.max_steps):
            self._step(evaluate, state)
            n_steps += 1
            value_history.append(self._best(state).value)

            if self._has_converged(state):
                converged = True
                break

            if observer is not None:
                countdown -= 1
                if countdown == 0:
                    observer(self._best(state))
                    countdown = self._progress_frequency

        if observer is not None:
            finalize = getattr(observer, "finalize", None)
            if finalize is not None:
                finalize()

        best = self._best(state)
        if converged:
            message = f"Converged after {n_steps} steps"
        else:
            message = f"Step budget exhausted after {n_steps} steps"
        logger.debug(
            "%s: %s (%d evaluations, f=%s)",
            self.get_name(), message, n_evaluations, best.value,
        )

        return MinimizationResult(
            best=best,
            converged=converged,
            n_steps=n_steps,
            n_evaluations=n_evaluations,
            value_history=value_history,
            message=message,
            info=self._diagnostics(state),
        )

    @abstractmethod
    def _initialize(
        self,
        evaluate: Callable[[Vertex], Any],
        initial_vertex: Vertex,
        initial_simplex_size: float,
    ) -> Any:
        """
        Build the per-run algorithm state.

        Args:
            evaluate: Objective wrapper taking a Vertex.
            initial_vertex: Starting guess.
            initial_simplex_size: Scale of the initial search region.

        Returns:
            Opaque state passed to the other hooks.
        """
        pass

    @abstractmethod
    def _step(self, evaluate: Callable[[Vertex], Any], state: Any) -> None:
        """Perform one iteration, updating `state` in place."""
        pass

    @abstractmethod
    def _has_converged(self, state: Any) -> bool:
        """Whether the run should stop after the current step."""
        pass

    @abstractmethod
    def _best(self, state: Any) -> ValuedVertex:
        """Best vertex currently held in `state`."""
        pass

    def _diagnostics(self, state: Any) -> Dict[str, Any]:
        """
        Optional algorithm-specific run diagnostics.

        Override in subclasses that expose extra information in
        MinimizationResult.info.
        """
        return {}

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this minimizer."""
        pass
