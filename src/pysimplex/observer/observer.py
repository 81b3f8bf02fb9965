"""
Observer module for monitoring minimization progress.

Provides the Observer pattern for recording or logging the best point
found so far while a minimizer runs.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Union

from pysimplex.core import ValuedVertex

logger = logging.getLogger(__name__)


class ProgressObserver(ABC):
    """
    Abstract base for progress observers (Observer Pattern).

    A minimizer notifies its observer every few steps with the best
    vertex currently in the simplex. Observers are callables, so a plain
    function accepting a ValuedVertex can be used wherever an observer is.

    Example:
        >>> history = HistoryObserver()
        >>> minimizer.set_progress_callback(10, history)
        >>> minimizer.minimize(f, [0.0, 0.0], 1.0)
        >>> history.values[-1]
    """

    def __call__(self, best: ValuedVertex) -> None:
        self.observe(best)

    @abstractmethod
    def observe(self, best: ValuedVertex) -> None:
        """
        Record observation.

        Args:
            best: Current best vertex and its objective value.
        """
        pass

    def finalize(self) -> None:
        """Called once when a minimization run ends."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get observer name."""
        pass


ObserverLike = Union[ProgressObserver, Callable[[ValuedVertex], None]]


class CompositeObserver(ProgressObserver):
    """Composite observer that forwards to multiple observers."""

    def __init__(self, observers: List[ObserverLike]) -> None:
        self.observers = list(observers)

    def observe(self, best: ValuedVertex) -> None:
        for obs in self.observers:
            obs(best)

    def finalize(self) -> None:
        for obs in self.observers:
            finalize = getattr(obs, "finalize", None)
            if finalize is not None:
                finalize()

    def get_name(self) -> str:
        names = [
            o.get_name() if isinstance(o, ProgressObserver) else getattr(o, "__name__", repr(o))
            for o in self.observers
        ]
        return f"Composite[{', '.join(names)}]"


class HistoryObserver(ProgressObserver):
    """
    Records every reported best vertex.
    """

    def __init__(self) -> None:
        self.history: List[ValuedVertex] = []
        self.finalized = False

    def observe(self, best: ValuedVertex) -> None:
        self.history.append(best)

    def finalize(self) -> None:
        self.finalized = True

    @property
    def values(self) -> list:
        """Objective values in reporting order."""
        return [b.value for b in self.history]

    def get_name(self) -> str:
        return f"HistoryObserver(n={len(self.history)})"


class LoggingObserver(ProgressObserver):
    """
    Logs minimization progress.
    """

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level
        self._count = 0

    def observe(self, best: ValuedVertex) -> None:
        self._count += 1
        logger.log(
            self.level,
            "Progress %4d | f=%s | x=%s",
            self._count,
            best.value,
            best.vertex.coords.tolist(),
        )

    def finalize(self) -> None:
        self._count = 0

    def get_name(self) -> str:
        return f"LoggingObserver(level={logging.getLevelName(self.level)})"
