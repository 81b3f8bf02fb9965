"""
Observer module for monitoring minimization progress.
"""

from .observer import (
    CompositeObserver,
    HistoryObserver,
    LoggingObserver,
    ObserverLike,
    ProgressObserver,
)

__all__ = [
    "ProgressObserver",
    "ObserverLike",
    "CompositeObserver",
    "HistoryObserver",
    "LoggingObserver",
]
