"""
Pure linear scaling transforms and their least-squares fitting.

A LinearTransform maps each axis independently, y = scale * x + offset.
fit_linear_transform() recovers scale and offset from matched point sets
with the simplex minimizer, the way calibration pipelines fit projection
or datum parameters.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysimplex.core import MinimizationResult
from pysimplex.minimizer import SimplexMinimizer

logger = logging.getLogger(__name__)


@dataclass
class LinearTransform:
    """
    Per-axis linear scaling transform.

    Attributes:
        scale: Scale factor per axis, shape (N,).
        offset: Offset per axis, shape (N,).
    """
    scale: NDArray[np.float64]
    offset: NDArray[np.float64]

    def __post_init__(self) -> None:
        self.scale = np.atleast_1d(np.asarray(self.scale, dtype=float))
        self.offset = np.atleast_1d(np.asarray(self.offset, dtype=float))
        if self.scale.shape != self.offset.shape:
            raise ValueError(
                f"scale shape {self.scale.shape} does not match "
                f"offset shape {self.offset.shape}"
            )

    @property
    def dimension(self) -> int:
        return self.scale.shape[0]

    @classmethod
    def identity(cls, dimension: int) -> "LinearTransform":
        return cls(scale=np.ones(dimension), offset=np.zeros(dimension))

    def apply(self, points: ArrayLike) -> NDArray[np.float64]:
        """Transform points of shape (M, N) or (N,)."""
        return np.asarray(points, dtype=float) * self.scale + self.offset

    def inverse(self) -> "LinearTransform":
        """
        Inverse transform.

        Raises:
            ValueError: If any scale factor is zero.
        """
        if np.any(self.scale == 0.0):
            raise ValueError("Cannot invert a transform with a zero scale factor")
        return LinearTransform(scale=1.0 / self.scale, offset=-self.offset / self.scale)

    def to_vector(self) -> NDArray[np.float64]:
        """Flatten to [scale..., offset...]."""
        return np.concatenate([self.scale, self.offset])

    @classmethod
    def from_vector(cls, vector: ArrayLike) -> "LinearTransform":
        vector = np.asarray(vector, dtype=float)
        if vector.ndim != 1 or vector.shape[0] % 2:
            raise ValueError(
                f"Parameter vector must be 1-D with even length, got shape {vector.shape}"
            )
        n = vector.shape[0] // 2
        return cls(scale=vector[:n], offset=vector[n:])


def _as_points(points: ArrayLike) -> NDArray[np.float64]:
    arr = np.asarray(points, dtype=float)
    if arr.ndim == 1:
        arr = arr[:, np.newaxis]
    return arr


def fit_linear_transform(
    source: ArrayLike,
    target: ArrayLike,
    minimizer: Optional[SimplexMinimizer] = None,
    initial_size: float = 1.0,
    initial: Optional[LinearTransform] = None,
) -> Tuple[LinearTransform, MinimizationResult]:
    """
    Fit a LinearTransform mapping `source` points onto `target` points.

    Minimizes the sum of squared residuals |apply(source) - target|^2.

    Args:
        source: Points of shape (M, N), or (M,) for one axis.
        target: Matching points, same shape as source.
        minimizer: Minimizer to use (default: SimplexMinimizer(max_steps=5000)).
        initial_size: Initial simplex size in parameter space.
        initial: Starting transform (default: identity).

    Returns:
        Tuple of (fitted transform, minimization result).

    Raises:
        ValueError: If source and target shapes differ or are empty.
    """
    src = _as_points(source)
    dst = _as_points(target)
    if src.shape != dst.shape:
        raise ValueError(
            f"source shape {src.shape} does not match target shape {dst.shape}"
        )
    if src.shape[0] == 0:
        raise ValueError("At least one point pair is required")

    if minimizer is None:
        minimizer = SimplexMinimizer(max_steps=5000)
    if initial is None:
        initial = LinearTransform.identity(src.shape[1])

    def residual(params: NDArray[np.float64]) -> float:
        transform = LinearTransform.from_vector(params)
        return float(np.sum((transform.apply(src) - dst) ** 2))

    result = minimizer.run(residual, initial.to_vector(), initial_size)
    fitted = LinearTransform.from_vector(result.x)
    logger.debug(
        "Fitted linear transform on %d points: residual=%g, %s",
        src.shape[0], result.fun, result.message,
    )
    return fitted, result
