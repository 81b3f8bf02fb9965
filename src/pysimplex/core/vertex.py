"""
Vertex and ValuedVertex value objects.

A Vertex is a point in the N-dimensional search space. It provides the small
set of geometric primitives the simplex minimizer needs: offsetting a single
coordinate, averaging a face, moving relative to a face center, and a
size-convergence test over a whole simplex.
"""
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray


class Vertex:
    """
    Immutable point in an N-dimensional search space.

    Coordinates are stored as a read-only float64 array, so objective
    functions cannot change a vertex behind the minimizer's back.

    Attributes:
        coords: Read-only coordinate array of shape (N,).

    Example:
        >>> v = Vertex([0.0, 1.0])
        >>> v.moved(0, 0.5)
        Vertex([0.5, 1.0])
    """

    __slots__ = ("_coords",)

    def __init__(self, coords: ArrayLike) -> None:
        """
        Initialize vertex.

        Args:
            coords: Sequence of coordinates (scalars are treated as 1-D).

        Raises:
            ValueError: If coords is not one-dimensional.
        """
        arr = np.array(coords, dtype=float)
        if arr.ndim == 0:
            arr = arr.reshape(1)
        if arr.ndim != 1:
            raise ValueError(f"Vertex coordinates must be 1-D, got shape {arr.shape}")
        arr.flags.writeable = False
        self._coords = arr

    @property
    def coords(self) -> NDArray[np.float64]:
        return self._coords

    @property
    def dimension(self) -> int:
        return self._coords.shape[0]

    def moved(self, axis: int, delta: float) -> "Vertex":
        """Return a copy with coordinate `axis` offset by `delta`."""
        coords = self._coords.copy()
        coords[axis] += delta
        return Vertex(coords)

    def towards(self, face_center: "Vertex", factor: float) -> "Vertex":
        """
        Move this vertex relative to a face center.

        result = face_center + factor * (face_center - self)

        factor == 1 is a reflection through the face, factor > 1 an
        expansion, 0 < factor < 1 a contraction on the far side of the face
        and factor < 0 a contraction between the face and this vertex.
        """
        center = face_center.coords
        return Vertex(center + factor * (center - self._coords))

    @staticmethod
    def face_center(vertices: Sequence["Vertex"], exclude: int) -> "Vertex":
        """Centroid of all vertices except the one at index `exclude`."""
        others = [v.coords for i, v in enumerate(vertices) if i != exclude]
        return Vertex(np.mean(others, axis=0))

    @staticmethod
    def is_too_small(vertices: Sequence["Vertex"], tolerance: float) -> bool:
        """
        Check whether a simplex has collapsed below `tolerance`.

        The simplex is too small once the coordinate spread (max - min)
        along every axis is no larger than the tolerance.
        """
        stacked = np.stack([v.coords for v in vertices])
        spread = np.ptp(stacked, axis=0)
        return bool(np.all(spread <= tolerance))

    def __array__(self, dtype=None, copy=None) -> NDArray[np.float64]:
        if dtype is None:
            return self._coords.copy()
        return self._coords.astype(dtype)

    def __len__(self) -> int:
        return self.dimension

    def __getitem__(self, index):
        return self._coords[index]

    def __iter__(self):
        return iter(self._coords.tolist())

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return np.array_equal(self._coords, other._coords)

    def __hash__(self) -> int:
        return hash(self._coords.tobytes())

    def __repr__(self) -> str:
        return f"Vertex({self._coords.tolist()})"


@dataclass(frozen=True)
class ValuedVertex:
    """
    A vertex paired with its objective value.

    Attributes:
        vertex: The point in search space.
        value: Objective function value at `vertex`. Only `<=` is used to
            compare values, so any totally ordered type works.
    """
    vertex: Vertex
    value: Any

    @property
    def coords(self) -> NDArray[np.float64]:
        """Coordinates of the vertex."""
        return self.vertex.coords
