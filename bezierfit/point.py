"""
2D point primitive and conversion of point sequences to coordinate arrays.
"""

import math
from typing import NamedTuple, Sequence, Union

import numpy as np


class Point(NamedTuple):
    """Immutable (x, y) coordinate pair with componentwise arithmetic."""

    x: float
    y: float

    def __add__(self, other):
        return Point(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Point(self.x - other[0], self.y - other[1])

    def __mul__(self, scalar):
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Point(-self.x, -self.y)

    def dot(self, other) -> float:
        return self.x * other[0] + self.y * other[1]

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def lerp(self, other, alpha: float) -> 'Point':
        """Linear interpolation: (1 - alpha) * self + alpha * other."""
        return self * (1 - alpha) + Point(*other) * alpha


PointVector = Union[Sequence[Point], Sequence[Sequence[float]], np.ndarray]


def as_point_vector(points: PointVector) -> np.ndarray:
    """
    Convert a sequence of points to a float array of shape (n, 2).

    Args:
        points: Points, (x, y) pairs or an (n, 2) array

    Returns:
        np.ndarray: New (n, 2) array of float64 coordinates
    """
    P = np.array(points, dtype=float)
    if P.ndim != 2 or P.shape[1] != 2:
        raise ValueError(f"points must have shape (n, 2), got {P.shape}")
    if P.shape[0] == 0:
        raise ValueError("at least one point is required")
    return P
