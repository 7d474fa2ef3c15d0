"""
Bézier curve fitting library

Planar Bézier curves of arbitrary degree, stored as an ordered sequence of
control points.

Main features:
- Curve evaluation at single parameters or batches (De Casteljau)
- Least-squares fitting of a curve to sampled points
- Blending of two curves of the same degree
- Uniform resampling and nearest-point projection
- Derivative (hodograph), degree elevation and subdivision
- Cached Bernstein/derivative/elevation matrices

Example:
    >>> import numpy as np
    >>> from bezierfit import Curve
    >>>
    >>> xs = np.linspace(0, 5, 100)
    >>> curve = Curve.fit(np.column_stack([xs, np.sin(xs)]), degree=4)
    >>>
    >>> points = curve.sample(50)
    >>> t = curve.project_point((2.0, 1.0))
    >>> closest = curve.value_at(t)
"""

__version__ = "1.0.0"

from .curve import Curve
from .point import Point, PointVector, as_point_vector
from .matrices import (
    bernstein_matrix,
    get_derivative_matrix,
    get_elevation_matrix,
    get_power_basis_matrix,
    clear_matrix_cache,
    get_cache_info
)
from .de_casteljau import de_casteljau, de_casteljau_split_matrices

__all__ = [
    'Curve',
    'Point',
    'PointVector',
    'as_point_vector',
    'bernstein_matrix',
    'get_derivative_matrix',
    'get_elevation_matrix',
    'get_power_basis_matrix',
    'clear_matrix_cache',
    'get_cache_info',
    'de_casteljau',
    'de_casteljau_split_matrices'
]
