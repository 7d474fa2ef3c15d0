"""
Planar Bézier curve of arbitrary degree: evaluation, least-squares fitting,
blending, sampling and nearest-point projection.
"""

import logging
import warnings
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.polynomial import polynomial as poly
from scipy.optimize import brentq

from . import constants
from .de_casteljau import de_casteljau, de_casteljau_split_matrices
from .matrices import (
    bernstein_matrix,
    get_derivative_matrix,
    get_elevation_matrix,
    get_power_basis_matrix,
)
from .point import Point, PointVector, as_point_vector

logger = logging.getLogger(__name__)


class Curve:
    """
    Bézier curve defined by an ordered sequence of 2D control points.

    A curve never changes after construction: fit, blend, derivative,
    elevate_degree and split all return new curves.
    """

    def __init__(self, control_points: PointVector):
        """
        Args:
            control_points: (N+1) points, as Points, (x, y) pairs or an
                (N+1, 2) array. N is the degree of the curve.
        """
        P = as_point_vector(control_points)
        P.flags.writeable = False
        self._control_points = P

    @classmethod
    def fit(cls, data, degree: int) -> 'Curve':
        """
        Least-squares fit of a degree-N curve to sampled points.

        Sample i is assigned the parameter t_i = i / (n_samples - 1), and the
        control points X minimize ||B X - data|| where B is the Bernstein
        basis evaluated at those parameters.

        Args:
            data: (n_samples, 2) array of sample points, in curve order
            degree: degree of the fitted curve

        Returns:
            Curve: the fitted curve

        Raises:
            ValueError: if data is not (n, 2), degree is not a non-negative
                integer, or there are fewer than degree + 2 samples.
        """
        Y = np.asarray(data, dtype=float)
        if Y.ndim != 2 or Y.shape[1] != 2:
            raise ValueError(f"data must have shape (n, 2), got {Y.shape}")
        if int(degree) != degree:
            raise ValueError(f"degree must be an integer, got {degree}")
        degree = int(degree)
        if degree < 0:
            raise ValueError(f"degree must be non-negative, got {degree}")
        n_samples = Y.shape[0]
        if n_samples < degree + 2:
            raise ValueError(
                f"fitting a degree {degree} curve needs at least {degree + 2} samples, got {n_samples}"
            )

        ts = np.linspace(0, 1, n_samples)
        B = bernstein_matrix(degree, ts)

        # SVD-based solve; the normal equations are never formed
        X, residuals, rank, singular_values = np.linalg.lstsq(B, Y, rcond=None)

        if singular_values[-1] > 0:
            cond = singular_values[0] / singular_values[-1]
        else:
            cond = np.inf
        if cond > constants.ILL_CONDITIONED:
            warnings.warn(
                f"Bernstein basis is ill-conditioned (cond={cond:.2e}, rank={rank}); "
                f"fitted control points may be inaccurate.",
                RuntimeWarning,
                stacklevel=2,
            )

        logger.debug("fit degree=%d to %d samples: cond=%.3e residuals=%s",
                     degree, n_samples, cond, residuals)
        return cls(X)

    @property
    def degree(self) -> int:
        return self._control_points.shape[0] - 1

    @property
    def control_points(self) -> np.ndarray:
        """Read-only (N+1, 2) view of the control points."""
        return self._control_points

    def control_points_matrix(self) -> np.ndarray:
        """Return a copy of the control points as an (N+1, 2) array."""
        return self._control_points.copy()

    def value_at(self, t: Union[float, Sequence[float], np.ndarray]):
        """
        Evaluate the curve.

        Parameters are not clamped: values outside [0, 1] extrapolate the
        curve polynomial.

        Args:
            t: a single parameter, or a sequence of m parameters

        Returns:
            Point for a scalar t; otherwise an (m, 2) array with one row per
            parameter, identical to evaluating each parameter on its own.
        """
        if np.ndim(t) == 0:
            x, y = de_casteljau(self._control_points, [t])[0]
            return Point(float(x), float(y))
        return de_casteljau(self._control_points, np.asarray(t, dtype=float).ravel())

    def sample(self, n: int) -> np.ndarray:
        """
        Evaluate the curve at n evenly spaced parameters from 0 to 1 inclusive.

        Returns:
            np.ndarray: (n, 2) array; the first and last rows are exactly
            value_at(0) and value_at(1).
        """
        if n < 2:
            raise ValueError(f"sample count must be at least 2, got {n}")
        return self.value_at(np.linspace(0, 1, n))

    def blend(self, other: 'Curve', alpha: float) -> 'Curve':
        """
        Interpolate control points with another curve of the same degree:
        (1 - alpha) * self + alpha * other.
        """
        if other.degree != self.degree:
            raise ValueError(
                f"cannot blend curves of degree {self.degree} and {other.degree}"
            )
        P = self._control_points
        Q = other._control_points
        return Curve((1 - alpha) * P + alpha * Q)

    def project_point(self, point, clamp: bool = True) -> float:
        """
        Find the parameter of the curve point nearest to the given point.

        Args:
            point: query point (x, y)
            clamp: if True, restrict the result to [0, 1], i.e. the finite
                curve segment; otherwise search the whole polynomial extension.

        Returns:
            float: parameter t minimizing |value_at(t) - point|
        """
        q = np.asarray(point, dtype=float)
        if q.shape != (2,):
            raise ValueError(f"point must have two coordinates, got shape {q.shape}")

        if self.degree == 0:
            return 0.0
        if self.degree == 1:
            return self._project_linear(q, clamp)

        if clamp:
            lo, hi = 0.0, 1.0
        else:
            lo, hi = -constants.UNCLAMPED_MARGIN, 1.0 + constants.UNCLAMPED_MARGIN
        # Endpoints go first so ties, e.g. on a constant curve, resolve to them
        candidates = [[0.0, 1.0], self._bracketed_minima(q, lo, hi)]
        if not clamp:
            # Minima far outside the grid window of a low-degree curve
            candidates.append(self._polish(q, self._power_basis_roots(q)))
        candidates = np.concatenate(candidates)
        if clamp:
            candidates = candidates[(candidates >= 0) & (candidates <= 1)]

        with np.errstate(over='ignore', invalid='ignore'):
            points = de_casteljau(self._control_points, candidates)
            distances = ((points - q) ** 2).sum(axis=1)
        # Spurious far-off roots can overflow
        distances[~np.isfinite(distances)] = np.inf
        best = candidates[np.argmin(distances)]
        logger.debug("projection: %d candidates, t=%r", len(candidates), best)
        return float(best)

    def _project_linear(self, q: np.ndarray, clamp: bool) -> float:
        P0, P1 = self._control_points
        d = P1 - P0
        length_squared = float(np.dot(d, d))
        if length_squared == 0:
            return 0.0
        t = float(np.dot(q - P0, d)) / length_squared
        if clamp:
            t = min(max(t, 0.0), 1.0)
        return t

    def _bracketed_minima(self, q: np.ndarray, lo: float, hi: float) -> np.ndarray:
        """
        Local minima of the distance on [lo, hi].

        The distance slope is sampled on a grid in Bernstein form; every
        change of sign from negative to non-negative brackets a minimum,
        which is then located with brentq. The closest grid point is kept
        too.
        """
        n_grid = int(np.ceil(constants.PROJECTION_GRID_DENSITY * self.degree * (hi - lo))) + 1
        ts = np.linspace(lo, hi, n_grid)
        velocity = self.derivative().control_points

        def slope(t):
            # (curve(t) - q) . curve'(t), half the derivative of the squared distance
            offsets = de_casteljau(self._control_points, t) - q
            return (offsets * de_casteljau(velocity, t)).sum(axis=1)

        with np.errstate(over='ignore', invalid='ignore'):
            slopes = slope(ts)
            distances = ((de_casteljau(self._control_points, ts) - q) ** 2).sum(axis=1)

        distances[~np.isfinite(distances)] = np.inf
        minima = [ts[np.argmin(distances)]]
        for i in np.nonzero((slopes[:-1] < 0) & (slopes[1:] >= 0))[0]:
            minima.append(brentq(lambda t: slope([t])[0], ts[i], ts[i + 1]))
        return np.array(minima)

    def _polish(self, q: np.ndarray, ts: np.ndarray) -> np.ndarray:
        """Newton steps on the distance slope, evaluated in Bernstein form."""
        velocity = self.derivative()
        acceleration = velocity.derivative()
        with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
            for _ in range(constants.NEWTON_STEPS):
                offsets = de_casteljau(self._control_points, ts) - q
                v = de_casteljau(velocity.control_points, ts)
                a = de_casteljau(acceleration.control_points, ts)
                slope = (offsets * v).sum(axis=1)
                curvature = (v * v).sum(axis=1) + (offsets * a).sum(axis=1)
                step = np.where(curvature > 0, slope / curvature, 0.0)
                ts = ts - np.where(np.isfinite(step), step, 0.0)
        return ts[np.isfinite(ts)]

    def _power_basis_roots(self, q: np.ndarray) -> np.ndarray:
        """Approximate roots of d/dt |curve(t) - q|^2 from power-basis coefficients."""
        A = get_power_basis_matrix(self.degree) @ self._control_points
        A[0] -= q
        dist_squared = poly.polyadd(poly.polymul(A[:, 0], A[:, 0]),
                                    poly.polymul(A[:, 1], A[:, 1]))
        ddist = poly.polyder(dist_squared)
        ddist = poly.polytrim(ddist, tol=constants.COEFF_ZERO_TOL * np.abs(ddist).max())
        if len(ddist) < 2:
            return np.array([])
        # Near-double roots can come back as complex pairs; their real parts
        # are kept as candidates and ranked by true distance
        return poly.polyroots(ddist).real

    def derivative(self, order: int = 1) -> 'Curve':
        """
        Hodograph: the curve of the order-th derivative, of degree N - order.

        Derivatives of order greater than the degree are the constant zero
        curve.
        """
        D = get_derivative_matrix(self.degree, order)
        return Curve(D @ self._control_points)

    def elevate_degree(self, times: int = 1) -> 'Curve':
        """Return the same curve expressed with degree N + times."""
        if times < 0:
            raise ValueError(f"cannot elevate by a negative number of steps ({times})")
        E = get_elevation_matrix(self.degree, self.degree + times)
        return Curve(E @ self._control_points)

    def split(self, t: float = 0.5) -> Tuple['Curve', 'Curve']:
        """Subdivide at t into the pieces covering [0, t] and [t, 1]."""
        if not 0 < t < 1:
            raise ValueError(f"split parameter must lie strictly between 0 and 1, got {t}")
        S_left, S_right = de_casteljau_split_matrices(self.degree, t)
        return Curve(S_left @ self._control_points), Curve(S_right @ self._control_points)

    def __len__(self) -> int:
        return self._control_points.shape[0]

    def __repr__(self) -> str:
        return f"Curve(degree={self.degree}, control_points={self._control_points.tolist()})"
