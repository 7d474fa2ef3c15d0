"""
Bézier basis and operator matrices.

Computes the Bernstein basis used for fitting together with the derivative,
degree-elevation and power-basis conversion matrices, without building a
curve object first. Degree-only matrices are cached per degree; the cached
arrays are read-only and shared between callers, and the least recently
used entry is evicted once the cache holds constants.MATRIX_CACHE_SIZE
matrices.
"""

import logging
from functools import lru_cache
from typing import Callable, Dict, Tuple

import numpy as np
from scipy.special import comb

from . import constants

logger = logging.getLogger(__name__)

# Cache storage, keyed by (matrix type, degree), in least- to most-recently
# used order
_MATRIX_CACHE: Dict[Tuple[str, int], np.ndarray] = {}


def _generate_cache_key(matrix_type: str, degree: int) -> Tuple[str, int]:
    """Build a cache key."""
    return (matrix_type, degree)


def _cached(matrix_type: str, degree: int, build: Callable[[], np.ndarray]) -> np.ndarray:
    cache_key = _generate_cache_key(matrix_type, degree)
    if cache_key in _MATRIX_CACHE:
        # Re-insert so eviction order tracks the most recent use
        matrix = _MATRIX_CACHE[cache_key] = _MATRIX_CACHE.pop(cache_key)
        return matrix

    logger.debug("matrix cache miss: %s", cache_key)
    matrix = build()
    matrix.flags.writeable = False
    while _MATRIX_CACHE and len(_MATRIX_CACHE) >= constants.MATRIX_CACHE_SIZE:
        _MATRIX_CACHE.pop(next(iter(_MATRIX_CACHE)))
    _MATRIX_CACHE[cache_key] = matrix
    return matrix


@lru_cache(maxsize=1024)
def _compute_binomial_coefficient(n: int, k: int) -> float:
    """Binomial coefficient C(n, k) (0 outside 0 <= k <= n)."""
    if k > n or k < 0:
        return 0.0
    return float(comb(n, k, exact=True))


def get_binomial_row(degree: int) -> np.ndarray:
    """
    Binomial coefficients C(degree, k) for k = 0..degree.

    Returns:
        np.ndarray: shape (degree+1,)
    """
    return _cached(
        "binomial", degree,
        lambda: np.array([_compute_binomial_coefficient(degree, k) for k in range(degree + 1)])
    )


def bernstein_matrix(degree: int, t) -> np.ndarray:
    """
    Evaluate the Bernstein basis of the given degree at each parameter.

    B[i, k] = C(degree, k) * t_i^k * (1 - t_i)^(degree - k)

    Args:
        degree (int): Bézier curve degree
        t: Parameter values, scalar or sequence of length m

    Returns:
        np.ndarray: Basis matrix, shape (m, degree+1)
    """
    if degree < 0:
        raise ValueError(f"degree must be non-negative, got {degree}")
    t = np.atleast_1d(np.asarray(t, dtype=float))[:, np.newaxis]
    k = np.arange(degree + 1)
    return get_binomial_row(degree) * t ** k * (1 - t) ** (degree - k)


def _first_derivative_matrix(degree: int) -> np.ndarray:
    # [D]_i,j = N x { -1 if j=i, 1 if j=i+1, 0 otherwise }
    N = degree
    D = np.zeros((N, N + 1))
    for i in range(N):
        D[i, i] = -N
        D[i, i + 1] = N
    return D


def get_derivative_matrix(degree: int, order: int = 1) -> np.ndarray:
    """
    Matrix mapping control points of a degree-N curve to the control points
    of its order-th derivative (hodograph).

    Args:
        degree (int): Bézier curve degree
        order (int): Derivative order (default 1)

    Returns:
        np.ndarray: shape ((degree-order+1), (degree+1)); a single zero row
        when order exceeds the degree
    """
    if order < 0:
        raise ValueError(f"derivative order must be non-negative, got {order}")

    def build():
        if order > degree:
            # Derivatives beyond the degree vanish
            return np.zeros((1, degree + 1))
        D = np.eye(degree + 1)
        for k in range(order):
            D = _first_derivative_matrix(degree - k) @ D
        return D

    return _cached(f"derivative_{order}", degree, build)


def get_elevation_matrix(from_degree: int, to_degree: int) -> np.ndarray:
    """
    Degree elevation matrix.

    Args:
        from_degree (int): Original degree
        to_degree (int): Target degree

    Returns:
        np.ndarray: shape ((to_degree+1), (from_degree+1))
    """
    if to_degree < from_degree:
        raise ValueError("target degree must be greater than or equal to the original degree")

    def build():
        n = from_degree
        m = to_degree
        E = np.zeros((m + 1, n + 1))
        for i in range(m + 1):
            for j in range(n + 1):
                if j <= i <= j + (m - n):
                    numerator = _compute_binomial_coefficient(n, j) * _compute_binomial_coefficient(m - n, i - j)
                    denominator = _compute_binomial_coefficient(m, i)
                    E[i, j] = numerator / denominator
        return E

    return _cached(f"elevation_to_{to_degree}", from_degree, build)


def get_power_basis_matrix(degree: int) -> np.ndarray:
    """
    Matrix M converting Bernstein control points to power-basis coefficients.

    For control points P of shape (N+1, d), A = M @ P gives coefficients with
    curve(t) = sum_j A[j] * t^j, where

        M[j, k] = C(N, j) * C(j, k) * (-1)^(j-k)   for k <= j

    Returns:
        np.ndarray: shape ((degree+1), (degree+1)), lower triangular
    """
    def build():
        N = degree
        M = np.zeros((N + 1, N + 1))
        for j in range(N + 1):
            for k in range(j + 1):
                sign = -1.0 if (j - k) % 2 else 1.0
                M[j, k] = sign * _compute_binomial_coefficient(N, j) * _compute_binomial_coefficient(j, k)
        return M

    return _cached("power_basis", degree, build)


def clear_matrix_cache():
    """Empty the matrix cache."""
    _MATRIX_CACHE.clear()
    _compute_binomial_coefficient.cache_clear()


def get_cache_info() -> dict:
    """Return the number of cached matrices and their keys."""
    return {
        'cached_matrices': len(_MATRIX_CACHE),
        'cache_keys': list(_MATRIX_CACHE.keys())
    }
