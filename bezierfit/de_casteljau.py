"""
De Casteljau evaluation and subdivision.
"""

import numpy as np


def de_casteljau(control_points, t):
    """
    Evaluate a Bézier curve at every parameter in t by repeated linear
    interpolation of the control polygon.

    Each parameter is reduced independently, so a row of the result does not
    depend on the other parameters passed in the same call.

    Args:
        control_points: (N+1, d) array
        t: (m,) array of parameters; values outside [0, 1] extrapolate

    Returns:
        np.ndarray: (m, d) array of curve points
    """
    P = np.asarray(control_points, dtype=float)
    t = np.asarray(t, dtype=float).reshape(-1, 1, 1)
    W = np.broadcast_to(P, (t.shape[0],) + P.shape)
    for _ in range(P.shape[0] - 1):
        W = (1 - t) * W[:, :-1] + t * W[:, 1:]
    return np.array(W[:, 0])


def de_casteljau_split_matrices(N, tau):
    """
    Compute subdivision matrices S_left and S_right.

    S_left @ P and S_right @ P are the control points of the pieces of the
    degree-N curve P over [0, tau] and [tau, 1]. Running the reduction on the
    identity gives the weights of every control point at once.
    """
    W = np.eye(N + 1)
    left = [W[0]]
    right = [W[-1]]

    for _ in range(N):
        W = (1 - tau) * W[:-1] + tau * W[1:]
        left.append(W[0])
        right.append(W[-1])

    S_left = np.array(left)
    S_right = np.array(right[::-1])
    return S_left, S_right
