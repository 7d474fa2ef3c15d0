import numpy as np

from bezierfit import bernstein_matrix, de_casteljau, de_casteljau_split_matrices

CONTROL_POINTS = np.array([[0.0, 0.0], [1.0, 3.0], [3.0, -1.0], [4.0, 2.0]])


def test_matches_bernstein_sum():
    ts = np.linspace(-0.25, 1.25, 31)
    expected = bernstein_matrix(3, ts) @ CONTROL_POINTS
    np.testing.assert_allclose(de_casteljau(CONTROL_POINTS, ts), expected, atol=1e-12)


def test_rows_independent_of_batch():
    ts = np.linspace(0, 1, 50)
    batch = de_casteljau(CONTROL_POINTS, ts)
    for t, row in zip(ts, batch):
        np.testing.assert_array_equal(de_casteljau(CONTROL_POINTS, [t])[0], row)


def test_endpoints_exact():
    points = de_casteljau(CONTROL_POINTS, [0.0, 1.0])
    np.testing.assert_array_equal(points, CONTROL_POINTS[[0, -1]])


def test_split_matrices():
    tau = 0.4
    S_left, S_right = de_casteljau_split_matrices(3, tau)
    left = S_left @ CONTROL_POINTS
    right = S_right @ CONTROL_POINTS
    s = np.linspace(0, 1, 11)
    np.testing.assert_allclose(de_casteljau(left, s), de_casteljau(CONTROL_POINTS, tau * s), atol=1e-12)
    np.testing.assert_allclose(de_casteljau(right, s), de_casteljau(CONTROL_POINTS, tau + (1 - tau) * s), atol=1e-12)


def test_split_matrices_rows_sum_to_one():
    S_left, S_right = de_casteljau_split_matrices(5, 0.7)
    np.testing.assert_allclose(S_left.sum(axis=1), 1.0)
    np.testing.assert_allclose(S_right.sum(axis=1), 1.0)
