"""Shared test fixtures."""

import numpy as np
import pytest

from bezierfit import Curve

N_SAMPLES = 100


def generate_data(fn, n=N_SAMPLES):
    """Sample fn at n evenly spaced x over [0, 5] as an (n, 2) array."""
    xs = np.linspace(0, 5, n)
    ys = np.array([fn(x) for x in xs])
    return np.column_stack([xs, ys])


@pytest.fixture
def line_curve():
    return Curve([(0, 0), (0, 1)])


@pytest.fixture
def arch_curve():
    # x = 2t, y = 4t(1 - t)
    return Curve([(0, 0), (1, 2), (2, 0)])


@pytest.fixture
def sin_curve():
    return Curve.fit(generate_data(np.sin), 4)
