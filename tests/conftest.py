"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def linear_data(rng):
    """Noise-free linear data: y = 0.5 + X @ [1, -2, 0.5]."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    w_true = np.array([0.5, 1.0, -2.0, 0.5])
    y = w_true[0] + X @ w_true[1:]
    return X, y, w_true


@pytest.fixture
def binary_data(rng):
    """Overlapping two-class data drawn from a logistic model."""
    n = 400
    X = rng.standard_normal((n, 2))
    eta = -0.5 + X @ np.array([2.0, -1.0])
    y = (rng.uniform(size=n) < 1.0 / (1.0 + np.exp(-eta))).astype(np.float64)
    return X, y


@pytest.fixture
def count_data(rng):
    """Poisson counts with log-mean 0.3 + X @ [0.4, -0.2]."""
    n = 500
    X = rng.standard_normal((n, 2))
    mu = np.exp(0.3 + X @ np.array([0.4, -0.2]))
    y = rng.poisson(mu).astype(np.float64)
    return X, y
