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
def small_sample():
    """Eleven observations used throughout the likelihood and MLE tests."""
    return np.array([-0.5, 1.0, 0.2, -0.3, 0.5, 0.89, -0.11, -0.71, 1.0, -1.3, 0.84])


@pytest.fixture
def linear_data(rng):
    """(x, y) from y = 2 + 3x + N(0, 0.25)."""
    n = 200
    x = rng.uniform(0.0, 10.0, n)
    y = 2.0 + 3.0 * x + rng.normal(0.0, 0.5, n)
    return x, y
