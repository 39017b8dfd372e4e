import pytest
import numpy as np


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def scenario_points():
    return np.array([
        [0.389, 0.828],
        [0.216, 0.340],
        [0.459, 0.558],
        [0.352, 0.192],
        [0.978, 0.609],
        [0.112, 0.513],
        [0.428, 0.763],
        [0.358, 0.610],
        [0.084, 0.413],
        [0.520, 0.963],
    ])


@pytest.fixture
def normal_samples_1d(rng):
    return rng.normal(loc=0.5, scale=2.0, size=200)


@pytest.fixture
def cov_matrix():
    return np.array([[2.0, 0.3], [0.3, 1.5]])
