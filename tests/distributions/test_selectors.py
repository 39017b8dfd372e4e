import numpy as np
import pytest

from bayeskde.core.fundamental import stddev
from bayeskde.core.range import Box
from bayeskde.distributions.kernels import StandardNormalKernel
from bayeskde.distributions.selectors import BayesianSelector, FixedBandwidth, SilvermanRot
from bayeskde.errors import (
    DegenerateSamplesError,
    InsufficientSamplesError,
    InvalidBandwidthError,
    InvalidInputError,
)
from bayeskde.linalg.matrix import Matrix2


@pytest.fixture
def kernel():
    return StandardNormalKernel()


# ------------------------------- SilvermanRot --------------------------------

def test_silverman_1d(kernel, normal_samples_1d):
    h = SilvermanRot().select_bandwidth(kernel, normal_samples_1d)
    n = normal_samples_1d.size
    assert h == pytest.approx(1.06 * np.std(normal_samples_1d) * n ** -0.2)
    assert h > 0.0


def test_silverman_2d(kernel, scenario_points):
    H = SilvermanRot().select_bandwidth(kernel, scenario_points)
    a = 10 ** (-1.0 / 6.0)
    assert isinstance(H, Matrix2)
    assert H.b == 0.0 and H.c == 0.0
    assert H.a == pytest.approx(a * stddev(scenario_points[:, 0]))
    assert H.d == pytest.approx(a * stddev(scenario_points[:, 1]))


def test_silverman_positive_for_random_sets(kernel, rng):
    for n in (2, 3, 10, 50):
        pts = rng.uniform(-5.0, 5.0, size=(n, 2))
        H = SilvermanRot().select_bandwidth(kernel, pts)
        assert H.a > 0.0 and H.d > 0.0 and H.det() > 0.0


def test_silverman_needs_two_points(kernel):
    with pytest.raises(InsufficientSamplesError):
        SilvermanRot().select_bandwidth(kernel, [1.0])
    with pytest.raises(InsufficientSamplesError):
        SilvermanRot().select_bandwidth(kernel, np.empty((0, 2)))


def test_silverman_degenerate(kernel):
    with pytest.raises(DegenerateSamplesError):
        SilvermanRot().select_bandwidth(kernel, [2.0, 2.0, 2.0])
    with pytest.raises(DegenerateSamplesError):
        SilvermanRot().select_bandwidth(kernel, [[0.0, 1.0], [1.0, 1.0]])


# ------------------------------- FixedBandwidth -------------------------------

def test_fixed_bandwidth(kernel, scenario_points):
    H = Matrix2.diagonal(0.1, 0.2)
    sel = FixedBandwidth(H)
    assert sel.select_bandwidth(kernel, scenario_points) is H
    assert FixedBandwidth(0.3).select_bandwidth(kernel, [0.0, 1.0]) == 0.3


def test_fixed_bandwidth_validation(kernel, scenario_points):
    with pytest.raises(InvalidBandwidthError):
        FixedBandwidth(0.0)
    with pytest.raises(InvalidBandwidthError):
        FixedBandwidth(Matrix2.diagonal(1.0, -1.0))
    with pytest.raises(InvalidInputError):
        FixedBandwidth(0.3).select_bandwidth(kernel, scenario_points)


# ------------------------------- BayesianSelector -----------------------------

def test_bayesian_returns_covariance(kernel, scenario_points):
    sel = BayesianSelector(iterations=60, rng=np.random.default_rng(0))
    H = sel.select_bandwidth(kernel, scenario_points)
    assert isinstance(H, Matrix2)
    assert H.det() > 0.0
    assert H.a > 0.0 and H.d > 0.0
    assert H.b == pytest.approx(H.c)
    # H is L @ L.T, so it must admit a Cholesky factor
    H.cholesky()


def test_bayesian_reproducible_with_seed(kernel, scenario_points):
    a = BayesianSelector(iterations=40, rng=np.random.default_rng(3)).select_bandwidth(kernel, scenario_points)
    b = BayesianSelector(iterations=40, rng=np.random.default_rng(3)).select_bandwidth(kernel, scenario_points)
    assert a == b


def test_bayesian_parameter_box(scenario_points):
    sel = BayesianSelector()
    box = sel.parameter_box(scenario_points)
    w = max(np.ptp(scenario_points[:, 0]), np.ptp(scenario_points[:, 1]))
    assert np.allclose(box.low, 0.0)
    assert np.allclose(box.high, w)

    sel.set_range(Box([0.0, 0.0], [2.0, 3.0]))
    assert np.allclose(sel.parameter_box(scenario_points).high, 3.0)


def test_bayesian_rejects_bad_input(kernel, scenario_points):
    sel = BayesianSelector(iterations=10)
    with pytest.raises(InsufficientSamplesError):
        sel.select_bandwidth(kernel, scenario_points[:1])
    with pytest.raises(InvalidInputError):
        sel.select_bandwidth(kernel, [0.1, 0.5, 0.9])
    with pytest.raises(DegenerateSamplesError):
        sel.select_bandwidth(kernel, [[0.5, 0.5], [0.5, 0.5]])
    with pytest.raises(InvalidInputError):
        BayesianSelector(Box([0.0], [1.0]))
    with pytest.raises(InvalidInputError):
        BayesianSelector(iterations=0)
