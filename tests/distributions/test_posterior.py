import math

import numpy as np
import pytest

from bayeskde.distributions.kernels import StandardNormalKernel
from bayeskde.distributions.posterior import BayesianPosterior, likelihood_cv
from bayeskde.errors import InsufficientSamplesError
from bayeskde.linalg.matrix import Matrix2


@pytest.fixture
def kernel():
    return StandardNormalKernel()


def test_requires_two_points(kernel):
    with pytest.raises(InsufficientSamplesError):
        BayesianPosterior([[0.0, 0.0]], kernel)


def test_prior_density(kernel):
    post = BayesianPosterior([[0.0, 0.0], [1.0, 0.0]], kernel, lam=2.0)
    assert post.prior_density(0.0) == 1.0
    assert post.prior_density(1.0) == pytest.approx(1.0 / 3.0)


def test_density_two_points(kernel):
    post = BayesianPosterior([[0.0, 0.0], [1.0, 0.0]], kernel)
    # each leave-one-out term is K((1, 0)) with det(B) = 1 and n - 1 = 1
    term = math.exp(-0.5) / (2.0 * math.pi)
    expected = 0.5 * 1.0 * 0.5 * term * term
    assert post.density((1.0, 0.0, 1.0)) == pytest.approx(expected)
    assert post((1.0, 0.0, 1.0)) == post.density((1.0, 0.0, 1.0))


def test_likelihood_scales_with_determinant(kernel):
    post = BayesianPosterior([[0.0, 0.0], [0.0, 0.0], [0.0, 0.0]], kernel)
    b = Matrix2.diagonal(2.0, 3.0)
    # all displacements are zero: K(0) summed over 2 neighbours, times det / (n - 1)
    assert post.likelihood(0, b) == pytest.approx(2.0 * (1.0 / (2.0 * math.pi)) * 6.0 / 2.0)


def test_density_matrix_agrees(kernel, scenario_points):
    post = BayesianPosterior(scenario_points, kernel)
    params = (0.8, 0.1, 1.2)
    assert post.density_matrix(Matrix2.from_lower_triangular(params)) == pytest.approx(post.density(params))


def test_zero_likelihood_short_circuits(kernel):
    calls = []

    class CountingKernel(StandardNormalKernel):
        def unit_density(self, X):
            calls.append(X)
            return super().unit_density(X)

    pts = [[0.0, 0.0], [1000.0, 1000.0], [0.0, 1.0], [1.0, 0.0]]
    post = BayesianPosterior(pts, CountingKernel())
    assert post.density((1.0, 0.0, 1.0)) == 0.0
    # the far point is scored second and zeroes the product
    assert len(calls) == 2


def test_zero_diagonal_gives_zero_density(kernel, scenario_points):
    post = BayesianPosterior(scenario_points, kernel)
    assert post.density((0.0, 0.3, 1.0)) == 0.0


def test_likelihood_cv_1d(kernel):
    pts = np.array([0.0, 1.0])
    phi1 = math.exp(-0.5) / math.sqrt(2.0 * math.pi)
    assert likelihood_cv(pts, kernel, 1.0) == pytest.approx(2.0 * math.log(phi1))


def test_likelihood_cv_2d_prefers_reasonable_bandwidth(kernel, scenario_points):
    good = likelihood_cv(scenario_points, kernel, Matrix2.diagonal(0.03, 0.03))
    too_wide = likelihood_cv(scenario_points, kernel, Matrix2.diagonal(50.0, 50.0))
    assert good > too_wide


def test_likelihood_cv_requires_two_points(kernel):
    with pytest.raises(InsufficientSamplesError):
        likelihood_cv([0.5], kernel, 1.0)
