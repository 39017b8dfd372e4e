import math

import numpy as np
import pytest
from scipy.stats import multivariate_normal, norm

from bayeskde.distributions.kernels import StandardNormalKernel, check_bandwidth
from bayeskde.errors import InvalidBandwidthError, InvalidInputError
from bayeskde.linalg.matrix import Matrix2


@pytest.fixture
def kernel():
    return StandardNormalKernel()


def test_unit_kernel_values(kernel):
    assert kernel.pdf(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))
    assert kernel.pdf((0.0, 0.0)) == pytest.approx(1.0 / (2.0 * math.pi))
    assert kernel((1.0, 2.0)) == pytest.approx(math.exp(-2.5) / (2.0 * math.pi))


def test_batch_evaluation(kernel):
    X = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, -2.0]])
    out = kernel.pdf(X)
    assert out.shape == (3,)
    np.testing.assert_allclose(out, multivariate_normal(mean=[0.0, 0.0]).pdf(X))

    xs = np.linspace(-3.0, 3.0, 7)
    np.testing.assert_allclose(kernel.pdf(xs), norm.pdf(xs))


def test_scalar_bandwidth(kernel):
    xs = np.linspace(-1.0, 1.0, 5)
    np.testing.assert_allclose(kernel.density(xs, 0.5), norm.pdf(xs, scale=0.5))
    assert kernel.density(0.3, 2.0) == pytest.approx(norm.pdf(0.3, scale=2.0))


def test_matrix_bandwidth_is_covariance(kernel, cov_matrix):
    H = Matrix2.from_array(cov_matrix)
    X = np.array([[0.5, -0.2], [1.0, 1.0], [-2.0, 0.3]])
    np.testing.assert_allclose(
        kernel.density(X, H),
        multivariate_normal(mean=[0.0, 0.0], cov=cov_matrix).pdf(X),
        rtol=1e-12,
    )


def test_identity_bandwidth_is_unit_kernel(kernel):
    v = (0.4, -1.1)
    assert kernel.density(v, Matrix2.identity()) == pytest.approx(kernel.pdf(v))
    assert kernel.density(v) == kernel.pdf(v)


def test_invalid_bandwidths(kernel):
    with pytest.raises(InvalidBandwidthError):
        kernel.density(0.1, 0.0)
    with pytest.raises(InvalidBandwidthError):
        kernel.density(0.1, -1.0)
    with pytest.raises(InvalidBandwidthError):
        kernel.density((0.1, 0.2), Matrix2((1.0, 2.0), (2.0, 4.0)))
    with pytest.raises(InvalidInputError):
        kernel.density([[0.1, 0.2]], 0.5)
    with pytest.raises(InvalidInputError):
        kernel.density([0.1, 0.2, 0.3], Matrix2.identity())
    with pytest.raises(InvalidInputError):
        check_bandwidth(Matrix2.identity(), 1)


def test_kernel_is_nonnegative(kernel, rng):
    X = rng.normal(scale=10.0, size=(100, 2))
    assert np.all(kernel.density(X, Matrix2.diagonal(0.1, 0.2)) >= 0.0)


def test_two_one_dimensional_displacements(kernel):
    xs = np.array([0.1, 0.2])
    out = kernel.density(xs, 1.0)
    assert out.shape == (2,)
    np.testing.assert_allclose(out, norm.pdf(xs))
    np.testing.assert_allclose(kernel.density(xs, 0.5), norm.pdf(xs, scale=0.5))

    np.testing.assert_allclose(kernel.pdf(xs, dim=1), norm.pdf(xs))
    assert kernel.pdf(xs) == pytest.approx(multivariate_normal(mean=[0.0, 0.0]).pdf(xs))
    with pytest.raises(InvalidInputError):
        kernel.pdf(xs, dim=3)
