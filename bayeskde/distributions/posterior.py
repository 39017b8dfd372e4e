# distributions/posterior.py
from __future__ import annotations

import math

import numpy as np

from ..custom_types import Array, ArrayLike
from ..errors import InsufficientSamplesError
from ..array_backend.utils import _ensure_points, _ensure_vector
from ..linalg.matrix import Matrix2
from .kernels import Bandwidth, Kernel

__all__ = [
    "DEFAULT_LAMBDA",
    "BayesianPosterior",
    "likelihood_cv",
]

DEFAULT_LAMBDA = 1.0


class BayesianPosterior:
    """Unnormalized posterior over the lower-triangular entries of a bandwidth matrix.

    For ``B = [[b00, 0], [b10, b11]]`` the density is

    ``prod_k 1 / (1 + lam * b_k^2)  *  prod_i det(B) / (n - 1) * sum_{j != i} K(B (x_i - x_j))``

    i.e. a heavy-tailed prior on each free entry times a leave-one-out
    likelihood of the sample points. ``B`` plays the role of an inverse
    square root of the kernel covariance.

    The object is a short-lived view over the sample points; build a fresh
    one for each bandwidth selection.

    Args:
        points: Sample points, shape (n, 2).
        kernel: Kernel whose unit density scores the transformed displacements.
        lam: Prior strength.

    Raises:
        InsufficientSamplesError: If fewer than 2 points are given.
    """

    def __init__(self, points: ArrayLike, kernel: Kernel, *, lam: float = DEFAULT_LAMBDA):
        X = _ensure_points(points, dim=2, copy=False)
        if X.shape[0] < 2:
            raise InsufficientSamplesError(2, X.shape[0], "BayesianPosterior")
        self._X = X
        self._n = X.shape[0]
        self._kernel = kernel
        self.lam = float(lam)

    @property
    def points(self) -> Array:
        return self._X

    def prior_density(self, bij: float) -> float:
        return 1.0 / (1.0 + self.lam * bij * bij)

    def likelihood(self, i: int, b: Matrix2) -> float:
        """Leave-one-out likelihood of point `i` under transform `b`."""
        diffs = np.delete(self._X[i] - self._X, i, axis=0)  # (n-1, 2)
        v = float(np.sum(self._kernel.pdf(b.matmat(diffs))))
        return (v * b.det()) / (self._n - 1.0)

    def _likelihood_product(self, b: Matrix2) -> float:
        v = 1.0
        for i in range(self._n):
            v *= self.likelihood(i, b)
            if v == 0.0:
                return 0.0
        return v

    def density(self, params: ArrayLike) -> float:
        """Posterior density at ``(b00, b10, b11)``."""
        b00, b10, b11 = _ensure_vector(params, length=3, copy=False)
        v0 = self.prior_density(b00) * self.prior_density(b10) * self.prior_density(b11)
        v1 = self._likelihood_product(Matrix2.from_lower_triangular((b00, b10, b11)))
        return v0 * v1

    __call__ = density

    def density_matrix(self, b: Matrix2) -> float:
        """Posterior density evaluated directly on a matrix; ``b.b`` is ignored by the prior."""
        v0 = math.prod(self.prior_density(bij) for bij in b.lower_triangular())
        return v0 * self._likelihood_product(b)


def likelihood_cv(points: ArrayLike, kernel: Kernel, bandwidth: Bandwidth) -> float:
    """Leave-one-out cross-validated log likelihood of `points` at `bandwidth`.

    Returns ``sum_i log( sum_{j != i} K_H(x_i - x_j) / (n - 1) )``; ``-inf``
    when some point gets zero density from all the others.

    Raises:
        InsufficientSamplesError: If fewer than 2 points are given.
    """
    X = _ensure_points(points, copy=False)
    n = X.shape[0]
    if n < 2:
        raise InsufficientSamplesError(2, n, "likelihood_cv")

    likelihood = 0.0
    for i in range(n):
        diffs = np.delete(X[i] - X, i, axis=0)
        v = float(np.sum(kernel.density(diffs, bandwidth)))
        if v == 0.0:
            return -math.inf
        likelihood += math.log(v / (n - 1.0))
    return likelihood
