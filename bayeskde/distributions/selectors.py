# distributions/selectors.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..custom_types import Array, ArrayLike, PRNG
from ..errors import DegenerateSamplesError, InsufficientSamplesError, InvalidInputError
from ..array_backend.utils import _ensure_points
from ..core.fundamental import average, stddev
from ..core.mcmc import DEFAULT_MAX_STEPS, SliceSampler
from ..core.range import Box
from ..linalg.matrix import Matrix2
from .kernels import Bandwidth, Kernel, check_bandwidth
from .posterior import DEFAULT_LAMBDA, BayesianPosterior

__all__ = [
    "DEFAULT_ITERATIONS",
    "SelectBandwidth",
    "SilvermanRot",
    "FixedBandwidth",
    "BayesianSelector",
]

_log = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 500


def _check_points(points: ArrayLike, what: str) -> Array:
    X = _ensure_points(points, copy=False)
    if X.shape[0] < 2:
        raise InsufficientSamplesError(2, X.shape[0], what)
    return X


class SelectBandwidth(ABC):
    """Strategy that derives a bandwidth from the current sample points."""

    @abstractmethod
    def select_bandwidth(self, kernel: Kernel, points: ArrayLike) -> Bandwidth:
        """Returns a bandwidth for `points`, shape (n, d).

        Returns:
            A float for 1-D points, a :class:`Matrix2` for 2-D points.

        Raises:
            InsufficientSamplesError: If fewer than 2 points are given.
        """
        raise NotImplementedError


class SilvermanRot(SelectBandwidth):
    """Silverman-style rule of thumb.

    - 1-D: ``1.06 * sd * n^(-1/5)``.
    - 2-D: ``diag(s * sd_0, s * sd_1)`` with ``s = n^(-1/6)``.

    Standard deviations are population standard deviations.
    """

    def select_bandwidth(self, kernel: Kernel, points: ArrayLike) -> Bandwidth:
        X = _check_points(points, "SilvermanRot")
        n, d = X.shape
        sds = [stddev(X[:, k]) for k in range(d)]
        if min(sds) <= 0.0:
            raise DegenerateSamplesError(
                f"SilvermanRot needs spread along every axis; got standard deviations {sds}."
            )

        if d == 1:
            return 1.06 * sds[0] * n ** -0.2
        if d == 2:
            a = (1.0 / n) ** (1.0 / 6.0)
            return Matrix2.diagonal(a * sds[0], a * sds[1])
        raise InvalidInputError(f"SilvermanRot supports 1-D or 2-D points; got dimension {d}.")

    def __repr__(self) -> str:
        return "SilvermanRot()"


class FixedBandwidth(SelectBandwidth):
    """Always returns the bandwidth it was built with."""

    def __init__(self, bandwidth: Bandwidth):
        dim = 2 if isinstance(bandwidth, Matrix2) else 1
        self._bandwidth = check_bandwidth(bandwidth, dim)
        self._dim = dim

    @property
    def bandwidth(self) -> Bandwidth:
        return self._bandwidth

    def select_bandwidth(self, kernel: Kernel, points: ArrayLike) -> Bandwidth:
        X = _check_points(points, "FixedBandwidth")
        if X.shape[1] != self._dim:
            raise InvalidInputError(
                f"FixedBandwidth holds a {self._dim}-D bandwidth but points are {X.shape[1]}-D."
            )
        return self._bandwidth

    def __repr__(self) -> str:
        return f"FixedBandwidth({self._bandwidth!r})"


class BayesianSelector(SelectBandwidth):
    """Bayesian bandwidth selection for 2-D points by slice sampling.

    The three lower-triangular entries of a matrix ``B`` are sampled from
    :class:`BayesianPosterior` on the box ``[0, w]^3``, where ``w`` is the
    widest side of the data range. The chain starts at the identity. The
    sampled entries are averaged, and the covariance-style bandwidth
    ``L @ L.T`` with ``L = B^{-1}`` is returned.

    The cost is O(iterations * n^2) kernel evaluations, so this selector
    suits small to moderate sample sizes.

    Args:
        data_range: Box that the data live in. If None, the bounding box
            of the points passed to :meth:`select_bandwidth` is used.
        iterations: Number of posterior draws to average.
        lam: Prior strength of the posterior.
        rng: Random generator. Defaults to a newly created generator.
        max_steps: Shrink budget per draw, forwarded to the sampler.
    """

    def __init__(
        self,
        data_range: Optional[Box] = None,
        *,
        iterations: int = DEFAULT_ITERATIONS,
        lam: float = DEFAULT_LAMBDA,
        rng: Optional[PRNG] = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ):
        if int(iterations) < 1:
            raise InvalidInputError("iterations must be >= 1.")
        self._range: Optional[Box] = None
        if data_range is not None:
            self.set_range(data_range)
        self.iterations = int(iterations)
        self.lam = float(lam)
        self.max_steps = int(max_steps)
        self._rng = rng or np.random.default_rng()

    def set_range(self, data_range: Box) -> None:
        if data_range.dim != 2:
            raise InvalidInputError(f"BayesianSelector needs a 2-D data range; got {data_range.dim}-D.")
        self._range = data_range

    @property
    def data_range(self) -> Optional[Box]:
        return self._range

    def parameter_box(self, points: ArrayLike) -> Box:
        """Sampling box ``[0, w]^3`` for the triangular entries."""
        data_range = self._range if self._range is not None else Box.bounding(points)
        w = float(np.max(data_range.width()))
        if w <= 0.0:
            raise DegenerateSamplesError("BayesianSelector needs a data range of positive width.")
        return Box(np.zeros(3), np.full(3, w))

    def select_bandwidth(self, kernel: Kernel, points: ArrayLike) -> Matrix2:
        X = _check_points(points, "BayesianSelector")
        if X.shape[1] != 2:
            raise InvalidInputError(f"BayesianSelector supports 2-D points only; got dimension {X.shape[1]}.")

        box = self.parameter_box(X)
        posterior = BayesianPosterior(X, kernel, lam=self.lam)
        sampler = SliceSampler(posterior, box, rng=self._rng, max_steps=self.max_steps)

        seed = np.clip(Matrix2.identity().lower_triangular(), box.low, box.high)
        sampler.set_last_point(seed)

        bs = np.array([sampler.sample() for _ in range(self.iterations)])
        b = Matrix2.from_lower_triangular([average(bs[:, k]) for k in range(3)])
        _log.debug("BayesianSelector: %d draws on %r, mean factor %r", self.iterations, box, b)

        inv = b.inverse()
        return inv @ inv.T

    def __repr__(self) -> str:
        return f"BayesianSelector(data_range={self._range!r}, iterations={self.iterations}, lam={self.lam})"
