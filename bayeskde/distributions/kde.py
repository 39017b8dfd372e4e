# distributions/kde.py
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..custom_types import Array, ArrayLike, PRNG, PointLike
from ..errors import InvalidInputError, NoBandwidthError
from ..array_backend.utils import _ensure_point, _ensure_points
from .distribution import Distribution
from .kernels import Bandwidth, Kernel, StandardNormalKernel, check_bandwidth
from .posterior import likelihood_cv
from .selectors import SelectBandwidth, SilvermanRot

__all__ = [
    "KernelDensityEstimator",
]

_log = logging.getLogger(__name__)


class KernelDensityEstimator(Distribution):
    """Kernel density estimator over 1-D or 2-D sample points.

    The density at ``x`` is the average over the stored points ``x_i`` of
    ``kernel.density(x - x_i, bandwidth)``. The bandwidth comes from the
    selector and is cached until the next insertion.

    Shape policy:
        - ``points`` -> (n, d)
        - ``pdf(x)`` -> float
        - ``density(values)`` / ``log_density(values)`` -> (m,)
        - ``sample(k)`` -> (k, d)

    Attributes:
        _X: Stored sample points, shape (n, d). Append-only.
        _selector: Bandwidth selection strategy.
        _kernel: Kernel shape.
        _dim: Point dimension; fixed by the first point when not given.
        _eager: Recompute the bandwidth on every insertion instead of on
            the first query after it.
        _bandwidth: Cached bandwidth, or None when stale.
    """

    def __init__(
        self,
        points: Optional[ArrayLike] = None,
        *,
        selector: Optional[SelectBandwidth] = None,
        kernel: Optional[Kernel] = None,
        dim: Optional[int] = None,
        eager: bool = False,
        rng: Optional[PRNG] = None,
    ):
        """Initializes the estimator.

        Args:
            points: Initial sample points, shape (n, d) or (n,) for 1-D.
            selector: Bandwidth selector. Defaults to :class:`SilvermanRot`.
            kernel: Kernel. Defaults to :class:`StandardNormalKernel`.
            dim: Point dimension (1 or 2). Inferred from the first point
                if omitted.
            eager: If True, recompute the bandwidth after each insertion.
            rng: Random generator for :meth:`sample`.

        Raises:
            InvalidInputError: If `dim` is not 1 or 2 or the points do not
                match it.
        """
        if dim is not None and dim not in (1, 2):
            raise InvalidInputError(f"dim must be 1 or 2; got {dim}.")
        self._selector = selector if selector is not None else SilvermanRot()
        self._kernel = kernel if kernel is not None else StandardNormalKernel()
        self._dim = dim
        self._eager = bool(eager)
        self._rng = rng or np.random.default_rng()

        self._X = np.empty((0, dim or 0), dtype=float)
        self._bandwidth: Optional[Bandwidth] = None

        if points is not None:
            self.extend(points)

    # ---------------------------- properties ----------------------------

    @property
    def n(self) -> int:
        """Number of stored points."""
        return int(self._X.shape[0])

    @property
    def dim(self) -> Optional[int]:
        return self._dim

    @property
    def points(self) -> Array:
        """A copy of the stored points, shape (n, d)."""
        return self._X.copy()

    @property
    def selector(self) -> SelectBandwidth:
        return self._selector

    @property
    def kernel(self) -> Kernel:
        return self._kernel

    @property
    def bandwidth(self) -> Bandwidth:
        """Bandwidth for the current points, computed on first use.

        Raises:
            NoBandwidthError: If no points have been inserted.
            InsufficientSamplesError: If only one point has been inserted.
        """
        if self._bandwidth is None:
            if self.n == 0:
                raise NoBandwidthError("KernelDensityEstimator has no points; insert samples before querying.")
            self._recompute()
        return self._bandwidth

    # ---------------------------- mutation ----------------------------

    def insert(self, point: PointLike) -> None:
        """Append a copy of `point` to the sample set.

        Raises:
            DegenerateSamplesError: In eager mode, if the selector rejects the
                enlarged sample set. The point is not stored in that case.
        """
        p = _ensure_point(point, dim=self._dim)
        self._append(p.reshape(1, -1))

    def extend(self, points: ArrayLike) -> None:
        """Append every row of `points`, recomputing the bandwidth at most once."""
        X = _ensure_points(points, dim=self._dim)
        if X.shape[0] == 0:
            return
        self._append(X)

    def _append(self, X: Array) -> None:
        dim = self._dim
        if dim is None:
            if X.shape[1] not in (1, 2):
                raise InvalidInputError(f"points must be 1-D or 2-D; got dimension {X.shape[1]}.")
            dim = int(X.shape[1])
            stored = np.empty((0, dim), dtype=float)
        else:
            stored = self._X
        candidate = np.vstack([stored, X])

        bandwidth = None
        if self._eager and candidate.shape[0] >= 2:
            # A failing selector leaves the sample set untouched.
            bandwidth = self._select(candidate, dim)

        self._dim = dim
        self._X = candidate
        self._bandwidth = bandwidth

    def _select(self, X: Array, dim: int) -> Bandwidth:
        bandwidth = check_bandwidth(self._selector.select_bandwidth(self._kernel, X), dim)
        _log.debug("Bandwidth for %d points via %r: %r", X.shape[0], self._selector, bandwidth)
        return bandwidth

    def _recompute(self) -> None:
        self._bandwidth = self._select(self._X, self._dim)

    # ---------------------------- density ----------------------------

    def pdf(self, x: PointLike) -> float:
        """Density estimate at a single point.

        Raises:
            NoBandwidthError: If no points have been inserted.
        """
        bandwidth = self.bandwidth
        q = _ensure_point(x, dim=self._dim, copy=False)
        return float(np.mean(self._kernel.density(q - self._X, bandwidth)))

    def __call__(self, x: PointLike) -> float:
        return self.pdf(x)

    def density(self, values: ArrayLike) -> Array:
        """Density estimates at a batch of query points, shape (m, d) -> (m,)."""
        bandwidth = self.bandwidth
        Q = _ensure_points(values, dim=self._dim, copy=False)
        diffs = Q[:, np.newaxis, :] - self._X[np.newaxis, :, :]  # (m, n, d)
        k = self._kernel.density(diffs.reshape(-1, self._dim), bandwidth)
        return k.reshape(Q.shape[0], self.n).mean(axis=1)

    def log_likelihood_cv(self) -> float:
        """Leave-one-out log likelihood of the stored points at the current bandwidth."""
        return likelihood_cv(self._X, self._kernel, self.bandwidth)

    # ---------------------------- sampling ----------------------------

    def sample(self, n_samples: int = 1, *, rng: PRNG | None = None) -> Array:
        """Draws from the KDE mixture of Gaussian kernels.

        Each draw picks a stored point uniformly and adds kernel noise:
        ``h * z`` in 1-D, ``L z`` with ``H = L L^T`` in 2-D. Only the
        standard normal kernel can be sampled.

        Returns:
            Samples of shape (n_samples, d).
        """
        if not isinstance(self._kernel, StandardNormalKernel):
            raise NotImplementedError("sampling is only implemented for StandardNormalKernel.")
        bandwidth = self.bandwidth
        rng = rng or self._rng
        n_samples = int(n_samples)

        centers = self._X[rng.integers(0, self.n, size=n_samples)]
        Z = rng.standard_normal(size=(n_samples, self._dim))
        if self._dim == 1:
            return centers + bandwidth * Z
        return centers + bandwidth.cholesky().matmat(Z)

    def __repr__(self) -> str:
        return (
            f"KernelDensityEstimator(n={self.n}, dim={self._dim}, "
            f"selector={self._selector!r}, kernel={self._kernel!r})"
        )
