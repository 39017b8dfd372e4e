# distributions/distribution.py
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Union

import numpy as np
from scipy.stats import norm

from ..custom_types import Array, ArrayLike, PRNG, PointLike
from ..array_backend.utils import _ensure_point, _ensure_points

__all__ = [
    "Distribution",
    "StandardNormal",
]

# -------------------------- Abstract Classes ----------------------------


class Distribution(ABC):
    """
    Abstract base class for any distribution over 1-D or 2-D points.
    """

    @abstractmethod
    def pdf(self, x: PointLike) -> float:
        """
        Probability density at a single point `x`.
        """
        raise NotImplementedError("This method should be implemented by subclasses")

    def density(self, values: ArrayLike) -> Array:
        """
        Densities at a batch of points, shape (n, d) -> (n,).

        The default loops over :meth:`pdf`; subclasses may vectorize.
        """
        X = _ensure_points(values, dim=getattr(self, "dim", None), copy=False)
        return np.array([self.pdf(x) for x in X], dtype=float)

    def log_density(self, values: ArrayLike) -> Array:
        """
        Log densities at a batch of points, shape (n,). Zero densities map to -inf.
        """
        with np.errstate(divide="ignore"):
            return np.log(self.density(values))

    def sample(self, n_samples: int = 1, *, rng: PRNG | None = None) -> Array:
        """
        Optional. If a subclass can't sample, it may leave this unimplemented.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")


class StandardNormal(Distribution):
    """Standard normal distribution in one or two dimensions.

    The 2-D form has identity covariance. The cumulative distribution
    function is only defined for the 1-D form.
    """

    def __init__(self, dim: int = 1, *, rng: PRNG | None = None):
        if dim not in (1, 2):
            raise ValueError("StandardNormal supports dim 1 or 2.")
        self.dim = int(dim)
        self._rng = rng or np.random.default_rng()

    def __call__(self, x: PointLike) -> float:
        return self.pdf(x)

    def pdf(self, x: PointLike) -> float:
        p = _ensure_point(x, copy=False)
        q = float(p @ p)
        if p.size == 1:
            return math.exp(-q / 2.0) / math.sqrt(2.0 * math.pi)
        return math.exp(-0.5 * q) / (2.0 * math.pi)

    def density(self, values: ArrayLike) -> Array:
        X = _ensure_points(values, dim=self.dim, copy=False)
        q = np.einsum("ni,ni->n", X, X)
        return np.exp(-0.5 * q) / (2.0 * np.pi) ** (self.dim / 2.0)

    def cdf(self, x: Union[float, ArrayLike]) -> Any:
        """1-D cumulative distribution function; accepts scalars or arrays."""
        if self.dim != 1:
            raise NotImplementedError("cdf is only defined for the 1-D standard normal.")
        out = norm.cdf(x)
        return float(out) if np.ndim(out) == 0 else out

    def sample(self, n_samples: int = 1, *, rng: PRNG | None = None) -> Array:
        """Draw (n_samples, dim) standard normal variates."""
        rng = rng or self._rng
        return rng.standard_normal(size=(int(n_samples), self.dim))
