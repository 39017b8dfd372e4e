# distributions/kernels.py
"""
Kernels for density estimation.

A kernel is a normalized density "bump" evaluated at a displacement between
a query point and a sample point. Bandwidths scale the bump:

- 1-D: a scalar ``h`` acts as a standard deviation, ``K(x / h) / h``.
- 2-D: a :class:`Matrix2` ``H`` acts as a covariance,
  ``K(H^{-1/2} x) / sqrt(det H)``.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np

from ..custom_types import Array, ArrayLike
from ..errors import InvalidBandwidthError, InvalidInputError
from ..linalg.matrix import Matrix2

__all__ = [
    "Bandwidth",
    "Kernel",
    "StandardNormalKernel",
    "check_bandwidth",
]

Bandwidth = Union[float, Matrix2]


def check_bandwidth(bandwidth: Bandwidth, dim: int) -> Bandwidth:
    """Validate a bandwidth for points of dimension `dim` and return it.

    Raises:
        InvalidBandwidthError: If a scalar bandwidth is not positive or a
            matrix bandwidth has a non-positive determinant.
        InvalidInputError: If the bandwidth type does not match `dim`.
    """
    if dim == 1:
        if isinstance(bandwidth, Matrix2):
            raise InvalidInputError("1-D points take a scalar bandwidth, not a Matrix2.")
        h = float(bandwidth)
        if not (np.isfinite(h) and h > 0.0):
            raise InvalidBandwidthError(f"bandwidth must be a finite value > 0; got {h}.")
        return h
    if dim == 2:
        if not isinstance(bandwidth, Matrix2):
            raise InvalidInputError(f"2-D points take a Matrix2 bandwidth; got {type(bandwidth).__name__}.")
        det = bandwidth.det()
        if not (np.isfinite(det) and det > 0.0):
            raise InvalidBandwidthError(f"bandwidth matrix must have a positive determinant; got {det}.")
        return bandwidth
    raise InvalidInputError(f"points must be 1-D or 2-D; got dimension {dim}.")


def _as_displacements(x: ArrayLike, dim: Optional[int] = None) -> tuple[Array, bool]:
    """Returns (X, single): X of shape (n, d), single if the input was one point.

    With ``dim=None`` a length-2 vector is read as a single 2-D displacement
    and any other vector as a batch of 1-D displacements. An explicit `dim`
    settles the reading: ``dim=1`` makes every vector a batch.
    """
    if dim is not None and dim not in (1, 2):
        raise InvalidInputError(f"dim must be 1 or 2; got {dim}.")
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 0:
        X, single = arr.reshape(1, 1), True
    elif arr.ndim == 1:
        if dim == 2 or (dim is None and arr.size == 2):
            X, single = arr.reshape(1, -1), True
        else:
            X, single = arr.reshape(-1, 1), False
    elif arr.ndim == 2:
        X, single = arr, False
    else:
        raise InvalidInputError(f"displacements must have at most 2 dimensions; got shape {arr.shape}.")
    if dim is not None and X.shape[1] != dim:
        raise InvalidInputError(f"expected {dim}-D displacements; got shape {arr.shape}.")
    return X, single


class Kernel(ABC):
    """Abstract density kernel."""

    @abstractmethod
    def unit_density(self, X: Array) -> Array:
        """Unit kernel at each row of X, shape (n, d) -> (n,)."""
        raise NotImplementedError

    def pdf(self, x: ArrayLike, dim: Optional[int] = None) -> Union[float, Array]:
        """Unit kernel at displacement `x`.

        Returns a float for a single displacement (a scalar or a pair) and an
        array of shape (n,) for a batch. Pass `dim` to read a vector of
        length 2 as two 1-D displacements (``dim=1``).
        """
        X, single = _as_displacements(x, dim)
        out = self.unit_density(X)
        return float(out[0]) if single else out

    def __call__(self, x: ArrayLike) -> Union[float, Array]:
        return self.pdf(x)

    def density(self, x: ArrayLike, bandwidth: Bandwidth | None = None) -> Union[float, Array]:
        """Kernel at displacement `x` scaled by `bandwidth`.

        Args:
            x: A single displacement or a batch of shape (n, d).
            bandwidth: Scalar for 1-D displacements, :class:`Matrix2` for
                2-D ones. ``None`` evaluates the unit kernel.
                A scalar reads a vector as a batch of 1-D displacements.

        Raises:
            InvalidBandwidthError: If the bandwidth is not admissible.
        """
        if bandwidth is None:
            dim = None
        else:
            dim = 2 if isinstance(bandwidth, Matrix2) else 1
        X, single = _as_displacements(x, dim)
        if bandwidth is None:
            out = self.unit_density(X)
        else:
            out = self.scaled_density(X, check_bandwidth(bandwidth, X.shape[1]))
        return float(out[0]) if single else out

    @abstractmethod
    def scaled_density(self, X: Array, bandwidth: Bandwidth) -> Array:
        """Bandwidth-scaled kernel at each row of X; `bandwidth` is already validated."""
        raise NotImplementedError


class StandardNormalKernel(Kernel):
    """Gaussian kernel with identity covariance."""

    def unit_density(self, X: Array) -> Array:
        d = X.shape[1]
        q = np.einsum("ni,ni->n", X, X)
        return np.exp(-0.5 * q) / (2.0 * math.pi) ** (d / 2.0)

    def scaled_density(self, X: Array, bandwidth: Bandwidth) -> Array:
        if X.shape[1] == 1:
            h = float(bandwidth)
            return self.unit_density(X / h) / h
        H = bandwidth
        q = H.inverse().quadratic_form(X)
        return np.exp(-0.5 * q) / (2.0 * math.pi * math.sqrt(H.det()))

    def __repr__(self) -> str:
        return "StandardNormalKernel()"
