# core/grid.py
from __future__ import annotations

from typing import Tuple

import numpy as np

from ..custom_types import Array
from .range import Range

__all__ = [
    "density_grid",
]


def density_grid(
    distribution,
    xrange: Range = Range(0.0, 1.0),
    yrange: Range = Range(0.0, 1.0),
    xinterval: float = 0.1,
    yinterval: float = 0.1,
) -> Tuple[Array, Array, Array]:
    """Evaluates a 2-D density on a regular grid.

    Args:
        distribution: Any object with a ``density(values)`` method taking an
            (m, 2) array, such as a 2-D :class:`KernelDensityEstimator`.
        xrange: Grid extent along x; the grid starts at ``xrange.low``.
        yrange: Grid extent along y.
        xinterval: Grid step along x.
        yinterval: Grid step along y.

    Returns:
        ``(xs, ys, z)`` with ``xs`` of shape (nx,), ``ys`` of shape (ny,)
        and ``z[i, j]`` the density at ``(xs[i], ys[j])``.
    """
    xs = np.fromiter(xrange.iter(xinterval), dtype=float)
    ys = np.fromiter(yrange.iter(yinterval), dtype=float)
    gx, gy = np.meshgrid(xs, ys, indexing="ij")
    z = np.asarray(distribution.density(np.column_stack([gx.ravel(), gy.ravel()])), dtype=float)
    return xs, ys, z.reshape(xs.size, ys.size)
