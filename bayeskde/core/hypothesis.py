# core/hypothesis.py
"""Hypothesis testing."""
from __future__ import annotations

import math
from itertools import groupby
from typing import Iterable, Optional

from ..errors import InvalidInputError
from ..distributions.distribution import StandardNormal

__all__ = [
    "MannWhitneyU",
]


class MannWhitneyU:
    """Mann-Whitney U (Wilcoxon rank-sum) test with the normal approximation.

    Ties share their average rank and the variance is tie-corrected. A
    continuity correction of 1/2 is applied to ``|U - mu|``.

    Args:
        xs: First sample.
        ys: Second sample.
    """

    def __init__(self, xs: Iterable[float], ys: Iterable[float]):
        values = sorted([(float(x), 0) for x in xs] + [(float(y), 1) for y in ys])
        self.xn = sum(1 for _, g in values if g == 0)
        self.yn = len(values) - self.xn

        # (x count, y count) for each run of tied values, in ascending order
        self._counts = []
        for _, run in groupby(values, key=lambda t: t[0]):
            groups = [g for _, g in run]
            self._counts.append((groups.count(0), groups.count(1)))

    @property
    def n(self) -> int:
        return self.xn + self.yn

    def xyu(self) -> tuple[float, float]:
        """U statistics of the first and second samples."""
        xr = 0.0
        rank = 1
        for x, y in self._counts:
            t = x + y
            xr += (rank + (t - 1) / 2.0) * x
            rank += t
        yr = self.n * (self.n + 1) / 2.0 - xr
        xu = xr - self.xn * (self.xn + 1) / 2.0
        yu = yr - self.yn * (self.yn + 1) / 2.0
        return xu, yu

    def u(self) -> float:
        return min(self.xyu())

    def mu(self) -> float:
        return self.xn * self.yn / 2.0

    def sigma(self) -> float:
        n = float(self.n)
        ties = sum((x + y) ** 3 - (x + y) for x, y in self._counts)
        return math.sqrt(self.xn * self.yn * ((n + 1.0) - ties / (n * (n - 1.0))) / 12.0)

    def z(self) -> float:
        return (abs(self.u() - self.mu()) - 0.5) / self.sigma()

    def p_value(self) -> Optional[float]:
        """Two-sided p-value, or None if either sample is empty."""
        if self.xn < 1 or self.yn < 1:
            return None
        s = self.sigma()
        if s == 0.0:
            return 1.0
        z = max(self.z(), 0.0)
        return (1.0 - StandardNormal().cdf(z)) * 2.0

    def test(self, alpha: float) -> bool:
        """True if the samples differ significantly at level `alpha`."""
        if alpha <= 0:
            raise InvalidInputError(f"alpha must be > 0; got {alpha}.")
        p = self.p_value()
        return p is not None and p < alpha

    def order(self, alpha: float) -> int:
        """-1 if xs is significantly smaller than ys, 1 if larger, 0 otherwise."""
        if not self.test(alpha):
            return 0
        xu, yu = self.xyu()
        return -1 if xu < yu else 1
