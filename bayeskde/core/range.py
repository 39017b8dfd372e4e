# core/range.py
"""
Interval and box types.

- :class:`Range` is a non-empty half-open interval ``[low, high)``.
- :class:`Box` is an axis-aligned box in d dimensions. Unlike ``Range`` it
  allows zero-width axes, which appear while the slice sampler shrinks its
  search window.
- :class:`MinMax` is a closed interval ``[min, max]``.
"""
from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from ..custom_types import Array, ArrayLike
from ..errors import InvalidInputError
from ..array_backend.utils import _ensure_real_scalar, _ensure_vector, _ensure_points

__all__ = [
    "Range",
    "Box",
    "MinMax",
]


class Range:
    """Half-open interval ``[low, high)`` with ``low < high``."""

    __slots__ = ("low", "high")

    def __init__(self, low: float, high: float):
        low = _ensure_real_scalar(low)
        high = _ensure_real_scalar(high)
        if not low < high:
            raise InvalidInputError(f"Range requires low < high; got low={low}, high={high}.")
        self.low = low
        self.high = high

    def width(self) -> float:
        return self.high - self.low

    def middle(self) -> float:
        return (self.low + self.high) * 0.5

    def contains(self, x: float) -> bool:
        return self.low <= x < self.high

    __contains__ = contains

    def iter(self, interval: float) -> Iterator[float]:
        """Yield ``low, low + interval, ...`` while below ``high``."""
        if interval <= 0:
            raise InvalidInputError(f"interval must be > 0; got {interval}.")
        x = self.low
        while x < self.high:
            yield x
            x += interval

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return (self.low, self.high) == (other.low, other.high)

    def __hash__(self) -> int:
        return hash((self.low, self.high))

    def __repr__(self) -> str:
        return f"Range(low={self.low!r}, high={self.high!r})"


class Box:
    """Axis-aligned box ``[low_k, high_k)`` per axis, with ``low_k <= high_k``.

    A zero-width axis (``low_k == high_k``) contains exactly its bound.

    Args:
        low: Lower corner, shape (d,).
        high: Upper corner, shape (d,).

    Raises:
        InvalidInputError: If the corners differ in length or ``low > high``
            on some axis.
    """

    def __init__(self, low: ArrayLike, high: ArrayLike):
        low = _ensure_vector(low)
        high = _ensure_vector(high, length=low.size)
        if not (np.all(np.isfinite(low)) and np.all(np.isfinite(high))):
            raise InvalidInputError("Box bounds must be finite.")
        if np.any(low > high):
            raise InvalidInputError(f"Box requires low <= high on every axis; got low={low}, high={high}.")
        self._low = low
        self._high = high

    @classmethod
    def from_ranges(cls, *ranges: Range) -> Box:
        return cls([r.low for r in ranges], [r.high for r in ranges])

    @classmethod
    def bounding(cls, points: ArrayLike) -> Box:
        """Smallest box containing every row of `points`, shape (n, d)."""
        X = _ensure_points(points, copy=False)
        return cls(X.min(axis=0), X.max(axis=0))

    @property
    def low(self) -> Array:
        return self._low.copy()

    @property
    def high(self) -> Array:
        return self._high.copy()

    @property
    def dim(self) -> int:
        return int(self._low.size)

    def width(self) -> Array:
        return self._high - self._low

    def contains(self, x: ArrayLike) -> bool:
        x = _ensure_vector(x, length=self.dim, copy=False)
        inside = (self._low <= x) & ((x < self._high) | ((self._low == self._high) & (x == self._low)))
        return bool(np.all(inside))

    __contains__ = contains

    def axes(self) -> Sequence[tuple[float, float]]:
        return [(float(lo), float(hi)) for lo, hi in zip(self._low, self._high)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return np.array_equal(self._low, other._low) and np.array_equal(self._high, other._high)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Box(low={self._low.tolist()!r}, high={self._high.tolist()!r})"


class MinMax:
    """Closed interval ``[min, max]`` with ``min <= max``."""

    __slots__ = ("min", "max")

    def __init__(self, min: float, max: float):
        min = _ensure_real_scalar(min)
        max = _ensure_real_scalar(max)
        if not min <= max:
            raise InvalidInputError(f"MinMax requires min <= max; got min={min}, max={max}.")
        self.min = min
        self.max = max

    def width(self) -> float:
        return self.max - self.min

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    __contains__ = contains

    def normalize(self, v: float) -> float:
        """Map `v` linearly so that ``min -> 0`` and ``max -> 1``."""
        if self.max == self.min:
            raise InvalidInputError("cannot normalize against a zero-width MinMax.")
        return (v - self.min) / (self.max - self.min)

    def __repr__(self) -> str:
        return f"MinMax(min={self.min!r}, max={self.max!r})"
