# core/fundamental.py
"""Fundamental statistics."""
from __future__ import annotations

from typing import Iterable

import numpy as np

from ..errors import InvalidInputError


def _as_values(xs: Iterable[float]) -> np.ndarray:
    arr = np.fromiter(xs, dtype=float) if not isinstance(xs, np.ndarray) else np.asarray(xs, dtype=float).ravel()
    if arr.size == 0:
        raise InvalidInputError("at least one value is required.")
    return arr


def stddev(xs: Iterable[float]) -> float:
    """Population standard deviation of the given numbers."""
    return float(np.std(_as_values(xs)))


def average(xs: Iterable[float]) -> float:
    """Arithmetic mean of the given numbers."""
    return float(np.mean(_as_values(xs)))
