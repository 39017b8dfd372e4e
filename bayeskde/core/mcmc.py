# core/mcmc.py
from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional, Union

import numpy as np

from ..custom_types import Array, ArrayLike, PRNG
from ..errors import InvalidInputError, SamplingBudgetExceededError
from ..array_backend.utils import _ensure_vector
from .range import Box, Range

__all__ = [
    "DEFAULT_MAX_STEPS",
    "SliceSampler",
]

_log = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 10_000


class SliceSampler:
    """Slice sampler over a bounded axis-aligned box.

    Draws a Markov chain whose stationary distribution is proportional to a
    nonnegative, possibly unnormalized, density ``f``. Each step draws a
    slice height uniformly under ``f(current)`` and then searches the box for
    a point above that height, shrinking the search window towards the
    current point after every rejected candidate.

    The chain state (``last_point`` and ``last_density``) lives on the
    instance and advances with every call to :meth:`sample`. One instance is
    one chain; it must not be shared between concurrent callers.

    Attributes:
        _density: The target density.
        _box: Support of the chain as a :class:`Box`.
        _scalar: True when built from a :class:`Range`; points are then
            exchanged as Python floats instead of arrays of shape (1,).
        _max_steps: Rejected candidates tolerated per draw.
    """

    def __init__(
        self,
        density: Callable[[Union[float, Array]], float],
        box: Union[Range, Box],
        *,
        rng: Optional[PRNG] = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ):
        """Initializes the sampler.

        Args:
            density: Unnormalized target density. Receives a float for a
                1-D :class:`Range` support and an array of shape (d,) for a
                :class:`Box` support.
            box: Support of the chain.
            rng: Random generator used when :meth:`sample` is called without
                one. Defaults to a newly created generator.
            max_steps: Maximum number of rejected candidates per draw before
                :class:`SamplingBudgetExceededError` is raised.

        Raises:
            InvalidInputError: If ``max_steps`` is not positive or ``box`` is
                neither a Range nor a Box.
        """
        if isinstance(box, Range):
            self._scalar = True
            box = Box.from_ranges(box)
        elif isinstance(box, Box):
            self._scalar = False
        else:
            raise InvalidInputError(f"box must be a Range or a Box; got {type(box).__name__}.")
        if int(max_steps) < 1:
            raise InvalidInputError("max_steps must be >= 1.")

        self._density = density
        self._box = box
        self._rng = rng or np.random.default_rng()
        self._max_steps = int(max_steps)

        self._last_point: Optional[Array] = None
        self._last_density: Optional[float] = None

    @property
    def density(self) -> Callable[[Union[float, Array]], float]:
        return self._density

    @property
    def box(self) -> Box:
        return self._box

    @property
    def last_point(self) -> Union[float, Array, None]:
        if self._last_point is None:
            return None
        return self._wrap(self._last_point)

    @property
    def last_density(self) -> Optional[float]:
        return self._last_density

    def set_last_point(self, point: Union[float, ArrayLike]) -> None:
        """Seeds the chain at `point`; its density is evaluated on the next draw."""
        self._last_point = _ensure_vector(point, length=self._box.dim)
        self._last_density = None

    # ---- Internals ----

    def _wrap(self, x: Array) -> Union[float, Array]:
        return float(x[0]) if self._scalar else x.copy()

    def _evaluate(self, x: Array) -> float:
        y = float(self._density(self._wrap(x)))
        if np.isnan(y) or y < 0.0:
            raise InvalidInputError(f"density must be nonnegative; got {y} at {x}.")
        return y

    @staticmethod
    def _gen_range(rng: PRNG, low: Array, high: Array) -> Array:
        # Zero-width axes are pinned to their bound.
        fixed = low == high
        draw = rng.uniform(low, np.where(fixed, low + 1.0, high))
        return np.where(fixed, low, draw)

    # ---- Sampling ----

    def sample(self, rng: Optional[PRNG] = None) -> Union[float, Array]:
        """Advances the chain by one step and returns the new point.

        Args:
            rng: Random generator for this step. Defaults to the generator
                given at construction.

        Returns:
            The new chain position: a float for a Range support, otherwise an
            array of shape (d,).

        Raises:
            SamplingBudgetExceededError: If ``max_steps`` consecutive
                candidates fall below the slice height.
        """
        rng = rng or self._rng
        low, high = self._box.low, self._box.high

        if self._last_point is None:
            self._last_point = self._gen_range(rng, low, high)
            self._last_density = None
        if self._last_density is None:
            self._last_density = self._evaluate(self._last_point)

        last_x = self._last_point
        last_y = self._last_density

        if last_y == 0.0:
            _log.debug("Current point %s has zero density; accepting the next candidate unconditionally.", last_x)
            border = 0.0
        else:
            border = rng.uniform(0.0, last_y)

        for step in range(self._max_steps):
            x = self._gen_range(rng, low, high)
            y = self._evaluate(x)
            if y > border or border == 0.0:
                self._last_point = x
                self._last_density = y
                if step:
                    _log.debug("Slice sampler accepted after %d shrink steps.", step)
                return self._wrap(x)

            below = x < last_x
            low = np.where(below, x, low)
            high = np.where(below, high, x)

        raise SamplingBudgetExceededError(self._max_steps)

    def sample_iter(self, n: Optional[int] = None, rng: Optional[PRNG] = None) -> Iterator[Union[float, Array]]:
        """Lazily yields `n` successive draws, or an endless stream if `n` is None."""
        count = 0
        while n is None or count < n:
            yield self.sample(rng)
            count += 1
