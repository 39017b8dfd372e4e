# custom_types.py
"""
Type aliases shared across bayeskde.

We generally follow the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
- A single sample point is a `PointLike`: a real number (1-D) or a pair (2-D)
"""
from __future__ import annotations
from typing import TypeAlias, Union, Tuple
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

from numpy import floating as NumpyFloating

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
Float: TypeAlias = NumpyFloating
PRNG: TypeAlias = NumpyRNG
PointLike: TypeAlias = Union[float, Tuple[float, float], NumpyArrayLike]
