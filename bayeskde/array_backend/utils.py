# array_backend/utils.py
"""
Utility functions for array canonicalization used by bayeskde.

Sample points enter the package in many shapes: Python floats, tuples,
lists of tuples, 1-D arrays of scalars or ``(n, d)`` arrays. The helpers here
turn them into the canonical layouts the estimators work with:

- a single point is a float vector of shape ``(d,)``
- a batch of points is a float matrix of shape ``(n, d)``

All functions that return arrays accept `copy: bool = True`. When `copy=True`
the returned array is guaranteed to be a different object from the input, so
callers may store it without aliasing the caller's buffer.
"""

from __future__ import annotations

import numpy as np
from typing import Any

from ..custom_types import Array, ArrayLike
from ..errors import InvalidInputError


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Could not convert input to a real array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e


def _is_numpy_scalar(x: Any) -> bool:
    """Return true if object is a numpy generic or Python scalar"""
    return np.isscalar(x) or isinstance(x, np.generic)


def _ensure_real_scalar(x: Any) -> float:
    """
    Return a Python float for inputs that contain a single real value.

    Accepts Python scalars, numpy scalar types and arrays of size one.

    Raises:
      InvalidInputError if input contains more than one element or is complex.
    """
    if _is_numpy_scalar(x) and np.iscomplexobj(x):
        raise InvalidInputError(f"_ensure_real_scalar: input is complex-valued: {x!r}")

    arr = _as_array(x)
    if arr.size != 1:
        raise InvalidInputError(
            f"_ensure_real_scalar: input must contain exactly one element; got size={arr.size}, shape={arr.shape}"
        )
    return float(arr.reshape(()))


def _ensure_finite(arr: Array, what: str = "input") -> Array:
    """Raise if `arr` holds NaN or infinite entries; return it unchanged otherwise."""
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{what} must be finite; got {arr!r}.")
    return arr


def _ensure_vector(x: ArrayLike, *, length: int | None = None, copy: bool = True) -> Array:
    """
    Ensure input is returned as a 1-D vector of shape (n,).

    Accepts:
      - 0D scalar -> (1,)
      - 1D arrays -> (n,)
      - 2D arrays shaped (n,1) or (1,n) -> (n,)

    Raises:
      InvalidInputError for incompatible shapes or a length mismatch.
    """
    arr = _as_array(x)

    if arr.ndim == 0:
        out = arr.reshape((1,))
    elif arr.ndim == 1:
        out = arr
    elif arr.ndim == 2 and 1 in arr.shape:
        out = np.ravel(arr)
    else:
        raise InvalidInputError(f"_ensure_vector: input of shape {arr.shape} is not a vector.")

    if length is not None and out.size != length:
        raise InvalidInputError(f"_ensure_vector: required length {length}. Got {out.size}.")

    return out.copy() if copy else out


def _ensure_point(x: ArrayLike, dim: int | None = None, *, copy: bool = True) -> Array:
    """Canonicalize a single sample or query point to shape (d,).

    A scalar is a 1-D point; a pair is a 2-D point. If `dim` is given the
    point must have exactly that many coordinates. Non-finite coordinates are
    rejected.
    """
    point = _ensure_vector(x, length=dim, copy=copy)
    return _ensure_finite(point, "point")


def _ensure_points(x: ArrayLike, dim: int | None = None, *, copy: bool = True) -> Array:
    """Canonicalize a batch of points to shape (n, d).

    - 0D scalar -> (1, 1)
    - 1D array of length n -> (n, 1) when `dim` is None or 1, (1, d) when it
      matches a single point of dimension `dim > 1`
    - 2D array (n, d) -> unchanged

    Raises:
        InvalidInputError: If the input is not a batch of `dim`-dimensional
            points or holds non-finite values.
    """
    arr = _as_array(x)

    if arr.ndim == 0:
        out = arr.reshape(1, 1)
    elif arr.ndim == 1:
        if dim is not None and dim > 1:
            if arr.size != dim:
                raise InvalidInputError(f"_ensure_points: expected a point of dimension {dim}. Got shape {arr.shape}.")
            out = arr.reshape(1, dim)
        else:
            out = arr.reshape(-1, 1)
    elif arr.ndim == 2:
        out = arr
    else:
        raise InvalidInputError(f"_ensure_points: input has too many dimensions (ndim={arr.ndim}).")

    if dim is not None and out.shape[1] != dim:
        raise InvalidInputError(f"_ensure_points: required point dimension {dim}. Got {out.shape[1]}.")

    _ensure_finite(out, "points")
    return out.copy() if copy else out


def _ensure_matrix(x: ArrayLike, *, num_rows: int | None = None, num_cols: int | None = None,
                   copy: bool = True) -> Array:
    """Ensure input is a 2D matrix with optional row and column counts."""
    arr = _as_array(x)

    if arr.ndim != 2:
        raise InvalidInputError(f"_ensure_matrix: Input cannot be interpreted as a 2D matrix. Shape {arr.shape}")

    if num_rows is not None and arr.shape[0] != num_rows:
        raise InvalidInputError(f"_ensure_matrix: Required {num_rows} rows. Got {arr.shape[0]}.")

    if num_cols is not None and arr.shape[1] != num_cols:
        raise InvalidInputError(f"_ensure_matrix: Required {num_cols} columns. Got {arr.shape[1]}.")

    return arr.copy() if copy else arr
