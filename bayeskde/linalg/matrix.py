# linalg/matrix.py
from __future__ import annotations

from typing import Any, Tuple
import numpy as np
from scipy.linalg import cholesky

from ..custom_types import Array, ArrayLike
from ..array_backend.utils import _ensure_vector, _ensure_matrix, _ensure_real_scalar

__all__ = [
    "Matrix2",
]


class Matrix2:
    """Fixed-size 2x2 real matrix.

    Stores the four entries ``(a, b, c, d)`` in row-major layout::

        | a  b |
        | c  d |

    This is the bandwidth type for 2-D points. The class does not enforce
    symmetry or positive definiteness; consumers that need an invertible or
    positive-definite matrix check for it themselves.

    The lower-triangular packing ``(a, c, d)`` is the parametrization explored
    by the Bayesian bandwidth selector.
    """

    __slots__ = ("a", "b", "c", "d")

    def __init__(self, r0: Tuple[float, float], r1: Tuple[float, float]) -> None:
        self.a = _ensure_real_scalar(r0[0])
        self.b = _ensure_real_scalar(r0[1])
        self.c = _ensure_real_scalar(r1[0])
        self.d = _ensure_real_scalar(r1[1])

    # ---- Constructors ----

    @classmethod
    def diagonal(cls, a: float, b: float) -> Matrix2:
        return cls((a, 0.0), (0.0, b))

    @classmethod
    def identity(cls) -> Matrix2:
        return cls.diagonal(1.0, 1.0)

    @classmethod
    def from_array(cls, arr: ArrayLike) -> Matrix2:
        """Build from any array-like of shape (2, 2)."""
        m = _ensure_matrix(arr, num_rows=2, num_cols=2)
        return cls((m[0, 0], m[0, 1]), (m[1, 0], m[1, 1]))

    @classmethod
    def from_lower_triangular(cls, t: ArrayLike) -> Matrix2:
        """Inverse of :meth:`lower_triangular`: ``(b00, b10, b11)`` -> ``[[b00, 0], [b10, b11]]``."""
        b00, b10, b11 = _ensure_vector(t, length=3)
        return cls((b00, 0.0), (b10, b11))

    # ---- Properties ----

    @property
    def shape(self) -> tuple[int, int]:
        return (2, 2)

    def to_dense(self) -> Array:
        return np.array([[self.a, self.b], [self.c, self.d]], dtype=float)

    def lower_triangular(self) -> Tuple[float, float, float]:
        """Return the lower-triangular entries ``(a, c, d)``; ``b`` is dropped."""
        return (self.a, self.c, self.d)

    # ---- Linear algebra ----

    def det(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> Matrix2:
        """Return the inverse matrix.

        Raises:
            np.linalg.LinAlgError: If the determinant is zero.
        """
        det = self.det()
        if det == 0.0:
            raise np.linalg.LinAlgError("Matrix2 is singular (determinant is zero); inverse undefined.")
        return Matrix2((self.d / det, -self.b / det), (-self.c / det, self.a / det))

    def transpose(self) -> Matrix2:
        return Matrix2((self.a, self.c), (self.b, self.d))

    @property
    def T(self) -> Matrix2:
        return self.transpose()

    def matvec(self, x: ArrayLike) -> Array:
        """Return A @ x for a 2-vector x."""
        x0, x1 = _ensure_vector(x, length=2, copy=False)
        return np.array([self.a * x0 + self.b * x1, self.c * x0 + self.d * x1])

    def matmat(self, X: ArrayLike) -> Array:
        """Apply the matrix to every row of X, shape (n, 2) -> (n, 2)."""
        X = _ensure_matrix(X, num_cols=2, copy=False)
        return X @ self.to_dense().T

    def quadratic_form(self, X: ArrayLike) -> Array:
        """Return ``x^T A x`` for every row x of X, shape (n, 2) -> (n,)."""
        X = _ensure_matrix(X, num_cols=2, copy=False)
        return np.einsum("ni,ij,nj->n", X, self.to_dense(), X)

    def cholesky(self) -> Matrix2:
        """Return the lower Cholesky factor L with ``A = L @ L.T``.

        Raises:
            np.linalg.LinAlgError: If the matrix is not positive definite.
        """
        return Matrix2.from_array(cholesky(self.to_dense(), lower=True))

    def __matmul__(self, other: Any) -> Matrix2 | Array:
        if isinstance(other, Matrix2):
            return Matrix2.from_array(self.to_dense() @ other.to_dense())
        return self.matvec(other)

    def __mul__(self, scalar: float) -> Matrix2:
        s = _ensure_real_scalar(scalar)
        return Matrix2((s * self.a, s * self.b), (s * self.c, s * self.d))

    __rmul__ = __mul__

    # ---- Comparison and representation ----

    def allclose(self, other: Matrix2, *, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        return bool(np.allclose(self.to_dense(), other.to_dense(), rtol=rtol, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix2):
            return NotImplemented
        return (self.a, self.b, self.c, self.d) == (other.a, other.b, other.c, other.d)

    def __hash__(self) -> int:
        return hash((self.a, self.b, self.c, self.d))

    def __iter__(self):
        yield (self.a, self.b)
        yield (self.c, self.d)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(({self.a!r}, {self.b!r}), ({self.c!r}, {self.d!r}))"
