# errors.py
"""
Exception hierarchy for bayeskde.

Every error derives from :class:`BayesKDEError` and from the built-in type a
caller would naturally catch (``ValueError`` for bad input, ``RuntimeError``
for calls made in the wrong state). Singular matrices are reported with
``numpy.linalg.LinAlgError``.
"""

__all__ = [
    "BayesKDEError",
    "InvalidInputError",
    "InsufficientSamplesError",
    "DegenerateSamplesError",
    "InvalidBandwidthError",
    "PreconditionError",
    "NoBandwidthError",
    "SamplingBudgetExceededError",
]


class BayesKDEError(Exception):
    """Base class for all bayeskde errors."""


class InvalidInputError(BayesKDEError, ValueError):
    """An argument is malformed or out of its domain."""


class InsufficientSamplesError(InvalidInputError):
    """Fewer sample points than the operation requires."""

    def __init__(self, required: int, got: int, what: str = "operation"):
        self.required = int(required)
        self.got = int(got)
        super().__init__(f"{what} requires at least {self.required} points; got {self.got}.")


class DegenerateSamplesError(InvalidInputError):
    """The sample points have no spread where a positive one is needed."""


class InvalidBandwidthError(InvalidInputError):
    """A bandwidth is non-positive or its matrix is not positive definite."""


class PreconditionError(BayesKDEError, RuntimeError):
    """An operation was called before the object was ready for it."""


class NoBandwidthError(PreconditionError):
    """A density was queried before any bandwidth could be computed."""


class SamplingBudgetExceededError(BayesKDEError, RuntimeError):
    """The slice sampler rejected more candidates than its budget allows."""

    def __init__(self, max_steps: int):
        self.max_steps = int(max_steps)
        super().__init__(
            f"Slice sampler rejected {self.max_steps} consecutive candidates without "
            "finding a point above the slice height."
        )
