"""Exceptions raised by affinekit."""

import numpy as np

__all__ = [
    "AffineKitError",
    "InvalidArgumentError",
    "SingularMatrixError",
    "UnparseableNumberError",
]


class AffineKitError(Exception):
    """Base class for all affinekit errors."""


class InvalidArgumentError(AffineKitError, TypeError, ValueError):
    """A constructor or transform function received arguments it cannot use.

    Raised for the wrong number of components, non-numeric or non-finite components,
    arrays of the wrong shape, and parsed transform functions missing a required
    argument. Subclasses both `TypeError` and `ValueError` so that callers catching
    either builtin keep working.
    """


class SingularMatrixError(AffineKitError, np.linalg.LinAlgError):
    """The matrix has a zero determinant and cannot be inverted or decomposed."""


class UnparseableNumberError(AffineKitError, ValueError):
    """A transform string holds a non-numeric token where a number is required."""
