"""Immutable 2D affine matrix value type.

An `AffineMatrix` stores the six free elements of a 3x3 homogeneous matrix::

    | a  c  e |
    | b  d  f |
    | 0  0  1 |

The bottom row is implicit and never stored. Every operation returns a new matrix.
Chained calls read left to right from the outermost frame inwards:
``m.translate(50, 0).scale(2)`` is ``m @ T @ S``, so the scale happens inside the
frame established by the translation.
"""

import math
from collections.abc import Sequence
from numbers import Real
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np
import numpy.typing as npt

from affinekit import builder
from affinekit._utils import format_number
from affinekit.exceptions import InvalidArgumentError, SingularMatrixError

if TYPE_CHECKING:
    from affinekit.decompose import DecomposedTransform

__all__ = ["AffineMatrix", "DEFAULT_TOLERANCE"]

# Component-wise tolerance used by `AffineMatrix.equals`.
DEFAULT_TOLERANCE = 1e-7

_COMPONENT_NAMES = ("a", "b", "c", "d", "e", "f")


def _check_components(values: Sequence[Any]) -> tuple[float, ...]:
    """Validate six matrix components and convert them to floats.

    Parameters
    ----------
    values : sequence
        Candidate components, in ``(a, b, c, d, e, f)`` order.

    Returns
    -------
    tuple[float, ...]
        The six components as Python floats.

    Raises
    ------
    InvalidArgumentError
        If there are not exactly six values, or any value is not a finite real number.
    """
    if len(values) != 6:
        raise InvalidArgumentError(
            f"An affine matrix needs exactly 6 components, got {len(values)}."
        )
    components = []
    for name, value in zip(_COMPONENT_NAMES, values):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidArgumentError(
                f"Component '{name}' must be a real number, got {value!r}."
            )
        if not math.isfinite(value):
            raise InvalidArgumentError(
                f"Component '{name}' must be finite, got {value!r}."
            )
        components.append(float(value))
    return tuple(components)


class AffineMatrix(NamedTuple):
    """2D affine transform stored as the six elements ``(a, b, c, d, e, f)``.

    Calling the class directly does not validate its arguments; use
    `AffineMatrix.from_components`, `AffineMatrix.from_array` or
    `AffineMatrix.identity` to build matrices from untrusted values.

    Being a tuple, the matrix inherits tuple `+` and `*`: ``m * 2`` repeats the
    components into a 12-tuple instead of scaling. Use `multiply`, ``@`` or the
    builder methods for matrix algebra.

    Examples
    --------
    >>> m = AffineMatrix.identity().translate(50, 100).scale(2)
    >>> m.to_components()
    (2.0, 0.0, 0.0, 2.0, 50.0, 100.0)
    >>> m.apply((1, 1))
    (52.0, 102.0)
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "AffineMatrix":
        """Return the identity matrix ``(1, 0, 0, 1, 0, 0)``."""
        return cls(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @classmethod
    def from_components(
        cls, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> "AffineMatrix":
        """Build a matrix from its six components.

        Parameters
        ----------
        a, b, c, d, e, f : float
            Matrix elements. ``(a, b)`` is the image of the x axis, ``(c, d)`` the
            image of the y axis and ``(e, f)`` the translation.

        Returns
        -------
        AffineMatrix
            The new matrix.

        Raises
        ------
        InvalidArgumentError
            If any component is not a finite real number.
        """
        return cls(*_check_components((a, b, c, d, e, f)))

    @classmethod
    def from_array(cls, values: Sequence[float] | npt.ArrayLike) -> "AffineMatrix":
        """Build a matrix from a length-6 sequence ``[a, b, c, d, e, f]``.

        Parameters
        ----------
        values : sequence of float or numpy.ndarray
            Six components, in order. A 1-D numpy array is accepted.

        Returns
        -------
        AffineMatrix
            The new matrix.

        Raises
        ------
        InvalidArgumentError
            If `values` is not a sequence of six finite real numbers.
        """
        if isinstance(values, np.ndarray):
            if values.ndim != 1:
                raise InvalidArgumentError(
                    f"Expected a 1-D array of 6 components, got shape {values.shape}."
                )
            values = values.tolist()
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise InvalidArgumentError(
                f"Expected a sequence of 6 components, got {type(values).__name__}."
            )
        return cls(*_check_components(values))

    @classmethod
    def from_homogeneous(cls, array: npt.ArrayLike) -> "AffineMatrix":
        """Build a matrix from a ``(3, 3)`` homogeneous or ``(2, 3)`` affine array.

        Parameters
        ----------
        array : (3, 3) or (2, 3) array_like
            Homogeneous matrix with bottom row ``[0, 0, 1]``, or its top two rows.

        Returns
        -------
        AffineMatrix
            The new matrix.

        Raises
        ------
        InvalidArgumentError
            If the array has another shape, a bottom row other than ``[0, 0, 1]``,
            or non-finite values.
        """
        try:
            array = np.asarray(array, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(
                "Expected a numeric (3, 3) or (2, 3) array."
            ) from e
        if array.shape == (3, 3):
            if not np.array_equal(array[2], [0.0, 0.0, 1.0]):
                raise InvalidArgumentError(
                    f"Bottom row of a homogeneous affine must be [0, 0, 1], got "
                    f"{array[2].tolist()}."
                )
        elif array.shape != (2, 3):
            raise InvalidArgumentError(
                f"Expected shape (3, 3) or (2, 3), got {array.shape}."
            )
        (a, c, e), (b, d, f) = array[:2].tolist()
        return cls.from_components(a, b, c, d, e, f)

    @classmethod
    def from_string(cls, text: str) -> "AffineMatrix":
        """Parse a transform-function list such as ``"translate(50,100) rotate(45deg)"``.

        See `affinekit.codec.parse`.
        """
        from affinekit.codec import parse

        return parse(text)

    def to_components(self) -> tuple[float, ...]:
        """Return the six components as a plain tuple ``(a, b, c, d, e, f)``."""
        return tuple(self)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return the ``(3, 3)`` homogeneous matrix as a numpy array."""
        return np.array(
            [
                [self.a, self.c, self.e],
                [self.b, self.d, self.f],
                [0.0, 0.0, 1.0],
            ],
            dtype=np.float64,
        )

    @property
    def determinant(self) -> float:
        """Determinant ``a*d - c*b`` of the linear 2x2 block."""
        return self.a * self.d - self.c * self.b

    @property
    def is_invertible(self) -> bool:
        """Whether the determinant is non-zero."""
        return self.determinant != 0

    def multiply(self, other: "AffineMatrix") -> "AffineMatrix":
        """Compose this matrix with `other`, returning ``self @ other``.

        `other` is applied to points first; the result maps a point through `other`
        and then through `self`.

        Parameters
        ----------
        other : AffineMatrix
            Right-hand matrix.

        Returns
        -------
        AffineMatrix
            The product.
        """
        a1, b1, c1, d1, e1, f1 = self
        a2, b2, c2, d2, e2, f2 = other
        return AffineMatrix(
            a1 * a2 + c1 * b2,
            b1 * a2 + d1 * b2,
            a1 * c2 + c1 * d2,
            b1 * c2 + d1 * d2,
            a1 * e2 + c1 * f2 + e1,
            b1 * e2 + d1 * f2 + f1,
        )

    def multiply_with(
        self, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> "AffineMatrix":
        """Multiply by the matrix with the given components, validating them first."""
        return self.multiply(AffineMatrix.from_components(a, b, c, d, e, f))

    def __matmul__(self, other: "AffineMatrix") -> "AffineMatrix":
        if not isinstance(other, AffineMatrix):
            return NotImplemented
        return self.multiply(other)

    def apply(self, point: Sequence[float]) -> tuple[float, float]:
        """Map a single point through the matrix.

        Parameters
        ----------
        point : sequence of float
            The ``(x, y)`` point.

        Returns
        -------
        tuple[float, float]
            ``(a*x + c*y + e, b*x + d*y + f)``.

        Raises
        ------
        InvalidArgumentError
            If `point` does not have exactly two coordinates, or if they are not
            numbers.
        """
        if len(point) != 2:
            raise InvalidArgumentError(
                f"A point needs exactly 2 coordinates, got {len(point)}."
            )
        try:
            x, y = float(point[0]), float(point[1])
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(
                f"Point coordinates must be numbers, got {point!r}."
            ) from e
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )

    def apply_points(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Map an array of points through the matrix.

        Parameters
        ----------
        points : (N, 2) array_like
            Points, one per row.

        Returns
        -------
        (N, 2) numpy.ndarray
            Transformed points.

        Raises
        ------
        InvalidArgumentError
            If `points` is not two-dimensional with two columns.
        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 2:
            raise InvalidArgumentError(
                f"Expected an array of shape (N, 2), got {points.shape}."
            )
        linear = np.array([[self.a, self.c], [self.b, self.d]])
        return points @ linear.T + np.array([self.e, self.f])

    def invert(self) -> "AffineMatrix":
        """Return the inverse matrix.

        Returns
        -------
        AffineMatrix
            The matrix ``M`` such that ``self @ M`` is the identity.

        Raises
        ------
        SingularMatrixError
            If the determinant is exactly zero.
        """
        a, b, c, d, e, f = self
        det = self.determinant
        if det == 0:
            raise SingularMatrixError(f"Cannot invert singular matrix {self}.")
        return AffineMatrix(
            d / det,
            -b / det,
            -c / det,
            a / det,
            (c * f - e * d) / det,
            (e * b - a * f) / det,
        )

    def equals(self, other: "AffineMatrix", tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check whether all six components are within `tolerance` of `other`'s.

        Parameters
        ----------
        other : AffineMatrix
            Matrix to compare against.
        tolerance : float, default: 1e-7
            Maximum absolute difference allowed per component.

        Returns
        -------
        bool
            ``True`` if every component-wise absolute difference is at most
            `tolerance`.
        """
        return all(abs(x - y) <= tolerance for x, y in zip(self, other))

    def to_canonical_string(self) -> str:
        """Return ``"matrix(a,b,c,d,e,f)"`` with full-precision components."""
        return "matrix(" + ",".join(format_number(value) for value in self) + ")"

    def __str__(self) -> str:
        return self.to_canonical_string()

    def to_css_string(self, precision: int | None = None) -> str:
        """Render the matrix as a minimal transform-function list.

        See `affinekit.codec.serialize`.
        """
        from affinekit.codec import DEFAULT_PRECISION, serialize

        return serialize(self, DEFAULT_PRECISION if precision is None else precision)

    def decompose(self) -> "DecomposedTransform":
        """Factor the matrix into translation, rotation, shear and scale.

        See `affinekit.decompose.decompose_affine`.
        """
        from affinekit.decompose import decompose_affine

        return decompose_affine(self)

    # Builder shortcuts. Each returns ``self @ primitive``.

    def translate(self, tx: float, ty: float = 0.0) -> "AffineMatrix":
        return builder.translate(self, tx, ty)

    def translate_x(self, tx: float) -> "AffineMatrix":
        return builder.translate_x(self, tx)

    def translate_y(self, ty: float) -> "AffineMatrix":
        return builder.translate_y(self, ty)

    def scale(
        self,
        sx: float,
        sy: float | None = None,
        pivot_x: float | None = None,
        pivot_y: float | None = None,
    ) -> "AffineMatrix":
        return builder.scale(self, sx, sy, pivot_x, pivot_y)

    def scale_x(self, sx: float) -> "AffineMatrix":
        return builder.scale_x(self, sx)

    def scale_y(self, sy: float) -> "AffineMatrix":
        return builder.scale_y(self, sy)

    def rotate(
        self,
        degrees: float,
        pivot_x: float | None = None,
        pivot_y: float | None = None,
    ) -> "AffineMatrix":
        return builder.rotate(self, degrees, pivot_x, pivot_y)

    def rotate_radians(
        self,
        radians: float,
        pivot_x: float | None = None,
        pivot_y: float | None = None,
    ) -> "AffineMatrix":
        return builder.rotate_radians(self, radians, pivot_x, pivot_y)

    def flip_x(self) -> "AffineMatrix":
        return builder.flip_x(self)

    def flip_y(self) -> "AffineMatrix":
        return builder.flip_y(self)

    def skew_x(self, degrees: float) -> "AffineMatrix":
        return builder.skew_x(self, degrees)

    def skew_y(self, degrees: float) -> "AffineMatrix":
        return builder.skew_y(self, degrees)

    def skew_x_radians(self, radians: float) -> "AffineMatrix":
        return builder.skew_x_radians(self, radians)

    def skew_y_radians(self, radians: float) -> "AffineMatrix":
        return builder.skew_y_radians(self, radians)
