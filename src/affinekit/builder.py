"""Named primitive transforms expressed as multiplications by canonical matrices.

Every function takes a matrix and returns ``matrix @ primitive`` without touching its
input. Pivoted variants wrap the primitive as
``translate(-pivot) @ primitive @ translate(pivot)``.

The string parser goes through the closed `TransformKind` enumeration and
`apply_operation`, so every name it recognises maps to exactly one primitive here.
"""

import enum
import math
from typing import TYPE_CHECKING, NamedTuple

from affinekit.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from affinekit.matrix import AffineMatrix

__all__ = [
    "TransformKind",
    "TransformOp",
    "apply_operation",
    "flip_x",
    "flip_y",
    "rotate",
    "rotate_radians",
    "scale",
    "scale_x",
    "scale_y",
    "skew_x",
    "skew_x_radians",
    "skew_y",
    "skew_y_radians",
    "translate",
    "translate_x",
    "translate_y",
]


def _check_pivot(pivot_x: float | None, pivot_y: float | None) -> bool:
    """Return whether a pivot was given, requiring both coordinates or neither."""
    if (pivot_x is None) != (pivot_y is None):
        raise InvalidArgumentError(
            "A pivot needs both pivot_x and pivot_y, got only one of them."
        )
    return pivot_x is not None


def translate(matrix: "AffineMatrix", tx: float, ty: float = 0.0) -> "AffineMatrix":
    """Translate by ``(tx, ty)``."""
    return matrix.multiply_with(1, 0, 0, 1, tx, ty)


def translate_x(matrix: "AffineMatrix", tx: float) -> "AffineMatrix":
    """Translate along the x axis only."""
    return matrix.multiply_with(1, 0, 0, 1, tx, 0)


def translate_y(matrix: "AffineMatrix", ty: float) -> "AffineMatrix":
    """Translate along the y axis only."""
    return matrix.multiply_with(1, 0, 0, 1, 0, ty)


def scale(
    matrix: "AffineMatrix",
    sx: float,
    sy: float | None = None,
    pivot_x: float | None = None,
    pivot_y: float | None = None,
) -> "AffineMatrix":
    """Scale by ``(sx, sy)``, optionally about a pivot point.

    Parameters
    ----------
    matrix : AffineMatrix
        Matrix to extend.
    sx : float
        Scale factor along x.
    sy : float, optional
        Scale factor along y. Defaults to `sx` (uniform scaling).
    pivot_x, pivot_y : float, optional
        Pivot of the scaling, composed as
        ``translate(-pivot) @ scaling @ translate(pivot)``. Both or neither must be
        given.

    Returns
    -------
    AffineMatrix
        ``matrix @ scaling``.

    Raises
    ------
    InvalidArgumentError
        If only one pivot coordinate is given.
    """
    if sy is None:
        sy = sx
    if _check_pivot(pivot_x, pivot_y):
        return translate(
            scale(translate(matrix, -pivot_x, -pivot_y), sx, sy), pivot_x, pivot_y
        )
    return matrix.multiply_with(sx, 0, 0, sy, 0, 0)


def scale_x(matrix: "AffineMatrix", sx: float) -> "AffineMatrix":
    """Scale along the x axis only."""
    return matrix.multiply_with(sx, 0, 0, 1, 0, 0)


def scale_y(matrix: "AffineMatrix", sy: float) -> "AffineMatrix":
    """Scale along the y axis only."""
    return matrix.multiply_with(1, 0, 0, sy, 0, 0)


def rotate(
    matrix: "AffineMatrix",
    degrees: float,
    pivot_x: float | None = None,
    pivot_y: float | None = None,
) -> "AffineMatrix":
    """Rotate by an angle in degrees, optionally about a pivot point.

    Positive angles turn the x axis towards the y axis.
    """
    return rotate_radians(matrix, math.radians(degrees), pivot_x, pivot_y)


def rotate_radians(
    matrix: "AffineMatrix",
    radians: float,
    pivot_x: float | None = None,
    pivot_y: float | None = None,
) -> "AffineMatrix":
    """Rotate by an angle in radians, optionally about a pivot point.

    Parameters
    ----------
    matrix : AffineMatrix
        Matrix to extend.
    radians : float
        Rotation angle.
    pivot_x, pivot_y : float, optional
        Pivot of the rotation, composed as
        ``translate(-pivot) @ rotation @ translate(pivot)``. Both or neither must be
        given.

    Returns
    -------
    AffineMatrix
        ``matrix @ rotation``.

    Raises
    ------
    InvalidArgumentError
        If only one pivot coordinate is given.
    """
    if _check_pivot(pivot_x, pivot_y):
        return translate(
            rotate_radians(translate(matrix, -pivot_x, -pivot_y), radians),
            pivot_x,
            pivot_y,
        )
    cos_r = math.cos(radians)
    sin_r = math.sin(radians)
    return matrix.multiply_with(cos_r, sin_r, -sin_r, cos_r, 0, 0)


def flip_x(matrix: "AffineMatrix") -> "AffineMatrix":
    """Mirror the x axis."""
    return scale(matrix, -1, 1)


def flip_y(matrix: "AffineMatrix") -> "AffineMatrix":
    """Mirror the y axis."""
    return scale(matrix, 1, -1)


def skew_x(matrix: "AffineMatrix", degrees: float) -> "AffineMatrix":
    """Skew along the x axis by an angle in degrees."""
    return skew_x_radians(matrix, math.radians(degrees))


def skew_y(matrix: "AffineMatrix", degrees: float) -> "AffineMatrix":
    """Skew along the y axis by an angle in degrees."""
    return skew_y_radians(matrix, math.radians(degrees))


def skew_x_radians(matrix: "AffineMatrix", radians: float) -> "AffineMatrix":
    return matrix.multiply_with(1, 0, math.tan(radians), 1, 0, 0)


def skew_y_radians(matrix: "AffineMatrix", radians: float) -> "AffineMatrix":
    return matrix.multiply_with(1, math.tan(radians), 0, 1, 0, 0)


class TransformKind(enum.Enum):
    """Primitive transform functions understood by the string parser.

    Each value is the function name as written in transform strings.
    """

    TRANSLATE = "translate"
    TRANSLATE_X = "translateX"
    TRANSLATE_Y = "translateY"
    SCALE = "scale"
    SCALE_X = "scaleX"
    SCALE_Y = "scaleY"
    ROTATE = "rotate"
    SKEW_X = "skewX"
    SKEW_Y = "skewY"
    MATRIX = "matrix"

    @property
    def arities(self) -> tuple[int, ...]:
        """Accepted argument counts, in increasing order."""
        return _ARITIES[self]


_ARITIES = {
    TransformKind.TRANSLATE: (1, 2),
    TransformKind.TRANSLATE_X: (1,),
    TransformKind.TRANSLATE_Y: (1,),
    TransformKind.SCALE: (1, 2),
    TransformKind.SCALE_X: (1,),
    TransformKind.SCALE_Y: (1,),
    # Angle, then an optional pivot.
    TransformKind.ROTATE: (1, 3),
    TransformKind.SKEW_X: (1,),
    TransformKind.SKEW_Y: (1,),
    TransformKind.MATRIX: (6,),
}


class TransformOp(NamedTuple):
    """One primitive transform with its numeric arguments.

    Angles are in degrees.
    """

    kind: TransformKind
    args: tuple[float, ...]


def apply_operation(matrix: "AffineMatrix", op: TransformOp) -> "AffineMatrix":
    """Apply a single primitive operation to `matrix`.

    Parameters
    ----------
    matrix : AffineMatrix
        Matrix to extend.
    op : TransformOp
        Operation to apply. Its argument count must be one of ``op.kind.arities``.

    Returns
    -------
    AffineMatrix
        ``matrix @ primitive``.

    Raises
    ------
    InvalidArgumentError
        If the argument count is not accepted by the operation.
    """
    kind, args = op
    if len(args) not in kind.arities:
        expected = " or ".join(str(n) for n in kind.arities)
        raise InvalidArgumentError(
            f"{kind.value}() takes {expected} argument(s), got {len(args)}."
        )

    if kind is TransformKind.TRANSLATE:
        return translate(matrix, *args)
    elif kind is TransformKind.TRANSLATE_X:
        return translate_x(matrix, *args)
    elif kind is TransformKind.TRANSLATE_Y:
        return translate_y(matrix, *args)
    elif kind is TransformKind.SCALE:
        return scale(matrix, *args)
    elif kind is TransformKind.SCALE_X:
        return scale_x(matrix, *args)
    elif kind is TransformKind.SCALE_Y:
        return scale_y(matrix, *args)
    elif kind is TransformKind.ROTATE:
        return rotate(matrix, *args)
    elif kind is TransformKind.SKEW_X:
        return skew_x(matrix, *args)
    elif kind is TransformKind.SKEW_Y:
        return skew_y(matrix, *args)
    elif kind is TransformKind.MATRIX:
        return matrix.multiply_with(*args)
    raise AssertionError(f"Unhandled transform kind: {kind!r}")
