"""Affine matrix decomposition and composition utilities."""

import math
from typing import NamedTuple

from affinekit.exceptions import SingularMatrixError
from affinekit.matrix import AffineMatrix

__all__ = ["DecomposedTransform", "compose_affine", "decompose_affine"]

# Below this magnitude the sine of the rotation counts as non-negative, so angles
# within noise of 0 resolve to 0 rather than to just under 2*pi.
_SIN_TIE_TOLERANCE = 1e-12


class DecomposedTransform(NamedTuple):
    """Canonical factors of an affine matrix.

    The source matrix equals::

        translate(translate_x, translate_y)
        @ rotate_radians(rotation_radians)
        @ skew_x_radians(atan(shear))
        @ scale(scale_x, scale_y)

    so a point is scaled first, then sheared along x, rotated and finally translated.

    Attributes
    ----------
    translate_x, translate_y : float
        Translation, applied last.
    rotation_radians : float
        Rotation angle in radians, in ``[0, 2*pi)``.
    shear : float
        Tangent of the x-skew angle.
    scale_x, scale_y : float
        Scale factors. `scale_y` is always positive; `scale_x` is negative when the
        matrix mirrors the plane.
    """

    translate_x: float
    translate_y: float
    rotation_radians: float
    shear: float
    scale_x: float
    scale_y: float

    @property
    def rotation_degrees(self) -> float:
        """Rotation angle in degrees, in ``[0, 360)``."""
        return math.degrees(self.rotation_radians)

    def to_matrix(self) -> AffineMatrix:
        """Recompose the factors into a matrix. See `compose_affine`."""
        return compose_affine(self)


def compose_affine(decomposed: DecomposedTransform) -> AffineMatrix:
    """Compose translation, rotation, shear and scale into an affine matrix.

    Parameters
    ----------
    decomposed : DecomposedTransform
        Factors, as returned by `decompose_affine`.

    Returns
    -------
    AffineMatrix
        ``T @ R @ K @ S`` where ``T`` translates, ``R`` rotates, ``K`` shears along x
        and ``S`` scales.
    """
    return (
        AffineMatrix.identity()
        .translate(decomposed.translate_x, decomposed.translate_y)
        .rotate_radians(decomposed.rotation_radians)
        .skew_x_radians(math.atan(decomposed.shear))
        .scale(decomposed.scale_x, decomposed.scale_y)
    )


def decompose_affine(matrix: AffineMatrix) -> DecomposedTransform:
    """Decompose an affine matrix into translation, rotation, shear and scale.

    The columns ``X = (a, b)`` and ``Y = (c, d)`` of the linear block are the images
    of the x and y axes. Their lengths and the angle between them give the factors:

    1. The translation ``(e, f)`` is applied last, so it is read off directly and the
       remaining 2x2 block is left untouched.
    2. ``scale_x = |X|``; normalizing ``X`` leaves the rotated unit x axis.
    3. The dot product of the unit x axis with ``Y`` measures how far the y axis has
       been sheared towards the x axis. Removing that component makes ``Y``
       orthogonal to the x axis, and its remaining length is ``scale_y``.
    4. The shear is the removed component divided by ``scale_y``.
    5. The unit x axis is ``(cos(theta), sin(theta))``. ``acos`` only covers
       ``[0, pi]``, so angles whose sine is negative are mapped to ``2*pi - acos``.

    A mirroring matrix (negative determinant) cannot be written with positive
    scales only; for those the x axis is flipped and `scale_x` is negated before
    measuring shear and rotation.

    Parameters
    ----------
    matrix : AffineMatrix
        Matrix to decompose.

    Returns
    -------
    DecomposedTransform
        Factors such that ``compose_affine(result)`` reproduces `matrix` to
        floating-point tolerance.

    Raises
    ------
    SingularMatrixError
        If the determinant ``a*d - b*c`` is exactly zero.

    Notes
    -----
    See Spencer W. Thomas, "Decomposing a matrix into simple transformations",
    pp 320-323 in *Graphics Gems II*, James Arvo (ed.), Academic Press, 1991, and
    https://www.w3.org/TR/css-transforms-1/#decomposing-a-2d-matrix.
    """
    a, b, c, d, e, f = matrix
    det = a * d - b * c
    if det == 0:
        raise SingularMatrixError(f"Cannot decompose singular matrix {matrix}.")

    scale_x = math.hypot(a, b)
    if scale_x == 0:
        raise SingularMatrixError(f"Cannot decompose singular matrix {matrix}.")
    x0, x1 = a / scale_x, b / scale_x
    if det < 0:
        scale_x = -scale_x
        x0, x1 = -x0, -x1

    scaled_shear = x0 * c + x1 * d
    y0 = c - scaled_shear * x0
    y1 = d - scaled_shear * x1
    scale_y = math.hypot(y0, y1)
    if scale_y == 0:
        raise SingularMatrixError(f"Cannot decompose singular matrix {matrix}.")
    shear = scaled_shear / scale_y

    # Same as acos(x0), but atan2 keeps full precision near 0 and pi.
    principal = math.atan2(abs(x1), x0)
    if x1 >= -_SIN_TIE_TOLERANCE:
        rotation_radians = principal
    else:
        rotation_radians = 2 * math.pi - principal

    return DecomposedTransform(
        translate_x=e,
        translate_y=f,
        rotation_radians=rotation_radians,
        shear=shear,
        scale_x=scale_x,
        scale_y=scale_y,
    )
