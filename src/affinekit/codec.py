"""Conversion between transform-function strings and affine matrices.

Transform strings are lists of function calls such as
``"translate(50px, 100px) rotate(45deg) scale(2)"``. Parsing applies the functions
left to right, each inside the frame set up by the previous ones. Serializing
decomposes the matrix and writes back the shortest equivalent list.
"""

import math
import re
import warnings

from affinekit._utils import find_stack_level, format_number, round_number
from affinekit.builder import TransformKind, TransformOp, apply_operation
from affinekit.decompose import decompose_affine
from affinekit.exceptions import (
    InvalidArgumentError,
    SingularMatrixError,
    UnparseableNumberError,
)
from affinekit.matrix import AffineMatrix

__all__ = ["DEFAULT_PRECISION", "parse", "parse_operations", "serialize"]

# Number of decimal digits kept by `serialize`.
DEFAULT_PRECISION = 7

# Multiply by these to convert an angle in the given unit to degrees.
ANGLE_UNITS_TO_DEGREES = {
    "deg": 1.0,
    "rad": 180 / math.pi,
    "grad": 180 / 200,
    "turn": 360.0,
}

_KINDS_BY_NAME = {kind.value.lower(): kind for kind in TransformKind}

# Longer names first so that "translatex" is not matched as "translate".
_FUNCTION_RE = re.compile(
    r"("
    + "|".join(sorted(_KINDS_BY_NAME, key=len, reverse=True))
    + r")\s*\(([^)]*)\)",
    re.IGNORECASE,
)
_ARG_SEPARATOR_RE = re.compile(r"[\s,]+")
_NUMBER_RE = re.compile(
    r"([+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)(deg|grad|rad|turn|px)?",
    re.IGNORECASE,
)


def _parse_argument(token: str) -> float:
    """Convert one argument token to a float, resolving angle units to degrees."""
    match = _NUMBER_RE.fullmatch(token)
    if match is None:
        raise UnparseableNumberError(f"Cannot parse {token!r} as a number.")
    value = float(match.group(1))
    unit = (match.group(2) or "").lower()
    if unit in ANGLE_UNITS_TO_DEGREES:
        value *= ANGLE_UNITS_TO_DEGREES[unit]
    return value


def _fit_arguments(
    kind: TransformKind, args: list[float], source: str
) -> tuple[float, ...]:
    """Trim `args` to the largest count `kind` accepts, warning about the surplus."""
    arities = kind.arities
    if len(args) < arities[0]:
        raise InvalidArgumentError(
            f"{source!r} is missing arguments: {kind.value}() needs at least "
            f"{arities[0]}, got {len(args)}."
        )
    count = max(n for n in arities if n <= len(args))
    if count < len(args):
        warnings.warn(
            f"Ignoring {len(args) - count} extra argument(s) in {source!r}.",
            UserWarning,
            stacklevel=find_stack_level(),
        )
    return tuple(args[:count])


def parse_operations(text: str) -> list[TransformOp]:
    """Extract the transform functions from `text`, in order.

    Function names are matched case-insensitively. Text between function calls is
    ignored, and so are calls without any argument such as ``translate()``. Arguments may be separated by commas and/or whitespace, and may carry
    a ``px`` suffix (dropped) or an angle unit (``deg``, ``rad``, ``grad``,
    ``turn``; converted to degrees).

    Parameters
    ----------
    text : str
        Transform string.

    Returns
    -------
    list[TransformOp]
        One operation per function call, with angles in degrees.

    Raises
    ------
    UnparseableNumberError
        If an argument is not a number.
    InvalidArgumentError
        If a function call has fewer arguments than it requires.

    Warns
    -----
    UserWarning
        If a function call has more arguments than it accepts. The surplus is
        dropped.

    Examples
    --------
    >>> ops = parse_operations("translate(50px, 100px) rotate(0.5turn)")
    >>> [(op.kind.value, op.args) for op in ops]
    [('translate', (50.0, 100.0)), ('rotate', (180.0,))]
    """
    operations = []
    for match in _FUNCTION_RE.finditer(text):
        kind = _KINDS_BY_NAME[match.group(1).lower()]
        tokens = [t for t in _ARG_SEPARATOR_RE.split(match.group(2).strip()) if t]
        if not tokens:
            continue
        args = [_parse_argument(token) for token in tokens]
        operations.append(
            TransformOp(kind, _fit_arguments(kind, args, match.group(0)))
        )
    return operations


def parse(text: str) -> AffineMatrix:
    """Parse a transform string into a matrix.

    Parameters
    ----------
    text : str
        Transform string, e.g. ``"scale(2), translate(50, 100)"``.

    Returns
    -------
    AffineMatrix
        Identity multiplied by every function in `text`, left to right. A string
        without any recognised function gives the identity.

    Raises
    ------
    UnparseableNumberError
        If an argument is not a number.
    InvalidArgumentError
        If a function call has fewer arguments than it requires.

    Examples
    --------
    >>> parse("scale(2) translate(50, 100)").to_components()
    (2.0, 0.0, 0.0, 2.0, 100.0, 200.0)
    """
    matrix = AffineMatrix.identity()
    for op in parse_operations(text):
        matrix = apply_operation(matrix, op)
    return matrix


def serialize(matrix: AffineMatrix, precision: int = DEFAULT_PRECISION) -> str:
    """Render a matrix as the shortest equivalent transform string.

    The matrix is decomposed and written as ``translate rotate scale skewX``, in
    that order. Factors within ``10**-precision`` of their neutral value are left
    out, ``translateX``/``translateY`` and ``scaleX``/``scaleY`` pairs are merged
    into ``translate`` and ``scale``, and equal scales collapse to ``scale(s)``.
    Values are rounded to `precision` decimals.

    Parameters
    ----------
    matrix : AffineMatrix
        Matrix to render.
    precision : int, default: 7
        Number of decimal digits kept.

    Returns
    -------
    str
        Space-separated function list, or ``matrix.to_canonical_string()`` when the
        matrix is singular. The identity renders as an empty string.

    Examples
    --------
    >>> serialize(AffineMatrix.identity().translate(10, 20).rotate(90))
    'translate(10px,20px) rotate(90deg)'
    >>> serialize(AffineMatrix.identity().rotate(360))
    ''
    """
    try:
        decomposed = decompose_affine(matrix)
    except SingularMatrixError:
        return matrix.to_canonical_string()

    limit = 10.0**-precision

    def fmt(value: float) -> str:
        return format_number(round_number(value, precision))

    tokens = []

    tx = fmt(decomposed.translate_x) if abs(decomposed.translate_x) > limit else None
    ty = fmt(decomposed.translate_y) if abs(decomposed.translate_y) > limit else None
    tx, ty = (None if v == "0" else v for v in (tx, ty))
    if tx is not None and ty is not None:
        tokens.append(f"translate({tx}px,{ty}px)")
    elif tx is not None:
        tokens.append(f"translateX({tx}px)")
    elif ty is not None:
        tokens.append(f"translateY({ty}px)")

    degrees = decomposed.rotation_degrees
    if limit < degrees < 360 - limit:
        rotate = fmt(degrees)
        if rotate not in ("0", "360"):
            tokens.append(f"rotate({rotate}deg)")

    sx = fmt(decomposed.scale_x) if abs(decomposed.scale_x - 1) > limit else None
    sy = fmt(decomposed.scale_y) if abs(decomposed.scale_y - 1) > limit else None
    sx, sy = (None if v == "1" else v for v in (sx, sy))
    if sx is not None and sy is not None:
        tokens.append(f"scale({sx})" if sx == sy else f"scale({sx},{sy})")
    elif sx is not None:
        tokens.append(f"scaleX({sx})")
    elif sy is not None:
        tokens.append(f"scaleY({sy})")

    if abs(decomposed.shear) > limit:
        # Emitted as S @ K while the decomposition is K @ S, so the skew tangent is
        # rescaled by scale_y / scale_x.
        skew = math.degrees(
            math.atan(decomposed.shear * decomposed.scale_y / decomposed.scale_x)
        )
        skew_text = fmt(skew)
        if skew_text != "0":
            tokens.append(f"skewX({skew_text}deg)")

    return " ".join(tokens)
