"""Python package for composing, inverting and decomposing 2D affine transforms."""

__all__ = [
    "AffineKitError",
    "AffineMatrix",
    "DecomposedTransform",
    "InvalidArgumentError",
    "SingularMatrixError",
    "TransformKind",
    "TransformOp",
    "UnparseableNumberError",
    "apply_operation",
    "compose_affine",
    "decompose_affine",
    "parse",
    "parse_operations",
    "serialize",
    "__version__",
]

from importlib import metadata

__version__ = metadata.version("affinekit")

from affinekit.builder import TransformKind, TransformOp, apply_operation
from affinekit.codec import parse, parse_operations, serialize
from affinekit.decompose import DecomposedTransform, compose_affine, decompose_affine
from affinekit.exceptions import (
    AffineKitError,
    InvalidArgumentError,
    SingularMatrixError,
    UnparseableNumberError,
)
from affinekit.matrix import AffineMatrix
