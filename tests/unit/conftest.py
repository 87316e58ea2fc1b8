"""Shared fixtures for unit tests."""

import math

import pytest

from affinekit import AffineMatrix, DecomposedTransform, compose_affine


@pytest.fixture
def random_matrices(rng):
    """Factory for well-conditioned random affine matrices.

    Determinants are kept away from zero so that inverses and decompositions stay
    accurate to the tolerances used in the tests.
    """

    def _make(n=50):
        matrices = []
        while len(matrices) < n:
            m = AffineMatrix.from_array(rng.standard_normal(6) * 3)
            if abs(m.determinant) > 0.1:
                matrices.append(m)
        return matrices

    return _make


@pytest.fixture
def random_decompositions(rng):
    """Factory for random factors with bounded shear and scales.

    The resulting matrices have no near-vertical skew, so their serialized form
    round-trips to within 1e-5.
    """

    def _make(n=50):
        result = []
        for _ in range(n):
            result.append(
                DecomposedTransform(
                    translate_x=rng.uniform(-100, 100),
                    translate_y=rng.uniform(-100, 100),
                    rotation_radians=rng.uniform(0, 2 * math.pi),
                    shear=rng.uniform(-1, 1),
                    scale_x=rng.uniform(0.5, 3) * rng.choice([-1, 1]),
                    scale_y=rng.uniform(0.5, 3),
                )
            )
        return result

    return _make


@pytest.fixture
def sample_matrix():
    """Uniform scale by 2 followed by a translation of (50, 50)."""
    return AffineMatrix.from_components(2, 0, 0, 2, 50, 50)


@pytest.fixture
def composed_matrix():
    """Matrix with every kind of factor, built from known values."""
    return compose_affine(DecomposedTransform(10.0, -20.0, 0.5, 0.3, 2.0, 3.0))
