"""Unit tests for the primitive transform builders."""

import math

import pytest
from numpy.testing import assert_allclose

from affinekit import AffineMatrix, InvalidArgumentError, TransformKind, TransformOp
from affinekit import builder
from affinekit.builder import apply_operation


@pytest.fixture
def identity():
    return AffineMatrix.identity()


class TestPrimitives:
    """Each primitive multiplies by its canonical matrix."""

    def test_translate(self, identity):
        assert identity.translate(5, -3).to_components() == (1, 0, 0, 1, 5, -3)

    def test_translate_axes(self, identity):
        assert identity.translate_x(5) == identity.translate(5, 0)
        assert identity.translate_y(-3) == identity.translate(0, -3)

    def test_scale(self, identity):
        assert identity.scale(2, 3).to_components() == (2, 0, 0, 3, 0, 0)

    def test_scale_uniform_default(self, identity):
        """sy defaults to sx."""
        assert identity.scale(2) == identity.scale(2, 2)

    def test_scale_zero_y_is_kept(self, identity):
        """An explicit zero sy is not replaced by sx."""
        assert identity.scale(2, 0).to_components() == (2, 0, 0, 0, 0, 0)

    def test_scale_axes(self, identity):
        assert identity.scale_x(2) == identity.scale(2, 1)
        assert identity.scale_y(3) == identity.scale(1, 3)

    def test_rotate_radians(self, identity):
        r = 0.3
        assert identity.rotate_radians(r).to_components() == (
            math.cos(r),
            math.sin(r),
            -math.sin(r),
            math.cos(r),
            0,
            0,
        )

    def test_rotate_degrees(self, identity):
        """rotate converts degrees to radians."""
        assert identity.rotate(30) == identity.rotate_radians(math.radians(30))

    def test_rotate_quarter_turn(self, identity):
        """A positive quarter turn maps the x axis onto the y axis."""
        x, y = identity.rotate(90).apply((1, 0))
        assert x == pytest.approx(0, abs=1e-12)
        assert y == pytest.approx(1)

    def test_skew(self, identity):
        t = math.tan(0.4)
        assert identity.skew_x_radians(0.4).to_components() == (1, 0, t, 1, 0, 0)
        assert identity.skew_y_radians(0.4).to_components() == (1, t, 0, 1, 0, 0)

    def test_skew_degrees(self, identity):
        assert identity.skew_x(20) == identity.skew_x_radians(math.radians(20))
        assert identity.skew_y(20) == identity.skew_y_radians(math.radians(20))

    def test_flips(self, identity):
        assert identity.flip_x().to_components() == (-1, 0, 0, 1, 0, 0)
        assert identity.flip_y().to_components() == (1, 0, 0, -1, 0, 0)

    def test_matches_explicit_multiply(self, sample_matrix):
        """Shortcuts are the same as multiplying by the primitive matrix."""
        primitive = AffineMatrix.from_components(3, 0, 0, 4, 0, 0)
        assert sample_matrix.scale(3, 4) == sample_matrix.multiply(primitive)

    def test_module_functions_match_methods(self, sample_matrix):
        """The builder functions back the matrix methods."""
        assert builder.rotate(sample_matrix, 15) == sample_matrix.rotate(15)
        assert builder.translate(sample_matrix, 1, 2) == sample_matrix.translate(1, 2)

    def test_chaining_order(self, identity):
        """Later calls act inside the frame set up by earlier ones."""
        m = identity.translate(50, 100).scale(2)
        assert m.apply((1, 1)) == (52, 102)
        m = identity.scale(2).translate(50, 100)
        assert m.apply((1, 1)) == (102, 202)

    def test_pure(self, sample_matrix):
        """No builder mutates its receiver."""
        before = sample_matrix.to_components()
        sample_matrix.rotate(30, 5, 5)
        sample_matrix.skew_x(10)
        sample_matrix.flip_y()
        assert sample_matrix.to_components() == before


class TestPivots:
    """Pivoted scale and rotate wrap the primitive in translate(-p), translate(p)."""

    def test_scale_components(self, identity):
        assert identity.scale(2, 2, 10, 10).to_components() == (2, 0, 0, 2, 10, 10)
        assert identity.scale(2, 3, 10, 10).to_components() == (2, 0, 0, 3, 10, 20)

    def test_scale_is_translate_scale_untranslate(self, identity):
        expected = identity.translate(-10, -10).scale(2, 2).translate(10, 10)
        assert identity.scale(2, 2, 10, 10) == expected

    def test_rotate_is_translate_rotate_untranslate(self, identity):
        expected = identity.translate(-4, -5).rotate(30).translate(4, 5)
        assert identity.rotate(30, 4, 5) == expected

    def test_rotate_translation(self, identity):
        m = identity.rotate(90, 5, 5)
        assert (m.e, m.f) == pytest.approx((-10, 0), abs=1e-12)

    def test_fixed_point(self, identity):
        """The point left in place is the negated pivot."""
        assert identity.scale(2, 3, 10, 10).apply((-10, -10)) == (-10, -10)
        m = identity.rotate(90, 10, 10)
        assert_allclose(m.apply((-10, -10)), (-10, -10), atol=1e-12)
        assert_allclose(m.apply((-9, -10)), (-10, -9), atol=1e-12)

    @pytest.mark.parametrize("pivot", [(1.0, None), (None, 1.0)])
    def test_half_pivot_raises(self, identity, pivot):
        with pytest.raises(InvalidArgumentError, match="pivot"):
            identity.rotate(30, *pivot)
        with pytest.raises(InvalidArgumentError, match="pivot"):
            identity.scale(2, 2, *pivot)


class TestApplyOperation:
    """Tests for the closed operation dispatch."""

    @pytest.mark.parametrize("kind", list(TransformKind))
    def test_every_kind_dispatches(self, identity, kind):
        """Every kind is handled with its minimal argument count."""
        args = tuple(float(i + 2) for i in range(kind.arities[0]))
        result = apply_operation(identity, TransformOp(kind, args))
        assert isinstance(result, AffineMatrix)
        assert result != identity

    @pytest.mark.parametrize(
        "op, expected",
        [
            (TransformOp(TransformKind.TRANSLATE, (5.0,)), (1, 0, 0, 1, 5, 0)),
            (TransformOp(TransformKind.TRANSLATE, (5.0, 6.0)), (1, 0, 0, 1, 5, 6)),
            (TransformOp(TransformKind.TRANSLATE_Y, (6.0,)), (1, 0, 0, 1, 0, 6)),
            (TransformOp(TransformKind.SCALE, (2.0,)), (2, 0, 0, 2, 0, 0)),
            (TransformOp(TransformKind.SCALE_X, (2.0,)), (2, 0, 0, 1, 0, 0)),
            (
                TransformOp(TransformKind.MATRIX, (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)),
                (1, 2, 3, 4, 5, 6),
            ),
        ],
    )
    def test_results(self, identity, op, expected):
        assert apply_operation(identity, op).to_components() == expected

    def test_rotate_with_pivot(self, identity):
        op = TransformOp(TransformKind.ROTATE, (90.0, 10.0, 10.0))
        assert apply_operation(identity, op) == identity.rotate(90, 10, 10)

    @pytest.mark.parametrize(
        "op",
        [
            TransformOp(TransformKind.ROTATE, (90.0, 10.0)),
            TransformOp(TransformKind.MATRIX, (1.0, 0.0, 0.0, 1.0)),
            TransformOp(TransformKind.SKEW_X, ()),
        ],
    )
    def test_wrong_arity_raises(self, identity, op):
        with pytest.raises(InvalidArgumentError, match="argument"):
            apply_operation(identity, op)

    def test_kind_values_are_function_names(self):
        assert TransformKind("translateX") is TransformKind.TRANSLATE_X
        assert TransformKind.SKEW_Y.value == "skewY"
