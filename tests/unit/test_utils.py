"""Tests for affinekit._utils."""

import pytest

from affinekit._utils import (
    _one_level_deeper,
    find_stack_level,
    format_number,
    round_number,
)


def test_find_stack_level():
    """Test find_stack_level."""
    assert find_stack_level() == 1
    assert _one_level_deeper() == 2


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (2.0, "2"),
            (-3.0, "-3"),
            (0.5, "0.5"),
            (-0.0, "0"),
            (0.1 + 0.2, "0.30000000000000004"),
            (1e-07, "1e-07"),
        ],
    )
    def test_values(self, value, expected):
        """Integral values drop the trailing .0 and others keep full precision."""
        assert format_number(value) == expected


class TestRoundNumber:
    """Tests for round_number."""

    def test_strips_representation_noise(self):
        """Values a hair away from an integer round onto it."""
        assert round_number(1.9999999999, 7) == 2.0
        assert format_number(round_number(1.9999999999, 7)) == "2"

    def test_negative_zero(self):
        """Tiny negative values round to positive zero."""
        assert format_number(round_number(-1e-12, 7)) == "0"

    def test_precision(self):
        """Only the requested number of decimals is kept."""
        assert round_number(0.123456789, 3) == 0.123
