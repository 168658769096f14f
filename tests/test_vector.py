"""Unit tests for host-side vector operations.

Tests cover:
- magnitude and normalize, including the zero-vector error
- add with any number of vectors and zero-padding
- dot and scale
"""

import math

import pytest

from phongtracer.core.vector import add, dot, magnitude, normalize, scale


class TestMagnitude:
    """Tests for magnitude()."""

    def test_magnitude_345(self):
        assert magnitude((3.0, 4.0)) == pytest.approx(5.0)

    def test_magnitude_of_zero_vector(self):
        assert magnitude((0.0, 0.0, 0.0)) == 0.0

    def test_magnitude_accepts_lists_and_ints(self):
        assert magnitude([1, 2, 2]) == pytest.approx(3.0)


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize(
        "v",
        [(0.0, 0.0, 2.0), (1.0, -2.0, 3.0), (1e-3, 5e-4, -2e-3), (7.0,)],
    )
    def test_normalize_gives_unit_length(self, v):
        assert magnitude(normalize(v)) == pytest.approx(1.0)

    def test_normalize_keeps_direction(self):
        result = normalize((0.0, 3.0, 4.0))
        assert result == pytest.approx((0.0, 0.6, 0.8))

    def test_normalize_zero_vector_raises(self):
        with pytest.raises(ValueError, match="zero-length"):
            normalize((0.0, 0.0, 0.0))


class TestAdd:
    """Tests for add()."""

    def test_add_two_vectors(self):
        assert add((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)) == (5.0, 7.0, 9.0)

    def test_add_is_commutative(self):
        a, b = (1.5, -2.0, 0.25), (3.0, 4.0, -1.0)
        assert add(a, b) == add(b, a)

    def test_add_is_associative(self):
        a, b, c = (1.0, 2.0, 3.0), (-4.0, 0.5, 2.0), (0.25, 0.25, -8.0)
        assert add(add(a, b), c) == pytest.approx(add(a, add(b, c)))

    def test_add_zero_pads_shorter_vectors(self):
        assert add((1.0, 2.0), (1.0, 2.0, 3.0)) == (2.0, 4.0, 3.0)

    def test_add_many_vectors(self):
        assert add((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)) == (1.0, 1.0, 1.0)

    def test_add_no_vectors(self):
        assert add() == ()


class TestDotAndScale:
    """Tests for dot() and scale()."""

    @pytest.mark.parametrize("v", [(1.0, 2.0, 3.0), (-0.5, 0.0, 4.0), (0.0, 0.0, 0.0)])
    def test_dot_with_self_is_squared_magnitude(self, v):
        assert dot(v, v) == pytest.approx(magnitude(v) ** 2)

    def test_dot_orthogonal_is_zero(self):
        assert dot((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == 0.0

    def test_dot_zero_pads(self):
        assert dot((1.0, 2.0), (3.0, 4.0, 5.0)) == pytest.approx(11.0)

    def test_scale(self):
        assert scale((1.0, -2.0, 0.5), 2.0) == (2.0, -4.0, 1.0)

    def test_scale_returns_floats(self):
        result = scale([1, 2, 3], 1)
        assert all(isinstance(c, float) for c in result)
        assert not any(math.isnan(c) for c in result)
