"""Unit tests for the geometry kernel."""

import random
from fractions import Fraction

import pytest

from kumiko.core.geometry import intersect, intersection_parameters, rotate_point, round_half_up
from kumiko.domain import Point, Segment


class TestRoundHalfUp:
    """Tests for grid snapping."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (2.4, 2), (-0.5, 0), (-1.5, -1), (-1.6, -2), (0.0, 0)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestIntersect:
    """Tests for segment-segment intersection."""

    def test_simple_cross(self) -> None:
        h = Segment("h", 0, 0, 10, 0)
        v = Segment("v", 5, -5, 5, 5)
        assert intersect(h, v) == Point(5, 0)

    def test_symmetric(self) -> None:
        h = Segment("h", 0, 0, 10, 0)
        v = Segment("v", 5, -5, 5, 5)
        assert intersect(v, h) == intersect(h, v)

    def test_symmetric_on_half_unit_crossing(self) -> None:
        # Exact crossing is (3/2, 5/2)
        a = Segment("a", 15, -20, -9, 20)
        b = Segment("b", 17, 18, -13, -12)
        assert intersect(a, b) == Point(2, 3)
        assert intersect(b, a) == Point(2, 3)

    def test_symmetric_over_random_segments(self) -> None:
        rng = random.Random(20241019)

        def segment(name: str) -> Segment:
            return Segment(name, *(rng.randint(-20, 20) for _ in range(4)))

        for _ in range(5000):
            a, b = segment("a"), segment("b")
            assert intersect(a, b) == intersect(b, a), (a, b)

    def test_parallel_segments(self) -> None:
        a = Segment("a", 0, 0, 10, 0)
        b = Segment("b", 0, 1, 10, 1)
        assert intersect(a, b) is None
        assert intersection_parameters(a, b) is None

    def test_collinear_overlap_not_a_crossing(self) -> None:
        a = Segment("a", 0, 0, 10, 0)
        b = Segment("b", 5, 0, 15, 0)
        assert intersect(a, b) is None

    def test_disjoint_segments(self) -> None:
        a = Segment("a", 0, 0, 10, 0)
        b = Segment("b", 20, -5, 20, 5)
        assert intersect(a, b) is None

    def test_endpoint_touch_counts(self) -> None:
        a = Segment("a", 0, 0, 10, 0)
        b = Segment("b", 10, 0, 10, 10)
        assert intersect(a, b) == Point(10, 0)

    def test_t_junction(self) -> None:
        a = Segment("a", 0, 0, 10, 0)
        b = Segment("b", 4, 0, 4, 8)
        assert intersect(a, b) == Point(4, 0)

    def test_result_snapped_to_grid(self) -> None:
        # Exact crossing is (1.5, 0.5)
        a = Segment("a", 0, 0, 3, 1)
        b = Segment("b", 0, 1, 3, 0)
        assert intersect(a, b) == Point(2, 1)

    def test_parameters(self) -> None:
        a = Segment("a", 0, 0, 10, 0)
        b = Segment("b", 2, -4, 2, 4)
        t, u = intersection_parameters(a, b)
        assert t == Fraction(1, 5)
        assert u == Fraction(1, 2)


class TestRotatePoint:
    """Tests for point rotation."""

    def test_quarter_turn(self) -> None:
        x, y = rotate_point(10.0, 0.0, 90, 0.0, 0.0)
        assert x == pytest.approx(0.0, abs=1e-9)
        assert y == pytest.approx(10.0)

    def test_about_center(self) -> None:
        x, y = rotate_point(2.0, 1.0, 180, 1.0, 1.0)
        assert x == pytest.approx(0.0, abs=1e-9)
        assert y == pytest.approx(1.0)

    def test_zero_rotation_is_identity(self) -> None:
        assert rotate_point(3.0, 4.0, 0, 1.0, 1.0) == pytest.approx((3.0, 4.0))
