"""Unit tests for intersection derivation and over/under threading."""

from kumiko.core.intersections import compute_intersections, default_a_over_b, toggle_override
from kumiko.domain import OverUnderAssignment, Segment


class TestComputeIntersections:
    """Tests for compute_intersections."""

    def test_single_crossing(self, cross: list[Segment]) -> None:
        result = compute_intersections(cross)
        assert list(result) == ["int_1:h_v@5,0"]
        crossing = result["int_1:h_v@5,0"]
        assert (crossing.x, crossing.y) == (5, 0)
        assert crossing.segment_a_id == "h"
        assert crossing.segment_b_id == "v"

    def test_earlier_segment_is_under_by_default(self, cross: list[Segment]) -> None:
        crossing = next(iter(compute_intersections(cross).values()))
        assert crossing.a_over_b is False
        assert crossing.under_segment_id == "h"
        assert default_a_over_b(cross[0], cross[1]) is False

    def test_parallel_segments_have_no_crossings(self) -> None:
        segments = [Segment("a", 0, 0, 10, 0), Segment("b", 0, 2, 10, 2)]
        assert compute_intersections(segments) == {}

    def test_empty_and_single(self) -> None:
        assert compute_intersections([]) == {}
        assert compute_intersections([Segment("a", 0, 0, 1, 0)]) == {}

    def test_three_segments_through_one_point(self) -> None:
        segments = [
            Segment("h", 0, 0, 10, 0),
            Segment("v", 5, -5, 5, 5),
            Segment("d", 0, -5, 10, 5),
        ]
        result = compute_intersections(segments)
        assert len(result) == 3
        assert {(c.x, c.y) for c in result.values()} == {(5, 0)}

    def test_ids_with_underscores_keep_every_crossing(self) -> None:
        segments = [
            Segment("a_b", -5, 0, 5, 0),
            Segment("c", 0, -5, 0, 5),
            Segment("a", -5, -5, 5, 5),
            Segment("b_c", -5, 5, 5, -5),
        ]
        result = compute_intersections(segments)
        assert len(result) == 6
        pairs = {(c.segment_a_id, c.segment_b_id) for c in result.values()}
        assert ("a_b", "c") in pairs
        assert ("a", "b_c") in pairs

    def test_override_applied(self, cross: list[Segment]) -> None:
        overrides = OverUnderAssignment().with_override("h", "v", True)
        crossing = next(iter(compute_intersections(cross, overrides).values()))
        assert crossing.a_over_b is True
        assert crossing.under_segment_id == "v"

    def test_override_given_in_reverse_order(self, cross: list[Segment]) -> None:
        overrides = OverUnderAssignment().with_override("v", "h", False)
        crossing = next(iter(compute_intersections(cross, overrides).values()))
        assert crossing.over_segment_id == "h"

    def test_ids_are_deterministic(self, cross: list[Segment]) -> None:
        assert list(compute_intersections(cross)) == list(compute_intersections(cross))


class TestToggleOverride:
    """Tests for toggle_override."""

    def test_toggle_stores_override(self, cross: list[Segment]) -> None:
        segments = {s.id: s for s in cross}
        crossing = next(iter(compute_intersections(cross).values()))
        overrides = toggle_override(crossing, OverUnderAssignment(), segments)
        assert overrides.get("h", "v") is True

    def test_toggle_back_removes_override(self, cross: list[Segment]) -> None:
        segments = {s.id: s for s in cross}
        overrides = OverUnderAssignment()
        for _ in range(2):
            crossing = next(iter(compute_intersections(cross, overrides).values()))
            overrides = toggle_override(crossing, overrides, segments)
        assert len(overrides) == 0
