"""Intersection derivation over the whole segment set.

Intersections are a pure function of the segments and the over/under
overrides: they are recomputed wholesale whenever either changes.
"""

from collections.abc import Iterable

import structlog

from kumiko.core.geometry import intersect
from kumiko.domain import Intersection, OverUnderAssignment, Segment, intersection_key

logger = structlog.get_logger(__name__)


def default_a_over_b(segment_a: Segment, segment_b: Segment) -> bool:  # noqa: ARG001
    """Default threading when no override exists.

    The earlier-drawn segment lies under, so each new strip is laid over
    the ones already on the grid.
    """
    return False


def compute_intersections(
    segments: Iterable[Segment],
    overrides: OverUnderAssignment | None = None,
) -> dict[str, Intersection]:
    """Compute every crossing between pairs of segments.

    Pairs are visited in drawing order, so ``segment_a`` of each intersection
    is the earlier-drawn segment. Parallel and collinear pairs produce nothing.

    Args:
        segments: Segments in drawing order
        overrides: Explicit over/under facts (defaults apply elsewhere)

    Returns:
        Intersections keyed by their deterministic id, in discovery order
    """
    overrides = overrides or OverUnderAssignment()
    segment_list = list(segments)
    result: dict[str, Intersection] = {}

    for i, seg_a in enumerate(segment_list):
        for seg_b in segment_list[i + 1 :]:
            point = intersect(seg_a, seg_b)
            if point is None:
                continue

            override = overrides.get(seg_a.id, seg_b.id)
            a_over_b = default_a_over_b(seg_a, seg_b) if override is None else override
            key = intersection_key(seg_a.id, seg_b.id, point.x, point.y)
            result[key] = Intersection(
                id=key,
                x=point.x,
                y=point.y,
                segment_a_id=seg_a.id,
                segment_b_id=seg_b.id,
                a_over_b=a_over_b,
            )

    logger.debug("Computed intersections", segments=len(segment_list), intersections=len(result))
    return result


def toggle_override(
    intersection: Intersection,
    overrides: OverUnderAssignment,
    segments: dict[str, Segment],
) -> OverUnderAssignment:
    """Flip the threading at one crossing.

    Returns a new assignment. When the flipped value equals the default the
    override is dropped, so only genuine overrides are ever persisted.
    """
    a_id = intersection.segment_a_id
    b_id = intersection.segment_b_id
    flipped = not intersection.a_over_b
    default = default_a_over_b(segments[a_id], segments[b_id])
    if flipped == default:
        return overrides.without(a_id, b_id)
    return overrides.with_override(a_id, b_id, flipped)
