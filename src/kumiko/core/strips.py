"""Strip derivation: segments and crossings to physical strips.

The StripBuilder turns each drawn segment into a DesignStrip whose length and
notch positions are in millimetres. One grid unit is
``stock_length / grid_divisions`` millimetres.
"""

from collections.abc import Iterable, Mapping

import structlog

from kumiko.config import CuttingParams, NotchStyle, StripConfig
from kumiko.domain import DesignStrip, Intersection, Notch, NotchEdge, Segment

logger = structlog.get_logger(__name__)


class StripBuilder:
    """Builds DesignStrips from segments and intersections.

    Example:
        builder = StripBuilder(params)
        strips = builder.build(segments, compute_intersections(segments))
    """

    def __init__(self, params: CuttingParams, config: StripConfig | None = None) -> None:
        """Initialize the builder.

        Args:
            params: Cutting parameters (bit size and grid scale are used)
            config: Strip derivation settings
        """
        self.params = params
        self.config = config or StripConfig()

    @property
    def grid_unit_mm(self) -> float:
        return self.params.grid_unit_mm

    def build(
        self,
        segments: Iterable[Segment],
        intersections: Mapping[str, Intersection],
    ) -> list[DesignStrip]:
        """Build one strip per segment, in segment order."""
        crossings = list(intersections.values())
        return [self.build_strip(segment, crossings) for segment in segments]

    def build_strip(self, segment: Segment, crossings: Iterable[Intersection]) -> DesignStrip:
        """Build the strip for a single segment.

        Args:
            segment: Source segment
            crossings: All intersections; those not involving the segment are ignored

        Returns:
            Strip with notches sorted by distance from the segment start
        """
        length_mm = segment.length * self.grid_unit_mm
        if length_mm < self.config.min_strip_length_mm:
            logger.warning("Degenerate strip", strip=segment.id, length_mm=round(length_mm, 3))

        notches: list[Notch] = []
        for crossing in crossings:
            if not crossing.involves(segment.id):
                continue
            edge = self._notch_edge(segment.id, crossing)
            if edge is None:
                continue
            notches.append(self._make_notch(segment, crossing, edge, length_mm))

        notches.sort(key=lambda n: n.distance_mm)
        return DesignStrip(
            id=segment.id,
            start=(segment.x1, segment.y1),
            end=(segment.x2, segment.y2),
            length_mm=length_mm,
            notches=tuple(notches),
        )

    def _notch_edge(self, segment_id: str, crossing: Intersection) -> NotchEdge | None:
        if crossing.is_under(segment_id):
            return NotchEdge.TOP
        if self.config.notch_style is NotchStyle.HALF_LAP:
            return NotchEdge.BOTTOM
        return None

    def _make_notch(
        self,
        segment: Segment,
        crossing: Intersection,
        edge: NotchEdge,
        length_mm: float,
    ) -> Notch:
        dx = crossing.x - segment.x1
        dy = crossing.y - segment.y1
        raw_distance = (dx * dx + dy * dy) ** 0.5 * self.grid_unit_mm
        distance = min(raw_distance, length_mm)

        half_width = self.params.bit_size / 2
        left = max(0.0, distance - half_width)
        right = min(length_mm, distance + half_width)
        clamped = (
            raw_distance > length_mm
            or distance - half_width < 0
            or distance + half_width > length_mm
        )
        if clamped:
            logger.debug(
                "Notch clamped to strip",
                strip=segment.id,
                intersection=crossing.id,
                distance_mm=round(distance, 3),
            )

        return Notch(
            id=f"{crossing.id}_{segment.id}",
            distance_mm=distance,
            edge=edge,
            left_mm=left,
            right_mm=right,
            intersection_id=crossing.id,
            other_segment_id=crossing.other_segment_id(segment.id),
            clamped=clamped,
        )


def strip_config_key(strip: DesignStrip, precision: int = 2) -> str:
    """Key shared by strips that are physically identical.

    Two strips are the same part when their lengths match and their notch
    patterns match under an end-for-end flip, a face flip, or both. The
    lexicographically smallest of the four notch encodings is canonical.
    """
    length = strip.length_mm

    def encode(distance: float, edge: NotchEdge) -> str:
        return f"{distance:.{precision}f}-{'T' if edge is NotchEdge.TOP else 'B'}"

    orientations = [
        [encode(n.distance_mm, n.edge) for n in strip.notches],
        [encode(length - n.distance_mm, n.edge) for n in strip.notches],
        [encode(n.distance_mm, n.edge.opposite()) for n in strip.notches],
        [encode(length - n.distance_mm, n.edge.opposite()) for n in strip.notches],
    ]
    canonical = min("|".join(sorted(o)) for o in orientations)
    return f"{length:.{precision}f}_{canonical}"


def group_identical_strips(strips: Iterable[DesignStrip]) -> dict[str, list[DesignStrip]]:
    """Group strips by their configuration key, preserving first-seen order."""
    groups: dict[str, list[DesignStrip]] = {}
    for strip in strips:
        groups.setdefault(strip_config_key(strip), []).append(strip)
    return groups
