"""Two-phase design session.

A DesignSession holds the canonical state (segments, cutting parameters,
over/under overrides, layout groups) and gates mutations by workflow phase:

- DESIGN: segments, crossings and parameters may change
- LAYOUT: strips are read-only; pieces, cuts and groups may change

Intersections and strips are never stored. They are recomputed from the
canonical state on every access, so a toggled crossing always reaches both
strips it touches.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any

import structlog

from kumiko.config import CuttingParams, ExportConfig, KumikoSettings, parse_params
from kumiko.core.exporter import ExportResult, VectorExporter
from kumiko.core.intersections import compute_intersections, toggle_override
from kumiko.core.layout import LayoutModel, PlacementProgress
from kumiko.core.normalize import NormalizationEngine
from kumiko.core.strips import StripBuilder
from kumiko.domain import (
    DesignStrip,
    FullCut,
    Intersection,
    LayoutGroup,
    OverUnderAssignment,
    Piece,
    Segment,
)
from kumiko.exceptions import DegenerateSegmentError, ModeError
from kumiko.utils import new_id

logger = structlog.get_logger(__name__)


class Mode(str, Enum):
    """Workflow phase."""

    DESIGN = "design"
    LAYOUT = "layout"


class DesignSession:
    """Canonical design and layout state with derived strips.

    Example:
        session = DesignSession()
        session.add_segment(0, 0, 10, 0)
        session.add_segment(5, -5, 5, 5)
        session.enter_layout()
        for strip in session.normalized_strips:
            session.place_piece(strip.id, 0, 0)
        svg = session.export().svg
    """

    def __init__(
        self,
        settings: KumikoSettings | None = None,
        name: str = "Untitled",
        segments: Iterable[Segment] | None = None,
        overrides: OverUnderAssignment | None = None,
        layout: LayoutModel | None = None,
    ) -> None:
        self.settings = settings or KumikoSettings()
        self.name = name
        self._mode = Mode.DESIGN
        self._params = self.settings.params
        self._segments: dict[str, Segment] = {s.id: s for s in (segments or [])}
        self._overrides = (overrides or OverUnderAssignment()).restricted_to(self._segments)
        self._layout = layout or LayoutModel()
        self._normalizer = NormalizationEngine()

    # -- state ---------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def params(self) -> CuttingParams:
        return self._params

    @property
    def segments(self) -> dict[str, Segment]:
        """Snapshot of segments in drawing order."""
        return dict(self._segments)

    @property
    def overrides(self) -> OverUnderAssignment:
        return self._overrides

    @property
    def layout(self) -> LayoutModel:
        return self._layout

    # -- derived -------------------------------------------------------

    @property
    def intersections(self) -> dict[str, Intersection]:
        return compute_intersections(self._segments.values(), self._overrides)

    @property
    def strips(self) -> list[DesignStrip]:
        builder = StripBuilder(self._params, self.settings.strips)
        return builder.build(self._segments.values(), self.intersections)

    @property
    def normalized_strips(self) -> list[DesignStrip]:
        return self._normalizer.normalize_all(self.strips)

    def strip_map(self) -> dict[str, DesignStrip]:
        return {s.id: s for s in self.normalized_strips}

    # -- phase ---------------------------------------------------------

    def _require(self, mode: Mode, operation: str) -> None:
        if self._mode is not mode:
            raise ModeError(operation, self._mode.value)

    def enter_layout(self) -> None:
        self._mode = Mode.LAYOUT

    def enter_design(self) -> None:
        self._mode = Mode.DESIGN

    # -- design mutations ----------------------------------------------

    def add_segment(
        self, x1: float, y1: float, x2: float, y2: float, segment_id: str | None = None
    ) -> Segment:
        """Add a drawn segment.

        Raises:
            ModeError: Outside design mode
            DegenerateSegmentError: If start and end coincide
        """
        self._require(Mode.DESIGN, "add_segment")
        segment = Segment(id=segment_id or new_id(), x1=x1, y1=y1, x2=x2, y2=y2)
        if segment.is_degenerate():
            raise DegenerateSegmentError(segment.id)
        self._segments = {**self._segments, segment.id: segment}
        return segment

    def remove_segment(self, segment_id: str) -> bool:
        """Remove a segment and the overrides that reference it.

        Pieces cut from the segment's strip stay in the layout as orphans.
        """
        self._require(Mode.DESIGN, "remove_segment")
        if segment_id not in self._segments:
            return False
        remaining = {k: v for k, v in self._segments.items() if k != segment_id}
        self._segments = remaining
        self._overrides = self._overrides.restricted_to(remaining)
        return True

    def toggle_intersection(self, intersection_id: str) -> Intersection:
        """Flip which segment is over at one crossing.

        Raises:
            KeyError: If the intersection does not exist
        """
        self._require(Mode.DESIGN, "toggle_intersection")
        crossing = self.intersections[intersection_id]
        self._overrides = toggle_override(crossing, self._overrides, self._segments)
        logger.debug("Toggled crossing", intersection=intersection_id, a_over_b=not crossing.a_over_b)
        return self.intersections[intersection_id]

    def set_override(self, segment_a_id: str, segment_b_id: str, a_over_b: bool) -> None:
        self._require(Mode.DESIGN, "set_override")
        self._overrides = self._overrides.with_override(segment_a_id, segment_b_id, a_over_b)

    def update_params(self, **changes: Any) -> None:
        """Replace cutting parameters.

        Changing ``cut_depth`` without giving ``half_cut_depth`` resets the
        half depth to half the new full depth.

        Raises:
            ParameterError: If a value is not a number
        """
        self._require(Mode.DESIGN, "update_params")
        current = self._params.model_dump()
        if "cut_depth" in changes and "half_cut_depth" not in changes:
            current["half_cut_depth"] = None
        self._params = parse_params({**current, **changes})

    # -- layout mutations ----------------------------------------------

    def place_piece(
        self, strip_id: str, x: float, y: float, rotation: Any = 0, group_id: str | None = None
    ) -> Piece:
        self._require(Mode.LAYOUT, "place_piece")
        return self._layout.place_piece(group_id or self._layout.active_group_id, strip_id, x, y, rotation)

    def add_cut(
        self, x1: float, y1: float, x2: float, y2: float, group_id: str | None = None
    ) -> FullCut:
        self._require(Mode.LAYOUT, "add_cut")
        return self._layout.add_cut(group_id or self._layout.active_group_id, x1, y1, x2, y2)

    def delete_piece(self, piece_id: str, group_id: str | None = None) -> bool:
        self._require(Mode.LAYOUT, "delete_piece")
        return self._layout.delete_piece(group_id or self._layout.active_group_id, piece_id)

    def delete_cut(self, cut_id: str, group_id: str | None = None) -> bool:
        self._require(Mode.LAYOUT, "delete_cut")
        return self._layout.delete_cut(group_id or self._layout.active_group_id, cut_id)

    def add_group(self, name: str | None = None) -> LayoutGroup:
        self._require(Mode.LAYOUT, "add_group")
        return self._layout.add_group(name)

    def delete_group(self, group_id: str) -> bool:
        self._require(Mode.LAYOUT, "delete_group")
        return self._layout.delete_group(group_id)

    def rename_group(self, group_id: str, name: str) -> LayoutGroup:
        self._require(Mode.LAYOUT, "rename_group")
        return self._layout.rename_group(group_id, name)

    def set_active_group(self, group_id: str) -> None:
        self._layout.set_active_group(group_id)

    # -- outputs -------------------------------------------------------

    def placement_progress(self) -> PlacementProgress:
        return self._layout.placement_progress(self.strips)

    def export(
        self,
        group_id: str | None = None,
        all_groups: bool = False,
        config: ExportConfig | None = None,
    ) -> ExportResult:
        """Export the active group, a named group, or every group.

        Raises:
            NothingToExportError: If the selection has nothing to cut
            GroupNotFoundError: If ``group_id`` does not exist
        """
        exporter = VectorExporter(self._params, config or self.settings.export)
        strips = self.strip_map()
        if all_groups:
            return exporter.export_all(self._layout.groups.values(), strips, title=self.name)
        group = self._layout.get_group(group_id) if group_id else self._layout.active_group
        return exporter.export_group(group, strips)
