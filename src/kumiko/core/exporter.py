"""Vector export of layout groups to depth-annotated SVG.

Every cut path carries a ``shaper:cutDepth`` length attribute so a CNC
controller can read per-path depth. Strip outlines and separation cuts are
full depth; notch slots are half depth. Document units are millimetres and
the viewBox equals the padded bounding region, with no extra scaling.

Edge order for each piece, in local strip coordinates (x along the strip,
y across it, height = bit diameter):
1. Top edge segments between notches (full depth), interleaved with each
   notch's slot walls: left, bottom, right (half depth)
2. Bottom, left and right edges (full depth)
"""

import io
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

import structlog
import svgwrite
from svgwrite.shapes import Line

from kumiko.config import CuttingParams, ExportConfig, ExportPass
from kumiko.core.geometry import rotate_point
from kumiko.domain import DesignStrip, FullCut, LayoutGroup, Notch, NotchEdge, Piece
from kumiko.exceptions import NothingToExportError
from kumiko.utils import ExportLogger, ExportStats

logger = structlog.get_logger(__name__)

SHAPER_NS = "http://www.shapertools.com/namespaces/shaper"
CUT_DEPTH_ATTR = "shaper:cutDepth"

# Top-edge pieces shorter than this are not emitted
EDGE_EPSILON = 1e-6


class CutKind(str, Enum):
    """Semantic class of an exported path."""

    OUTLINE = "outline"
    NOTCH = "notch"
    SEPARATION = "separation-cut"


@dataclass(frozen=True, slots=True)
class CutEdge:
    """A straight cut path with its depth, in millimetres."""

    x1: float
    y1: float
    x2: float
    y2: float
    depth_mm: float
    kind: CutKind


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned region in millimetres."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def padded(self, margin: float) -> "BoundingBox":
        return BoundingBox(
            self.min_x - margin, self.min_y - margin, self.max_x + margin, self.max_y + margin
        )

    def shifted(self, dx: float, dy: float) -> "BoundingBox":
        return BoundingBox(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    @classmethod
    def of_points(cls, points: Iterable[tuple[float, float]]) -> "BoundingBox":
        xs, ys = zip(*points)
        return cls(min(xs), min(ys), max(xs), max(ys))

    def view_box(self) -> str:
        return f"{self.min_x:.3f} {self.min_y:.3f} {self.width:.3f} {self.height:.3f}"


@dataclass(frozen=True)
class PieceGeometry:
    """Cut paths of one placed piece, in local strip coordinates."""

    piece: Piece
    strip: DesignStrip
    width: float
    height: float
    edges: tuple[CutEdge, ...]


@dataclass(frozen=True)
class ExportWarning:
    """A non-fatal export problem (orphaned piece, two-pass strip)."""

    kind: str
    item_id: str
    message: str


@dataclass
class ExportResult:
    """An exported vector document and what went into it."""

    svg: str
    bounds: BoundingBox
    pieces: list[PieceGeometry] = field(default_factory=list)
    separation_cuts: list[CutEdge] = field(default_factory=list)
    warnings: list[ExportWarning] = field(default_factory=list)
    stats: ExportStats = field(default_factory=ExportStats)

    @property
    def orphaned_piece_ids(self) -> list[str]:
        return [w.item_id for w in self.warnings if w.kind == "orphaned-piece"]


@dataclass
class _GroupGeometry:
    group: LayoutGroup
    pieces: list[PieceGeometry]
    cuts: list[tuple[FullCut, CutEdge]]
    bounds: BoundingBox


class VectorExporter:
    """Serializes layout groups into a depth-annotated SVG document.

    Example:
        exporter = VectorExporter(params)
        result = exporter.export_group(group, {s.id: s for s in strips})
        Path("board.svg").write_text(result.svg)
    """

    def __init__(self, params: CuttingParams, config: ExportConfig | None = None) -> None:
        """Initialize the exporter.

        Args:
            params: Cutting parameters (bit size, full and half depths)
            config: Export settings (margin, pass, strokes)
        """
        self.params = params
        self.config = config or ExportConfig()

    @property
    def full_depth(self) -> float:
        return self.params.cut_depth

    @property
    def half_depth(self) -> float:
        return self.params.notch_depth

    def _notches_for_pass(self, strip: DesignStrip) -> list[Notch]:
        export_pass = self.config.export_pass
        if export_pass is ExportPass.TOP:
            selected = [n for n in strip.notches if n.edge is NotchEdge.TOP]
        elif export_pass is ExportPass.BOTTOM:
            selected = [n for n in strip.notches if n.edge is NotchEdge.BOTTOM]
        else:
            selected = list(strip.notches)
        return sorted(selected, key=lambda n: n.left_mm)

    def piece_edges(self, strip: DesignStrip) -> list[CutEdge]:
        """Cut paths for one strip in local coordinates, in emission order."""
        w = strip.length_mm
        h = self.params.bit_size
        full = self.full_depth
        half = self.half_depth
        outline = self.config.export_pass is not ExportPass.BOTTOM
        edges: list[CutEdge] = []

        current = 0.0
        for notch in self._notches_for_pass(strip):
            if outline and notch.left_mm > current + EDGE_EPSILON:
                edges.append(CutEdge(current, 0.0, notch.left_mm, 0.0, full, CutKind.OUTLINE))
            edges.append(CutEdge(notch.left_mm, 0.0, notch.left_mm, h, half, CutKind.NOTCH))
            edges.append(CutEdge(notch.left_mm, h, notch.right_mm, h, half, CutKind.NOTCH))
            edges.append(CutEdge(notch.right_mm, h, notch.right_mm, 0.0, half, CutKind.NOTCH))
            current = max(current, notch.right_mm)

        if outline:
            if current < w - EDGE_EPSILON:
                edges.append(CutEdge(current, 0.0, w, 0.0, full, CutKind.OUTLINE))
            edges.append(CutEdge(0.0, h, w, h, full, CutKind.OUTLINE))
            edges.append(CutEdge(0.0, 0.0, 0.0, h, full, CutKind.OUTLINE))
            edges.append(CutEdge(w, 0.0, w, h, full, CutKind.OUTLINE))
        return edges

    def piece_footprint(self, piece: Piece, strip: DesignStrip) -> BoundingBox:
        """Region a placed piece occupies.

        By default rotation is ignored (width = strip length, height = bit
        diameter at the piece origin). With ``account_for_rotation`` the
        rotated rectangle's extent is used instead.
        """
        w = strip.length_mm
        h = self.params.bit_size
        if not self.config.account_for_rotation or piece.rotation == 0:
            return BoundingBox(piece.x, piece.y, piece.x + w, piece.y + h)
        corners = [
            rotate_point(cx, cy, piece.rotation, 0.0, h / 2)
            for cx, cy in ((0.0, 0.0), (w, 0.0), (w, h), (0.0, h))
        ]
        return BoundingBox.of_points((piece.x + cx, piece.y + cy) for cx, cy in corners)

    def _collect_group(
        self,
        group: LayoutGroup,
        strips: Mapping[str, DesignStrip],
        export_logger: ExportLogger,
        warnings: list[ExportWarning],
    ) -> _GroupGeometry | None:
        export_logger.log_group_start(group.id, len(group.pieces), len(group.full_cuts))
        pieces: list[PieceGeometry] = []
        boxes: list[BoundingBox] = []

        for piece in group.pieces.values():
            strip = strips.get(piece.strip_id)
            if strip is None:
                export_logger.log_orphaned_piece(group.id, piece.id, piece.strip_id)
                warnings.append(
                    ExportWarning(
                        "orphaned-piece",
                        piece.id,
                        f"piece '{piece.id}' references missing strip '{piece.strip_id}'",
                    )
                )
                continue
            if strip.requires_two_pass and self.config.export_pass is ExportPass.ALL:
                export_logger.log_two_pass_strip(piece.id, strip.id)
                warnings.append(
                    ExportWarning(
                        "two-pass-strip",
                        piece.id,
                        f"strip '{strip.id}' has notches on both faces",
                    )
                )
            edges = self.piece_edges(strip)
            if not edges:
                continue
            notch_count = sum(1 for e in edges if e.kind is CutKind.NOTCH) // 3
            export_logger.log_piece_exported(piece.id, strip.id, notch_count)
            pieces.append(
                PieceGeometry(piece, strip, strip.length_mm, self.params.bit_size, tuple(edges))
            )
            boxes.append(self.piece_footprint(piece, strip))

        cuts: list[tuple[FullCut, CutEdge]] = []
        if self.config.export_pass is not ExportPass.BOTTOM:
            for cut in group.full_cuts.values():
                edge = CutEdge(cut.x1, cut.y1, cut.x2, cut.y2, self.full_depth, CutKind.SEPARATION)
                export_logger.log_separation_cut(cut.id)
                cuts.append((cut, edge))
                boxes.append(BoundingBox.of_points([(cut.x1, cut.y1), (cut.x2, cut.y2)]))

        if not boxes:
            return None

        bounds = boxes[0]
        for box in boxes[1:]:
            bounds = bounds.union(box)
        export_logger.log_group_complete(group.id)
        return _GroupGeometry(group, pieces, cuts, bounds)

    def export_group(
        self,
        group: LayoutGroup | None,
        strips: Mapping[str, DesignStrip] | Iterable[DesignStrip],
    ) -> ExportResult:
        """Export a single group.

        Raises:
            NothingToExportError: If there is no group, or nothing in it to cut
        """
        if group is None:
            raise NothingToExportError("no active layout group")
        return self._export([group], strips, title=group.name)

    def export_all(
        self,
        groups: Iterable[LayoutGroup],
        strips: Mapping[str, DesignStrip] | Iterable[DesignStrip],
        title: str = "Kumiko layout",
    ) -> ExportResult:
        """Export every group into one document, stacked top to bottom.

        Raises:
            NothingToExportError: If no group has anything to cut
        """
        return self._export(list(groups), strips, title=title)

    def _export(
        self,
        groups: list[LayoutGroup],
        strips: Mapping[str, DesignStrip] | Iterable[DesignStrip],
        title: str,
    ) -> ExportResult:
        strip_map = strips if isinstance(strips, Mapping) else {s.id: s for s in strips}
        if not groups:
            raise NothingToExportError("no layout groups")

        export_logger = ExportLogger()
        warnings: list[ExportWarning] = []
        collected: list[tuple[_GroupGeometry, float]] = []
        cursor_y: float | None = None

        for group in groups:
            if group.is_empty():
                logger.debug("Skipping empty group", group=group.id)
                continue
            geometry = self._collect_group(group, strip_map, export_logger, warnings)
            if geometry is None:
                continue
            # Groups after the first are stacked below the previous one
            if cursor_y is None:
                offset = 0.0
                cursor_y = geometry.bounds.max_y
            else:
                offset = cursor_y + self.config.group_spacing - geometry.bounds.min_y
                cursor_y = geometry.bounds.max_y + offset
            collected.append((geometry, offset))

        if not collected:
            orphans = sum(1 for w in warnings if w.kind == "orphaned-piece")
            where = f"group '{groups[0].name}'" if len(groups) == 1 else "the selected groups"
            if orphans:
                reason = f"nothing left to cut in {where}, {orphans} orphaned piece(s) skipped"
            elif len(groups) == 1:
                reason = f"{where} has no pieces or cuts to cut"
            else:
                reason = "no group has pieces or cuts to cut"
            raise NothingToExportError(reason, warnings=warnings)

        bounds = collected[0][0].bounds.shifted(0.0, collected[0][1])
        for geometry, offset in collected[1:]:
            bounds = bounds.union(geometry.bounds.shifted(0.0, offset))
        bounds = bounds.padded(self.config.margin)

        svg = self._render(collected, bounds, title, multi=len(groups) > 1)
        result = ExportResult(
            svg=svg,
            bounds=bounds,
            pieces=[p for g, _ in collected for p in g.pieces],
            separation_cuts=[e for g, _ in collected for _, e in g.cuts],
            warnings=warnings,
            stats=export_logger.stats,
        )
        logger.info(
            "Export complete",
            groups=len(collected),
            pieces=result.stats.pieces_exported,
            skipped=result.stats.pieces_skipped,
            cuts=result.stats.separation_cuts,
        )
        return result

    def _line(self, dwg: svgwrite.Drawing, edge: CutEdge) -> Line:
        line = dwg.line(
            start=(round(edge.x1, 3), round(edge.y1, 3)),
            end=(round(edge.x2, 3), round(edge.y2, 3)),
            class_=edge.kind.value,
        )
        line.attribs[CUT_DEPTH_ATTR] = f"{edge.depth_mm:.3f}mm"
        if edge.kind is CutKind.NOTCH:
            line.attribs["stroke"] = self.config.notch_stroke
        return line

    def _render(
        self,
        collected: list[tuple[_GroupGeometry, float]],
        bounds: BoundingBox,
        title: str,
        multi: bool,
    ) -> str:
        dwg = svgwrite.Drawing(
            size=(f"{bounds.width:.3f}mm", f"{bounds.height:.3f}mm"),
            viewBox=bounds.view_box(),
            debug=False,
        )
        dwg.attribs["xmlns:shaper"] = SHAPER_NS
        dwg.set_desc(title=title)

        layout = dwg.g(
            id="kumiko-layout",
            fill="none",
            stroke=self.config.outline_stroke,
            stroke_width=self.config.stroke_width,
        )
        for geometry, offset in collected:
            container = dwg.g(id=f"group-{geometry.group.id}", class_="layout-group")
            container.attribs["data-name"] = geometry.group.name
            if multi and offset:
                container.translate(0, round(offset, 3))

            for piece_geometry in geometry.pieces:
                piece = piece_geometry.piece
                g = dwg.g(id=f"piece-{piece.id}", class_="piece")
                g.attribs["data-strip-id"] = piece_geometry.strip.id
                g.translate(round(piece.x, 3), round(piece.y, 3))
                if piece.rotation:
                    g.rotate(int(piece.rotation), center=(0, round(piece_geometry.height / 2, 3)))
                for edge in piece_geometry.edges:
                    g.add(self._line(dwg, edge))
                container.add(g)

            if geometry.cuts:
                separation = dwg.g(class_="separation-cuts", stroke=self.config.separation_stroke)
                for cut, edge in geometry.cuts:
                    line = self._line(dwg, edge)
                    line.attribs["id"] = f"cut-{cut.id}"
                    separation.add(line)
                container.add(separation)

            layout.add(container)

        dwg.add(layout)
        buffer = io.StringIO()
        dwg.write(buffer)
        return buffer.getvalue()
