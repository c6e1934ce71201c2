"""Core derivation pipeline for kumiko.

This module contains the algorithms that turn a drawn design into cuttable
geometry:

- Geometry kernel (segment intersection, grid snapping)
- Intersection derivation with over/under threading
- Strip building (lengths and notch placement in millimetres)
- Notch normalization for single-pass machining
- Layout model (groups, placed pieces, separation cuts, progress)
- Vector export (depth-annotated SVG)
- Design session (two-phase state machine over all of the above)

Derived values (intersections, strips) are pure functions of the canonical
state and are recomputed in full whenever that state changes.

Key functions:
- intersect: Crossing point of two segments, snapped to the grid
- compute_intersections: All crossings of a segment set
- strip_config_key: Identity of physically identical strips

Key classes:
- StripBuilder: Segments and crossings to DesignStrips
- NormalizationEngine: Canonical notch orientation
- LayoutModel: Groups, pieces and cuts
- VectorExporter: SVG documents with per-path cut depth
- DesignSession: Canonical state plus phase gating
"""

from kumiko.core.exporter import (
    BoundingBox,
    CutEdge,
    CutKind,
    ExportResult,
    ExportWarning,
    PieceGeometry,
    VectorExporter,
)
from kumiko.core.geometry import intersect, intersection_parameters, rotate_point, round_half_up
from kumiko.core.intersections import compute_intersections, default_a_over_b, toggle_override
from kumiko.core.layout import LayoutModel, PlacementProgress
from kumiko.core.normalize import (
    NormalizationEngine,
    PassAnalysis,
    analyze_group_passes,
    has_double_sided_strips,
)
from kumiko.core.session import DesignSession, Mode
from kumiko.core.strips import StripBuilder, group_identical_strips, strip_config_key

__all__ = [
    # Export classes
    "BoundingBox",
    "CutEdge",
    "CutKind",
    "ExportResult",
    "ExportWarning",
    "PieceGeometry",
    "VectorExporter",
    # Session classes
    "DesignSession",
    "Mode",
    # Layout classes
    "LayoutModel",
    "PlacementProgress",
    # Normalization
    "NormalizationEngine",
    "PassAnalysis",
    "analyze_group_passes",
    "has_double_sided_strips",
    # Strips
    "StripBuilder",
    "group_identical_strips",
    "strip_config_key",
    # Geometry functions
    "compute_intersections",
    "default_a_over_b",
    "intersect",
    "intersection_parameters",
    "rotate_point",
    "round_half_up",
    "toggle_override",
]
