"""Domain models for kumiko.

This module contains the core domain models representing the drawn design,
the strips derived from it, and their placement on stock boards. All models
are designed to be:

- Immutable (frozen dataclasses, replaced rather than edited)
- Serializable to the design and layout JSON documents
- Independent of rendering and export details

Key classes:
- Point, Segment: What the user draws, in grid units
- Intersection, OverUnderAssignment: Crossings and their threading
- Notch, DesignStrip: Physical strips in millimetres
- Piece, FullCut, LayoutGroup: Placement on stock boards
"""

from kumiko.domain.design import (
    DesignStrip,
    Intersection,
    Notch,
    NotchEdge,
    OverUnderAssignment,
    Sidedness,
    intersection_key,
    pair_key,
)
from kumiko.domain.geometry import Point, Segment
from kumiko.domain.layout import FullCut, LayoutGroup, Piece, Rotation

__all__: list[str] = [
    # Enums
    "NotchEdge",
    "Rotation",
    "Sidedness",
    # Core types
    "DesignStrip",
    "FullCut",
    "Intersection",
    "LayoutGroup",
    "Notch",
    "OverUnderAssignment",
    "Piece",
    "Point",
    "Segment",
    # Helpers
    "intersection_key",
    "pair_key",
]
