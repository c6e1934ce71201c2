"""Geometric operations on grid segments.

This module provides the mathematical kernel of the pipeline:
- Segment-segment intersection (parametric form, snapped to the grid)
- Parametric position of a point along a segment
- Rotation of points for piece footprints

All functions are pure and stateless.
"""

import math
from fractions import Fraction

from kumiko.domain import Point, Segment


def round_half_up(value: float | Fraction) -> int:
    """Round to the nearest integer, halves rounding towards +infinity."""
    return math.floor(value + Fraction(1, 2))


def intersection_parameters(a: Segment, b: Segment) -> tuple[Fraction, Fraction] | None:
    """Parametric factors ``(t, u)`` of the crossing of two infinite lines.

    ``t`` is the position along ``a`` and ``u`` the position along ``b``.
    Both are exact rationals of the segment coordinates.

    Returns:
        The factors, or None for parallel, collinear or degenerate pairs
    """
    x1, y1, x2, y2 = (Fraction(v) for v in (a.x1, a.y1, a.x2, a.y2))
    x3, y3, x4, y4 = (Fraction(v) for v in (b.x1, b.y1, b.x2, b.y2))

    den = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if den == 0:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / den
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / den
    return t, u


def intersect(a: Segment, b: Segment) -> Point | None:
    """Find the crossing point of two segments.

    Segment endpoints count as crossings. The result is snapped to whole grid
    units, so it may sit slightly off the exact mathematical crossing for
    segments that do not meet on a grid point.

    Args:
        a: First segment
        b: Second segment

    Returns:
        Snapped crossing point, or None if the segments do not cross

    Examples:
        >>> h = Segment("h", 0, 0, 10, 0)
        >>> v = Segment("v", 5, -5, 5, 5)
        >>> intersect(h, v)
        Point(x=5, y=0)
    """
    params = intersection_parameters(a, b)
    if params is None:
        return None

    t, u = params
    if not (0 <= t <= 1 and 0 <= u <= 1):
        return None

    # Snap the exact crossing so argument order cannot move a .5 boundary
    x1, y1 = Fraction(a.x1), Fraction(a.y1)
    return Point(
        x=round_half_up(x1 + t * (Fraction(a.x2) - x1)),
        y=round_half_up(y1 + t * (Fraction(a.y2) - y1)),
    )


def rotate_point(x: float, y: float, degrees: float, cx: float, cy: float) -> tuple[float, float]:
    """Rotate ``(x, y)`` about ``(cx, cy)`` using SVG's clockwise-positive convention."""
    theta = math.radians(degrees)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    dx = x - cx
    dy = y - cy
    return (cx + dx * cos_t - dy * sin_t, cy + dx * sin_t + dy * cos_t)
