"""Core geometric types for the design grid.

This module defines the fundamental geometric types drawn by the user:
- Point: A 2D point in grid units
- Segment: A directed line segment in grid units
"""

import math
from dataclasses import dataclass
from typing import Any


def as_coordinate(value: Any) -> float:
    """Coerce a document coordinate to a finite float.

    Raises:
        ValueError: If value is a bool, not numeric, or not finite
    """
    if isinstance(value, bool):
        raise ValueError(f"coordinate {value!r} is not a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"coordinate {value!r} is not a number") from None
    if not math.isfinite(number):
        raise ValueError(f"coordinate {value!r} is not finite")
    return number


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the design grid.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in grid units
        y: Y coordinate in grid units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point, in grid units."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class Segment:
    """A user-drawn line on the design grid.

    Direction matters: notch distances along the derived strip are measured
    from the start point ``(x1, y1)``.

    Attributes:
        id: Stable segment identifier
        x1: Start X in grid units
        y1: Start Y in grid units
        x2: End X in grid units
        y2: End Y in grid units
    """

    id: str
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def start(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)

    @property
    def length(self) -> float:
        """Euclidean length in grid units."""
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    def is_degenerate(self) -> bool:
        """True when start and end coincide."""
        return self.x1 == self.x2 and self.y1 == self.y2

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the design document representation."""
        return {"id": self.id, "x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        """Deserialize from the design document representation."""
        return cls(
            id=str(data["id"]),
            x1=as_coordinate(data["x1"]),
            y1=as_coordinate(data["y1"]),
            x2=as_coordinate(data["x2"]),
            y2=as_coordinate(data["y2"]),
        )
