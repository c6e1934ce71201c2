"""Derived design types: crossings, notches and strips.

Intersections and strips are pure values recomputed from the segment set,
the cutting parameters and the over/under assignment. Nothing here is
mutated after construction.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


def pair_key(segment_a_id: str, segment_b_id: str) -> tuple[str, str]:
    """Order-independent key for a pair of segments."""
    if segment_a_id <= segment_b_id:
        return (segment_a_id, segment_b_id)
    return (segment_b_id, segment_a_id)


def intersection_key(segment_a_id: str, segment_b_id: str, x: float, y: float) -> str:
    """Deterministic intersection id from the unordered pair and the position.

    The first id is length-prefixed so ids containing ``_`` cannot collide.
    """
    lo, hi = pair_key(segment_a_id, segment_b_id)
    return f"int_{len(lo)}:{lo}_{hi}@{x:g},{y:g}"


@dataclass(frozen=True)
class OverUnderAssignment:
    """Explicit over/under overrides keyed by segment pair.

    Only overrides of the default assignment are stored. Keys are normalized
    so that ``facts[(lo, hi)]`` means "``lo`` is over ``hi``". Instances are
    replaced, never edited: every mutator returns a new assignment.

    Attributes:
        facts: Mapping of ``(segment_a_id, segment_b_id)`` to ``a_over_b``
    """

    facts: Mapping[tuple[str, str], bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized: dict[tuple[str, str], bool] = {}
        for (a, b), a_over_b in self.facts.items():
            key = pair_key(a, b)
            normalized[key] = bool(a_over_b) if key[0] == a else not a_over_b
        object.__setattr__(self, "facts", normalized)

    def __len__(self) -> int:
        return len(self.facts)

    def get(self, segment_a_id: str, segment_b_id: str) -> bool | None:
        """Return the override for "a over b", or None when not overridden."""
        key = pair_key(segment_a_id, segment_b_id)
        value = self.facts.get(key)
        if value is None:
            return None
        return value if key[0] == segment_a_id else not value

    def with_override(
        self, segment_a_id: str, segment_b_id: str, a_over_b: bool
    ) -> "OverUnderAssignment":
        key = pair_key(segment_a_id, segment_b_id)
        value = a_over_b if key[0] == segment_a_id else not a_over_b
        return OverUnderAssignment({**self.facts, key: value})

    def without(self, segment_a_id: str, segment_b_id: str) -> "OverUnderAssignment":
        key = pair_key(segment_a_id, segment_b_id)
        return OverUnderAssignment({k: v for k, v in self.facts.items() if k != key})

    def restricted_to(self, segment_ids: Iterable[str]) -> "OverUnderAssignment":
        """Drop overrides that reference segments outside ``segment_ids``."""
        ids = set(segment_ids)
        return OverUnderAssignment(
            {k: v for k, v in self.facts.items() if k[0] in ids and k[1] in ids}
        )

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize to the ``intersectionOverrides`` document list."""
        return [
            {"segmentAId": a, "segmentBId": b, "aOverB": value}
            for (a, b), value in sorted(self.facts.items())
        ]

    @classmethod
    def from_list(cls, data: Iterable[dict[str, Any]]) -> "OverUnderAssignment":
        return cls(
            {(str(d["segmentAId"]), str(d["segmentBId"])): bool(d["aOverB"]) for d in data}
        )


@dataclass(frozen=True, slots=True)
class Intersection:
    """A crossing between exactly two segments.

    Attributes:
        id: Deterministic key (unordered segment pair plus position)
        x: Crossing X, snapped to whole grid units
        y: Crossing Y, snapped to whole grid units
        segment_a_id: The earlier-drawn segment of the pair
        segment_b_id: The later-drawn segment of the pair
        a_over_b: True when segment A threads over (uncut) segment B
    """

    id: str
    x: float
    y: float
    segment_a_id: str
    segment_b_id: str
    a_over_b: bool

    @property
    def over_segment_id(self) -> str:
        return self.segment_a_id if self.a_over_b else self.segment_b_id

    @property
    def under_segment_id(self) -> str:
        return self.segment_b_id if self.a_over_b else self.segment_a_id

    def involves(self, segment_id: str) -> bool:
        return segment_id in (self.segment_a_id, self.segment_b_id)

    def is_under(self, segment_id: str) -> bool:
        """True when ``segment_id`` is the notched (not-over) segment here."""
        return self.involves(segment_id) and segment_id == self.under_segment_id

    def other_segment_id(self, segment_id: str) -> str:
        return self.segment_b_id if segment_id == self.segment_a_id else self.segment_a_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "segmentAId": self.segment_a_id,
            "segmentBId": self.segment_b_id,
            "aOverB": self.a_over_b,
        }


class NotchEdge(str, Enum):
    """Face of the strip a notch is cut from."""

    TOP = "top"
    BOTTOM = "bottom"

    def opposite(self) -> "NotchEdge":
        return NotchEdge.BOTTOM if self is NotchEdge.TOP else NotchEdge.TOP


class Sidedness(Enum):
    """Notch distribution across the two faces of a strip."""

    NONE = "none"
    TOP = "top"
    BOTTOM = "bottom"
    MIXED = "mixed"


@dataclass(frozen=True, slots=True)
class Notch:
    """A half-depth slot in a strip.

    Attributes:
        id: Notch identifier (intersection id + strip id)
        distance_mm: Centre of the slot, measured from the strip start
        edge: Face the slot is cut from
        left_mm: Slot start along the strip, clamped to the strip
        right_mm: Slot end along the strip, clamped to the strip
        intersection_id: Crossing that produced this notch
        other_segment_id: Segment crossing at this notch
        clamped: True when the slot was cut short by a strip end
    """

    id: str
    distance_mm: float
    edge: NotchEdge
    left_mm: float
    right_mm: float
    intersection_id: str = ""
    other_segment_id: str = ""
    clamped: bool = False

    @property
    def width_mm(self) -> float:
        return self.right_mm - self.left_mm

    def reversed(self, length_mm: float) -> "Notch":
        """The same notch measured from the other end of the strip."""
        return replace(
            self,
            distance_mm=length_mm - self.distance_mm,
            left_mm=length_mm - self.right_mm,
            right_mm=length_mm - self.left_mm,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "distanceMM": self.distance_mm,
            "edge": self.edge.value,
            "leftMM": self.left_mm,
            "rightMM": self.right_mm,
            "intersectionId": self.intersection_id,
            "otherSegmentId": self.other_segment_id,
            "clamped": self.clamped,
        }


@dataclass(frozen=True, slots=True)
class DesignStrip:
    """The physical piece derived from one segment.

    Attributes:
        id: Id of the source segment
        start: Strip start on the design grid
        end: Strip end on the design grid
        length_mm: Physical length
        notches: Notches sorted ascending by distance (ties keep insertion order)
        reversed: True when normalization swapped start and end
        requires_two_pass: True when notches sit on both faces
    """

    id: str
    start: tuple[float, float]
    end: tuple[float, float]
    length_mm: float
    notches: tuple[Notch, ...] = ()
    reversed: bool = False
    requires_two_pass: bool = False

    @property
    def sidedness(self) -> Sidedness:
        edges = {n.edge for n in self.notches}
        if not edges:
            return Sidedness.NONE
        if len(edges) > 1:
            return Sidedness.MIXED
        return Sidedness.TOP if NotchEdge.TOP in edges else Sidedness.BOTTOM

    @property
    def top_notches(self) -> tuple[Notch, ...]:
        return tuple(n for n in self.notches if n.edge is NotchEdge.TOP)

    @property
    def bottom_notches(self) -> tuple[Notch, ...]:
        return tuple(n for n in self.notches if n.edge is NotchEdge.BOTTOM)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "start": list(self.start),
            "end": list(self.end),
            "lengthMM": self.length_mm,
            "notches": [n.to_dict() for n in self.notches],
            "reversed": self.reversed,
            "requiresTwoPass": self.requires_two_pass,
        }
