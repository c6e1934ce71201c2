"""Layout types: placed strip instances and separation cuts.

A LayoutGroup roughly corresponds to one physical stock board. Groups are
immutable; every edit produces a new group that replaces the old one.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any

from kumiko.domain.geometry import as_coordinate
from kumiko.exceptions import InvalidRotationError


class Rotation(IntEnum):
    """Orthogonal rotation of a placed piece, in degrees."""

    R0 = 0
    R90 = 90
    R180 = 180
    R270 = 270

    @classmethod
    def parse(cls, value: Any) -> "Rotation":
        """Validate a rotation value.

        Raises:
            InvalidRotationError: If value is not 0, 90, 180 or 270
        """
        if isinstance(value, bool):
            raise InvalidRotationError(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidRotationError(value) from None


@dataclass(frozen=True, slots=True)
class Piece:
    """A placed instance of a DesignStrip.

    Attributes:
        id: Piece identifier
        strip_id: Id of the strip (and source segment) this piece cuts
        x: Position in millimetres within the group
        y: Position in millimetres within the group
        rotation: Orthogonal rotation about the strip's left mid-height
    """

    id: str
    strip_id: str
    x: float
    y: float
    rotation: Rotation = Rotation.R0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "stripId": self.strip_id,
            "x": self.x,
            "y": self.y,
            "rotationDeg": int(self.rotation),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Piece":
        return cls(
            id=str(data["id"]),
            strip_id=str(data["stripId"]),
            x=as_coordinate(data["x"]),
            y=as_coordinate(data["y"]),
            rotation=Rotation.parse(data.get("rotationDeg", 0)),
        )


@dataclass(frozen=True, slots=True)
class FullCut:
    """A free-form full-depth separation line in millimetres."""

    id: str
    x1: float
    y1: float
    x2: float
    y2: float

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FullCut":
        return cls(
            id=str(data["id"]),
            x1=as_coordinate(data["x1"]),
            y1=as_coordinate(data["y1"]),
            x2=as_coordinate(data["x2"]),
            y2=as_coordinate(data["y2"]),
        )


@dataclass(frozen=True)
class LayoutGroup:
    """An independently exportable collection of pieces and cuts.

    Attributes:
        id: Group identifier
        name: Display name
        pieces: Placed pieces by id, in placement order
        full_cuts: Separation cuts by id, in creation order
    """

    id: str
    name: str
    pieces: Mapping[str, Piece] = field(default_factory=dict)
    full_cuts: Mapping[str, FullCut] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.pieces and not self.full_cuts

    def with_piece(self, piece: Piece) -> "LayoutGroup":
        return replace(self, pieces={**self.pieces, piece.id: piece})

    def without_piece(self, piece_id: str) -> "LayoutGroup":
        return replace(self, pieces={k: v for k, v in self.pieces.items() if k != piece_id})

    def with_cut(self, cut: FullCut) -> "LayoutGroup":
        return replace(self, full_cuts={**self.full_cuts, cut.id: cut})

    def without_cut(self, cut_id: str) -> "LayoutGroup":
        return replace(self, full_cuts={k: v for k, v in self.full_cuts.items() if k != cut_id})

    def renamed(self, name: str) -> "LayoutGroup":
        return replace(self, name=name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "pieces": [p.to_dict() for p in self.pieces.values()],
            "fullCuts": [c.to_dict() for c in self.full_cuts.values()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayoutGroup":
        pieces = [Piece.from_dict(p) for p in data.get("pieces", [])]
        cuts = [FullCut.from_dict(c) for c in data.get("fullCuts", [])]
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            pieces={p.id: p for p in pieces},
            full_cuts={c.id: c for c in cuts},
        )
