"""Layout model: placing strip instances on stock boards.

The LayoutModel owns the layout groups. Every edit builds a new group (and a
new group mapping) and swaps it in, so a reader sees either the state before
or after an edit, never a half-applied one.

No collision or bounds checking is performed on placement; packing pieces on
the board is left to the user.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from kumiko.domain import DesignStrip, FullCut, LayoutGroup, Piece, Rotation
from kumiko.exceptions import GroupNotFoundError
from kumiko.utils import new_id

logger = structlog.get_logger(__name__)

DEFAULT_GROUP_ID = "group1"
DEFAULT_GROUP_NAME = "Default Group"


@dataclass(frozen=True)
class PlacementProgress:
    """Strips required by the design versus pieces placed in all groups.

    Attributes:
        needed: Required count per strip id
        placed: Placed count per strip id (only strips in the design)
        orphaned: Number of placed pieces whose strip no longer exists
    """

    needed: Mapping[str, int] = field(default_factory=dict)
    placed: Mapping[str, int] = field(default_factory=dict)
    orphaned: int = 0

    def remaining(self, strip_id: str) -> int:
        return max(0, self.needed.get(strip_id, 0) - self.placed.get(strip_id, 0))

    @property
    def total_needed(self) -> int:
        return sum(self.needed.values())

    @property
    def total_placed(self) -> int:
        """Placed pieces counting at most the needed number per strip."""
        return sum(min(self.placed.get(k, 0), n) for k, n in self.needed.items())

    @property
    def is_complete(self) -> bool:
        return all(self.remaining(k) == 0 for k in self.needed)


class LayoutModel:
    """Tracks layout groups, their pieces and separation cuts.

    Example:
        layout = LayoutModel()
        piece = layout.place_piece(layout.active_group_id, "seg_1", 10.0, 20.0, 90)
        layout.delete_piece(layout.active_group_id, piece.id)
    """

    def __init__(
        self,
        groups: Iterable[LayoutGroup] | None = None,
        active_group_id: str | None = None,
    ) -> None:
        """Initialize the model.

        Args:
            groups: Initial groups (a single default group if empty)
            active_group_id: Initially active group (first group if None)
        """
        initial = {g.id: g for g in (groups or [])}
        if not initial:
            initial = {DEFAULT_GROUP_ID: LayoutGroup(id=DEFAULT_GROUP_ID, name=DEFAULT_GROUP_NAME)}
        self._groups: dict[str, LayoutGroup] = initial
        if active_group_id is None or active_group_id not in initial:
            active_group_id = next(iter(initial))
        self._active_group_id = active_group_id

    @property
    def groups(self) -> dict[str, LayoutGroup]:
        """Snapshot of groups by id, in creation order."""
        return dict(self._groups)

    @property
    def active_group_id(self) -> str:
        return self._active_group_id

    @property
    def active_group(self) -> LayoutGroup:
        return self._groups[self._active_group_id]

    def get_group(self, group_id: str) -> LayoutGroup:
        """Look up a group.

        Raises:
            GroupNotFoundError: If no group has this id
        """
        try:
            return self._groups[group_id]
        except KeyError:
            raise GroupNotFoundError(group_id) from None

    def _replace_group(self, group: LayoutGroup) -> None:
        self._groups = {**self._groups, group.id: group}

    def add_group(self, name: str | None = None, activate: bool = True) -> LayoutGroup:
        """Create an empty group, named ``Group N`` by default."""
        group_id = new_id()
        group = LayoutGroup(id=group_id, name=name or f"Group {len(self._groups) + 1}")
        self._replace_group(group)
        if activate:
            self._active_group_id = group_id
        logger.debug("Group added", group=group_id, name=group.name)
        return group

    def delete_group(self, group_id: str) -> bool:
        """Delete a group together with its pieces and cuts.

        Deleting the last remaining group is refused and reported; the
        model is left unchanged.

        Returns:
            True if the group was deleted, False if refused

        Raises:
            GroupNotFoundError: If no group has this id
        """
        self.get_group(group_id)
        if len(self._groups) <= 1:
            logger.warning("Cannot delete the last group", group=group_id)
            return False

        remaining = {k: v for k, v in self._groups.items() if k != group_id}
        self._groups = remaining
        if self._active_group_id == group_id:
            self._active_group_id = next(iter(remaining))
        logger.debug("Group deleted", group=group_id)
        return True

    def rename_group(self, group_id: str, name: str) -> LayoutGroup:
        """Rename a group. Blank names are ignored."""
        group = self.get_group(group_id)
        trimmed = name.strip()
        if not trimmed:
            return group
        renamed = group.renamed(trimmed)
        self._replace_group(renamed)
        return renamed

    def set_active_group(self, group_id: str) -> None:
        self.get_group(group_id)
        self._active_group_id = group_id

    def place_piece(
        self,
        group_id: str,
        strip_id: str,
        x: float,
        y: float,
        rotation: Any = 0,
    ) -> Piece:
        """Place an instance of a strip in a group.

        Raises:
            GroupNotFoundError: If no group has this id
            InvalidRotationError: If rotation is not 0, 90, 180 or 270
        """
        group = self.get_group(group_id)
        piece = Piece(
            id=new_id(),
            strip_id=strip_id,
            x=float(x),
            y=float(y),
            rotation=Rotation.parse(rotation),
        )
        self._replace_group(group.with_piece(piece))
        logger.debug("Piece placed", group=group_id, piece=piece.id, strip=strip_id)
        return piece

    def add_cut(self, group_id: str, x1: float, y1: float, x2: float, y2: float) -> FullCut:
        """Add a full-depth separation cut to a group."""
        group = self.get_group(group_id)
        cut = FullCut(id=new_id(), x1=float(x1), y1=float(y1), x2=float(x2), y2=float(y2))
        self._replace_group(group.with_cut(cut))
        logger.debug("Cut added", group=group_id, cut=cut.id)
        return cut

    def delete_piece(self, group_id: str, piece_id: str) -> bool:
        """Remove a piece. Returns False (no-op) if it is not in the group."""
        group = self.get_group(group_id)
        if piece_id not in group.pieces:
            return False
        self._replace_group(group.without_piece(piece_id))
        return True

    def delete_cut(self, group_id: str, cut_id: str) -> bool:
        """Remove a cut. Returns False (no-op) if it is not in the group."""
        group = self.get_group(group_id)
        if cut_id not in group.full_cuts:
            return False
        self._replace_group(group.without_cut(cut_id))
        return True

    def placed_counts(self) -> Counter[str]:
        """Number of placed pieces per strip id across all groups."""
        counts: Counter[str] = Counter()
        for group in self._groups.values():
            counts.update(p.strip_id for p in group.pieces.values())
        return counts

    def orphaned_pieces(self, strip_ids: Iterable[str]) -> list[tuple[str, Piece]]:
        """Pieces whose strip is not among ``strip_ids``, as ``(group_id, piece)``."""
        known = set(strip_ids)
        return [
            (group.id, piece)
            for group in self._groups.values()
            for piece in group.pieces.values()
            if piece.strip_id not in known
        ]

    def placement_progress(self, strips: Iterable[DesignStrip]) -> PlacementProgress:
        """Compare the strips the design needs with what has been placed."""
        needed = Counter(strip.id for strip in strips)
        counts = self.placed_counts()
        placed = {strip_id: counts.get(strip_id, 0) for strip_id in needed}
        orphaned = sum(n for strip_id, n in counts.items() if strip_id not in needed)
        return PlacementProgress(needed=dict(needed), placed=placed, orphaned=orphaned)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the layout document."""
        return {
            "groups": [g.to_dict() for g in self._groups.values()],
            "activeGroupId": self._active_group_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayoutModel":
        """Deserialize from the layout document."""
        groups = [LayoutGroup.from_dict(g) for g in data.get("groups", [])]
        return cls(groups=groups, active_group_id=data.get("activeGroupId"))
