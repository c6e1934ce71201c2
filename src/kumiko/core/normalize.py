"""Notch normalization for single-pass machining.

Most CNC routers cut from one face. A strip whose notches all sit on the
bottom face is turned end-for-end and face-for-face so they sit on the top
instead. Strips with notches on both faces cannot be fixed this way and are
flagged as needing a second pass.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

import structlog

from kumiko.domain import DesignStrip, LayoutGroup, NotchEdge, Sidedness

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PassAnalysis:
    """Which faces of a group's strips carry notches."""

    has_top: bool = False
    has_bottom: bool = False

    @property
    def double_sided(self) -> bool:
        return self.has_top and self.has_bottom


class NormalizationEngine:
    """Canonicalizes strips so single-sided notch patterns sit on top.

    The transform is deterministic and idempotent: normalizing an already
    normalized strip returns it unchanged.
    """

    def normalize(self, strip: DesignStrip) -> DesignStrip:
        """Normalize a single strip.

        Args:
            strip: Strip as built from its segment

        Returns:
            The strip unchanged (no notches, all on top), reversed with all
            notches on top (all on bottom), or flagged ``requires_two_pass``
            (mixed)
        """
        sidedness = strip.sidedness

        if sidedness is Sidedness.MIXED:
            if not strip.requires_two_pass:
                logger.info(
                    "Strip needs two passes",
                    strip=strip.id,
                    top=len(strip.top_notches),
                    bottom=len(strip.bottom_notches),
                )
            return replace(strip, requires_two_pass=True)

        if sidedness is not Sidedness.BOTTOM:
            return strip

        length = strip.length_mm
        flipped = [replace(n.reversed(length), edge=NotchEdge.TOP) for n in strip.notches]
        flipped.sort(key=lambda n: n.distance_mm)
        logger.debug("Flipped bottom-only strip", strip=strip.id, notches=len(flipped))
        return replace(
            strip,
            start=strip.end,
            end=strip.start,
            notches=tuple(flipped),
            reversed=not strip.reversed,
            requires_two_pass=False,
        )

    def normalize_all(self, strips: Iterable[DesignStrip]) -> list[DesignStrip]:
        """Normalize every strip, preserving order."""
        return [self.normalize(strip) for strip in strips]


def analyze_group_passes(
    group: LayoutGroup | None,
    strips: Mapping[str, DesignStrip],
) -> PassAnalysis:
    """Determine which faces the pieces of a group need cut.

    Orphaned pieces (strip no longer derivable) are ignored.
    """
    if group is None:
        return PassAnalysis()

    has_top = False
    has_bottom = False
    for piece in group.pieces.values():
        strip = strips.get(piece.strip_id)
        if strip is None:
            continue
        has_top = has_top or bool(strip.top_notches)
        has_bottom = has_bottom or bool(strip.bottom_notches)
        if has_top and has_bottom:
            break
    return PassAnalysis(has_top=has_top, has_bottom=has_bottom)


def has_double_sided_strips(group: LayoutGroup | None, strips: Mapping[str, DesignStrip]) -> bool:
    """True when a group needs both a top and a bottom pass."""
    return analyze_group_passes(group, strips).double_sided
