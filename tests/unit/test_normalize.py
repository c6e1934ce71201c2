"""Unit tests for notch normalization."""

import pytest

from kumiko.core.normalize import NormalizationEngine, analyze_group_passes, has_double_sided_strips
from kumiko.domain import DesignStrip, LayoutGroup, Notch, NotchEdge, Piece, Sidedness


def make_strip(*notches: Notch, strip_id: str = "s", length: float = 200.0) -> DesignStrip:
    return DesignStrip(strip_id, (0, 0), (10, 0), length, tuple(notches))


class TestNormalizationEngine:
    """Tests for NormalizationEngine class."""

    @pytest.fixture
    def engine(self) -> NormalizationEngine:
        return NormalizationEngine()

    def test_no_notches_unchanged(self, engine: NormalizationEngine) -> None:
        strip = make_strip()
        assert engine.normalize(strip) == strip

    def test_top_only_unchanged(self, engine: NormalizationEngine) -> None:
        strip = make_strip(Notch("n", 30.0, NotchEdge.TOP, 26.825, 33.175))
        assert engine.normalize(strip) == strip

    def test_bottom_only_is_reversed(self, engine: NormalizationEngine) -> None:
        strip = make_strip(
            Notch("a", 30.0, NotchEdge.BOTTOM, 26.825, 33.175),
            Notch("b", 120.0, NotchEdge.BOTTOM, 116.825, 123.175),
        )
        result = engine.normalize(strip)

        assert result.reversed
        assert not result.requires_two_pass
        assert result.start == (10, 0)
        assert result.end == (0, 0)
        assert result.sidedness is Sidedness.TOP
        assert [n.id for n in result.notches] == ["b", "a"]
        assert [n.distance_mm for n in result.notches] == pytest.approx([80.0, 170.0])
        assert result.notches[1].left_mm == pytest.approx(166.825)
        assert result.notches[1].right_mm == pytest.approx(173.175)

    def test_mixed_flagged_for_two_passes(self, engine: NormalizationEngine) -> None:
        notches = (
            Notch("a", 30.0, NotchEdge.TOP, 26.825, 33.175),
            Notch("b", 120.0, NotchEdge.BOTTOM, 116.825, 123.175),
        )
        result = engine.normalize(make_strip(*notches))
        assert result.requires_two_pass
        assert not result.reversed
        assert result.notches == notches

    def test_idempotent(self, engine: NormalizationEngine) -> None:
        strips = [
            make_strip(Notch("a", 30.0, NotchEdge.BOTTOM, 26.825, 33.175)),
            make_strip(
                Notch("a", 30.0, NotchEdge.TOP, 26.825, 33.175),
                Notch("b", 120.0, NotchEdge.BOTTOM, 116.825, 123.175),
            ),
        ]
        once = engine.normalize_all(strips)
        assert engine.normalize_all(once) == once


class TestPassAnalysis:
    """Tests for per-group face analysis."""

    def test_no_group(self) -> None:
        analysis = analyze_group_passes(None, {})
        assert not analysis.has_top
        assert not analysis.has_bottom

    def test_double_sided(self) -> None:
        top = make_strip(Notch("a", 30.0, NotchEdge.TOP, 26.0, 34.0), strip_id="t")
        bottom = make_strip(Notch("b", 30.0, NotchEdge.BOTTOM, 26.0, 34.0), strip_id="b")
        strips = {"t": top, "b": bottom}
        group = (
            LayoutGroup("g", "Board")
            .with_piece(Piece("p1", "t", 0.0, 0.0))
            .with_piece(Piece("p2", "b", 0.0, 10.0))
        )
        assert has_double_sided_strips(group, strips)

    def test_orphans_ignored(self) -> None:
        top = make_strip(Notch("a", 30.0, NotchEdge.TOP, 26.0, 34.0), strip_id="t")
        group = (
            LayoutGroup("g", "Board")
            .with_piece(Piece("p1", "t", 0.0, 0.0))
            .with_piece(Piece("p2", "gone", 0.0, 10.0))
        )
        analysis = analyze_group_passes(group, {"t": top})
        assert analysis.has_top
        assert not analysis.double_sided
