"""Unit tests for the document I/O layer.

Tests for DesignDocument, DocumentReader, and DocumentWriter.
"""

import json
from pathlib import Path

import pytest

from kumiko.config import parse_params
from kumiko.core.layout import LayoutModel
from kumiko.domain import OverUnderAssignment, Segment
from kumiko.exceptions import DocumentFormatError, DocumentLoadError
from kumiko.io import DOCUMENT_VERSION, DesignDocument, DocumentReader, DocumentWriter


@pytest.fixture
def document() -> DesignDocument:
    return DesignDocument(
        name="Asanoha",
        segments=(Segment("h", 0, 0, 10, 0), Segment("v", 5, -5, 5, 5)),
        params=parse_params({"stockLength": 400}),
        overrides=OverUnderAssignment().with_override("h", "v", True),
    )


class TestDesignDocument:
    """Tests for DesignDocument."""

    def test_to_dict(self, document: DesignDocument) -> None:
        data = document.to_dict()
        assert data["version"] == DOCUMENT_VERSION
        assert data["name"] == "Asanoha"
        assert data["segments"][0] == {"id": "h", "x1": 0, "y1": 0, "x2": 10, "y2": 0}
        assert data["params"]["stockLength"] == 400.0
        assert data["intersectionOverrides"] == [
            {"segmentAId": "h", "segmentBId": "v", "aOverB": True}
        ]

    def test_round_trip(self, document: DesignDocument) -> None:
        assert DesignDocument.from_dict(document.to_dict()) == document

    def test_minimal_document(self) -> None:
        doc = DesignDocument.from_dict({"segments": []})
        assert doc.name == "Untitled"
        assert doc.params.bit_size == pytest.approx(6.35)

    def test_unknown_version(self) -> None:
        with pytest.raises(DocumentFormatError, match="unsupported version"):
            DesignDocument.from_dict({"version": 99, "segments": []})

    def test_missing_segments(self) -> None:
        with pytest.raises(DocumentFormatError):
            DesignDocument.from_dict({"name": "x"})

    def test_malformed_segment(self) -> None:
        with pytest.raises(DocumentFormatError, match="malformed"):
            DesignDocument.from_dict({"segments": [{"id": "a", "x1": 0}]})

    @pytest.mark.parametrize("bad", ["zero", True, float("nan")])
    def test_non_numeric_coordinate(self, bad: object) -> None:
        data = {"segments": [{"id": "a", "x1": bad, "y1": 0, "x2": 10, "y2": 0}]}
        with pytest.raises(DocumentFormatError, match="coordinate"):
            DesignDocument.from_dict(data)

    def test_numeric_string_coordinate_accepted(self) -> None:
        data = {"segments": [{"id": "a", "x1": "0", "y1": 0, "x2": 10, "y2": 0}]}
        assert DesignDocument.from_dict(data).segments[0].x1 == 0.0

    def test_bad_params(self) -> None:
        with pytest.raises(DocumentFormatError):
            DesignDocument.from_dict({"segments": [], "params": {"bitSize": "wide"}})

    def test_stale_overrides_dropped(self) -> None:
        data = {
            "segments": [{"id": "h", "x1": 0, "y1": 0, "x2": 10, "y2": 0}],
            "intersectionOverrides": [{"segmentAId": "h", "segmentBId": "gone", "aOverB": True}],
        }
        assert len(DesignDocument.from_dict(data).overrides) == 0

    def test_session_round_trip(self, document: DesignDocument) -> None:
        session = document.to_session()
        assert session.name == "Asanoha"
        assert session.params.stock_length == pytest.approx(400.0)
        assert DesignDocument.from_session(session) == document


class TestDocumentReader:
    """Tests for DocumentReader class."""

    def test_load_nonexistent_file(self) -> None:
        reader = DocumentReader(Path("nonexistent.json"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_data_before_load(self) -> None:
        reader = DocumentReader(Path("design.json"))
        with pytest.raises(RuntimeError, match="Document not loaded"):
            _ = reader.data

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentLoadError):
            DocumentReader(path).load()

    def test_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(DocumentFormatError):
            DocumentReader(path).load()

    def test_design_and_layout(self, tmp_path: Path, document: DesignDocument) -> None:
        layout = LayoutModel()
        layout.place_piece(layout.active_group_id, "h", 0, 0)
        path = tmp_path / "design.json"
        DocumentWriter(path).write_design(document, layout)

        reader = DocumentReader(path)
        reader.load()
        assert reader.has_design
        assert reader.has_layout
        assert reader.design() == document
        assert reader.layout().groups == layout.groups

    def test_layout_missing(self, tmp_path: Path, document: DesignDocument) -> None:
        path = tmp_path / "design.json"
        DocumentWriter(path).write_design(document)
        reader = DocumentReader(path)
        reader.load()
        assert not reader.has_layout
        with pytest.raises(DocumentFormatError):
            reader.layout()

    def test_layout_with_bad_rotation(self, tmp_path: Path) -> None:
        path = tmp_path / "layout.json"
        data = {"groups": [{"id": "g", "pieces": [{"id": "p", "stripId": "h", "x": 0, "y": 0, "rotationDeg": 45}]}]}
        path.write_text(json.dumps(data), encoding="utf-8")
        reader = DocumentReader(path)
        reader.load()
        assert not reader.has_design
        with pytest.raises(DocumentFormatError):
            reader.layout()

    @pytest.mark.parametrize(
        "entry",
        [
            {"pieces": [{"id": "p", "stripId": "h", "x": "left", "y": 0}]},
            {"fullCuts": [{"id": "c", "x1": 0, "y1": 0, "x2": False, "y2": 5}]},
        ],
    )
    def test_layout_with_bad_coordinate(self, tmp_path: Path, entry: dict) -> None:
        path = tmp_path / "layout.json"
        path.write_text(json.dumps({"groups": [{"id": "g", **entry}]}), encoding="utf-8")
        reader = DocumentReader(path)
        reader.load()
        with pytest.raises(DocumentFormatError, match="coordinate"):
            reader.layout()


class TestDocumentWriter:
    """Tests for DocumentWriter class."""

    def test_write_layout(self, tmp_path: Path) -> None:
        path = tmp_path / "layout.json"
        DocumentWriter(path).write_layout(LayoutModel())
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["activeGroupId"] == "group1"
        assert "segments" not in data

    def test_get_export_path(self) -> None:
        path = DocumentWriter.get_export_path(Path("/tmp/squares.json"), "Default Group")
        assert path == Path("/tmp/squares_Default_Group_kumiko_layout.svg")

    def test_get_export_path_all_groups(self) -> None:
        path = DocumentWriter.get_export_path(Path("squares.json"))
        assert path == Path("squares_kumiko_layout.svg")
