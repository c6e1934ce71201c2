"""Document writer for designs, layouts and exported SVG files."""

import json
import re
from pathlib import Path
from typing import Any

from kumiko.core.exporter import ExportResult
from kumiko.core.layout import LayoutModel
from kumiko.exceptions import DocumentSaveError
from kumiko.io.documents import DesignDocument


class DocumentWriter:
    """Writes documents to disk.

    Example:
        writer = DocumentWriter(Path("design.json"))
        writer.write_design(document, layout)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the document will be saved
        """
        self._output_path = output_path

    def _write_text(self, text: str) -> None:
        try:
            self._output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e

    def write_design(self, document: DesignDocument, layout: LayoutModel | None = None) -> None:
        """Save a design, with its layout groups when given.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        payload: dict[str, Any] = document.to_dict()
        if layout is not None:
            payload.update(layout.to_dict())
        self._write_text(json.dumps(payload, indent=2))

    def write_layout(self, layout: LayoutModel) -> None:
        """Save a layout document on its own."""
        self._write_text(json.dumps(layout.to_dict(), indent=2))

    def write_svg(self, result: ExportResult) -> None:
        """Save an exported vector document."""
        self._write_text(result.svg)

    @staticmethod
    def get_export_path(design_path: Path, group_name: str | None = None) -> Path:
        """Default SVG path for an export.

        Converts: squares.json + "Default Group" -> squares_Default_Group_kumiko_layout.svg
                  squares.json -> squares_kumiko_layout.svg

        Args:
            design_path: Path of the design document
            group_name: Name of the exported group (None for all groups)

        Returns:
            Path next to the design document
        """
        parts = [design_path.stem]
        if group_name:
            parts.append(re.sub(r"\s+", "_", group_name.strip()))
        return design_path.parent / f"{'_'.join(parts)}_kumiko_layout.svg"
