"""Document reader for design and layout files.

This module provides the DocumentReader class for loading JSON design and
layout documents and converting them to domain models.
"""

import json
from pathlib import Path
from typing import Any

from kumiko.core.layout import LayoutModel
from kumiko.exceptions import DocumentFormatError, DocumentLoadError, KumikoError
from kumiko.io.documents import DesignDocument


class DocumentReader:
    """Reads design and layout documents.

    A file may hold a design (``segments``), a layout (``groups``), or both.

    Example:
        reader = DocumentReader(Path("design.json"))
        reader.load()
        design = reader.design()
        layout = reader.layout() if reader.has_layout else None
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to a JSON document
        """
        self._path = path
        self._data: dict[str, Any] | None = None

    def load(self) -> None:
        """Load and parse the document.

        Raises:
            FileNotFoundError: If the file does not exist
            DocumentLoadError: If the file is not valid JSON
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Document file not found: {self._path}")
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DocumentLoadError(str(self._path), str(e)) from e
        if not isinstance(data, dict):
            raise DocumentFormatError(str(self._path), "top level must be an object")
        self._data = data

    @property
    def data(self) -> dict[str, Any]:
        """Raw document contents.

        Raises:
            RuntimeError: If document not loaded
        """
        if self._data is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        return self._data

    @property
    def has_design(self) -> bool:
        return "segments" in self.data

    @property
    def has_layout(self) -> bool:
        return "groups" in self.data

    def design(self) -> DesignDocument:
        """Parse the design part of the document.

        Raises:
            DocumentFormatError: If the design is missing or invalid
        """
        if not self.has_design:
            raise DocumentFormatError(str(self._path), "no 'segments' in document")
        return DesignDocument.from_dict(self.data, source=str(self._path))

    def layout(self) -> LayoutModel:
        """Parse the layout part of the document.

        Raises:
            DocumentFormatError: If the layout is missing or invalid
        """
        if not self.has_layout or not isinstance(self.data["groups"], list):
            raise DocumentFormatError(str(self._path), "'groups' must be a list")
        try:
            return LayoutModel.from_dict(self.data)
        except KumikoError as e:
            raise DocumentFormatError(str(self._path), str(e)) from e
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentFormatError(str(self._path), f"malformed entry: {e}") from e
