"""Document I/O layer for kumiko.

This module handles reading and writing design and layout documents (JSON)
and exported vector documents (SVG). It provides a clean abstraction layer
between files on disk and the domain models.

Key responsibilities:
- Load design documents (segments, parameters, over/under overrides)
- Load layout documents (groups, pieces, separation cuts)
- Version checking and validation
- Write designs, layouts and exported SVG

Key classes:
- DesignDocument: Serializable design
- DocumentReader: Load documents
- DocumentWriter: Save documents
"""

from kumiko.io.documents import DOCUMENT_VERSION, DesignDocument
from kumiko.io.reader import DocumentReader
from kumiko.io.writer import DocumentWriter

__all__ = [
    "DOCUMENT_VERSION",
    "DesignDocument",
    "DocumentReader",
    "DocumentWriter",
]
