"""Exception hierarchy for Kumiko."""

from collections.abc import Sequence
from typing import Any


class KumikoError(Exception):
    """Base exception for all Kumiko errors."""

    pass


class ParameterError(KumikoError):
    """Invalid cutting parameter input."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid parameters: {reason}")


class DocumentError(KumikoError):
    """Errors related to loading or saving documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a design or layout document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving a document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")


class DocumentFormatError(DocumentError):
    """Unsupported or malformed document contents."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid document format '{path}': {details}")


class GeometryError(KumikoError):
    """Errors in geometric input."""

    pass


class DegenerateSegmentError(GeometryError):
    """Segment with identical start and end points."""

    def __init__(self, segment_id: str) -> None:
        self.segment_id = segment_id
        super().__init__(f"Segment '{segment_id}' has zero length")


class LayoutError(KumikoError):
    """Errors related to layout groups and placed pieces."""

    pass


class GroupNotFoundError(LayoutError):
    """Requested layout group does not exist."""

    def __init__(self, group_id: str) -> None:
        self.group_id = group_id
        super().__init__(f"Layout group '{group_id}' not found")


class InvalidRotationError(LayoutError, ValueError):
    """Rotation outside the four orthogonal values."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid rotation {value!r}: must be one of 0, 90, 180, 270")


class ExportError(KumikoError):
    """Errors related to vector export."""

    pass


class NothingToExportError(ExportError):
    """Export requested with nothing to cut.

    ``warnings`` holds the export warnings raised before giving up, such as
    the orphaned pieces that left a group empty.
    """

    def __init__(self, reason: str, warnings: Sequence[Any] | None = None) -> None:
        self.reason = reason
        self.warnings = list(warnings or [])
        super().__init__(f"Nothing to export: {reason}")


class ModeError(KumikoError):
    """Mutation attempted in the wrong workflow phase."""

    def __init__(self, operation: str, mode: str) -> None:
        self.operation = operation
        self.mode = mode
        super().__init__(f"Operation '{operation}' is not allowed in {mode} mode")
