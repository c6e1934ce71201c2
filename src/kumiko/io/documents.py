"""Design document model.

The design document is the persisted/exchanged form of a design: the drawn
segments, the cutting parameters and the explicit over/under overrides.
Intersections and strips are not stored; they are re-derived on load.
"""

from dataclasses import dataclass, field
from typing import Any

from kumiko.config import CuttingParams, KumikoSettings, parse_params
from kumiko.core.layout import LayoutModel
from kumiko.core.session import DesignSession
from kumiko.domain import OverUnderAssignment, Segment
from kumiko.exceptions import DocumentFormatError, ParameterError

DOCUMENT_VERSION = 1


@dataclass(frozen=True)
class DesignDocument:
    """Serializable design.

    Attributes:
        name: Design name
        segments: Segments in drawing order
        params: Cutting parameters
        overrides: Explicit over/under overrides
    """

    name: str = "Untitled"
    segments: tuple[Segment, ...] = ()
    params: CuttingParams = field(default_factory=CuttingParams)
    overrides: OverUnderAssignment = field(default_factory=OverUnderAssignment)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": DOCUMENT_VERSION,
            "name": self.name,
            "segments": [s.to_dict() for s in self.segments],
            "params": self.params.to_document(),
            "intersectionOverrides": self.overrides.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<document>") -> "DesignDocument":
        """Deserialize and validate a design document.

        Raises:
            DocumentFormatError: If the structure or a value is invalid
        """
        if not isinstance(data, dict):
            raise DocumentFormatError(source, "top level must be an object")
        version = data.get("version", DOCUMENT_VERSION)
        if version != DOCUMENT_VERSION:
            raise DocumentFormatError(source, f"unsupported version {version!r}")
        raw_segments = data.get("segments")
        if not isinstance(raw_segments, list):
            raise DocumentFormatError(source, "'segments' must be a list")

        try:
            segments = tuple(Segment.from_dict(s) for s in raw_segments)
            overrides = OverUnderAssignment.from_list(data.get("intersectionOverrides", []))
            params = parse_params(data.get("params", {}))
        except ParameterError as e:
            raise DocumentFormatError(source, e.reason) from e
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentFormatError(source, f"malformed entry: {e}") from e

        return cls(
            name=str(data.get("name", "Untitled")),
            segments=segments,
            params=params,
            overrides=overrides.restricted_to(s.id for s in segments),
        )

    @classmethod
    def from_session(cls, session: DesignSession) -> "DesignDocument":
        return cls(
            name=session.name,
            segments=tuple(session.segments.values()),
            params=session.params,
            overrides=session.overrides,
        )

    def to_session(
        self,
        layout: LayoutModel | None = None,
        settings: KumikoSettings | None = None,
    ) -> DesignSession:
        """Open a session on this design, optionally with a layout."""
        base = settings or KumikoSettings()
        return DesignSession(
            settings=base.model_copy(update={"params": self.params}),
            name=self.name,
            segments=self.segments,
            overrides=self.overrides,
            layout=layout,
        )
