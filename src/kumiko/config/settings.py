"""Configuration settings for Kumiko."""

import math
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from kumiko.exceptions import ParameterError

logger = structlog.get_logger(__name__)

# Smallest physical length accepted at the parameter boundary (mm)
MIN_LENGTH_MM = 0.1

DEFAULT_BIT_SIZE = 6.35  # 1/4 inch
DEFAULT_CUT_DEPTH = 19.0
DEFAULT_GRID_CELL_SIZE = 10.0
DEFAULT_STOCK_LENGTH = 600.0
DEFAULT_GRID_DIVISIONS = 20

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{value!r} is not a number") from None
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not a finite number")
    return number


class NotchStyle(str, Enum):
    """Which strips receive a notch at a crossing."""

    UNDER_ONLY = "under_only"
    HALF_LAP = "half_lap"


class ExportPass(str, Enum):
    """Which cuts a vector export contains."""

    ALL = "all"
    TOP = "top"
    BOTTOM = "bottom"


class CuttingParams(BaseModel):
    """Physical cutting parameters, all lengths in millimetres.

    Field aliases match the camelCase keys of the design document so a
    ``params`` block can be validated directly.
    """

    model_config = ConfigDict(populate_by_name=True)

    bit_size: float = Field(
        default=DEFAULT_BIT_SIZE,
        alias="bitSize",
        description="Router bit diameter; also the notch width and strip height",
    )
    cut_depth: float = Field(
        default=DEFAULT_CUT_DEPTH,
        alias="cutDepth",
        description="Full-depth cut for outlines and separation cuts",
    )
    half_cut_depth: float | None = Field(
        default=None,
        alias="halfCutDepth",
        description="Notch depth (defaults to half the full cut depth)",
    )
    grid_cell_size: float = Field(
        default=DEFAULT_GRID_CELL_SIZE,
        alias="gridCellSize",
        description="Display size of one grid cell",
    )
    stock_length: float = Field(
        default=DEFAULT_STOCK_LENGTH,
        alias="stockLength",
        description="Length of the stock board",
    )
    grid_divisions: int = Field(
        default=DEFAULT_GRID_DIVISIONS,
        alias="gridDivisions",
        description="Grid units spanning one stock length",
    )

    @field_validator(
        "bit_size", "cut_depth", "half_cut_depth", "grid_cell_size", "stock_length",
        mode="before",
    )
    @classmethod
    def _clamp_length(cls, value: Any) -> Any:
        if value is None:
            return value
        number = _as_number(value)
        if number < MIN_LENGTH_MM:
            logger.warning("Clamped parameter", value=number, clamped_to=MIN_LENGTH_MM)
            return MIN_LENGTH_MM
        return number

    @field_validator("grid_divisions", mode="before")
    @classmethod
    def _clamp_divisions(cls, value: Any) -> int:
        number = _as_number(value)
        if number != int(number):
            raise ValueError(f"{value!r} is not a whole number")
        if number < 1:
            logger.warning("Clamped parameter", value=number, clamped_to=1)
            return 1
        return int(number)

    @model_validator(mode="after")
    def _default_half_cut_depth(self) -> "CuttingParams":
        if self.half_cut_depth is None:
            self.half_cut_depth = self.cut_depth / 2
        return self

    @property
    def grid_unit_mm(self) -> float:
        """Physical length of one grid unit."""
        return self.stock_length / self.grid_divisions

    @property
    def notch_depth(self) -> float:
        """Half-cut depth, always resolved after validation."""
        assert self.half_cut_depth is not None
        return self.half_cut_depth

    def to_document(self) -> dict[str, Any]:
        """Serialize with document (camelCase) keys."""
        return self.model_dump(by_alias=True)


def parse_params(data: Mapping[str, Any] | None = None) -> CuttingParams:
    """Validate raw parameter input at the boundary.

    Accepts either snake_case or camelCase keys. Non-positive values are
    clamped, non-numeric values are rejected.

    Raises:
        ParameterError: If any value is not a number
    """
    try:
        return CuttingParams.model_validate(dict(data or {}))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ParameterError(details) from e


class StripConfig(BaseModel):
    """Configuration for strip derivation."""

    notch_style: NotchStyle = Field(
        default=NotchStyle.UNDER_ONLY,
        description="under_only notches only the under strip; half_lap also notches the over strip from below",
    )
    min_strip_length_mm: float = Field(
        default=1.0,
        ge=0.0,
        description="Strips shorter than this are reported as degenerate",
    )


class ExportConfig(BaseModel):
    """Configuration for vector export."""

    margin: float = Field(
        default=50.0,
        ge=0.0,
        description="Padding around the bounding region (mm)",
    )
    account_for_rotation: bool = Field(
        default=False,
        description="Use rotated piece footprints for the bounding region",
    )
    export_pass: ExportPass = Field(
        default=ExportPass.ALL,
        description="Which cuts to emit",
    )
    group_spacing: float = Field(
        default=20.0,
        ge=0.0,
        description="Vertical gap between groups in a multi-group document (mm)",
    )
    outline_stroke: str = Field(default="#000000", description="Strip outline colour")
    notch_stroke: str = Field(default="#808080", description="Notch colour")
    separation_stroke: str = Field(default="#ff0000", description="Separation cut colour")
    stroke_width: float = Field(default=0.25, gt=0.0, description="Stroke width (mm)")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}; expected one of {', '.join(LOG_LEVELS)}")
        return level


class KumikoSettings(BaseModel):
    """Main application settings."""

    params: CuttingParams = Field(default_factory=CuttingParams)
    strips: StripConfig = Field(default_factory=StripConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> KumikoSettings:
    """Get default application settings."""
    return KumikoSettings()
