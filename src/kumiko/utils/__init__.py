"""Utility functions for kumiko.

This module provides utility functions including:

- Logging setup and configuration
- Export statistics tracking
- Display unit conversion
- Identifier generation
"""

from kumiko.utils.ids import new_id
from kumiko.utils.logging import (
    ExportLogger,
    ExportStats,
    configure_logging,
)
from kumiko.utils.units import convert_unit, format_value

__all__ = [
    "ExportLogger",
    "ExportStats",
    "configure_logging",
    "convert_unit",
    "format_value",
    "new_id",
]
