"""Display unit conversion.

All lengths are stored in millimetres; inches only exist at the display edge.
"""

from typing import Literal

Unit = Literal["mm", "in"]

INCH_TO_MM = 25.4
MM_TO_INCH = 1 / INCH_TO_MM


def convert_unit(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert a length between millimetres and inches."""
    if from_unit == to_unit or not value:
        return value
    if from_unit == "mm" and to_unit == "in":
        return value * MM_TO_INCH
    if from_unit == "in" and to_unit == "mm":
        return value * INCH_TO_MM
    raise ValueError(f"Unknown unit conversion {from_unit!r} -> {to_unit!r}")


def format_value(mm_value: float, display_unit: Unit) -> str:
    """Format a millimetre length for display (1 decimal for mm, 3 for inches)."""
    value = convert_unit(mm_value, "mm", display_unit)
    return f"{value:.1f}" if display_unit == "mm" else f"{value:.3f}"
