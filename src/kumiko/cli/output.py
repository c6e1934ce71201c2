"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from kumiko.core import ExportResult, PlacementProgress
from kumiko.domain import DesignStrip, Sidedness
from kumiko.utils import format_value
from kumiko.utils.units import Unit

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info

_SIDEDNESS_STYLE = {
    Sidedness.NONE: "dim",
    Sidedness.TOP: "green",
    Sidedness.BOTTOM: "yellow",
    Sidedness.MIXED: "red",
}


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Kumiko[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_design_info(path: str, name: str, segments: int, intersections: int) -> None:
    """Print design information.

    Args:
        path: Path to the design document
        name: Design name
        segments: Number of drawn segments
        intersections: Number of crossings
    """
    line = Text("  ")
    line.append(path)
    line.append(f" ({name})")
    console.print(line)
    console.print(f"  {segments} segments {SYM_DOT} {intersections} crossings")


def print_strip_table(strips: list[DesignStrip], unit: Unit = "mm") -> None:
    """Print a table of strips with their notches.

    Args:
        strips: Strips to show (normalized or not)
        unit: Display unit for lengths
    """
    table = Table(show_edge=False, header_style="bold")
    table.add_column("Strip")
    table.add_column(f"Length ({unit})", justify="right")
    table.add_column("Notches", justify="right")
    table.add_column("Positions")
    table.add_column("Faces")

    for strip in strips:
        positions = ", ".join(
            f"{format_value(n.distance_mm, unit)}{n.edge.value[0].upper()}" for n in strip.notches
        )
        style = _SIDEDNESS_STYLE[strip.sidedness]
        faces = strip.sidedness.value
        if strip.reversed:
            faces += " (flipped)"
        table.add_row(
            strip.id,
            format_value(strip.length_mm, unit),
            str(len(strip.notches)),
            positions or "-",
            f"[{style}]{faces}[/{style}]",
        )
    console.print(table)


def print_progress(progress: PlacementProgress) -> None:
    """Print placement progress across all groups."""
    total = progress.total_needed
    placed = progress.total_placed
    style = "green" if progress.is_complete else "yellow"
    console.print(f"  [{style}]{placed}/{total}[/{style}] strips placed")
    for strip_id in progress.needed:
        remaining = progress.remaining(strip_id)
        if remaining:
            console.print(f"  {SYM_DOT} {strip_id}: {remaining} to place")
    if progress.orphaned:
        console.print(f"  [yellow]{SYM_WARN} {progress.orphaned} orphaned pieces[/yellow]")


def print_warnings(result: ExportResult) -> None:
    """Print non-fatal export warnings."""
    for warning in result.warnings:
        console.print(f"  [yellow]{SYM_WARN}[/yellow] {warning.message}")


def print_success(output_path: str, result: ExportResult) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        result: Export result
    """
    stats = result.stats
    console.print(f"\n[bold green]{SYM_OK} Exported[/bold green]")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({result.bounds.width:.1f} × {result.bounds.height:.1f} mm)")
    console.print(line)

    skipped_style = "yellow" if stats.pieces_skipped else "green"
    console.print(
        f"  {stats.pieces_exported} pieces {SYM_DOT} {stats.notches_cut} notches {SYM_DOT} "
        f"{stats.separation_cuts} separation cuts {SYM_DOT} "
        f"[{skipped_style}]{stats.pieces_skipped} skipped[/{skipped_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
