"""CLI application entry point for kumiko.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from kumiko import __version__
from kumiko.cli.output import (
    SYM_DOT,
    console,
    print_design_info,
    print_error,
    print_header,
    print_progress,
    print_step,
    print_strip_table,
    print_success,
    print_warnings,
)
from kumiko.config import (
    ExportConfig,
    ExportPass,
    KumikoSettings,
    LoggingConfig,
    NotchStyle,
    StripConfig,
)
from kumiko.core import DesignSession, group_identical_strips
from kumiko.exceptions import DocumentLoadError, KumikoError, NothingToExportError
from kumiko.io import DocumentReader, DocumentWriter
from kumiko.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="kumiko",
    help="Turn kumiko lattice designs into notched strips and CNC-ready SVG.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Kumiko[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Kumiko lattice design tools."""


def _open_session(
    design_path: Path,
    layout_path: Path | None,
    settings: KumikoSettings,
) -> DesignSession:
    """Load a design (and optional separate layout) into a session."""
    reader = DocumentReader(design_path)
    try:
        reader.load()
    except FileNotFoundError as e:
        raise DocumentLoadError(str(design_path), "file not found") from e
    design = reader.design()

    layout = None
    if layout_path is not None:
        layout_reader = DocumentReader(layout_path)
        try:
            layout_reader.load()
        except FileNotFoundError as e:
            raise DocumentLoadError(str(layout_path), "file not found") from e
        layout = layout_reader.layout()
    elif reader.has_layout:
        layout = reader.layout()

    return design.to_session(layout=layout, settings=settings)


def _settings(
    notch_style: str,
    log_file: Path | None,
    log_level: str,
    export: ExportConfig | None = None,
    quiet: bool = False,
) -> KumikoSettings:
    try:
        style = NotchStyle(notch_style.lower().replace("-", "_"))
    except ValueError:
        print_error(
            f"Invalid notch style: {notch_style}",
            details="Valid values: under_only, half_lap",
        )
        raise typer.Exit(code=1) from None
    try:
        logging_config = LoggingConfig(log_file=log_file, log_level=log_level)
    except ValidationError:
        print_error(f"Invalid log level: {log_level}", details="Valid values: DEBUG, INFO, WARNING, ERROR")
        raise typer.Exit(code=1) from None
    settings = KumikoSettings(
        strips=StripConfig(notch_style=style),
        export=export or ExportConfig(),
        logging=logging_config,
    )
    configure_logging(
        log_file=log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    return settings


NotchStyleOption = Annotated[
    str,
    typer.Option(
        "--notch-style",
        "-s",
        help="Which strips get notched at a crossing (under_only|half_lap)",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]


@app.command()
def strips(
    design: Annotated[Path, typer.Argument(help="Design document (JSON)", show_default=False)],
    notch_style: NotchStyleOption = "under_only",
    normalize: Annotated[
        bool,
        typer.Option("--normalize/--raw", help="Flip bottom-only strips so notches face up"),
    ] = True,
    inches: Annotated[bool, typer.Option("--inches", help="Show lengths in inches")] = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """List the strips a design needs, with notch positions."""
    settings = _settings(notch_style, log_file, log_level)
    try:
        session = _open_session(design, None, settings)
        print_header(__version__)
        print_design_info(str(design), session.name, len(session.segments), len(session.intersections))
        print_step("Strips")
        rows = session.normalized_strips if normalize else session.strips
        print_strip_table(rows, unit="in" if inches else "mm")
        distinct = group_identical_strips(rows)
        console.print(f"  {len(rows)} strips {SYM_DOT} {len(distinct)} distinct")
    except KumikoError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


@app.command()
def export(
    design: Annotated[Path, typer.Argument(help="Design document (JSON)", show_default=False)],
    layout: Annotated[
        Path | None,
        typer.Argument(help="Layout document (JSON); defaults to groups in the design file"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output SVG path (default: {design}_{group}_kumiko_layout.svg)"),
    ] = None,
    group: Annotated[
        str | None,
        typer.Option("--group", "-g", help="Group id to export (default: active group)"),
    ] = None,
    all_groups: Annotated[bool, typer.Option("--all", help="Export every group into one document")] = False,
    export_pass: Annotated[
        str,
        typer.Option("--pass", "-p", help="Cuts to include (all|top|bottom)"),
    ] = "all",
    margin: Annotated[float, typer.Option("--margin", help="Padding around the drawing (mm)", min=0.0)] = 50.0,
    account_rotation: Annotated[
        bool,
        typer.Option("--account-rotation", help="Frame rotated pieces by their rotated footprint"),
    ] = False,
    notch_style: NotchStyleOption = "under_only",
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Minimal console output")] = False,
) -> None:
    """Export layout groups to a depth-annotated SVG for CNC cutting."""
    if group and all_groups:
        print_error("Cannot use --group and --all together")
        raise typer.Exit(code=1)

    try:
        pass_choice = ExportPass(export_pass.lower())
    except ValueError:
        print_error(f"Invalid pass: {export_pass}", details="Valid values: all, top, bottom")
        raise typer.Exit(code=1) from None

    export_config = ExportConfig(
        margin=margin,
        account_for_rotation=account_rotation,
        export_pass=pass_choice,
    )
    settings = _settings(notch_style, log_file, log_level, export_config, quiet)

    try:
        session = _open_session(design, layout, settings)
        if not quiet:
            print_header(__version__)
            print_design_info(str(design), session.name, len(session.segments), len(session.intersections))
            print_step("Exporting")

        result = session.export(group_id=group, all_groups=all_groups)

        if output is None:
            name = None if all_groups else session.layout.get_group(group or session.layout.active_group_id).name
            output = DocumentWriter.get_export_path(design, name)
        DocumentWriter(output).write_svg(result)

        if not quiet:
            print_warnings(result)
            print_success(str(output), result)
    except NothingToExportError as e:
        print_error(str(e), details="Place pieces or add separation cuts before exporting.")
        raise typer.Exit(code=1) from None
    except KumikoError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


@app.command()
def progress(
    design: Annotated[Path, typer.Argument(help="Design document (JSON)", show_default=False)],
    layout: Annotated[
        Path | None,
        typer.Argument(help="Layout document (JSON); defaults to groups in the design file"),
    ] = None,
) -> None:
    """Show how many of the design's strips have been placed."""
    configure_logging(console_level="WARNING")
    try:
        session = _open_session(design, layout, KumikoSettings())
        print_step("Placement")
        print_progress(session.placement_progress())
    except KumikoError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
