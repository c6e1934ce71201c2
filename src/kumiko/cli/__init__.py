"""Command-line interface for kumiko.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Strip listing with notch positions and faces
- SVG export per group or for all groups, by cutting pass
- Placement progress across groups
- Detailed error reporting
"""

from kumiko.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
