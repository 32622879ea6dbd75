"""Command-line interface for pixelcontour.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Vertex tables with pixel-normals and bounds
- Parallel batch detection with a progress bar
- Quiet mode for scripting
"""

from pixelcontour.cli.app import cli, main

__all__ = ["cli", "main"]
