"""Command-line interface for slicegeom.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for layer processing
- Verbose/quiet output modes
- HTML/SVG debug dump
- Detailed error reporting
"""

from slicegeom.cli.app import cli, main

__all__ = ["cli", "main"]
