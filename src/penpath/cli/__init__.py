"""Command-line interface for penpath.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Path data and bounds of path documents
- Polygon flattening tables
- Replay of recorded pen tool sessions
- Quiet output mode and optional log files
"""

from penpath.cli.app import cli, main

__all__ = ["cli", "main"]
