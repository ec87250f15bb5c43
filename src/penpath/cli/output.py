"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

import json
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from penpath.core.curve import segment_count
from penpath.core.path_data import format_number
from penpath.domain import BezierPath, Bounds, Vec
from penpath.utils import EditStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]penpath[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_path_info(path: BezierPath, source: str | None = None) -> None:
    """Print a one-line summary of a path.

    Args:
        path: Path to describe
        source: File the path came from
    """
    line = Text("  ")
    if source:
        line.append(source)
        line.append(" ")
    line.append(path.id or "(unnamed)", style="bold")
    kind = "closed" if path.is_closed else "open"
    segments = segment_count(len(path.points), path.is_closed)
    console.print(line)
    console.print(
        f"  {len(path.points)} points {SYM_DOT} {segments} segments {SYM_DOT} {kind}"
    )


def print_path_data(data: str) -> None:
    """Print SVG path data without wrapping or markup."""
    console.print(Text(f"  {data}"), soft_wrap=True)


def print_bounds(bounds: Bounds, precision: int = 3) -> None:
    """Print a bounding box.

    Args:
        bounds: Box to print
        precision: Decimal places
    """
    fmt = lambda v: format_number(v, precision)  # noqa: E731
    console.print(
        f"  bounds ({fmt(bounds.min_x)}, {fmt(bounds.min_y)}) – "
        f"({fmt(bounds.max_x)}, {fmt(bounds.max_y)}) {SYM_DOT} "
        f"{fmt(bounds.width)} × {fmt(bounds.height)}"
    )


def print_polygon(points: list[Vec], precision: int = 3) -> None:
    """Print a flattened polygon as a table.

    Args:
        points: Polygon vertices
        precision: Decimal places
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for i, p in enumerate(points):
        table.add_row(str(i), format_number(p.x, precision), format_number(p.y, precision))
    console.print(table)
    console.print(f"  {len(points)} vertices")


def print_stats(stats: EditStats) -> None:
    """Print pen tool session statistics.

    Args:
        stats: Statistics collected while replaying
    """
    console.print(
        f"  {stats.event_count} events {SYM_DOT} {stats.points_created} points placed {SYM_DOT} "
        f"{stats.points_inserted} inserted {SYM_DOT} {stats.points_deleted} deleted"
    )
    rejected_style = "yellow" if stats.rejected_count > 0 else "green"
    console.print(
        f"  {stats.curves_completed} completed {SYM_DOT} {stats.curves_closed} closed {SYM_DOT} "
        f"{stats.curves_cancelled} discarded {SYM_DOT} "
        f"[{rejected_style}]{stats.rejected_count} rejected[/{rejected_style}]"
    )


def print_success(message: str, output_path: str | None = None) -> None:
    """Print success message.

    Args:
        message: What was done
        output_path: File that was written, if any
    """
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]")
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_effects(records: list[dict[str, Any]]) -> None:
    """Print serialized effects, one compact JSON object per line.

    Args:
        records: Effects as produced by ``effect_to_dict``
    """
    for i, record in enumerate(records):
        line = Text(f"  {i:>3} ")
        line.append(str(record.get("type", "?")), style="bold")
        data = {k: v for k, v in record.items() if k != "type"}
        line.append(f" {json.dumps(data, separators=(',', ':'))}")
        console.print(line, soft_wrap=True)
    console.print(f"  {len(records)} effects")
