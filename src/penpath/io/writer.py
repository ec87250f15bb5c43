"""Writers for path documents and SVG previews."""

import json
from pathlib import Path
from xml.sax.saxutils import quoteattr

from penpath.core.path_data import format_number, to_path_data
from penpath.domain import BezierPath
from penpath.exceptions import DocumentSaveError


def save_path(path: BezierPath, output: Path) -> None:
    """Write a path document as JSON.

    Args:
        path: Path to serialize
        output: Destination file

    Raises:
        DocumentSaveError: If the file cannot be written
    """
    try:
        with output.open("w", encoding="utf-8") as f:
            json.dump(path.to_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise DocumentSaveError(str(output), str(e)) from e


def render_svg(
    path: BezierPath,
    stroke: str = "#000000",
    stroke_width: float = 2.0,
    precision: int = 3,
) -> str:
    """Render a path as a standalone SVG document.

    The path data is in local coordinates and placed with a translate
    transform; the viewBox covers the shape's stored size plus the stroke.

    Args:
        path: Path to render
        stroke: Stroke colour
        stroke_width: Stroke width in local units
        precision: Decimal places in path data

    Returns:
        SVG markup
    """
    pad = stroke_width
    view_box = " ".join(
        format_number(v, precision)
        for v in (path.x - pad, path.y - pad, path.w + 2 * pad, path.h + 2 * pad)
    )
    d = to_path_data(path.points, path.is_closed, precision)
    transform = f"translate({format_number(path.x, precision)} {format_number(path.y, precision)})"
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{view_box}">\n'
        f"  <path id={quoteattr(path.id)} d={quoteattr(d)} transform={quoteattr(transform)}"
        f" fill=\"none\" stroke={quoteattr(stroke)}"
        f' stroke-width="{format_number(stroke_width, precision)}"/>\n'
        "</svg>\n"
    )


def write_svg(
    path: BezierPath,
    output: Path,
    stroke: str = "#000000",
    stroke_width: float = 2.0,
    precision: int = 3,
) -> None:
    """Write a path as an SVG file.

    Raises:
        DocumentSaveError: If the file cannot be written
    """
    try:
        output.write_text(render_svg(path, stroke, stroke_width, precision), encoding="utf-8")
    except OSError as e:
        raise DocumentSaveError(str(output), str(e)) from e
