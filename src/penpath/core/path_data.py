"""SVG path data generation.

Walks a path's anchor points and emits ``M``, ``L``, ``Q``, ``C`` and ``Z``
commands following the segment degree rule. Used for on-screen rendering,
thumbnails and SVG export.
"""

from collections.abc import Sequence

from penpath.core.bounds import accurate_bounds
from penpath.domain import AnchorPoint, Vec


def format_number(value: float, precision: int = 3) -> str:
    """Format a coordinate for path data.

    Integral values print without a decimal point; others print with up to
    ``precision`` decimals and no trailing zeros.

    Examples:
        >>> format_number(10.0)
        '10'
        >>> format_number(2.50000)
        '2.5'
        >>> format_number(1 / 3)
        '0.333'
    """
    rounded = round(value, precision)
    if rounded == int(rounded):
        return str(int(rounded))
    text = f"{rounded:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _segment_command(p1: AnchorPoint, p2: AnchorPoint, precision: int) -> str:
    def fmt(*vs: Vec) -> str:
        return " ".join(
            f"{format_number(v.x, precision)} {format_number(v.y, precision)}" for v in vs
        )

    if p1.cp2 is not None and p2.cp1 is not None:
        return f"C {fmt(p1.cp2, p2.cp1, p2.position)}"
    if p1.cp2 is not None:
        return f"Q {fmt(p1.cp2, p2.position)}"
    if p2.cp1 is not None:
        return f"Q {fmt(p2.cp1, p2.position)}"
    return f"L {fmt(p2.position)}"


def to_path_data(points: Sequence[AnchorPoint], is_closed: bool, precision: int = 3) -> str:
    """Generate SVG path data for a path.

    A closed path with more than two points emits its closing segment as
    ``Q`` or ``C`` when it is curved; a straight closing segment is left to
    the final ``Z``.

    Args:
        points: Anchor points of the path
        is_closed: Whether the path is closed
        precision: Maximum decimals per coordinate

    Returns:
        Path data string, empty for an empty path

    Examples:
        >>> to_path_data([AnchorPoint(0, 0), AnchorPoint(10, 0)], False)
        'M 0 0 L 10 0'
    """
    if not points:
        return ""

    first = points[0]
    commands = [
        f"M {format_number(first.x, precision)} {format_number(first.y, precision)}"
    ]
    for i in range(1, len(points)):
        commands.append(_segment_command(points[i - 1], points[i], precision))

    if is_closed and len(points) > 2:
        last = points[-1]
        if last.cp2 is not None or first.cp1 is not None:
            commands.append(_segment_command(last, first, precision))
        commands.append("Z")

    return " ".join(commands)


def normalize_points(points: Sequence[AnchorPoint]) -> tuple[tuple[AnchorPoint, ...], Vec]:
    """Re-base points at the origin of their open-path bounds.

    Args:
        points: Anchor points in any coordinate space

    Returns:
        Tuple of (shifted points, offset that was subtracted)
    """
    if not points:
        return (), Vec(0.0, 0.0)
    bounds = accurate_bounds(points, False)
    offset = bounds.origin
    return tuple(p.translated(-offset.x, -offset.y) for p in points), offset
