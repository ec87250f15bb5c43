"""Path representation and bounding boxes.

This module defines the path domain model: an ordered sequence of anchor
points plus the shape record a host stores for it (position offset, size,
edit mode and point selection).
"""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any

from penpath.domain.point import AnchorPoint, Vec


class SegmentKind(Enum):
    """Curve degree of a segment, derived from the adjacent control points.

    - CUBIC: left point has cp2 and right point has cp1
    - QUADRATIC: exactly one of those control points exists
    - LINEAR: neither exists
    """

    LINEAR = auto()
    QUADRATIC = auto()
    CUBIC = auto()


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box given by its corners.

    Attributes:
        min_x: Left edge
        min_y: Top edge
        max_x: Right edge
        max_y: Bottom edge
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def origin(self) -> Vec:
        """Minimum corner of the box."""
        return Vec(self.min_x, self.min_y)

    def union(self, other: "Bounds") -> "Bounds":
        """Smallest box containing both boxes."""
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def contains(self, point: Vec, margin: float = 0.0) -> bool:
        """Check if a point lies inside the box, optionally grown by a margin."""
        return (
            self.min_x - margin <= point.x <= self.max_x + margin
            and self.min_y - margin <= point.y <= self.max_y + margin
        )

    @classmethod
    def from_points(cls, points: list[Vec]) -> "Bounds":
        """Bounding box of a non-empty list of positions."""
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, float]:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }


@dataclass(frozen=True, slots=True)
class Rect:
    """Box given by origin and size, as exchanged with the host.

    Attributes:
        x: Left edge
        y: Top edge
        w: Width
        h: Height
    """

    x: float
    y: float
    w: float
    h: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True)
class BezierPath:
    """A Bezier path shape.

    Points are stored in shape-local space; ``x`` and ``y`` place that space
    on the page. Lists passed for ``points`` and sets passed for
    ``selected_point_indices`` are frozen on construction so a path can be
    shared freely between states.

    Attributes:
        id: Shape identifier assigned by the host or the pen tool
        points: Ordered anchor points
        is_closed: Whether a closing segment joins the last point to the first
        x: Page-space X of the local origin
        y: Page-space Y of the local origin
        w: Shape width
        h: Shape height
        edit_mode: Whether point handles are shown and editable
        selected_point_indices: Indices of selected anchor points
    """

    id: str = ""
    points: tuple[AnchorPoint, ...] = ()
    is_closed: bool = False
    x: float = 0.0
    y: float = 0.0
    w: float = 1.0
    h: float = 1.0
    edit_mode: bool = False
    selected_point_indices: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))
        if not isinstance(self.selected_point_indices, frozenset):
            object.__setattr__(
                self, "selected_point_indices", frozenset(self.selected_point_indices)
            )

    def neighbors(self, index: int) -> tuple[AnchorPoint | None, AnchorPoint | None]:
        """Previous and next anchor of a point, wrapping on closed paths."""
        n = len(self.points)
        if index == 0:
            prev_index = n - 1 if self.is_closed else -1
        else:
            prev_index = index - 1
        if index == n - 1:
            next_index = 0 if self.is_closed else -1
        else:
            next_index = index + 1

        prev_point = self.points[prev_index] if prev_index >= 0 and prev_index != index else None
        next_point = self.points[next_index] if next_index >= 0 and next_index != index else None
        return prev_point, next_point

    def to_local(self, page_point: Vec) -> Vec:
        """Convert a page-space position to this shape's local space."""
        return Vec(page_point.x - self.x, page_point.y - self.y)

    def to_page(self, local_point: Vec) -> Vec:
        """Convert a local position to page space."""
        return Vec(local_point.x + self.x, local_point.y + self.y)

    def page_points(self) -> tuple[AnchorPoint, ...]:
        """Anchor points translated into page space."""
        return tuple(p.translated(self.x, self.y) for p in self.points)

    def with_points(self, points: "tuple[AnchorPoint, ...] | list[AnchorPoint]") -> "BezierPath":
        """Return a copy with the points replaced."""
        return replace(self, points=tuple(points))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the path
        """
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "is_closed": self.is_closed,
            "edit_mode": self.edit_mode,
            "selected_point_indices": sorted(self.selected_point_indices),
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BezierPath":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a path

        Returns:
            BezierPath instance
        """
        return cls(
            id=str(data.get("id", "")),
            points=tuple(AnchorPoint.from_dict(p) for p in data.get("points", [])),
            is_closed=bool(data.get("is_closed", False)),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            w=float(data.get("w", 1.0)),
            h=float(data.get("h", 1.0)),
            edit_mode=bool(data.get("edit_mode", False)),
            selected_point_indices=frozenset(data.get("selected_point_indices", [])),
        )
