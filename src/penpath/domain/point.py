"""Core geometric types for point representation.

This module defines the fundamental point types used throughout penpath:
- Vec: An immutable 2D vector / position
- AnchorPoint: A path vertex with optional incoming and outgoing control points
- HandleKind: Enum for the draggable parts of an anchor point
- HandleRef: Identity of a single draggable handle
"""

import math
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class Vec:
    """A 2D vector or position.

    Immutable and hashable. Supports the handful of arithmetic operators
    the curve code needs.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, other: "Vec") -> "Vec":
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec") -> "Vec":
        return Vec(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec":
        return Vec(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec":
        return Vec(-self.x, -self.y)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vec":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Vec instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class AnchorPoint:
    """A user-placed vertex on a path.

    A point without control points is a corner (straight joins on both
    sides). A point with either control point is smooth.

    Attributes:
        x: X coordinate of the anchor
        y: Y coordinate of the anchor
        cp1: Incoming control point (tangent from the previous point)
        cp2: Outgoing control point (tangent toward the next point)
    """

    x: float
    y: float
    cp1: Vec | None = None
    cp2: Vec | None = None

    @property
    def position(self) -> Vec:
        """Anchor position as a vector."""
        return Vec(self.x, self.y)

    @property
    def is_corner(self) -> bool:
        """True if the point has no control points."""
        return self.cp1 is None and self.cp2 is None

    @property
    def is_smooth(self) -> bool:
        """True if the point has at least one control point."""
        return not self.is_corner

    def translated(self, dx: float, dy: float) -> "AnchorPoint":
        """Move the anchor and both control points by the same delta.

        Args:
            dx: Horizontal offset
            dy: Vertical offset

        Returns:
            Translated copy of the point
        """
        delta = Vec(dx, dy)
        return AnchorPoint(
            x=self.x + dx,
            y=self.y + dy,
            cp1=self.cp1 + delta if self.cp1 is not None else None,
            cp2=self.cp2 + delta if self.cp2 is not None else None,
        )

    def as_corner(self) -> "AnchorPoint":
        """Return a copy without control points."""
        return AnchorPoint(self.x, self.y)

    def with_controls(self, cp1: Vec | None, cp2: Vec | None) -> "AnchorPoint":
        """Return a copy with both control points replaced."""
        return replace(self, cp1=cp1, cp2=cp2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Absent control points are omitted rather than stored as null.

        Returns:
            Dictionary with x, y and optional cp1 / cp2 fields
        """
        data: dict[str, Any] = {"x": self.x, "y": self.y}
        if self.cp1 is not None:
            data["cp1"] = self.cp1.to_dict()
        if self.cp2 is not None:
            data["cp2"] = self.cp2.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnchorPoint":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x, y and optional cp1 / cp2 fields

        Returns:
            AnchorPoint instance
        """
        cp1 = data.get("cp1")
        cp2 = data.get("cp2")
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            cp1=Vec.from_dict(cp1) if cp1 is not None else None,
            cp2=Vec.from_dict(cp2) if cp2 is not None else None,
        )


class HandleKind(str, Enum):
    """Draggable part of an anchor point."""

    ANCHOR = "anchor"
    CP1 = "cp1"
    CP2 = "cp2"


_HANDLE_ID_RE = re.compile(r"^bezier-(\d+)-(anchor|cp1|cp2)$")


@dataclass(frozen=True, slots=True)
class HandleRef:
    """Identity of a draggable handle.

    Handles are addressed by the index of their anchor point and the part
    of the point being dragged. The string form used by hosts is
    ``bezier-{index}-{kind}``.

    Attributes:
        point_index: Index of the owning anchor point
        kind: Which part of the point the handle moves
    """

    point_index: int
    kind: HandleKind

    @property
    def handle_id(self) -> str:
        """Host-facing string identifier."""
        return f"bezier-{self.point_index}-{self.kind.value}"

    @classmethod
    def parse(cls, handle_id: str) -> "HandleRef | None":
        """Parse a host handle identifier.

        Args:
            handle_id: Identifier of the form ``bezier-{index}-{kind}``

        Returns:
            HandleRef, or None if the identifier is malformed
        """
        match = _HANDLE_ID_RE.match(handle_id)
        if match is None:
            return None
        return cls(point_index=int(match.group(1)), kind=HandleKind(match.group(2)))
