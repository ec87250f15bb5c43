"""Domain models for penpath.

This module contains the core domain models representing anchor points,
paths, bounding boxes, input events and host effects. All models are:

- Immutable (frozen dataclasses), so state transitions never alias
- Serializable to plain dictionaries for documents and event scripts
- Independent of any host canvas framework

Key classes:
- Vec: A 2D position or vector
- AnchorPoint: A path vertex with optional control points
- BezierPath: A path shape with position, size, edit mode and selection
- Bounds / Rect: Bounding boxes
- HandleRef: Identity of a draggable handle
"""

from penpath.domain.events import (
    Cursor,
    CursorChanged,
    DoubleClick,
    Effect,
    Event,
    EventTarget,
    HandleDrag,
    KeyDown,
    Modifiers,
    PointerDown,
    PointerMove,
    PointerUp,
    ReselectScheduled,
    ShapeDeleted,
    ShapesSelected,
    ShapeUpdated,
    TimerElapsed,
    TimerScheduled,
    ToolChanged,
)
from penpath.domain.path import BezierPath, Bounds, Rect, SegmentKind
from penpath.domain.point import AnchorPoint, HandleKind, HandleRef, Vec

__all__: list[str] = [
    # Enums
    "Cursor",
    "EventTarget",
    "HandleKind",
    "SegmentKind",
    # Core types
    "AnchorPoint",
    "BezierPath",
    "Bounds",
    "HandleRef",
    "Rect",
    "Vec",
    # Events
    "DoubleClick",
    "Event",
    "HandleDrag",
    "KeyDown",
    "Modifiers",
    "PointerDown",
    "PointerMove",
    "PointerUp",
    "TimerElapsed",
    # Effects
    "CursorChanged",
    "Effect",
    "ReselectScheduled",
    "ShapeDeleted",
    "ShapeUpdated",
    "ShapesSelected",
    "TimerScheduled",
    "ToolChanged",
]
