"""Input events consumed and effects produced by the pen tool.

Events are what the host feeds in (pointer, keyboard, handle drags and
elapsed timers). Effects are what the state machine asks the host to do in
return. Both are plain immutable records so a transition can be replayed or
asserted on in tests.
"""

from dataclasses import dataclass, field
from enum import Enum

from penpath.domain.path import BezierPath
from penpath.domain.point import Vec


class EventTarget(str, Enum):
    """What the host hit-test found under the pointer."""

    CANVAS = "canvas"
    SHAPE = "shape"


class Cursor(str, Enum):
    """Cursor styles requested from the host."""

    DEFAULT = "default"
    CROSS = "cross"
    POINTER = "pointer"


@dataclass(frozen=True, slots=True)
class Modifiers:
    """Modifier key state at the time of an event.

    Attributes:
        shift: Additive selection, 45 degree angle constraint
        alt: Break handle symmetry, insert point on segment
        ctrl: Break handle symmetry
    """

    shift: bool = False
    alt: bool = False
    ctrl: bool = False

    @property
    def break_symmetry(self) -> bool:
        return self.alt or self.ctrl


NO_MODIFIERS = Modifiers()


@dataclass(frozen=True)
class PointerDown:
    """Pointer pressed at a page-space position."""

    point: Vec
    zoom: float = 1.0
    target: EventTarget = EventTarget.CANVAS
    shape: BezierPath | None = None
    modifiers: Modifiers = field(default=NO_MODIFIERS)
    time_ms: float = 0.0


@dataclass(frozen=True)
class PointerMove:
    """Pointer moved to a page-space position."""

    point: Vec
    zoom: float = 1.0
    modifiers: Modifiers = field(default=NO_MODIFIERS)
    time_ms: float = 0.0


@dataclass(frozen=True)
class PointerUp:
    """Pointer released at a page-space position."""

    point: Vec
    zoom: float = 1.0
    modifiers: Modifiers = field(default=NO_MODIFIERS)
    time_ms: float = 0.0


@dataclass(frozen=True)
class DoubleClick:
    """Double click reported by a host that detects it itself."""

    point: Vec
    zoom: float = 1.0
    modifiers: Modifiers = field(default=NO_MODIFIERS)
    time_ms: float = 0.0


@dataclass(frozen=True)
class KeyDown:
    """Key pressed. ``key`` uses DOM names: Enter, Escape, Delete, Backspace, c."""

    key: str
    modifiers: Modifiers = field(default=NO_MODIFIERS)
    time_ms: float = 0.0


@dataclass(frozen=True)
class HandleDrag:
    """Host handle system moved a handle to a page-space position."""

    handle_id: str
    point: Vec
    zoom: float = 1.0
    modifiers: Modifiers = field(default=NO_MODIFIERS)
    time_ms: float = 0.0


@dataclass(frozen=True)
class TimerElapsed:
    """A timer requested through ``TimerScheduled`` fired."""

    name: str
    time_ms: float = 0.0


Event = PointerDown | PointerMove | PointerUp | DoubleClick | KeyDown | HandleDrag | TimerElapsed


@dataclass(frozen=True)
class ShapeUpdated:
    """Create or replace the shape with this id."""

    path: BezierPath


@dataclass(frozen=True)
class ShapeDeleted:
    """Remove the shape with this id."""

    shape_id: str


@dataclass(frozen=True)
class ShapesSelected:
    """Replace the host's shape selection."""

    shape_ids: tuple[str, ...]


@dataclass(frozen=True)
class CursorChanged:
    """Change the pointer cursor."""

    cursor: Cursor


@dataclass(frozen=True)
class ReselectScheduled:
    """Deselect and reselect the shape after a delay to refresh host chrome.

    Fire-and-forget; skipping it leaves the path itself unchanged.
    """

    shape_id: str
    delay_ms: float


@dataclass(frozen=True)
class TimerScheduled:
    """Send ``TimerElapsed(name)`` back after a delay."""

    name: str
    delay_ms: float


@dataclass(frozen=True)
class ToolChanged:
    """Switch the host's active tool."""

    tool: str


Effect = (
    ShapeUpdated
    | ShapeDeleted
    | ShapesSelected
    | CursorChanged
    | ReselectScheduled
    | TimerScheduled
    | ToolChanged
)
