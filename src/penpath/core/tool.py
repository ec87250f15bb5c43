"""Stateful pen tool adapter.

PenTool owns the current state machine state and a minimal in-memory mirror
of the host: the shapes it created or edited, the shape selection, cursor,
active tool and pending timers. Events go in through ``dispatch``; the
returned effects are applied to the mirror and handed back to the caller so
a real host can apply them too.

Example:
    tool = PenTool()
    tool.dispatch(PointerDown(Vec(0, 0)))
    tool.dispatch(PointerUp(Vec(0, 0)))
    tool.dispatch(PointerDown(Vec(100, 0), time_ms=1000))
    tool.dispatch(PointerUp(Vec(100, 0), time_ms=1000))
    tool.dispatch(KeyDown("Enter"))
    path = tool.shapes[tool.selected[0]]
"""

import itertools
import time
from dataclasses import replace

import structlog

from penpath.config import PenPathSettings, get_default_settings
from penpath.core.bounds import edit_mode_bounds, rest_bounds
from penpath.core.machine import (
    CreatingState,
    EditingState,
    IdleState,
    State,
    initial_state,
    transition,
)
from penpath.domain import (
    BezierPath,
    Bounds,
    Cursor,
    CursorChanged,
    Effect,
    Event,
    EventTarget,
    KeyDown,
    PointerDown,
    ReselectScheduled,
    ShapeDeleted,
    ShapesSelected,
    ShapeUpdated,
    TimerElapsed,
    TimerScheduled,
    ToolChanged,
    Vec,
)
from penpath.utils import EditLogger, EditStats


class PenTool:
    """Drives the pen tool state machine and mirrors its effects."""

    TOOL_ID = "pen"

    def __init__(
        self,
        settings: PenPathSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
        id_prefix: str = "shape",
    ) -> None:
        """Initialize the pen tool.

        Args:
            settings: Thresholds and behaviour switches
            logger: Structured logger (module logger if None)
            id_prefix: Prefix for sequential ids of new shapes
        """
        self.settings = settings or get_default_settings()
        self.logger = logger or structlog.get_logger(__name__)
        self.edit_logger = EditLogger(self.logger)
        self._counter = itertools.count(1)
        self._id_prefix = id_prefix
        self._state: State = initial_state()

        self.shapes: dict[str, BezierPath] = {}
        self.selected: tuple[str, ...] = ()
        self.cursor = Cursor.DEFAULT
        self.tool = self.TOOL_ID
        self.pending_timers: list[TimerScheduled] = []
        self.pending_reselects: list[ReselectScheduled] = []

    @property
    def state(self) -> State:
        return self._state

    @property
    def stats(self) -> EditStats:
        return self.edit_logger.stats

    def _next_shape_id(self) -> str:
        return f"{self._id_prefix}:{next(self._counter)}"

    def add_shape(self, path: BezierPath) -> None:
        """Register an existing shape, e.g. one loaded from a document."""
        self.shapes[path.id] = path

    def shape_at(self, point: Vec) -> BezierPath | None:
        """Find the topmost mirrored shape whose hit box contains a page point.

        The box is grown by the anchor hit radius so handles on the edge of
        the curve still count.
        """
        margin = self.settings.thresholds.anchor_point
        for path in reversed(list(self.shapes.values())):
            rect = edit_mode_bounds(path, self.settings.bounds.min_extent) if path.edit_mode else rest_bounds(path)
            box = Bounds(path.x + rect.x, path.y + rect.y, path.x + rect.x + rect.w, path.y + rect.y + rect.h)
            if box.contains(point, margin):
                return path
        return None

    def begin_editing(self, shape_id: str) -> tuple[Effect, ...]:
        """Put a mirrored shape into edit mode and start editing it.

        Args:
            shape_id: Identifier of a shape in ``shapes``

        Returns:
            Effects applied to the mirror
        """
        path = self.shapes.get(shape_id)
        if path is None:
            self.logger.warning("Cannot edit unknown shape", shape=shape_id)
            return ()
        path = replace(path, edit_mode=True)
        self._state = EditingState(path=path)
        effects: tuple[Effect, ...] = (ShapeUpdated(path), ShapesSelected((shape_id,)))
        self._apply(effects)
        self.logger.debug("Editing started", shape=shape_id)
        return effects

    def dispatch(self, event: Event) -> tuple[Effect, ...]:
        """Feed one event through the state machine.

        A PointerDown aimed at a shape without the shape attached is resolved
        against the mirrored shapes.

        Args:
            event: Input event

        Returns:
            Effects produced by the transition
        """
        if self.stats.start_time is None:
            self.stats.start_time = time.time()

        event = self._resolve_target(event)
        before = self._state
        result = transition(before, event, self.settings, self._next_shape_id)
        self._state = result.state

        self._record(before, result.state, event, result.effects)
        self._apply(result.effects)
        self.edit_logger.log_event(type(event).__name__, type(before).__name__, type(result.state).__name__)
        self.stats.end_time = time.time()
        return result.effects

    def fire_timers(self, time_ms: float = 0.0) -> tuple[Effect, ...]:
        """Deliver every pending timer as a TimerElapsed event."""
        timers, self.pending_timers = self.pending_timers, []
        effects: list[Effect] = []
        for timer in timers:
            effects.extend(self.dispatch(TimerElapsed(timer.name, time_ms)))
        return tuple(effects)

    def fire_reselects(self) -> tuple[Effect, ...]:
        """Run every pending reselect, selecting each shape that still exists.

        Returns:
            ShapesSelected effects applied to the mirror
        """
        reselects, self.pending_reselects = self.pending_reselects, []
        effects: tuple[Effect, ...] = tuple(
            ShapesSelected((r.shape_id,)) for r in reselects if r.shape_id in self.shapes
        )
        self._apply(effects)
        return effects

    def _resolve_target(self, event: Event) -> Event:
        if not isinstance(event, PointerDown) or event.shape is not None:
            return event
        hit = self.shape_at(event.point)
        if event.target is EventTarget.SHAPE:
            return replace(event, shape=hit)
        if isinstance(self._state, IdleState) and hit is not None and hit.edit_mode:
            return replace(event, target=EventTarget.SHAPE, shape=hit)
        return event

    def _record(
        self,
        before: State,
        after: State,
        event: Event,
        effects: tuple[Effect, ...],
    ) -> None:
        """Update statistics from a state change."""
        if isinstance(before, CreatingState):
            shape_id = before.shape_id
            if isinstance(after, IdleState):
                finished = [e.path for e in effects if isinstance(e, ShapeUpdated) and e.path.id == shape_id]
                if finished:
                    self.edit_logger.log_curve_finished(shape_id, finished[-1].is_closed, len(before.points))
                elif isinstance(event, KeyDown) and event.key == "Escape":
                    self.edit_logger.log_curve_cancelled(shape_id, "cancelled")
                else:
                    self.edit_logger.log_curve_cancelled(shape_id, "fewer than 2 points")
            elif isinstance(after, CreatingState):
                added = len(after.points) - len(before.points)
                if added > 0:
                    self.edit_logger.log_points_created(shape_id, added)
                elif isinstance(event, KeyDown) and event.key.lower() == "c":
                    self.edit_logger.log_rejected("close", "fewer than 3 points")
        elif isinstance(before, IdleState) and isinstance(after, CreatingState):
            self.edit_logger.log_points_created(after.shape_id, len(after.points))
        elif isinstance(before, EditingState) and isinstance(after, EditingState):
            shape_id = before.path.id
            delta = len(after.path.points) - len(before.path.points)
            if delta > 0:
                self.edit_logger.log_points_inserted(shape_id, delta)
            elif delta < 0:
                self.edit_logger.log_points_deleted(shape_id, -delta)
            elif (
                isinstance(event, KeyDown)
                and event.key in ("Delete", "Backspace")
                and before.path.selected_point_indices
            ):
                self.edit_logger.log_rejected("delete", "fewer than 2 points would remain")

    def _apply(self, effects: tuple[Effect, ...]) -> None:
        """Apply effects to the in-memory host mirror."""
        for effect in effects:
            if isinstance(effect, ShapeUpdated):
                self.shapes[effect.path.id] = effect.path
            elif isinstance(effect, ShapeDeleted):
                self.shapes.pop(effect.shape_id, None)
                self.selected = tuple(s for s in self.selected if s != effect.shape_id)
            elif isinstance(effect, ShapesSelected):
                self.selected = effect.shape_ids
            elif isinstance(effect, CursorChanged):
                self.cursor = effect.cursor
            elif isinstance(effect, ToolChanged):
                self.tool = effect.tool
            elif isinstance(effect, TimerScheduled):
                self.pending_timers.append(effect)
            elif isinstance(effect, ReselectScheduled):
                self.pending_reselects.append(effect)
