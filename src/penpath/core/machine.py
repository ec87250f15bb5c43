"""Pen tool state machine.

The pen tool is modelled as a pure function from (state, event) to (state,
effects). States are immutable records:

- IdleState: waiting for a click on the canvas or on a shape in edit mode
- CreatingState: drawing a new path one click (or click-drag) at a time
- EditingState: editing an existing path's points and handles

Effects describe what the host should do in response (update or delete a
shape, change the selection or cursor, start a timer). Coordinates in
events are page space; creating works in page space and editing converts
to the edited shape's local space.
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from penpath.config import PenPathSettings, get_default_settings
from penpath.core.bounds import (
    bounds_changed,
    creation_bounds,
    renormalize,
    single_point_bounds,
)
from penpath.core.geometry import constrain_angle, distance
from penpath.core.hit_test import PathHitTester, SegmentHit
from penpath.core.interaction import (
    SegmentDrag,
    apply_handle_drag,
    apply_segment_drag,
    begin_segment_drag,
    clear_selection,
    delete_selected_points,
    enter_edit_mode,
    exit_edit_mode,
    insert_point_on_segment,
    select_point,
    toggle_point_type,
)
from penpath.domain import (
    AnchorPoint,
    BezierPath,
    Cursor,
    CursorChanged,
    DoubleClick,
    Effect,
    Event,
    EventTarget,
    HandleDrag,
    HandleKind,
    HandleRef,
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
    Vec,
)

EXIT_EDIT_TIMER = "exit-edit"
SELECT_TOOL = "select"


@dataclass(frozen=True, slots=True)
class ClickRecord:
    """Previous pointer-down, kept for double-click detection."""

    point: Vec
    time_ms: float
    zoom: float


@dataclass(frozen=True)
class IdleState:
    """No path is being drawn or edited."""

    last_click: ClickRecord | None = None


@dataclass(frozen=True)
class CreatingState:
    """A path is being drawn.

    Attributes:
        shape_id: Identifier of the shape being drawn
        points: Placed points in page space
        origin: Stable origin for creation bounds (the first click)
        cursor: Current preview position, locked to point 0 while snapped
        dragging: Pointer is held after placing a point or starting a close
        drag_start: Page position where the current drag began
        closing_drag: Current drag shapes the closing join
        initial_drag_occurred: Point 0 has already grown handles
        snapped: Preview is locked onto point 0
        snap_origin: Pointer position where snapping began
        cursor_style: Cursor last requested from the host
        last_click: Previous click, for double-click detection
    """

    shape_id: str
    points: tuple[AnchorPoint, ...] = ()
    origin: Vec = Vec(0.0, 0.0)
    cursor: Vec | None = None
    dragging: bool = False
    drag_start: Vec | None = None
    closing_drag: bool = False
    initial_drag_occurred: bool = False
    snapped: bool = False
    snap_origin: Vec | None = None
    cursor_style: Cursor = Cursor.CROSS
    last_click: ClickRecord | None = None


@dataclass(frozen=True)
class DragSession:
    """An in-progress drag while editing.

    Exactly one of ``handle`` and ``segment`` is set.

    Attributes:
        handle: Handle being dragged
        segment: Segment being pulled
        start: Local pointer position where the drag began
        original_points: Points before the drag
        host_driven: Positions arrive as HandleDrag events from the host
    """

    handle: HandleRef | None
    segment: SegmentDrag | None
    start: Vec
    original_points: tuple[AnchorPoint, ...]
    host_driven: bool = False

    @property
    def original_handle_position(self) -> Vec | None:
        """Position of the dragged handle before the drag."""
        if self.handle is None:
            return None
        point = self.original_points[self.handle.point_index]
        if self.handle.kind is HandleKind.CP1 and point.cp1 is not None:
            return point.cp1
        if self.handle.kind is HandleKind.CP2 and point.cp2 is not None:
            return point.cp2
        return point.position


@dataclass(frozen=True)
class EditingState:
    """An existing path is in edit mode.

    Attributes:
        path: The path being edited, with its page position
        drag: Active drag session, if any
        exit_pending: An off-shape click scheduled the exit timer
        hover: Segment under the pointer, for an insertion preview
        last_click: Previous click, for double-click detection
    """

    path: BezierPath
    drag: DragSession | None = None
    exit_pending: bool = False
    hover: SegmentHit | None = None
    last_click: ClickRecord | None = None


State = IdleState | CreatingState | EditingState


@dataclass(frozen=True)
class Transition:
    """Result of feeding one event to the state machine."""

    state: State
    effects: tuple[Effect, ...] = field(default_factory=tuple)


def new_shape_id() -> str:
    """Generate an identifier for a newly drawn shape."""
    return f"shape:{uuid.uuid4().hex[:12]}"


def initial_state() -> IdleState:
    return IdleState()


def transition(
    state: State,
    event: Event,
    settings: PenPathSettings | None = None,
    shape_id_factory: Callable[[], str] | None = None,
) -> Transition:
    """Feed one event to the state machine.

    Args:
        state: Current state
        event: Input event
        settings: Thresholds and behaviour switches
        shape_id_factory: Produces ids for new shapes (random by default)

    Returns:
        Transition with the next state and the effects for the host
    """
    settings = settings or get_default_settings()
    if isinstance(state, IdleState):
        return _idle(state, event, settings, shape_id_factory or new_shape_id)
    if isinstance(state, CreatingState):
        return _creating(state, event, settings)
    return _editing(state, event, settings)


def _is_double_click(
    last: ClickRecord | None,
    point: Vec,
    time_ms: float,
    zoom: float,
    settings: PenPathSettings,
) -> bool:
    if last is None:
        return False
    thresholds = settings.thresholds
    if time_ms - last.time_ms > thresholds.double_click_ms:
        return False
    # Per-axis distance in screen pixels.
    scale = zoom if zoom > 0 else 1.0
    return (
        abs(point.x - last.point.x) * scale <= thresholds.double_click_distance
        and abs(point.y - last.point.y) * scale <= thresholds.double_click_distance
    )


# === Idle ===


def _idle(
    state: IdleState,
    event: Event,
    settings: PenPathSettings,
    shape_id_factory: Callable[[], str],
) -> Transition:
    if isinstance(event, KeyDown) and event.key == "Escape":
        return Transition(state, (ToolChanged(SELECT_TOOL),))

    if not isinstance(event, PointerDown):
        return Transition(state)

    if event.target is EventTarget.CANVAS:
        creating = CreatingState(
            shape_id=shape_id_factory(),
            points=(AnchorPoint(event.point.x, event.point.y),),
            origin=event.point,
            cursor=event.point,
            dragging=True,
            drag_start=event.point,
            last_click=ClickRecord(event.point, event.time_ms, event.zoom),
        )
        return Transition(
            creating,
            (CursorChanged(Cursor.CROSS), ShapeUpdated(_creating_path(creating, settings))),
        )

    if event.shape is not None and event.shape.edit_mode:
        # The click that entered editing is handled as an editing click.
        return _editing(EditingState(path=event.shape), event, settings)

    return Transition(state)


# === Creating ===


def _creating_path(state: CreatingState, settings: PenPathSettings, preview: bool = False) -> BezierPath:
    """Build the in-progress shape with stable-origin bounds."""
    points = list(state.points)
    if preview and points and state.cursor is not None:
        points.append(AnchorPoint(state.cursor.x, state.cursor.y))

    force_edit = (len(state.points) == 1 and not state.initial_drag_occurred) or state.dragging
    bounds = settings.bounds
    if len(points) == 1:
        rect, local = single_point_bounds(points[0], bounds.single_point_padding, bounds.min_extent)
    else:
        rect, local = creation_bounds(points, state.origin, bounds.creation_padding, bounds.min_extent)

    return BezierPath(
        id=state.shape_id,
        points=local,
        x=rect.x,
        y=rect.y,
        w=rect.w,
        h=rect.h,
        edit_mode=force_edit,
    )


def _finish_creating(state: CreatingState, settings: PenPathSettings, closed: bool) -> Transition:
    """Commit the drawn path, renormalized with accurate bounds."""
    path = renormalize(
        BezierPath(id=state.shape_id, points=state.points, is_closed=closed),
        settings.bounds.min_extent,
    )
    delay = settings.editor.close_reselect_ms if closed else settings.editor.complete_reselect_ms
    return Transition(
        IdleState(),
        (
            ShapeUpdated(path),
            ToolChanged(SELECT_TOOL),
            ShapesSelected((state.shape_id,)),
            ReselectScheduled(state.shape_id, delay),
            CursorChanged(Cursor.DEFAULT),
        ),
    )


def _complete(state: CreatingState, settings: PenPathSettings) -> Transition:
    if len(state.points) < 2:
        return Transition(
            IdleState(),
            (ShapeDeleted(state.shape_id), ToolChanged(SELECT_TOOL), CursorChanged(Cursor.DEFAULT)),
        )
    return _finish_creating(state, settings, closed=False)


def _close(state: CreatingState, settings: PenPathSettings) -> Transition:
    if len(state.points) < 3:
        return Transition(state)
    return _finish_creating(state, settings, closed=True)


def _cancel(state: CreatingState) -> Transition:
    return Transition(IdleState(), (ShapeDeleted(state.shape_id), CursorChanged(Cursor.DEFAULT)))


def _drag_offset(start: Vec, point: Vec, modifiers: Modifiers) -> Vec:
    offset = point - start
    if modifiers.shift:
        offset = constrain_angle(offset)
    return offset


def _creating_drag(state: CreatingState, event: PointerMove, settings: PenPathSettings) -> CreatingState:
    """Grow handles on the dragged point, or on the closing join."""
    start = state.drag_start if state.drag_start is not None else event.point
    past_threshold = distance(event.point, start) * event.zoom > settings.thresholds.corner_point_drag
    offset = _drag_offset(start, event.point, event.modifiers)
    points = list(state.points)

    if state.closing_drag:
        first, last = points[0], points[-1]
        if past_threshold:
            cp1 = None if event.modifiers.alt else first.position - offset
            points[0] = replace(first, cp1=cp1)
            points[-1] = replace(points[-1], cp2=first.position + offset)
        else:
            points[0] = replace(first, cp1=None)
            points[-1] = replace(last, cp2=None)
        return replace(state, points=tuple(points), cursor=event.point)

    initial_drag_occurred = state.initial_drag_occurred
    last = points[-1]
    if past_threshold:
        cp1 = None if event.modifiers.alt else start - offset
        points[-1] = last.with_controls(cp1, start + offset)
        if len(points) == 1:
            initial_drag_occurred = True
    else:
        points[-1] = last.as_corner()

    return replace(
        state,
        points=tuple(points),
        cursor=event.point,
        initial_drag_occurred=initial_drag_occurred,
    )


def _creating_hover(state: CreatingState, event: PointerMove, settings: PenPathSettings) -> CreatingState:
    """Track the preview position with snap-to-start hysteresis."""
    if len(state.points) < 3:
        return replace(state, cursor=event.point, snapped=False, snap_origin=None)

    thresholds = settings.thresholds
    first = state.points[0].position
    if not state.snapped:
        if distance(event.point, first) < thresholds.scaled(thresholds.snap_to_start, event.zoom):
            return replace(state, cursor=first, snapped=True, snap_origin=event.point)
        return replace(state, cursor=event.point)

    snap_origin = state.snap_origin if state.snap_origin is not None else first
    if distance(event.point, snap_origin) > thresholds.scaled(thresholds.snap_release, event.zoom):
        return replace(state, cursor=event.point, snapped=False, snap_origin=None)
    return replace(state, cursor=first)


def _creating(state: CreatingState, event: Event, settings: PenPathSettings) -> Transition:
    thresholds = settings.thresholds

    if isinstance(event, PointerMove):
        if state.dragging:
            updated = _creating_drag(state, event, settings)
            return Transition(updated, (ShapeUpdated(_creating_path(updated, settings)),))

        updated = _creating_hover(state, event, settings)
        effects: list[Effect] = []
        near_start = len(updated.points) >= 3 and distance(
            event.point, updated.points[0].position
        ) < thresholds.scaled(thresholds.close_curve, event.zoom)
        cursor_style = Cursor.POINTER if updated.snapped or near_start else Cursor.CROSS
        if cursor_style is not state.cursor_style:
            updated = replace(updated, cursor_style=cursor_style)
            effects.append(CursorChanged(cursor_style))
        effects.append(ShapeUpdated(_creating_path(updated, settings, preview=True)))
        return Transition(updated, tuple(effects))

    if isinstance(event, PointerDown):
        if _is_double_click(state.last_click, event.point, event.time_ms, event.zoom, settings):
            return _complete(state, settings)

        click = ClickRecord(event.point, event.time_ms, event.zoom)
        if state.snapped and len(state.points) >= 3:
            updated = replace(
                state,
                dragging=True,
                closing_drag=True,
                drag_start=event.point,
                last_click=click,
            )
            return Transition(updated, (ShapeUpdated(_creating_path(updated, settings)),))

        if len(state.points) >= 3 and distance(
            event.point, state.points[0].position
        ) < thresholds.scaled(thresholds.close_curve, event.zoom):
            return _close(state, settings)

        updated = replace(
            state,
            points=(*state.points, AnchorPoint(event.point.x, event.point.y)),
            cursor=event.point,
            dragging=True,
            drag_start=event.point,
            last_click=click,
        )
        return Transition(updated, (ShapeUpdated(_creating_path(updated, settings)),))

    if isinstance(event, PointerUp):
        if not state.dragging:
            return Transition(state)
        if state.closing_drag:
            return _close(replace(state, dragging=False, closing_drag=False), settings)
        updated = replace(state, dragging=False, drag_start=None)
        return Transition(updated, (ShapeUpdated(_creating_path(updated, settings)),))

    if isinstance(event, DoubleClick):
        return _complete(state, settings)

    if isinstance(event, KeyDown):
        if event.key == "Enter":
            return _complete(state, settings)
        if event.key == "Escape":
            return _cancel(state)
        if event.key.lower() == "c":
            return _close(state, settings)

    return Transition(state)


# === Editing ===


def _exit_editing(state: EditingState, settings: PenPathSettings) -> Transition:
    path = exit_edit_mode(state.path, settings)
    return Transition(
        IdleState(),
        (ShapeUpdated(path), ShapesSelected((path.id,)), ToolChanged(SELECT_TOOL)),
    )


def _updated(state: EditingState, path: BezierPath, **changes: object) -> Transition:
    """Editing transition that reports the path only if it changed."""
    effects: tuple[Effect, ...] = (ShapeUpdated(path),) if path != state.path else ()
    return Transition(replace(state, path=path, **changes), effects)


def _toggle_at(state: EditingState, point: Vec, zoom: float, settings: PenPathSettings) -> Transition:
    tester = PathHitTester(settings.thresholds, zoom, settings.sampling.projection_lut_steps)
    index = tester.anchor_at(state.path.points, state.path.to_local(point))
    if index is None:
        return Transition(state)
    return _updated(state, toggle_point_type(state.path, index, settings), drag=None)


def _editing_pointer_down(state: EditingState, event: PointerDown, settings: PenPathSettings) -> Transition:
    path = state.path
    if _is_double_click(state.last_click, event.point, event.time_ms, event.zoom, settings):
        result = _toggle_at(state, event.point, event.zoom, settings)
        return replace(result, state=replace(result.state, last_click=None))

    click = ClickRecord(event.point, event.time_ms, event.zoom)
    tester = PathHitTester(settings.thresholds, event.zoom, settings.sampling.projection_lut_steps)
    local = path.to_local(event.point)

    index = tester.anchor_at(path.points, local)
    if index is not None:
        selected = select_point(path, index, additive=event.modifiers.shift)
        drag = DragSession(HandleRef(index, HandleKind.ANCHOR), None, local, selected.points)
        return _updated(state, selected, drag=drag, exit_pending=False, last_click=click)

    handle = tester.control_point_at(path.points, local)
    if handle is not None:
        drag = DragSession(handle, None, local, path.points)
        return Transition(replace(state, drag=drag, exit_pending=False, last_click=click))

    hit = tester.segment_at(path.points, path.is_closed, local)
    if hit is not None:
        if event.modifiers.alt:
            inserted = insert_point_on_segment(path, hit.segment_index, hit.t, settings)
            return _updated(state, inserted, drag=None, hover=None, exit_pending=False, last_click=click)
        no_modifiers = not (event.modifiers.shift or event.modifiers.ctrl)
        if no_modifiers and settings.editor.enable_segment_drag:
            segment = begin_segment_drag(path.points, path.is_closed, hit.segment_index)
            if segment is not None:
                cleared = clear_selection(path)
                drag = DragSession(None, segment, local, cleared.points)
                return _updated(state, cleared, drag=drag, exit_pending=False, last_click=click)

    cleared = clear_selection(path)
    on_shape = event.target is EventTarget.SHAPE and (event.shape is None or event.shape.id == path.id)
    if on_shape:
        return _updated(state, cleared, drag=None, exit_pending=False, last_click=click)

    result = _updated(state, cleared, drag=None, exit_pending=True, last_click=click)
    return Transition(
        result.state,
        (*result.effects, TimerScheduled(EXIT_EDIT_TIMER, settings.thresholds.exit_grace_ms)),
    )


def _editing_pointer_move(state: EditingState, event: PointerMove, settings: PenPathSettings) -> Transition:
    path = state.path
    local = path.to_local(event.point)
    drag = state.drag

    if drag is None:
        tester = PathHitTester(settings.thresholds, event.zoom, settings.sampling.projection_lut_steps)
        hover = tester.hover_segment_at(path.points, path.is_closed, local)
        return Transition(replace(state, hover=hover))

    if drag.host_driven:
        return Transition(state)

    delta = local - drag.start
    if drag.segment is not None:
        points = apply_segment_drag(path.points, drag.segment, delta)
    elif drag.handle is None:
        return Transition(state)
    else:
        origin = drag.original_handle_position
        target = origin + delta if origin is not None else local
        points = apply_handle_drag(
            path.points,
            drag.handle,
            target,
            break_symmetry=event.modifiers.break_symmetry,
        )
    return _updated(state, path.with_points(points))


def _editing_pointer_up(state: EditingState, settings: PenPathSettings) -> Transition:
    drag = state.drag
    if drag is None:
        return Transition(state)
    path = state.path
    if bounds_changed(drag.original_points, path.points, path.is_closed, settings.bounds.change_threshold):
        path = renormalize(path, settings.bounds.min_extent)
    return _updated(state, path, drag=None)


def _editing_handle_drag(state: EditingState, event: HandleDrag) -> Transition:
    path = state.path
    ref = HandleRef.parse(event.handle_id)
    points = apply_handle_drag(
        path.points,
        event.handle_id,
        path.to_local(event.point),
        break_symmetry=event.modifiers.break_symmetry,
    )
    if ref is None or points == path.points:
        return Transition(state)
    drag = state.drag
    if drag is None or not drag.host_driven:
        drag = DragSession(ref, None, path.to_local(event.point), path.points, host_driven=True)
    return _updated(state, path.with_points(points), drag=drag, exit_pending=False)


def _editing(state: EditingState, event: Event, settings: PenPathSettings) -> Transition:
    if not state.path.edit_mode:
        state = replace(state, path=enter_edit_mode(state.path))

    if isinstance(event, PointerDown):
        return _editing_pointer_down(state, event, settings)
    if isinstance(event, PointerMove):
        return _editing_pointer_move(state, event, settings)
    if isinstance(event, PointerUp):
        return _editing_pointer_up(state, settings)
    if isinstance(event, HandleDrag):
        return _editing_handle_drag(state, event)
    if isinstance(event, DoubleClick):
        return _toggle_at(state, event.point, event.zoom, settings)

    if isinstance(event, TimerElapsed) and event.name == EXIT_EDIT_TIMER:
        if state.exit_pending and state.drag is None:
            return _exit_editing(state, settings)
        return Transition(replace(state, exit_pending=False))

    if isinstance(event, KeyDown):
        if event.key in ("Escape", "Enter"):
            return _exit_editing(state, settings)
        if event.key in ("Delete", "Backspace"):
            return _updated(state, delete_selected_points(state.path, settings))

    return Transition(state)
