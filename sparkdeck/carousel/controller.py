"""
Carousel Interaction Controller.

Owns drag/swipe capture, the slide animation and auto-rotation for the
carousel view. It reads and changes current_index only through Data Store
operations and is otherwise independent of the shape of an idea.

States:

    IDLE --DragStart--> DRAGGING --DragMove--> DRAGGING
    DRAGGING --DragEnd--> ANIMATING (commit or snap back)
    IDLE --next/prev/go_to/auto-rotate--> ANIMATING
    ANIMATING --(animation duration elapsed)--> IDLE

Time comes from an injected clock: the ANIMATING -> IDLE transition is
taken lazily whenever the phase is read, so tests drive the controller
with a VirtualClock instead of real timers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sparkdeck.carousel.clock import Clock, SystemClock
from sparkdeck.carousel.commands import (
    POINTER_TOUCH,
    Advance,
    DragEnd,
    DragMove,
    DragStart,
    GoTo,
)
from sparkdeck.config import (
    ANIMATION_DURATION_MS,
    AUTO_ROTATE_INTERVAL_MS,
    CARD_WIDTH_PX,
    DRAG_THRESHOLD_PX,
)
from sparkdeck.logging import get_logger
from sparkdeck.models.view_state import VIEW_CAROUSEL
from sparkdeck.store.data_store import DataStore

logger = get_logger(__name__)


class CarouselPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    ANIMATING = "animating"


@dataclass
class _Drag:
    start_x: float
    start_y: float
    pointer: str
    # A drag begun mid-animation may move the track but never commits
    locked: bool = False
    last_dx: float = 0.0


class CarouselController:
    """
    Gesture, animation and auto-rotate state machine for the carousel.

    Attributes:
        track_offset: Current horizontal track position in pixels.
        transition_enabled: Whether the track animates to track_offset
            (False while the user is dragging).
    """

    def __init__(
        self,
        store: DataStore,
        clock: Optional[Clock] = None,
        animation_duration_ms: int = ANIMATION_DURATION_MS,
        drag_threshold_px: int = DRAG_THRESHOLD_PX,
        item_width: int = CARD_WIDTH_PX,
        auto_rotate_interval_ms: int = AUTO_ROTATE_INTERVAL_MS,
    ):
        if auto_rotate_interval_ms <= 0:
            raise ValueError("auto_rotate_interval_ms must be positive")
        self.store = store
        self.clock = clock or SystemClock()
        self.animation_duration_ms = animation_duration_ms
        self.drag_threshold_px = drag_threshold_px
        self.item_width = item_width
        self.auto_rotate_interval_ms = auto_rotate_interval_ms

        self._drag: Optional[_Drag] = None
        self._animating_until: Optional[float] = None
        self._next_rotate_at = self.clock.now_ms() + auto_rotate_interval_ms

        self.track_offset: float = self.base_offset()
        self.transition_enabled = True

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> CarouselPhase:
        if self._drag is not None:
            return CarouselPhase.DRAGGING
        if self.is_animating:
            return CarouselPhase.ANIMATING
        return CarouselPhase.IDLE

    @property
    def is_animating(self) -> bool:
        if self._animating_until is None:
            return False
        if self.clock.now_ms() >= self._animating_until:
            self._animating_until = None
            return False
        return True

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def base_offset(self, index: Optional[int] = None) -> float:
        """Resting track offset for an index (the current one by default)."""
        if index is None:
            index = self.store.current_index
        return -index * self.item_width

    def _navigation_blocked(self) -> bool:
        return self.is_animating or self.is_dragging

    # -------------------------------------------------------------------------
    # Command dispatch
    # -------------------------------------------------------------------------

    def dispatch(self, command) -> bool:
        """
        Apply one carousel command.

        Returns:
            For DragMove, whether the default scroll should be suppressed;
            for every other command, whether the index or phase changed.
        """
        if isinstance(command, Advance):
            return self._step(command.delta)
        if isinstance(command, GoTo):
            return self.go_to(command.index)
        if isinstance(command, DragStart):
            return self.drag_start(command.x, command.y, command.pointer)
        if isinstance(command, DragMove):
            return self.drag_move(command.x, command.y)
        if isinstance(command, DragEnd):
            return self.drag_end(command.x)
        raise TypeError(f"Not a carousel command: {command!r}")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def next(self) -> bool:
        """Slide to the next idea (wrapping). No-op while animating or dragging."""
        return self._step(1)

    def prev(self) -> bool:
        """Slide to the previous idea (wrapping). No-op while animating or dragging."""
        return self._step(-1)

    def _step(self, delta: int) -> bool:
        if self._navigation_blocked():
            return False
        if not self.store.advance(delta):
            return False
        self._slide_to(self.store.current_index)
        return True

    def go_to(self, index: int) -> bool:
        """
        Slide to index.

        No-op while animating or dragging, for the current index, and for
        out-of-range indexes.
        """
        if self._navigation_blocked():
            return False
        if not self.store.go_to(index):
            return False
        self._slide_to(index)
        return True

    def _slide_to(self, index: int) -> None:
        self.track_offset = self.base_offset(index)
        self.transition_enabled = True
        self._animating_until = self.clock.now_ms() + self.animation_duration_ms

    def reset(self) -> None:
        """
        Drop any gesture or animation and rest on the current index.

        Called after the filtered sequence changes (filter, sort, reload).
        """
        self._drag = None
        self._animating_until = None
        self.transition_enabled = False
        self.track_offset = self.base_offset()

    # -------------------------------------------------------------------------
    # Drag / swipe
    # -------------------------------------------------------------------------

    def drag_start(self, x: float, y: float = 0.0, pointer: str = "mouse") -> bool:
        """Begin a drag; cuts any running transition short."""
        self._drag = _Drag(start_x=x, start_y=y, pointer=pointer, locked=self.is_animating)
        self.transition_enabled = False
        return True

    def drag_move(self, x: float, y: float = 0.0) -> bool:
        """
        Follow the pointer with the track.

        Returns:
            Whether the default browser action should be suppressed. Touch
            drags suppress vertical scrolling only once the gesture is
            more horizontal than vertical; mouse drags always suppress.
        """
        if self._drag is None:
            return False

        dx = x - self._drag.start_x
        dy = y - self._drag.start_y
        self._drag.last_dx = dx
        self.track_offset = self.base_offset() + dx

        if self._drag.pointer == POINTER_TOUCH:
            return abs(dx) > abs(dy)
        return True

    def drag_end(self, x: float) -> bool:
        """
        Finish a drag: commit past the threshold, otherwise snap back.

        Dragging left (negative displacement) reveals the next idea.

        Returns:
            True if the drag committed an index change.
        """
        if self._drag is None:
            return False

        drag = self._drag
        self._drag = None
        dx = x - drag.start_x

        committed = False
        if abs(dx) > self.drag_threshold_px and not drag.locked:
            committed = self.store.advance(-1 if dx > 0 else 1)

        logger.debug(
            "carousel_drag_end",
            dx=dx,
            committed=committed,
            locked=drag.locked,
            index=self.store.current_index,
        )
        self._slide_to(self.store.current_index)
        return committed

    # -------------------------------------------------------------------------
    # Auto-rotate
    # -------------------------------------------------------------------------

    def tick(self) -> bool:
        """
        Advance time-based behaviour; call from the host's event loop.

        Fires auto-rotate once per elapsed interval, only in carousel view,
        with no modal open, and while idle.

        Returns:
            True if auto-rotate advanced the carousel.
        """
        now = self.clock.now_ms()
        if now < self._next_rotate_at:
            return False

        missed = int((now - self._next_rotate_at) // self.auto_rotate_interval_ms) + 1
        self._next_rotate_at += missed * self.auto_rotate_interval_ms

        state = self.store.state
        if state.current_view != VIEW_CAROUSEL or state.modal_open:
            return False
        if self.phase is not CarouselPhase.IDLE:
            return False
        return self.next()

    def __repr__(self) -> str:
        return (
            f"<CarouselController phase={self.phase.value} "
            f"index={self.store.current_index} offset={self.track_offset}>"
        )
