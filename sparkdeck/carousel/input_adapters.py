"""
Input adapters: raw UI events -> commands.

Events are plain dicts shaped like the DOM events a browser would deliver,
for example:

    {"type": "mousedown", "target": "carouselTrack", "clientX": 420, "clientY": 80}
    {"type": "touchmove", "target": "carouselTrack", "touches": [{"clientX": 300, "clientY": 95}]}
    {"type": "touchend", "target": "carouselTrack", "changedTouches": [{"clientX": 250, "clientY": 96}]}
    {"type": "keydown", "key": "ArrowRight"}
    {"type": "click", "target": "indicator", "index": 2}
    {"type": "change", "target": "sortSelect", "value": "rating"}

Anything that does not map to a command yields None.
"""

from typing import Optional

from sparkdeck.carousel.commands import (
    POINTER_MOUSE,
    POINTER_TOUCH,
    Advance,
    CloseDetail,
    CloseSubmit,
    Command,
    DragEnd,
    DragMove,
    DragStart,
    Filter,
    GoTo,
    OpenDetail,
    OpenSubmit,
    Sort,
    SwitchView,
)
from sparkdeck.models.view_state import VIEW_CAROUSEL, VIEW_GRID, ViewState


# Element that receives drag gestures
TRACK_TARGET = "carouselTrack"

# Button id -> command, for clicks that carry no payload
BUTTON_COMMANDS = {
    "prevBtn": Advance(-1),
    "nextBtn": Advance(1),
    "modalPrevBtn": Advance(-1),
    "modalNextBtn": Advance(1),
    "gridViewBtn": SwitchView(VIEW_GRID),
    "carouselViewBtn": SwitchView(VIEW_CAROUSEL),
    "modalCloseBtn": CloseDetail(),
    "submitIdeaBtn": OpenSubmit(),
    "submitModalCloseBtn": CloseSubmit(),
    "cancelSubmitBtn": CloseSubmit(),
}


def _first_touch(event: dict, key: str) -> Optional[dict]:
    touches = event.get(key) or []
    return touches[0] if touches else None


def translate_pointer(event: dict, state: ViewState) -> Optional[Command]:
    """
    Translate a mouse or touch event into a drag command.

    Only events on the carousel track drag it; presses on buttons and
    anything behind an open modal are ignored.
    """
    if event.get("target") != TRACK_TARGET or state.modal_open:
        return None

    event_type = event.get("type")

    if event_type == "mousedown":
        return DragStart(x=event["clientX"], y=event.get("clientY", 0.0), pointer=POINTER_MOUSE)
    if event_type == "mousemove":
        return DragMove(x=event["clientX"], y=event.get("clientY", 0.0))
    if event_type in ("mouseup", "mouseleave"):
        return DragEnd(x=event["clientX"])

    if event_type == "touchstart":
        touch = _first_touch(event, "touches")
        if touch is None:
            return None
        return DragStart(x=touch["clientX"], y=touch.get("clientY", 0.0), pointer=POINTER_TOUCH)
    if event_type == "touchmove":
        touch = _first_touch(event, "touches")
        if touch is None:
            return None
        return DragMove(x=touch["clientX"], y=touch.get("clientY", 0.0))
    if event_type == "touchend":
        touch = _first_touch(event, "changedTouches")
        if touch is None:
            return None
        return DragEnd(x=touch["clientX"])

    return None


def translate_key(event: dict, state: ViewState) -> Optional[Command]:
    """
    Translate a keydown event.

    ArrowLeft/ArrowRight move the carousel, Space opens the current idea
    and Escape closes whichever modal is open. While a modal is open only
    Escape is honoured.
    """
    key = event.get("key")

    if state.modal_open:
        if key == "Escape":
            return CloseDetail() if state.detail_open else CloseSubmit()
        return None

    if key == "ArrowLeft":
        return Advance(-1)
    if key == "ArrowRight":
        return Advance(1)
    if key == " ":
        return OpenDetail(state.current_index)
    if key == "Escape":
        return CloseDetail()
    return None


def translate_click(event: dict) -> Optional[Command]:
    """Translate a click on a button, nav link, indicator or card."""
    target = event.get("target")

    if target in BUTTON_COMMANDS:
        return BUTTON_COMMANDS[target]
    if target == "nav-link":
        return Filter(event.get("filter") or "all")
    if target == "indicator":
        return GoTo(int(event["index"]))
    if target == "idea-card":
        return OpenDetail(int(event["index"]))
    return None


def translate_event(event: dict, state: ViewState) -> Optional[Command]:
    """Translate any supported raw event into a command (or None)."""
    event_type = event.get("type", "")

    if event_type.startswith("mouse") or event_type.startswith("touch"):
        return translate_pointer(event, state)
    if event_type == "keydown":
        return translate_key(event, state)
    if event_type == "click":
        return translate_click(event)
    if event_type == "change" and event.get("target") == "sortSelect":
        return Sort(event.get("value", ""))
    return None
