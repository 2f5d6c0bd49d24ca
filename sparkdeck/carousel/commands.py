"""
Commands consumed by the showcase.

Raw input events are translated into this small closed set of values by
sparkdeck.carousel.input_adapters; the Showcase routes each one either to
the Data Store (filter, sort, view and modal changes) or to the Carousel
Controller (navigation and drag gestures).
"""

from dataclasses import dataclass
from typing import Union


POINTER_MOUSE = "mouse"
POINTER_TOUCH = "touch"


# =============================================================================
# Data Store commands
# =============================================================================

@dataclass(frozen=True)
class Filter:
    category: str


@dataclass(frozen=True)
class Sort:
    key: str


@dataclass(frozen=True)
class SwitchView:
    view: str


@dataclass(frozen=True)
class OpenDetail:
    index: int


@dataclass(frozen=True)
class CloseDetail:
    pass


@dataclass(frozen=True)
class OpenSubmit:
    pass


@dataclass(frozen=True)
class CloseSubmit:
    pass


# =============================================================================
# Carousel Controller commands
# =============================================================================

@dataclass(frozen=True)
class Advance:
    delta: int


@dataclass(frozen=True)
class GoTo:
    index: int


@dataclass(frozen=True)
class DragStart:
    x: float
    y: float = 0.0
    pointer: str = POINTER_MOUSE


@dataclass(frozen=True)
class DragMove:
    x: float
    y: float = 0.0


@dataclass(frozen=True)
class DragEnd:
    x: float


CarouselCommand = Union[Advance, GoTo, DragStart, DragMove, DragEnd]
StoreCommand = Union[Filter, Sort, SwitchView, OpenDetail, CloseDetail, OpenSubmit, CloseSubmit]
Command = Union[CarouselCommand, StoreCommand]

CAROUSEL_COMMANDS = (Advance, GoTo, DragStart, DragMove, DragEnd)
