"""
Carousel module.

Gesture/animation state machine, clocks, commands and input adapters.
"""

from sparkdeck.carousel.clock import Clock, SystemClock, VirtualClock
from sparkdeck.carousel.controller import CarouselController, CarouselPhase
from sparkdeck.carousel.input_adapters import translate_event

__all__ = [
    "Clock",
    "SystemClock",
    "VirtualClock",
    "CarouselController",
    "CarouselPhase",
    "translate_event",
]
