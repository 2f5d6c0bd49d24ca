"""
SparkDeck showcase application.

Owns the three core components and runs the linear pipeline

    raw event / timer -> command -> Data Store or Carousel Controller -> Renderer

plus the side flows around it: loading the catalog, the submission form,
the newsletter form, toast messages and analytics events.

Usage:
    showcase = Showcase(api_client=ApiClient())
    showcase.load_ideas()
    showcase.handle_event({"type": "keydown", "key": "ArrowRight"})
    view = showcase.render()
"""

import re
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, Optional

from sparkdeck.carousel.clock import Clock, SystemClock
from sparkdeck.carousel.commands import (
    CAROUSEL_COMMANDS,
    Advance,
    CloseDetail,
    CloseSubmit,
    Command,
    Filter,
    OpenDetail,
    OpenSubmit,
    Sort,
    SwitchView,
)
from sparkdeck.carousel.controller import CarouselController
from sparkdeck.carousel.input_adapters import translate_event
from sparkdeck.config import ENABLE_ANALYTICS
from sparkdeck.logging import get_logger
from sparkdeck.models.idea import Idea, idea_from_submission
from sparkdeck.render.renderer import RenderedView, Renderer
from sparkdeck.services.api_client import ApiClient, ApiError
from sparkdeck.services.catalog import load_catalog
from sparkdeck.store.data_store import DataStore

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Oldest entries drop off once a queue is full
MAX_TOASTS = 20
MAX_EVENTS = 200


@dataclass
class Toast:
    """A transient user-facing message."""
    message: str
    level: str = "info"  # info, success, error
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class AnalyticsEvent:
    """A tracked UI event (logged; there is no analytics backend)."""
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)


class Showcase:
    """
    The showcase application: one Data Store, one Carousel Controller and
    one Renderer, driven by commands.

    Attributes:
        store: The Data Store (sole mutator of the view state).
        controller: The Carousel Interaction Controller.
        renderer: The View Renderer.
        toasts: The latest MAX_TOASTS user-facing messages, oldest first.
        events: The latest MAX_EVENTS tracked analytics events, oldest first.
    """

    def __init__(
        self,
        api_client: Optional[ApiClient] = None,
        clock: Optional[Clock] = None,
        renderer: Optional[Renderer] = None,
        enable_analytics: bool = ENABLE_ANALYTICS,
        **controller_options,
    ):
        self.api_client = api_client
        self.store = DataStore()
        self.renderer = renderer or Renderer()
        self.controller = CarouselController(
            self.store,
            clock=clock or SystemClock(),
            item_width=self.renderer.item_width,
            **controller_options,
        )
        self.enable_analytics = enable_analytics
        self.toasts: Deque[Toast] = deque(maxlen=MAX_TOASTS)
        self.events: Deque[AnalyticsEvent] = deque(maxlen=MAX_EVENTS)

    # =========================================================================
    # Loading
    # =========================================================================

    def load_ideas(self, params: Optional[dict] = None) -> int:
        """
        Load the catalog into the Data Store.

        Uses the API client when one is configured (which falls back to
        static data on failure), otherwise the bundled catalog file.

        Returns:
            Number of ideas loaded.
        """
        try:
            if self.api_client is not None:
                ideas = self.api_client.get_ideas(params)
            else:
                ideas = load_catalog()
        except (OSError, ValueError) as e:
            logger.error("load_ideas_failed", error=str(e))
            self.show_toast("Failed to load ideas. Please try again.", "error")
            ideas = []

        self.store.load(ideas)
        self.controller.reset()
        logger.info("ideas_loaded", count=len(ideas))
        return len(ideas)

    # =========================================================================
    # Command dispatch
    # =========================================================================

    def handle_event(self, event: dict) -> Any:
        """Translate a raw UI event and dispatch the resulting command."""
        command = translate_event(event, self.store.state)
        if command is None:
            return None
        return self.dispatch(command)

    def dispatch(self, command: Command) -> Any:
        """
        Route a command to the Data Store or the Carousel Controller.

        Returns:
            Whatever the handling operation returns (see CarouselController.dispatch).
        """
        state = self.store.state

        if isinstance(command, Filter):
            self.store.set_category(command.category)
            self.controller.reset()
            return True

        if isinstance(command, Sort):
            try:
                self.store.set_sort(command.key)
            except ValueError as e:
                logger.warning("sort_rejected", key=command.key, error=str(e))
                return False
            self.controller.reset()
            return True

        if isinstance(command, SwitchView):
            try:
                self.store.set_view(command.view)
            except ValueError as e:
                logger.warning("view_rejected", view=command.view, error=str(e))
                return False
            return True

        if isinstance(command, OpenDetail):
            return self.view_idea_details(command.index)

        if isinstance(command, CloseDetail):
            self.store.close_detail()
            return True

        if isinstance(command, OpenSubmit):
            self.store.open_submit()
            return True

        if isinstance(command, CloseSubmit):
            self.store.close_submit()
            return True

        # Inside the detail modal, prev/next step through ideas without sliding
        if isinstance(command, Advance) and state.detail_open:
            changed = self.store.advance(command.delta)
            self.controller.reset()
            return changed

        if isinstance(command, CAROUSEL_COMMANDS):
            return self.controller.dispatch(command)

        raise TypeError(f"Unsupported command: {command!r}")

    def tick(self) -> bool:
        """Advance timers (animation end, auto-rotate). Returns True if rotated."""
        return self.controller.tick()

    # =========================================================================
    # Detail view
    # =========================================================================

    def view_idea_details(self, index: int) -> bool:
        """Open the detail modal for the idea at index."""
        if not self.store.open_detail(index):
            return False
        self.controller.reset()
        idea = self.store.current_idea
        self.track_event("idea_viewed", {"idea_id": idea.id, "idea_title": idea.title})
        return True

    def visit_idea_demo(self, idea: Idea) -> str:
        """Record a demo visit and return the URL to open."""
        self.track_event("idea_visit", {"idea_id": idea.id, "idea_title": idea.title})
        return idea.demo_url

    # =========================================================================
    # Forms
    # =========================================================================

    def submit_idea(self, form: dict) -> Optional[Idea]:
        """
        Submit the idea form.

        Builds a pending candidate (rating 0), sends it through the API
        client when one is configured, and holds the result client-side.

        Returns:
            The pending Idea, or None if validation or submission failed.
        """
        try:
            idea = idea_from_submission(form)
        except ValueError as e:
            logger.info("submission_invalid", error=str(e))
            self.show_toast(f"Please check the form: {e}", "error")
            return None

        if self.api_client is not None:
            try:
                created = self.api_client.submit_idea(idea.to_dict())
                idea = Idea.from_dict({**idea.to_dict(), **created})
            except (ApiError, TypeError, ValueError) as e:
                logger.error("submission_failed", error=str(e))
                self.show_toast("Failed to submit idea. Please try again.", "error")
                return None

        self.store.add_pending(idea)
        self.store.close_submit()
        self.show_toast("Idea submitted successfully! It will be reviewed soon.", "success")
        self.track_event("idea_submitted", {"category": idea.category, "complexity": idea.complexity})
        return idea

    def subscribe_newsletter(self, email: str) -> bool:
        """Subscribe email to the newsletter. Returns True on success."""
        email = (email or "").strip()
        if not EMAIL_PATTERN.match(email):
            self.show_toast("Please enter a valid email address.", "error")
            return False

        if self.api_client is not None:
            try:
                self.api_client.subscribe_newsletter(email)
            except ApiError as e:
                logger.error("subscription_failed", error=str(e))
                self.show_toast("Subscription failed. Please try again.", "error")
                return False

        self.show_toast("Successfully subscribed to newsletter!", "success")
        self.track_event("newsletter_subscribed")
        return True

    # =========================================================================
    # Feedback
    # =========================================================================

    def show_toast(self, message: str, level: str = "info") -> Toast:
        toast = Toast(message=message, level=level)
        self.toasts.append(toast)
        logger.info("toast", level=level, message=message)
        return toast

    def track_event(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        if not self.enable_analytics:
            return
        event = AnalyticsEvent(name=name, properties=dict(properties or {}))
        self.events.append(event)
        logger.info("event_tracked", name=name, properties=event.properties)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self) -> RenderedView:
        """Render the current state, including any live drag offset."""
        return self.renderer.render(
            self.store,
            track_offset=self.controller.track_offset,
            transition_enabled=self.controller.transition_enabled,
        )
