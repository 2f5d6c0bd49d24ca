"""
Tests for the Showcase application.

Exercises the full pipeline: raw event -> command -> Data Store or
Carousel Controller -> rendered view, plus loading, forms, toasts and
analytics events.
"""

import pytest
from unittest.mock import Mock

from sparkdeck.carousel import VirtualClock
from sparkdeck.carousel.commands import Advance, Filter, Sort, SwitchView
from sparkdeck.models import Idea
from sparkdeck.services.api_client import ApiClient, ApiError
from sparkdeck.showcase import MAX_EVENTS, MAX_TOASTS, Showcase
from tests.test_config import CONFIG, MESSAGES, TEST_DATA, TRACK

EVENTS = TEST_DATA["events"]
TOASTS = MESSAGES["toasts"]


@pytest.fixture
def api_client(sample_ideas):
    client = Mock(spec=ApiClient)
    client.get_ideas.return_value = sample_ideas
    client.submit_idea.return_value = {"id": 6, "status": "pending"}
    client.subscribe_newsletter.return_value = {"success": True}
    return client


@pytest.fixture
def showcase(api_client, clock):
    app = Showcase(
        api_client=api_client,
        clock=clock,
        enable_analytics=True,
        animation_duration_ms=CONFIG["animation_duration_ms"],
        drag_threshold_px=CONFIG["drag_threshold_px"],
        auto_rotate_interval_ms=CONFIG["auto_rotate_interval_ms"],
    )
    app.load_ideas()
    return app


# =============================================================================
# Test Loading
# =============================================================================

class TestLoading:
    def test_load_from_api(self, showcase, api_client):
        assert len(showcase.store) == 5
        api_client.get_ideas.assert_called_once_with(None)

    def test_load_passes_params(self, showcase, api_client):
        showcase.load_ideas({"category": "ai"})

        api_client.get_ideas.assert_called_with({"category": "ai"})

    def test_load_from_bundled_catalog_without_client(self, clock):
        app = Showcase(clock=clock)

        assert app.load_ideas() == 5
        assert app.store.categories() == ["saas", "tech", "ai"]

    def test_load_failure_shows_toast(self, clock, api_client):
        api_client.get_ideas.side_effect = ValueError("bad payload")
        app = Showcase(api_client=api_client, clock=clock)

        assert app.load_ideas() == 0
        assert app.toasts[-1].message == TOASTS["load_failed"]
        assert app.toasts[-1].level == "error"


# =============================================================================
# Test Event Pipeline
# =============================================================================

class TestEventPipeline:
    def test_arrow_key_advances_and_renders(self, showcase):
        showcase.handle_event(EVENTS["arrow_right"])
        view = showcase.render()

        assert view.current_index == 1
        assert view.track_offset == -CONFIG["item_width"]

    def test_short_mouse_drag_snaps_back(self, showcase):
        showcase.handle_event(EVENTS["mouse_down"])
        showcase.handle_event({"type": "mousemove", "target": TRACK, "clientX": 370, "clientY": 100})
        assert showcase.render().track_offset == -30
        assert showcase.render().transition_enabled is False

        showcase.handle_event(EVENTS["mouse_up_short"])
        view = showcase.render()

        assert view.current_index == 0
        assert view.track_offset == 0

    def test_long_mouse_drag_advances(self, showcase):
        showcase.handle_event(EVENTS["mouse_down"])

        assert showcase.handle_event(EVENTS["mouse_up_long_left"]) is True
        assert showcase.store.current_index == 1

    def test_touch_swipe(self, showcase):
        showcase.handle_event(EVENTS["touch_start"])
        assert showcase.handle_event(EVENTS["touch_move_vertical"]) is False
        assert showcase.handle_event(EVENTS["touch_move_horizontal"]) is True
        showcase.handle_event(EVENTS["touch_end"])

        assert showcase.store.current_index == 1

    def test_button_press_then_click_advances(self, showcase):
        """
        GIVEN: A real click on the next button (mousedown, mouseup, click)
        WHEN: All three events are handled
        THEN: The press/release pair does not start a drag, so the click advances
        """
        assert showcase.handle_event(EVENTS["button_press"]) is None
        assert showcase.handle_event(EVENTS["button_release"]) is None
        assert showcase.handle_event(EVENTS["next_click"]) is True

        assert showcase.store.current_index == 1

    def test_drag_behind_open_modal_ignored(self, showcase):
        showcase.view_idea_details(1)

        showcase.handle_event(EVENTS["mouse_down"])
        showcase.handle_event(EVENTS["mouse_up_long_left"])

        assert showcase.store.current_index == 1

    def test_unmapped_event_ignored(self, showcase):
        assert showcase.handle_event({"type": "scroll"}) is None

    def test_filter_resets_index_and_track(self, showcase):
        showcase.handle_event(EVENTS["arrow_right"])
        showcase.dispatch(Filter("ai"))
        view = showcase.render()

        assert view.item_count == 2
        assert view.current_index == 0
        assert view.track_offset == 0

    def test_sort_command(self, showcase):
        assert showcase.dispatch(Sort("rating")) is True
        assert showcase.store.current_idea.id == 5

    def test_unknown_sort_rejected_quietly(self, showcase):
        assert showcase.dispatch(Sort("popularity")) is False
        assert showcase.store.state.current_sort == "newest"

    def test_switch_view(self, showcase):
        showcase.handle_event({"type": "click", "target": "gridViewBtn"})

        assert showcase.render().current_view == "grid"

    def test_unknown_view_rejected_quietly(self, showcase):
        assert showcase.dispatch(SwitchView("list")) is False

    def test_unsupported_command_raises(self, showcase):
        with pytest.raises(TypeError):
            showcase.dispatch(object())

    def test_tick_auto_rotates(self, showcase, clock):
        clock.advance(CONFIG["auto_rotate_interval_ms"])

        assert showcase.tick() is True
        assert showcase.store.current_index == 1


# =============================================================================
# Test Detail Modal
# =============================================================================

class TestDetailModal:
    def test_card_click_opens_detail(self, showcase):
        showcase.handle_event({"type": "click", "target": "idea-card", "index": 2})
        view = showcase.render()

        assert showcase.store.state.detail_open
        assert view.current_index == 2
        assert view.detail_html is not None

    def test_opening_detail_tracks_view(self, showcase):
        showcase.view_idea_details(1)

        assert showcase.events[-1].name == "idea_viewed"
        assert showcase.events[-1].properties["idea_id"] == showcase.store.current_idea.id

    def test_modal_next_steps_without_animation(self, showcase):
        showcase.view_idea_details(4)

        assert showcase.dispatch(Advance(1)) is True
        assert showcase.store.current_index == 0
        assert showcase.controller.phase.value == "idle"

    def test_escape_closes_detail(self, showcase):
        showcase.view_idea_details(0)
        showcase.handle_event(EVENTS["escape"])

        assert not showcase.store.state.detail_open

    def test_arrows_ignored_while_modal_open(self, showcase):
        showcase.view_idea_details(0)

        assert showcase.handle_event(EVENTS["arrow_right"]) is None
        assert showcase.store.current_index == 0

    def test_auto_rotate_paused_by_modal(self, showcase, clock):
        showcase.view_idea_details(0)
        clock.advance(CONFIG["auto_rotate_interval_ms"])

        assert showcase.tick() is False
        assert showcase.store.current_index == 0

    def test_visit_demo(self, showcase):
        idea = showcase.store.get_idea(1)

        assert showcase.visit_idea_demo(idea) == "/demo/waitlist-manager.html"
        assert showcase.events[-1].name == "idea_visit"


# =============================================================================
# Test Forms
# =============================================================================

class TestSubmitIdea:
    def test_successful_submission(self, showcase, api_client):
        showcase.handle_event({"type": "click", "target": "submitIdeaBtn"})
        idea = showcase.submit_idea(TEST_DATA["submission_form"])

        assert isinstance(idea, Idea)
        assert idea.id == 6
        assert idea.is_pending
        assert idea.rating == 0.0
        assert showcase.store.pending_ideas == [idea]
        assert not showcase.store.state.submit_open
        assert showcase.toasts[-1].message == TOASTS["submit_success"]
        assert showcase.events[-1].name == "idea_submitted"
        api_client.submit_idea.assert_called_once()

    def test_submission_not_added_to_catalog(self, showcase):
        showcase.submit_idea(TEST_DATA["submission_form"])

        assert len(showcase.store.ideas) == 5

    def test_invalid_form(self, showcase, api_client):
        form = {**TEST_DATA["submission_form"], "title": ""}

        assert showcase.submit_idea(form) is None
        assert showcase.toasts[-1].level == "error"
        api_client.submit_idea.assert_not_called()

    def test_api_failure(self, showcase, api_client):
        api_client.submit_idea.side_effect = ApiError("Submission failed: 500", 500)

        assert showcase.submit_idea(TEST_DATA["submission_form"]) is None
        assert showcase.toasts[-1].message == TOASTS["submit_failed"]
        assert showcase.store.pending_ideas == []


class TestNewsletter:
    def test_subscribe(self, showcase, api_client):
        assert showcase.subscribe_newsletter(" reader@example.com ") is True

        api_client.subscribe_newsletter.assert_called_once_with("reader@example.com")
        assert showcase.toasts[-1].message == TOASTS["subscribe_success"]
        assert showcase.events[-1].name == "newsletter_subscribed"

    @pytest.mark.parametrize("email", ["", "not-an-email", "a@b", "a b@c.de"])
    def test_invalid_email(self, showcase, api_client, email):
        assert showcase.subscribe_newsletter(email) is False
        assert showcase.toasts[-1].message == TOASTS["invalid_email"]
        api_client.subscribe_newsletter.assert_not_called()

    def test_api_failure(self, showcase, api_client):
        api_client.subscribe_newsletter.side_effect = ApiError("down")

        assert showcase.subscribe_newsletter("reader@example.com") is False
        assert showcase.toasts[-1].message == TOASTS["subscribe_failed"]


class TestAnalytics:
    def test_disabled_analytics_records_nothing(self, clock):
        app = Showcase(clock=clock, enable_analytics=False)
        app.load_ideas()
        app.view_idea_details(0)

        assert len(app.events) == 0

    def test_event_log_keeps_latest(self, clock):
        app = Showcase(clock=clock, enable_analytics=True)
        for n in range(MAX_EVENTS + 5):
            app.track_event("idea_viewed", {"n": n})

        assert len(app.events) == MAX_EVENTS
        assert app.events[0].properties["n"] == 5
        assert app.events[-1].properties["n"] == MAX_EVENTS + 4


class TestToasts:
    def test_toast_queue_keeps_latest(self, clock):
        """
        GIVEN: A long session that raises more toasts than the queue holds
        WHEN: Each toast is shown in turn
        THEN: The oldest toasts are dropped and the newest is last
        """
        app = Showcase(clock=clock)
        for n in range(MAX_TOASTS * 3):
            app.show_toast(f"message {n}")

        assert len(app.toasts) == MAX_TOASTS
        assert app.toasts[0].message == f"message {MAX_TOASTS * 2}"
        assert app.toasts[-1].message == f"message {MAX_TOASTS * 3 - 1}"
