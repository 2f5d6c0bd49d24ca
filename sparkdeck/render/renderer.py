"""
View Renderer for SparkDeck.

Pure projection of the Data Store into HTML fragments: carousel track,
grid, position indicators, progress bar, stats block and the detail view.
Fragments are rendered with Jinja2 templates (autoescaped) and the whole
view is re-rendered on every change; catalogs are tens of items, so there
is no incremental diffing.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from sparkdeck.config import CARD_WIDTH_PX
from sparkdeck.models.idea import Idea, IdeaStats, complexity_label
from sparkdeck.store.data_store import DataStore


TEMPLATES_DIR = Path(__file__).parent / "templates"

PLACEHOLDER_TEXT = "Not specified"


# =============================================================================
# Template Filters
# =============================================================================

def format_date(dt) -> str:
    """Format datetime for display."""
    if not dt:
        return "Unknown"
    if isinstance(dt, str):
        return dt
    return dt.strftime("%b %d, %Y")


def format_rating(rating) -> str:
    """Ratings show one decimal place."""
    try:
        return f"{float(rating):.1f}"
    except (TypeError, ValueError):
        return "0.0"


def rating_class(rating) -> str:
    """Return a color class based on rating."""
    try:
        rating = float(rating)
    except (TypeError, ValueError):
        return "low"
    if rating >= 4.5:
        return "high"
    elif rating >= 3.5:
        return "medium"
    else:
        return "low"


def create_environment() -> Environment:
    """Jinja2 environment for the fragment templates."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_date"] = format_date
    env.filters["format_rating"] = format_rating
    env.filters["rating_class"] = rating_class
    env.filters["complexity_label"] = complexity_label
    return env


# =============================================================================
# Rendered Output
# =============================================================================

@dataclass
class RenderedView:
    """
    Everything the page needs for one frame.

    Attributes:
        carousel_html: Carousel track contents (one card per idea).
        grid_html: Grid contents (every idea).
        indicators_html: Position indicators.
        stats_html: Stats block.
        detail_html: Detail view of the current idea, or None if the
            detail modal is closed.
        track_offset: Horizontal carousel track offset in pixels.
        transition_enabled: Whether the track animates to track_offset.
        progress_percent: Progress bar width in percent.
        item_count: Number of ideas shown.
        current_index: Index of the active idea.
        current_view: "carousel" or "grid".
    """
    carousel_html: Markup
    grid_html: Markup
    indicators_html: Markup
    stats_html: Markup
    detail_html: Optional[Markup]
    track_offset: float
    transition_enabled: bool
    progress_percent: float
    item_count: int
    current_index: int
    current_view: str


# =============================================================================
# Renderer
# =============================================================================

class Renderer:
    """
    Renders Data Store state to HTML fragments.

    The renderer keeps no data of its own; every method is a function of
    its arguments.
    """

    def __init__(self, item_width: int = CARD_WIDTH_PX, env: Optional[Environment] = None):
        self.item_width = item_width
        self.env = env or create_environment()

    def _render(self, template_name: str, **context) -> Markup:
        return Markup(self.env.get_template(template_name).render(**context))

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def track_offset(self, index: int) -> float:
        """Resting carousel offset for index."""
        return -index * self.item_width

    @staticmethod
    def progress_percent(index: int, length: int) -> float:
        """(index + 1) / length * 100, or 0 for an empty sequence."""
        if length <= 0:
            return 0.0
        return (index + 1) / length * 100

    # -------------------------------------------------------------------------
    # Fragments
    # -------------------------------------------------------------------------

    def render_card(self, idea: Idea, index: int, active: bool = False, grid: bool = False) -> Markup:
        return self._render("card.html", idea=idea, index=index, active=active, grid=grid)

    def render_carousel(self, ideas: Sequence[Idea], current_index: int) -> Markup:
        return self._render("carousel.html", ideas=ideas, current_index=current_index)

    def render_grid(self, ideas: Sequence[Idea]) -> Markup:
        return self._render("grid.html", ideas=ideas)

    def render_indicators(self, count: int, current_index: int) -> Markup:
        return self._render("indicators.html", count=count, current_index=current_index)

    def render_stats(self, stats: IdeaStats) -> Markup:
        return self._render("stats.html", stats=stats)

    def render_detail(self, idea: Idea) -> Markup:
        """
        Render one idea's full fields.

        Missing problem/solution render a placeholder; missing features
        or tags render as empty lists.
        """
        return self._render(
            "detail.html",
            idea=idea,
            problem=idea.problem or PLACEHOLDER_TEXT,
            solution=idea.solution or PLACEHOLDER_TEXT,
            features=idea.features or (),
            tags=idea.tags or (),
        )

    # -------------------------------------------------------------------------
    # Full view
    # -------------------------------------------------------------------------

    def render(
        self,
        store: DataStore,
        track_offset: Optional[float] = None,
        transition_enabled: bool = True,
    ) -> RenderedView:
        """
        Re-render every fragment from the store.

        Args:
            store: Data Store to project (read only).
            track_offset: Live track offset (e.g. mid-drag); defaults to the
                resting offset of current_index.
            transition_enabled: Whether the track should animate.

        Returns:
            RenderedView for the current state.
        """
        ideas = store.filtered_ideas
        state = store.state
        index = state.current_index

        detail_html = None
        if state.detail_open and store.current_idea is not None:
            detail_html = self.render_detail(store.current_idea)

        return RenderedView(
            carousel_html=self.render_carousel(ideas, index),
            grid_html=self.render_grid(ideas),
            indicators_html=self.render_indicators(len(ideas), index),
            stats_html=self.render_stats(store.compute_stats()),
            detail_html=detail_html,
            track_offset=self.track_offset(index) if track_offset is None else track_offset,
            transition_enabled=transition_enabled,
            progress_percent=self.progress_percent(index, len(ideas)),
            item_count=len(ideas),
            current_index=index,
            current_view=state.current_view,
        )
