"""
Data Store for SparkDeck.

Holds the full idea catalog and the derived filtered/sorted sequence, and
owns the ViewState. It is the only writer of current_index and of the
filtered sequence; the Renderer and the Carousel Controller read them.

Invariant: filtered_ideas always holds exactly the catalog ideas whose
category matches current_category (all of them for "all"), stably sorted
by current_sort. Changing category or sort resets current_index to 0.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sparkdeck.logging import get_logger
from sparkdeck.models.idea import Idea, IdeaStats, compute_stats
from sparkdeck.models.view_state import (
    CATEGORY_ALL,
    SORT_COMPLEXITY,
    SORT_KEYS,
    SORT_NEWEST,
    SORT_OLDEST,
    SORT_RATING,
    VIEWS,
    ViewState,
)

logger = get_logger(__name__)


def _created_key(idea: Idea) -> datetime:
    # Ideas without a creation date sort as the oldest
    return idea.created_at or datetime.min


def sort_ideas(ideas: Iterable[Idea], sort_key: str) -> List[Idea]:
    """
    Return ideas stably sorted by one of the sort keys.

    newest/oldest order by created_at, rating is highest first,
    complexity is lowest first. Ties keep their incoming order.

    Raises:
        ValueError: If sort_key is not a known sort key.
    """
    ideas = list(ideas)
    if sort_key == SORT_NEWEST:
        ideas.sort(key=_created_key, reverse=True)
    elif sort_key == SORT_OLDEST:
        ideas.sort(key=_created_key)
    elif sort_key == SORT_RATING:
        ideas.sort(key=lambda i: i.rating, reverse=True)
    elif sort_key == SORT_COMPLEXITY:
        ideas.sort(key=lambda i: i.complexity)
    else:
        raise ValueError(f"Unknown sort key: {sort_key!r} (expected one of {', '.join(SORT_KEYS)})")
    return ideas


def filter_ideas(ideas: Iterable[Idea], category: str) -> List[Idea]:
    """Return ideas whose category matches exactly (all of them for "all")."""
    if category == CATEGORY_ALL:
        return list(ideas)
    return [idea for idea in ideas if idea.category == category]


class DataStore:
    """
    Owns the catalog, the filtered/sorted view of it and the ViewState.

    Example:
        store = DataStore(ideas)
        store.set_category("ai")
        store.set_sort("rating")
        store.advance(1)
        stats = store.compute_stats()
    """

    def __init__(self, ideas: Optional[Iterable[Idea]] = None, state: Optional[ViewState] = None):
        self.state = state or ViewState()
        self._ideas: List[Idea] = list(ideas or [])
        self._filtered: List[Idea] = []
        self.pending_ideas: List[Idea] = []
        self._recompute()

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def ideas(self) -> tuple:
        """The full catalog in load order."""
        return tuple(self._ideas)

    @property
    def filtered_ideas(self) -> tuple:
        """The current filtered/sorted sequence."""
        return tuple(self._filtered)

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def current_idea(self) -> Optional[Idea]:
        """The idea at current_index, or None when the sequence is empty."""
        if 0 <= self.state.current_index < len(self._filtered):
            return self._filtered[self.state.current_index]
        return None

    def __len__(self) -> int:
        return len(self._filtered)

    def categories(self) -> List[str]:
        """Distinct categories of the full catalog, in first-seen order."""
        seen = []
        for idea in self._ideas:
            if idea.category not in seen:
                seen.append(idea.category)
        return seen

    def get_idea(self, idea_id: int) -> Optional[Idea]:
        """Find a catalog idea by id."""
        for idea in self._ideas:
            if idea.id == idea_id:
                return idea
        return None

    def index_of(self, idea_id: int) -> Optional[int]:
        """Position of an idea in the filtered sequence, or None if not shown."""
        for index, idea in enumerate(self._filtered):
            if idea.id == idea_id:
                return index
        return None

    # -------------------------------------------------------------------------
    # Catalog and filter/sort mutations
    # -------------------------------------------------------------------------

    def load(self, ideas: Iterable[Idea]) -> None:
        """Replace the catalog and rebuild the filtered sequence."""
        self._ideas = list(ideas)
        self._recompute()
        logger.debug("catalog_loaded", count=len(self._ideas), shown=len(self._filtered))

    def set_category(self, category: str) -> None:
        """
        Filter by exact category match ("all" shows everything).

        An unmatched category yields an empty sequence rather than an error.
        """
        self.state.current_category = category or CATEGORY_ALL
        self._recompute()

    def set_sort(self, sort_key: str) -> None:
        """
        Reorder the filtered sequence by sort_key (stable).

        Raises:
            ValueError: If sort_key is not newest, oldest, rating or complexity.
        """
        if sort_key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort_key!r} (expected one of {', '.join(SORT_KEYS)})")
        self.state.current_sort = sort_key
        self._recompute()

    def _recompute(self) -> None:
        # Filtering then stable-sorting equals stable-sorting then filtering,
        # so the sequence is always a subsequence of the sorted catalog.
        filtered = filter_ideas(self._ideas, self.state.current_category)
        self._filtered = sort_ideas(filtered, self.state.current_sort)
        self.state.current_index = 0

    # -------------------------------------------------------------------------
    # Index arithmetic
    # -------------------------------------------------------------------------

    def advance(self, delta: int) -> bool:
        """
        Move current_index by delta, wrapping in both directions.

        Returns:
            True if the index changed; False on an empty sequence or
            when the move wraps back to the same position.
        """
        length = len(self._filtered)
        if length == 0:
            return False
        new_index = (self.state.current_index + delta) % length
        changed = new_index != self.state.current_index
        self.state.current_index = new_index
        return changed

    def go_to(self, index: int) -> bool:
        """
        Set current_index directly.

        Out-of-range indexes are rejected: the call is a no-op and the
        index stays where it was.

        Returns:
            True if the index changed.
        """
        if not (0 <= index < len(self._filtered)):
            return False
        changed = index != self.state.current_index
        self.state.current_index = index
        return changed

    # -------------------------------------------------------------------------
    # View and modal state
    # -------------------------------------------------------------------------

    def set_view(self, view: str) -> None:
        """
        Switch between carousel and grid views.

        Raises:
            ValueError: If view is not "carousel" or "grid".
        """
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view!r} (expected one of {', '.join(VIEWS)})")
        self.state.current_view = view

    def open_detail(self, index: int) -> bool:
        """Open the detail modal for the idea at index (also moves current_index)."""
        if not (0 <= index < len(self._filtered)):
            return False
        self.state.current_index = index
        self.state.detail_open = True
        return True

    def close_detail(self) -> None:
        self.state.detail_open = False

    def open_submit(self) -> None:
        self.state.submit_open = True

    def close_submit(self) -> None:
        self.state.submit_open = False

    def add_pending(self, idea: Idea) -> None:
        """Hold a submitted idea client-side; it never joins the catalog."""
        self.pending_ideas.append(idea)

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    def compute_stats(self) -> IdeaStats:
        """Count, distinct categories and mean rating of the filtered sequence."""
        return compute_stats(self._filtered)
