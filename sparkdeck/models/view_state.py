"""
View state for SparkDeck.

A single explicit application-state value replaces the ambient globals a
browser app would keep: the Data Store owns and mutates it, the Renderer
and the Carousel Controller only read it.
"""

from dataclasses import dataclass


CATEGORY_ALL = "all"

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_RATING = "rating"
SORT_COMPLEXITY = "complexity"
SORT_KEYS = (SORT_NEWEST, SORT_OLDEST, SORT_RATING, SORT_COMPLEXITY)

VIEW_CAROUSEL = "carousel"
VIEW_GRID = "grid"
VIEWS = (VIEW_CAROUSEL, VIEW_GRID)


@dataclass
class ViewState:
    """
    Current filter/sort/position/view of the showcase.

    Attributes:
        current_category: Category filter key ("all" shows everything).
        current_sort: One of newest, oldest, rating, complexity.
        current_index: Position in the filtered/sorted sequence.
        current_view: "carousel" or "grid".
        detail_open: Whether the idea detail modal is open.
        submit_open: Whether the submission modal is open.
    """
    current_category: str = CATEGORY_ALL
    current_sort: str = SORT_NEWEST
    current_index: int = 0
    current_view: str = VIEW_CAROUSEL
    detail_open: bool = False
    submit_open: bool = False

    @property
    def modal_open(self) -> bool:
        """True when either modal dialog is open."""
        return self.detail_open or self.submit_open
