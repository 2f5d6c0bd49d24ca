"""
Data models module.

Defines data structures for ideas, stats and the view state.
"""

from sparkdeck.models.idea import (
    Idea,
    IdeaStats,
    COMPLEXITY_LABELS,
    STATUS_PENDING,
    STATUS_PUBLISHED,
    complexity_label,
    compute_stats,
    idea_from_submission,
    parse_datetime,
    parse_tags,
)
from sparkdeck.models.view_state import (
    ViewState,
    CATEGORY_ALL,
    SORT_KEYS,
    VIEWS,
    VIEW_CAROUSEL,
    VIEW_GRID,
)

__all__ = [
    "Idea",
    "IdeaStats",
    "COMPLEXITY_LABELS",
    "STATUS_PENDING",
    "STATUS_PUBLISHED",
    "complexity_label",
    "compute_stats",
    "idea_from_submission",
    "parse_datetime",
    "parse_tags",
    "ViewState",
    "CATEGORY_ALL",
    "SORT_KEYS",
    "VIEWS",
    "VIEW_CAROUSEL",
    "VIEW_GRID",
]
