"""
Store module.

Holds the idea catalog, the filtered/sorted view and the view state.
"""

from sparkdeck.store.data_store import DataStore, filter_ideas, sort_ideas

__all__ = [
    "DataStore",
    "filter_ideas",
    "sort_ideas",
]
