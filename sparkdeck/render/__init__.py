"""
Render module.

Projects the Data Store into HTML fragments with Jinja2 templates.
"""

from sparkdeck.render.renderer import (
    Renderer,
    RenderedView,
    create_environment,
    format_date,
    format_rating,
    rating_class,
)

__all__ = [
    "Renderer",
    "RenderedView",
    "create_environment",
    "format_date",
    "format_rating",
    "rating_class",
]
