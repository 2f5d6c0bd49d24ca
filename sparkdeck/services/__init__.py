"""
Services module.

Static catalog loading and the HTTP client for the SparkDeck API.
"""

from sparkdeck.services.api_client import ApiClient, ApiError, PlatformStats
from sparkdeck.services.catalog import load_catalog, load_catalog_records, parse_ideas

__all__ = [
    "ApiClient",
    "ApiError",
    "PlatformStats",
    "load_catalog",
    "load_catalog_records",
    "parse_ideas",
]
