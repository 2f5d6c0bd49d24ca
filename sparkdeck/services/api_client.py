"""
API client for the SparkDeck server.

Wraps the JSON endpoints served by web/app.py:

    GET  /api/ideas                 -> catalog (optionally filtered)
    GET  /api/stats                 -> platform statistics
    POST /api/ideas/submit          -> submit a new idea (not persisted)
    POST /api/newsletter/subscribe  -> newsletter sign-up

Reads are cached in memory for CACHE_DURATION_SECONDS, keyed by request
parameters, and never raise: on any failure they log and return static
fallback data. Writes raise ApiError so the caller can tell the user.
"""

import json
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import requests

from sparkdeck.config import API_BASE_URL, CACHE_DURATION_SECONDS, REQUEST_TIMEOUT
from sparkdeck.logging import get_logger
from sparkdeck.models.idea import Idea
from sparkdeck.services.catalog import parse_ideas

logger = get_logger(__name__)


# Minimal catalog used when the ideas endpoint is unreachable
FALLBACK_IDEA_RECORDS = [
    {
        "id": 1,
        "title": "Sample Startup Idea",
        "category": "tech",
        "description": "This is a sample idea loaded from fallback data.",
        "rating": 4.0,
        "complexity": 2,
    }
]

FALLBACK_STATS = {
    "totalIdeas": 25,
    "totalCategories": 8,
    "avgRating": 4.3,
}


class ApiError(Exception):
    """A write request to the API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class PlatformStats:
    """Platform-wide statistics reported by /api/stats."""
    total_ideas: int
    total_categories: int
    avg_rating: float
    last_updated: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PlatformStats":
        return cls(
            total_ideas=int(data.get("totalIdeas", 0)),
            total_categories=int(data.get("totalCategories", 0)),
            avg_rating=float(data.get("avgRating", 0.0)),
            last_updated=data.get("lastUpdated"),
        )

    def to_dict(self) -> dict:
        return {
            "totalIdeas": self.total_ideas,
            "totalCategories": self.total_categories,
            "avgRating": self.avg_rating,
            "lastUpdated": self.last_updated,
        }


@dataclass
class _CacheEntry:
    data: Any
    timestamp: float


class ApiClient:
    """
    HTTP client for the ideas API with a time-based response cache.

    Example:
        client = ApiClient("http://localhost:8080/api")
        ideas = client.get_ideas({"category": "ai"})
        stats = client.get_stats()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        cache_duration: float = CACHE_DURATION_SECONDS,
        timeout: int = REQUEST_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.cache_duration = cache_duration
        self.timeout = timeout
        self._clock = clock
        self._cache: Dict[str, _CacheEntry] = {}

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    @staticmethod
    def cache_key(prefix: str, params: Optional[dict] = None) -> str:
        """Cache key for a request: prefix plus canonical JSON of the params."""
        if params is None:
            return prefix
        return f"{prefix}_{json.dumps(params, sort_keys=True)}"

    def is_cache_valid(self, key: str) -> bool:
        """True if key is cached and younger than cache_duration."""
        entry = self._cache.get(key)
        if entry is None:
            return False
        return (self._clock() - entry.timestamp) < self.cache_duration

    def _cache_get(self, key: str) -> Any:
        return self._cache[key].data

    def _cache_set(self, key: str, data: Any) -> None:
        self._cache[key] = _CacheEntry(data=data, timestamp=self._clock())

    def clear_cache(self) -> None:
        self._cache.clear()

    # -------------------------------------------------------------------------
    # Reads (never raise)
    # -------------------------------------------------------------------------

    def get_ideas(self, params: Optional[dict] = None) -> List[Idea]:
        """
        Fetch ideas, optionally filtered (e.g. {"category": "ai", "sort": "rating"}).

        Args:
            params: Query parameters passed through to /api/ideas.

        Returns:
            List of Idea instances; the fallback list if the request fails.
        """
        params = params or {}
        key = self.cache_key("ideas", params)

        if self.is_cache_valid(key):
            return self._cache_get(key)

        try:
            response = requests.get(
                f"{self.base_url}/ideas",
                params=params,
                headers={"Accept": "application/json", "Cache-Control": "max-age=300"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            records = response.json()
            if not isinstance(records, list):
                raise ValueError("expected a JSON array of ideas")

            ideas = parse_ideas(records)
            self._cache_set(key, ideas)
            return ideas

        except (requests.RequestException, ValueError) as e:
            logger.error("fetch_ideas_failed", url=f"{self.base_url}/ideas", params=params, error=str(e))
            return self.get_fallback_ideas()

    def get_stats(self) -> PlatformStats:
        """
        Fetch platform statistics.

        Returns:
            PlatformStats; static fallback numbers if the request fails.
        """
        key = self.cache_key("stats")

        if self.is_cache_valid(key):
            return self._cache_get(key)

        try:
            response = requests.get(
                f"{self.base_url}/stats",
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            stats = PlatformStats.from_dict(response.json())
            self._cache_set(key, stats)
            return stats

        except (requests.RequestException, ValueError, TypeError) as e:
            logger.error("fetch_stats_failed", url=f"{self.base_url}/stats", error=str(e))
            return self.get_fallback_stats()

    @staticmethod
    def get_fallback_ideas() -> List[Idea]:
        return parse_ideas(FALLBACK_IDEA_RECORDS)

    @staticmethod
    def get_fallback_stats() -> PlatformStats:
        return PlatformStats.from_dict(
            {**FALLBACK_STATS, "lastUpdated": datetime.now().isoformat()}
        )

    # -------------------------------------------------------------------------
    # Writes (raise ApiError)
    # -------------------------------------------------------------------------

    def _post(self, path: str, payload: dict, action: str) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = requests.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{action}_failed", url=url, error=str(e))
            raise ApiError(f"{action.capitalize()} failed: {e}") from e

        if not response.ok:
            logger.error(f"{action}_failed", url=url, status=response.status_code)
            raise ApiError(f"{action.capitalize()} failed: {response.status_code}", response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"{action.capitalize()} failed: invalid JSON response", response.status_code) from e

    def submit_idea(self, idea_data: dict) -> dict:
        """
        Submit a new idea.

        Args:
            idea_data: Wire-format idea record.

        Returns:
            The created (pending) record as returned by the server.

        Raises:
            ApiError: If the request fails or the server rejects it.
        """
        return self._post("/ideas/submit", idea_data, "submission")

    def subscribe_newsletter(self, email: str) -> dict:
        """
        Subscribe an email address to the newsletter.

        Raises:
            ApiError: If the request fails or the server rejects it.
        """
        return self._post("/newsletter/subscribe", {"email": email}, "subscription")
