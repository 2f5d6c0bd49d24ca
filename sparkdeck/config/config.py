"""
Configuration module for SparkDeck.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of sparkdeck/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)

# Bundled catalog shipped with the package
_default_sample_path = Path(__file__).parent.parent / "data" / "sample_ideas.json"


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
# Default: "development" for safe local testing
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging (only in development)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Log level for structlog / stdlib logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


# =============================================================================
# Web Server Configuration
# =============================================================================

# Interface and port the Flask server binds to
HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = int(os.getenv("PORT", "8080"))

# Static JSON file backing the read-only ideas endpoint
SAMPLE_IDEAS_PATH: str = os.getenv("SAMPLE_IDEAS_PATH", str(_default_sample_path))


# =============================================================================
# API Client Configuration
# =============================================================================

# Base URL of the ideas API (the Flask server's /api prefix)
API_BASE_URL: str = os.getenv("API_BASE_URL", f"http://localhost:{PORT}/api")

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))

# How long a cached API response stays fresh
# Default: 300 seconds (5 minutes)
CACHE_DURATION_SECONDS: int = int(os.getenv("CACHE_DURATION_SECONDS", "300"))


# =============================================================================
# Carousel / UI Configuration
# =============================================================================

# Auto-rotate period for the carousel, in milliseconds
AUTO_ROTATE_INTERVAL_MS: int = int(os.getenv("AUTO_ROTATE_INTERVAL_MS", "8000"))

# Slide animation duration, in milliseconds
ANIMATION_DURATION_MS: int = int(os.getenv("ANIMATION_DURATION_MS", "500"))

# Minimum horizontal drag distance (px) that commits a slide change
DRAG_THRESHOLD_PX: int = int(os.getenv("DRAG_THRESHOLD_PX", "50"))

# Width of one idea card plus gap, in pixels
CARD_WIDTH_PX: int = int(os.getenv("CARD_WIDTH_PX", "350"))

# Ideas listed per CLI run (main.py --limit default); 0 lists all
ITEMS_PER_PAGE: int = int(os.getenv("ITEMS_PER_PAGE", "10"))

# Record analytics events (logged only, there is no analytics backend)
ENABLE_ANALYTICS: bool = os.getenv("ENABLE_ANALYTICS", "true").lower() == "true"


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate configuration values.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if APP_ENV not in ("development", "staging", "production"):
        errors.append(f"APP_ENV must be development, staging or production, got {APP_ENV}")

    if not (0 < PORT < 65536):
        errors.append("PORT must be between 1 and 65535")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if CACHE_DURATION_SECONDS < 0:
        errors.append("CACHE_DURATION_SECONDS cannot be negative")

    if AUTO_ROTATE_INTERVAL_MS < ANIMATION_DURATION_MS:
        errors.append("AUTO_ROTATE_INTERVAL_MS must not be shorter than ANIMATION_DURATION_MS")

    if ANIMATION_DURATION_MS < 0:
        errors.append("ANIMATION_DURATION_MS cannot be negative")

    if DRAG_THRESHOLD_PX < 1:
        errors.append("DRAG_THRESHOLD_PX must be at least 1")

    if CARD_WIDTH_PX < 1:
        errors.append("CARD_WIDTH_PX must be at least 1")

    if ITEMS_PER_PAGE < 0:
        errors.append("ITEMS_PER_PAGE cannot be negative")

    if not Path(SAMPLE_IDEAS_PATH).exists():
        errors.append(f"SAMPLE_IDEAS_PATH does not exist: {SAMPLE_IDEAS_PATH}")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  HOST: {HOST}")
    print(f"  PORT: {PORT}")
    print(f"  SAMPLE_IDEAS_PATH: {SAMPLE_IDEAS_PATH}")
    print(f"  API_BASE_URL: {API_BASE_URL}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  CACHE_DURATION_SECONDS: {CACHE_DURATION_SECONDS}s")
    print(f"  AUTO_ROTATE_INTERVAL_MS: {AUTO_ROTATE_INTERVAL_MS}ms")
    print(f"  ANIMATION_DURATION_MS: {ANIMATION_DURATION_MS}ms")
    print(f"  DRAG_THRESHOLD_PX: {DRAG_THRESHOLD_PX}px")
    print(f"  CARD_WIDTH_PX: {CARD_WIDTH_PX}px")
    print(f"  ENABLE_ANALYTICS: {ENABLE_ANALYTICS}")
