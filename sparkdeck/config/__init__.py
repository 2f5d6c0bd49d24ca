"""
Configuration module.

Handles environment variables and application settings.
"""

from sparkdeck.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    HOST,
    PORT,
    SAMPLE_IDEAS_PATH,
    API_BASE_URL,
    REQUEST_TIMEOUT,
    CACHE_DURATION_SECONDS,
    AUTO_ROTATE_INTERVAL_MS,
    ANIMATION_DURATION_MS,
    DRAG_THRESHOLD_PX,
    CARD_WIDTH_PX,
    ITEMS_PER_PAGE,
    ENABLE_ANALYTICS,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "HOST",
    "PORT",
    "SAMPLE_IDEAS_PATH",
    "API_BASE_URL",
    "REQUEST_TIMEOUT",
    "CACHE_DURATION_SECONDS",
    "AUTO_ROTATE_INTERVAL_MS",
    "ANIMATION_DURATION_MS",
    "DRAG_THRESHOLD_PX",
    "CARD_WIDTH_PX",
    "ITEMS_PER_PAGE",
    "ENABLE_ANALYTICS",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
]
