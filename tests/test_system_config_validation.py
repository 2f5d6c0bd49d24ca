"""
Configuration Validation Tests

Verifies that configuration defaults are applied correctly, that
environment overrides are honored, and that validate_config() reports
invalid values clearly.

Test data and expected values are defined in tests/test_config.py.
Update that file to change test parameters without modifying this script.
"""

import importlib
import os

import pytest
from unittest.mock import patch

from tests.test_config import CONFIG, EXPECTED

CONFIG_VARS = [
    "APP_ENV", "DEBUG", "LOG_LEVEL", "HOST", "PORT", "SAMPLE_IDEAS_PATH",
    "API_BASE_URL", "REQUEST_TIMEOUT", "CACHE_DURATION_SECONDS",
    "AUTO_ROTATE_INTERVAL_MS", "ANIMATION_DURATION_MS", "DRAG_THRESHOLD_PX",
    "CARD_WIDTH_PX", "ITEMS_PER_PAGE", "ENABLE_ANALYTICS",
]


@pytest.fixture
def load_config():
    """
    Reload the config module under a patched environment.

    Every SparkDeck variable is unset first, then the given overrides are
    applied. The module is reloaded once more afterwards so later tests
    see the real environment again.
    """
    import sparkdeck.config.config as config_module

    def _load(**overrides):
        with patch.dict(os.environ, {}, clear=False):
            for name in CONFIG_VARS:
                os.environ.pop(name, None)
            os.environ.update(overrides)
            return importlib.reload(config_module)

    yield _load
    importlib.reload(config_module)


@pytest.mark.config_validation
class TestDefaults:
    """Tests that safe defaults apply when nothing is configured."""

    def test_default_values(self, load_config):
        config = load_config()

        assert config.APP_ENV == CONFIG["environments"]["development"]
        assert config.PORT == EXPECTED["config"]["default_port"]
        assert config.CACHE_DURATION_SECONDS == EXPECTED["config"]["default_cache_duration"]
        assert config.AUTO_ROTATE_INTERVAL_MS == EXPECTED["config"]["default_auto_rotate_ms"]
        assert config.DRAG_THRESHOLD_PX == EXPECTED["config"]["default_drag_threshold"]
        assert config.DEBUG is False
        assert config.ENABLE_ANALYTICS is True

    def test_default_timeout_is_reasonable(self, load_config):
        config = load_config()
        low, high = EXPECTED["config"]["default_timeout_range"]

        assert low <= config.REQUEST_TIMEOUT <= high

    def test_default_catalog_is_bundled(self, load_config):
        config = load_config()

        assert config.SAMPLE_IDEAS_PATH.endswith("sample_ideas.json")
        assert os.path.exists(config.SAMPLE_IDEAS_PATH)

    def test_defaults_validate_cleanly(self, load_config):
        config = load_config()

        assert config.validate_config() == []

    def test_development_helpers(self, load_config):
        config = load_config()

        assert config.is_development()
        assert not config.is_production()


@pytest.mark.config_validation
class TestOverrides:
    """Tests that environment variables override defaults."""

    def test_port_override_feeds_api_base_url(self, load_config):
        config = load_config(PORT="9090")

        assert config.PORT == 9090
        assert config.API_BASE_URL == "http://localhost:9090/api"

    def test_explicit_api_base_url(self, load_config):
        config = load_config(API_BASE_URL="https://ideas.example.com/api")

        assert config.API_BASE_URL == "https://ideas.example.com/api"

    def test_boolean_flags(self, load_config):
        config = load_config(DEBUG="TRUE", ENABLE_ANALYTICS="false")

        assert config.DEBUG is True
        assert config.ENABLE_ANALYTICS is False

    def test_log_level_uppercased(self, load_config):
        assert load_config(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_production_environment(self, load_config):
        config = load_config(APP_ENV=CONFIG["environments"]["production"])

        assert config.is_production()
        assert not config.is_development()


@pytest.mark.config_validation
class TestValidation:
    """Tests that invalid values produce clear errors."""

    def test_unknown_environment_reported(self, load_config):
        errors = load_config(APP_ENV="moon").validate_config()

        assert any("APP_ENV" in error for error in errors)

    def test_out_of_range_port_reported(self, load_config):
        errors = load_config(PORT="70000").validate_config()

        assert any("PORT" in error for error in errors)

    def test_rotation_shorter_than_animation_reported(self, load_config):
        errors = load_config(AUTO_ROTATE_INTERVAL_MS="100", ANIMATION_DURATION_MS="500").validate_config()

        assert any("AUTO_ROTATE_INTERVAL_MS" in error for error in errors)

    def test_negative_page_size_reported(self, load_config):
        errors = load_config(ITEMS_PER_PAGE="-1").validate_config()

        assert any("ITEMS_PER_PAGE" in error for error in errors)

    def test_missing_catalog_reported(self, load_config, tmp_path):
        missing = tmp_path / "nope.json"
        errors = load_config(SAMPLE_IDEAS_PATH=str(missing)).validate_config()

        assert any("SAMPLE_IDEAS_PATH" in error for error in errors)

    def test_multiple_errors_reported_together(self, load_config):
        errors = load_config(APP_ENV="moon", DRAG_THRESHOLD_PX="0", CARD_WIDTH_PX="0").validate_config()

        assert len(errors) >= 3

    def test_non_integer_value_fails_at_import(self, load_config):
        with pytest.raises(ValueError):
            load_config(PORT="eighty")

    def test_print_summary_lists_settings(self, load_config, capsys):
        load_config().print_config_summary()
        out = capsys.readouterr().out

        for name in ("APP_ENV", "PORT", "CACHE_DURATION_SECONDS", "AUTO_ROTATE_INTERVAL_MS"):
            assert name in out
