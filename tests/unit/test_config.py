"""Configuration tests."""

import pytest

from pagebuilder.core import Settings, get_settings


def test_settings_defaults():
    """Test default settings load correctly."""
    settings = Settings(_env_file=None)

    assert settings.persistence_backend == "memory"
    assert settings.backend_url == "http://localhost:3001"
    assert settings.breaker_fail_max == 5
    assert settings.max_forest_size == 2 * 1024 * 1024
    assert settings.image_assets_only is True
    assert settings.max_tree_depth == 32
    assert settings.max_prop_depth == 16


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PAGEBUILDER_PERSISTENCE_BACKEND", "http")
    monkeypatch.setenv("PAGEBUILDER_MAX_TREE_DEPTH", "12")

    settings = Settings(_env_file=None)

    assert settings.persistence_backend == "http"
    assert settings.max_tree_depth == 12


def test_settings_validation():
    """Test settings validation."""
    with pytest.raises(Exception):
        Settings(_env_file=None, persistence_backend="sqlite")

    with pytest.raises(Exception):
        Settings(_env_file=None, backend_timeout=0)

    with pytest.raises(Exception):
        Settings(_env_file=None, max_asset_bytes=-1)


def test_log_level_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    with pytest.raises(Exception):
        Settings(_env_file=None, log_level="chatty")


def test_backend_url_trailing_slash():
    assert Settings(_env_file=None, backend_url="http://pages.test/").backend_url == "http://pages.test"
