"""Tests for settings models and the settings loader."""

from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from pydantic import ValidationError

from streamflix.config import (
    CacheSettings,
    DisplaySettings,
    LoggingSettings,
    Settings,
    SettingsLoader,
    TMDBSettings,
    load_settings,
)
from streamflix.shared.errors import ApplicationError, ErrorCode


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test in an empty directory with no StreamFlix variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("TMDB_API_KEY", "STREAMFLIX_API__TMDB__API_KEY", "STREAMFLIX_CACHE__TTL"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def temp_config(tmp_path: Path) -> Path:
    config_file = tmp_path / "streamflix.toml"
    config_file.write_text(
        """
[api.tmdb]
api_key = "from-file"
language = "en-US"

[cache]
ttl = 60
max_entries = 100

[readiness]
timeout = 5.0

[display]
overview_max_length = 80
""",
        encoding="utf-8",
    )
    return config_file


class TestDefaults:
    def test_defaults(self):
        settings = Settings()

        assert settings.api.tmdb.api_key == ""
        assert settings.api.tmdb.language == "fr-FR"
        assert settings.cache.ttl == 300
        assert settings.cache.max_entries is None
        assert settings.cache.coalesce_requests is False
        assert settings.readiness.timeout is None
        assert settings.display.overview_max_length == 150
        assert settings.display.locale == "fr"

    def test_api_key_masked_in_repr(self):
        settings = TMDBSettings(api_key="super-secret")

        assert "super-secret" not in repr(settings)
        assert "****" in repr(settings)


class TestValidation:
    def test_log_level_normalized(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")

    def test_unsupported_locale(self):
        with pytest.raises(ValidationError):
            DisplaySettings(locale="xx")

    @pytest.mark.parametrize("kwargs", [{"ttl": 0}, {"max_entries": 0}])
    def test_cache_bounds(self, kwargs):
        with pytest.raises(ValidationError):
            CacheSettings(**kwargs)


class TestEnvironment:
    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("STREAMFLIX_CACHE__TTL", "42")

        assert Settings().cache.ttl == 42

    def test_plain_tmdb_api_key_fallback(self, monkeypatch):
        monkeypatch.setenv("TMDB_API_KEY", "plain-key")

        assert load_settings().api.tmdb.api_key == "plain-key"

    def test_dotenv_file_loaded(self, isolated_cwd):
        (isolated_cwd / ".env").write_text("TMDB_API_KEY=dotenv-key\n", encoding="utf-8")

        try:
            settings = load_settings()
        finally:
            os.environ.pop("TMDB_API_KEY", None)

        assert settings.api.tmdb.api_key == "dotenv-key"


class TestTomlFiles:
    def test_load_explicit_path(self, temp_config):
        settings = load_settings(temp_config)

        assert settings.api.tmdb.api_key == "from-file"
        assert settings.api.tmdb.language == "en-US"
        assert settings.cache.ttl == 60
        assert settings.cache.max_entries == 100
        assert settings.readiness.timeout == 5.0
        assert settings.display.overview_max_length == 80

    def test_default_location_discovered(self, isolated_cwd, temp_config):
        (isolated_cwd / "config").mkdir()
        temp_config.rename(isolated_cwd / "config" / "config.toml")

        assert load_settings().cache.ttl == 60

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(ApplicationError) as exc_info:
            load_settings(tmp_path / "absent.toml")

        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR

    def test_invalid_values_in_file(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("[cache]\nttl = -1\n", encoding="utf-8")

        with pytest.raises(ApplicationError):
            load_settings(bad)

    def test_round_trip(self, tmp_path):
        original = Settings(cache=CacheSettings(ttl=90))
        path = tmp_path / "out" / "config.toml"

        original.to_toml_file(path)

        assert Settings.from_toml_file(path).cache.ttl == 90


class TestSettingsLoader:
    def test_get_config_cached(self):
        loader = SettingsLoader()

        assert loader.get_config() is loader.get_config()

    def test_reload_creates_new_instance(self):
        loader = SettingsLoader()
        first = loader.get_config()

        assert loader.reload_config() is not first

    def test_concurrent_get_config_single_instance(self):
        loader = SettingsLoader()
        barrier = threading.Barrier(8)

        def fetch():
            barrier.wait()
            return loader.get_config()

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: fetch(), range(8)))

        assert all(result is results[0] for result in results)

    def test_reset(self):
        loader = SettingsLoader()
        first = loader.get_config()

        loader.reset()

        assert loader.get_config() is not first
