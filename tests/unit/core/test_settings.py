"""
Tests for runtime settings.

Tests defaults, COUNTDOWN_* environment overrides and validation.
"""
from pathlib import Path

import pytest

from countdown.core.paths import DATA_DIR, LOG_DIR, STORE_PATH
from countdown.core.settings import DEFAULT_NAMESPACE, Settings, get_settings


class TestSettingsDefaults:
    """Tests for default values."""

    def test_defaults(self):
        settings = Settings()
        assert settings.api_url is None
        assert settings.api_token is None
        assert settings.namespace == DEFAULT_NAMESPACE
        assert settings.timeout == 10.0
        assert settings.timezone is None
        assert settings.data_dir == DATA_DIR
        assert settings.store_path == STORE_PATH
        assert settings.log_dir == LOG_DIR

    def test_configuration_paths(self, tmp_path):
        settings = Settings(data_dir=tmp_path)
        assert settings.conferences_path == tmp_path / "conferences.yml"
        assert settings.types_path == tmp_path / "types.yml"


class TestEnvironmentOverrides:
    """Tests for COUNTDOWN_* variables."""

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COUNTDOWN_API_URL", "https://ddl.example.org/")
        monkeypatch.setenv("COUNTDOWN_API_TOKEN", "s3cret")
        monkeypatch.setenv("COUNTDOWN_NAMESPACE", "ddl.example.org")
        monkeypatch.setenv("COUNTDOWN_TIMEOUT", "2.5")
        monkeypatch.setenv("COUNTDOWN_TIMEZONE", "Europe/Paris")
        monkeypatch.setenv("COUNTDOWN_DATA_DIR", str(tmp_path / "data"))
        monkeypatch.setenv("COUNTDOWN_STORE_PATH", str(tmp_path / "state.db"))
        monkeypatch.setenv("COUNTDOWN_LOG_DIR", str(tmp_path / "logs"))

        settings = Settings()

        assert settings.api_url == "https://ddl.example.org"
        assert settings.api_token == "s3cret"
        assert settings.namespace == "ddl.example.org"
        assert settings.timeout == 2.5
        assert settings.timezone == "Europe/Paris"
        assert settings.data_dir == Path(tmp_path / "data")
        assert settings.store_path == Path(tmp_path / "state.db")
        assert settings.log_dir == Path(tmp_path / "logs")

    def test_environment_wins_over_arguments(self, monkeypatch):
        monkeypatch.setenv("COUNTDOWN_NAMESPACE", "from.env")
        assert Settings(namespace="from.code").namespace == "from.env"

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("COUNTDOWN_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="COUNTDOWN_TIMEOUT"):
            Settings()

    def test_non_positive_timeout(self):
        with pytest.raises(ValueError, match="positive"):
            Settings(timeout=0)


class TestGetSettings:
    """Tests for the cached accessor."""

    def test_cached(self):
        assert get_settings() is get_settings()


class TestWithOverrides:
    """Tests for Settings.with_overrides."""

    def test_returns_copy(self):
        base = Settings()
        updated = base.with_overrides(namespace="cli.ns", timezone="UTC")
        assert updated is not base
        assert (updated.namespace, updated.timezone) == ("cli.ns", "UTC")
        assert (base.namespace, base.timezone) == (DEFAULT_NAMESPACE, None)

    def test_none_keeps_value(self, monkeypatch):
        monkeypatch.setenv("COUNTDOWN_NAMESPACE", "from.env")
        assert Settings().with_overrides(namespace=None).namespace == "from.env"

    def test_override_beats_environment(self, monkeypatch):
        monkeypatch.setenv("COUNTDOWN_NAMESPACE", "from.env")
        assert Settings().with_overrides(namespace="cli.ns").namespace == "cli.ns"

    def test_cached_instance_untouched(self):
        get_settings().with_overrides(api_url="https://ddl.example.org")
        assert get_settings().api_url is None

    def test_unknown_field(self):
        with pytest.raises(AttributeError, match="Unknown setting"):
            Settings().with_overrides(colour="blue")
