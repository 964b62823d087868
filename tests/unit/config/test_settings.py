"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest

from booktrail.config import get_settings, reload_settings
from booktrail.config.settings import Settings, set_toml_config


@pytest.fixture
def no_toml():
    """Settings built from code defaults only."""
    set_toml_config({})
    yield
    set_toml_config({})


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self, no_toml) -> None:
        """Settings has sensible defaults."""
        settings = Settings()
        assert settings.app_name == "booktrail"
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_storage_defaults(self, no_toml) -> None:
        """Storage configuration has defaults."""
        settings = Settings()
        assert settings.storage.backend == "inmemory"
        assert settings.storage.postgres.connection_url is None
        assert settings.storage.postgres.max_pool_size == 20

    def test_audit_defaults(self, no_toml) -> None:
        """Audit emission is on, but no organization is enabled."""
        settings = Settings()
        assert settings.audit.enabled is True
        assert settings.audit.enabled_for_all_organizations is False
        assert settings.audit.enabled_organization_ids == []
        assert settings.audit.unknown_entity_name == "Unknown"

    def test_observability_defaults(self, no_toml) -> None:
        """Observability configuration has defaults."""
        settings = Settings()
        assert settings.observability.logging.level == "INFO"
        assert settings.observability.logging.redact_pii is True
        assert settings.observability.metrics.port == 9090

    def test_toml_values_applied(self) -> None:
        """Values from the loaded TOML override code defaults."""
        set_toml_config({"audit": {"enabled_organization_ids": [3, 4]}})
        try:
            settings = Settings()
        finally:
            set_toml_config({})
        assert settings.audit.enabled_organization_ids == [3, 4]


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_settings returns a Settings instance."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("app_name = 'test'")

        monkeypatch.setenv("BOOKTRAIL_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BOOKTRAIL_ENV", "nonexistent")

        get_settings.cache_clear()

        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.app_name == "test"

    def test_settings_cached(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_settings returns cached instance."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("app_name = 'cached'")

        monkeypatch.setenv("BOOKTRAIL_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BOOKTRAIL_ENV", "nonexistent")

        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_reload_settings_clears_cache(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """reload_settings returns fresh instance."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("app_name = 'original'")

        monkeypatch.setenv("BOOKTRAIL_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BOOKTRAIL_ENV", "nonexistent")

        get_settings.cache_clear()
        settings1 = get_settings()
        assert settings1.app_name == "original"

        default_toml.write_text("app_name = 'updated'")

        settings2 = reload_settings()
        assert settings2.app_name == "updated"

    def test_environment_file_merged(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """{BOOKTRAIL_ENV}.toml overrides default.toml."""
        mock_toml_files(
            {
                "default.toml": "[storage]\nbackend = 'inmemory'",
                "production.toml": "[storage]\nbackend = 'postgres'",
            }
        )
        monkeypatch.setenv("BOOKTRAIL_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("BOOKTRAIL_ENV", "production")

        assert get_settings().storage.backend == "postgres"


class TestEnvironmentVariableOverrides:
    """Tests for environment variable configuration overrides."""

    def test_top_level_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Top-level values can be overridden with env vars."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("debug = false")

        monkeypatch.setenv("BOOKTRAIL_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BOOKTRAIL_ENV", "nonexistent")
        monkeypatch.setenv("BOOKTRAIL_DEBUG", "true")

        get_settings.cache_clear()
        settings = get_settings()
        assert settings.debug is True

    def test_nested_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Nested values can be overridden with double underscore."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("[storage]\nbackend = 'inmemory'")

        monkeypatch.setenv("BOOKTRAIL_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BOOKTRAIL_ENV", "nonexistent")
        monkeypatch.setenv("BOOKTRAIL_STORAGE__BACKEND", "postgres")

        get_settings.cache_clear()
        settings = get_settings()
        assert settings.storage.backend == "postgres"

    def test_deeply_nested_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, env_override
    ) -> None:
        """Deeply nested values can be overridden."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("[observability.metrics]\nenabled = true")

        monkeypatch.setenv("BOOKTRAIL_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BOOKTRAIL_ENV", "nonexistent")

        with env_override({"BOOKTRAIL_OBSERVABILITY__METRICS__ENABLED": "false"}):
            get_settings.cache_clear()
            settings = get_settings()
        assert settings.observability.metrics.enabled is False
