"""Tests for application configuration."""
import logging

import pytest

from core.config import Settings
from core.logging import configure_logging


class TestSettingsDefaults:
    """Tests for default values."""

    def test_defaults(self) -> None:
        """Port, CORS and log level have sensible defaults."""
        settings = Settings(_env_file=None, DATABASE_URL="postgresql+asyncpg://test")
        assert settings.port == 5000
        assert settings.host == "0.0.0.0"
        assert settings.cors_origins == ["*"]
        assert settings.log_level == "INFO"

    def test_database_url_is_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings cannot be built without a database URL."""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(ValueError):  # noqa: PT011
            Settings(_env_file=None)

    def test_port_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """PORT is read from the environment."""
        monkeypatch.setenv("PORT", "8080")
        settings = Settings(_env_file=None, DATABASE_URL="postgresql+asyncpg://test")
        assert settings.port == 8080

    def test_is_sqlite(self) -> None:
        """SQLite URLs are detected so pool sizing is skipped."""
        assert Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///:memory:").is_sqlite
        assert not Settings(_env_file=None, DATABASE_URL="postgresql+asyncpg://db").is_sqlite


class TestCorsOriginsParsing:
    """Tests for CORS origins parsing from environment variables."""

    def test_parse_multiple_origins_comma_separated(self) -> None:
        """Multiple comma-separated origins are parsed correctly."""
        settings = Settings(
            _env_file=None,
            DATABASE_URL="postgresql+asyncpg://test",
            CORS_ORIGINS="http://localhost:5173, https://example.com ",
        )
        assert settings.cors_origins == [
            "http://localhost:5173",
            "https://example.com",
        ]

    def test_parse_empty_string(self) -> None:
        """Empty string results in empty list."""
        settings = Settings(
            _env_file=None,
            DATABASE_URL="postgresql+asyncpg://test",
            CORS_ORIGINS="",
        )
        assert settings.cors_origins == []


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_sets_root_level(self) -> None:
        """The configured level is applied to the root logger."""
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Unknown level names don't break startup."""
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO
