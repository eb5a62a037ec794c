"""Unit tests for server configuration settings model.

Tests verify that the Settings model correctly binds environment variables
from the .env.example file and that the grouped configuration models work.
"""

from pathlib import Path

import pytest

from verifydesk.server.core.config import CORSConfig, PostgreSQLConfig, Settings


@pytest.fixture
def env_example_path() -> Path:
    """Get path to the repository's .env.example file."""
    return Path(__file__).resolve().parents[4] / ".env.example"


@pytest.fixture
def env_example_vars(env_example_path: Path) -> dict[str, str]:
    """Parse .env.example file and return environment variables."""
    env_vars = {}
    with open(env_example_path) as f:
        for line in f:
            line = line.strip()
            # Skip comments and empty lines
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                env_vars[key.strip()] = value.strip()
    return env_vars


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_env_example_values_bind(self, env_example_vars: dict[str, str], monkeypatch):
        for key, value in env_example_vars.items():
            monkeypatch.setenv(key, value)

        settings = Settings()

        assert settings.server_host == env_example_vars["VERIFYDESK_SERVER_HOST"]
        assert settings.server_port == int(env_example_vars["VERIFYDESK_SERVER_PORT"])
        assert settings.log_level == env_example_vars["VERIFYDESK_LOG_LEVEL"]
        assert settings.database_url == env_example_vars["DATABASE_URL"]
        assert settings.default_page_size == int(env_example_vars["VERIFYDESK_DEFAULT_PAGE_SIZE"])
        assert settings.max_page_size == int(env_example_vars["VERIFYDESK_MAX_PAGE_SIZE"])

    def test_page_size_defaults(self, monkeypatch):
        monkeypatch.delenv("VERIFYDESK_DEFAULT_PAGE_SIZE", raising=False)
        monkeypatch.delenv("VERIFYDESK_MAX_PAGE_SIZE", raising=False)

        settings = Settings()

        assert settings.default_page_size == 25
        assert settings.max_page_size == 200

    def test_invalid_page_size_rejected(self, monkeypatch):
        monkeypatch.setenv("VERIFYDESK_MAX_PAGE_SIZE", "0")

        with pytest.raises(ValueError):
            Settings()


class TestAutoCreateTables:
    def test_defaults_on_for_sqlite(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./dev.db")
        monkeypatch.delenv("VERIFYDESK_AUTO_CREATE_TABLES", raising=False)

        assert Settings().auto_create_tables is True

    def test_defaults_off_for_postgres(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/verifydesk")
        monkeypatch.delenv("VERIFYDESK_AUTO_CREATE_TABLES", raising=False)

        assert Settings().auto_create_tables is False

    def test_explicit_value_wins(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/verifydesk")
        monkeypatch.setenv("VERIFYDESK_AUTO_CREATE_TABLES", "true")

        assert Settings().auto_create_tables is True


class TestGroupedConfigs:
    def test_postgres_url(self, monkeypatch):
        monkeypatch.setenv("POSTGRES_USER", "svc")
        monkeypatch.setenv("POSTGRES_PASSWORD", "pw")
        monkeypatch.setenv("POSTGRES_HOST", "db.internal")
        monkeypatch.setenv("POSTGRES_PORT", "6543")
        monkeypatch.setenv("POSTGRES_DB", "checks")

        config = Settings().postgres

        assert isinstance(config, PostgreSQLConfig)
        assert config.url == "postgresql+asyncpg://svc:pw@db.internal:6543/checks"

    def test_cors_lists_from_json(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["https://hr.example.com"]')
        monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "false")

        config = Settings().cors

        assert isinstance(config, CORSConfig)
        assert config.origins == ["https://hr.example.com"]
        assert config.allow_credentials is False
