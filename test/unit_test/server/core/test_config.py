"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables and that the
grouped configuration views are derived from it.
"""

import pytest

from legal_aid.server.core.config import AuthConfig, ChapaConfig, CORSConfig, Settings, StorageConfig


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "DATABASE_URL",
        "JWT_SECRET",
        "JWT_EXPIRE_HOURS",
        "UPLOAD_DIR",
        "MAX_UPLOAD_SIZE_MB",
        "CHAPA_API_URL",
        "CHAPA_SECRET_KEY",
        "CORS_ORIGINS",
        "AUTO_CREATE_TABLES",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.server_port == 8000
        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.auto_create_tables is False
        assert settings.jwt_expire_hours == 24
        assert settings.auth_cookie_name == "auth-token"
        assert settings.max_upload_size_mb == 10
        assert settings.chapa_api_url == "https://api.chapa.co/v1"

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./legal_aid.db")
        clean_env.setenv("JWT_EXPIRE_HOURS", "2")
        clean_env.setenv("AUTO_CREATE_TABLES", "true")
        clean_env.setenv("CORS_ORIGINS", '["http://localhost:3000"]')

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./legal_aid.db"
        assert settings.jwt_expire_hours == 2
        assert settings.auto_create_tables is True
        assert settings.cors_origins == ["http://localhost:3000"]


class TestGroupedConfig:
    """Test the grouped configuration properties."""

    def test_auth_config(self, clean_env):
        clean_env.setenv("JWT_SECRET", "s3cret")

        auth = Settings(_env_file=None).auth

        assert isinstance(auth, AuthConfig)
        assert auth.jwt_secret == "s3cret"
        assert auth.jwt_algorithm == "HS256"
        assert auth.cookie_name == "auth-token"

    def test_chapa_config(self, clean_env):
        clean_env.setenv("CHAPA_SECRET_KEY", "CHASECK_TEST")

        chapa = Settings(_env_file=None).chapa

        assert isinstance(chapa, ChapaConfig)
        assert chapa.secret_key == "CHASECK_TEST"
        assert chapa.callback_url is None

    def test_storage_config(self, clean_env):
        clean_env.setenv("UPLOAD_DIR", "/var/lib/legal-aid/uploads")
        clean_env.setenv("MAX_UPLOAD_SIZE_MB", "5")

        storage = Settings(_env_file=None).storage

        assert isinstance(storage, StorageConfig)
        assert storage.upload_dir == "/var/lib/legal-aid/uploads"
        assert storage.max_upload_size_mb == 5

    def test_cors_config(self, clean_env):
        cors = Settings(_env_file=None).cors

        assert isinstance(cors, CORSConfig)
        assert cors.origins == ["*"]
        assert cors.allow_credentials is True
