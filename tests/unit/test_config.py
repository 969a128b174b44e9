"""
Unit tests for ServerConfig.
"""

import pytest

from userserver.config import (
    DEFAULT_DATABASE_URL,
    ServerConfig,
    normalize_database_url,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No DATABASE_URL/LOG_LEVEL in the environment and no .env in cwd."""
    # setenv first so monkeypatch restores the original state, even if
    # load_dotenv() sets the variables during the test
    for name in ("DATABASE_URL", "LOG_LEVEL"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestDefaults:

    def test_fixed_listening_address(self):
        config = ServerConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.buffer_size == 1024

    def test_default_database_url(self):
        assert ServerConfig().database_url == DEFAULT_DATABASE_URL


class TestFromEnv:

    def test_without_database_url(self, clean_env):
        config = ServerConfig.from_env()

        assert config.database_url == DEFAULT_DATABASE_URL
        assert config.log_level == "INFO"

    def test_database_url_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///users.db")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = ServerConfig.from_env()

        assert config.database_url == "sqlite:///users.db"
        assert config.log_level == "DEBUG"

    def test_database_url_from_dotenv(self, clean_env):
        (clean_env / ".env").write_text("DATABASE_URL=sqlite:///from-dotenv.db\n")

        assert ServerConfig.from_env().database_url == "sqlite:///from-dotenv.db"

    def test_environment_wins_over_dotenv(self, clean_env, monkeypatch):
        (clean_env / ".env").write_text("DATABASE_URL=sqlite:///from-dotenv.db\n")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///from-env.db")

        assert ServerConfig.from_env().database_url == "sqlite:///from-env.db"

    def test_listening_address_not_configurable_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("HTTP_PORT", "9999")

        assert ServerConfig.from_env().port == 8080


class TestDatabaseUrl:

    def test_postgres_scheme_normalized(self):
        assert normalize_database_url("postgres://u:p@db:5432/x") == "postgresql://u:p@db:5432/x"

    def test_other_schemes_untouched(self):
        assert normalize_database_url("sqlite:///x.db") == "sqlite:///x.db"
        assert normalize_database_url("postgresql+psycopg2://h/x") == "postgresql+psycopg2://h/x"

    def test_normalized_on_construction(self):
        config = ServerConfig(database_url="postgres://postgres:postgres@db:5432/postgres")

        assert config.database_url == DEFAULT_DATABASE_URL


class TestValidate:

    def test_defaults_are_valid(self):
        ServerConfig().validate()

    def test_port_zero_allowed(self):
        ServerConfig(port=0).validate()

    @pytest.mark.parametrize("kwargs", [
        {"port": -1},
        {"port": 65536},
        {"buffer_size": 0},
        {"timeout": 0},
        {"database_url": ""},
        {"log_level": "LOUD"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ServerConfig(**kwargs).validate()
