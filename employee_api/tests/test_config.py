# tests/test_config.py
import ssl

import pytest

from employee_api.config import Settings

DB_VARS = (
    "DB_DRIVER", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME",
    "DB_TLS", "DATABASE_URL", "KEY_STRATEGY", "PORT", "LOG_LEVEL", "SQL_ECHO",
)


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Clean environment, run from a directory without a .env file."""
    monkeypatch.chdir(tmp_path)
    for name in DB_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DB_HOST", "db.example.com")
    monkeypatch.setenv("DB_USER", "app")
    monkeypatch.setenv("DB_PASSWORD", "s3cret")
    monkeypatch.setenv("DB_NAME", "hr")
    return monkeypatch


def test_mysql_is_the_default_driver(env):
    settings = Settings.from_env()
    url = settings.database_url()

    assert url.drivername == "mysql+aiomysql"
    assert url.host == "db.example.com"
    assert url.port == 4000
    assert url.username == "app"
    assert url.password == "s3cret"
    assert url.database == "hr"
    assert url.query["charset"] == "utf8mb4"
    assert settings.resolved_key_strategy == "generated"
    assert isinstance(settings.connect_args()["ssl"], ssl.SSLContext)
    assert settings.port == 8080


def test_postgres_driver(env):
    env.setenv("DB_DRIVER", "postgres")
    env.setenv("DB_PORT", "6543")
    settings = Settings.from_env()
    url = settings.database_url()

    assert url.drivername == "postgresql+asyncpg"
    assert url.port == 6543
    assert "charset" not in url.query
    assert settings.resolved_key_strategy == "database"
    assert settings.connect_args() == {}


def test_tls_can_be_switched(env):
    env.setenv("DB_TLS", "false")
    assert Settings.from_env().connect_args() == {}

    env.setenv("DB_DRIVER", "postgres")
    env.setenv("DB_TLS", "true")
    assert "ssl" in Settings.from_env().connect_args()


def test_database_url_override(env):
    env.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/employees")
    settings = Settings.from_env()

    assert settings.database_url().database == "employees"
    assert settings.resolved_key_strategy == "database"
    assert settings.connect_args() == {}


def test_key_strategy_override(env):
    env.setenv("KEY_STRATEGY", "database")
    assert Settings.from_env().resolved_key_strategy == "database"


def test_password_hidden_when_rendered(env):
    rendered = Settings.from_env().database_url().render_as_string(hide_password=True)
    assert "s3cret" not in rendered


def test_dotenv_file_is_loaded(env, tmp_path):
    env.delenv("DB_NAME")
    (tmp_path / ".env").write_text("DB_NAME=from_dotenv\n")
    assert Settings.from_env().database_url().database == "from_dotenv"


def test_unknown_driver_rejected(env):
    env.setenv("DB_DRIVER", "oracle")
    with pytest.raises(ValueError, match="Unsupported DB_DRIVER"):
        Settings.from_env()


def test_unknown_key_strategy_rejected():
    with pytest.raises(ValueError, match="Unsupported KEY_STRATEGY"):
        Settings(key_strategy="sequence")
