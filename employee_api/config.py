# config.py
import os
import ssl
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from sqlalchemy.engine import URL, make_url

DRIVERS = {
    # DB_DRIVER -> (async dialect, default port, key strategy)
    "mysql": ("mysql+aiomysql", 4000, "generated"),
    "postgres": ("postgresql+asyncpg", 5432, "database"),
}

KEY_STRATEGIES = ("generated", "database")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Runtime settings, read from the environment (and a local .env file)."""

    db_driver: str = "mysql"
    db_host: str = "127.0.0.1"
    db_port: Optional[int] = None
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "test"
    db_tls: Optional[bool] = None
    database_url_override: Optional[str] = None
    key_strategy: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    sql_echo: bool = False

    def __post_init__(self):
        if self.db_driver not in DRIVERS:
            raise ValueError(
                f"Unsupported DB_DRIVER '{self.db_driver}', expected one of: {', '.join(DRIVERS)}"
            )
        if self.key_strategy is not None and self.key_strategy not in KEY_STRATEGIES:
            raise ValueError(
                f"Unsupported KEY_STRATEGY '{self.key_strategy}', expected one of: {', '.join(KEY_STRATEGIES)}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))

        driver = os.getenv("DB_DRIVER", "mysql").strip().lower()
        port = os.getenv("DB_PORT")
        tls = os.getenv("DB_TLS")
        return cls(
            db_driver=driver,
            db_host=os.getenv("DB_HOST", "127.0.0.1"),
            db_port=int(port) if port else None,
            db_user=os.getenv("DB_USER", "root"),
            db_password=os.getenv("DB_PASSWORD", ""),
            db_name=os.getenv("DB_NAME", "test"),
            db_tls=_env_bool("DB_TLS", False) if tls else None,
            database_url_override=os.getenv("DATABASE_URL") or None,
            key_strategy=(os.getenv("KEY_STRATEGY") or "").strip().lower() or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            sql_echo=_env_bool("SQL_ECHO", False),
        )

    @property
    def tls_enabled(self) -> bool:
        if self.db_tls is not None:
            return self.db_tls
        # TiDB Cloud only accepts TLS connections
        return self.database_url_override is None and self.db_driver == "mysql"

    @property
    def resolved_key_strategy(self) -> str:
        if self.key_strategy:
            return self.key_strategy
        if self.database_url_override:
            backend = make_url(self.database_url_override).get_backend_name()
            return "database" if backend == "postgresql" else "generated"
        return DRIVERS[self.db_driver][2]

    def database_url(self) -> URL:
        if self.database_url_override:
            return make_url(self.database_url_override)

        dialect, default_port, _ = DRIVERS[self.db_driver]
        query = {"charset": "utf8mb4"} if self.db_driver == "mysql" else {}
        return URL.create(
            dialect,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port or default_port,
            database=self.db_name,
            query=query,
        )

    def connect_args(self) -> Dict[str, Any]:
        """Driver keyword arguments; both aiomysql and asyncpg take an ``ssl`` context."""
        if self.tls_enabled:
            return {"ssl": ssl.create_default_context()}
        return {}
