# database.py
import logging

from sqlmodel import SQLModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from . import models  # noqa: F401  (registers the employee table on SQLModel.metadata)
from .config import Settings
from .errors import StartupError

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    url = settings.database_url()
    logger.info("Connecting to %s", url.render_as_string(hide_password=True))
    return create_async_engine(
        url,
        echo=settings.sql_echo,
        connect_args=settings.connect_args(),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_db_and_tables(engine: AsyncEngine) -> None:
    """Create the tables that do not exist yet. Any failure is fatal."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Failed to create database tables: %s", exc)
        raise StartupError(f"Failed to auto-migrate: {exc}") from exc
    logger.info("Database tables ready")
