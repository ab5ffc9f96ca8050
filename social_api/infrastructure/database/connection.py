"""
PostgreSQL access through async SQLAlchemy.

One engine per process, created lazily from the settings handed to
``DatabaseManager.configure``. Request handlers get a session per request
through ``get_db``; the session commits when the handler returns and rolls
back if it raises.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ...config import DatabaseSettings, get_settings
from .models import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Process-wide holder of the engine and session factory."""

    _engine: Optional[AsyncEngine] = None
    _session_factory: Optional[async_sessionmaker[AsyncSession]] = None
    _settings: Optional[DatabaseSettings] = None

    @classmethod
    def configure(cls, settings: DatabaseSettings) -> None:
        """Remember the settings used when the engine is first needed."""
        cls._settings = settings

    @classmethod
    def get_engine(cls) -> AsyncEngine:
        if cls._engine is None:
            settings = cls._settings or get_settings().database
            cls._engine = create_async_engine(
                settings.url,
                echo=settings.echo_sql,
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
            logger.info(f"Created database engine for {settings.host}:{settings.port}/{settings.name}")
        return cls._engine

    @classmethod
    def get_session_factory(cls) -> async_sessionmaker[AsyncSession]:
        if cls._session_factory is None:
            cls._session_factory = async_sessionmaker(
                bind=cls.get_engine(),
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return cls._session_factory

    @classmethod
    async def close(cls) -> None:
        """Dispose of the pool. The next call to ``get_engine`` starts over."""
        if cls._engine is not None:
            await cls._engine.dispose()
            cls._engine = None
            cls._session_factory = None


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session scoped to one unit of work.

    Commits on normal exit, rolls back and re-raises on error.
    """
    session = DatabaseManager.get_session_factory()()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding the request's session."""
    async with get_db_session() as session:
        yield session


async def init_db() -> None:
    """Create missing tables. Existing tables are left untouched."""
    async with DatabaseManager.get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Ensured tables: {', '.join(sorted(Base.metadata.tables))}")


async def health_check() -> bool:
    """Return True if a trivial query succeeds."""
    try:
        async with DatabaseManager.get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {e}")
        return False
