"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and configuration
- Connection pooling
- Session management
"""

from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.config import get_logger, settings

logger = get_logger(__name__)


def _is_memory_database(db_url: str) -> bool:
    database = make_url(db_url).database
    return not database or database == ":memory:"


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create async SQLAlchemy engine with connection pooling tuned for SQLite."""
    db_url = connection_string or settings.database.url
    is_sqlite = db_url.startswith("sqlite")

    engine_kwargs: dict = {
        "echo": settings.database.echo,
        "pool_pre_ping": True,
    }

    if is_sqlite and _is_memory_database(db_url):
        # One shared connection, otherwise every connection sees its own empty database
        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
            pool_timeout=settings.database.pool_timeout,
            pool_recycle=settings.database.pool_recycle,
        )
        if is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30.0}
            Path(make_url(db_url).database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(db_url, **engine_kwargs)

    if is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _):  # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA busy_timeout = 30000")
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    logger.info(f"Created database engine for {make_url(db_url).render_as_string()}")
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def create_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=True,
    )


# Global session factory singleton
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the global session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


async def dispose_engine() -> None:
    """Dispose the global engine and forget the cached session factory."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
