"""Tests for schema creation and engine management."""

from sqlalchemy import inspect, text

from src.config import settings
from src.infrastructure.persistence.database import db_connection
from src.infrastructure.persistence.database.db_connection import (
    create_db_engine,
    dispose_engine,
    get_engine,
    get_session_factory,
)
from src.infrastructure.persistence.database.db_models import init_db


async def _table_names(engine) -> set[str]:
    async with engine.connect() as conn:
        return set(
            await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        )


async def test_init_db_creates_macro_tables(db_engine):
    assert {"macros", "macro_properties"} <= await _table_names(db_engine)


async def test_init_db_is_idempotent(db_engine):
    await init_db(db_engine)
    assert {"macros", "macro_properties"} <= await _table_names(db_engine)


async def test_sqlite_foreign_keys_enabled(db_engine):
    async with db_engine.connect() as conn:
        result = await conn.execute(text("PRAGMA foreign_keys"))
        assert result.scalar() == 1


async def test_file_database_directory_is_created(tmp_path):
    db_path = tmp_path / "nested" / "macros.db"
    engine = create_db_engine(f"sqlite+aiosqlite:///{db_path}")
    try:
        assert db_path.parent.is_dir()
        await init_db(engine)
        assert db_path.exists()
    finally:
        await engine.dispose()


async def test_global_engine_is_cached_until_disposed(monkeypatch):
    monkeypatch.setattr(settings.database, "url", "sqlite+aiosqlite://")
    await dispose_engine()

    engine = get_engine()
    factory = get_session_factory()
    assert get_engine() is engine
    assert get_session_factory() is factory

    await dispose_engine()
    assert db_connection._engine is None
    assert db_connection._session_factory is None

    assert get_engine() is not engine
    await dispose_engine()
