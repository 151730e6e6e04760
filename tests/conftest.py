"""Shared fixtures: domain objects and an in-memory macro database."""

import pytest

from src.domain.entities import (
    Macro,
    MacroProperty,
    MacroPropertyBaseType,
    MacroPropertyType,
    MacroType,
)
from src.infrastructure.macro_property_types import MacroPropertyTypeResolver
from src.infrastructure.persistence.database.db_connection import (
    create_db_engine,
    create_session_factory,
)
from src.infrastructure.persistence.database.db_models import init_db
from src.infrastructure.persistence.unit_of_work import DatabaseUnitOfWorkProvider

IN_MEMORY_DB_URL = "sqlite+aiosqlite://"


# -----------------------------------------------------------------------------
# Domain fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def macro():
    """A macro without properties."""
    return Macro(
        alias="footer",
        name="Footer",
        macro_type=MacroType.PARTIAL_VIEW,
        macro_source="~/Views/MacroPartials/Footer.cshtml",
    )


@pytest.fixture
def macro_with_properties():
    """A macro with two parameters."""
    return Macro(
        alias="newsList",
        name="News list",
        macro_type=MacroType.PARTIAL_VIEW,
        macro_source="~/Views/MacroPartials/NewsList.cshtml",
        use_in_editor=True,
        cache_duration=300,
        properties=[
            MacroProperty("startNode", "Start node", "contentPicker", 0),
            MacroProperty("count", "Number of items", "number", 1),
        ],
    )


@pytest.fixture
def property_types():
    """A small property type catalogue with a duplicated alias."""
    return [
        MacroPropertyType("text", "Textbox", MacroPropertyBaseType.STRING),
        MacroPropertyType("number", "Numeric", MacroPropertyBaseType.INT32),
        MacroPropertyType("text", "Textbox override", MacroPropertyBaseType.STRING),
    ]


@pytest.fixture(autouse=True)
def reset_property_type_resolver():
    """Keep the process-wide resolver from leaking between tests."""
    MacroPropertyTypeResolver.reset()
    yield
    MacroPropertyTypeResolver.reset()


# -----------------------------------------------------------------------------
# Database fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
async def db_engine():
    """In-memory database engine with the macro schema."""
    engine = create_db_engine(IN_MEMORY_DB_URL)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory):
    """Provide database session with automatic rollback."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def uow_provider(session_factory):
    """Unit of work provider opening a new session per unit of work."""
    return DatabaseUnitOfWorkProvider(session_factory)
