"""SQLAlchemy database models for macro storage.

This module defines the persisted macro tables and their relationships using
SQLAlchemy 2.0 patterns with proper type annotations and relationship definitions.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    UniqueConstraint,
    inspect,
)
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from src.config import get_logger

logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


class MacroDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with timestamps."""

    metadata = metadata

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class DBMacro(MacroDBBase):
    """Stored macro definition."""

    __tablename__ = "macros"

    alias: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    macro_type: Mapped[str] = mapped_column(String(32), nullable=False)
    macro_source: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    use_in_editor: Mapped[bool] = mapped_column(Boolean, default=False)
    dont_render: Mapped[bool] = mapped_column(Boolean, default=False)
    cache_duration: Mapped[int] = mapped_column(Integer, default=0)
    cache_by_page: Mapped[bool] = mapped_column(Boolean, default=False)
    cache_by_member: Mapped[bool] = mapped_column(Boolean, default=False)

    properties: Mapped[list["DBMacroProperty"]] = relationship(
        back_populates="macro",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DBMacroProperty.sort_order",
    )

    __table_args__ = (UniqueConstraint("alias"),)


class DBMacroProperty(MacroDBBase):
    """Parameter definition belonging to a macro."""

    __tablename__ = "macro_properties"

    macro_id: Mapped[int] = mapped_column(ForeignKey("macros.id", ondelete="CASCADE"))
    alias: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    property_type_alias: Mapped[str] = mapped_column(String(64), nullable=False)

    macro: Mapped["DBMacro"] = relationship(
        back_populates="properties",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("macro_id", "alias"),
        Index(None, "macro_id", "sort_order"),
    )


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist.
    This is a safe operation that won't affect existing data.
    """
    from src.infrastructure.persistence.database.db_connection import get_engine

    engine = engine or get_engine()

    try:
        async with engine.connect() as conn:
            existing_tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
            if existing_tables:
                logger.info(f"Found existing tables: {existing_tables}")

        # Create tables - SQLAlchemy will skip tables that already exist
        async with engine.begin() as conn:
            await conn.run_sync(MacroDBBase.metadata.create_all)

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    else:
        logger.info("Database schema initialization complete")
