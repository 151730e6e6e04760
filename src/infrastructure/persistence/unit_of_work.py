"""Database Unit of Work implementation for transaction boundary management.

This module provides the concrete implementation of the UnitOfWork pattern,
handling transaction management and repository creation using a shared database
session, plus a provider that hands out a fresh unit of work per operation.
"""

from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config import get_logger
from src.domain.repositories.interfaces import MacroRepositoryProtocol
from src.infrastructure.persistence.repositories.factories import get_macro_repository

logger = get_logger(__name__)


class DatabaseUnitOfWork:
    """Database implementation of the Unit of Work pattern.

    Manages one database transaction and provides access to the repositories
    that share it. Nothing is committed implicitly: callers commit explicitly,
    and leaving the context with an exception rolls the transaction back.
    """

    def __init__(self, session: AsyncSession, owns_session: bool = False) -> None:
        """Initialize with database session.

        Args:
            session: SQLAlchemy async session for database operations
            owns_session: Close the session when the context exits
        """
        self._session = session
        self._owns_session = owns_session
        self._committed = False

    @property
    def committed(self) -> bool:
        """Whether commit() has been called on this unit of work."""
        return self._committed

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager.

        Rolls back if an exception occurred or if work was left uncommitted,
        then closes the session when this unit of work owns it.
        """
        try:
            if exc_type is not None or not self._committed:
                await self.rollback()
        finally:
            if self._owns_session:
                await self._session.close()

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self._session.rollback()

    def get_macro_repository(self) -> MacroRepositoryProtocol:
        """Get macro repository using this unit of work's transaction."""
        return get_macro_repository(self._session)


class DatabaseUnitOfWorkProvider:
    """Creates a new unit of work, with its own session, for every call."""

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        """Initialize with a session factory (defaults to the global one)."""
        self._session_factory = session_factory

    def get_unit_of_work(self) -> DatabaseUnitOfWork:
        """Open a unit of work over a fresh session."""
        if self._session_factory is None:
            from src.infrastructure.persistence.database.db_connection import (
                get_session_factory,
            )

            self._session_factory = get_session_factory()

        return DatabaseUnitOfWork(self._session_factory(), owns_session=True)
