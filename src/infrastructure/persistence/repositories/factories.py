"""Repository factory functions for Clean Architecture compliance.

These factory functions handle session-aware repository creation while keeping
session management concerns in the infrastructure layer. Application layer
services depend only on domain protocols, not these factory functions.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.interfaces import (
    MacroRepositoryProtocol,
    UnitOfWorkProtocol,
)
from src.infrastructure.persistence.repositories.macro.core import MacroRepository


def get_macro_repository(session: AsyncSession) -> MacroRepositoryProtocol:
    """Get macro repository with session management."""
    return MacroRepository(session)


def get_unit_of_work(session: AsyncSession) -> UnitOfWorkProtocol:
    """Get unit of work for transaction boundary management."""
    from src.infrastructure.persistence.unit_of_work import DatabaseUnitOfWork

    return DatabaseUnitOfWork(session)
