"""Repository layer for database operations with SQLAlchemy 2.0."""

from src.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
    ModelMapper,
)
from src.infrastructure.persistence.repositories.macro import (
    MacroMapper,
    MacroRepository,
)
from src.infrastructure.persistence.repositories.repo_decorator import db_operation

__all__ = [
    "BaseModelMapper",
    "BaseRepository",
    "MacroMapper",
    "MacroRepository",
    "ModelMapper",
    "db_operation",
]
