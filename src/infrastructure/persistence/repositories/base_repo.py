"""Repository layer for database operations with SQLAlchemy 2.0 best practices."""

from typing import Any, Generic, Protocol, TypeVar

from attrs import define
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import ColumnElement

from src.config import get_logger
from src.infrastructure.persistence.database.db_models import MacroDBBase
from src.infrastructure.persistence.repositories.repo_decorator import db_operation

TDBModel = TypeVar("TDBModel", bound=MacroDBBase)
TDomainModel = TypeVar("TDomainModel")

logger = get_logger(__name__)


class ModelMapper(Protocol[TDBModel, TDomainModel]):
    """Protocol for bidirectional mapping between models."""

    @staticmethod
    async def to_domain(db_model: TDBModel) -> TDomainModel:
        """Convert database model to domain model."""
        ...

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        """Convert domain model to database model."""
        ...

    @staticmethod
    def get_default_relationships() -> list[str]:
        """Get default relationships to load for this model."""
        return []

    @staticmethod
    async def map_collection(
        db_models: list[TDBModel],
    ) -> list[TDomainModel]:
        """Map a collection of DB models to domain models."""
        ...


@define(frozen=True, slots=True)
class BaseModelMapper(Generic[TDBModel, TDomainModel]):
    """Base implementation of ModelMapper with common functionality.

    Usage:
        @define(frozen=True, slots=True)
        class MacroMapper(BaseModelMapper[DBMacro, Macro]):
            @staticmethod
            async def to_domain(db_model: DBMacro) -> Macro:
                ...

            @staticmethod
            def to_db(domain_model: Macro) -> DBMacro:
                ...

            @staticmethod
            def get_default_relationships() -> list[str]:
                return ["properties"]
    """

    @staticmethod
    async def to_domain(db_model: TDBModel) -> TDomainModel:
        """Default implementation returns None for None input."""
        if not db_model:
            return None
        raise NotImplementedError("Subclasses must implement to_domain")

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        """Default implementation raises NotImplementedError."""
        raise NotImplementedError("Subclasses must implement to_db")

    @staticmethod
    def get_default_relationships() -> list[str]:
        """Define relationships to load for this model."""
        return []

    @classmethod
    async def map_collection(
        cls,
        db_models: list[TDBModel],
    ) -> list[TDomainModel]:
        """Map a collection of DB models to domain models.

        Uses cls.to_domain so the subclass implementation is called.
        """
        if not db_models:
            return []

        domain_models = []
        for db_model in db_models:
            domain_model = await cls.to_domain(db_model)
            if domain_model:
                domain_models.append(domain_model)

        return domain_models


class BaseRepository(Generic[TDBModel, TDomainModel]):
    """Base repository for database operations with SQLAlchemy 2.0 best practices."""

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[TDBModel],
        mapper: ModelMapper[TDBModel, TDomainModel],
    ) -> None:
        """Initialize repository with session and model mappings."""
        self.session = session
        self.model_class = model_class
        self.mapper = mapper
        logger.debug(
            f"Initialized {self.__class__.__name__} for {model_class.__name__}",
        )

    # -------------------------------------------------------------------------
    # SELECT STATEMENT BUILDERS
    # -------------------------------------------------------------------------

    def select(self, *columns: Any) -> Select[tuple[Any, ...]]:
        """Create select statement for the model."""
        return select(*columns) if columns else select(self.model_class)

    def where(
        self,
        stmt: Select[tuple[TDBModel]],
        conditions: dict[str, Any] | list[ColumnElement],
    ) -> Select[tuple[TDBModel]]:
        """Apply equality dict or explicit column conditions to a statement."""
        match conditions:
            case dict():
                for field, value in conditions.items():
                    stmt = stmt.where(getattr(self.model_class, field) == value)
            case list():
                for condition in conditions:
                    stmt = stmt.where(condition)
        return stmt

    def order_by(
        self, stmt: Select[tuple[TDBModel]], field: str, ascending: bool = True
    ) -> Select[tuple[TDBModel]]:
        """Add ordering to a select statement."""
        order_col = getattr(self.model_class, field)
        return stmt.order_by(order_col if ascending else order_col.desc())

    def with_default_relationships(
        self, stmt: Select[tuple[TDBModel]]
    ) -> Select[tuple[TDBModel]]:
        """Add eager loading for the mapper's default relationships."""
        rels = self.mapper.get_default_relationships()
        if not rels:
            return stmt
        return stmt.options(
            *(selectinload(getattr(self.model_class, rel)) for rel in rels)
        )

    # -------------------------------------------------------------------------
    # DIRECT DATABASE OPERATIONS (non-decorated helpers)
    # -------------------------------------------------------------------------

    async def _execute_query(
        self,
        stmt: Select[tuple[TDBModel]],
    ) -> list[TDBModel]:
        """Execute a query and return all results directly."""
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _execute_query_one(
        self,
        stmt: Select[tuple[TDBModel]],
    ) -> TDBModel | None:
        """Execute a query and return the single result or None."""
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    # -------------------------------------------------------------------------
    # CORE OPERATIONS
    # -------------------------------------------------------------------------

    @db_operation("count_entities")
    async def count_entities(
        self, conditions: dict[str, Any] | list[ColumnElement] | None = None
    ) -> int:
        """Count entities matching the given conditions."""
        stmt = select(func.count(self.model_class.id))
        if conditions:
            stmt = self.where(stmt, conditions)
        count = await self.session.scalar(stmt)
        return count or 0

    @db_operation("find_by")
    async def find_by(
        self,
        conditions: dict[str, Any] | list[ColumnElement],
        limit: int | None = None,
        order_by: tuple[str, bool] | None = None,
    ) -> list[TDomainModel]:
        """Find entities matching conditions."""
        stmt = self.with_default_relationships(self.where(self.select(), conditions))

        if order_by:
            field, ascending = order_by
            stmt = self.order_by(stmt, field, ascending)

        if limit is not None:
            stmt = stmt.limit(limit)

        db_entities = await self._execute_query(stmt)
        return await self.mapper.map_collection(db_entities)

    @db_operation("find_one_by")
    async def find_one_by(
        self,
        conditions: dict[str, Any] | list[ColumnElement],
    ) -> TDomainModel | None:
        """Find a single entity matching conditions or None if not found."""
        stmt = self.with_default_relationships(self.where(self.select(), conditions))
        db_entity = await self._execute_query_one(stmt.limit(1))

        if not db_entity:
            return None

        return await self.mapper.to_domain(db_entity)

