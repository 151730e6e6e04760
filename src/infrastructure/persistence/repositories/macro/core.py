"""Macro repository keyed by alias."""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.config import get_logger
from src.domain.entities import Macro
from src.infrastructure.persistence.database.db_models import DBMacro
from src.infrastructure.persistence.repositories.base_repo import BaseRepository
from src.infrastructure.persistence.repositories.macro.mapper import MacroMapper
from src.infrastructure.persistence.repositories.repo_decorator import db_operation

logger = get_logger(__name__)


class MacroRepository(BaseRepository[DBMacro, Macro]):
    """Repository for macro persistence operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session and mapper."""
        super().__init__(
            session=session,
            model_class=DBMacro,
            mapper=MacroMapper(),
        )

    async def _load(self, macro: Macro) -> DBMacro | None:
        """Load the stored row for a macro, by id when it has one, else by alias."""
        conditions = (
            {"id": macro.id} if macro.id is not None else {"alias": macro.alias}
        )
        stmt = self.with_default_relationships(self.where(self.select(), conditions))
        return await self._execute_query_one(stmt)

    @db_operation("get_macro")
    async def get(self, alias: str) -> Macro | None:
        """Get a macro by alias, or None if there is none."""
        return await self.find_one_by({"alias": alias})

    @db_operation("get_all_macros")
    async def get_all(self, aliases: Sequence[str] = ()) -> list[Macro]:
        """Get all macros ordered by alias, optionally limited to ``aliases``."""
        conditions = [DBMacro.alias.in_(list(aliases))] if aliases else []
        return await self.find_by(conditions, order_by=("alias", True))

    @db_operation("macro_exists")
    async def exists(self, alias: str) -> bool:
        """Check whether a macro with the given alias is stored."""
        return await self.count_entities({"alias": alias}) > 0

    @db_operation("add_or_update_macro")
    async def add_or_update(self, macro: Macro) -> Macro:
        """Insert a new macro or update the stored one.

        Macros carrying an ``id`` are matched by id, others by alias.

        Raises:
            ValueError: If the macro has an id that is not stored
        """
        db_macro = await self._load(macro)

        if db_macro is None:
            if macro.id is not None:
                raise ValueError(f"Macro with ID {macro.id} not found")
            db_macro = self.mapper.to_db(macro)
            self.session.add(db_macro)
            logger.debug(f"Adding macro '{macro.alias}'")
        else:
            self.mapper.apply_to_db(db_macro, macro)
            logger.debug(f"Updating macro '{macro.alias}' (id={db_macro.id})")

        await self.session.flush()
        return await self.mapper.to_domain(db_macro)

    @db_operation("delete_macro")
    async def delete(self, macro: Macro) -> None:
        """Delete a macro and its properties. Unknown macros are ignored."""
        db_macro = await self._load(macro)
        if db_macro is None:
            logger.debug(f"Macro '{macro.alias}' not stored, nothing to delete")
            return

        await self.session.delete(db_macro)
        await self.session.flush()
