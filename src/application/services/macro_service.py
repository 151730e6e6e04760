"""Macro service: CRUD facade over the macro repository.

Each operation opens its own unit of work and resolves a fresh repository from
it. Writes commit exactly once; reads never commit. Errors raised by the unit
of work or the repository propagate unchanged.
"""

from typing import Self

from src.config import get_logger
from src.domain.entities import Macro, MacroPropertyType
from src.domain.repositories import (
    MacroPropertyTypeRegistryProtocol,
    UnitOfWorkProviderProtocol,
)

logger = get_logger(__name__)


class MacroService:
    """Create, read, update and delete macros.

    Collaborators are injected; when omitted the service uses the configured
    database and the process-wide property type resolver.
    """

    def __init__(
        self,
        provider: UnitOfWorkProviderProtocol | None = None,
        registry: MacroPropertyTypeRegistryProtocol | None = None,
    ) -> None:
        if provider is None:
            from src.infrastructure.persistence.unit_of_work import (
                DatabaseUnitOfWorkProvider,
            )

            provider = DatabaseUnitOfWorkProvider()

        if registry is None:
            from src.infrastructure.macro_property_types import (
                MacroPropertyTypeResolver,
            )

            registry = MacroPropertyTypeResolver.current()

        self._provider = provider
        self._registry = registry

    @classmethod
    async def create(
        cls,
        provider: UnitOfWorkProviderProtocol | None = None,
        registry: MacroPropertyTypeRegistryProtocol | None = None,
    ) -> Self:
        """Build the service and fetch all macros once to warm the database.

        The fetched macros are discarded.
        """
        service = cls(provider=provider, registry=registry)
        macros = await service.get_all()
        logger.debug(f"Warm-up fetched {len(macros)} macros")
        return service

    async def get_by_alias(self, alias: str) -> Macro | None:
        """Get a macro by its alias, or None if there is none."""
        logger.debug(f"Getting macro '{alias}'")
        async with self._provider.get_unit_of_work() as uow:
            repository = uow.get_macro_repository()
            return await repository.get(alias)

    async def get_all(self, *aliases: str) -> list[Macro]:
        """Get the macros with the given aliases, or all macros when none are given."""
        logger.debug(
            "Getting macros",
            aliases=list(aliases) if aliases else "all",
        )
        async with self._provider.get_unit_of_work() as uow:
            repository = uow.get_macro_repository()
            return await repository.get_all(aliases)

    async def save(self, macro: Macro) -> Macro:
        """Insert or update a macro and commit.

        Returns:
            The persisted macro, carrying its database id
        """
        async with self._provider.get_unit_of_work() as uow:
            repository = uow.get_macro_repository()
            saved = await repository.add_or_update(macro)
            await uow.commit()

        logger.info("Saved macro '{}'", saved.alias, macro_id=saved.id)
        return saved

    async def delete(self, macro: Macro) -> None:
        """Delete a macro and commit."""
        async with self._provider.get_unit_of_work() as uow:
            repository = uow.get_macro_repository()
            await repository.delete(macro)
            await uow.commit()

        logger.info(f"Deleted macro '{macro.alias}'")

    def get_macro_property_types(self) -> list[MacroPropertyType]:
        """Get every registered macro property type."""
        return list(self._registry.macro_property_types)

    def get_macro_property_type_by_alias(self, alias: str) -> MacroPropertyType | None:
        """Get the first registered property type with this exact alias, or None."""
        return next(
            (t for t in self._registry.macro_property_types if t.alias == alias),
            None,
        )
