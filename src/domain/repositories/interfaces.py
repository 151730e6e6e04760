"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
Repository interfaces belong in the domain layer according to Clean Architecture.
"""

from collections.abc import Awaitable, Sequence
from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from src.domain.entities import Macro, MacroPropertyType


class MacroRepositoryProtocol(Protocol):
    """Repository interface for macro persistence, keyed by alias."""

    def get(self, alias: str) -> Awaitable["Macro | None"]:
        """Get a macro by alias, or None if no macro has that alias."""
        ...

    def get_all(self, aliases: Sequence[str] = ()) -> Awaitable[list["Macro"]]:
        """Get all macros, optionally limited to the given aliases.

        Args:
            aliases: Aliases to filter by. Empty means all macros.
        """
        ...

    def exists(self, alias: str) -> Awaitable[bool]:
        """Check whether a macro with the given alias exists."""
        ...

    def add_or_update(self, macro: "Macro") -> Awaitable["Macro"]:
        """Insert or update a macro, returning the persisted entity."""
        ...

    def delete(self, macro: "Macro") -> Awaitable[None]:
        """Remove a macro."""
        ...


class UnitOfWorkProtocol(Protocol):
    """Unit of Work interface for transaction boundary management.

    This protocol allows the application layer to control transaction
    boundaries while keeping the implementation details in the infrastructure
    layer. Each UnitOfWork instance manages a single database transaction and
    provides access to the repositories sharing that transaction.
    """

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager, rolling back on error."""
        ...

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        ...

    def get_macro_repository(self) -> MacroRepositoryProtocol:
        """Get macro repository using this unit of work's transaction."""
        ...


class UnitOfWorkProviderProtocol(Protocol):
    """Source of fresh units of work, one per operation."""

    def get_unit_of_work(self) -> UnitOfWorkProtocol:
        """Create a new unit of work."""
        ...


class MacroPropertyTypeRegistryProtocol(Protocol):
    """Read access to the registered macro property type plugins."""

    @property
    def macro_property_types(self) -> list["MacroPropertyType"]:
        """All registered property types in registration order."""
        ...
