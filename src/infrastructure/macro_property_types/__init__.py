"""Macro property type plugins and their process-wide resolver.

Every module in this package that defines ``get_macro_property_types()`` is a
plugin module. The resolver discovers them lazily, on first access, so
importing this package stays cheap.
"""

import importlib
import pkgutil
import sys
from typing import ClassVar, Self

from src.config import get_logger
from src.domain.entities import MacroPropertyType

logger = get_logger(__name__)


def discover_macro_property_types() -> list[MacroPropertyType]:
    """Collect property types from every plugin module in this package.

    Modules are visited in name order and their descriptors kept in declaration
    order. Modules that fail to import are logged and skipped.
    """
    module = sys.modules[__name__]
    package_path = module.__name__

    discovered: list[MacroPropertyType] = []
    for _, name, ispkg in sorted(
        pkgutil.iter_modules(module.__path__, prefix=f"{package_path}."),
        key=lambda info: info.name,
    ):
        if ispkg:
            continue

        module_name = name.split(".")[-1]
        try:
            plugin_module = importlib.import_module(name)
        except ImportError as e:
            logger.warning(f"Could not import property type module {module_name}: {e}")
            continue

        if hasattr(plugin_module, "get_macro_property_types"):
            types = list(plugin_module.get_macro_property_types())
            discovered.extend(types)
            logger.debug(f"Registered {len(types)} property types from {module_name}")

    logger.info(f"Discovered {len(discovered)} macro property types")
    return discovered


class MacroPropertyTypeResolver:
    """Registry of macro property type plugins.

    Use ``MacroPropertyTypeResolver.current()`` for the process-wide instance.
    Aliases are not deduplicated; lookups return the first match.
    """

    _current: ClassVar["MacroPropertyTypeResolver | None"] = None

    def __init__(self, types: list[MacroPropertyType] | None = None) -> None:
        """Create a resolver, pre-populated when ``types`` is given."""
        self._types: list[MacroPropertyType] | None = (
            list(types) if types is not None else None
        )

    @classmethod
    def current(cls) -> Self:
        """Get or create the process-wide resolver."""
        if cls._current is None:
            cls._current = cls()
        return cls._current

    @classmethod
    def reset(cls) -> None:
        """Drop the process-wide resolver; the next current() rediscovers."""
        cls._current = None

    @property
    def macro_property_types(self) -> list[MacroPropertyType]:
        """All registered property types, discovering plugins on first access."""
        if self._types is None:
            self._types = discover_macro_property_types()
        return list(self._types)

    def register(self, *types: MacroPropertyType) -> None:
        """Add property types after the discovered ones."""
        if self._types is None:
            self._types = discover_macro_property_types()
        self._types.extend(types)
        logger.debug(f"Registered property types: {', '.join(t.alias for t in types)}")


__all__ = [
    "MacroPropertyTypeResolver",
    "discover_macro_property_types",
]
