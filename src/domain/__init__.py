"""Domain layer - pure business types with no infrastructure dependencies."""

from . import entities, repositories

from .entities import (
    Macro,
    MacroProperty,
    MacroPropertyBaseType,
    MacroPropertyType,
    MacroType,
)

__all__ = [
    "entities",
    "repositories",
    "Macro",
    "MacroProperty",
    "MacroPropertyBaseType",
    "MacroPropertyType",
    "MacroType",
]
