"""Core domain entities representing CMS macro concepts."""

from .macro import (
    Macro,
    MacroProperty,
    MacroPropertyBaseType,
    MacroPropertyType,
    MacroType,
)

__all__ = [
    "Macro",
    "MacroProperty",
    "MacroPropertyBaseType",
    "MacroPropertyType",
    "MacroType",
]
