"""Macro repositories package."""

from src.infrastructure.persistence.repositories.macro.core import MacroRepository
from src.infrastructure.persistence.repositories.macro.mapper import MacroMapper

__all__ = [
    "MacroMapper",
    "MacroRepository",
]
