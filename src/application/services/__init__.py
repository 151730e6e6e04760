"""Application services - use case orchestrators."""

from .macro_service import MacroService

__all__ = ["MacroService"]
