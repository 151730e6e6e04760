"""Async helpers for CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from src.infrastructure.persistence.database.db_connection import dispose_engine

T = TypeVar("T")


def run_async(func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
    """Run a coroutine function to completion from a synchronous command.

    Every command gets its own event loop, so the global engine is disposed
    before the loop closes.
    """

    async def _run() -> T:
        try:
            return await func(*args, **kwargs)
        finally:
            await dispose_engine()

    return asyncio.run(_run())
