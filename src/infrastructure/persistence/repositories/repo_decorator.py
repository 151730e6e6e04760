"""Repository decorator for standardizing DB operations.

Repository methods wrapped with ``db_operation`` get:
- Trace logging with the repository, operation name and timing
- Error logging whose level depends on the SQLAlchemy error class
- The original exception re-raised unchanged
"""

from collections.abc import Callable, Coroutine
import functools
import inspect
import time
from typing import Any, ParamSpec, TypeVar

from sqlalchemy.exc import (
    DatabaseError,
    IntegrityError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
    TimeoutError,
)

from src.config import get_logger

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)

# First matching class decides the log level and message prefix
_ERROR_LEVELS: tuple[tuple[type[BaseException], str, str], ...] = (
    (NoResultFound, "DEBUG", "DB record not found"),
    (MultipleResultsFound, "WARNING", "Multiple results found"),
    (IntegrityError, "WARNING", "DB integrity error"),
    (TimeoutError, "ERROR", "DB timeout error"),
    (OperationalError, "ERROR", "DB operational error"),
    (DatabaseError, "ERROR", "DB error"),
    (SQLAlchemyError, "ERROR", "SQLAlchemy error"),
)


def db_operation(operation_name: str | None = None):
    """Decorate repository methods with consistent logging and error handling.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Example:
        @db_operation("get_macro")
        async def get(self, alias: str) -> Macro | None:
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        func_name = operation_name or func.__name__

        if not inspect.iscoroutinefunction(func):
            raise TypeError(
                f"db_operation can only be used with async functions, but {func_name} is not async",
            )

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            repo_name = args[0].__class__.__name__ if args else "Repository"
            context = _build_log_context(kwargs)

            logger.trace(
                f"DB operation starting: {repo_name}.{func_name}",
                operation=func_name,
                **context,
            )

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                exec_time = (time.perf_counter() - start_time) * 1000
                _log_failure(e, f"{repo_name}.{func_name}", func_name, exec_time, context)
                raise

            logger.trace(
                f"DB operation completed: {repo_name}.{func_name}",
                operation=func_name,
                exec_time_ms=(time.perf_counter() - start_time) * 1000,
                **context,
            )
            return result

        return wrapper

    return decorator


def _log_failure(
    error: Exception,
    target: str,
    operation: str,
    exec_time: float,
    context: dict[str, Any],
) -> None:
    for error_class, level, prefix in _ERROR_LEVELS:
        if isinstance(error, error_class):
            logger.log(
                level,
                f"{prefix}: {target}",
                operation=operation,
                error=str(error),
                exec_time_ms=exec_time,
                **context,
            )
            return

    # Not a database error: keep the traceback
    logger.exception(
        f"Unhandled exception in {target}",
        operation=operation,
        error=str(error),
        exec_time_ms=exec_time,
        **context,
    )


def _build_log_context(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Build a context dictionary for logging from function kwargs.

    Keeps scalar keyword arguments, with ``*_id`` and ``alias`` values
    taking precedence.
    """
    key_params = {
        k: v
        for k, v in kwargs.items()
        if (k.endswith("_id") or k == "alias") and isinstance(v, int | str)
    }

    simple_params = {
        k: v
        for k, v in kwargs.items()
        if (
            not k.startswith("_")
            and isinstance(v, int | float | str | bool)
            and k not in key_params
        )
    }

    return {**simple_params, **key_params}
