"""Logging configuration and utilities using Loguru.

This module provides centralized logging setup for the macro service,
including structured logging with Loguru and an error handling decorator
for boundary operations.

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

log_startup_info() -> None
    Log configuration at startup

@resilient_operation(operation_name: str)
    Decorator for boundary operations: logs the failure and re-raises it
    Usage: @resilient_operation("macro_delete")

Quick Start:
-----------
```python
from src.config import get_logger
logger = get_logger(__name__)
logger.info("Saved macro", alias="footer")
```
"""

from collections.abc import Awaitable, Callable
import functools
from pathlib import Path
import sys
from typing import Any, TypeVar

from loguru import logger

from .settings import settings

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks

    Note:
        - Removes default logger and sets up console and file handlers
        - Console output goes to stderr so command output stays clean
        - File format is serialized JSON with full context
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    # Add contextual info to all log records
    logger.configure(extra={"service": "macros", "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stderr,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    enqueue_logs = not settings.logging.real_time_debug
    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=enqueue_logs,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context
    """
    return logger.bind(
        module=name,
        service="macros",
    )


# =============================================================================
# STARTUP LOGGING
# =============================================================================


def log_startup_info() -> None:
    """Log application configuration on startup.

    Logs a banner at info level and every configuration value at debug level.
    """
    local_logger = get_logger(__name__)
    separator = "=" * 50

    local_logger.info("{}", separator)
    local_logger.info("Macro service")
    local_logger.info("{}", separator)

    local_logger.debug("Configuration:")
    config_dict = settings.model_dump()
    for section_name, section_values in config_dict.items():
        local_logger.debug("  {}:", section_name.upper())
        if isinstance(section_values, dict):
            for key, value in section_values.items():
                if isinstance(value, Path):
                    value = str(value)
                local_logger.debug("    {}: {}", key.upper(), value)
        else:
            if isinstance(section_values, Path):
                section_values = str(section_values)
            local_logger.debug("    {}", section_values)


# =============================================================================
# ERROR HANDLING DECORATORS
# =============================================================================


T = TypeVar("T")


def resilient_operation(
    operation_name: str | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator for service boundary operations with standardized error logging.

    The wrapped coroutine's exceptions are logged with the operation name and
    re-raised unchanged.

    Example:
        >>> @resilient_operation("macro_lookup")
        >>> async def lookup(alias):
        >>>     return await service.get_by_alias(alias)
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"Error in {op_name}: {e!s}")
                raise

        return wrapper

    return decorator
