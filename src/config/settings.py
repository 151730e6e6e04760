"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings v2.

The configuration is organized into logical groups:
- DatabaseConfig: Database connection and pooling settings
- LoggingConfig: Logging levels, files, and debugging options
- MacroConfig: Macro service behaviour
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database connection and pooling configuration."""

    url: str = "sqlite+aiosqlite:///data/db/macros.db"
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("data/logs/macros.log")
    real_time_debug: bool = True


class MacroConfig(BaseModel):
    """Macro service configuration."""

    # Run the warm-up fetch when the CLI builds a service
    warm_cache_on_start: bool = True


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: DATABASE_URL, CONSOLE_LOG_LEVEL, LOG_FILE
    - Nested: DATABASE__URL, LOGGING__CONSOLE_LEVEL, MACROS__WARM_CACHE_ON_START

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    macros: MacroConfig = MacroConfig()

    data_dir: Path = Path("data")

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Handles flat env vars (DATABASE_URL) and maps them to the
        nested structure expected by the models (database.url).
        """
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        db_mapping = {
            "database_url": "url",
            "database_echo": "echo",
            "database_pool_size": "pool_size",
            "database_max_overflow": "max_overflow",
            "database_pool_timeout": "pool_timeout",
            "database_pool_recycle": "pool_recycle",
        }
        for env_key, field_key in db_mapping.items():
            if env_key in data:
                transformed.setdefault("database", {})[field_key] = data.pop(env_key)

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)

        if "warm_macro_cache" in data:
            transformed.setdefault("macros", {})["warm_cache_on_start"] = data.pop(
                "warm_macro_cache"
            )

        # Nested values given explicitly win over flat ones
        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                data[section] = {**values, **existing}
            else:
                data[section] = values

        return data


# Singleton instance for application use
settings = Settings()

# Create data directory if it doesn't exist
settings.data_dir.mkdir(exist_ok=True)
