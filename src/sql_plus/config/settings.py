"""
Configuration management for sql-plus.

This module provides environment-based configuration using Pydantic BaseSettings,
so connection parameters, logging level and bulk insert sizing can be supplied
per deployment without touching code.

Environment variables are loaded with the SQLPLUS_ prefix, e.g.
SQLPLUS_MYSQL_HOST overrides ``mysql_host``. LOG_LEVEL is read without prefix.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SQLPLUS_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Every field has a development default so that the escaping and templating
    helpers work without any configuration; only code that opens connections
    needs real MySQL credentials.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    dialect: Literal["mysql", "postgresql"] = Field(
        default="mysql",
        description="SQL dialect used for identifier quoting and literals",
    )

    # MySQL connection
    mysql_host: str = Field(
        default="localhost",
        description="MySQL database host",
    )
    mysql_port: int = Field(
        default=3306,
        description="MySQL database port",
    )
    mysql_user: str = Field(
        default="root",
        description="MySQL database user",
    )
    mysql_password: str = Field(
        default="",
        description="MySQL database password",
    )
    mysql_database: Optional[str] = Field(
        default=None,
        description="Default schema; None connects without selecting one",
    )
    mysql_charset: str = Field(
        default="utf8mb4",
        description="Connection character set",
    )
    mysql_time_zone: Optional[str] = Field(
        default=None,
        description="Session time zone issued on connect (e.g. '+00:00')",
    )

    # Connection behaviour
    connect_timeout: int = Field(
        default=30,
        description="Connection timeout in seconds",
    )
    read_timeout: int = Field(
        default=30,
        description="Read timeout in seconds",
    )
    max_retries: int = Field(
        default=3,
        description="Connection attempts before giving up",
    )
    retry_backoff_base: float = Field(
        default=2.0,
        description="Base for exponential backoff between attempts (seconds)",
    )

    # Bulk insert
    bulk_insert_batch_size: Optional[int] = Field(
        default=None,
        description="Rows per multi-row INSERT; None estimates from max_allowed_packet",
    )

    @field_validator(
        "mysql_port", "connect_timeout", "read_timeout", "max_retries", mode="after"
    )
    @classmethod
    def _require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("bulk_insert_batch_size", mode="after")
    @classmethod
    def _require_positive_batch(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("bulk_insert_batch_size must be positive when set")
        return value

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    model_config = SettingsConfigDict(
        env_prefix="SQLPLUS_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache so settings are loaded once and reused across the
    application lifecycle. Tests that change the environment should call
    ``get_settings.cache_clear()``.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
