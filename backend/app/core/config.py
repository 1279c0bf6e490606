"""
config.py — Centralized Application Configuration Loader

Purpose:
- Define a single source of truth for instance-administration settings.
- Load and validate environment variables from `.env` or OS environment.
- Keep the database location and log verbosity out of the command code.

This module does NOT:
- Execute any DB connections (see app/core/database.py).
- Configure logging handlers (see app/core/logging.py).
- Modify runtime settings.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file relative to backend directory
# config.py is at: backend/app/core/config.py
# .env should be at: backend/.env
_CONFIG_DIR = Path(__file__).parent  # backend/app/core
_BACKEND_DIR = _CONFIG_DIR.parent.parent  # backend
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # Fallback: use relative path (pydantic will look in CWD)
    _ENV_FILE_PATH = ".env"


class Settings(BaseSettings):
    """
    Settings container for the instance administration commands.

    Every value can be overridden from the environment, e.g.:
        DATABASE_URL=postgresql://user:pw@host:5432/workflows
        LOG_LEVEL=DEBUG
    """

    # Database
    DATABASE_URL: str = Field(
        "sqlite:///./instance.db",
        description="SQLAlchemy connection URL for the instance store",
    )
    DB_ECHO: bool = Field(
        False,
        description="Echo emitted SQL statements (debugging only)",
    )

    # Logging
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def strip_database_url(cls, v: Any) -> str:
        """Strip whitespace from the connection URL."""
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        level = str(v or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton pattern — settings imported anywhere will reference same object.
settings = Settings()
