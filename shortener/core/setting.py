"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- Code alphabet and length are fixed per deployment; changing them
  invalidates previously exported snapshots
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings", "DEFAULT_CODE_ALPHABET"]

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Alphanumeric characters excluding 0, O, I and l
DEFAULT_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz123456789"


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )

    # Short URL Configuration
    BASE_URL: str = Field(
        default="https://tinyurl.com/",
        description="Prefix prepended to a code to build the full short URL"
    )
    BASE_DOMAIN: str = Field(
        default="tinyurl.com",
        description="Domain of the short URLs; long URLs on this domain are rejected"
    )

    # Short Code Configuration
    CODE_ALPHABET: str = Field(
        default=DEFAULT_CODE_ALPHABET,
        description="Symbols a short code may contain"
    )
    CODE_LENGTH: int = Field(
        default=8,
        description="Fixed length for all short codes"
    )
    MIN_CODE_SPACE: int = Field(
        default=1_000_000,
        description="Smallest acceptable number of distinct codes (alphabet size ** length)"
    )

    # Validation Configuration
    MAX_URL_LENGTH: int = Field(
        default=2_000_000,
        description="Longest URL accepted for shortening"
    )

    # Snapshot Configuration
    AUTOLOAD_SNAPSHOT_PATH: Optional[str] = Field(
        default=None,
        description="Snapshot file imported on console start-up when it exists"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_FILE: Optional[str] = Field(
        default=None,
        description="Optional log file path in addition to stderr"
    )


settings = Settings()
