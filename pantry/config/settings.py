"""
Pantry Configuration Settings

Process-wide defaults for every pantry. Each value can be overridden
through an environment variable; per-store overrides go through
``Options`` instead.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Default configuration settings."""

    # Expiration settings
    DEFAULT_EXPIRATION: float = float(os.environ.get("PANTRY_EXPIRATION", "3600"))
    CLEANING_INTERVAL: float = float(os.environ.get("PANTRY_CLEANING_INTERVAL", "5"))

    # Persistence settings
    PERSISTENCE_DIRECTORY: Optional[str] = os.environ.get("PANTRY_PERSISTENCE_DIRECTORY") or None
    DIRECTORY_MODE: int = 0o755
    FILE_MODE: int = 0o644
    TEMP_SUFFIX: str = ".pantry-tmp"  # Partial writes; skipped on load

    # Logging settings
    DEBUG: bool = os.environ.get("PANTRY_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("PANTRY_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
