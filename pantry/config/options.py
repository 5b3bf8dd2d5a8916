"""Per-store options."""

import os
from dataclasses import dataclass
from typing import Optional

from .settings import settings


@dataclass
class Options:
    """
    Configuration for a single pantry.

    Attributes:
        expiration: Default time-to-live in seconds for ``set`` calls
            that do not pass their own ``ttl``
        cleaning_interval: Seconds between two background sweeps; zero
            or unset falls back to ``settings.CLEANING_INTERVAL``
        persistence_directory: Directory holding one file per persisted
            key; ``None`` disables persistence
    """

    expiration: Optional[float] = None
    cleaning_interval: Optional[float] = None
    persistence_directory: Optional[str] = None

    def __post_init__(self) -> None:
        if self.expiration is None:
            self.expiration = settings.DEFAULT_EXPIRATION
        if not self.cleaning_interval or self.cleaning_interval <= 0:
            self.cleaning_interval = settings.CLEANING_INTERVAL
        if self.persistence_directory is None:
            self.persistence_directory = settings.PERSISTENCE_DIRECTORY
        if self.persistence_directory is not None:
            self.persistence_directory = os.fspath(self.persistence_directory)
