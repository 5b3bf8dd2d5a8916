"""Exception hierarchy raised by the pantry."""

from typing import Optional


class PantryError(Exception):
    """Base error for the pantry."""


class ConfigurationError(PantryError):
    """Raised when persistence is used without a persistence directory."""


class PersistenceError(PantryError):
    """Raised when reading, writing or deleting a persisted entry fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DeserializationError(PantryError):
    """Raised when a persisted file cannot be decoded as an entry."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
