"""
Pantry: Expiring In-Memory Key-Value Store

A thread-safe, in-memory key-value store whose items expire after a
time-to-live, with opt-in per-key persistence to a directory so the
store can be rebuilt after a restart.
"""

from .cache.result import Action, Result
from .cache.store import Entry, Pantry, SweeperState, is_expired
from .config.options import Options
from .errors import (
    ConfigurationError,
    DeserializationError,
    PantryError,
    PersistenceError,
)

__version__ = "1.0.0"

__all__ = [
    "Action",
    "ConfigurationError",
    "DeserializationError",
    "Entry",
    "Options",
    "Pantry",
    "PantryError",
    "PersistenceError",
    "Result",
    "SweeperState",
    "is_expired",
]
