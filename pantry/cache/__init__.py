"""Cache module for Pantry."""

from .entry import Entry, is_expired
from .lock import ReadWriteLock
from .result import Action, Result
from .store import Pantry, SweeperState

__all__ = ["Action", "Entry", "Pantry", "ReadWriteLock", "Result", "SweeperState", "is_expired"]
