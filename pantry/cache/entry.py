"""Stored entries and the expiration predicate shared by reads and sweeps."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Entry(Generic[T]):
    # Value + absolute wall-clock expiration (time.time()), so that it
    # keeps its meaning across a persist/load cycle
    value: T
    expires_at: float


def is_expired(entry: Entry, now: float) -> bool:
    """Return True once ``now`` is past the entry's expiration."""
    return now > entry.expires_at
