"""
Expiring Key-Value Store Module

This module implements the pantry: a thread-safe, in-memory key-value
store whose items expire after a time-to-live.

Expiration is enforced twice:
- Lazily on every read, so callers never see an expired value
- Actively by a background sweeper thread, so expired entries do not
  accumulate in memory

Both paths decide expiry with the same ``is_expired`` predicate.
"""

import logging
import threading
import time
from enum import Enum
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from ..config.options import Options
from ..errors import ConfigurationError, PantryError
from . import persistence
from .entry import Entry, is_expired
from .lock import ReadWriteLock
from .result import Action, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SweeperState(Enum):
    """Lifecycle of the background sweeper."""

    RUNNING = "running"
    STOPPED = "stopped"


class Pantry(Generic[T]):
    """
    Thread-safe, in-memory key-value store with expiring items.

    Every read operation (get, is_empty, count, enumeration) takes the
    lock in shared mode; every mutation (set, remove, clear, load and
    the periodic sweep) takes it exclusively.

    A sweeper thread starts with the pantry and runs until the stop
    event is set, either through ``close()`` or by the caller setting
    the event it passed in. The sweeper clears the pantry as its last
    act: once nothing evicts expired entries any more the content is
    no longer trusted.

    Usage:
        with Pantry[str](Options(expiration=60)) as pantry:
            pantry.set("key", "value")
            value, found = pantry.get("key")

    Attributes:
        options: The resolved ``Options`` of this pantry
    """

    def __init__(self, options: Optional[Options] = None, stop_event: Optional[threading.Event] = None):
        """
        Initialize the pantry and start its sweeper.

        Args:
            options: Pantry options (defaults from settings)
            stop_event: Cancellation signal for the sweeper; a private
                event is created when omitted
        """
        self.options = options if options is not None else Options()

        self._store: Dict[str, Entry[T]] = {}
        self._lock = ReadWriteLock()

        self._stop_event = stop_event if stop_event is not None else threading.Event()
        self._state = SweeperState.RUNNING
        self._sweeper = threading.Thread(
            target=self._run_sweeper,
            args=(self._stop_event,),
            name=f"pantry-sweeper-{id(self):x}",
            daemon=True,
        )
        self._sweeper.start()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, key: str) -> Tuple[Optional[T], bool]:
        """
        Retrieve a value.

        Args:
            key: The key to look up

        Returns:
            ``(value, True)`` for a live entry, ``(None, False)`` if the
            key is missing or its entry has expired
        """
        with self._lock.read_locked():
            entry = self._store.get(key)

        if entry is None or is_expired(entry, time.time()):
            return None, False
        return entry.value, True

    def contains(self, key: str) -> bool:
        """Return True if the key holds a live entry."""
        _, found = self.get(key)
        return found

    def is_empty(self) -> bool:
        """
        Return True if the pantry holds no entries at all.

        Note: expired entries count until the sweeper removes them.
        """
        with self._lock.read_locked():
            return len(self._store) == 0

    def count(self) -> int:
        """
        Get the number of stored entries.

        Note: This may include expired entries that haven't been swept yet.
        """
        with self._lock.read_locked():
            return len(self._store)

    def _snapshot(self) -> List[Tuple[str, Entry[T]]]:
        with self._lock.read_locked():
            return list(self._store.items())

    def keys(self) -> Iterator[str]:
        """Iterate over the keys of live entries."""
        for key, entry in self._snapshot():
            if not is_expired(entry, time.time()):
                yield key

    def values(self) -> Iterator[T]:
        """Iterate over the values of live entries."""
        for _, entry in self._snapshot():
            if not is_expired(entry, time.time()):
                yield entry.value

    def all(self) -> Iterator[Tuple[str, T]]:
        """Iterate over ``(key, value)`` pairs of live entries."""
        for key, entry in self._snapshot():
            if not is_expired(entry, time.time()):
                yield key, entry.value

    def get_all(self) -> Dict[str, T]:
        """Return a dict of every live entry."""
        return dict(self.all())

    def get_all_flat(self) -> List[T]:
        """Return a list of every live value."""
        return list(self.values())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set(self, key: str, value: T, ttl: Optional[float] = None) -> Result[T]:
        """
        Insert or overwrite a value.

        Args:
            key: The key to store
            value: The value to associate with the key
            ttl: Time-to-live in seconds (default ``options.expiration``).
                Zero or negative stores an already expired entry.

        Returns:
            A ``Result`` that can persist this write
        """
        if ttl is None:
            ttl = self.options.expiration

        entry = Entry(value=value, expires_at=time.time() + ttl)
        with self._lock.write_locked():
            self._store[key] = entry

        return Result(pantry=self, action=Action.SET, key=key, entry=entry)

    def remove(self, key: str) -> Result[T]:
        """
        Remove a value. Removing a missing key is not an error.

        Returns:
            A ``Result`` that can persist this removal
        """
        with self._lock.write_locked():
            self._store.pop(key, None)

        return Result(pantry=self, action=Action.REMOVE, key=key)

    def clear(self) -> None:
        """Remove all entries from memory (persisted files are kept)."""
        with self._lock.write_locked():
            self._store.clear()

    def load(self) -> int:
        """
        Rebuild entries from the persistence directory.

        Every regular file becomes one entry keyed by its file name.
        Entries that expired while persisted are loaded as-is and are
        treated as expired on read. Nothing is inserted unless every
        file decodes.

        Returns:
            Number of entries loaded

        Raises:
            ConfigurationError: If no persistence directory is configured
            PersistenceError: If the directory or a file cannot be read
            DeserializationError: If a file cannot be decoded
        """
        directory = self.options.persistence_directory
        if directory is None:
            raise ConfigurationError("persistence directory is not configured")

        entries = persistence.read_directory(directory)
        with self._lock.write_locked():
            self._store.update(entries)

        logger.info(f"Loaded {len(entries)} entries from {directory}")
        return len(entries)

    # ------------------------------------------------------------------
    # Sweeper
    # ------------------------------------------------------------------
    def sweep(self) -> int:
        """
        Evict every expired entry now (active expiration).

        When persistence is configured the files of evicted keys are
        deleted too, best-effort: failures are logged, not raised.

        Returns:
            Number of entries evicted
        """
        directory = self.options.persistence_directory

        with self._lock.write_locked():
            now = time.time()
            expired = [key for key, entry in self._store.items() if is_expired(entry, now)]
            for key in expired:
                del self._store[key]
                if directory is None:
                    continue
                try:
                    persistence.delete_entry(directory, key)
                except PantryError as exc:
                    logger.warning(f"Could not delete persisted {key} during sweep: {exc}")

        if expired:
            logger.debug(f"Swept {len(expired)} expired entries")
        return len(expired)

    def _run_sweeper(self, stop_event: threading.Event) -> None:
        interval = self.options.cleaning_interval
        logger.debug(f"Sweeper started (interval {interval}s)")

        try:
            while not stop_event.wait(interval):
                self.sweep()
        except Exception:
            logger.exception("Sweeper thread failed")
        finally:
            self.clear()
            self._state = SweeperState.STOPPED
            logger.debug("Sweeper stopped, pantry cleared")

    @property
    def sweeper_state(self) -> SweeperState:
        """Current state of the background sweeper."""
        return self._state

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Stop the sweeper and wait for it to clear the pantry.

        Args:
            timeout: Maximum seconds to wait for the sweeper thread
        """
        self._stop_event.set()
        if self._sweeper is not threading.current_thread():
            self._sweeper.join(timeout)

    def __enter__(self) -> "Pantry[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
