"""
Mutation Results

Every ``set`` and ``remove`` returns a ``Result``: a snapshot of the
mutation that can be replayed against the persistence directory with
``persist()``. Writers that do not need durability simply drop it.

A result persists exactly the snapshot it was created with. Persisting
it after a later ``set`` or ``remove`` of the same key writes stale
data, so a result should not outlive the request that produced it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from ..errors import ConfigurationError
from . import persistence
from .entry import Entry

if TYPE_CHECKING:
    from .store import Pantry

T = TypeVar("T")


class Action(Enum):
    """Kind of mutation a result replays."""

    SET = "set"
    REMOVE = "remove"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Deferred persistence handle for one mutation.

    Attributes:
        pantry: The pantry that performed the mutation
        action: SET or REMOVE
        key: The mutated key
        entry: The entry as stored by a SET (None for REMOVE)
    """

    pantry: "Pantry[T]"
    action: Action
    key: str
    entry: Optional[Entry[T]] = None

    def persist(self) -> None:
        """
        Mirror the mutation to the persistence directory.

        SET writes the entry file (creating the directory if needed);
        REMOVE deletes it, and a missing file is not an error.

        Raises:
            ConfigurationError: If the pantry has no persistence directory
            PersistenceError: If the file system operation fails
        """
        directory = self.pantry.options.persistence_directory
        if directory is None:
            raise ConfigurationError("persistence directory is not configured")

        if self.action is Action.SET:
            persistence.write_entry(directory, self.key, self.entry)
        else:
            persistence.delete_entry(directory, self.key)
