"""
Persistence Module

One file per key inside the persistence directory. The file name is the
key verbatim and the file body is the pickled ``{value, expires_at}``
pair of that single entry. There is no manifest: the directory listing
is the index.

Keys containing path separators or names the filesystem reserves are
not supported when persistence is used. Keys ending in
``settings.TEMP_SUFFIX`` are reserved for in-flight writes.

Loading unpickles file contents, so only load directories written by a
trusted process.
"""

import logging
import os
import pickle
import tempfile
from typing import Any, Dict

from ..config.settings import settings
from ..errors import DeserializationError, PersistenceError
from .entry import Entry

logger = logging.getLogger(__name__)


def entry_path(directory: str, key: str) -> str:
    """Return the path of the file backing ``key``."""
    return os.path.join(directory, key)


def encode_entry(entry: Entry) -> bytes:
    """Serialize an entry, keeping its absolute expiration timestamp."""
    payload = {"value": entry.value, "expires_at": entry.expires_at}
    return pickle.dumps(payload, protocol=pickle.HIGHEST_PROTOCOL)


def decode_entry(data: bytes, path: str = None) -> Entry:
    """
    Decode bytes written by ``encode_entry``.

    Raises:
        DeserializationError: If the bytes are not a valid entry
    """
    try:
        payload: Any = pickle.loads(data)
    except Exception as exc:
        raise DeserializationError(f"cannot decode entry: {exc}", path) from exc

    if not isinstance(payload, dict) or "value" not in payload or "expires_at" not in payload:
        raise DeserializationError("malformed entry payload", path)

    try:
        expires_at = float(payload["expires_at"])
    except (TypeError, ValueError, OverflowError) as exc:
        raise DeserializationError(f"invalid expiration: {payload['expires_at']!r}", path) from exc

    return Entry(value=payload["value"], expires_at=expires_at)


def ensure_directory(directory: str) -> None:
    """Create the persistence directory if it does not exist."""
    try:
        os.makedirs(directory, mode=settings.DIRECTORY_MODE, exist_ok=True)
    except OSError as exc:
        raise PersistenceError(f"cannot create directory {directory}: {exc}", directory) from exc


def write_entry(directory: str, key: str, entry: Entry) -> None:
    """
    Write one entry to its file, replacing any previous content.

    The bytes go to a temporary file in the same directory which is then
    renamed over the target, so a crash mid-write never leaves a
    truncated entry behind.

    Raises:
        PersistenceError: If the directory or file cannot be written
    """
    ensure_directory(directory)
    path = entry_path(directory, key)
    data = encode_entry(entry)

    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=".", suffix=settings.TEMP_SUFFIX, dir=directory
        )
    except OSError as exc:
        raise PersistenceError(f"cannot write {path}: {exc}", path) from exc

    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, settings.FILE_MODE)
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning(f"Could not remove temporary file {tmp_path}")
        raise PersistenceError(f"cannot write {path}: {exc}", path) from exc

    logger.debug(f"Persisted {key} to {path}")


def delete_entry(directory: str, key: str) -> bool:
    """
    Delete the file backing ``key``.

    Returns:
        True if a file was removed, False if there was none

    Raises:
        PersistenceError: If the file exists but cannot be removed
    """
    path = entry_path(directory, key)
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise PersistenceError(f"cannot remove {path}: {exc}", path) from exc

    logger.debug(f"Removed persisted {key}")
    return True


def read_directory(directory: str) -> Dict[str, Entry]:
    """
    Decode every regular file in ``directory``.

    A missing directory yields an empty mapping. Sub-directories and
    leftover temporary files are ignored.

    Returns:
        Mapping of key (file name) to decoded entry

    Raises:
        PersistenceError: If the directory or a file cannot be read
        DeserializationError: On the first file that cannot be decoded
    """
    try:
        dir_entries = list(os.scandir(directory))
    except FileNotFoundError:
        logger.debug(f"Persistence directory {directory} does not exist, nothing to load")
        return {}
    except OSError as exc:
        raise PersistenceError(f"cannot list {directory}: {exc}", directory) from exc

    entries: Dict[str, Entry] = {}
    for dir_entry in dir_entries:
        if dir_entry.name.endswith(settings.TEMP_SUFFIX):
            continue
        try:
            if not dir_entry.is_file():
                continue
            with open(dir_entry.path, "rb") as f:
                data = f.read()
        except OSError as exc:
            raise PersistenceError(f"cannot read {dir_entry.path}: {exc}", dir_entry.path) from exc

        entries[dir_entry.name] = decode_entry(data, dir_entry.path)

    return entries
