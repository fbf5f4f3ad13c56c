"""Load and save the task file.

A file that cannot be read or decoded is never fatal: its bytes are copied to
<path>.bak, a warning is logged, and the session starts from an empty store.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Iterator

from minitask.defaults import INITIAL_CAPACITY, backup_path
from minitask.errors import CorruptionError, StorageIOError
from minitask.fs import atomic_write_bytes, read_bytes
from minitask.storage.codec import decode, encode
from minitask.storage.model import Storage

log = logging.getLogger(__name__)


def _backup(path: Path, data: bytes | None) -> Path | None:
    """Copy unreadable bytes next to the original. Returns the backup path if written."""
    if data is None:
        return None
    target = backup_path(path)
    try:
        atomic_write_bytes(target, data)
    except OSError as exc:
        log.warning("could not write backup %s: %s", target, exc)
        return None
    return target


def load(path: str | Path, capacity: int = INITIAL_CAPACITY) -> Storage:
    """Return the stored tasks, or an empty store when there are none or they are unreadable."""
    path = Path(path)
    data: bytes | None = None
    try:
        data = read_bytes(path)
        if not data:
            return Storage(capacity)
        storage = decode(data)
    except (CorruptionError, OSError) as exc:
        saved = _backup(path, data)
        if saved is not None:
            log.warning("task file %s is unreadable (%s); backed up to %s, starting empty", path, exc, saved)
        else:
            log.warning("task file %s is unreadable (%s); starting empty", path, exc)
        return Storage(capacity)

    storage.dirty = False
    log.debug("loaded %d task(s) from %s", storage.count, path)
    return storage


def save(path: str | Path, storage: Storage) -> None:
    """Encode and write the store, then clear its dirty flag."""
    data = encode(storage)
    try:
        atomic_write_bytes(path, data)
    except OSError as exc:
        raise StorageIOError(f"cannot write task file {path}: {exc}") from exc
    storage.dirty = False
    log.debug("saved %d task(s) to %s", storage.count, path)


@contextlib.contextmanager
def session(path: str | Path, capacity: int = INITIAL_CAPACITY) -> Iterator[Storage]:
    """Load the store, hand it to the caller, and save it if it changed.

    Nothing is written when the body raises.
    """
    storage = load(path, capacity)
    yield storage
    if storage.dirty:
        save(path, storage)
