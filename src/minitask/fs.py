"""Filesystem helpers: atomic writes and raw reads for the task file."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def read_bytes(path: str | Path) -> bytes | None:
    """Raw file contents, or None if the file does not exist."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        return None


def atomic_write_bytes(path: str | Path, data: bytes) -> Path:
    """Write data to path atomically (write-to-temp, then rename).

    Returns the final path.
    """
    path = Path(path)
    d = path.parent
    d.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=d, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
    return path
