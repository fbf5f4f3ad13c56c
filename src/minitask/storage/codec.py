"""Storage <-> bytes.

Layout: 4-byte magic, 1 version byte, then a zlib stream of compact JSON:

    {"slots": [[id, head, body], ...], "id_to_slot": [[id, slot], ...], "dirty": bool}
"""

from __future__ import annotations

import json
import zlib
from typing import Any

from minitask.errors import CorruptionError, SerializationError
from minitask.storage.model import Storage, Task

MAGIC = b"MTSK"
VERSION = 1
_HEADER_LEN = len(MAGIC) + 1


def encode(storage: Storage) -> bytes:
    payload = {
        "slots": [[t.id, t.head, t.body] for t in storage.slots],
        "id_to_slot": [[task_id, slot] for task_id, slot in sorted(storage.id_to_slot.items())],
        "dirty": storage.dirty,
    }
    try:
        raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        compressed = zlib.compress(raw, level=9)
    except (TypeError, ValueError, UnicodeEncodeError, zlib.error) as exc:
        raise SerializationError(f"failed to serialise tasks: {exc}") from exc
    return MAGIC + bytes([VERSION]) + compressed


def _expect(cond: bool, message: str) -> None:
    if not cond:
        raise CorruptionError(message)


def _decode_task(entry: Any) -> Task:
    _expect(isinstance(entry, list) and len(entry) == 3, f"malformed slot entry: {entry!r}")
    task_id, head, body = entry
    _expect(
        type(task_id) is int and isinstance(head, str) and isinstance(body, str),
        f"malformed slot entry: {entry!r}",
    )
    return Task(task_id, head, body)


def decode(data: bytes) -> Storage:
    """Rebuild a Storage from encoded bytes. Any defect raises CorruptionError."""
    _expect(len(data) >= _HEADER_LEN, "storage file is truncated")
    _expect(data[: len(MAGIC)] == MAGIC, "storage file has an unknown format")
    version = data[len(MAGIC)]
    _expect(version == VERSION, f"unsupported storage version {version} (expected {VERSION})")

    try:
        raw = zlib.decompress(data[_HEADER_LEN:])
    except zlib.error as exc:
        raise CorruptionError(f"cannot decompress storage file: {exc}") from exc
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise CorruptionError(f"cannot parse storage file: {exc}") from exc

    _expect(isinstance(payload, dict), "storage payload is not an object")
    slots = payload.get("slots")
    index = payload.get("id_to_slot")
    dirty = payload.get("dirty", False)
    _expect(isinstance(slots, list) and slots, "storage payload has no slots")
    _expect(isinstance(index, list), "storage payload has no id index")
    _expect(isinstance(dirty, bool), "storage dirty flag is not a boolean")

    storage = Storage(capacity=len(slots))
    storage.slots = [_decode_task(entry) for entry in slots]
    for pair in index:
        _expect(
            isinstance(pair, list) and len(pair) == 2 and all(type(v) is int for v in pair),
            f"malformed index entry: {pair!r}",
        )
        task_id, slot = pair
        _expect(task_id not in storage.id_to_slot, f"duplicate task id {task_id}")
        storage.id_to_slot[task_id] = slot
    storage.dirty = dirty
    storage.check()
    return storage
