"""List every task in id order."""

from __future__ import annotations

from typing import Any

from minitask.storage.model import Storage


def list_tasks(store: Storage) -> dict[str, Any]:
    return {
        "tasks": [
            {"id": t.id, "head": t.head, "body": t.body}
            for t in store.tasks()
        ],
    }
