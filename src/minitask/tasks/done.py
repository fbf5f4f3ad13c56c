"""Mark tasks done: delete by id and renumber what remains."""

from __future__ import annotations

from typing import Any

from minitask.storage.model import Storage


def done_tasks(store: Storage, ids: list[int]) -> dict[str, Any]:
    """Delete a batch of pre-delete ids.

    Unknown ids are reported per id and never block the others.
    """
    outcomes = store.delete(ids)
    return {
        "results": [
            {"id": task_id, "status": "done" if deleted else "not_found"}
            for task_id, deleted in outcomes
        ],
        "remaining": store.count,
    }
