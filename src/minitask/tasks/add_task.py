"""Create a task from arguments or from an editor session."""

from __future__ import annotations

from typing import Any

from minitask import editor as editor_bridge
from minitask.errors import InvalidInput
from minitask.storage.model import Storage, split_lines


def add_task(store: Storage, head: str | None, body: str | None = None) -> dict[str, Any]:
    """Add a task directly. Blank head and body is rejected and leaves the store untouched."""
    task_id = store.add(head or "", body or "")
    if task_id is None:
        raise InvalidInput("Task is empty: provide a head or a body")
    return {"status": "added", "id": task_id}


def compose_task(store: Storage, editor: str) -> dict[str, Any]:
    """Write a new task in the editor. Saving an empty file aborts without error."""
    lines = editor_bridge.edit(editor)
    head, body = split_lines(lines)
    task_id = store.add(head, body)
    if task_id is None:
        return {"status": "aborted"}
    return {"status": "added", "id": task_id}
