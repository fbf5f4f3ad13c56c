"""Open a task in the editor and apply the result."""

from __future__ import annotations

from typing import Any

from minitask import editor as editor_bridge
from minitask.errors import EditorError
from minitask.storage.model import Storage


def get_task(store: Storage, task_id: int, editor: str | None) -> dict[str, Any]:
    """Edit task_id in place.

    Unknown ids raise NotFound before the editor is checked. There is no
    fallback editor here: an unset editor is an EditorError. Emptying the
    file deletes the task (and renumbers the rest); saving it unchanged is a
    no-op.
    """
    task = store.get(task_id)
    if not editor:
        raise EditorError("Env variable EDITOR not specified")
    lines = editor_bridge.edit(editor, task)
    status = store.replace(task_id, lines)
    result: dict[str, Any] = {"status": status, "id": task_id}
    if status != "deleted":
        current = store.get(task_id)
        result["head"] = current.head
        result["body"] = current.body
    return result
