"""External editor bridge: a task becomes a scratch file and comes back as lines.

The first line of the file is the head; everything after it is the body.
An emptied file means the task should be deleted.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile

from minitask.errors import EditorError
from minitask.storage.model import Task

log = logging.getLogger(__name__)


def render(task: Task | None) -> str:
    if task is None:
        return ""
    return f"{task.head}\n{task.body}"


def parse(text: str) -> list[str]:
    return text.splitlines()


def run_editor(editor: str, initial_text: str = "") -> str:
    """Open editor on a fresh scratch file seeded with initial_text; return what was saved.

    Blocks until the editor exits. The scratch file is removed on every path.
    """
    argv = shlex.split(editor)
    if not argv:
        raise EditorError("Editor command is empty")

    fd, path = tempfile.mkstemp(prefix="minitask-", suffix=".txt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(initial_text)

        log.debug("launching editor: %s %s", editor, path)
        try:
            proc = subprocess.run(argv + [path])
        except OSError as exc:
            raise EditorError(f"cannot launch editor '{editor}': {exc}") from exc
        if proc.returncode != 0:
            raise EditorError(f"{editor} exited with non zero status ({proc.returncode})")

        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise EditorError(f"cannot read edited task: {exc}") from exc
    finally:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass


def edit(editor: str, task: Task | None = None) -> list[str]:
    """Run an editor session for task (or a blank one) and return the resulting lines."""
    return parse(run_editor(editor, render(task)))
