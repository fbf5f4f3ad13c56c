"""Task commands: new, list, get, done.

Each operation takes a loaded Storage and returns a result dict for
minitask.output. Saving is the caller's job (see storage.session).
"""

from .add_task import add_task, compose_task
from .list_tasks import list_tasks
from .get_task import get_task
from .done import done_tasks

__all__: list[str] = [
    "add_task",
    "compose_task",
    "done_tasks",
    "get_task",
    "list_tasks",
]
