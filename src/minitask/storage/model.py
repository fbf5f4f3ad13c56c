"""In-memory task storage: a slot buffer plus an id -> slot index.

Slots are pre-allocated and grow by doubling. Ids are dense (1..count) and
are renumbered after every delete batch, so an id is also the task's display
position. Slot positions never move; only the ids stored in them change.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterable, Iterator

from minitask.defaults import INITIAL_CAPACITY
from minitask.errors import CorruptionError, NotFound


@dataclass(frozen=True)
class Task:
    id: int = 0
    head: str = ""
    body: str = ""

    @property
    def is_placeholder(self) -> bool:
        return self == EMPTY


# Value held by every slot not referenced from the index
EMPTY = Task()


def split_lines(lines: list[str]) -> tuple[str, str]:
    """First line is the head, the rest rejoined with newlines is the body.

    Trailing blank lines are dropped so a rendered task parses back unchanged.
    """
    if not lines:
        return "", ""
    return lines[0], "\n".join(lines[1:]).rstrip("\n")


class Storage:
    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        self.slots: list[Task] = [EMPTY] * max(capacity, 1)
        self.id_to_slot: dict[int, int] = {}
        self.dirty = False

    # ---- read access ----

    def __len__(self) -> int:
        return len(self.id_to_slot)

    @property
    def count(self) -> int:
        return len(self.id_to_slot)

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.id_to_slot

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks())

    def tasks(self) -> list[Task]:
        """All tasks in id order."""
        return [self.slots[self.id_to_slot[i]] for i in sorted(self.id_to_slot)]

    def get(self, task_id: int) -> Task:
        slot = self.id_to_slot.get(task_id)
        if slot is None:
            raise NotFound(task_id)
        return self.slots[slot]

    # ---- slot management ----

    def allocate_slot(self) -> int:
        """Return a slot index nobody references, doubling the buffer if full.

        Linear scan, so O(capacity) in the worst case.
        """
        used = set(self.id_to_slot.values())
        for index in range(len(self.slots)):
            if index not in used:
                return index
        old = len(self.slots)
        self.slots.extend([EMPTY] * old)
        return old

    # ---- mutations ----

    def add(self, head: str, body: str = "") -> int | None:
        """Store a new task and return its id; None (no-op) when both fields are blank."""
        head = (head or "").strip()
        body = (body or "").strip()
        if not head and not body:
            return None
        new_id = self.count + 1
        slot = self.allocate_slot()
        self.slots[slot] = Task(new_id, head, body)
        self.id_to_slot[new_id] = slot
        self.dirty = True
        return new_id

    def delete(self, ids: Iterable[int]) -> list[tuple[int, bool]]:
        """Delete a batch of ids, reporting (id, deleted) for each in order.

        Ids are pre-delete ids; renumbering happens once after the batch.
        """
        outcomes: list[tuple[int, bool]] = []
        for task_id in ids:
            slot = self.id_to_slot.pop(task_id, None)
            if slot is None:
                outcomes.append((task_id, False))
                continue
            self.slots[slot] = EMPTY
            self.dirty = True
            outcomes.append((task_id, True))
        if any(deleted for _, deleted in outcomes):
            self.renumber()
        return outcomes

    def renumber(self) -> None:
        """Close id gaps: reassign 1..count in order of current id, keeping slots."""
        remapped: dict[int, int] = {}
        for new_id, old_id in enumerate(sorted(self.id_to_slot), start=1):
            slot = self.id_to_slot[old_id]
            if new_id != old_id:
                self.slots[slot] = dataclasses.replace(self.slots[slot], id=new_id)
                self.dirty = True
            remapped[new_id] = slot
        self.id_to_slot = remapped

    def update(self, task_id: int, head: str, body: str) -> bool:
        """Replace a task's text. Returns False and leaves dirty alone if nothing changed."""
        current = self.get(task_id)
        candidate = Task(task_id, head, body)
        if candidate == current:
            return False
        self.slots[self.id_to_slot[task_id]] = candidate
        self.dirty = True
        return True

    def replace(self, task_id: int, lines: list[str]) -> str:
        """Apply edited lines to a task: no lines deletes it.

        Returns "deleted", "updated" or "unchanged".
        """
        if task_id not in self.id_to_slot:
            raise NotFound(task_id)
        if not lines:
            self.delete([task_id])
            return "deleted"
        head, body = split_lines(lines)
        return "updated" if self.update(task_id, head, body) else "unchanged"

    # ---- integrity ----

    def check(self) -> None:
        """Raise CorruptionError if any index/slot invariant is broken."""
        ids = sorted(self.id_to_slot)
        if ids != list(range(1, len(ids) + 1)):
            raise CorruptionError(f"task ids are not contiguous: {ids}")
        slots = list(self.id_to_slot.values())
        if len(set(slots)) != len(slots):
            raise CorruptionError("two task ids share a slot")
        for task_id, slot in self.id_to_slot.items():
            if not 0 <= slot < len(self.slots):
                raise CorruptionError(f"task {task_id} points outside the slot buffer ({slot})")
            if self.slots[slot].id != task_id:
                raise CorruptionError(
                    f"slot {slot} holds task {self.slots[slot].id}, index says {task_id}"
                )
        referenced = set(slots)
        for index, task in enumerate(self.slots):
            if index not in referenced and not task.is_placeholder:
                raise CorruptionError(f"unreferenced slot {index} is not empty")
