"""Task storage: slot model, byte codec, and the task file on disk."""

from .model import EMPTY, Storage, Task, split_lines
from .codec import decode, encode
from .persistence import load, save, session

__all__: list[str] = [
    "EMPTY",
    "Storage",
    "Task",
    "decode",
    "encode",
    "load",
    "save",
    "session",
    "split_lines",
]
