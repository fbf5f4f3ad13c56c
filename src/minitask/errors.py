"""Error taxonomy: every failure the CLI reports to the user.

CorruptionError never reaches the user as a fatal error; the persistence
layer recovers from it by backing up the file and starting clean.
"""

from __future__ import annotations


class MinitaskError(Exception):
    """Base class. The message is shown to the user as-is."""


class NotFound(MinitaskError):
    """Raised when a task id is not in the index."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with id {task_id} not found")


class CorruptionError(MinitaskError):
    """Raised when persisted bytes cannot be decoded."""


class SerializationError(MinitaskError):
    """Raised when in-memory storage cannot be encoded."""


class StorageIOError(MinitaskError):
    """Raised on filesystem failures while writing the storage file."""


class EditorError(MinitaskError):
    """Raised when the editor is not configured, missing, or exits non-zero."""


class InvalidInput(MinitaskError):
    """Raised when submitted task content is empty where content is required."""


class ConfigError(MinitaskError):
    """Raised when the YAML config file is unreadable or malformed."""
