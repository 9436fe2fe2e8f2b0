"""todocsv - a command-line task tracker backed by a CSV file."""

from __future__ import annotations

from .errors import (
    DecodeError,
    ErrorKind,
    IdExhaustedError,
    NotFoundError,
    StorageIOError,
    TodoError,
)
from .models import Task
from .store import TaskStore

__version__ = "0.1.0"

__all__ = [
    "Task",
    "TaskStore",
    "ErrorKind",
    "TodoError",
    "StorageIOError",
    "DecodeError",
    "NotFoundError",
    "IdExhaustedError",
]
