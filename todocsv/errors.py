from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class ErrorKind(StrEnum):
    IO = "io"
    DECODE = "decode"
    NOT_FOUND = "not_found"
    ID_EXHAUSTED = "id_exhausted"


class TodoError(Exception):
    """Base class for every failure the task store reports to its caller.

    Callers branch on ``kind`` (or the concrete subclass) rather than on the
    message text. The CLI is the only place that turns these into output.
    """

    kind: ErrorKind


class StorageIOError(TodoError):
    """The backing file could not be read or written."""

    kind = ErrorKind.IO

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class DecodeError(TodoError):
    """The backing file exists but its content is not a valid task table."""

    kind = ErrorKind.DECODE

    def __init__(self, path: Path | str, line: int, reason: str) -> None:
        self.path = Path(path)
        self.line = line
        self.reason = reason
        super().__init__(f"{self.path}:{line}: {reason}")


class NotFoundError(TodoError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"task not found: {task_id}")


class IdExhaustedError(TodoError):
    kind = ErrorKind.ID_EXHAUSTED

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"could not generate a unique task id after {attempts} attempts")


__all__ = [
    "ErrorKind",
    "TodoError",
    "StorageIOError",
    "DecodeError",
    "NotFoundError",
    "IdExhaustedError",
]
