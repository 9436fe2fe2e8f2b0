from __future__ import annotations

import builtins
import logging
from collections.abc import Callable
from pathlib import Path

from .codec import read_tasks, write_tasks
from .errors import IdExhaustedError, NotFoundError
from .ids import generate_task_id
from .models import Task

MAX_ID_ATTEMPTS = 8

ADDED_MESSAGE = "The task was successfully added."
EDITED_MESSAGE = "The task was successfully edited."
REMOVED_MESSAGE = "The task was successfully removed."

logger = logging.getLogger(__name__)


class TaskStore:
    """File-backed task collection.

    Every operation starts from a fresh ``load()`` of the backing file and every
    mutation ends with a full rewrite of it, so the file stays the single source
    of truth between invocations.

    - The path is injected; nothing reads a global location
    - Errors (``StorageIOError``, ``DecodeError``, ``NotFoundError``) propagate
    - On ``NotFoundError`` the file is not rewritten
    """

    def __init__(self, path: Path | str, *, id_factory: Callable[[], str] | None = None) -> None:
        self._path = Path(path)
        self._id_factory = id_factory or generate_task_id
        self._tasks: builtins.list[Task] = []

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> builtins.list[Task]:
        tasks = read_tasks(self._path)
        self._tasks = tasks
        logger.debug(
            "tasks loaded",
            extra={"event": "store_load", "path": self._path, "count": len(tasks)},
        )
        return [t.model_copy() for t in tasks]

    def list(self) -> builtins.list[Task]:
        return self.load()

    def get(self, task_id: str) -> Task:
        self.load()
        return self._find(task_id).model_copy()

    def add(self, title: str, description: str) -> str:
        self.load()
        task = Task(id=self._new_id(), title=title, description=description, is_done=False)
        self._tasks.append(task)
        self._persist()
        logger.info(
            "task added",
            extra={"event": "task_added", "task_id": task.id, "count": len(self._tasks)},
        )
        return ADDED_MESSAGE

    def edit(
        self,
        task_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        is_done: bool | None = None,
    ) -> str:
        self.load()
        task = self._find(task_id)
        if title is not None:
            task.title = title
        if description is not None:
            task.description = description
        if is_done is not None:
            task.is_done = is_done
        self._persist()
        logger.info("task edited", extra={"event": "task_edited", "task_id": task_id})
        return EDITED_MESSAGE

    def remove(self, task_id: str) -> str:
        self.load()
        before = len(self._tasks)
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) != before - 1:
            raise NotFoundError(task_id)
        self._tasks = remaining
        self._persist()
        logger.info(
            "task removed",
            extra={"event": "task_removed", "task_id": task_id, "count": len(remaining)},
        )
        return REMOVED_MESSAGE

    # ----------------------------
    # Internals
    # ----------------------------
    def _find(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def _new_id(self) -> str:
        existing = {t.id for t in self._tasks}
        for attempt in range(1, MAX_ID_ATTEMPTS + 1):
            candidate = self._id_factory()
            if candidate not in existing:
                return candidate
            logger.warning(
                "task id collision",
                extra={
                    "event": "id_collision",
                    "task_id": candidate,
                    "attributes": {"attempt": attempt},
                },
            )
        raise IdExhaustedError(MAX_ID_ATTEMPTS)

    def _persist(self) -> None:
        write_tasks(self._path, self._tasks)


__all__ = [
    "ADDED_MESSAGE",
    "EDITED_MESSAGE",
    "MAX_ID_ATTEMPTS",
    "REMOVED_MESSAGE",
    "TaskStore",
]
