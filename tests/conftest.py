from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from todocsv.store import TaskStore


@pytest.fixture()
def todo_path(tmp_path: Path) -> Path:
    """Backing file under a directory that does not exist yet."""
    return tmp_path / "nested" / "todo" / "todo.csv"


@pytest.fixture()
def sequential_ids() -> Callable[[], str]:
    counter: Iterator[int] = itertools.count(1)
    return lambda: f"id{next(counter):06d}"


@pytest.fixture()
def store(todo_path: Path) -> TaskStore:
    return TaskStore(todo_path)


@pytest.fixture(autouse=True)
def _clean_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient LOG_* / TODO_FILE settings from leaking into tests."""
    for name in ("TODO_FILE", "LOG_LEVEL", "LOG_FORMAT", "LOG_MODULE_LEVELS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers bound to a previous test's captured stderr."""
    yield
    lg = logging.getLogger("todocsv")
    for h in list(lg.handlers):
        lg.removeHandler(h)
        h.close()
    lg.setLevel(logging.NOTSET)
    lg.propagate = True
