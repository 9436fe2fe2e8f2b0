from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_TODO_FILE = "/tmp/todo/todo.csv"


@dataclass(slots=True)
class TodoConfig:
    todo_file: Path
    log_level: str
    log_format: str


def _resolve_path(raw: str) -> Path:
    return Path(os.path.expanduser(raw.strip()))


def load_config(
    env: dict[str, str] | None = None,
    *,
    file: str | None = None,
    log_level: str | None = None,
) -> TodoConfig:
    """Resolve configuration once per process.

    Precedence for each value: explicit argument, then ``env`` overrides, then
    ``os.environ``, then the built-in default.
    """
    e: dict[str, Any] = dict(os.environ)
    if env:
        e.update(env)
    raw_file = file or (e.get("TODO_FILE") or "").strip() or DEFAULT_TODO_FILE
    level = log_level or (e.get("LOG_LEVEL") or "").strip() or "WARNING"
    fmt = (e.get("LOG_FORMAT") or "").strip().lower() or "auto"
    return TodoConfig(
        todo_file=_resolve_path(raw_file),
        log_level=level.upper(),
        log_format=fmt,
    )


__all__ = ["DEFAULT_TODO_FILE", "TodoConfig", "load_config"]
