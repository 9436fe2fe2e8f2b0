from __future__ import annotations

import contextlib
import csv
import io
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from .errors import DecodeError, StorageIOError
from .models import Task

HEADER: tuple[str, ...] = ("id", "title", "description", "is_done")
_TRUE = "true"
_FALSE = "false"


def _encode_bool(value: bool) -> str:
    return _TRUE if value else _FALSE


def _decode_bool(raw: str, *, source: Path, line: int) -> bool:
    if raw == _TRUE:
        return True
    if raw == _FALSE:
        return False
    raise DecodeError(source, line, f"is_done must be '{_TRUE}' or '{_FALSE}', got {raw!r}")


def encode(tasks: Iterable[Task]) -> str:
    """Serialize tasks, in order, as CSV text with a header row."""
    buf = io.StringIO()
    # CRLF terminator makes the writer quote any field holding \r or \n
    writer = csv.writer(buf, lineterminator="\r\n")
    writer.writerow(HEADER)
    for task in tasks:
        writer.writerow([task.id, task.title, task.description, _encode_bool(task.is_done)])
    return buf.getvalue()


def decode(text: str, *, source: Path | str = "<memory>") -> list[Task]:
    """Parse CSV text produced by ``encode``.

    An empty document is an empty collection. Any malformed row aborts the
    whole read; no partial list is ever returned.
    """
    src = Path(source)
    if not text.strip():
        return []

    reader = csv.reader(io.StringIO(text, newline=""))
    tasks: list[Task] = []
    seen: set[str] = set()
    header_checked = False
    try:
        for row in reader:
            line = reader.line_num
            if not row:
                continue
            if not header_checked:
                if tuple(row) != HEADER:
                    raise DecodeError(src, line, f"unexpected header {row!r}")
                header_checked = True
                continue
            if len(row) != len(HEADER):
                raise DecodeError(
                    src, line, f"expected {len(HEADER)} fields, found {len(row)}"
                )
            task_id, title, description, raw_done = row
            if task_id in seen:
                raise DecodeError(src, line, f"duplicate task id {task_id!r}")
            try:
                task = Task(
                    id=task_id,
                    title=title,
                    description=description,
                    is_done=_decode_bool(raw_done, source=src, line=line),
                )
            except ValidationError as e:
                raise DecodeError(src, line, e.errors()[0]["msg"]) from e
            seen.add(task_id)
            tasks.append(task)
    except csv.Error as e:
        raise DecodeError(src, reader.line_num, str(e)) from e
    return tasks


def read_tasks(path: Path) -> list[Task]:
    """Load every task from ``path``; a missing file yields an empty list."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except FileNotFoundError:
        return []
    except UnicodeDecodeError as e:
        raise DecodeError(path, 0, f"not valid UTF-8: {e.reason}") from e
    except OSError as e:
        raise StorageIOError(path, e.strerror or str(e)) from e
    return decode(text, source=path)


def write_tasks(path: Path, tasks: Iterable[Task]) -> None:
    """Replace the content of ``path`` with ``tasks``.

    Writes a sibling temp file and renames it over the target, so readers see
    either the old content or the new content, never a truncated file.
    """
    payload = encode(tasks)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise StorageIOError(path, e.strerror or str(e)) from e
    finally:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)


__all__ = ["HEADER", "encode", "decode", "read_tasks", "write_tasks"]
