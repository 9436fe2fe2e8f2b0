from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Task

DONE_MARK = "〇"
OPEN_MARK = "×"
EMPTY_CAPTION = "(no tasks yet)"


def done_marker(is_done: bool) -> str:
    return DONE_MARK if is_done else OPEN_MARK


def build_table(tasks: Iterable[Task]) -> Table:
    """Project tasks onto an aligned table: id, title, description, done."""
    table = Table(show_lines=False, header_style="bold")
    table.add_column("id", style="bold underline green", no_wrap=True)
    table.add_column("title", style="bold green")
    table.add_column("description", style="bold green")
    table.add_column("done", style="bold green", justify="center")
    rows = 0
    for task in tasks:
        # Text() keeps user content from being parsed as rich markup
        table.add_row(
            Text(task.id),
            Text(task.title),
            Text(task.description),
            Text(done_marker(task.is_done)),
        )
        rows += 1
    if rows == 0:
        table.caption = EMPTY_CAPTION
        table.caption_style = "dim"
    return table


def render_tasks(tasks: Iterable[Task], console: Console | None = None) -> None:
    (console or Console()).print(build_table(tasks))


__all__ = ["DONE_MARK", "OPEN_MARK", "EMPTY_CAPTION", "done_marker", "build_table", "render_tasks"]
