from __future__ import annotations

import argparse
import sys
from collections.abc import Callable

from .config import TodoConfig, load_config
from .errors import TodoError
from .observability import configure_logging, get_logger
from .render import render_tasks
from .store import TaskStore

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def _parse_bool_arg(value: str) -> bool:
    v = value.strip().lower()
    if v == "true":
        return True
    if v == "false":
        return False
    raise argparse.ArgumentTypeError(f"expected 'true' or 'false', got {value!r}")


def cmd_add(store: TaskStore, args: argparse.Namespace) -> None:
    print(store.add(args.title, args.description))


def cmd_edit(store: TaskStore, args: argparse.Namespace) -> None:
    print(
        store.edit(
            args.id,
            title=args.title,
            description=args.description,
            is_done=args.is_done,
        )
    )


def cmd_remove(store: TaskStore, args: argparse.Namespace) -> None:
    print(store.remove(args.id))


def cmd_list(store: TaskStore, args: argparse.Namespace) -> None:
    render_tasks(store.list())


Handler = Callable[[TaskStore, argparse.Namespace], None]

# Verb used in "Error <verb> task(s): ..." messages
_ERROR_VERBS: dict[str, str] = {
    "add": "adding task",
    "edit": "editing task",
    "remove": "removing task",
    "list": "listing tasks",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("todocsv", description="Simple todo CLI")
    parser.add_argument(
        "--file",
        help="Path to the tasks CSV file (default: $TODO_FILE or /tmp/todo/todo.csv)",
    )
    parser.add_argument(
        "--log-level", choices=["debug", "info", "warning", "error"], default=None
    )
    sub = parser.add_subparsers(dest="cmd")

    p_add = sub.add_parser("add", help="Add todo task")
    p_add.add_argument("-t", "--title", required=True)
    p_add.add_argument("-d", "--description", required=True)
    p_add.set_defaults(func=cmd_add)

    p_edit = sub.add_parser("edit", help="Edit todo task")
    p_edit.add_argument("id")
    p_edit.add_argument("-t", "--title")
    p_edit.add_argument("-d", "--description")
    p_edit.add_argument("-i", "--is-done", type=_parse_bool_arg, metavar="{true,false}")
    p_edit.set_defaults(func=cmd_edit)

    p_remove = sub.add_parser("remove", help="Remove todo task")
    p_remove.add_argument("id")
    p_remove.set_defaults(func=cmd_remove)

    p_list = sub.add_parser("list", help="Show todo tasks")
    p_list.set_defaults(func=cmd_list)

    return parser


def run(args: argparse.Namespace, cfg: TodoConfig) -> int:
    """Execute one parsed command against a store bound to ``cfg.todo_file``.

    Returns the process exit code. This is the only place core errors are
    turned into user-facing text.
    """
    logger = get_logger("todocsv.cli")
    store = TaskStore(cfg.todo_file)
    handler: Handler = args.func
    try:
        handler(store, args)
    except TodoError as e:
        sys.stderr.write(f"Error {_ERROR_VERBS[args.cmd]}: {e}\n")
        logger.error(
            "command failed",
            extra={
                "event": "command_failed",
                "op": args.cmd,
                "kind": e.kind.value,
                "path": cfg.todo_file,
            },
        )
        return EXIT_ERROR
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config(file=args.file, log_level=args.log_level)
    configure_logging(cfg.log_level, cfg.log_format)

    if args.cmd is None:
        parser.print_help()
        raise SystemExit(EXIT_USAGE)

    raise SystemExit(run(args, cfg))


if __name__ == "__main__":
    main()
