from __future__ import annotations

import datetime as dt
import json
import logging
import os
import sys
from typing import Any

ROOT_LOGGER = "todocsv"


def _iso_now() -> str:
    return dt.datetime.now(dt.UTC).isoformat()


def _build_base_payload(record: logging.LogRecord) -> dict[str, Any]:
    return {
        "ts": _iso_now(),
        "level": record.levelname.lower(),
        "logger": record.name,
        "msg": record.getMessage(),
    }


def _add_standard_extras(payload: dict[str, Any], record: logging.LogRecord) -> None:
    # Include standardized fields passed via ``extra=``
    for attr in ("event", "op", "task_id", "path", "count", "kind", "attributes"):
        if hasattr(record, attr):
            value = getattr(record, attr)
            payload[attr] = str(value) if attr == "path" else value


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = _build_base_payload(record)
        _add_standard_extras(payload, record)
        # Attach error fields if present, keeping the JSON single-line
        if record.exc_info:
            exc_type, exc_value, _tb = record.exc_info
            payload["err_type"] = getattr(exc_type, "__name__", str(exc_type))
            if exc_value is not None:
                payload["err"] = str(exc_value)
            payload["stack"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleLogFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        ts = _iso_now()[11:19]  # HH:MM:SS
        parts: list[str] = [ts, record.levelname.upper(), record.name]
        event = getattr(record, "event", None)
        if event:
            parts.append(str(event))
        task_id = getattr(record, "task_id", None)
        if task_id:
            parts.append(f"task={task_id}")
        count = getattr(record, "count", None)
        if count is not None:
            parts.append(f"count={count}")
        parts.append("-")
        parts.append(record.getMessage())
        return " ".join(parts)


def choose_formatter(format_pref: str | None = None) -> logging.Formatter:
    pref = (format_pref or os.getenv("LOG_FORMAT") or "").strip().lower() or "auto"
    if pref == "auto":
        try:
            if sys.stderr.isatty():
                return ConsoleLogFormatter()
        except Exception:  # noqa: BLE001
            pass
        return JsonLogFormatter()
    if pref == "console":
        return ConsoleLogFormatter()
    return JsonLogFormatter()


def parse_level(value: str | None, default: int = logging.WARNING) -> int:
    name = (value or "").strip().upper()
    if not name:
        return default
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else default


def _apply_module_levels(root: str, base_level: int) -> None:
    """Apply ``LOG_MODULE_LEVELS`` (``prefix=LEVEL,...``) below ``root``."""
    overrides = (os.getenv("LOG_MODULE_LEVELS") or "").strip()
    if not overrides:
        return
    for entry in overrides.split(","):
        entry = entry.strip()
        if not entry or "=" not in entry:
            continue
        prefix, lvl = entry.split("=", 1)
        prefix = prefix.strip()
        if prefix == root or prefix.startswith(root + "."):
            logging.getLogger(prefix).setLevel(parse_level(lvl, base_level))


def configure_logging(
    level: str | None = None,
    format_pref: str | None = None,
    name: str = ROOT_LOGGER,
) -> logging.Logger:
    """Bind the package logger to a single stderr handler.

    - Replaces existing handlers so repeated calls never double-log.
    - stdout is left to command output (tables, confirmations).
    - Module loggers (``todocsv.store`` ...) propagate here.
    """
    logger = logging.getLogger(name)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(choose_formatter(format_pref))
    logger.addHandler(handler)
    base_level = parse_level(level or os.getenv("LOG_LEVEL"))
    logger.setLevel(base_level)
    logger.propagate = False
    _apply_module_levels(name, base_level)
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = [
    "ROOT_LOGGER",
    "JsonLogFormatter",
    "ConsoleLogFormatter",
    "choose_formatter",
    "parse_level",
    "configure_logging",
    "get_logger",
]
