from __future__ import annotations

import json
import logging
import sys
from typing import Any

import pytest

from todocsv.observability import (
    ConsoleLogFormatter,
    JsonLogFormatter,
    choose_formatter,
    configure_logging,
    get_logger,
    parse_level,
)


def _parse_json_lines(output: str) -> list[dict[str, Any]]:
    return [json.loads(line) for line in output.strip().splitlines() if line.strip()]


def test_json_logger_formats_extras_on_stderr(capsys: Any) -> None:
    logger = configure_logging("INFO", "json", name="todocsv-obs-test")
    logger.info("task added", extra={"event": "task_added", "task_id": "abc", "count": 3})

    captured = capsys.readouterr()
    assert captured.out == ""
    lines = _parse_json_lines(captured.err)
    assert len(lines) == 1
    rec = lines[0]
    assert rec["msg"] == "task added"
    assert rec["level"] == "info"
    assert rec["event"] == "task_added"
    assert rec["task_id"] == "abc"
    assert rec["count"] == 3


def test_json_formatter_includes_exception_fields() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord(
            "todocsv", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )
    rec = json.loads(JsonLogFormatter().format(record))
    assert rec["err_type"] == "ValueError"
    assert rec["err"] == "boom"
    assert "Traceback" in rec["stack"]


def test_console_formatter_is_compact() -> None:
    record = logging.LogRecord(
        "todocsv.store", logging.INFO, __file__, 1, "task removed", None, None
    )
    record.event = "task_removed"
    record.task_id = "abc"
    line = ConsoleLogFormatter().format(record)
    assert "INFO todocsv.store task_removed task=abc - task removed" in line


def test_level_threshold_filters(capsys: Any) -> None:
    logger = configure_logging("WARNING", "json", name="todocsv-obs-level")
    logger.info("hidden")
    logger.warning("shown")
    lines = _parse_json_lines(capsys.readouterr().err)
    assert [d["msg"] for d in lines] == ["shown"]


def test_reconfigure_does_not_duplicate_handlers() -> None:
    configure_logging("INFO", "json", name="todocsv-obs-dup")
    logger = configure_logging("INFO", "json", name="todocsv-obs-dup")
    assert len(logger.handlers) == 1


def test_module_level_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_MODULE_LEVELS", "todocsv-obs-mod.store=DEBUG,other=ERROR")
    configure_logging("WARNING", "json", name="todocsv-obs-mod")
    assert logging.getLogger("todocsv-obs-mod.store").level == logging.DEBUG
    assert logging.getLogger("other").level != logging.ERROR


def test_choose_formatter_and_parse_level() -> None:
    assert isinstance(choose_formatter("console"), ConsoleLogFormatter)
    assert isinstance(choose_formatter("json"), JsonLogFormatter)
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("nonsense") == logging.WARNING
    assert parse_level(None, logging.INFO) == logging.INFO


def test_get_logger_installs_root_handler_once() -> None:
    child = get_logger("todocsv.store")
    root = logging.getLogger("todocsv")
    assert child.name == "todocsv.store"
    assert len(root.handlers) == 1
    get_logger("todocsv.cli")
    assert len(root.handlers) == 1
