"""Tests for build logging setup and the JSONL formatter."""

import json
import logging
import sys
from pathlib import Path

from devblog.config import LoggingConfig
from devblog.utils.logging import JsonlFormatter, close_logging, log_event, setup_logging


def _record(message: str, **extra) -> logging.LogRecord:
    logger = logging.getLogger("devblog.test")
    return logger.makeRecord("devblog.test", logging.INFO, __file__, 1, message, None, None, extra=extra)


def test_jsonl_formatter_lifts_event_fields():
    line = JsonlFormatter().format(_record("Page written", event="page_written", entry_id="post", path=Path("a")))

    payload = json.loads(line)
    assert payload["message"] == "Page written"
    assert payload["level"] == "INFO"
    assert payload["event"] == "page_written"
    assert payload["entry_id"] == "post"
    assert payload["path"] == "a"
    assert "lineno" not in payload
    assert "taskName" not in payload


def test_jsonl_formatter_includes_exception_text():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.getLogger("devblog.test").makeRecord(
            "devblog.test", logging.ERROR, __file__, 1, "Build failed", None, sys.exc_info()
        )

    payload = json.loads(JsonlFormatter().format(record))
    assert payload["level"] == "ERROR"
    assert "ValueError: boom" in payload["error"]


def test_setup_logging_writes_events_to_log_dir(tmp_path: Path):
    cfg = LoggingConfig(console=False, file=True, level="debug")
    log_dir = tmp_path / "logs"

    logger = setup_logging(cfg, log_dir)
    log_event(logger, "Build start", event="build_start")
    close_logging(logger)

    assert logger.level == logging.DEBUG
    lines = (log_dir / "build.jsonl").read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["build_start"]


def test_setup_logging_without_file_adds_no_handlers(tmp_path: Path):
    logger = setup_logging(LoggingConfig(console=False, file=False, level="bogus"), tmp_path / "logs")

    assert logger.handlers == []
    assert logger.level == logging.INFO
    assert not (tmp_path / "logs").exists()


def test_log_event_ignores_missing_logger():
    log_event(None, "nothing", event="noop")
