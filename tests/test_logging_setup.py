# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from render_todo.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("render_todo.app", logging.DEBUG, True),
        ("render_todo.storage.backends", logging.INFO, False),
        ("render_todo.storage.accessor", logging.WARNING, True),
        ("render_todo.tasks.task_api", logging.DEBUG, False),
        ("render_todo.tasks.task_store", logging.INFO, True),
        ("py.warnings", logging.WARNING, False),
        ("sqlite3", logging.WARNING, False),
        ("sqlite3", logging.ERROR, True),
    ],
)
def test_console_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


@pytest.fixture()
def restore_root_handlers():
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        ours = isinstance(h, logging.FileHandler) or any(isinstance(f, _ConsoleNoiseFilter) for f in h.filters)
        if ours:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file(tmp_path: Path, restore_root_handlers) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("render_todo.storage.backends").debug("quiet write")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "render-todo.log"
    assert "quiet write" in log_file.read_text(encoding="utf-8")
