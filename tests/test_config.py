# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from render_todo.config import Settings
from render_todo.render.common import DEFAULT_THEME_CONTRACT

_VARS = (
    "TODO_APP_NAME",
    "TODO_LOG_LEVEL",
    "TODO_DATA_DIR",
    "TODO_STORAGE",
    "TODO_DB_PATH",
    "TODO_THEME_CONTRACT",
    "TODO_AUTH_MODE",
    "TODO_ACCOUNT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.db_path == Path(".local/render-todo") / "ledger.sqlite3"
    assert s.theme_contract == DEFAULT_THEME_CONTRACT
    assert s.auth_mode == "session"
    assert s.default_account is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_STORAGE", " Memory ")
    monkeypatch.setenv("TODO_THEME_CONTRACT", "CXYZ")
    monkeypatch.setenv("TODO_AUTH_MODE", "open")
    monkeypatch.setenv("TODO_ACCOUNT", "GACC")

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.db_path == tmp_path / "ledger.sqlite3"
    assert s.storage_backend == "memory"
    assert s.theme_contract == "CXYZ"
    assert s.auth_mode == "open"
    assert s.default_account == "GACC"


def test_unknown_choices_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TODO_STORAGE", "postgres")
    monkeypatch.setenv("TODO_AUTH_MODE", "none")
    monkeypatch.setenv("TODO_THEME_CONTRACT", "   ")

    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.auth_mode == "session"
    assert s.theme_contract == DEFAULT_THEME_CONTRACT
