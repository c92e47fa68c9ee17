# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from render_todo.app import TodoApp
from render_todo.storage.accessor import Storage

from .fakes import FakeAuthenticator, RecordingBackend


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap code.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="render-todo-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        storage_backend="sqlite",
        db_path=tmp_path / "data" / "ledger.sqlite3",
        theme_contract="CTHEME",
        auth_mode="session",
        default_account=None,
    )


@pytest.fixture()
def auth() -> FakeAuthenticator:
    return FakeAuthenticator()


@pytest.fixture()
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture()
def storage(backend: RecordingBackend) -> Storage:
    return Storage(backend)


@pytest.fixture()
def app(storage: Storage, auth: FakeAuthenticator) -> TodoApp:
    """
    TodoApp over an in-memory backend and a permissive fake authenticator.

    Storage, routing and rendering are all real: their behavior together is
    what these tests check.
    """
    return TodoApp(storage, auth, theme_contract="CTHEME")
