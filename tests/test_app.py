# tests/test_app.py

from __future__ import annotations

import pytest

from render_todo.app import TodoApp
from render_todo.cli.bootstrap import create_initial_state
from render_todo.core.auth import OpenAuthenticator, SessionAuthenticator
from render_todo.core.errors import AuthorizationError, UnknownMethodError
from render_todo.storage.accessor import Storage
from render_todo.storage.backends import MemoryBackend, SqliteBackend
from render_todo.tasks.task_api import parse_tx_target

from .fakes import ALICE, BOB


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ('tx:complete_task {"id":3}', ("complete_task", {"id": 3})),
        ('delete_task {"id":3}', ("delete_task", {"id": 3})),
        ("add_task", ("add_task", {})),
        ('  tx:add_task   {"description":"a b"} ', ("add_task", {"description": "a b"})),
    ],
)
def test_parse_tx_target(target: str, expected) -> None:
    assert parse_tx_target(target) == expected


@pytest.mark.parametrize("target", ["", "tx:", 'x {"id":', "x [1]"])
def test_parse_tx_target_rejects_garbage(target: str) -> None:
    with pytest.raises(ValueError):
        parse_tx_target(target)


def test_invoke_runs_entry_points(app) -> None:
    assert app.invoke("add_task", {"description": "via link"}, ALICE) == 1
    assert app.invoke("complete_task", {"id": 1}, ALICE) is None
    assert app.get_task(1, ALICE).completed is True
    assert app.invoke("delete_task", {"id": 1}, ALICE) is None
    assert app.get_tasks(ALICE) == []


@pytest.mark.parametrize(
    ("method", "args", "error"),
    [
        ("launch", {}, UnknownMethodError),
        ("add_task", {}, ValueError),
        ("add_task", {"description": 7}, ValueError),
        ("complete_task", {"id": "1"}, ValueError),
        ("complete_task", {"id": True}, ValueError),
        ("delete_task", {"id": -1}, ValueError),
    ],
)
def test_invoke_bad_calls_write_nothing(app, backend, method: str, args: dict, error) -> None:
    with pytest.raises(error):
        app.invoke(method, args, ALICE)
    assert backend.batches == []


def test_session_authenticator() -> None:
    auth = SessionAuthenticator()
    with pytest.raises(AuthorizationError):
        auth.require_auth(ALICE)

    auth.sign_in(ALICE)
    auth.require_auth(ALICE)
    with pytest.raises(AuthorizationError) as exc:
        auth.require_auth(BOB)
    assert exc.value.account == BOB

    auth.sign_out(ALICE)
    assert auth.signers == frozenset()
    with pytest.raises(ValueError):
        auth.sign_in("")


def test_open_authenticator_trusts_named_callers() -> None:
    auth = OpenAuthenticator()
    auth.require_auth(BOB)
    with pytest.raises(AuthorizationError):
        auth.require_auth("")


def test_real_authenticator_guards_other_accounts() -> None:
    auth = SessionAuthenticator({ALICE})
    app = TodoApp(Storage(MemoryBackend()), auth)

    app.add_task("mine", ALICE)
    with pytest.raises(AuthorizationError):
        app.add_task("not mine", BOB)
    with pytest.raises(AuthorizationError):
        app.complete_task(1, BOB)

    assert app.get_tasks(BOB) == []
    assert tuple(app.get_stats()) == (1, 1)


def test_bootstrap_sqlite_state(settings) -> None:
    state = create_initial_state(settings=settings)

    assert isinstance(state.app.storage.backend, SqliteBackend)
    assert settings.db_path.parent.is_dir()
    assert state.account is None
    assert isinstance(state.auth, SessionAuthenticator)


def test_bootstrap_memory_open_with_default_account(settings) -> None:
    settings.storage_backend = "memory"
    settings.auth_mode = "open"
    settings.default_account = ALICE

    state = create_initial_state(settings=settings)

    assert isinstance(state.app.storage.backend, MemoryBackend)
    assert isinstance(state.auth, OpenAuthenticator)
    assert state.account == ALICE
    assert state.app.add_task("hello", ALICE) == 1
    # Open mode trusts anyone who names an account.
    assert state.app.add_task("hi", BOB) == 1
