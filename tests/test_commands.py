# tests/test_commands.py

from __future__ import annotations

import pytest

from render_todo.cli.bootstrap import create_initial_state
from render_todo.cli.commands import CommandRegistry, registry
from render_todo.core.errors import AuthorizationError

from .fakes import ALICE, BOB


@pytest.fixture()
def state(settings):
    return create_initial_state(settings=settings)


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    seen: list[tuple[list[str], str]] = []

    def handler(state, args, rest):
        seen.append((args, rest))
        return "ok"

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x  y") == "ok"
    assert reg.handle(state, "/ALPHA") == "ok"
    assert seen == [(["x", "y"], "x  y"), ([], "")]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_mutations_need_login(state) -> None:
    assert "Not authorized" in registry.handle(state, "/add Buy milk")
    assert state.app.get_stats().total_tasks == 0


def test_session_flow(state) -> None:
    assert registry.handle(state, f"/login {ALICE}") == f"Signed in as {ALICE}."
    assert registry.handle(state, "/whoami") == ALICE

    assert registry.handle(state, "/add Buy milk") == "Added task #1."
    assert registry.handle(state, "/add Walk the dog") == "Added task #2."
    assert registry.handle(state, "/done 1") == "OK."

    listing = registry.handle(state, "/list")
    assert "[x] #1 Buy milk" in listing
    assert "[ ] #2 Walk the dog" in listing

    assert registry.handle(state, "/task 2") == "[ ] #2 Walk the dog"
    assert registry.handle(state, "/stats") == "Total tasks: 2\nUnique users: 1"

    assert registry.handle(state, "/delete 2") == "OK."
    assert registry.handle(state, "/task 2") == "Task not found."

    assert registry.handle(state, "/logout") == "Signed out."
    assert "Not authorized" in registry.handle(state, "/done 1")


def test_session_signs_only_current_account(state) -> None:
    registry.handle(state, f"/login {ALICE}")
    registry.handle(state, "/add mine")
    registry.handle(state, f"/login {BOB}")

    # Bob can read Alice's list but cannot touch it.
    assert "mine" in registry.handle(state, f"/list {ALICE}")
    assert state.auth.signers == {BOB}
    with pytest.raises(AuthorizationError):
        state.app.delete_task(1, ALICE)
    assert len(state.app.get_tasks(ALICE)) == 1


def test_render_command_uses_signed_in_viewer(state) -> None:
    assert "Connect Your Wallet" in registry.handle(state, "/render /tasks")

    registry.handle(state, f"/login {ALICE}")
    registry.handle(state, "/add Buy milk")
    out = registry.handle(state, "/render /tasks")
    assert "Buy milk" in out
    assert '"type":"task"' in registry.handle(state, "/render /json")
    assert "Welcome" in registry.handle(state, "/render")


def test_tx_command_runs_rendered_links(state) -> None:
    registry.handle(state, f"/login {ALICE}")
    assert registry.handle(state, '/tx add_task {"description":"from link"}') == "OK: 1"
    assert registry.handle(state, '/tx tx:complete_task {"id":1}') == "OK."
    assert state.app.get_task(1, ALICE).completed is True

    assert registry.handle(state, '/tx delete_task {"id":"one"}').startswith("Error:")
    assert registry.handle(state, "/tx launch_rockets {}").startswith("Error: unknown method")


def test_bad_arguments_are_reported(state) -> None:
    registry.handle(state, f"/login {ALICE}")
    assert registry.handle(state, "/done abc").startswith("Error: not a task id")
    assert registry.handle(state, "/done") == "Usage: /done <id>"
    assert registry.handle(state, "/add " + "x" * 300).startswith("Error: description is longer")


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help")
    for name in ("login", "add", "done", "delete", "list", "render", "tx", "stats"):
        assert f"/{name} - " in text
