# src/render_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.errors import AuthorizationError, TodoError
from ..core.state import AppState
from ..tasks.task_api import parse_tx_target
from ..tasks.task_models import Task

# (state, args, rest) -> reply. `rest` is the untokenized text after the command name.
CommandHandler = Callable[[AppState, list[str], str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, /render, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Call failures the user can fix (authorization, bad arguments) come back
        as replies; anything else propagates to the connector.
        """
        if not line.startswith("/"):
            return None

        head, _, rest = line[1:].strip().partition(" ")
        if not head:
            return "Empty command. Use /help to list available commands."

        name = head.lower()
        rest = rest.strip()
        args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args, rest)
        except AuthorizationError:
            return "Not authorized. Use /login <account> first."
        except (TodoError, ValueError) as e:
            logger.debug("Command /%s failed: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(raw: str) -> int:
    try:
        task_id = int(raw)
    except ValueError:
        raise ValueError(f"not a task id: {raw!r}") from None
    if task_id < 0:
        raise ValueError(f"not a task id: {raw!r}")
    return task_id


def _require_account(state: AppState) -> str:
    if state.account is None:
        raise AuthorizationError("")
    return state.account


def _format_task(t: Task) -> str:
    mark = "x" if t.completed else " "
    return f"[{mark}] #{t.id} {t.description}"


def cmd_help(state: AppState, args: list[str], rest: str) -> str:
    return registry.build_help()


def cmd_login(state: AppState, args: list[str], rest: str) -> str:
    if not args:
        return "Usage: /login <account>"
    state.sign_in(args[0])
    return f"Signed in as {args[0]}."


def cmd_logout(state: AppState, args: list[str], rest: str) -> str:
    if state.account is None:
        return "Not signed in."
    state.sign_out()
    return "Signed out."


def cmd_whoami(state: AppState, args: list[str], rest: str) -> str:
    return state.account or "Not signed in."


def cmd_add(state: AppState, args: list[str], rest: str) -> str:
    """
    /add <description>   -> add a task as the signed-in account
    """
    if not rest:
        return "Usage: /add <description>"
    task_id = state.app.add_task(rest, _require_account(state))
    return f"Added task #{task_id}."


def cmd_done(state: AppState, args: list[str], rest: str) -> str:
    if len(args) != 1:
        return "Usage: /done <id>"
    state.app.complete_task(_parse_id(args[0]), _require_account(state))
    return "OK."


def cmd_delete(state: AppState, args: list[str], rest: str) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"
    state.app.delete_task(_parse_id(args[0]), _require_account(state))
    return "OK."


def cmd_list(state: AppState, args: list[str], rest: str) -> str:
    """
    /list            -> tasks of the signed-in account
    /list <account>  -> tasks of any account (reads are public)
    """
    account = args[0] if args else state.account
    if account is None:
        return "Usage: /list <account> (or /login first)"
    tasks = state.app.get_tasks(account)
    if not tasks:
        return f"No tasks for {account}."
    return "\n".join([f"Tasks of {account}:"] + [f"  {_format_task(t)}" for t in tasks])


def cmd_task(state: AppState, args: list[str], rest: str) -> str:
    if not args:
        return "Usage: /task <id> [account]"
    account = args[1] if len(args) > 1 else state.account
    if account is None:
        return "Usage: /task <id> <account> (or /login first)"
    task = state.app.get_task(_parse_id(args[0]), account)
    return _format_task(task) if task is not None else "Task not found."


def cmd_stats(state: AppState, args: list[str], rest: str) -> str:
    total, users = state.app.get_stats()
    return f"Total tasks: {total}\nUnique users: {users}"


def cmd_render(state: AppState, args: list[str], rest: str) -> str:
    """
    /render          -> home page as the signed-in account
    /render <path>   -> any route, e.g. /render /tasks/pending or /render /json
    """
    path = args[0] if args else None
    out = state.app.render(path, state.account)
    return out.decode("utf-8", errors="replace")


def cmd_tx(state: AppState, args: list[str], rest: str) -> str:
    """
    /tx <method> <json-args>   -> run a tx: link from rendered output
    e.g. /tx complete_task {"id":1}
    """
    if not rest:
        return 'Usage: /tx <method> <json-args>, e.g. /tx delete_task {"id":1}'
    method, tx_args = parse_tx_target(rest)
    result = state.app.invoke(method, tx_args, _require_account(state))
    return "OK." if result is None else f"OK: {result}"


def cmd_meta(state: AppState, args: list[str], rest: str) -> str:
    return "\n".join(f"{k} = {v}" for k, v in state.app.metadata().items())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("login", cmd_login, help_text="Act as an account: /login <account>.")
registry.register("logout", cmd_logout, help_text="Stop acting as an account.")
registry.register("whoami", cmd_whoami, help_text="Show the signed-in account.")
registry.register("add", cmd_add, help_text="Add a task: /add <description>.")
registry.register("done", cmd_done, help_text="Complete a task: /done <id>.", aliases=["complete"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("list", cmd_list, help_text="List tasks: /list [account].", aliases=["ls"])
registry.register("task", cmd_task, help_text="Show one task: /task <id> [account].")
registry.register("stats", cmd_stats, help_text="Show total tasks and unique users.")
registry.register("render", cmd_render, help_text="Render a path: /render [path].")
registry.register("tx", cmd_tx, help_text="Run a tx link: /tx <method> <json-args>.")
registry.register("meta", cmd_meta, help_text="Show render metadata.")
