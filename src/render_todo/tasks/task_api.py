# src/render_todo/tasks/task_api.py

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from ..core.errors import UnknownMethodError
from ..core.ports import AccountId
from .task_store import TaskStore

logger = logging.getLogger(__name__)

TX_PREFIX = "tx:"


def parse_tx_target(target: str) -> tuple[str, dict[str, Any]]:
    """
    Split a tx link target into (method, args).

        'tx:complete_task {"id":3}'  -> ("complete_task", {"id": 3})
        'delete_task {"id":3}'       -> ("delete_task", {"id": 3})
        'add_task'                   -> ("add_task", {})
    """
    body = target.strip()
    if body.startswith(TX_PREFIX):
        body = body[len(TX_PREFIX) :]
    method, _, raw_args = body.strip().partition(" ")
    if not method:
        raise ValueError("tx target has no method")

    raw_args = raw_args.strip()
    if not raw_args:
        return method, {}
    try:
        args = json.loads(raw_args)
    except ValueError as e:
        raise ValueError(f"tx args are not valid JSON: {raw_args!r}") from e
    if not isinstance(args, dict):
        raise ValueError("tx args must be a JSON object")
    return method, args


def _id_arg(args: dict[str, Any]) -> int:
    raw = args.get("id")
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ValueError(f"tx args need a non-negative integer 'id', got {raw!r}")
    return raw


def _add(store: TaskStore, args: dict[str, Any], caller: AccountId) -> int:
    description = args.get("description")
    if not isinstance(description, str):
        raise ValueError("add_task needs a text 'description'")
    return store.add_task(description, caller)


def _complete(store: TaskStore, args: dict[str, Any], caller: AccountId) -> None:
    store.complete_task(_id_arg(args), caller)


def _delete(store: TaskStore, args: dict[str, Any], caller: AccountId) -> None:
    store.delete_task(_id_arg(args), caller)


_METHODS: dict[str, Callable[[TaskStore, dict[str, Any], AccountId], Any]] = {
    "add_task": _add,
    "complete_task": _complete,
    "delete_task": _delete,
}


def invoke_tx(store: TaskStore, method: str, args: dict[str, Any], caller: AccountId) -> Any:
    """Run a mutating entry point named by a tx/form link."""
    fn = _METHODS.get(method)
    if fn is None:
        raise UnknownMethodError(method)
    logger.debug("invoke method=%s args=%s caller=%s", method, args, caller)
    return fn(store, args, caller)
