# src/render_todo/tasks/task_store.py

from __future__ import annotations

import logging
from typing import Any

from ..core.errors import CounterOverflowError
from ..core.ports import AccountId, Authenticator
from ..storage.accessor import Storage
from ..storage.keys import DataKey
from .task_models import MAX_DESCRIPTION_BYTES, U32_MAX, Stats, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Per-account task collections with global aggregate counters.

    Storage layout (all created lazily on first write):
    - tasks:<account>      insertion-ordered list of task records
    - next_id:<account>    next id to hand out (starts at 1, never reused)
    - has_tasks:<account>  set on the account's first successful add
    - total_tasks          live tasks across all accounts
    - user_count           accounts that have ever added a task

    Every mutation runs inside one storage transaction and authenticates the
    caller before the first write, so counters and collections are always
    observed together.
    """

    def __init__(self, storage: Storage, auth: Authenticator) -> None:
        self._storage = storage
        self._auth = auth

    # ---- low-level helpers ----

    def _load(self, account: AccountId) -> dict[int, Task]:
        raw: Any = self._storage.get(DataKey.tasks(account), [])
        out: dict[int, Task] = {}
        if not isinstance(raw, list):
            logger.error("Collection for account=%s is not a list; treating as empty.", account)
            return out
        for rec in raw:
            if not isinstance(rec, dict):
                continue
            task = Task.from_record(rec)
            out[task.id] = task
        return out

    def _save(self, account: AccountId, tasks: dict[int, Task]) -> None:
        self._storage.set(DataKey.tasks(account), [t.to_record() for t in tasks.values()])

    def _bump(self, key: DataKey, delta: int) -> int:
        value = self._storage.get_int(key, 0) + delta
        if value > U32_MAX:
            raise CounterOverflowError(f"{key} would exceed u32")
        self._storage.set(key, value)
        return value

    @staticmethod
    def _check_description(description: str) -> None:
        if not isinstance(description, str):
            raise ValueError("description must be text")
        if len(description.encode("utf-8")) > MAX_DESCRIPTION_BYTES:
            raise ValueError(f"description is longer than {MAX_DESCRIPTION_BYTES} bytes")

    # ---- mutations ----

    def add_task(self, description: str, caller: AccountId) -> int:
        self._auth.require_auth(caller)
        self._check_description(description)

        with self._storage.transaction():
            tasks = self._load(caller)
            next_id = self._storage.get_int(DataKey.next_id(caller), 1)
            if next_id > U32_MAX:
                raise CounterOverflowError(f"account {caller} has exhausted task ids")

            tasks[next_id] = Task(id=next_id, description=description, completed=False, owner=caller)
            self._save(caller, tasks)
            self._storage.set(DataKey.next_id(caller), next_id + 1)

            self._bump(DataKey.total_tasks(), 1)

            has_tasks_key = DataKey.has_tasks(caller)
            if not self._storage.get_bool(has_tasks_key, False):
                self._storage.set(has_tasks_key, True)
                users = self._bump(DataKey.user_count(), 1)
                logger.info("New task owner account=%s user_count=%s", caller, users)

        logger.debug("Task added id=%s account=%s", next_id, caller)
        return next_id

    def complete_task(self, task_id: int, caller: AccountId) -> None:
        self._auth.require_auth(caller)

        with self._storage.transaction():
            tasks = self._load(caller)
            task = tasks.get(int(task_id))
            if task is None:
                logger.debug("complete_task: no task id=%s account=%s", task_id, caller)
                return
            task.completed = True
            self._save(caller, tasks)

        logger.debug("Task completed id=%s account=%s", task_id, caller)

    def delete_task(self, task_id: int, caller: AccountId) -> None:
        self._auth.require_auth(caller)

        with self._storage.transaction():
            tasks = self._load(caller)
            if tasks.pop(int(task_id), None) is None:
                logger.debug("delete_task: no task id=%s account=%s", task_id, caller)
                return
            self._save(caller, tasks)

            total = self._storage.get_int(DataKey.total_tasks(), 0)
            if total > 0:
                self._storage.set(DataKey.total_tasks(), total - 1)
            else:
                logger.error(
                    "total_tasks already 0 while deleting id=%s account=%s; counter left at 0",
                    task_id,
                    caller,
                )

        logger.debug("Task deleted id=%s account=%s", task_id, caller)

    # ---- queries ----

    def get_tasks(self, account: AccountId) -> list[Task]:
        return list(self._load(account).values())

    def get_task(self, task_id: int, account: AccountId) -> Task | None:
        return self._load(account).get(int(task_id))

    def get_stats(self) -> Stats:
        return Stats(
            total_tasks=self._storage.get_int(DataKey.total_tasks(), 0),
            user_count=self._storage.get_int(DataKey.user_count(), 0),
        )
