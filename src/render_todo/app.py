# src/render_todo/app.py

"""
Application surface.

TodoApp exposes every entry point of the task list: the mutating calls
(add/complete/delete), the public queries, and render(path, viewer) which
routes a path to one of the markdown or JSON views.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any

from .core.ports import AccountId, Authenticator
from .render.common import DEFAULT_THEME_CONTRACT, RENDER_META
from .render.json_doc import render_json
from .render.markdown import MarkdownRenderer
from .routing.router import RouteMatch, Router
from .storage.accessor import Storage
from .tasks.task_api import invoke_tx
from .tasks.task_models import Stats, Task, TaskFilter
from .tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderRequest:
    viewer: AccountId | None
    tasks: list[Task]

    @property
    def connected(self) -> bool:
        return self.viewer is not None


class TodoApp:
    def __init__(
        self,
        storage: Storage,
        auth: Authenticator,
        *,
        theme_contract: str = DEFAULT_THEME_CONTRACT,
    ) -> None:
        self._storage = storage
        self._tasks = TaskStore(storage, auth)
        self._markdown = MarkdownRenderer(theme_contract)
        self._router = self._build_router()

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def router(self) -> Router:
        return self._router

    # ---- routing ----

    def _build_router(self) -> Router:
        router = Router(default=self._home)
        router.register("/json", partial(self._json, fixed=TaskFilter.ALL), name="json")
        router.register("/json/*", self._json, name="json_filtered")
        router.register("/", self._home, name="home")
        router.register("/about", self._about, name="about")
        router.register("/tasks", partial(self._list, flt=TaskFilter.ALL), name="tasks")
        for flt in (TaskFilter.PENDING, TaskFilter.COMPLETED):
            handler = partial(self._list, flt=flt)
            router.register(f"/tasks/{flt.value}", handler, name=f"tasks_{flt.value}")
            router.register(f"/{flt.value}", handler, name=flt.value)
        router.register("/task/{id:u32}", self._detail, name="task")
        return router

    def _home(self, req: RenderRequest, m: RouteMatch) -> bytes:
        return self._markdown.home(req.connected)

    def _about(self, req: RenderRequest, m: RouteMatch) -> bytes:
        return self._markdown.about(self._tasks.get_stats())

    def _list(self, req: RenderRequest, m: RouteMatch, *, flt: TaskFilter) -> bytes:
        return self._markdown.task_list(req.tasks, flt.completed, req.connected)

    def _detail(self, req: RenderRequest, m: RouteMatch) -> bytes:
        task_id = m.get_u32("id")
        task = None
        if task_id is not None:
            task = next((t for t in req.tasks if t.id == task_id), None)
        return self._markdown.task_detail(task)

    def _json(self, req: RenderRequest, m: RouteMatch, *, fixed: TaskFilter | None = None) -> bytes:
        flt = fixed if fixed is not None else TaskFilter.from_name(m.remainder)
        return render_json(req.tasks, flt.completed, req.connected)

    # ---- entry points ----

    def add_task(self, description: str, caller: AccountId) -> int:
        return self._tasks.add_task(description, caller)

    def complete_task(self, task_id: int, caller: AccountId) -> None:
        self._tasks.complete_task(task_id, caller)

    def delete_task(self, task_id: int, caller: AccountId) -> None:
        self._tasks.delete_task(task_id, caller)

    def get_tasks(self, account: AccountId) -> list[Task]:
        return self._tasks.get_tasks(account)

    def get_task(self, task_id: int, account: AccountId) -> Task | None:
        return self._tasks.get_task(task_id, account)

    def get_stats(self) -> Stats:
        return self._tasks.get_stats()

    def invoke(self, method: str, args: dict[str, Any], caller: AccountId) -> Any:
        """Execute a tx/form link against the store as `caller`."""
        with self._storage.transaction():
            return invoke_tx(self._tasks, method, args, caller)

    def render(self, path: str | bytes | None = None, viewer: AccountId | None = None) -> bytes:
        tasks = self._tasks.get_tasks(viewer) if viewer is not None else []
        out = self._router.handle(path, RenderRequest(viewer=viewer, tasks=tasks))
        logger.debug("render path=%r viewer=%s tasks=%d bytes=%d", path, viewer, len(tasks), len(out))
        return out

    def render_header(self, path: str | bytes | None = None, viewer: AccountId | None = None) -> bytes:
        """Include target; `path` and `viewer` are accepted and ignored."""
        return self._markdown.header()

    def render_footer(self, path: str | bytes | None = None, viewer: AccountId | None = None) -> bytes:
        return self._markdown.footer()

    @staticmethod
    def metadata() -> dict[str, str]:
        return dict(RENDER_META)
