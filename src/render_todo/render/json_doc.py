# src/render_todo/render/json_doc.py

"""
JSON view: a self-describing component document.

    {"format": "soroban-render-json-v1", "title": "Todo List", "components": [...]}

Components are plain dicts serialized compactly in insertion order.
Unconnected viewers get the heading and a connect message only.
"""

from __future__ import annotations

from typing import Any

from ..tasks.task_models import Task, TaskFilter, count_by_status, filter_tasks
from .common import APP_TITLE, POWERED_BY, compact_json

JSON_FORMAT = "soroban-render-json-v1"

Component = dict[str, Any]

_COMPLETED_COLOR = "#22c55e"
_PENDING_COLOR = "#eab308"

_NAV_ITEMS = (
    ("All", "/json", TaskFilter.ALL),
    ("Pending", "/json/pending", TaskFilter.PENDING),
    ("Completed", "/json/completed", TaskFilter.COMPLETED),
)


def heading(text: str, level: int) -> Component:
    return {"type": "heading", "level": level, "text": text}


def text(content: str) -> Component:
    return {"type": "text", "content": content}


def tx_action(method: str, task_id: int, label: str) -> Component:
    return {"type": "tx", "method": method, "args": {"id": task_id}, "label": label}


def task_component(task: Task) -> Component:
    actions: list[Component] = []
    if not task.completed:
        actions.append(tx_action("complete_task", task.id, "Done"))
    actions.append(tx_action("delete_task", task.id, "Delete"))
    return {
        "type": "task",
        "id": task.id,
        "text": task.description,
        "completed": task.completed,
        "actions": actions,
    }


def add_task_form() -> Component:
    return {
        "type": "form",
        "action": "add_task",
        "fields": [
            {
                "name": "description",
                "type": "text",
                "placeholder": "Enter task description",
                "required": True,
            }
        ],
        "submitLabel": "Add Task",
    }


def navigation(selected: TaskFilter) -> Component:
    items: list[Component] = []
    for label, path, flt in _NAV_ITEMS:
        item: Component = {"label": label, "path": path}
        if flt is selected:
            item["active"] = True
        items.append(item)
    return {"type": "navigation", "items": items}


def status_chart(tasks: list[Task]) -> Component | None:
    counts = count_by_status(tasks)
    if counts.completed == 0 and counts.pending == 0:
        return None
    return {
        "type": "chart",
        "chartType": "pie",
        "title": "Task Status",
        "data": [
            {"label": "Completed", "value": counts.completed, "color": _COMPLETED_COLOR},
            {"label": "Pending", "value": counts.pending, "color": _PENDING_COLOR},
        ],
    }


def build_document(tasks: list[Task], completed: bool | None, connected: bool) -> dict[str, Any]:
    components: list[Component] = [heading(APP_TITLE, 1)]

    if not connected:
        components += [
            heading("Connect Your Wallet", 2),
            text("Please connect your wallet to view and manage your personal todo list."),
            text("Each user has their own private task list that only they can see and modify."),
        ]
    else:
        components.append(add_task_form())
        components.append(navigation(TaskFilter.from_completed(completed)))

        # The chart summarizes the whole collection, not the filtered view.
        chart = status_chart(tasks)
        if chart is not None:
            components.append(chart)

        components.append(heading("Your Tasks", 2))

        children: list[Component] = [task_component(t) for t in filter_tasks(tasks, completed)]
        if not children:
            if completed is not None:
                children.append(text("No matching tasks."))
            else:
                children.append(text("No tasks yet. Add one above!"))
        components.append({"type": "container", "className": "task-list", "components": children})

    components += [{"type": "divider"}, text(POWERED_BY)]

    return {"format": JSON_FORMAT, "title": APP_TITLE, "components": components}


def render_json(tasks: list[Task], completed: bool | None, connected: bool) -> bytes:
    return compact_json(build_document(tasks, completed, connected)).encode("utf-8")
