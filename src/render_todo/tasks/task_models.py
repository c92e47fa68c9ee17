# src/render_todo/tasks/task_models.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple

U32_MAX = 2**32 - 1
MAX_DESCRIPTION_BYTES = 256


class TaskFilter(StrEnum):
    """
    Completion-status filter shared by both renderers.

    `completed` is the underlying value: None selects everything.
    """

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    @property
    def completed(self) -> bool | None:
        if self is TaskFilter.PENDING:
            return False
        if self is TaskFilter.COMPLETED:
            return True
        return None

    @classmethod
    def from_completed(cls, completed: bool | None) -> TaskFilter:
        if completed is None:
            return cls.ALL
        return cls.COMPLETED if completed else cls.PENDING

    @classmethod
    def from_name(cls, raw: str | bytes | None) -> TaskFilter:
        """Unknown or missing names select everything."""
        if isinstance(raw, bytes):
            raw = raw.decode("ascii", errors="replace")
        if not raw:
            return cls.ALL
        try:
            return cls(raw)
        except ValueError:
            return cls.ALL


@dataclass(slots=True)
class Task:
    id: int
    description: str
    completed: bool
    owner: str

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "owner": self.owner,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Task:
        return cls(
            id=int(rec["id"]),
            description=str(rec.get("description") or ""),
            completed=bool(rec.get("completed", False)),
            owner=str(rec.get("owner") or ""),
        )


class Stats(NamedTuple):
    total_tasks: int
    user_count: int


class StatusCounts(NamedTuple):
    completed: int
    pending: int


def filter_tasks(tasks: Iterable[Task], completed: bool | None) -> list[Task]:
    if completed is None:
        return list(tasks)
    return [t for t in tasks if t.completed == completed]


def count_by_status(tasks: Iterable[Task]) -> StatusCounts:
    done = pending = 0
    for t in tasks:
        if t.completed:
            done += 1
        else:
            pending += 1
    return StatusCounts(completed=done, pending=pending)
