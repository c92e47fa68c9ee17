# src/render_todo/storage/keys.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class KeyKind(StrEnum):
    TASKS = "tasks"  # per-account collection
    NEXT_ID = "next_id"  # per-account id counter
    HAS_TASKS = "has_tasks"  # per-account "ever added" flag
    TOTAL_TASKS = "total_tasks"
    USER_COUNT = "user_count"


_PER_ACCOUNT = {KeyKind.TASKS, KeyKind.NEXT_ID, KeyKind.HAS_TASKS}


@dataclass(frozen=True, slots=True)
class DataKey:
    """
    Structured storage key.

    Per-account kinds carry the account id; global kinds carry None.
    `str(key)` is the backend key: "tasks:GABC..." or "total_tasks".
    """

    kind: KeyKind
    account: str | None = None

    def __post_init__(self) -> None:
        if (self.kind in _PER_ACCOUNT) != (self.account is not None):
            raise ValueError(f"bad account for key kind {self.kind}: {self.account!r}")

    def __str__(self) -> str:
        if self.account is None:
            return self.kind.value
        return f"{self.kind.value}:{self.account}"

    @classmethod
    def tasks(cls, account: str) -> DataKey:
        return cls(KeyKind.TASKS, account)

    @classmethod
    def next_id(cls, account: str) -> DataKey:
        return cls(KeyKind.NEXT_ID, account)

    @classmethod
    def has_tasks(cls, account: str) -> DataKey:
        return cls(KeyKind.HAS_TASKS, account)

    @classmethod
    def total_tasks(cls) -> DataKey:
        return cls(KeyKind.TOTAL_TASKS)

    @classmethod
    def user_count(cls) -> DataKey:
        return cls(KeyKind.USER_COUNT)
