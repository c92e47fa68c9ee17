# src/render_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the key-value service and the authentication capability swappable
and makes testing easier.
"""

from contextlib import AbstractContextManager
from typing import Iterable, Protocol

AccountId = str
# Opaque account identity (a ledger address in production, any non-empty string locally).


class KeyValueBackend(Protocol):
    """
    External persistent key-value service.

    Values are opaque text. A backend must apply one `write_many` batch
    all-or-nothing, and `exclusive()` must keep other writers of the same
    data out until the block exits.
    """

    def get_raw(self, key: str) -> str | None: ...

    def write_many(self, items: Iterable[tuple[str, str]]) -> None: ...

    def exclusive(self) -> AbstractContextManager[None]: ...


class Authenticator(Protocol):
    """
    External authentication capability.

    `require_auth` returns normally when the current call is authorized to act
    for `account` and raises AuthorizationError otherwise.
    """

    def require_auth(self, account: AccountId) -> None: ...
