# src/render_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .auth import OpenAuthenticator, SessionAuthenticator

if TYPE_CHECKING:
    from ..app import TodoApp


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    app: TodoApp
    auth: SessionAuthenticator | OpenAuthenticator

    # Account the console acts and renders as (None = not connected).
    account: str | None = None

    def sign_in(self, account: str) -> None:
        if isinstance(self.auth, SessionAuthenticator):
            self.auth.sign_out()
            self.auth.sign_in(account)
        self.account = account

    def sign_out(self) -> None:
        if isinstance(self.auth, SessionAuthenticator):
            self.auth.sign_out()
        self.account = None
