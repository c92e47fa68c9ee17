# src/render_todo/core/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for errors that abort an application call."""


class AuthorizationError(TodoError):
    """The caller is not authenticated as the account it claims to act for."""

    def __init__(self, account: str) -> None:
        super().__init__(f"account {account!r} is not authorized for this call")
        self.account = account


class CounterOverflowError(TodoError):
    """A u32 counter would wrap."""


class UnknownMethodError(TodoError):
    """A tx link names a method that is not a mutating entry point."""

    def __init__(self, method: str) -> None:
        super().__init__(f"unknown method: {method}")
        self.method = method
