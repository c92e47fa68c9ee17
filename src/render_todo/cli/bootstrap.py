# src/render_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value backend, authenticator and TodoApp into AppState.
"""

from __future__ import annotations

import logging

from ..app import TodoApp
from ..config import get_settings
from ..core.auth import OpenAuthenticator, SessionAuthenticator
from ..core.ports import KeyValueBackend
from ..core.state import AppState
from ..storage.accessor import Storage
from ..storage.backends import MemoryBackend, SqliteBackend

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_backend(settings) -> KeyValueBackend:
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage; nothing will be persisted.")
        return MemoryBackend()
    return SqliteBackend(settings.db_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    auth: SessionAuthenticator | OpenAuthenticator
    if settings.auth_mode == "open":
        logger.warning("Auth mode 'open': every caller is trusted.")
        auth = OpenAuthenticator()
    else:
        auth = SessionAuthenticator()

    app = TodoApp(
        Storage(create_backend(settings)),
        auth,
        theme_contract=settings.theme_contract,
    )
    state = AppState(settings=settings, app=app, auth=auth)

    if settings.default_account:
        state.sign_in(settings.default_account)
        logger.info("Signed in as %s", settings.default_account)

    return state
