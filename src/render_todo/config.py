# src/render_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every field has a local default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .render.common import DEFAULT_THEME_CONTRACT

ENV_PREFIX = "TODO"

STORAGE_BACKENDS = ("sqlite", "memory")
AUTH_MODES = ("session", "open")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in choices else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    db_path: Path

    # ---- Rendering ----
    theme_contract: str

    # ---- Authentication ----
    auth_mode: str
    default_account: str | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "render-todo")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/render-todo"))
        storage_backend = _env_choice(_k("STORAGE"), STORAGE_BACKENDS, "sqlite")
        db_path = _env_path(_k("DB_PATH"), data_dir / "ledger.sqlite3")

        theme_contract = _env(_k("THEME_CONTRACT"), DEFAULT_THEME_CONTRACT).strip() or DEFAULT_THEME_CONTRACT

        auth_mode = _env_choice(_k("AUTH_MODE"), AUTH_MODES, "session")
        default_account = _env(_k("ACCOUNT")).strip() or None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            db_path=db_path,
            theme_contract=theme_contract,
            auth_mode=auth_mode,
            default_account=default_account,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
