# src/render_todo/render/common.py

from __future__ import annotations

import json
from typing import Any

# Link targets understood by render-aware viewers.
RENDER_SCHEME = "render:"
TX_SCHEME = "tx:"
FORM_SCHEME = "form:"

APP_TITLE = "Todo List"
POWERED_BY = "Powered by Soroban Render"
PROJECT_URL = "https://github.com/wyhaines/soroban-render"
DEFAULT_THEME_CONTRACT = "CCYEOY2JTOQ2JIMLLERAFNHAVKEKMEJDBOTLN6DIIWBHWEIMUA2T2VY4"

RENDER_META = {
    "render": "v1",
    "render_formats": "markdown,json",
}


def compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def render_link(label: str, path: str) -> str:
    return f"[{label}]({RENDER_SCHEME}{path})"


def tx_link(label: str, method: str, args: dict[str, Any]) -> str:
    return f"[{label}]({TX_SCHEME}{method} {compact_json(args)})"


def form_link(label: str, method: str) -> str:
    return f"[{label}]({FORM_SCHEME}{method})"


def include_directive(contract: str, func: str) -> str:
    return f'{{{{include contract={contract} func="{func}"}}}}'
