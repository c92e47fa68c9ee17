# src/render_todo/storage/accessor.py

from __future__ import annotations

import contextlib
import json
import logging
from collections.abc import Iterator
from typing import Any

from ..core.ports import KeyValueBackend
from .keys import DataKey

logger = logging.getLogger(__name__)


class Storage:
    """
    Typed get/set over a KeyValueBackend.

    Values are JSON-encoded. Missing keys never raise; callers pass a default.

    Call atomicity:
    - inside `transaction()` writes are buffered and reads see the buffer
    - the buffer reaches the backend as one `write_many` batch on normal exit
    - if the block raises, the buffer is dropped and nothing is written
    - a `set` outside any transaction is committed immediately on its own
    - the whole block runs under the backend's `exclusive()` lock
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend
        self._pending: dict[str, str] | None = None

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    @property
    def in_transaction(self) -> bool:
        return self._pending is not None

    @contextlib.contextmanager
    def transaction(self) -> Iterator[Storage]:
        if self._pending is not None:
            # Nested calls join the outer unit.
            yield self
            return

        with self._backend.exclusive():
            self._pending = {}
            try:
                yield self
            except BaseException:
                dropped = len(self._pending)
                self._pending = None
                if dropped:
                    logger.debug("Transaction aborted, dropped %d buffered writes", dropped)
                raise

            batch, self._pending = self._pending, None
            if batch:
                self._backend.write_many(batch.items())
                logger.debug("Transaction committed keys=%s", sorted(batch))

    # ---- raw ----

    def _read(self, key: DataKey) -> str | None:
        skey = str(key)
        if self._pending is not None and skey in self._pending:
            return self._pending[skey]
        return self._backend.get_raw(skey)

    # ---- public API ----

    def has(self, key: DataKey) -> bool:
        return self._read(key) is not None

    def get(self, key: DataKey, default: Any = None) -> Any:
        raw = self._read(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.exception("Stored value for %s is not valid JSON; using default.", key)
            return default

    def get_int(self, key: DataKey, default: int = 0) -> int:
        val = self.get(key, default)
        if isinstance(val, bool) or not isinstance(val, int):
            logger.error("Stored value for %s is not an integer: %r", key, val)
            return default
        return val

    def get_bool(self, key: DataKey, default: bool = False) -> bool:
        val = self.get(key, default)
        return val if isinstance(val, bool) else default

    def set(self, key: DataKey, value: Any) -> None:
        raw = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        if self._pending is not None:
            self._pending[str(key)] = raw
        else:
            self._backend.write_many([(str(key), raw)])
