# src/render_todo/storage/backends.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


class MemoryBackend:
    """Dict-backed key-value service for tests and throwaway sessions."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get_raw(self, key: str) -> str | None:
        return self._data.get(key)

    def write_many(self, items: Iterable[tuple[str, str]]) -> None:
        # Materialize first so a failing iterator leaves the dict untouched.
        batch = dict(items)
        self._data.update(batch)

    @contextlib.contextmanager
    def exclusive(self) -> Iterator[None]:
        # Single process, nothing to lock.
        yield

    def keys(self) -> list[str]:
        return sorted(self._data)


class SqliteBackend:
    """
    SQLite key-value service.

    One table, `kv(key TEXT PRIMARY KEY, value TEXT)`.

    Concurrency:
    - outside `exclusive()` each method opens its own short-lived connection
    - inside `exclusive()` reads and writes share one connection holding
      `BEGIN IMMEDIATE`, so a read-modify-write call is serialized against
      every other process using the same file
    - one backend instance serves one thread
    """

    def __init__(self, db_path: str | Path = "todo.sqlite3", *, timeout: float = 30.0) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._timeout = timeout
        self._held: sqlite3.Connection | None = None
        self._ensure_schema()
        try:
            total = self.count_keys()
        except sqlite3.Error:
            total = -1
        logger.info("SqliteBackend ready db=%s keys=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=self._timeout)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _conn(self) -> Iterator[sqlite3.Connection]:
        if self._held is not None:
            yield self._held
            return
        conn = self._get_conn()
        try:
            yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    @contextlib.contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the database write lock for the block; commit on exit, roll back on error."""
        if self._held is not None:
            yield
            return

        conn = sqlite3.connect(str(self._db_path), timeout=self._timeout, isolation_level=None)
        try:
            self._configure_conn(conn)
            conn.execute("BEGIN IMMEDIATE")
            self._held = conn
            try:
                yield
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        finally:
            self._held = None
            conn.close()

    def count_keys(self) -> int:
        with self._conn() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM kv").fetchone()
            return int(n)

    def get_raw(self, key: str) -> str | None:
        with self._conn() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row[0])

    def write_many(self, items: Iterable[tuple[str, str]]) -> None:
        rows = list(items)
        if not rows:
            return

        sql = """
            INSERT INTO kv(key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """
        if self._held is not None:
            # Committed when the enclosing exclusive() block exits.
            self._held.executemany(sql, rows)
        else:
            with self._conn() as conn, conn:
                conn.executemany(sql, rows)
        logger.debug("SqliteBackend wrote %d keys", len(rows))
