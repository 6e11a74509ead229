from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Sequence

import duckdb

from db.sql import CREATE_SCHEMA_SQL
from records.errors import StorageError

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


@dataclass
class Database:
    """
    One DuckDB connection shared by the stores.

    Every statement runs under `_lock`, so each store operation is a single
    atomic unit against the connection. Driver failures surface as StorageError.
    """

    path: str
    conn: duckdb.DuckDBPyConnection
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def ensure_schema(self) -> None:
        with self._guard("schema"):
            for stmt in CREATE_SCHEMA_SQL:
                self.conn.execute(stmt)

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> tuple | None:
        with self._guard(sql):
            return self.conn.execute(sql, list(params)).fetchone()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[tuple]:
        with self._guard(sql):
            return self.conn.execute(sql, list(params)).fetchall()

    def execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        with self._guard(sql):
            self.conn.execute(sql, list(params))

    def close(self) -> None:
        with self._lock:
            self.conn.close()

    def reset(self) -> None:
        """
        Close the connection and delete the database file (no-op file-wise for :memory:).
        """
        self.close()
        if self.path != MEMORY:
            Path(self.path).unlink(missing_ok=True)
            Path(f"{self.path}.wal").unlink(missing_ok=True)

    @contextmanager
    def _guard(self, sql: str) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except duckdb.Error as exc:
                logger.error("storage failure on %r: %s", _short(sql), exc)
                raise StorageError(f"Storage operation failed: {exc}") from exc


def connect(path: str, *, threads: int = 1) -> Database:
    if path != MEMORY:
        p = Path(path)
        if p.parent and str(p.parent) not in {".", ""}:
            p.parent.mkdir(parents=True, exist_ok=True)
    try:
        conn = duckdb.connect(database=path, read_only=False, config={"threads": int(threads)})
    except duckdb.Error as exc:
        raise StorageError(f"Cannot open database {path}: {exc}") from exc
    db = Database(path=path, conn=conn)
    db.ensure_schema()
    logger.info("opened database %s", path)
    return db


def _short(sql: str) -> str:
    return " ".join(sql.split())[:80]
