from __future__ import annotations

import threading

from db.config import db_path, duckdb_threads
from db.database import Database, connect

_DB: Database | None = None
_DB_LOCK = threading.RLock()


def get_database() -> Database:
    global _DB
    with _DB_LOCK:
        path = db_path()
        if _DB is not None:
            # If env changes the path (across tests, typically), reopen on the new path.
            if _DB.path == path:
                return _DB
            _DB.close()
            _DB = None

        _DB = connect(path, threads=duckdb_threads())
        return _DB


def reset_database() -> None:
    """
    Close the shared database and delete its file.
    """
    global _DB
    with _DB_LOCK:
        if _DB is not None:
            _DB.reset()
            _DB = None
