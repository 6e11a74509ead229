from __future__ import annotations

import os
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def db_path() -> str:
    # ":memory:" is passed through untouched (used by tests and demos).
    return (os.getenv("FAUNA_DB_PATH") or "").strip() or str(
        _repo_root() / "data" / "fauna" / "fauna.duckdb"
    )


def duckdb_threads() -> int:
    raw = (os.getenv("FAUNA_DUCKDB_THREADS") or "").strip()
    if raw:
        try:
            return max(1, int(raw))
        except ValueError:
            pass
    return max(1, int(os.cpu_count() or 1))


def seed_path() -> Path | None:
    raw = (os.getenv("FAUNA_SEED_PATH") or "").strip()
    return Path(raw) if raw else None


def log_level() -> str:
    return (os.getenv("FAUNA_LOG_LEVEL") or "INFO").strip().upper() or "INFO"


def cors_origins() -> list[str]:
    raw = os.getenv("FAUNA_CORS_ORIGINS") or "http://localhost:3000"
    return [o.strip() for o in raw.split(",") if o.strip()]
