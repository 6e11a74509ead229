from __future__ import annotations

from typing import Iterable

# `seq` keeps list output in insertion order; ids are opaque uuid hex strings.
CREATE_SCHEMA_SQL = [
    "CREATE SEQUENCE IF NOT EXISTS record_seq;",
    """
    CREATE TABLE IF NOT EXISTS categories (
      id TEXT PRIMARY KEY,
      seq BIGINT DEFAULT nextval('record_seq'),
      name TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS species (
      id TEXT PRIMARY KEY,
      seq BIGINT DEFAULT nextval('record_seq'),
      name TEXT NOT NULL,
      category_id TEXT NOT NULL,
      ring_json TEXT,
      min_lon DOUBLE,
      min_lat DOUBLE,
      max_lon DOUBLE,
      max_lat DOUBLE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS animals (
      id TEXT PRIMARY KEY,
      seq BIGINT DEFAULT nextval('record_seq'),
      species_id TEXT NOT NULL,
      lon DOUBLE,
      lat DOUBLE,
      name TEXT,
      notes TEXT
    );
    """,
]

CATEGORY_COLUMNS = ["id", "name"]
SPECIES_COLUMNS = ["id", "name", "category_id", "ring_json"]
ANIMAL_COLUMNS = ["id", "species_id", "lon", "lat", "name", "notes"]

# Bbox overlap against the stored covering box of each species range.
SPECIES_BBOX_WHERE = (
    "ring_json IS NOT NULL AND max_lon >= ? AND min_lon <= ? AND max_lat >= ? AND min_lat <= ?"
)
ANIMAL_BBOX_WHERE = (
    "lon IS NOT NULL AND lat IS NOT NULL AND lon BETWEEN ? AND ? AND lat BETWEEN ? AND ?"
)


def _cols(columns: Iterable[str]) -> str:
    return ", ".join(columns)


def insert_sql(table: str, columns: list[str]) -> str:
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT INTO {table} ({_cols(columns)}) VALUES ({placeholders})"


def select_sql(table: str, columns: list[str], *, where: str | None = None) -> str:
    where_sql = f" WHERE {where}" if where else ""
    return f"SELECT {_cols(columns)} FROM {table}{where_sql} ORDER BY seq"


def select_by_ids_sql(table: str, columns: list[str], n: int) -> str:
    placeholders = ", ".join("?" for _ in range(n))
    return f"SELECT {_cols(columns)} FROM {table} WHERE id IN ({placeholders})"


def update_returning_sql(table: str, assignments: list[str], returning: list[str]) -> str:
    """
    Single-statement find-and-modify: no row returned means no such id.
    """
    set_sql = ", ".join(f"{c} = ?" for c in assignments)
    return f"UPDATE {table} SET {set_sql} WHERE id = ? RETURNING {_cols(returning)}"


def delete_returning_sql(table: str, returning: list[str]) -> str:
    return f"DELETE FROM {table} WHERE id = ? RETURNING {_cols(returning)}"
