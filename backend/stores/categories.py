from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable, Mapping

from db.database import Database
from db.sql import (
    CATEGORY_COLUMNS,
    delete_returning_sql,
    insert_sql,
    select_by_ids_sql,
    select_sql,
    update_returning_sql,
)
from records.errors import NotFoundError
from records.schemas import CategoryCreate, CategoryUpdate, parse_input
from records.types import Category

logger = logging.getLogger(__name__)

TABLE = "categories"


class CategoryStore:
    """
    Flat collection of taxonomic categories. Deletes are unconditional.
    """

    def __init__(self, db: Database):
        self.db = db

    def create(self, payload: CategoryCreate | Mapping[str, Any] | str) -> Category:
        if isinstance(payload, str):
            payload = {"name": payload}
        data = parse_input(CategoryCreate, payload)
        category = Category(id=new_id(), name=data.name)
        self.db.execute(insert_sql(TABLE, CATEGORY_COLUMNS), [category.id, category.name])
        logger.info("created category %s (%s)", category.id, category.name)
        return category

    def get(self, category_id: str) -> Category:
        row = self.db.fetch_one(select_sql(TABLE, CATEGORY_COLUMNS, where="id = ?"), [category_id])
        if row is None:
            raise NotFoundError("Category", category_id)
        return _decode(row)

    def list(self) -> list[Category]:
        return [_decode(r) for r in self.db.fetch_all(select_sql(TABLE, CATEGORY_COLUMNS))]

    def get_many(self, ids: Iterable[str]) -> dict[str, Category]:
        wanted = sorted({i for i in ids if i})
        if not wanted:
            return {}
        rows = self.db.fetch_all(select_by_ids_sql(TABLE, CATEGORY_COLUMNS, len(wanted)), wanted)
        return {c.id: c for c in (_decode(r) for r in rows)}

    def update(self, category_id: str, payload: CategoryUpdate | Mapping[str, Any]) -> Category:
        changes = parse_input(CategoryUpdate, payload).changes()
        if not changes:
            return self.get(category_id)
        row = self.db.fetch_one(
            update_returning_sql(TABLE, ["name"], CATEGORY_COLUMNS),
            [changes["name"], category_id],
        )
        if row is None:
            raise NotFoundError("Category", category_id)
        logger.info("updated category %s", category_id)
        return _decode(row)

    def delete(self, category_id: str) -> Category:
        row = self.db.fetch_one(delete_returning_sql(TABLE, CATEGORY_COLUMNS), [category_id])
        if row is None:
            raise NotFoundError("Category", category_id)
        logger.info("deleted category %s", category_id)
        return _decode(row)


def new_id() -> str:
    return uuid.uuid4().hex


def _decode(row: tuple) -> Category:
    cid, name = row
    return Category(id=str(cid), name=str(name))
