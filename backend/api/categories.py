from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from api.deps import get_stores, message
from stores import Stores

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", status_code=201)
def post_category(body: dict[str, Any] = Body(...), stores: Stores = Depends(get_stores)):
    return message("Category", "created", stores.categories.create(body))


@router.get("")
def get_categories(stores: Stores = Depends(get_stores)):
    return [c.to_dict() for c in stores.categories.list()]


@router.get("/{category_id}")
def get_category(category_id: str, stores: Stores = Depends(get_stores)):
    return stores.categories.get(category_id).to_dict()


@router.put("/{category_id}")
def put_category(
    category_id: str,
    body: dict[str, Any] = Body(...),
    stores: Stores = Depends(get_stores),
):
    return message("Category", "updated", stores.categories.update(category_id, body))


@router.delete("/{category_id}")
def delete_category(category_id: str, stores: Stores = Depends(get_stores)):
    return message("Category", "deleted", stores.categories.delete(category_id))
