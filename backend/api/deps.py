from __future__ import annotations

from typing import Any

from db.singleton import get_database
from stores import Stores, build_stores


def get_stores() -> Stores:
    return build_stores(get_database())


def message(kind: str, action: str, data: Any) -> dict[str, Any]:
    """
    Write-response envelope: `{"message": "Animal created", "data": {...}}`.
    """
    return {"message": f"{kind} {action}", "data": data.to_dict()}
