from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from api.deps import get_stores, message
from records.schemas import AreaQuery, parse_input
from stores import Stores

router = APIRouter(prefix="/species", tags=["species"])


@router.post("", status_code=201)
def post_species(body: dict[str, Any] = Body(...), stores: Stores = Depends(get_stores)):
    return message("Species", "created", stores.species.create(body))


@router.get("")
def get_species(resolve: bool = False, stores: Stores = Depends(get_stores)):
    return [s.to_dict() for s in stores.species.list(resolve=resolve)]


@router.post("/area")
def get_species_by_area(body: dict[str, Any] = Body(...), stores: Stores = Depends(get_stores)):
    """
    Body: `{"polygon": [[lon, lat], ...]}` (a GeoJSON Polygon is accepted too).
    """
    query = parse_input(AreaQuery, body)
    return [s.to_dict() for s in stores.species.find_by_area(query.polygon)]


@router.get("/{species_id}")
def get_single_species(
    species_id: str, resolve: bool = False, stores: Stores = Depends(get_stores)
):
    return stores.species.get(species_id, resolve=resolve).to_dict()


@router.put("/{species_id}")
def put_species(
    species_id: str,
    body: dict[str, Any] = Body(...),
    stores: Stores = Depends(get_stores),
):
    return message("Species", "updated", stores.species.update(species_id, body))


@router.delete("/{species_id}")
def delete_species(species_id: str, stores: Stores = Depends(get_stores)):
    return message("Species", "deleted", stores.species.delete(species_id))
