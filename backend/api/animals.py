from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from api.deps import get_stores, message
from stores import Stores

router = APIRouter(prefix="/animals", tags=["animals"])


@router.post("", status_code=201)
def post_animal(body: dict[str, Any] = Body(...), stores: Stores = Depends(get_stores)):
    return message("Animal", "created", stores.animals.create(body))


@router.get("")
def get_animals(stores: Stores = Depends(get_stores)):
    return [a.to_dict() for a in stores.animals.list()]


# Declared before `/{animal_id}` so the literal paths win.
@router.get("/location")
def get_animals_by_box(
    top_right: str = Query("", alias="topRight"),
    bottom_left: str = Query("", alias="bottomLeft"),
    stores: Stores = Depends(get_stores),
):
    return [a.to_dict() for a in stores.animals.find_within_box(top_right, bottom_left)]


@router.get("/species/{species_id}")
def get_by_species(species_id: str, stores: Stores = Depends(get_stores)):
    return [a.to_dict() for a in stores.animals.find_by_species(species_id)]


@router.get("/{animal_id}")
def get_animal(animal_id: str, stores: Stores = Depends(get_stores)):
    return stores.animals.get(animal_id).to_dict()


@router.put("/{animal_id}")
def put_animal(
    animal_id: str,
    body: dict[str, Any] = Body(...),
    stores: Stores = Depends(get_stores),
):
    return message("Animal", "updated", stores.animals.update(animal_id, body))


@router.delete("/{animal_id}")
def delete_animal(animal_id: str, stores: Stores = Depends(get_stores)):
    return message("Animal", "deleted", stores.animals.delete(animal_id))
