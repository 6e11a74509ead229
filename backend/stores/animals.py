from __future__ import annotations

import logging
from typing import Any, Mapping

from db.database import Database
from db.sql import (
    ANIMAL_BBOX_WHERE,
    ANIMAL_COLUMNS,
    delete_returning_sql,
    insert_sql,
    select_sql,
    update_returning_sql,
)
from geo.aoi import BBox
from geo.ops import point_in_box
from geo.shapes import GeoPoint, parse_corner, parse_point
from records.errors import NotFoundError, ValidationError
from records.schemas import AnimalCreate, AnimalUpdate, parse_input
from records.types import Animal, ResolvedAnimal
from stores.categories import new_id
from stores.resolver import Resolver

logger = logging.getLogger(__name__)

TABLE = "animals"


class AnimalStore:
    """
    Individual animals with a point location.

    `get`/`list`/`find_within_box` resolve species and category by default;
    `find_by_species` returns raw records.
    """

    def __init__(self, db: Database, resolver: Resolver):
        self.db = db
        self.resolver = resolver

    def create(self, payload: AnimalCreate | Mapping[str, Any]) -> Animal:
        data = parse_input(AnimalCreate, payload)
        animal = Animal(
            id=new_id(),
            species_id=data.speciesId,
            location=data.location,
            name=data.name,
            notes=data.notes,
        )
        self.db.execute(insert_sql(TABLE, ANIMAL_COLUMNS), _encode(animal))
        logger.info("created animal %s (species %s)", animal.id, animal.species_id)
        return animal

    def get(self, animal_id: str, *, resolve: bool = True) -> Animal | ResolvedAnimal:
        row = self.db.fetch_one(select_sql(TABLE, ANIMAL_COLUMNS, where="id = ?"), [animal_id])
        if row is None:
            raise NotFoundError("Animal", animal_id)
        animal = _decode(row)
        return self.resolver.resolve(animal) if resolve else animal

    def list(self, *, resolve: bool = True) -> list[Animal] | list[ResolvedAnimal]:
        animals = [_decode(r) for r in self.db.fetch_all(select_sql(TABLE, ANIMAL_COLUMNS))]
        return self.resolver.resolve_many(animals) if resolve else animals

    def update(self, animal_id: str, payload: AnimalUpdate | Mapping[str, Any]) -> Animal:
        changes = parse_input(AnimalUpdate, payload).changes()
        if not changes:
            return self.get(animal_id, resolve=False)

        columns: list[str] = []
        values: list[Any] = []
        if "speciesId" in changes:
            columns.append("species_id")
            values.append(changes["speciesId"])
        if "location" in changes:
            loc: GeoPoint | None = changes["location"]
            columns.extend(["lon", "lat"])
            values.extend([loc.lon, loc.lat] if loc else [None, None])
        for key in ("name", "notes"):
            if key in changes:
                columns.append(key)
                values.append(changes[key])

        row = self.db.fetch_one(
            update_returning_sql(TABLE, columns, ANIMAL_COLUMNS),
            [*values, animal_id],
        )
        if row is None:
            raise NotFoundError("Animal", animal_id)
        logger.info("updated animal %s (%s)", animal_id, ", ".join(sorted(changes)))
        return _decode(row)

    def delete(self, animal_id: str) -> Animal:
        row = self.db.fetch_one(delete_returning_sql(TABLE, ANIMAL_COLUMNS), [animal_id])
        if row is None:
            raise NotFoundError("Animal", animal_id)
        logger.info("deleted animal %s", animal_id)
        return _decode(row)

    def find_within_box(self, top_right: str, bottom_left: str) -> list[ResolvedAnimal]:
        """
        Animals inside the closed rectangle spanned by two "lon,lat" corners.
        """
        box = BBox.from_corners(parse_corner(top_right), parse_corner(bottom_left))
        rows = self.db.fetch_all(
            select_sql(TABLE, ANIMAL_COLUMNS, where=ANIMAL_BBOX_WHERE),
            [box.min_lon, box.max_lon, box.min_lat, box.max_lat],
        )
        animals = [
            a for a in (_decode(r) for r in rows)
            if a.location is not None and point_in_box(a.location, box)
        ]
        logger.debug("box query %s: %d animals", box, len(animals))
        return self.resolver.resolve_many(animals)

    def find_by_species(self, species_id: str) -> list[Animal]:
        rows = self.db.fetch_all(
            select_sql(TABLE, ANIMAL_COLUMNS, where="species_id = ?"), [species_id]
        )
        return [_decode(r) for r in rows]


def _encode(animal: Animal) -> list[Any]:
    loc = animal.location
    return [
        animal.id,
        animal.species_id,
        loc.lon if loc else None,
        loc.lat if loc else None,
        animal.name,
        animal.notes,
    ]


def _decode(row: tuple) -> Animal:
    aid, species_id, lon, lat, name, notes = row
    return Animal(
        id=str(aid),
        species_id=str(species_id),
        location=_location(aid, lon, lat),
        name=name,
        notes=notes,
    )


def _location(aid: Any, lon: Any, lat: Any) -> GeoPoint | None:
    if lon is None or lat is None:
        return None
    try:
        return parse_point((lon, lat))
    except ValidationError:
        # Rows written around the stores may hold out-of-range coordinates;
        # they read back without a location and drop out of spatial queries.
        logger.debug("animal %s has malformed location (%r, %r)", aid, lon, lat)
        return None
