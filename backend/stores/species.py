from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping

from db.database import Database
from db.sql import (
    SPECIES_BBOX_WHERE,
    SPECIES_COLUMNS,
    delete_returning_sql,
    insert_sql,
    select_by_ids_sql,
    select_sql,
    update_returning_sql,
)
from geo.index import build_area_index
from geo.ops import bbox_of
from geo.shapes import GeoPolygon, parse_polygon
from records.errors import NotFoundError
from records.schemas import SpeciesCreate, SpeciesUpdate, parse_input
from records.types import ResolvedSpecies, Species
from stores.categories import CategoryStore, new_id

logger = logging.getLogger(__name__)

TABLE = "species"
_GEOMETRY_COLUMNS = ["ring_json", "min_lon", "min_lat", "max_lon", "max_lat"]


class SpeciesStore:
    """
    Species records plus the area query over their known ranges.

    `category_id` is a weak reference: it is never checked on write and
    resolves to None on read when the category is gone.
    """

    def __init__(self, db: Database, categories: CategoryStore):
        self.db = db
        self.categories = categories

    def create(self, payload: SpeciesCreate | Mapping[str, Any]) -> Species:
        data = parse_input(SpeciesCreate, payload)
        species = Species(
            id=new_id(),
            name=data.name,
            category_id=data.categoryId,
            geometry=data.geometry,
        )
        self.db.execute(
            insert_sql(TABLE, ["id", "name", "category_id", *_GEOMETRY_COLUMNS]),
            [species.id, species.name, species.category_id, *_geometry_values(species.geometry)],
        )
        logger.info("created species %s (%s)", species.id, species.name)
        return species

    def get(self, species_id: str, *, resolve: bool = False) -> Species | ResolvedSpecies:
        row = self.db.fetch_one(select_sql(TABLE, SPECIES_COLUMNS, where="id = ?"), [species_id])
        if row is None:
            raise NotFoundError("Species", species_id)
        species = _decode(row)
        if resolve:
            return self.resolve_many([species])[0]
        return species

    def list(self, *, resolve: bool = False) -> list[Species] | list[ResolvedSpecies]:
        rows = self.db.fetch_all(select_sql(TABLE, SPECIES_COLUMNS))
        species = [_decode(r) for r in rows]
        if resolve:
            return self.resolve_many(species)
        return species

    def get_many(self, ids: Iterable[str]) -> dict[str, Species]:
        wanted = sorted({i for i in ids if i})
        if not wanted:
            return {}
        rows = self.db.fetch_all(select_by_ids_sql(TABLE, SPECIES_COLUMNS, len(wanted)), wanted)
        return {s.id: s for s in (_decode(r) for r in rows)}

    def resolve_many(self, species: list[Species]) -> list[ResolvedSpecies]:
        cats = self.categories.get_many(s.category_id for s in species)
        return [ResolvedSpecies.of(s, cats.get(s.category_id)) for s in species]

    def update(self, species_id: str, payload: SpeciesUpdate | Mapping[str, Any]) -> Species:
        changes = parse_input(SpeciesUpdate, payload).changes()
        if not changes:
            return self.get(species_id)

        columns: list[str] = []
        values: list[Any] = []
        if "name" in changes:
            columns.append("name")
            values.append(changes["name"])
        if "categoryId" in changes:
            columns.append("category_id")
            values.append(changes["categoryId"])
        if "geometry" in changes:
            columns.extend(_GEOMETRY_COLUMNS)
            values.extend(_geometry_values(changes["geometry"]))

        row = self.db.fetch_one(
            update_returning_sql(TABLE, columns, SPECIES_COLUMNS),
            [*values, species_id],
        )
        if row is None:
            raise NotFoundError("Species", species_id)
        logger.info("updated species %s (%s)", species_id, ", ".join(sorted(changes)))
        return _decode(row)

    def delete(self, species_id: str) -> Species:
        # Animals referencing this species are left dangling on purpose.
        row = self.db.fetch_one(delete_returning_sql(TABLE, SPECIES_COLUMNS), [species_id])
        if row is None:
            raise NotFoundError("Species", species_id)
        logger.info("deleted species %s", species_id)
        return _decode(row)

    def find_by_area(self, polygon: GeoPolygon | Any) -> list[Species]:
        """
        Every species whose range intersects `polygon` (touching counts).

        Candidates come from a bbox-overlap prefilter in SQL; the exact test
        runs on an STRtree over those candidates.
        """
        area = parse_polygon(polygon)
        b = bbox_of(area)
        rows = self.db.fetch_all(
            select_sql(TABLE, SPECIES_COLUMNS, where=SPECIES_BBOX_WHERE),
            [b.min_lon, b.max_lon, b.min_lat, b.max_lat],
        )
        candidates = [_decode(r) for r in rows]
        index = build_area_index([(s, s.geometry) for s in candidates if s.geometry is not None])
        found = index.query(area)
        logger.debug("area query: %d candidates, %d matches", len(candidates), len(found))
        return found


def _geometry_values(geometry: GeoPolygon | None) -> list[Any]:
    if geometry is None:
        return [None, None, None, None, None]
    min_lon, min_lat, max_lon, max_lat = geometry.bounds()
    return [json.dumps(geometry.as_list()), min_lon, min_lat, max_lon, max_lat]


def _decode(row: tuple) -> Species:
    sid, name, category_id, ring_json = row
    geometry = None
    if ring_json:
        ring = json.loads(ring_json)
        geometry = GeoPolygon(ring=tuple((float(lon), float(lat)) for lon, lat in ring))
    return Species(id=str(sid), name=str(name), category_id=str(category_id), geometry=geometry)
