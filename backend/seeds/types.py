from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from geo.shapes import parse_point, parse_polygon


class SeedCategory(BaseModel):
    # Local key used by species entries in the same file; not persisted.
    key: str
    name: str


class SeedSpecies(BaseModel):
    key: str
    name: str
    category: str
    # Raw [[lon, lat], ...] ring; checked here so a bad file fails before any insert.
    geometry: list[list[float]] | None = None

    @field_validator("geometry")
    @classmethod
    def check_geometry(cls, v: list[list[float]] | None) -> list[list[float]] | None:
        if v is not None:
            parse_polygon(v)
        return v


class SeedAnimal(BaseModel):
    species: str
    location: list[float] | None = None
    name: str | None = None
    notes: str | None = None

    @field_validator("location")
    @classmethod
    def check_location(cls, v: list[float] | None) -> list[float] | None:
        if v is not None:
            parse_point(v)
        return v


class SeedDataset(BaseModel):
    """
    A self-contained YAML dataset: categories, species and animals linked by key.
    """

    id: str
    title: str = ""
    categories: list[SeedCategory] = Field(default_factory=list)
    species: list[SeedSpecies] = Field(default_factory=list)
    animals: list[SeedAnimal] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_keys(self) -> "SeedDataset":
        cat_keys = {c.key for c in self.categories}
        sp_keys = {s.key for s in self.species}
        missing: list[Any] = [s.category for s in self.species if s.category not in cat_keys]
        missing += [a.species for a in self.animals if a.species not in sp_keys]
        if missing:
            raise ValueError(f"Unknown keys referenced in seed dataset: {sorted(set(missing))}")
        return self
