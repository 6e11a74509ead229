from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from geo.shapes import GeoPoint, GeoPolygon


@dataclass(frozen=True)
class Category:
    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Species:
    id: str
    name: str
    # Weak reference: may point at a deleted category.
    category_id: str
    geometry: GeoPolygon | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "categoryId": self.category_id,
            "geometry": self.geometry.as_list() if self.geometry else None,
        }


@dataclass(frozen=True)
class Animal:
    id: str
    # Weak reference: may point at a deleted species.
    species_id: str
    location: GeoPoint | None = None
    name: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "speciesId": self.species_id,
            "location": self.location.as_list() if self.location else None,
            "name": self.name,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class ResolvedSpecies:
    """
    A species with its category inlined (None when the reference dangles).
    """

    id: str
    name: str
    category: Category | None
    geometry: GeoPolygon | None = None

    @classmethod
    def of(cls, species: Species, category: Category | None) -> "ResolvedSpecies":
        return cls(
            id=species.id,
            name=species.name,
            category=category,
            geometry=species.geometry,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.to_dict() if self.category else None,
            "geometry": self.geometry.as_list() if self.geometry else None,
        }


@dataclass(frozen=True)
class ResolvedAnimal:
    """
    An animal with species and category inlined (species None when dangling).
    """

    id: str
    species: ResolvedSpecies | None
    location: GeoPoint | None = None
    name: str | None = None
    notes: str | None = None

    @classmethod
    def of(cls, animal: Animal, species: ResolvedSpecies | None) -> "ResolvedAnimal":
        return cls(
            id=animal.id,
            species=species,
            location=animal.location,
            name=animal.name,
            notes=animal.notes,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "species": self.species.to_dict() if self.species else None,
            "location": self.location.as_list() if self.location else None,
            "name": self.name,
            "notes": self.notes,
        }
