"""
Record stores.

Categories, species and animals live in one DuckDB database; references between
them are weak (ids only) and resolved on read.
"""

from __future__ import annotations

from dataclasses import dataclass

from db.database import Database
from stores.animals import AnimalStore
from stores.categories import CategoryStore
from stores.resolver import Resolver
from stores.species import SpeciesStore


@dataclass(frozen=True)
class Stores:
    categories: CategoryStore
    species: SpeciesStore
    animals: AnimalStore
    resolver: Resolver


def build_stores(db: Database) -> Stores:
    categories = CategoryStore(db)
    species = SpeciesStore(db, categories)
    resolver = Resolver(species)
    animals = AnimalStore(db, resolver)
    return Stores(categories=categories, species=species, animals=animals, resolver=resolver)
