from __future__ import annotations

from records.types import Animal, ResolvedAnimal
from stores.species import SpeciesStore


class Resolver:
    """
    Inlines Animal -> Species -> Category.

    Depth is fixed at two levels, so there are no cycles to detect. Read-only:
    a dangling reference resolves to None instead of raising.
    """

    def __init__(self, species: SpeciesStore):
        self.species = species

    def resolve(self, animal: Animal) -> ResolvedAnimal:
        return self.resolve_many([animal])[0]

    def resolve_many(self, animals: list[Animal]) -> list[ResolvedAnimal]:
        if not animals:
            return []
        # One lookup per level regardless of how many animals are resolved.
        found = self.species.get_many(a.species_id for a in animals)
        resolved = {
            s.id: s for s in self.species.resolve_many(list(found.values()))
        }
        return [ResolvedAnimal.of(a, resolved.get(a.species_id)) for a in animals]
