from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from records.errors import ValidationError
from seeds.types import SeedDataset
from stores import Stores

logger = logging.getLogger(__name__)


def load_seed_file(path: Path) -> SeedDataset:
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"Invalid seed yaml root: {path}")
    try:
        return SeedDataset.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid seed dataset {path}: {exc}") from exc


def seed_stores(stores: Stores, dataset: SeedDataset) -> dict[str, int]:
    """
    Insert a dataset into the stores, resolving local keys to generated ids.

    Seeds only an empty database so restarts don't duplicate records.
    """
    if stores.categories.list():
        logger.info("database already populated, skipping seed %s", dataset.id)
        return {"categories": 0, "species": 0, "animals": 0}

    cat_ids: dict[str, str] = {}
    for c in dataset.categories:
        cat_ids[c.key] = stores.categories.create({"name": c.name}).id

    species_ids: dict[str, str] = {}
    for s in dataset.species:
        created = stores.species.create(
            {"name": s.name, "categoryId": cat_ids[s.category], "geometry": s.geometry}
        )
        species_ids[s.key] = created.id

    for a in dataset.animals:
        stores.animals.create(
            {
                "speciesId": species_ids[a.species],
                "location": a.location,
                "name": a.name,
                "notes": a.notes,
            }
        )

    counts = {
        "categories": len(dataset.categories),
        "species": len(dataset.species),
        "animals": len(dataset.animals),
    }
    logger.info("seeded %s: %s", dataset.id, counts)
    return counts
