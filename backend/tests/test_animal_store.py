from __future__ import annotations

import itertools

import pytest

from geo.shapes import GeoPoint
from records.errors import NotFoundError, ValidationError
from records.types import Animal, ResolvedAnimal


@pytest.fixture
def wolf(stores):
    mammal = stores.categories.create("Mammal")
    return stores.species.create({"name": "Wolf", "categoryId": mammal.id})


def test_create_requires_species_id(stores):
    with pytest.raises(ValidationError):
        stores.animals.create({"location": [5, 5]})
    with pytest.raises(ValidationError):
        stores.animals.create({"speciesId": ""})


@pytest.mark.parametrize("location", [[5], [5, 5, 5], [200, 0], [0, 91], "5,5", ["a", 1]])
def test_create_rejects_bad_location(stores, wolf, location):
    with pytest.raises(ValidationError):
        stores.animals.create({"speciesId": wolf.id, "location": location})


def test_create_get_round_trip(stores, wolf):
    a = stores.animals.create(
        {"speciesId": wolf.id, "location": [5, 5], "name": "Harmaa", "notes": "collared"}
    )
    raw = stores.animals.get(a.id, resolve=False)
    assert isinstance(raw, Animal)
    assert raw == a
    assert raw.to_dict() == {
        "id": a.id,
        "speciesId": wolf.id,
        "location": [5, 5],
        "name": "Harmaa",
        "notes": "collared",
    }


def test_get_resolves_by_default(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id, "location": [5, 5]})
    got = stores.animals.get(a.id)
    assert isinstance(got, ResolvedAnimal)
    assert got.species.id == wolf.id
    assert got.species.category.name == "Mammal"
    assert got == stores.animals.get(a.id)
    assert "speciesId" not in got.to_dict()


def test_list_resolves_and_keeps_order(stores, wolf):
    first = stores.animals.create({"speciesId": wolf.id})
    second = stores.animals.create({"speciesId": "missing"})
    listed = stores.animals.list()
    assert [a.id for a in listed] == [first.id, second.id]
    assert listed[0].species.name == "Wolf"
    assert listed[1].species is None
    assert stores.animals.list(resolve=False) == [first, second]


def test_dangling_species_resolves_to_none(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id, "location": [1, 1]})
    stores.species.delete(wolf.id)
    got = stores.animals.get(a.id)
    assert got.species is None
    assert got.to_dict()["species"] is None
    assert stores.animals.find_within_box("2,2", "0,0")[0].species is None


def test_dangling_category_keeps_species(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id})
    stores.categories.delete(wolf.category_id)
    got = stores.animals.get(a.id)
    assert got.species.id == wolf.id
    assert got.species.category is None


def test_update_merges_fields(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id, "location": [5, 5], "name": "Harmaa"})
    moved = stores.animals.update(a.id, {"location": [6, 7]})
    assert moved.location == GeoPoint(6.0, 7.0)
    assert moved.name == "Harmaa"
    assert moved.species_id == wolf.id
    assert moved.notes is None

    renamed = stores.animals.update(a.id, {"notes": "limping"})
    assert renamed.location == moved.location
    assert renamed.notes == "limping"

    unplaced = stores.animals.update(a.id, {"location": None})
    assert unplaced.location is None
    assert stores.animals.find_within_box("180,90", "-180,-90") == []


def test_update_validation_and_missing(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id})
    with pytest.raises(ValidationError):
        stores.animals.update(a.id, {"speciesId": None})
    with pytest.raises(ValidationError):
        stores.animals.update(a.id, {"location": [0, 100]})
    with pytest.raises(NotFoundError):
        stores.animals.update("missing", {"name": "x"})


def test_delete_then_get(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id})
    assert stores.animals.delete(a.id) == a
    with pytest.raises(NotFoundError):
        stores.animals.get(a.id)
    with pytest.raises(NotFoundError):
        stores.animals.delete(a.id)


def test_find_by_species_returns_raw_records(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id})
    stores.animals.create({"speciesId": "other"})
    assert stores.animals.find_by_species(wolf.id) == [a]
    assert stores.animals.find_by_species("nobody") == []


def test_find_within_box_matches_closed_range(stores, wolf):
    coords = [-1, 0, 3, 10, 11]
    created = {}
    for lon, lat in itertools.product(coords, coords):
        a = stores.animals.create({"speciesId": wolf.id, "location": [lon, lat]})
        created[a.id] = (lon, lat)
    stores.animals.create({"speciesId": wolf.id})

    found = stores.animals.find_within_box("10,10", "0,0")
    expected = {aid for aid, (lon, lat) in created.items() if 0 <= lon <= 10 and 0 <= lat <= 10}
    assert {a.id for a in found} == expected
    assert len(expected) == 9
    assert all(a.species.id == wolf.id for a in found)


def test_find_within_box_tolerates_swapped_corners(stores, wolf):
    a = stores.animals.create({"speciesId": wolf.id, "location": [5, 5]})
    assert [x.id for x in stores.animals.find_within_box("0,0", "10,10")] == [a.id]


@pytest.mark.parametrize(
    "top_right, bottom_left",
    [("10,10", ""), ("10", "0,0"), ("a,b", "0,0"), ("10,10", "0,0,0"), ("190,10", "0,0")],
)
def test_find_within_box_rejects_malformed_corners(stores, top_right, bottom_left):
    with pytest.raises(ValidationError):
        stores.animals.find_within_box(top_right, bottom_left)


def test_malformed_stored_location_reads_as_absent(stores, db, wolf):
    db.execute(
        "INSERT INTO animals (id, species_id, lon, lat) VALUES (?, ?, ?, ?)",
        ["broken", wolf.id, 5.0, 95.0],
    )
    assert stores.animals.get("broken", resolve=False).location is None
    assert stores.animals.find_within_box("180,90", "-180,-90") == []
