from __future__ import annotations

import pytest

from records.errors import NotFoundError, ValidationError
from records.types import ResolvedSpecies, Species

SQUARE_0_10 = [[0, 0], [0, 10], [10, 10], [10, 0]]


@pytest.fixture
def mammal(stores):
    return stores.categories.create("Mammal")


def test_create_get_round_trip(stores, mammal):
    s = stores.species.create({"name": "Wolf", "categoryId": mammal.id, "geometry": SQUARE_0_10})
    got = stores.species.get(s.id)
    assert isinstance(got, Species)
    assert got == s
    assert got.to_dict() == {
        "id": s.id,
        "name": "Wolf",
        "categoryId": mammal.id,
        "geometry": SQUARE_0_10,
    }


def test_get_is_idempotent(stores, mammal):
    s = stores.species.create({"name": "Wolf", "categoryId": mammal.id})
    assert stores.species.get(s.id) == stores.species.get(s.id)


@pytest.mark.parametrize(
    "payload",
    [
        {"categoryId": "c1"},
        {"name": "Wolf"},
        {"name": "", "categoryId": "c1"},
        {"name": "Wolf", "categoryId": "c1", "geometry": [[0, 0], [1, 1]]},
        {"name": "Wolf", "categoryId": "c1", "geometry": [[0, 0], [0, 200], [1, 1]]},
    ],
)
def test_create_validation(stores, payload):
    with pytest.raises(ValidationError):
        stores.species.create(payload)


def test_create_does_not_check_category_exists(stores):
    s = stores.species.create({"name": "Ghost", "categoryId": "missing"})
    resolved = stores.species.get(s.id, resolve=True)
    assert isinstance(resolved, ResolvedSpecies)
    assert resolved.category is None


def test_resolve_inlines_category(stores, mammal):
    s = stores.species.create({"name": "Wolf", "categoryId": mammal.id})
    resolved = stores.species.get(s.id, resolve=True)
    assert resolved.category == mammal
    assert resolved.to_dict()["category"] == {"id": mammal.id, "name": "Mammal"}
    assert "categoryId" not in resolved.to_dict()
    assert [r.category for r in stores.species.list(resolve=True)] == [mammal]


def test_update_changes_only_given_fields(stores, mammal):
    s = stores.species.create({"name": "Wolf", "categoryId": mammal.id, "geometry": SQUARE_0_10})
    updated = stores.species.update(s.id, {"name": "Grey wolf"})
    assert updated.name == "Grey wolf"
    assert updated.category_id == s.category_id
    assert updated.geometry == s.geometry
    assert stores.species.get(s.id) == updated


def test_update_geometry_and_clear(stores, mammal):
    s = stores.species.create({"name": "Wolf", "categoryId": mammal.id})
    moved = stores.species.update(s.id, {"geometry": [[20, 20], [20, 30], [30, 30]]})
    assert moved.geometry.as_list() == [[20.0, 20.0], [20.0, 30.0], [30.0, 30.0]]
    assert stores.species.find_by_area([[21, 25], [21, 26], [22, 26]]) == [moved]

    cleared = stores.species.update(s.id, {"geometry": None})
    assert cleared.geometry is None
    assert cleared.name == "Wolf"
    assert stores.species.find_by_area([[21, 25], [21, 26], [22, 26]]) == []


def test_update_rejects_nulling_required_fields(stores, mammal):
    s = stores.species.create({"name": "Wolf", "categoryId": mammal.id})
    with pytest.raises(ValidationError):
        stores.species.update(s.id, {"categoryId": None})
    with pytest.raises(ValidationError):
        stores.species.update(s.id, {"geometry": [[0, 0]]})


def test_update_delete_missing(stores):
    with pytest.raises(NotFoundError):
        stores.species.update("missing", {"name": "x"})
    with pytest.raises(NotFoundError):
        stores.species.update("missing", {})
    with pytest.raises(NotFoundError):
        stores.species.delete("missing")


def test_delete_then_get(stores, mammal):
    s = stores.species.create({"name": "Wolf", "categoryId": mammal.id})
    assert stores.species.delete(s.id) == s
    with pytest.raises(NotFoundError):
        stores.species.get(s.id)
    assert stores.species.list() == []


def test_find_by_area(stores, mammal):
    wolf = stores.species.create({"name": "Wolf", "categoryId": mammal.id, "geometry": SQUARE_0_10})
    far = stores.species.create(
        {"name": "Seal", "categoryId": mammal.id, "geometry": [[50, 50], [50, 60], [60, 60]]}
    )
    stores.species.create({"name": "Nomad", "categoryId": mammal.id})

    assert stores.species.find_by_area([[4, 4], [4, 6], [6, 6], [6, 4]]) == [wolf]
    assert stores.species.find_by_area(SQUARE_0_10) == [wolf]
    assert stores.species.find_by_area([[-10, -10], [-10, 70], [70, 70], [70, -10]]) == [wolf, far]
    # Touching the edge counts.
    assert stores.species.find_by_area([[10, 0], [10, 5], [15, 5]]) == [wolf]
    assert stores.species.find_by_area([[20, 20], [20, 30], [30, 30]]) == []


def test_find_by_area_bbox_overlap_is_not_enough(stores, mammal):
    # Triangle whose bbox overlaps the query square but whose area does not.
    tri = stores.species.create(
        {"name": "Edge", "categoryId": mammal.id, "geometry": [[0, 0], [10, 0], [10, 10]]}
    )
    assert stores.species.find_by_area([[0, 8], [0, 10], [2, 10], [2, 8]]) == []
    assert stores.species.find_by_area([[8, 1], [8, 2], [9, 2], [9, 1]]) == [tri]


def test_find_by_area_rejects_degenerate_polygon(stores):
    with pytest.raises(ValidationError):
        stores.species.find_by_area([[0, 0], [1, 1]])


def test_find_by_area_matches_each_bowtie_lobe(stores, mammal):
    bow = stores.species.create(
        {"name": "Bow", "categoryId": mammal.id, "geometry": [[0, 0], [10, 10], [10, 0], [0, 10]]}
    )
    assert stores.species.find_by_area([[1, 4], [1, 6], [2, 6], [2, 4]]) == [bow]
    assert stores.species.find_by_area([[8, 4], [8, 6], [9, 6], [9, 4]]) == [bow]
    # Pinch region above the crossing point lies in neither lobe.
    assert stores.species.find_by_area([[4, 8], [4, 9], [6, 9], [6, 8]]) == []


def test_find_by_area_matches_collinear_range(stores, mammal):
    flat = stores.species.create(
        {"name": "Flat", "categoryId": mammal.id, "geometry": [[0, 0], [5, 0], [10, 0]]}
    )
    assert stores.species.find_by_area([[-1, -1], [-1, 1], [11, 1], [11, -1]]) == [flat]
    assert stores.species.find_by_area([[2, 1], [2, 2], [3, 2], [3, 1]]) == []
