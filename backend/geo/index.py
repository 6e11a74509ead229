from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Sequence, TypeVar

from shapely.geometry.base import BaseGeometry
from shapely.strtree import STRtree

from geo.ops import to_shape
from geo.shapes import GeoPoint, GeoPolygon

T = TypeVar("T")


@dataclass
class AreaIndex(Generic[T]):
    """
    STRtree over a batch of (item, geometry) pairs.

    Built per query from the rows a bbox prefilter returned; `query` keeps the
    original item order so results stay stable across calls.
    """

    items: list[T]
    geoms: list[BaseGeometry]
    _tree: STRtree | None = field(default=None, repr=False)

    def query(self, area: GeoPolygon | GeoPoint) -> list[T]:
        if not self.items:
            return []
        tree = self._tree
        if tree is None:
            tree = STRtree(self.geoms)
            self._tree = tree
        idxs = _to_int_list(tree.query(to_shape(area), predicate="intersects"))
        return [self.items[i] for i in sorted(set(idxs))]


def build_area_index(pairs: Sequence[tuple[T, GeoPolygon | GeoPoint]]) -> AreaIndex[T]:
    items: list[T] = []
    geoms: list[BaseGeometry] = []
    for item, geom in pairs:
        shape = to_shape(geom)
        if shape.is_empty:
            continue
        items.append(item)
        geoms.append(shape)
    return AreaIndex(items=items, geoms=geoms)


def _to_int_list(idxs: Any) -> list[int]:
    # Shapely STRtree returns numpy.ndarray of indices.
    if idxs is None:
        return []
    try:
        return [int(i) for i in idxs.tolist()]
    except AttributeError:
        return [int(i) for i in idxs]
