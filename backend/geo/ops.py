from __future__ import annotations

from shapely.geometry import Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

from geo.aoi import BBox
from geo.shapes import GeoPoint, GeoPolygon

# Coordinates are treated as planar lon/lat degrees: no great-circle correction.


def point_in_box(point: GeoPoint, box: BBox) -> bool:
    # Closed rectangle: boundary points are inside.
    return box.contains(point)


def polygon_intersects(polygon: GeoPolygon, target: GeoPoint | GeoPolygon) -> bool:
    """
    True when `target` (point or polygon) overlaps `polygon`, boundary included.
    """
    return bool(to_shape(polygon).intersects(to_shape(target)))


def bbox_of(geom: GeoPoint | GeoPolygon) -> BBox:
    if isinstance(geom, GeoPoint):
        return BBox(min_lon=geom.lon, min_lat=geom.lat, max_lon=geom.lon, max_lat=geom.lat)
    min_lon, min_lat, max_lon, max_lat = geom.bounds()
    return BBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)


def to_shape(geom: GeoPoint | GeoPolygon) -> BaseGeometry:
    if isinstance(geom, GeoPoint):
        return Point(geom.lon, geom.lat)
    poly = Polygon(geom.closed_ring())
    if not poly.is_valid:
        # Bow-ties keep both lobes (MultiPolygon); collinear rings become a LineString.
        return make_valid(poly)
    return poly
