from __future__ import annotations

from dataclasses import dataclass

from geo.shapes import GeoPoint


@dataclass(frozen=True)
class BBox:
    """
    WGS84 bounding box in lon/lat degrees.

    Convention used throughout this repo:
    - minLon, minLat, maxLon, maxLat
    - boundaries are inclusive (closed rectangle)
    """

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def from_corners(cls, top_right: GeoPoint, bottom_left: GeoPoint) -> "BBox":
        """
        Build a box from two opposite corners.

        Swapped corners are tolerated: the result is always normalized.
        """
        return cls(
            min_lon=bottom_left.lon,
            min_lat=bottom_left.lat,
            max_lon=top_right.lon,
            max_lat=top_right.lat,
        ).normalized()

    def normalized(self) -> "BBox":
        min_lon = min(self.min_lon, self.max_lon)
        max_lon = max(self.min_lon, self.max_lon)
        min_lat = min(self.min_lat, self.max_lat)
        max_lat = max(self.min_lat, self.max_lat)
        return BBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)

    def contains(self, point: GeoPoint) -> bool:
        b = self.normalized()
        return b.min_lon <= point.lon <= b.max_lon and b.min_lat <= point.lat <= b.max_lat

