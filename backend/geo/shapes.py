from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from records.errors import ValidationError

LON_RANGE = (-180.0, 180.0)
LAT_RANGE = (-90.0, 90.0)


@dataclass(frozen=True)
class GeoPoint:
    lon: float
    lat: float

    def as_list(self) -> list[float]:
        return [self.lon, self.lat]


@dataclass(frozen=True)
class GeoPolygon:
    """
    A single outer ring in lon/lat degrees.

    The ring is kept exactly as supplied (closing point optional), so a stored
    polygon reads back the way it was written.
    """

    ring: tuple[tuple[float, float], ...]

    def as_list(self) -> list[list[float]]:
        return [[lon, lat] for lon, lat in self.ring]

    def closed_ring(self) -> list[tuple[float, float]]:
        ring = list(self.ring)
        if ring and ring[0] != ring[-1]:
            return [*ring, ring[0]]
        return ring

    def bounds(self) -> tuple[float, float, float, float]:
        lons = [c[0] for c in self.ring]
        lats = [c[1] for c in self.ring]
        return float(min(lons)), float(min(lats)), float(max(lons)), float(max(lats))


def parse_point(value: Any) -> GeoPoint:
    """
    Parse a `[lon, lat]` pair (list or tuple of two numbers) into a GeoPoint.
    """
    if isinstance(value, GeoPoint):
        return value
    if isinstance(value, dict) and value.get("type") == "Point":
        # GeoJSON Point: {"type": "Point", "coordinates": [lon, lat]}
        value = value.get("coordinates")
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValidationError(f"Expected a [longitude, latitude] pair, got {value!r}")
    lon = _coordinate(value[0], "longitude", LON_RANGE)
    lat = _coordinate(value[1], "latitude", LAT_RANGE)
    return GeoPoint(lon=lon, lat=lat)


def parse_corner(text: str | None) -> GeoPoint:
    """
    Parse a `"lon,lat"` query-string corner, e.g. `"24.94,60.17"`.
    """
    raw = (text or "").strip()
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2 or not all(parts):
        raise ValidationError(f"Expected 'longitude,latitude', got {text!r}")
    try:
        lon, lat = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise ValidationError(f"Expected 'longitude,latitude', got {text!r}") from exc
    return parse_point((lon, lat))


def parse_polygon(value: Any) -> GeoPolygon:
    """
    Parse a ring of `[lon, lat]` pairs into a GeoPolygon.

    Accepts a bare ring or a GeoJSON Polygon mapping (outer ring only).
    Fewer than 3 distinct vertices is a degenerate polygon.
    """
    if isinstance(value, GeoPolygon):
        return value
    if isinstance(value, dict):
        if value.get("type") != "Polygon":
            raise ValidationError(f"Unsupported geometry type: {value.get('type')!r}")
        rings = value.get("coordinates") or []
        if not isinstance(rings, (list, tuple)):
            raise ValidationError("Polygon coordinates must be a list of rings")
        value = rings[0] if rings else []
    if not isinstance(value, (list, tuple)):
        raise ValidationError("Polygon must be a list of [longitude, latitude] pairs")

    ring = tuple((p.lon, p.lat) for p in (parse_point(v) for v in value))
    if len(set(ring)) < 3:
        raise ValidationError("Polygon needs at least 3 distinct vertices")
    return GeoPolygon(ring=ring)


def _coordinate(value: Any, label: str, bounds: tuple[float, float]) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number, got {value!r}")
    v = float(value)
    if not math.isfinite(v) or not (bounds[0] <= v <= bounds[1]):
        raise ValidationError(f"{label} out of range: {value!r}")
    return v
