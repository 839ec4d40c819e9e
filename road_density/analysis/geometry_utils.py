"""
Geometry utilities for polygon normalization and geodesic measurements

Callers hand over points latitude-first (map convention); everything in
this module works in [lon, lat] order, the convention shapely and pyproj
expect.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, List, Sequence, Tuple

from pyproj import Geod
from shapely.geometry import Polygon as ShapelyPolygon, box

from ..errors import InvalidPolygon

Coord = Tuple[float, float]

# WGS84 ellipsoid, shared by all measurements
geod = Geod(ellps="WGS84")


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounds in [lon, lat] degrees"""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float, exclusive_max: bool = False) -> bool:
        """
        Cheap point-in-box test

        With exclusive_max the box is half-open, so a point lying on an edge
        shared by two grid cells belongs to exactly one of them.
        """
        if x < self.min_x or y < self.min_y:
            return False
        if exclusive_max:
            return x < self.max_x and y < self.max_y
        return x <= self.max_x and y <= self.max_y

    def to_shapely(self):
        return box(self.min_x, self.min_y, self.max_x, self.max_y)

    def ring(self) -> Tuple[Coord, ...]:
        """Closed counter-clockwise ring starting at the south-west corner"""
        return (
            (self.min_x, self.min_y),
            (self.max_x, self.min_y),
            (self.max_x, self.max_y),
            (self.min_x, self.max_y),
            (self.min_x, self.min_y),
        )


@dataclass(frozen=True)
class Polygon:
    """Closed ring of [lon, lat] vertices; first vertex == last vertex"""
    ring: Tuple[Coord, ...]

    @property
    def vertices(self) -> Tuple[Coord, ...]:
        """Ring without the closing duplicate"""
        return self.ring[:-1]

    def to_shapely(self) -> ShapelyPolygon:
        return ShapelyPolygon(self.ring)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, Real) and not isinstance(value, bool)


def normalize_polygon(points: Any) -> Polygon:
    """
    Build a closed [lon, lat] Polygon from caller points given as [lat, lon]

    Args:
        points: Sequence of [lat, lon] pairs, open or already closed

    Returns:
        Polygon whose ring is closed

    Raises:
        InvalidPolygon: If the input is not a list of numeric pairs, holds
            out-of-range coordinates, or has fewer than 3 distinct points
    """
    if not isinstance(points, (list, tuple)):
        raise InvalidPolygon("Polygon not provided")

    coords: List[Coord] = []
    for i, point in enumerate(points):
        if not isinstance(point, (list, tuple)) or len(point) != 2:
            raise InvalidPolygon(f"Point {i} is not a [lat, lon] pair")
        lat, lon = point
        if not (_is_number(lat) and _is_number(lon)):
            raise InvalidPolygon(f"Point {i} has non-numeric coordinates")
        try:
            lat, lon = float(lat), float(lon)
        except (OverflowError, ValueError):
            raise InvalidPolygon(f"Point {i} has coordinates too large to represent")
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidPolygon(f"Point {i} has non-finite coordinates")
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            raise InvalidPolygon(f"Point {i} is out of range: ({lat}, {lon})")
        coords.append((lon, lat))

    if len(set(coords)) < 3:
        raise InvalidPolygon("At least 3 distinct points are required")

    if coords[0] != coords[-1]:
        coords.append(coords[0])

    return Polygon(ring=tuple(coords))


def bounding_box(polygon: Polygon) -> BoundingBox:
    """Calculate bounding box of polygon"""
    xs = [c[0] for c in polygon.ring]
    ys = [c[1] for c in polygon.ring]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))


def polygon_area_km2(polygon: Polygon) -> float:
    """Geodesic area on the WGS84 ellipsoid in km² (unsigned)"""
    lons = [c[0] for c in polygon.ring]
    lats = [c[1] for c in polygon.ring]
    area_m2, _ = geod.polygon_area_perimeter(lons, lats)
    return abs(area_m2) / 1_000_000


def segment_length_km(start: Sequence[float], end: Sequence[float]) -> float:
    """Geodesic length of a [lon, lat] -> [lon, lat] segment in km"""
    return geod.line_length([start[0], end[0]], [start[1], end[1]]) / 1000.0


def midpoint(start: Sequence[float], end: Sequence[float]) -> Coord:
    """Arithmetic midpoint in degree space"""
    return ((start[0] + end[0]) / 2.0, (start[1] + end[1]) / 2.0)
