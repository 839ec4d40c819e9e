"""
Segment clipping

Ways are cut into consecutive-point segments. A segment is kept when its
midpoint lies inside the polygon; segments straddling the boundary are
judged by the midpoint alone, so long segments near a concave boundary may
be misattributed.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from shapely.geometry import Point
from shapely.prepared import prep

from .geometry_utils import BoundingBox, Coord, Polygon, midpoint

ROAD = "road"
TRAIL = "trail"


@dataclass(frozen=True)
class Segment:
    """Two consecutive [lon, lat] points of a way"""
    start: Coord
    end: Coord
    category: str

    def to_latlon(self) -> List[List[float]]:
        """Segment in the caller's [lat, lon] convention"""
        return [[self.start[1], self.start[0]], [self.end[1], self.end[0]]]


@dataclass
class ClipResult:
    """Segments retained for one processing unit"""
    roads: List[Segment] = field(default_factory=list)
    trails: List[Segment] = field(default_factory=list)
    prefiltered: int = 0  # Rejected by the bounds test

    def add(self, segment: Segment):
        if segment.category == ROAD:
            self.roads.append(segment)
        else:
            self.trails.append(segment)


def split_segments(points: Sequence[Sequence[float]]) -> List[Tuple[Coord, Coord]]:
    """Consecutive point pairs of a polyline"""
    return [
        ((points[i][0], points[i][1]), (points[i + 1][0], points[i + 1][1]))
        for i in range(len(points) - 1)
    ]


class SegmentClipper:
    """Keeps the segments of classified ways whose midpoint is inside the polygon"""

    def __init__(self, polygon: Polygon):
        self.polygon = polygon
        # covers() counts the boundary as inside
        self._shape = prep(polygon.to_shapely())

    def clip(
        self,
        classified_ways: Iterable[Tuple[str, Sequence[Sequence[float]]]],
        bounds: BoundingBox,
        exclusive_max: bool = False
    ) -> ClipResult:
        """
        Clip classified ways against the polygon

        Args:
            classified_ways: (category, [lon, lat] points) per way
            bounds: Region of the processing unit, used as a cheap pre-filter
            exclusive_max: Treat bounds as half-open (grid tiles)

        Returns:
            ClipResult with retained road and trail segments
        """
        result = ClipResult()
        for category, points in classified_ways:
            for start, end in split_segments(points):
                mx, my = midpoint(start, end)
                if not bounds.contains(mx, my, exclusive_max=exclusive_max):
                    result.prefiltered += 1
                    continue
                if self._shape.covers(Point(mx, my)):
                    result.add(Segment(start, end, category))
        return result
