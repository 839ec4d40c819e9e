"""
Analysis modules: polygon geometry, tiling, clipping and aggregation
"""

from .geometry_utils import BoundingBox, Polygon, normalize_polygon
from .tiling import ProcessingUnit, TilePlanner
from .clipping import ClipResult, Segment, SegmentClipper
from .aggregation import aggregate

__all__ = [
    "BoundingBox",
    "Polygon",
    "normalize_polygon",
    "ProcessingUnit",
    "TilePlanner",
    "ClipResult",
    "Segment",
    "SegmentClipper",
    "aggregate",
]
