"""
Exceptions raised while processing an area
"""


class RoadDensityError(Exception):
    """Base class for all road density errors"""


class InvalidInput(RoadDensityError):
    """Caller supplied a malformed or under-specified request"""


class InvalidPolygon(InvalidInput):
    """Polygon points cannot form a valid closed ring"""


class UpstreamFetchFailure(RoadDensityError):
    """A single Overpass query failed after all retries"""


class RequestCancelled(RoadDensityError):
    """Request was superseded by a newer one from the same client"""


class InternalFailure(RoadDensityError):
    """Unexpected fault while normalizing, tiling, clipping or aggregating"""
