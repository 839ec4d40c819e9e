"""
Length and density aggregation

Sums geodesic segment lengths per category and shapes the result, leaving
out raw geometry when the combined length makes the payload too large.
"""

from typing import List, Optional

from loguru import logger

from .clipping import Segment
from .geometry_utils import segment_length_km
from ..models import AreaResult

# Degenerate rings (collinear points) leave float noise in the geodesic area
MIN_AREA_KM2 = 1e-6


def total_length_km(segments: List[Segment]) -> float:
    """Sum of geodesic segment lengths; overlapping ways are not deduplicated"""
    return sum(segment_length_km(s.start, s.end) for s in segments)


def _density(length_km: float, area_km2: float) -> Optional[float]:
    if area_km2 <= MIN_AREA_KM2:
        return None
    return length_km / area_km2


def aggregate(
    area_km2: float,
    roads: List[Segment],
    trails: List[Segment],
    max_geometry_km: float,
    units_total: int = 1,
    units_failed: int = 0
) -> AreaResult:
    """
    Build the area result from the retained segments

    Args:
        area_km2: Geodesic area of the polygon
        roads: Retained road segments
        trails: Retained trail segments
        max_geometry_km: Combined length above which geometry is omitted
        units_total: Number of processing units queried
        units_failed: Number of units whose fetch failed

    Returns:
        AreaResult; densities are None and density_defined False when the
        area is zero
    """
    km_roads = total_length_km(roads)
    km_trails = total_length_km(trails)
    km_total = km_roads + km_trails

    density_defined = area_km2 > MIN_AREA_KM2
    if not density_defined:
        logger.warning("Polygon area is zero, densities are undefined")

    geometry_omitted = km_total > max_geometry_km
    if geometry_omitted:
        logger.info(f"Combined length {km_total:.1f} km > {max_geometry_km} km, omitting segment geometry")

    return AreaResult(
        area=area_km2,
        total_km_roads=km_roads,
        total_km_trails=km_trails,
        total_km=km_total,
        density_roads=_density(km_roads, area_km2),
        density_trails=_density(km_trails, area_km2),
        density=_density(km_total, area_km2),
        density_defined=density_defined,
        road_segments=len(roads),
        trail_segments=len(trails),
        roads=None if geometry_omitted else [s.to_latlon() for s in roads],
        trails=None if geometry_omitted else [s.to_latlon() for s in trails],
        geometry_omitted=geometry_omitted,
        units_total=units_total,
        units_failed=units_failed,
    )
