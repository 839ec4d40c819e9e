"""
Overpass QL query building
"""

from typing import List, Optional, Sequence

from ...config import PipelineConfig, get_config


def poly_filter(ring: Sequence[Sequence[float]]) -> str:
    """
    Serialize a [lon, lat] ring as an Overpass poly string

    Overpass expects "lat lon lat lon ..."; the closing vertex is dropped
    since Overpass closes the polygon itself.
    """
    vertices = list(ring)
    if len(vertices) > 1 and tuple(vertices[0]) == tuple(vertices[-1]):
        vertices = vertices[:-1]
    return " ".join(f"{lat} {lon}" for lon, lat in vertices)


def highway_pattern(tags: List[str]) -> str:
    """Anchored alternation over highway values"""
    return "^(" + "|".join(tags) + ")$"


def build_ways_query(ring: Sequence[Sequence[float]], config: Optional[PipelineConfig] = None) -> str:
    """
    Build the query for all road and trail ways inside a region

    Args:
        ring: Closed [lon, lat] ring of the region (polygon or tile)
        config: Pipeline config, global one if omitted

    Returns:
        Overpass QL query returning ways with inline geometry
    """
    config = config or get_config()
    pattern = highway_pattern(config.road_tags + config.trail_tags)
    return (
        f'[out:json][timeout:{config.api.overpass_timeout}];'
        f'way["highway"~"{pattern}"](poly:"{poly_filter(ring)}");'
        f'out body geom;'
    )
