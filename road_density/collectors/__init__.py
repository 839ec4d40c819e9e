"""
Data collectors for road & trail density

- OSMWayCollector: Highway ways from OpenStreetMap via the Overpass API
"""

from .osm import OSMWayCollector

__all__ = [
    "OSMWayCollector",
]
