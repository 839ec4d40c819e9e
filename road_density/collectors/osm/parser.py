"""
OSM response parser

Parses Overpass API responses into OSMWay objects
"""

from typing import Dict, Any, List
from .models import OSMWay


class OSMResponseParser:
    """Parses Overpass API responses"""

    @staticmethod
    def parse_ways(data: Dict[str, Any]) -> List[OSMWay]:
        """
        Parse Overpass response into ways

        Only 'out geom' responses carry inline geometry; ways without it
        (or with a single point) cannot produce segments and are dropped.

        Args:
            data: JSON response from Overpass API

        Returns:
            List of ways with [lon, lat] geometry
        """
        ways = []

        for element in data.get("elements", []):
            if element.get("type", "way") != "way":
                continue

            # Overpass 'out geom' provides geometry as list of {lat, lon} objects
            # Convert to [lon, lat] format for consistency
            geometry = []
            for node in element.get("geometry") or []:
                if isinstance(node, dict):
                    if node.get("lat") is None or node.get("lon") is None:
                        continue
                    geometry.append([node["lon"], node["lat"]])
                elif isinstance(node, list) and len(node) >= 2:
                    # Format: [lon, lat] (already correct)
                    geometry.append([node[0], node[1]])

            if len(geometry) < 2:
                continue

            ways.append(OSMWay(
                id=element.get("id", 0),
                tags=element.get("tags") or {},
                geometry=geometry
            ))

        return ways
