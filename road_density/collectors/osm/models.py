"""
OSM data models

Data classes for representing Overpass ways
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field


@dataclass
class OSMWay:
    """Represents an OSM way returned with 'out geom'"""
    id: int
    tags: Dict[str, str] = field(default_factory=dict)
    geometry: List[List[float]] = field(default_factory=list)  # [lon, lat] points

    @property
    def highway(self) -> Optional[str]:
        return self.tags.get("highway")

    def get_coordinates(self) -> List[List[float]]:
        """Get coordinates as [lon, lat] list"""
        return self.geometry
