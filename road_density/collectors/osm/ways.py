"""
Way classification

Splits highway ways into roads and trails by their highway tag
"""

from typing import List, Optional, Tuple
from .models import OSMWay
from ...analysis.clipping import ROAD, TRAIL
from ...config import PipelineConfig, get_config


class WayClassifier:
    """Classifies ways as road or trail from OSM highway tags"""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or get_config()
        self.road_tags = frozenset(self.config.road_tags)
        self.trail_tags = frozenset(self.config.trail_tags)

    def classify(self, way: OSMWay) -> Optional[str]:
        """Return "road", "trail", or None for unrecognized highway values"""
        highway_type = way.highway
        if highway_type in self.road_tags:
            return ROAD
        if highway_type in self.trail_tags:
            return TRAIL
        return None

    def classify_ways(self, ways: List[OSMWay]) -> List[Tuple[str, List[List[float]]]]:
        """
        Pair each recognized way with its category

        Args:
            ways: Parsed ways

        Returns:
            List of (category, [lon, lat] points); untagged ways are skipped
        """
        classified = []
        for way in ways:
            category = self.classify(way)
            if category is None:
                continue
            classified.append((category, way.get_coordinates()))
        return classified
