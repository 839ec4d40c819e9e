"""
OpenStreetMap way collection module

Modular OSM collector with separate components for:
- API client: Overpass API communication with retry/backoff
- Query: Overpass QL for road and trail ways inside a region
- Models: Data structures (OSMWay)
- Parser: Response parsing
- Ways: Road / trail classification
- Collector: Batched concurrent orchestration per processing unit
"""

from .models import OSMWay
from .api_client import OverpassAPIClient
from .collector import OSMWayCollector, CollectionResult

__all__ = [
    "OSMWay",
    "OverpassAPIClient",
    "OSMWayCollector",
    "CollectionResult",
]
