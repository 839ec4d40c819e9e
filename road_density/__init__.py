"""
Road & trail density for an arbitrary map area

Fetches OpenStreetMap highway ways through the Overpass API, clips them
against a user polygon and reports length and density per category.
"""

from .pipeline import AreaProcessingPipeline, RequestSupervisor
from .models import AreaResult

__all__ = [
    "AreaProcessingPipeline",
    "RequestSupervisor",
    "AreaResult",
]

__version__ = "1.0.0"
