"""
Main Pipeline Orchestrator for area processing

Implements the automated flow for one drawn area:

  1. Input: [lat, lon] boundary points
  2. Normalize and close the polygon
  3. Compute geodesic area and bounding box
  4. Plan processing units (single query or grid tiles)
  5. Fetch, classify and clip ways per unit (batched, concurrent)
  6. Aggregate lengths and densities, shape the response

Data Sources:
  - OpenStreetMap (Overpass API): highway ways
"""

import threading
from typing import Any, Dict, Optional

from loguru import logger

from .analysis import TilePlanner, aggregate, normalize_polygon
from .analysis.geometry_utils import bounding_box, polygon_area_km2
from .cancellation import CancellationToken
from .collectors import OSMWayCollector
from .config import PipelineConfig, get_config, validate_config
from .errors import InternalFailure, InvalidInput, RequestCancelled
from .models import AreaResult


class AreaProcessingPipeline:
    """
    Main pipeline computing road and trail density for a polygon

    Usage:
        pipeline = AreaProcessingPipeline()
        result = pipeline.process_area([[46.0, 11.0], [46.0, 11.1], [46.1, 11.05]])
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        collector: Optional[OSMWayCollector] = None
    ):
        self.config = config or get_config()
        validate_config(self.config)
        self.tile_planner = TilePlanner(self.config.tiling)
        self.collector = collector or OSMWayCollector(self.config)

    def process_area(self, points: Any, token: Optional[CancellationToken] = None) -> AreaResult:
        """
        Run the full pipeline for one area

        Args:
            points: Boundary as [lat, lon] pairs, at least 3 distinct
            token: Cancellation token; a fresh one is used if omitted

        Returns:
            AreaResult with area, lengths, densities and optional geometry

        Raises:
            InvalidInput: Malformed polygon, raised before any external call
            RequestCancelled: The token was cancelled while processing
            InternalFailure: Any other fault; no partial result is returned
        """
        polygon = normalize_polygon(points)
        token = token or CancellationToken()

        try:
            area_km2 = polygon_area_km2(polygon)
            bbox = bounding_box(polygon)
            logger.info(f"Processing area of {area_km2:.2f} km² with {len(polygon.vertices)} vertices")

            units = self.tile_planner.plan(polygon, bbox, area_km2)
            collected = self.collector.collect(units, polygon, token)

            token.raise_if_cancelled()
            result = aggregate(
                area_km2,
                collected.roads,
                collected.trails,
                self.config.aggregation.max_geometry_km,
                units_total=collected.units_total,
                units_failed=collected.units_failed,
            )
        except (InvalidInput, RequestCancelled):
            raise
        except Exception as e:
            logger.exception(f"Area processing failed: {e}")
            raise InternalFailure("Internal error while processing area") from e

        logger.info(f"Roads {result.total_km_roads:.2f} km, trails {result.total_km_trails:.2f} km, "
                    f"density {result.density if result.density is not None else 'undefined'}")
        return result


class RequestSupervisor:
    """
    Runs area requests so that a newer request from a client supersedes
    its older in-flight one

    Each request gets its own CancellationToken; starting a new request for
    the same client id cancels the previous token.
    """

    def __init__(self, pipeline: Optional[AreaProcessingPipeline] = None):
        self.pipeline = pipeline or AreaProcessingPipeline()
        self._lock = threading.Lock()
        self._active: Dict[str, CancellationToken] = {}

    def start(self, client_id: str) -> CancellationToken:
        """Register a new request for client_id, cancelling the previous one"""
        token = CancellationToken()
        with self._lock:
            previous = self._active.get(client_id)
            self._active[client_id] = token
        if previous is not None:
            logger.info(f"Superseding in-flight request of client {client_id}")
            previous.cancel()
        return token

    def cancel(self, client_id: str) -> bool:
        """Cancel the in-flight request of client_id, if any"""
        with self._lock:
            token = self._active.pop(client_id, None)
        if token is None:
            return False
        token.cancel()
        return True

    def finish(self, client_id: str, token: CancellationToken):
        with self._lock:
            if self._active.get(client_id) is token:
                del self._active[client_id]

    def process_area(self, client_id: str, points: Any) -> AreaResult:
        token = self.start(client_id)
        try:
            return self.pipeline.process_area(points, token)
        finally:
            self.finish(client_id, token)
