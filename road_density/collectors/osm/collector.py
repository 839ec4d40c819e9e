"""
Main OSM Way Collector

Fetches, classifies and clips ways for every processing unit of a request.

Units run concurrently in fixed-size batches on a thread pool. Each unit
fills its own ClipResult; results are merged into the request's road and
trail accumulators by the coordinating thread once the batch is done.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from .api_client import OverpassAPIClient
from .parser import OSMResponseParser
from .query import build_ways_query
from .ways import WayClassifier
from ...analysis.clipping import ClipResult, Segment, SegmentClipper
from ...analysis.geometry_utils import Polygon
from ...analysis.tiling import ProcessingUnit
from ...cancellation import CancellationToken
from ...config import PipelineConfig, get_config
from ...errors import UpstreamFetchFailure


@dataclass
class UnitResult:
    """Outcome of one processing unit"""
    unit: ProcessingUnit
    clip: ClipResult = field(default_factory=ClipResult)
    ways: int = 0
    failed: bool = False


@dataclass
class CollectionResult:
    """Merged segments of all units of a request"""
    roads: List[Segment] = field(default_factory=list)
    trails: List[Segment] = field(default_factory=list)
    units_total: int = 0
    units_failed: int = 0


class OSMWayCollector:
    """
    Collect road and trail segments from OpenStreetMap via Overpass API

    One query per processing unit, issued in batches of at most
    `fetch.batch_size` concurrent requests with a short pause between
    batches to stay friendly with Overpass rate limits.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        api_client: Optional[OverpassAPIClient] = None
    ):
        self.config = config or get_config()
        self.api_client = api_client or OverpassAPIClient(self.config.api)
        self.parser = OSMResponseParser()
        self.classifier = WayClassifier(self.config)
        self.batch_size = self.config.fetch.batch_size
        self.inter_batch_pause = self.config.fetch.inter_batch_pause_s

    def collect(
        self,
        units: List[ProcessingUnit],
        polygon: Polygon,
        token: Optional[CancellationToken] = None
    ) -> CollectionResult:
        """
        Fetch and clip all units, merging per-unit results batch by batch

        Args:
            units: Processing units from the tile planner
            polygon: Normalized request polygon
            token: Cancellation token of the request

        Returns:
            CollectionResult with retained segments and unit counters

        Raises:
            RequestCancelled: If the token is cancelled while collecting
        """
        token = token or CancellationToken()
        clipper = SegmentClipper(polygon)
        result = CollectionResult(units_total=len(units))

        batches = [units[i:i + self.batch_size] for i in range(0, len(units), self.batch_size)]
        for batch_no, batch in enumerate(batches, start=1):
            token.raise_if_cancelled()
            logger.debug(f"Batch {batch_no}/{len(batches)}: {len(batch)} units")

            with ThreadPoolExecutor(max_workers=len(batch)) as executor:
                futures = [executor.submit(self._process_unit, unit, clipper, token) for unit in batch]
                # Waits for the whole batch; RequestCancelled from a unit propagates here
                unit_results = [f.result() for f in futures]

            token.raise_if_cancelled()
            self._merge(result, unit_results)

            if batch_no < len(batches) and token.sleep(self.inter_batch_pause):
                token.raise_if_cancelled()

        if result.units_failed:
            logger.warning(f"{result.units_failed}/{result.units_total} units failed, "
                           f"results cover the remaining units only")
        logger.info(f"Collected {len(result.roads)} road and {len(result.trails)} trail segments "
                    f"from {result.units_total} units")
        return result

    def _process_unit(
        self,
        unit: ProcessingUnit,
        clipper: SegmentClipper,
        token: CancellationToken
    ) -> UnitResult:
        """Fetch, classify and clip one unit into its own local result"""
        query = build_ways_query(unit.query_ring, self.config)
        try:
            data = self.api_client.query(query, token)
        except UpstreamFetchFailure as e:
            logger.error(f"Unit {unit.index} skipped: {e}")
            return UnitResult(unit=unit, failed=True)

        ways = self.parser.parse_ways(data)
        classified = self.classifier.classify_ways(ways)
        clip = clipper.clip(classified, unit.bounds, exclusive_max=unit.exclusive_max)
        logger.debug(f"Unit {unit.index}: {len(ways)} ways, {len(clip.roads)} road / "
                     f"{len(clip.trails)} trail segments kept, {clip.prefiltered} outside unit bounds")
        return UnitResult(unit=unit, clip=clip, ways=len(ways))

    @staticmethod
    def _merge(result: CollectionResult, unit_results: List[UnitResult]):
        for unit_result in unit_results:
            if unit_result.failed:
                result.units_failed += 1
                continue
            result.roads.extend(unit_result.clip.roads)
            result.trails.extend(unit_result.clip.trails)
