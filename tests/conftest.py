"""Global pytest fixtures & helpers.

Adds project root to path and provides a fake Overpass client plus a small
triangle polygon (~10 km² near 45°N 9°E) shared by the pipeline tests.
"""

import os
import sys
import threading

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from road_density.config import PipelineConfig
from road_density.errors import UpstreamFetchFailure


# --- Factory helpers -------------------------------------------------
def make_way(way_id, highway, latlon_points):
    """Overpass 'out geom' way element"""
    tags = {"highway": highway} if highway else {}
    return {
        "type": "way",
        "id": way_id,
        "tags": tags,
        "geometry": [{"lat": lat, "lon": lon} for lat, lon in latlon_points],
    }


class FakeOverpassClient:
    """Stands in for OverpassAPIClient; answers every query with the same ways

    `fail_when` is a predicate on the query text; matching queries raise
    UpstreamFetchFailure as if all retries were exhausted.
    """

    def __init__(self, elements=None, fail_when=None, responder=None):
        self.elements = elements or []
        self.fail_when = fail_when
        self.responder = responder
        self.queries = []
        self._lock = threading.Lock()

    def query(self, query, token=None):
        with self._lock:
            self.queries.append(query)
        if self.fail_when is not None and self.fail_when(query):
            raise UpstreamFetchFailure("Overpass API query failed after 3 attempts")
        if self.responder is not None:
            return self.responder(query, token)
        return {"elements": list(self.elements)}


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def fast_config():
    cfg = PipelineConfig()
    cfg.api.retry_base_delay = 0.0
    cfg.fetch.inter_batch_pause_s = 0.0
    return cfg


@pytest.fixture
def triangle_points():
    # [lat, lon], open ring
    return [[45.0, 9.0], [45.0, 9.06], [45.04, 9.03]]


@pytest.fixture
def inside_ways():
    """One residential road and one path, three points each, all inside the triangle"""
    return [
        make_way(1, "residential", [(45.010, 9.025), (45.012, 9.030), (45.014, 9.035)]),
        make_way(2, "path", [(45.005, 9.020), (45.007, 9.030), (45.009, 9.040)]),
    ]
