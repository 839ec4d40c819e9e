import pytest

from road_density.analysis.aggregation import aggregate, total_length_km
from road_density.analysis.clipping import ROAD, TRAIL, Segment
from road_density.analysis.geometry_utils import segment_length_km

KM_PER_DEG_EQUATOR = 111.3195


def equator_segments(count, category):
    """Consecutive 1° segments along the equator (~111 km each)"""
    return [Segment((float(i), 0.0), (float(i + 1), 0.0), category) for i in range(count)]


def test_lengths_and_densities():
    roads = equator_segments(2, ROAD)
    trails = equator_segments(1, TRAIL)
    result = aggregate(100.0, roads, trails, max_geometry_km=1500.0)

    assert result.total_km_roads == pytest.approx(2 * KM_PER_DEG_EQUATOR, rel=1e-4)
    assert result.total_km_trails == pytest.approx(KM_PER_DEG_EQUATOR, rel=1e-4)
    assert result.total_km == pytest.approx(result.total_km_roads + result.total_km_trails)
    assert result.density_roads == pytest.approx(result.total_km_roads / 100.0)
    assert result.density_trails == pytest.approx(result.total_km_trails / 100.0)
    assert result.density == pytest.approx(result.total_km / 100.0)
    assert result.density_defined
    assert not result.geometry_omitted
    assert len(result.roads) == 2
    assert result.road_segments == 2 and result.trail_segments == 1


def test_duplicate_segments_are_not_deduplicated():
    seg = Segment((0.0, 0.0), (1.0, 0.0), ROAD)
    assert total_length_km([seg, seg]) == pytest.approx(2 * segment_length_km(seg.start, seg.end))


def test_geometry_omitted_above_length_ceiling():
    # 18 x ~111.3 km ≈ 2004 km combined
    roads = equator_segments(10, ROAD)
    trails = equator_segments(8, TRAIL)
    result = aggregate(5000.0, roads, trails, max_geometry_km=1500.0)

    assert result.total_km == pytest.approx(18 * KM_PER_DEG_EQUATOR, rel=1e-4)
    assert result.total_km > 1500.0
    assert result.geometry_omitted
    assert result.roads is None and result.trails is None
    assert result.density == pytest.approx(result.total_km / 5000.0)
    assert result.road_segments == 10

    body = result.to_response()
    assert body["roads"] is None
    assert body["geometryOmitted"] is True
    assert body["totalKmRoads"] == pytest.approx(10 * KM_PER_DEG_EQUATOR, rel=1e-4)


def test_zero_area_flags_density_as_undefined():
    result = aggregate(0.0, equator_segments(1, ROAD), [], max_geometry_km=1500.0)

    assert not result.density_defined
    assert result.density_roads is None
    assert result.density_trails is None
    assert result.density is None
    assert result.total_km_roads > 0


def test_response_uses_client_field_names():
    body = aggregate(10.0, [], [], max_geometry_km=1500.0).to_response()
    assert set(body) >= {"area", "totalKmRoads", "totalKmTrails", "densityRoads", "densityTrails", "roads", "trails"}
    assert "unitsFailed" not in body
    assert body["roads"] == [] and body["trails"] == []
