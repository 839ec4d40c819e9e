import math

import pytest

from road_density.analysis.geometry_utils import (
    BoundingBox,
    bounding_box,
    midpoint,
    normalize_polygon,
    polygon_area_km2,
    segment_length_km,
)
from road_density.errors import InvalidInput, InvalidPolygon


def test_open_ring_is_closed_and_reordered():
    points = [[45.0, 9.0], [45.0, 9.06], [45.04, 9.03], [45.02, 8.99]]
    polygon = normalize_polygon(points)

    assert len(polygon.ring) == len(points) + 1
    assert polygon.ring[0] == polygon.ring[-1]
    # [lat, lon] in, [lon, lat] out
    assert polygon.ring[0] == (9.0, 45.0)
    assert polygon.vertices == tuple((lon, lat) for lat, lon in points)


def test_already_closed_ring_is_left_alone():
    points = [[45.0, 9.0], [45.0, 9.06], [45.04, 9.03], [45.0, 9.0]]
    polygon = normalize_polygon(points)
    assert len(polygon.ring) == 4


@pytest.mark.parametrize("points", [
    [],
    [[45.0, 9.0], [45.0, 9.06]],
    [[45.0, 9.0], [45.0, 9.06], [45.0, 9.0]],
    [[45.0, 9.0], [45.0, 9.0], [45.0, 9.0], [45.0, 9.0]],
])
def test_fewer_than_three_distinct_points_rejected(points):
    with pytest.raises(InvalidInput):
        normalize_polygon(points)


@pytest.mark.parametrize("points", [
    None,
    "45,9 45,9.06 45.04,9.03",
    {"polygon": [[45.0, 9.0], [45.0, 9.06], [45.04, 9.03]]},
    [[45.0, 9.0], [45.0, 9.06], [45.04]],
    [[45.0, 9.0], [45.0, 9.06], [45.04, 9.03, 1.0]],
    [[45.0, 9.0], [45.0, "9.06"], [45.04, 9.03]],
    [[45.0, 9.0], [45.0, True], [45.04, 9.03]],
    [[45.0, 9.0], [45.0, float("nan")], [45.04, 9.03]],
    [[95.0, 9.0], [45.0, 9.06], [45.04, 9.03]],
    [[45.0, 9.0], [45.0, 190.0], [45.04, 9.03]],
    [[10**400, 9.0], [45.0, 9.06], [45.04, 9.03]],
])
def test_malformed_points_rejected(points):
    with pytest.raises(InvalidPolygon):
        normalize_polygon(points)


def test_integer_coordinates_accepted():
    polygon = normalize_polygon([(0, 0), (0, 1), (1, 1)])
    assert polygon.ring[-1] == (0.0, 0.0)


def test_square_area_matches_degree_lengths_at_equator():
    side = 0.01
    polygon = normalize_polygon([[0.0, 0.0], [0.0, side], [side, side], [side, 0.0]])

    # WGS84: a * pi / 180 along the equator; meridian degree near the equator
    km_per_deg_lon = 6378.137 * math.pi / 180
    km_per_deg_lat = 110.574
    expected = (side * km_per_deg_lon) * (side * km_per_deg_lat)

    assert polygon_area_km2(polygon) == pytest.approx(expected, rel=5e-3)


def test_area_is_unsigned_regardless_of_winding():
    cw = normalize_polygon([[0.0, 0.0], [0.01, 0.0], [0.01, 0.01], [0.0, 0.01]])
    ccw = normalize_polygon([[0.0, 0.0], [0.0, 0.01], [0.01, 0.01], [0.01, 0.0]])
    assert polygon_area_km2(cw) > 0
    assert polygon_area_km2(cw) == pytest.approx(polygon_area_km2(ccw))


def test_collinear_polygon_has_zero_area():
    polygon = normalize_polygon([[0.0, 0.0], [0.0, 1.0], [0.0, 2.0]])
    assert polygon_area_km2(polygon) == pytest.approx(0.0, abs=1e-6)


def test_bounding_box():
    polygon = normalize_polygon([[45.0, 9.0], [45.0, 9.06], [45.04, 9.03]])
    assert bounding_box(polygon) == BoundingBox(9.0, 45.0, 9.06, 45.04)


def test_bounding_box_half_open_contains():
    bbox = BoundingBox(0.0, 0.0, 1.0, 1.0)
    assert bbox.contains(1.0, 1.0)
    assert not bbox.contains(1.0, 0.5, exclusive_max=True)
    assert bbox.contains(0.0, 0.0, exclusive_max=True)
    assert not bbox.contains(-0.1, 0.5)


def test_segment_length_one_degree_on_equator():
    assert segment_length_km((0.0, 0.0), (1.0, 0.0)) == pytest.approx(111.3195, rel=1e-4)


def test_midpoint():
    assert midpoint((0.0, 0.0), (2.0, 4.0)) == (1.0, 2.0)
