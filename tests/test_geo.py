"""Tests for the spherical helpers."""

import math

import pytest

from s2runner.geo import (
    EARTH_RADIUS,
    LatLng,
    get_bounds,
    get_distance,
    get_heading,
    offset_distance,
    wrap_longitude,
)

ORIGIN = LatLng(0.0, 0.0)
ONE_METER_DEG = math.degrees(1 / EARTH_RADIUS)


def test_to_string():
    assert LatLng(1.5, -2.25).to_string() == "1.500000,-2.250000"


def test_to_e6_string():
    """Negative E6 values wrap to 32-bit two's complement."""
    assert LatLng(1.0, -1.0).to_e6_string() == "000f4240,fff0bdc0"


def test_destination_north_and_east():
    north = ORIGIN.destination(0, 1000)
    east = ORIGIN.destination(90, 1000)
    assert north.lat == pytest.approx(1000 * ONE_METER_DEG)
    assert north.lng == pytest.approx(0.0, abs=1e-12)
    assert east.lat == pytest.approx(0.0, abs=1e-12)
    assert east.lng == pytest.approx(1000 * ONE_METER_DEG)


def test_destination_truncates_distance():
    assert ORIGIN.destination(0, 1000.9) == ORIGIN.destination(0, 1000)


def test_get_distance_same_point():
    point = LatLng(40.7, -74.0)
    assert get_distance(point, point) == 0


def test_get_distance_one_degree_on_equator():
    assert get_distance(ORIGIN, LatLng(0.0, 1.0)) == round(math.radians(1) * EARTH_RADIUS)


def test_get_distance_symmetric():
    a, b = LatLng(40.7, -74.0), LatLng(51.5, -0.1)
    assert get_distance(a, b) == get_distance(b, a)


@pytest.mark.parametrize(
    "target, heading",
    [
        (LatLng(1.0, 0.0), 0.0),
        (LatLng(0.0, 1.0), 90.0),
        (LatLng(0.0, -1.0), -90.0),
        (LatLng(-1.0, 0.0), -180.0),
    ],
)
def test_get_heading_cardinal(target, heading):
    assert get_heading(ORIGIN, target) == pytest.approx(heading)


@pytest.mark.parametrize("lng, wrapped", [(0, 0), (180, -180), (190, -170), (-190, 170), (540, -180)])
def test_wrap_longitude(lng, wrapped):
    assert wrap_longitude(lng) == pytest.approx(wrapped)


def test_get_bounds_contains_center():
    center = LatLng(40.7, -74.0)
    sw, ne = get_bounds(center, 500)
    assert sw.lat < center.lat < ne.lat
    assert sw.lng < center.lng < ne.lng


def test_get_bounds_edges_at_radius():
    center = LatLng(40.7, -74.0)
    sw, ne = get_bounds(center, 500)
    assert get_distance(center, LatLng(ne.lat, center.lng)) == pytest.approx(500, abs=1)
    assert get_distance(center, LatLng(sw.lat, center.lng)) == pytest.approx(500, abs=1)


def test_offset_distance_towards_target():
    moved = offset_distance(ORIGIN, LatLng(0.0, 1.0), 1000)
    assert moved.lat == pytest.approx(0.0, abs=1e-9)
    assert moved.lng == pytest.approx(1000 * ONE_METER_DEG)


def test_offset_distance_keeps_heading():
    start, target = LatLng(40.7, -74.0), LatLng(40.8, -73.9)
    moved = offset_distance(start, target, 2000)
    assert get_distance(start, moved) == pytest.approx(2000, abs=1)
    assert get_heading(start, moved) == pytest.approx(get_heading(start, target), abs=1e-6)
