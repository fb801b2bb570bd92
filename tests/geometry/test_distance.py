from __future__ import annotations

import math

import pytest

from src.geo_attendance.geo_attendance.core.constants import EARTH_RADIUS_M
from src.geo_attendance.geo_attendance.core.exceptions import ValidationError
from src.geo_attendance.geo_attendance.geometry.distance import distance, is_within_radius
from src.geo_attendance.geo_attendance.geometry.model import Coordinate

POINTS = [
    Coordinate(14.0, 121.0),
    Coordinate(0.0, 0.0),
    Coordinate(-33.8688, 151.2093),
    Coordinate(89.9999, -179.9999),
    Coordinate(-90.0, 180.0),
]


def north_of(origin: Coordinate, meters: float) -> Coordinate:
    return Coordinate(origin.latitude + math.degrees(meters / EARTH_RADIUS_M), origin.longitude)


@pytest.mark.parametrize("p", POINTS)
def test_distance_to_self_is_zero(p):
    assert distance(p, p) == 0


def test_distance_is_symmetric():
    for a in POINTS:
        for b in POINTS:
            assert distance(a, b) == distance(b, a)


def test_one_degree_of_latitude():
    d = distance(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0))
    assert d == pytest.approx(2 * math.pi * EARTH_RADIUS_M / 360, rel=1e-9)


@pytest.mark.parametrize(
    "a, b",
    [
        (Coordinate(0.0, 0.0), Coordinate(0.0, 180.0)),
        (Coordinate(45.0, 10.0), Coordinate(-45.0, -170.0)),
        (Coordinate(90.0, 0.0), Coordinate(-90.0, 0.0)),
    ],
)
def test_antipodal_points_are_half_the_circumference(a, b):
    assert distance(a, b) == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-9)


def test_sub_meter_separation_is_stable():
    origin = Coordinate(14.0, 121.0)
    assert distance(origin, north_of(origin, 0.5)) == pytest.approx(0.5, abs=1e-6)


def test_distance_grows_with_separation():
    origin = Coordinate(14.0, 121.0)
    steps = [distance(origin, north_of(origin, m)) for m in (1, 10, 100, 1_000, 100_000)]
    assert steps == sorted(steps)
    assert len(set(steps)) == len(steps)


def test_is_within_radius():
    origin = Coordinate(14.0, 121.0)
    assert is_within_radius(north_of(origin, 49), origin, 50)
    assert not is_within_radius(north_of(origin, 51), origin, 50)


@pytest.mark.parametrize(
    "lat, lng",
    [(91, 0), (-90.5, 0), (0, 180.01), (float("nan"), 0), (0, float("inf")), ("abc", 0), (None, 0)],
)
def test_malformed_coordinates_fail_fast(lat, lng):
    with pytest.raises(ValidationError):
        Coordinate(lat, lng)


def test_coordinate_from_short_keys():
    c = Coordinate.from_dict({"lat": "13.6151", "lng": 123.4835})
    assert c == Coordinate(13.6151, 123.4835)


@pytest.mark.parametrize("payload", [None, [14.0, 121.0], "14,121"])
def test_coordinate_from_non_object_is_validation_error(payload):
    with pytest.raises(ValidationError):
        Coordinate.from_dict(payload)
