import math

import pytest

from src.courier.models.domain import Coordinate
from src.courier.services.geospatial import (
    haversine_km,
    midpoint,
    point_in_polygon,
    to_radians,
    within_radius_km,
)


def test_to_radians():
    assert to_radians(180) == pytest.approx(math.pi)
    assert to_radians(0) == 0


@pytest.mark.parametrize(
    "point",
    [Coordinate(0.0, 0.0), Coordinate(39.2, 21.5), Coordinate(-73.98, 40.75), Coordinate(180.0, -90.0)],
)
def test_distance_to_self_is_zero(point: Coordinate):
    assert haversine_km(point, point) == 0


def test_distance_is_symmetric():
    riyadh = Coordinate(46.6753, 24.7136)
    jeddah = Coordinate(39.1925, 21.4858)

    assert haversine_km(riyadh, jeddah) == pytest.approx(haversine_km(jeddah, riyadh))
    assert haversine_km(riyadh, jeddah) == pytest.approx(846, abs=5)


def test_one_degree_of_latitude_near_equator():
    distance = haversine_km(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0))

    assert distance == pytest.approx(111.19, abs=0.01)


def test_midpoint_averages_coordinates():
    center = midpoint(Coordinate(10.0, 20.0), Coordinate(20.0, 30.0))

    assert center == Coordinate(15.0, 25.0)


def test_within_radius():
    center = Coordinate(0.0, 0.0)

    assert within_radius_km(center, Coordinate(0.0, 0.5), 60)
    assert not within_radius_km(center, Coordinate(0.0, 1.0), 60)


def test_point_in_polygon():
    square = [Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1), Coordinate(1, 0)]

    assert point_in_polygon(Coordinate(0.5, 0.5), square)
    assert not point_in_polygon(Coordinate(2.0, 2.0), square)
    assert not point_in_polygon(Coordinate(0.5, 0.5), square[:2])
