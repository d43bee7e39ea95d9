import math

import pytest

from balloontrack.domain.geometry import altitude_delta_km, bearing_deg, distance_km
from balloontrack.models.position import Position

NEW_YORK = Position(latitude=40.7128, longitude=-74.006, altitude_km=0.0)
LOS_ANGELES = Position(latitude=34.0522, longitude=-118.2437, altitude_km=0.0)


def test_distance_new_york_to_los_angeles():
    assert distance_km(NEW_YORK, LOS_ANGELES) == pytest.approx(3936, abs=1)


def test_distance_is_zero_for_identical_points():
    assert distance_km(NEW_YORK, NEW_YORK) == 0


def test_distance_is_symmetric():
    assert distance_km(NEW_YORK, LOS_ANGELES) == distance_km(LOS_ANGELES, NEW_YORK)


def test_distance_antipodal_points_on_equator():
    a = Position(latitude=0.0, longitude=0.0, altitude_km=10.0)
    b = Position(latitude=0.0, longitude=180.0, altitude_km=10.0)

    assert distance_km(a, b) == pytest.approx(20015, abs=1)
    assert distance_km(a, b) == pytest.approx(math.pi * 6371, rel=1e-9)


def test_distance_ignores_altitude():
    low = Position(latitude=40.0, longitude=-74.0, altitude_km=1.0)
    high = Position(latitude=40.0, longitude=-74.0, altitude_km=30.0)

    assert distance_km(low, high) == 0


def test_altitude_delta_is_absolute_and_symmetric():
    low = Position(latitude=0.0, longitude=0.0, altitude_km=12.5)
    high = Position(latitude=5.0, longitude=5.0, altitude_km=15.0)

    assert altitude_delta_km(low, high) == pytest.approx(2.5)
    assert altitude_delta_km(high, low) == pytest.approx(2.5)


def test_bearing_cardinal_directions():
    origin = Position(latitude=0.0, longitude=0.0, altitude_km=0.0)
    north = Position(latitude=1.0, longitude=0.0, altitude_km=0.0)
    east = Position(latitude=0.0, longitude=1.0, altitude_km=0.0)
    south = Position(latitude=-1.0, longitude=0.0, altitude_km=0.0)
    west = Position(latitude=0.0, longitude=-1.0, altitude_km=0.0)

    assert bearing_deg(origin, north) == pytest.approx(0.0, abs=1e-9)
    assert bearing_deg(origin, east) == pytest.approx(90.0)
    assert bearing_deg(origin, south) == pytest.approx(180.0)
    assert bearing_deg(origin, west) == pytest.approx(270.0)
