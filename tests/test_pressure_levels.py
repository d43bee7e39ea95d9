import math

import pytest

from balloontrack.domain.pressure_levels import (
    PRESSURE_LEVELS,
    altitude_to_pressure_level,
    available_pressure_levels,
    pressure_level_to_altitude,
)


def test_low_altitude_maps_to_high_pressure():
    assert altitude_to_pressure_level(0.1) == 1000
    assert altitude_to_pressure_level(1.4) == 850


def test_typical_balloon_altitudes():
    assert altitude_to_pressure_level(10.5) == 250
    assert altitude_to_pressure_level(18.0) == 70
    assert altitude_to_pressure_level(20.5) == 50


def test_out_of_range_altitudes_clamp():
    assert altitude_to_pressure_level(-1.0) == 1000
    assert altitude_to_pressure_level(40.0) == 10


def test_ties_resolve_to_first_table_entry():
    # 4.25 km is exactly between the 700 hPa (3.0 km) and 500 hPa (5.5 km) levels
    assert altitude_to_pressure_level(4.25) == 700


def test_pressure_level_is_non_increasing_with_altitude():
    altitudes = [step * 0.25 for step in range(0, 141)]
    levels = [altitude_to_pressure_level(alt) for alt in altitudes]

    assert all(later <= earlier for earlier, later in zip(levels, levels[1:]))


def test_table_levels_round_trip():
    for pressure_hpa, altitude_km in PRESSURE_LEVELS:
        assert pressure_level_to_altitude(pressure_hpa) == altitude_km
        assert altitude_to_pressure_level(pressure_level_to_altitude(pressure_hpa)) == pressure_hpa


def test_pressure_outside_table_clamps():
    assert pressure_level_to_altitude(1100) == 0.0
    assert pressure_level_to_altitude(5) == 35.0


def test_pressure_between_levels_interpolates_in_log_space():
    expected = math.log(600 / 1000) / math.log(10 / 1000) * 35.0

    assert pressure_level_to_altitude(600) == pytest.approx(expected)
    assert 3.0 < pressure_level_to_altitude(600) < 5.5


def test_available_levels_strictly_descending():
    levels = available_pressure_levels()

    assert len(levels) == 15
    assert levels[0] == 1000
    assert levels[-1] == 10
    assert all(later < earlier for earlier, later in zip(levels, levels[1:]))
