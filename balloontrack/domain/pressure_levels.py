"""Mapping between balloon altitude and meteorological pressure levels.

Wind data is published per pressure level rather than per altitude, so
queries for a balloon's wind are keyed by the level whose standard
atmosphere height is closest to the balloon.
"""

from __future__ import annotations

import math

# (pressure hPa, approximate ISA altitude km), surface first.
PRESSURE_LEVELS: tuple[tuple[int, float], ...] = (
    (1000, 0.1),
    (850, 1.5),
    (700, 3.0),
    (500, 5.5),
    (400, 7.2),
    (300, 9.2),
    (250, 10.4),
    (200, 11.8),
    (150, 13.6),
    (100, 16.2),
    (70, 18.4),
    (50, 20.5),
    (30, 23.5),
    (20, 26.5),
    (10, 31.2),
)

SURFACE_PRESSURE_HPA = 1000
TOP_PRESSURE_HPA = 10
MAX_MAPPED_ALTITUDE_KM = 35.0


def altitude_to_pressure_level(altitude_km: float) -> int:
    """Return the pressure level whose reference altitude is closest."""

    if altitude_km < 0:
        return SURFACE_PRESSURE_HPA
    if altitude_km > MAX_MAPPED_ALTITUDE_KM:
        return TOP_PRESSURE_HPA

    closest_hpa, closest_alt = PRESSURE_LEVELS[0]
    min_diff = abs(closest_alt - altitude_km)
    for pressure_hpa, level_alt in PRESSURE_LEVELS:
        diff = abs(level_alt - altitude_km)
        if diff < min_diff:
            min_diff = diff
            closest_hpa = pressure_hpa
    return closest_hpa


def pressure_level_to_altitude(pressure_level_hpa: float) -> float:
    """Approximate altitude in km for a pressure level.

    Table levels return their reference altitude; anything else is
    interpolated linearly in log-pressure between 1000 hPa (0 km) and
    10 hPa (35 km).
    """

    for pressure_hpa, altitude_km in PRESSURE_LEVELS:
        if pressure_hpa == pressure_level_hpa:
            return altitude_km

    if pressure_level_hpa > SURFACE_PRESSURE_HPA:
        return 0.0
    if pressure_level_hpa < TOP_PRESSURE_HPA:
        return MAX_MAPPED_ALTITUDE_KM

    log_p = math.log(pressure_level_hpa)
    log_bottom = math.log(SURFACE_PRESSURE_HPA)
    log_top = math.log(TOP_PRESSURE_HPA)
    ratio = (log_p - log_bottom) / (log_top - log_bottom)
    return ratio * MAX_MAPPED_ALTITUDE_KM


def available_pressure_levels() -> list[int]:
    """Pressure levels in hPa, strictly descending."""

    return [pressure_hpa for pressure_hpa, _ in PRESSURE_LEVELS]


__all__ = [
    "PRESSURE_LEVELS",
    "altitude_to_pressure_level",
    "available_pressure_levels",
    "pressure_level_to_altitude",
]
