"""Geometry and atmosphere primitives for balloon tracking."""

from .geometry import altitude_delta_km, bearing_deg, distance_km
from .pressure_levels import (
    altitude_to_pressure_level,
    available_pressure_levels,
    pressure_level_to_altitude,
)

__all__ = [
    "altitude_delta_km",
    "altitude_to_pressure_level",
    "available_pressure_levels",
    "bearing_deg",
    "distance_km",
    "pressure_level_to_altitude",
]
