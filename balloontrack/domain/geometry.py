"""Great-circle and altitude primitives shared by tracking and nowcasting."""

from __future__ import annotations

import math
from typing import Protocol

EARTH_RADIUS_KM = 6371.0


class HasCoordinates(Protocol):
    """Anything carrying a latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


class HasAltitude(Protocol):
    altitude_km: float


def distance_km(a: HasCoordinates, b: HasCoordinates) -> float:
    """Haversine distance between two points, ignoring altitude.

    The haversine term is clamped to [0, 1] before the atan2 step.
    """

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    h = min(max(h, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def altitude_delta_km(a: HasAltitude, b: HasAltitude) -> float:
    """Absolute altitude difference in kilometers."""

    return abs(b.altitude_km - a.altitude_km)


def bearing_deg(a: HasCoordinates, b: HasCoordinates) -> float:
    """Initial great-circle bearing from ``a`` to ``b`` (0 = north, clockwise)."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


__all__ = [
    "EARTH_RADIUS_KM",
    "HasAltitude",
    "HasCoordinates",
    "altitude_delta_km",
    "bearing_deg",
    "distance_km",
]
