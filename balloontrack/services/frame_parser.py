"""Turn raw hourly snapshots into validated positions."""

from __future__ import annotations

import math
from typing import Any, Optional

from balloontrack.models.position import Position

MAX_BALLOON_ALTITUDE_KM = 50.0


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def parse_position(entry: Any) -> Optional[Position]:
    """Parse one ``[lat, lon, alt_km]`` entry, or return None if unusable."""

    if not isinstance(entry, (list, tuple)) or len(entry) != 3:
        return None

    lat, lon, alt = entry
    if not (_is_number(lat) and _is_number(lon) and _is_number(alt)):
        return None
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        return None
    if not 0 <= alt <= MAX_BALLOON_ALTITUDE_KM:
        return None

    return Position(latitude=float(lat), longitude=float(lon), altitude_km=float(alt))


def parse_snapshot(snapshot: Any) -> list[Position]:
    """Keep the well-formed entries of a snapshot, silently dropping the rest."""

    if not isinstance(snapshot, (list, tuple)):
        return []

    positions: list[Position] = []
    for entry in snapshot:
        position = parse_position(entry)
        if position is not None:
            positions.append(position)
    return positions


__all__ = ["MAX_BALLOON_ALTITUDE_KM", "parse_position", "parse_snapshot"]
