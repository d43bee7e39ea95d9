"""Align track points with time-indexed wind samples."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from balloontrack.models.track import Track
from balloontrack.models.wind import WindCorrelation, WindSample, WindSeries

WIND_STALENESS = timedelta(hours=1)


def get_wind_at_time(series: WindSeries, timestamp: datetime) -> Optional[WindSample]:
    """Return the sample nearest to ``timestamp``.

    None when the series is empty or the nearest sample is more than an
    hour away; ties go to the earliest sample in the series.
    """

    if not series.samples:
        return None

    closest = series.samples[0]
    min_diff = abs(closest.timestamp - timestamp)
    for sample in series.samples:
        diff = abs(sample.timestamp - timestamp)
        if diff < min_diff:
            min_diff = diff
            closest = sample

    if min_diff > WIND_STALENESS:
        return None
    return closest


def correlate_wind_with_track(track: Track, series: WindSeries) -> list[WindCorrelation]:
    correlations = []
    for point in track.points:
        wind = get_wind_at_time(series, point.timestamp)
        correlations.append(
            WindCorrelation(track_point=point, wind=wind, wind_available=wind is not None)
        )
    return correlations


def heading_wind_angle(heading_deg: float, wind_direction_deg: float) -> float:
    """Signed angle from the balloon heading to the wind direction.

    Normalized to [-180, 180]; positive means the wind points to the right
    of the heading.
    """

    diff = wind_direction_deg - heading_deg
    while diff > 180:
        diff -= 360
    while diff < -180:
        diff += 360
    return diff


__all__ = [
    "WIND_STALENESS",
    "correlate_wind_with_track",
    "get_wind_at_time",
    "heading_wind_angle",
]
