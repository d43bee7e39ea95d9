"""One-hour position nowcasts from wind or recent track velocity."""

from __future__ import annotations

import logging
import math
import statistics
from typing import Optional, Sequence

from balloontrack.domain.geometry import distance_km
from balloontrack.models.nowcast import NowcastPrediction, PredictedPosition
from balloontrack.models.track import Track, TrackPoint
from balloontrack.models.wind import WindVector

logger = logging.getLogger("balloontrack.nowcast")

KM_PER_DEGREE = 111.0
WIND_CONFIDENCE = 0.8
CALM_WIND_KMH = 5.0
CALM_WIND_CONFIDENCE = 0.6
HIGH_WIND_KMH = 100.0
HIGH_WIND_CONFIDENCE = 0.7
EXTRAPOLATION_CONFIDENCE = 0.5
WIND_UNCERTAINTY_FRACTION = 0.2
EXTRAPOLATION_UNCERTAINTY_FRACTION = 0.3


def _project(point: TrackPoint, north_km: float, east_km: float) -> PredictedPosition:
    """Flat-earth displacement of a point by kilometers north and east."""

    lon_scale = max(KM_PER_DEGREE * math.cos(math.radians(point.latitude)), 0.0001)
    latitude = point.latitude + north_km / KM_PER_DEGREE
    longitude = point.longitude + east_km / lon_scale
    return PredictedPosition(
        latitude=min(max(latitude, -90.0), 90.0),
        longitude=(longitude + 180.0) % 360.0 - 180.0,
        altitude_km=point.altitude_km,
    )


def _wind_confidence(speed_kmh: float) -> float:
    if speed_kmh < CALM_WIND_KMH:
        return CALM_WIND_CONFIDENCE
    if speed_kmh > HIGH_WIND_KMH:
        return HIGH_WIND_CONFIDENCE
    return WIND_CONFIDENCE


def _predict_with_wind(current: TrackPoint, wind: WindVector) -> NowcastPrediction:
    direction = math.radians(wind.direction_deg)
    displacement_km = wind.speed_kmh
    predicted = _project(
        current,
        north_km=math.cos(direction) * displacement_km,
        east_km=math.sin(direction) * displacement_km,
    )
    return NowcastPrediction(
        current_position=current,
        predicted_position=predicted,
        wind_vector=wind,
        predicted_distance_km=displacement_km,
        uncertainty_radius_km=wind.speed_kmh * WIND_UNCERTAINTY_FRACTION,
        confidence=_wind_confidence(wind.speed_kmh),
    )


def _extrapolate(previous: TrackPoint, current: TrackPoint) -> Optional[NowcastPrediction]:
    elapsed_hours = (current.timestamp - previous.timestamp).total_seconds() / 3600.0
    if elapsed_hours <= 0:
        return None

    speed_kmh = distance_km(previous, current) / elapsed_hours
    heading = math.atan2(
        current.longitude - previous.longitude,
        current.latitude - previous.latitude,
    )
    predicted = _project(
        current,
        north_km=math.cos(heading) * speed_kmh,
        east_km=math.sin(heading) * speed_kmh,
    )
    return NowcastPrediction(
        current_position=current,
        predicted_position=predicted,
        wind_vector=None,
        predicted_distance_km=speed_kmh,
        uncertainty_radius_km=speed_kmh * EXTRAPOLATION_UNCERTAINTY_FRACTION,
        confidence=EXTRAPOLATION_CONFIDENCE,
    )


def calculate_nowcast(
    track: Track, wind: Optional[WindVector] = None
) -> Optional[NowcastPrediction]:
    """Predict where the track's latest point will be one hour later.

    With a wind vector the point is advected by it at constant altitude.
    Without one, the velocity between the last two points is extrapolated.
    Returns None when there is no basis for a projection.
    """

    if not track.points:
        return None

    current = track.points[-1]
    if wind is not None:
        return _predict_with_wind(current, wind)

    if len(track.points) < 2:
        return None

    prediction = _extrapolate(track.points[-2], current)
    if prediction is None:
        logger.debug("Track %s has coincident latest timestamps; no nowcast", track.track_id)
    return prediction


def prediction_uncertainty(
    wind: WindVector, historical: Optional[Sequence[WindVector]] = None
) -> float:
    """Uncertainty radius in km from local wind variability.

    Half the population standard deviation of historical speeds when at
    least two samples exist, otherwise 20% of the current wind speed.
    """

    if historical is not None and len(historical) > 1:
        return statistics.pstdev([sample.speed_kmh for sample in historical]) * 0.5
    return wind.speed_kmh * WIND_UNCERTAINTY_FRACTION


__all__ = ["calculate_nowcast", "prediction_uncertainty"]
