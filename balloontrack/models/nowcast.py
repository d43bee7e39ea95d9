"""One-hour-ahead position prediction models."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

from balloontrack.models.track import TrackPoint
from balloontrack.models.wind import WindSample, WindVector


class PredictedPosition(BaseModel):
    latitude: float
    longitude: float
    altitude_km: float


class NowcastPrediction(BaseModel):
    """Projected position of a balloon one hour after its latest report."""

    current_position: TrackPoint
    predicted_position: PredictedPosition
    # WindSample first so a sample keeps its location and time when re-validated.
    wind_vector: Optional[Union[WindSample, WindVector]] = Field(
        default=None, description="Wind used for the projection; None for extrapolation"
    )
    predicted_distance_km: float = Field(..., description="Displacement over one hour")
    uncertainty_radius_km: float
    confidence: float = Field(..., ge=0, le=1)


__all__ = ["NowcastPrediction", "PredictedPosition"]
