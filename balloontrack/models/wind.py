"""Wind data models for pressure-level wind series."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from balloontrack.models.track import TrackPoint


class WindVector(BaseModel):
    """Wind speed and direction (0 = north, clockwise)."""

    speed_kmh: float = Field(..., ge=0, description="Wind speed in km/h")
    direction_deg: float = Field(..., description="Wind direction in degrees [0, 360)")

    @field_validator("direction_deg")
    @classmethod
    def _normalize_direction(cls, value: float) -> float:
        return value % 360.0


class WindSample(WindVector):
    """Wind at a location, pressure level and time."""

    latitude: float = Field(..., description="Latitude of the grid point")
    longitude: float = Field(..., description="Longitude of the grid point")
    pressure_level_hpa: int = Field(..., description="Pressure level in hPa")
    altitude_km: float = Field(..., description="Approximate altitude of the level")
    timestamp: datetime = Field(..., description="Valid time of the sample (UTC)")


class WindSeries(BaseModel):
    """Time-indexed wind samples for one location and pressure level."""

    latitude: float
    longitude: float
    pressure_level_hpa: int
    altitude_km: float
    samples: list[WindSample] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class WindFetchResult(BaseModel):
    """Outcome of fetching a wind series."""

    success: bool
    data: Optional[WindSeries] = None
    error: Optional[str] = None
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class WindCorrelation(BaseModel):
    """A track point paired with the nearest usable wind sample."""

    track_point: TrackPoint
    wind: Optional[WindSample] = None
    wind_available: bool = False


class LayerTransition(BaseModel):
    """A significant wind change between consecutive track points."""

    point: TrackPoint
    previous_wind: WindSample
    current_wind: WindSample
    transition_type: Literal["direction", "speed", "both"]
    direction_change: float = Field(..., description="Degrees, normalized to 0-180")
    speed_change: float = Field(..., description="Absolute speed change in km/h")


__all__ = [
    "LayerTransition",
    "WindCorrelation",
    "WindFetchResult",
    "WindSample",
    "WindSeries",
    "WindVector",
]
