"""Models for reconstructed balloon tracks and frame-to-frame matches."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from balloontrack.models.position import Position


class TrackPoint(Position):
    """A position observed at a specific hour of the lookback window."""

    timestamp: datetime = Field(..., description="Observation time (UTC)")
    hour: int = Field(..., description="Hours ago the snapshot was taken")


class Match(BaseModel):
    """Correspondence between a position in an older frame and one in the next."""

    from_index: int = Field(..., description="Position index in the older frame")
    to_index: int = Field(..., description="Position index in the newer frame")
    distance_km: float = Field(..., description="Great-circle distance between the pair")
    altitude_delta_km: float = Field(..., description="Absolute altitude difference")
    confidence: float = Field(
        ..., ge=0, le=1, description="1 = coincident, 0 = at the rejection boundary"
    )


class Track(BaseModel):
    """A reconstructed sequence of positions believed to be one balloon."""

    track_id: str = Field(..., description="Identifier, stable only within one run")
    points: list[TrackPoint] = Field(..., description="Points ordered oldest first")
    start_time: datetime
    end_time: datetime
    duration_hours: float
    total_distance_km: float
    average_speed_kmh: float
    min_altitude_km: float
    max_altitude_km: float
    altitude_range_km: float

    @property
    def last_point(self) -> TrackPoint:
        return self.points[-1]


class UnmatchedHour(BaseModel):
    """An hour that produced no usable positions."""

    hour: int
    indices: list[int] = Field(default_factory=list)


class MatchStatistics(BaseModel):
    """Aggregate statistics over every accepted match in a run."""

    total_matches: int = 0
    average_distance_km: float = 0.0
    average_confidence: float = 0.0


class ReconstructionResult(BaseModel):
    """Everything produced by one reconstruction run."""

    tracks: list[Track] = Field(default_factory=list)
    unmatched_points: list[UnmatchedHour] = Field(default_factory=list)
    match_statistics: MatchStatistics = Field(default_factory=MatchStatistics)

    def get_track(self, track_id: str) -> Optional[Track]:
        for track in self.tracks:
            if track.track_id == track_id:
                return track
        return None


__all__ = [
    "Match",
    "MatchStatistics",
    "ReconstructionResult",
    "Track",
    "TrackPoint",
    "UnmatchedHour",
]
