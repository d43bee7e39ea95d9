"""Models for raw hourly position snapshots and parsed positions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Position(BaseModel):
    """A validated balloon position report."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(
        ..., ge=-180, le=180, description="Longitude in decimal degrees"
    )
    altitude_km: float = Field(..., ge=0, le=50, description="Altitude in kilometers")

    model_config = ConfigDict(frozen=True)


class FrameFetchResult(BaseModel):
    """Outcome of fetching the snapshot for one hour of the lookback window."""

    hour: int = Field(..., description="Hours ago (0 = most recent, 23 = oldest)")
    data: Optional[list[Any]] = Field(
        default=None, description="Raw snapshot: list of [lat, lon, alt_km] entries"
    )
    success: bool = Field(..., description="Whether the fetch produced a snapshot")
    error: Optional[str] = Field(default=None, description="Failure description")
    retry_count: int = Field(default=0, description="Retries spent on this hour")
    timestamp: datetime = Field(
        default_factory=_utcnow, description="When the fetch completed (UTC)"
    )


class SnapshotCollection(BaseModel):
    """All hourly fetch outcomes handed to track reconstruction."""

    results: list[FrameFetchResult] = Field(default_factory=list)
    success_count: int = Field(default=-1, description="Number of successful hours")
    failure_count: int = Field(default=-1, description="Number of failed hours")
    fetched_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _derive_counts(self) -> "SnapshotCollection":
        if self.success_count < 0:
            self.success_count = sum(1 for result in self.results if result.success)
        if self.failure_count < 0:
            self.failure_count = sum(1 for result in self.results if not result.success)
        return self


__all__ = ["FrameFetchResult", "Position", "SnapshotCollection"]
