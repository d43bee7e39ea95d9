"""Error tracking and reporting models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TrackIssue = Literal["incomplete", "missing_points", "no_wind_data", "reconstruction_failed"]
ApiErrorType = Literal["network", "rate_limit", "timeout", "parse", "unknown"]


class DataFileError(BaseModel):
    """A failed hourly snapshot."""

    hour: int = Field(..., description="Hour of the lookback window (0-23)")
    error: str
    timestamp: datetime
    retry_count: Optional[int] = None


class TrackError(BaseModel):
    """A quality issue attached to a reconstructed track."""

    track_id: str
    issue: TrackIssue
    description: str
    timestamp: datetime


class ApiError(BaseModel):
    """A failed call to an upstream data provider."""

    type: ApiErrorType
    message: str
    timestamp: datetime
    endpoint: Optional[str] = None
    retry_count: Optional[int] = None


class ErrorReport(BaseModel):
    """Snapshot of all tracked errors."""

    data_file_errors: list[DataFileError] = Field(default_factory=list)
    track_errors: list[TrackError] = Field(default_factory=list)
    api_errors: list[ApiError] = Field(default_factory=list)
    last_successful_fetch: Optional[datetime] = None
    total_errors: int = 0
    generated_at: datetime


__all__ = [
    "ApiError",
    "ApiErrorType",
    "DataFileError",
    "ErrorReport",
    "TrackError",
    "TrackIssue",
]
